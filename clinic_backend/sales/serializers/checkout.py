# sales/serializers/checkout.py

"""
CHECKOUT INPUT SERIALIZERS

Shape-only validation. Quantity and medicine rules (empty cart, non-positive
quantity, unknown/inactive medicine, stock) belong to the commit engine so the
caller always receives the engine's structured failure.

medicine_id is bounded to the primary key range so an out-of-range number
never reaches the database driver.
"""

from rest_framework import serializers

from sales.services.order_commit import MAX_MEDICINE_ID


class CheckoutLineInputSerializer(serializers.Serializer):
    medicine_id = serializers.IntegerField(min_value=1, max_value=MAX_MEDICINE_ID)
    requested_quantity = serializers.IntegerField()


class CheckoutInputSerializer(serializers.Serializer):
    items = CheckoutLineInputSerializer(many=True, allow_empty=True)
