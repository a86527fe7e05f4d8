# inventory/serializers/medicine.py

"""
MEDICINE SERIALIZER

Purpose:
- Canonical Medicine serializer for inventory screens and the POS picker.
- Stock is the Medicine.quantity column (single source of truth).
- `active` is not writable here: soft delete goes through DELETE / restore.
"""

from decimal import Decimal

from rest_framework import serializers

from inventory.models import Medicine
from inventory.services.catalog import MAX_SEARCH_LIMIT


class MedicineSerializer(serializers.ModelSerializer):
    is_low_stock = serializers.BooleanField(read_only=True)

    class Meta:
        model = Medicine
        fields = [
            "id",
            "name",
            "unit",
            "price",
            "quantity",
            "is_low_stock",
            "active",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "is_low_stock",
            "active",
            "created_at",
            "updated_at",
        ]

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_unit(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Unit is required")
        return value

    def validate_price(self, value):
        # Keep consistent with Medicine.clean(): non-negative (0 allowed)
        if value is None or value < Decimal("0.00"):
            raise serializers.ValidationError("Price must be non-negative")
        return value

    def validate_quantity(self, value):
        if value is None or int(value) < 0:
            raise serializers.ValidationError("Quantity must be non-negative")
        return value


class MedicineSearchQuerySerializer(serializers.Serializer):
    """
    For Swagger docs (GET query params).
    """
    q = serializers.CharField(required=False, allow_blank=True, default="")
    limit = serializers.IntegerField(
        required=False,
        min_value=1,
        max_value=MAX_SEARCH_LIMIT,
        allow_null=True,
        default=None,
    )
