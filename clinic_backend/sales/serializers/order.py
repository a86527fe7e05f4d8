from rest_framework import serializers

from sales.models import Order, OrderLine


class OrderLineSerializer(serializers.ModelSerializer):
    medicine_id = serializers.IntegerField(read_only=True)
    medicine_name = serializers.CharField(source="medicine.name", read_only=True)
    unit = serializers.CharField(source="medicine.unit", read_only=True)

    class Meta:
        model = OrderLine
        fields = [
            "position",
            "medicine_id",
            "medicine_name",
            "unit",
            "quantity",
            "unit_price",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    lines = OrderLineSerializer(many=True, read_only=True)
    created_by = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "invoice_no",
            "created_at",
            "created_by",
            "total_amount",
            "lines",
        ]
        read_only_fields = fields
