# purchases/api/serializers.py

from decimal import Decimal

from rest_framework import serializers

from purchases.models import Supplier, SupplierPurchase


class SupplierSerializer(serializers.ModelSerializer):
    class Meta:
        model = Supplier
        fields = "__all__"
        read_only_fields = (
            "id",
            "total_purchase_amount",
            "last_purchase_date",
            "created_at",
            "updated_at",
        )

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("Name is required")
        return value

    def validate_email(self, value):
        return (value or "").strip().lower()


class SupplierPurchaseSerializer(serializers.ModelSerializer):
    class Meta:
        model = SupplierPurchase
        fields = [
            "id",
            "supplier",
            "date",
            "product",
            "product_name",
            "quantity",
            "unit_price",
            "total_amount",
            "invoice_number",
            "received_into_stock",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class SupplierPurchaseCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    product_name = serializers.CharField(required=False, allow_blank=True)
    quantity = serializers.IntegerField(min_value=1)
    unit_price = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=Decimal("0.00"))
    invoice_number = serializers.CharField(required=False, allow_blank=True, max_length=64)
    receive_into_stock = serializers.BooleanField(required=False, default=False)
    record_expense = serializers.BooleanField(required=False, default=False)
