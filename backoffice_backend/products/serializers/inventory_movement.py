# products/serializers/inventory_movement.py

from rest_framework import serializers

from products.models import InventoryMovement


class InventoryMovementSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    created_by_email = serializers.EmailField(source="created_by.email", read_only=True, default=None)

    class Meta:
        model = InventoryMovement
        fields = [
            "id",
            "product",
            "product_name",
            "movement_type",
            "quantity",
            "previous_quantity",
            "new_quantity",
            "reason",
            "reference",
            "created_by",
            "created_by_email",
            "created_at",
        ]
        read_only_fields = fields
