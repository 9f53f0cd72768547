# products/serializers/product.py

"""
PRODUCT SERIALIZERS

Purpose:
- Canonical Product representation for staff and storefront.
- quantity / stock_status / sold_quantity are READ-ONLY: stock only moves
  through the stock adjustment gateway.
- opening_quantity (write-only, create only) seeds stock via the gateway.
"""

from rest_framework import serializers

from products.models import Brand, Category, Product, Seller


class ProductSerializer(serializers.ModelSerializer):
    category = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(), required=False, allow_null=True
    )
    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    brand = serializers.PrimaryKeyRelatedField(
        queryset=Brand.objects.all(), required=False, allow_null=True
    )
    brand_name = serializers.CharField(source="brand.name", read_only=True, default=None)
    seller = serializers.PrimaryKeyRelatedField(
        queryset=Seller.objects.all(), required=False, allow_null=True
    )
    seller_name = serializers.CharField(source="seller.name", read_only=True, default=None)

    opening_quantity = serializers.IntegerField(
        write_only=True, required=False, min_value=0, default=0
    )

    class Meta:
        model = Product
        fields = [
            "id",
            "sku",
            "barcode",
            "slug",
            "name",
            "description",
            "unit",
            "category",
            "category_name",
            "brand",
            "brand_name",
            "seller",
            "seller_name",
            "unit_price",
            "quantity",
            "low_stock_quantity",
            "stock_status",
            "sold_quantity",
            "opening_quantity",
            "publish",
            "is_active",
            "is_featured",
            "created_at",
            "updated_at",
        ]
        read_only_fields = [
            "id",
            "slug",
            "category_name",
            "brand_name",
            "seller_name",
            "quantity",
            "stock_status",
            "sold_quantity",
            "created_at",
            "updated_at",
        ]
        extra_kwargs = {"barcode": {"required": False, "allow_blank": True}}

    def validate_sku(self, value):
        value = (value or "").strip().upper()
        if not value:
            raise serializers.ValidationError("SKU is required")
        return value

    def validate_unit_price(self, value):
        if value is None or value < 0:
            raise serializers.ValidationError("Unit price must be non-negative")
        return value

    def validate_name(self, value):
        value = (value or "").strip()
        if not value:
            raise serializers.ValidationError("name cannot be blank")
        return value

    def update(self, instance, validated_data):
        validated_data.pop("opening_quantity", None)
        return super().update(instance, validated_data)


class StockAdjustmentRequestSerializer(serializers.Serializer):
    """POST /products/products/<id>/stock/"""

    change = serializers.IntegerField()
    type = serializers.ChoiceField(
        choices=["in", "out", "adjustment"], required=False, allow_null=True
    )
    reason = serializers.CharField(required=False, allow_blank=True, max_length=255, default="")
    reference = serializers.CharField(required=False, allow_blank=True, max_length=128, default="")


class StockLevelSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField()
    low_stock_quantity = serializers.IntegerField()
    stock_status = serializers.CharField()
