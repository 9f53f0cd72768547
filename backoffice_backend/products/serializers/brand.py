# products/serializers/brand.py

from rest_framework import serializers

from products.models import Brand


class BrandSerializer(serializers.ModelSerializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=255)

    class Meta:
        model = Brand
        fields = ["id", "name", "slug", "description", "website", "is_active", "created_at"]
        read_only_fields = ["id", "created_at"]
        extra_kwargs = {"slug": {"required": False}}

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v
