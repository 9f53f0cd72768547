# products/serializers/seller.py

from django.utils.text import slugify
from rest_framework import serializers

from products.models import Seller


class SellerSerializer(serializers.ModelSerializer):
    name = serializers.CharField(required=True, allow_blank=False, max_length=255)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)

    class Meta:
        model = Seller
        fields = [
            "id",
            "name",
            "slug",
            "email",
            "phone",
            "address",
            "logo",
            "rating",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {"slug": {"required": False}}

    def validate_name(self, value: str):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name cannot be blank")
        return v

    def validate_email(self, value):
        value = (value or "").strip().lower()
        if not value:
            return None
        qs = Seller.objects.filter(email=value)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Seller with this email already exists")
        return value

    def validate(self, attrs):
        # Slug follows the name unless given explicitly.
        name = attrs.get("name")
        slug = attrs.get("slug")
        if not slug and name and (self.instance is None or name != self.instance.name):
            slug = slugify(name)[:255]
        if slug:
            qs = Seller.objects.filter(slug=slug)
            if self.instance is not None:
                qs = qs.exclude(pk=self.instance.pk)
            if qs.exists():
                raise serializers.ValidationError({"slug": "Seller with this slug already exists"})
            attrs["slug"] = slug
        return attrs
