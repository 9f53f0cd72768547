# products/views/brand.py

from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from permissions.roles import CAP_CATALOG_EDIT, HasCapability
from products.models import Brand
from products.serializers.brand import BrandSerializer


class BrandViewSet(viewsets.ModelViewSet):
    queryset = Brand.objects.all().order_by("name")
    serializer_class = BrandSerializer
    required_capability = CAP_CATALOG_EDIT

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]
