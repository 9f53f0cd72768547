# products/views/category.py

from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from permissions.roles import CAP_CATALOG_EDIT, HasCapability
from products.models import Category
from products.serializers.category import CategorySerializer


class CategoryViewSet(viewsets.ModelViewSet):
    """
    Category API

    Policy:
    - Anyone can READ categories (storefront menus, product forms)
    - Only users with catalog.edit can CREATE/UPDATE/DELETE
    """

    queryset = Category.objects.all().order_by("name")
    serializer_class = CategorySerializer
    required_capability = CAP_CATALOG_EDIT

    def get_permissions(self):
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        return [IsAuthenticated(), HasCapability()]
