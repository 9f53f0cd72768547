# products/views/seller.py

"""
SELLER VIEWSET

- list / retrieve are public (?status=active|inactive, ?search=<name or email>)
- create / update need catalog.edit, delete needs catalog.delete (admin)
- products keep their row when a seller is deleted (seller set to NULL)
"""

from django.db.models import Q
from rest_framework import viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated

from permissions.roles import CAP_CATALOG_DELETE, CAP_CATALOG_EDIT, HasCapability
from products.models import Seller
from products.serializers.seller import SellerSerializer


class SellerViewSet(viewsets.ModelViewSet):
    serializer_class = SellerSerializer
    filterset_fields = ["status"]
    required_capability = None

    def get_permissions(self):
        self.required_capability = None
        if self.action in {"list", "retrieve"}:
            return [AllowAny()]
        if self.action == "destroy":
            self.required_capability = CAP_CATALOG_DELETE
        else:
            self.required_capability = CAP_CATALOG_EDIT
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        qs = Seller.objects.all().order_by("name")
        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))
        return qs
