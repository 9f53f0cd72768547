# purchases/api/views.py

"""
SUPPLIERS API

GET/POST          /api/purchases/suppliers/                 suppliers.manage
GET/PUT/PATCH     /api/purchases/suppliers/<id>/            suppliers.manage
DELETE            /api/purchases/suppliers/<id>/            suppliers.delete (admin)
GET/POST          /api/purchases/suppliers/<id>/purchases/  suppliers.manage

List filters: status, search (name / company / email)
"""

from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import CAP_SUPPLIERS_DELETE, CAP_SUPPLIERS_MANAGE, HasCapability
from products.services.exceptions import InsufficientStock, InvalidDelta, ProductNotFound
from purchases.api.serializers import (
    SupplierPurchaseCreateSerializer,
    SupplierPurchaseSerializer,
    SupplierSerializer,
)
from purchases.models import Supplier
from purchases.services.exceptions import PurchaseError
from purchases.services.purchase_service import record_purchase


class SupplierViewSet(viewsets.ModelViewSet):
    serializer_class = SupplierSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status"]

    required_capability = None

    def get_permissions(self):
        if self.action == "destroy":
            self.required_capability = CAP_SUPPLIERS_DELETE
        else:
            self.required_capability = CAP_SUPPLIERS_MANAGE
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        qs = Supplier.objects.all().order_by("name")

        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(
                Q(name__icontains=search)
                | Q(company__icontains=search)
                | Q(email__icontains=search)
            )

        return qs

    @extend_schema(
        tags=["purchases"],
        request=SupplierPurchaseCreateSerializer,
        responses={200: SupplierPurchaseSerializer(many=True), 201: SupplierPurchaseSerializer},
    )
    @action(detail=True, methods=["get", "post"], url_path="purchases")
    def purchases(self, request, pk=None):
        supplier = self.get_object()

        if request.method == "GET":
            qs = supplier.purchases.select_related("product").order_by("-date")
            page = self.paginate_queryset(qs)
            if page is not None:
                return self.get_paginated_response(SupplierPurchaseSerializer(page, many=True).data)
            return Response(SupplierPurchaseSerializer(qs, many=True).data)

        payload = SupplierPurchaseCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        try:
            purchase = record_purchase(
                supplier=supplier,
                product_id=data["product_id"],
                product_name=data.get("product_name", ""),
                quantity=data["quantity"],
                unit_price=data["unit_price"],
                invoice_number=data.get("invoice_number", ""),
                receive_into_stock=data.get("receive_into_stock", False),
                record_expense=data.get("record_expense", False),
                actor=request.user,
            )
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientStock as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except (PurchaseError, InvalidDelta) as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(SupplierPurchaseSerializer(purchase).data, status=status.HTTP_201_CREATED)
