# products/views/product.py

"""
PRODUCT VIEWSET

Purpose:
- Catalog CRUD (staff) + public browsing (AllowAny)
- Stock operations routed to the stock adjustment gateway
- Inventory ledger reads: stock level, movement history, low-stock list

Key rules:
- quantity is never written through PATCH/PUT
- anonymous users and customers only see published products
"""

from django.shortcuts import get_object_or_404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from permissions.roles import (
    CAP_CATALOG_DELETE,
    CAP_CATALOG_EDIT,
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_VIEW,
    HasCapability,
    is_staff_user,
)
from products.filters import ProductFilter
from products.models import Product
from products.serializers import (
    InventoryMovementSerializer,
    ProductSerializer,
    StockAdjustmentRequestSerializer,
    StockLevelSerializer,
)
from products.services.catalog import create_product, remove_product
from products.services.exceptions import InsufficientStock, InvalidDelta, ProductNotFound
from products.services.inventory import get_stock_level, list_movements, low_stock_products
from products.services.stock_adjustments import adjust_stock


class ProductViewSet(viewsets.ModelViewSet):
    """
    Product endpoints.

    Public:
    - list / retrieve / barcode lookup / slug lookup (published only for non-staff)

    Staff:
    - create / update (catalog.edit), delete (catalog.delete)
    - POST <id>/stock/        (inventory.adjust)
    - GET  <id>/stock-level/  (inventory.view)
    - GET  <id>/movements/    (inventory.view)
    - GET  low-stock/         (inventory.view)
    """

    serializer_class = ProductSerializer
    filterset_class = ProductFilter
    permission_classes = [IsAuthenticated]

    required_capability = None

    PUBLIC_ACTIONS = {"list", "retrieve", "by_barcode", "by_slug"}

    def get_permissions(self):
        # reset per request to avoid state leaking between actions
        self.required_capability = None

        if self.action in self.PUBLIC_ACTIONS:
            return [AllowAny()]

        if self.action in {"create", "update", "partial_update"}:
            self.required_capability = CAP_CATALOG_EDIT
        elif self.action == "destroy":
            self.required_capability = CAP_CATALOG_DELETE
        elif self.action == "stock":
            self.required_capability = CAP_INVENTORY_ADJUST
        elif self.action in {"stock_level", "movements", "low_stock"}:
            self.required_capability = CAP_INVENTORY_VIEW

        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        qs = Product.objects.select_related("category", "brand", "seller").order_by("-created_at")
        if self.action in self.PUBLIC_ACTIONS and not is_staff_user(self.request.user):
            qs = qs.filter(publish=True)
        return qs

    # -----------------------------
    # CREATE (opening stock via gateway)
    # -----------------------------
    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        data = dict(serializer.validated_data)
        opening_quantity = int(data.pop("opening_quantity", 0) or 0)

        product = create_product(
            data=data,
            opening_quantity=opening_quantity,
            actor=request.user,
        )

        return Response(
            self.get_serializer(product).data,
            status=status.HTTP_201_CREATED,
        )

    # -----------------------------
    # DELETE (soft unless PRODUCT_DELETE_MODE=hard)
    # -----------------------------
    def destroy(self, request, *args, **kwargs):
        product = self.get_object()
        mode = remove_product(product=product)

        if mode == "hard":
            return Response(status=status.HTTP_204_NO_CONTENT)

        return Response(
            {"detail": "Product unpublished.", "id": str(product.pk), "publish": False},
            status=status.HTTP_200_OK,
        )

    # -----------------------------
    # Lookups
    # -----------------------------
    @action(detail=False, methods=["get"], url_path=r"barcode/(?P<barcode>[^/.]+)")
    def by_barcode(self, request, barcode=None):
        product = get_object_or_404(self.get_queryset(), barcode=barcode)
        return Response(self.get_serializer(product).data)

    @action(detail=False, methods=["get"], url_path=r"slug/(?P<slug>[-\w]+)")
    def by_slug(self, request, slug=None):
        product = get_object_or_404(self.get_queryset(), slug=slug)
        return Response(self.get_serializer(product).data)

    # -----------------------------
    # Stock gateway
    # -----------------------------
    @extend_schema(
        request=StockAdjustmentRequestSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(description="Invalid change / type"),
            404: OpenApiResponse(description="Product not found"),
            409: OpenApiResponse(description="Insufficient stock"),
        },
        description="Apply a signed stock change through the adjustment gateway.",
    )
    @action(detail=True, methods=["post"], url_path="stock")
    def stock(self, request, pk=None):
        payload = StockAdjustmentRequestSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        try:
            result = adjust_stock(
                product_id=pk,
                delta=data["change"],
                kind=data.get("type"),
                reason=data.get("reason", ""),
                reference=data.get("reference", ""),
                actor=request.user,
            )
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        except InsufficientStock as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_409_CONFLICT)
        except InvalidDelta as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "product": ProductSerializer(result.product).data,
                "movement": InventoryMovementSerializer(result.movement).data,
            },
            status=status.HTTP_200_OK,
        )

    # -----------------------------
    # Ledger reads
    # -----------------------------
    @extend_schema(responses={200: StockLevelSerializer})
    @action(detail=True, methods=["get"], url_path="stock-level")
    def stock_level(self, request, pk=None):
        try:
            level = get_stock_level(pk)
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)
        return Response(StockLevelSerializer(level).data)

    @extend_schema(responses={200: InventoryMovementSerializer(many=True)})
    @action(detail=True, methods=["get"], url_path="movements")
    def movements(self, request, pk=None):
        try:
            qs = list_movements(pk)
        except ProductNotFound as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_404_NOT_FOUND)

        page = self.paginate_queryset(qs)
        if page is not None:
            return self.get_paginated_response(InventoryMovementSerializer(page, many=True).data)
        return Response(InventoryMovementSerializer(qs, many=True).data)

    @extend_schema(responses={200: ProductSerializer(many=True)})
    @action(detail=False, methods=["get"], url_path="low-stock")
    def low_stock(self, request):
        """
        GET /products/products/low-stock/

        Published products with status low_stock or out_of_stock,
        lowest quantity first.
        """
        data = ProductSerializer(low_stock_products(), many=True).data
        return Response({"count": len(data), "results": data})
