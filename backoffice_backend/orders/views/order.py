# orders/views/order.py

"""
ORDER VIEWSET

GET    /api/orders/               own orders (customers) / all orders (orders.manage)
POST   /api/orders/               orders.create, throttled (scope: order_create)
GET    /api/orders/<id>/          owner or orders.manage
DELETE /api/orders/<id>/          orders.discard (pending only)
PATCH  /api/orders/<id>/status/   orders.manage
GET    /api/orders/stats/         orders.manage

Filters: status, payment_status, payment_method, customer, date_from, date_to
"""

from django.contrib.auth import get_user_model
from django.utils.dateparse import parse_date
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import ScopedRateThrottle

from orders.models import Order
from orders.serializers import OrderCreateSerializer, OrderSerializer, OrderStatusUpdateSerializer
from orders.services.exceptions import InvalidOrderItems, InvalidOrderTransition, OrderItemRejected
from orders.services.order_service import create_order, discard_order, order_stats, set_status
from permissions.roles import (
    CAP_ORDERS_CREATE,
    CAP_ORDERS_DISCARD,
    CAP_ORDERS_MANAGE,
    HasCapability,
    user_has_capability,
)
from products.services.exceptions import InsufficientStock, ProductNotFound

User = get_user_model()


def _rejected_item_status(exc: OrderItemRejected) -> int:
    if isinstance(exc.reason, InsufficientStock):
        return status.HTTP_409_CONFLICT
    if isinstance(exc.reason, ProductNotFound):
        return status.HTTP_404_NOT_FOUND
    return status.HTTP_400_BAD_REQUEST


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated]
    filterset_fields = ["status", "payment_status", "payment_method", "customer"]

    required_capability = None
    throttle_scope = "order_create"

    def get_permissions(self):
        self.required_capability = None

        if self.action == "create":
            self.required_capability = CAP_ORDERS_CREATE
        elif self.action == "destroy":
            self.required_capability = CAP_ORDERS_DISCARD
        elif self.action in {"change_status", "stats"}:
            self.required_capability = CAP_ORDERS_MANAGE
        else:
            # list / retrieve: scoped by get_queryset
            return [IsAuthenticated()]

        return [IsAuthenticated(), HasCapability()]

    def get_throttles(self):
        throttles = super().get_throttles()
        if self.action == "create":
            throttles.append(ScopedRateThrottle())
        return throttles

    def _can_manage(self) -> bool:
        return user_has_capability(self.request.user, CAP_ORDERS_MANAGE)

    def get_queryset(self):
        qs = (
            Order.objects.select_related("customer", "processed_by")
            .prefetch_related("items")
            .order_by("-created_at")
        )
        if not self._can_manage():
            qs = qs.filter(customer=self.request.user)

        for param, lookup in (("date_from", "created_at__date__gte"), ("date_to", "created_at__date__lte")):
            raw = (self.request.query_params.get(param) or "").strip()
            if not raw:
                continue
            value = parse_date(raw)
            if value is None:
                raise ValidationError({param: "Invalid date format. Use YYYY-MM-DD."})
            qs = qs.filter(**{lookup: value})

        return qs

    # -----------------------------
    # CREATE
    # -----------------------------
    @extend_schema(
        request=OrderCreateSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Invalid items / product unavailable"),
            404: OpenApiResponse(description="Product not found"),
            409: OpenApiResponse(description="Insufficient stock"),
        },
    )
    def create(self, request, *args, **kwargs):
        payload = OrderCreateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        customer = request.user
        if data.get("customer") and self._can_manage():
            customer = User.objects.filter(pk=data["customer"]).first()
            if customer is None:
                return Response({"detail": "Customer not found"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            order = create_order(
                items=data["items"],
                actor=request.user,
                customer=customer,
                payment_method=data.get("payment_method"),
                shipping_address=data.get("shipping_address"),
                customer_info={
                    "name": data.get("customer_name", ""),
                    "email": data.get("customer_email", ""),
                    "phone": data.get("customer_phone", ""),
                },
                notes=data.get("notes", ""),
            )
        except OrderItemRejected as exc:
            return Response(
                {"detail": str(exc), "item": exc.index, "product": str(exc.product_id)},
                status=_rejected_item_status(exc),
            )
        except InvalidOrderItems as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

    # -----------------------------
    # DELETE (pending only, stock returned)
    # -----------------------------
    def destroy(self, request, *args, **kwargs):
        order = self.get_object()
        try:
            discard_order(order=order, actor=request.user)
        except InvalidOrderTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # -----------------------------
    # STATUS
    # -----------------------------
    @extend_schema(request=OrderStatusUpdateSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["patch"], url_path="status")
    def change_status(self, request, pk=None):
        payload = OrderStatusUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        order = self.get_object()
        try:
            order = set_status(
                order=order,
                new_status=data["status"],
                actor=request.user,
                notes=data.get("notes", ""),
                tracking_number=data.get("tracking_number", ""),
            )
        except InvalidOrderTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(OrderSerializer(order).data)

    @extend_schema(responses={200: dict})
    @action(detail=False, methods=["get"], url_path="stats")
    def stats(self, request):
        return Response(order_stats())
