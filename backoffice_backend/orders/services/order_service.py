# orders/services/order_service.py

"""
ORDER SERVICE (APPLICATION SERVICE)

Purpose:
- Create orders: validate lines, reserve stock through the stock
  adjustment gateway, snapshot name/price, persist (all-or-nothing).
- Move orders through the lifecycle and apply each transition's side
  effects (sale posting, stock return, refund).
- Discard pending orders.

Hard rules:
- stock only moves through products.services.stock_adjustments.adjust_stock
- every write for one operation happens inside one transaction.atomic;
  any failure leaves stock, order and accounting untouched
- notifications are queued with transaction.on_commit and are best-effort
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, DecimalField, F, Sum, Value
from django.db.models.functions import Coalesce, Greatest
from django.utils import timezone

from accounting.services.transaction_service import post_order_refund, post_order_sale
from notifications.models import Notification
from notifications.services.notification_service import notify_on_commit
from orders.models import Order, OrderItem, generate_order_number
from orders.services.exceptions import (
    InvalidOrderItems,
    InvalidOrderTransition,
    OrderItemRejected,
    ProductUnavailable,
)
from orders.services.order_lifecycle import validate_transition
from permissions.roles import ROLE_ADMIN
from products.models import Product
from products.services.exceptions import ProductNotFound, StockError
from products.services.stock_adjustments import KIND_IN, KIND_OUT, adjust_stock

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")
ZERO = Decimal("0.00")


def _money(v) -> Decimal:
    if v is None or v == "":
        return ZERO
    return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def _to_int_qty(value) -> int:
    if isinstance(value, bool):
        raise InvalidOrderItems("quantity must be a whole number")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidOrderItems("quantity must be a whole number")


def _actor_or_none(actor):
    return actor if getattr(actor, "is_authenticated", False) else None


def _normalize_items(items) -> list[tuple[str, int]]:
    """
    Validate line shape and merge duplicate products (first occurrence
    keeps its position).
    """
    if not items:
        raise InvalidOrderItems("Order must contain at least one item")

    merged: dict[str, int] = {}
    for idx, item in enumerate(items):
        product_id = item.get("product") or item.get("product_id")
        if not product_id:
            raise InvalidOrderItems(f"Item {idx + 1}: product is required")

        qty = _to_int_qty(item.get("quantity"))
        if qty <= 0:
            raise InvalidOrderItems(f"Item {idx + 1}: quantity must be greater than 0")

        key = str(product_id)
        merged[key] = merged.get(key, 0) + qty

    return list(merged.items())


def _orderable_product(product_id) -> Product:
    try:
        product = Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError):
        raise ProductNotFound(product_id)

    if not (product.is_active and product.publish):
        raise ProductUnavailable(product_id, product.name)
    return product


def _return_stock(*, order: Order, items, actor, reason: str) -> None:
    for item in items:
        if item.product_id is None:
            logger.warning(
                "Order line has no product; stock not returned",
                extra={"order_number": order.order_number, "item": item.name},
            )
            continue

        adjust_stock(
            product_id=item.product_id,
            delta=item.quantity,
            kind=KIND_IN,
            reason=reason,
            reference=order.order_number,
            actor=actor,
        )


def _admin_recipients():
    User = get_user_model()
    return User.objects.filter(role=ROLE_ADMIN, is_active=True)


# =========================================================
# CREATE
# =========================================================
@transaction.atomic
def create_order(
    *,
    items,
    actor,
    customer=None,
    payment_method: str = Order.PaymentMethod.CASH,
    shipping_address: dict | None = None,
    customer_info: dict | None = None,
    notes: str = "",
) -> Order:
    lines = _normalize_items(items)
    actor = _actor_or_none(actor)
    customer = customer or actor
    info = customer_info or {}

    order_number = generate_order_number()
    while Order.objects.filter(order_number=order_number).exists():
        order_number = generate_order_number()

    reserved = []
    for idx, (product_id, qty) in enumerate(lines):
        try:
            product = _orderable_product(product_id)
            adjust_stock(
                product_id=product.pk,
                delta=-qty,
                kind=KIND_OUT,
                reason=f"Reserved for order {order_number}",
                reference=order_number,
                actor=actor,
            )
        except (StockError, ProductUnavailable) as exc:
            logger.warning(
                "Order line rejected",
                extra={"order_number": order_number, "product_id": product_id, "error": str(exc)},
            )
            raise OrderItemRejected(index=idx, product_id=product_id, reason=exc) from exc

        reserved.append((product, qty))

    subtotal = sum((_money(p.unit_price) * qty for p, qty in reserved), ZERO)
    tax_amount = shipping_amount = discount_amount = ZERO

    order = Order.objects.create(
        order_number=order_number,
        customer=customer,
        customer_name=info.get("name") or getattr(customer, "full_name", "") or "",
        customer_email=info.get("email") or getattr(customer, "email", "") or "",
        customer_phone=info.get("phone") or getattr(customer, "phone", "") or "",
        shipping_address=shipping_address or {},
        subtotal=subtotal,
        tax_amount=tax_amount,
        shipping_amount=shipping_amount,
        discount_amount=discount_amount,
        total_amount=subtotal + tax_amount + shipping_amount - discount_amount,
        payment_method=payment_method or Order.PaymentMethod.CASH,
        notes=notes or "",
        created_by=actor,
    )

    for product, qty in reserved:
        OrderItem.objects.create(
            order=order,
            product=product,
            name=product.name,
            price=_money(product.unit_price),
            quantity=qty,
        )

    for admin in _admin_recipients():
        notify_on_commit(
            recipient=admin,
            title="New Order",
            message=f"New order {order.order_number} has been placed",
            type=Notification.Type.ORDER,
            priority=Notification.Priority.HIGH,
            related_entity_type="order",
            related_entity_id=order.pk,
        )

    logger.info(
        "Order created",
        extra={
            "order_number": order.order_number,
            "items": len(reserved),
            "total_amount": str(order.total_amount),
        },
    )
    return order


# =========================================================
# STATUS TRANSITIONS
# =========================================================
@transaction.atomic
def set_status(
    *,
    order: Order,
    new_status: str,
    actor,
    notes: str = "",
    tracking_number: str = "",
) -> Order:
    order = Order.objects.select_for_update().get(pk=order.pk)
    validate_transition(order=order, target_status=new_status)

    actor = _actor_or_none(actor)
    items = list(order.items.all())
    S = Order.Status

    if new_status == S.DELIVERED:
        order.payment_status = Order.PaymentStatus.PAID
        for item in items:
            if item.product_id:
                Product.objects.filter(pk=item.product_id).update(
                    sold_quantity=F("sold_quantity") + item.quantity
                )
        post_order_sale(order=order, actor=actor)

    elif new_status in (S.CANCELLED, S.REJECTED):
        _return_stock(order=order, items=items, actor=actor, reason=f"Order {order.order_number} {new_status}")
        if new_status == S.REJECTED:
            order.cancel_reason = notes or ""

    elif new_status == S.RETURNED:
        _return_stock(order=order, items=items, actor=actor, reason=f"Order {order.order_number} returned")
        for item in items:
            if item.product_id:
                Product.objects.filter(pk=item.product_id).update(
                    sold_quantity=Greatest(F("sold_quantity") - item.quantity, Value(0))
                )
        order.payment_status = Order.PaymentStatus.REFUNDED
        order.return_reason = notes or ""
        post_order_refund(order=order, actor=actor)

    previous = order.status
    order.status = new_status
    order.processed_by = actor
    order.processed_at = timezone.now()
    if notes:
        order.notes = notes
    if tracking_number:
        order.tracking_number = tracking_number
    order.save()

    if order.customer_id:
        notify_on_commit(
            recipient=order.customer,
            title=f"Order {new_status}",
            message=f"Your order {order.order_number} has been {new_status}",
            type=Notification.Type.REJECT if new_status == S.REJECTED else Notification.Type.ORDER,
            priority=Notification.Priority.HIGH,
            related_entity_type="order",
            related_entity_id=order.pk,
        )

    logger.info(
        "Order status changed",
        extra={"order_number": order.order_number, "from": previous, "to": new_status},
    )
    return order


# =========================================================
# DISCARD (pending only)
# =========================================================
@transaction.atomic
def discard_order(*, order: Order, actor) -> None:
    order = Order.objects.select_for_update().get(pk=order.pk)
    if order.status != Order.Status.PENDING:
        raise InvalidOrderTransition(
            f"Order {order.order_number} is {order.status}; only pending orders can be deleted"
        )

    _return_stock(
        order=order,
        items=list(order.items.all()),
        actor=_actor_or_none(actor),
        reason=f"Order {order.order_number} deleted",
    )

    number = order.order_number
    order.delete()
    logger.info("Order discarded", extra={"order_number": number})


# =========================================================
# STATS
# =========================================================
def order_stats(queryset=None) -> dict:
    qs = Order.objects.all() if queryset is None else queryset
    money = DecimalField(max_digits=16, decimal_places=2)

    rows = {
        row["status"]: row
        for row in qs.values("status")
        .annotate(
            count=Count("id"),
            total_amount=Coalesce(Sum("total_amount"), Value(ZERO), output_field=money),
        )
        .order_by()
    }

    by_status = {
        status: {
            "count": rows.get(status, {}).get("count", 0),
            "total_amount": _money(rows.get(status, {}).get("total_amount", ZERO)),
        }
        for status in Order.Status.values
    }

    return {
        "total": sum(entry["count"] for entry in by_status.values()),
        "total_revenue": by_status[Order.Status.DELIVERED]["total_amount"],
        "by_status": by_status,
    }
