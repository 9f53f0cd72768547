# purchases/services/purchase_service.py

"""
======================================================
PATH: purchases/services/purchase_service.py
======================================================
SUPPLIER PURCHASE SERVICE

Record one purchase against a supplier atomically:

1) Validate quantity / unit price, resolve the product
2) Optionally receive the goods: an `in` adjustment through the stock
   adjustment gateway (reference = invoice number)
3) Optionally book the cost: one completed expense/purchase transaction
4) Append the purchase history row
5) Bump supplier totals (F() increment) and last_purchase_date

Any failure rolls back every step.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from accounting.models import Transaction
from accounting.services.transaction_service import record_transaction
from products.models import Product
from products.services.exceptions import ProductNotFound
from products.services.stock_adjustments import KIND_IN, adjust_stock
from purchases.models import Supplier, SupplierPurchase
from purchases.services.exceptions import InvalidPurchase

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    try:
        return Decimal(str(v)).quantize(TWOPLACES, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidPurchase("unit_price must be a number")


def _to_int_qty(value) -> int:
    if isinstance(value, bool):
        raise InvalidPurchase("quantity must be a whole integer unit")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidPurchase("quantity must be a whole integer unit")


@transaction.atomic
def record_purchase(
    *,
    supplier: Supplier,
    product_id,
    quantity,
    unit_price,
    product_name: str = "",
    invoice_number: str = "",
    receive_into_stock: bool = False,
    record_expense: bool = False,
    actor=None,
) -> SupplierPurchase:
    qty = _to_int_qty(quantity)
    if qty <= 0:
        raise InvalidPurchase("quantity must be >= 1")

    price = _money(unit_price)
    if price < Decimal("0.00"):
        raise InvalidPurchase("unit_price must be >= 0")

    try:
        product = Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError):
        raise ProductNotFound(product_id)

    actor = actor if getattr(actor, "is_authenticated", False) else None
    invoice_number = (invoice_number or "").strip()

    if receive_into_stock:
        adjust_stock(
            product_id=product.pk,
            delta=qty,
            kind=KIND_IN,
            reason=f"Purchase from {supplier.name}",
            reference=invoice_number,
            actor=actor,
        )

    purchase = SupplierPurchase.objects.create(
        supplier=supplier,
        product=product,
        product_name=(product_name or "").strip() or product.name,
        quantity=qty,
        unit_price=price,
        invoice_number=invoice_number,
        received_into_stock=bool(receive_into_stock),
        created_by=actor,
    )

    if record_expense:
        record_transaction(
            type=Transaction.Type.EXPENSE,
            category=Transaction.Category.PURCHASE,
            amount=purchase.total_amount,
            description=f"Purchase from {supplier.name}"
            + (f" (invoice {invoice_number})" if invoice_number else ""),
            related_entity_type="supplier_purchase",
            related_entity_id=purchase.pk,
            actor=actor,
        )

    Supplier.objects.filter(pk=supplier.pk).update(
        total_purchase_amount=F("total_purchase_amount") + purchase.total_amount,
        last_purchase_date=purchase.date,
        updated_at=timezone.now(),
    )

    logger.info(
        "Supplier purchase recorded",
        extra={
            "supplier_id": str(supplier.pk),
            "product_id": str(product.pk),
            "quantity": qty,
            "total_amount": str(purchase.total_amount),
            "received_into_stock": bool(receive_into_stock),
        },
    )
    return purchase
