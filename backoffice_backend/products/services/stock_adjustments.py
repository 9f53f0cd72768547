# products/services/stock_adjustments.py

"""
STOCK ADJUSTMENT GATEWAY

Purpose:
- The ONLY code path that changes Product.quantity.
- Every successful call writes exactly one immutable InventoryMovement.

Rules:
- delta must be a non-zero integer (bool rejected)
- kind in {in, out, adjustment}; inferred from the sign when omitted
- kind=in requires delta > 0, kind=out requires delta < 0
- decreases are a single conditional UPDATE ... WHERE quantity >= |delta|;
  zero rows updated means InsufficientStock and nothing changes
- increases are an unconditional F() increment
- stock_status is derived in the same UPDATE from the post-update quantity
- the advisory read before the write only improves error messages;
  it is never proof that the write will succeed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import F

from products.models import InventoryMovement, Product
from products.services.exceptions import InsufficientStock, InvalidDelta, ProductNotFound
from products.services.stock_status import stock_status_expression

logger = logging.getLogger(__name__)

KIND_IN = InventoryMovement.MovementType.IN
KIND_OUT = InventoryMovement.MovementType.OUT
KIND_ADJUSTMENT = InventoryMovement.MovementType.ADJUSTMENT

VALID_KINDS = {KIND_IN, KIND_OUT, KIND_ADJUSTMENT}

DEFAULT_REASONS = {
    KIND_IN: "Stock added",
    KIND_OUT: "Stock removed",
    KIND_ADJUSTMENT: "Stock adjusted",
}


@dataclass(frozen=True)
class StockAdjustment:
    product: Product
    movement: InventoryMovement
    delta: int


def _to_int_delta(value) -> int:
    if value is None or value == "":
        raise InvalidDelta("delta is required")

    if isinstance(value, bool):
        # guardrail: bool is an int subclass in Python
        raise InvalidDelta("delta must be an integer")

    if isinstance(value, float) and not value.is_integer():
        raise InvalidDelta("delta must be an integer")

    try:
        delta = int(value)
    except (TypeError, ValueError):
        raise InvalidDelta("delta must be an integer")

    if delta == 0:
        raise InvalidDelta("delta cannot be 0")

    return delta


def _resolve_kind(kind, delta: int) -> str:
    if kind in (None, ""):
        return KIND_IN if delta > 0 else KIND_OUT

    kind = str(kind).strip().lower()
    if kind not in VALID_KINDS:
        raise InvalidDelta(f"Unknown adjustment type '{kind}'")

    if kind == KIND_IN and delta < 0:
        raise InvalidDelta("An 'in' adjustment requires a positive change")
    if kind == KIND_OUT and delta > 0:
        raise InvalidDelta("An 'out' adjustment requires a negative change")

    return kind


def _load_product(product_id) -> Product:
    """Advisory read. The conditional UPDATE below is authoritative."""
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError, TypeError):
        raise ProductNotFound(product_id)


@transaction.atomic
def adjust_stock(
    *,
    product_id,
    delta,
    kind=None,
    reason: str = "",
    reference: str = "",
    actor=None,
) -> StockAdjustment:
    """
    Apply a signed quantity change to one product and record it in the ledger.

    delta:
      +N -> stock in (unconditional increment)
      -N -> stock out (conditional: only if quantity >= N)
    """
    delta = _to_int_delta(delta)
    kind = _resolve_kind(kind, delta)

    advisory = _load_product(product_id)

    if delta < 0 and advisory.quantity < -delta:
        logger.warning(
            "Stock decrement rejected (advisory)",
            extra={"product_id": str(advisory.pk), "requested": -delta, "available": advisory.quantity},
        )
        raise InsufficientStock(
            product_id=advisory.pk,
            requested=-delta,
            available=advisory.quantity,
            product_name=advisory.name,
        )

    rows = Product.objects.filter(pk=advisory.pk)
    if delta < 0:
        rows = rows.filter(quantity__gte=-delta)

    updated = rows.update(
        quantity=F("quantity") + delta,
        stock_status=stock_status_expression(delta),
    )

    if updated == 0:
        # Lost a race: another writer drained the stock after the advisory read.
        logger.warning(
            "Stock decrement rejected (conditional update matched no rows)",
            extra={"product_id": str(advisory.pk), "requested": -delta},
        )
        raise InsufficientStock(
            product_id=advisory.pk,
            requested=-delta,
            product_name=advisory.name,
        )

    product = Product.objects.get(pk=advisory.pk)
    new_quantity = int(product.quantity)

    movement = InventoryMovement.objects.create(
        product=product,
        movement_type=kind,
        quantity=abs(delta),
        previous_quantity=new_quantity - delta,
        new_quantity=new_quantity,
        reason=(reason or "").strip() or DEFAULT_REASONS[kind],
        reference=(reference or "").strip(),
        created_by=actor if getattr(actor, "is_authenticated", False) else None,
    )

    logger.info(
        "Stock adjusted",
        extra={
            "product_id": str(product.pk),
            "delta": delta,
            "kind": kind,
            "new_quantity": new_quantity,
            "reference": movement.reference,
        },
    )

    return StockAdjustment(product=product, movement=movement, delta=delta)
