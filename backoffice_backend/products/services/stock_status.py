# products/services/stock_status.py

"""
STOCK STATUS

Status is DERIVED from (quantity, low_stock_quantity), never set by hand.

Rules:
- quantity == 0                   -> out_of_stock
- quantity <= low_stock_quantity  -> low_stock
- otherwise                       -> in_stock

derive_stock_status() applies the rules to in-memory values.
stock_status_expression() applies them inside the database, against the
stored row, for UPDATE statements.
"""

from __future__ import annotations

from django.db.models import Case, CharField, F, Value, When

IN_STOCK = "in_stock"
LOW_STOCK = "low_stock"
OUT_OF_STOCK = "out_of_stock"

STOCK_STATUS_CHOICES = [
    (IN_STOCK, "In stock"),
    (LOW_STOCK, "Low stock"),
    (OUT_OF_STOCK, "Out of stock"),
]


def derive_stock_status(quantity: int, low_stock_quantity: int) -> str:
    quantity = int(quantity or 0)
    if quantity <= 0:
        return OUT_OF_STOCK
    if quantity <= int(low_stock_quantity or 0):
        return LOW_STOCK
    return IN_STOCK


def stock_status_expression(delta: int = 0) -> Case:
    """
    stock_status for the post-update quantity (quantity + delta), evaluated
    against the pre-update column values.
    """
    return Case(
        When(quantity__lte=-delta, then=Value(OUT_OF_STOCK)),
        When(quantity__lte=F("low_stock_quantity") - delta, then=Value(LOW_STOCK)),
        default=Value(IN_STOCK),
        output_field=CharField(),
    )
