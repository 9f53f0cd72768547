# products/services/inventory.py

"""
======================================================
PATH: products/services/inventory.py
======================================================
INVENTORY LEDGER READ SURFACE

Purpose:
- Current stock level per product (status re-derived, never trusted from storage)
- Movement history per product (newest first)
- Low / out-of-stock listing for published products (lowest quantity first)

Writes never happen here; see products/services/stock_adjustments.py.
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db.models import QuerySet

from products.models import InventoryMovement, Product
from products.services.exceptions import ProductNotFound
from products.services.stock_status import LOW_STOCK, OUT_OF_STOCK, derive_stock_status


def _get_product(product_id) -> Product:
    try:
        return Product.objects.get(pk=product_id)
    except (Product.DoesNotExist, ValidationError, ValueError, TypeError):
        raise ProductNotFound(product_id)


def get_stock_level(product_id) -> dict:
    product = _get_product(product_id)
    return {
        "product_id": product.pk,
        "quantity": int(product.quantity),
        "low_stock_quantity": int(product.low_stock_quantity),
        "stock_status": derive_stock_status(product.quantity, product.low_stock_quantity),
    }


def list_movements(product_id) -> QuerySet:
    product = _get_product(product_id)
    return (
        InventoryMovement.objects.filter(product=product)
        .select_related("created_by")
        .order_by("-created_at")
    )


def low_stock_products() -> QuerySet:
    return (
        Product.objects.filter(
            publish=True,
            stock_status__in=[LOW_STOCK, OUT_OF_STOCK],
        )
        .select_related("category", "brand")
        .order_by("quantity", "name")
    )
