# products/services/catalog.py

"""
CATALOG SERVICES

Rules:
- A new product row always starts at quantity 0.
- Opening stock is recorded through the stock gateway (reason "Opening stock"),
  so the first movement explains the first quantity.
- Removal is soft (publish=False) unless PRODUCT_DELETE_MODE == "hard".
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.db import transaction

from products.models import Product
from products.services.stock_adjustments import KIND_IN, adjust_stock

logger = logging.getLogger(__name__)

OPENING_STOCK_REASON = "Opening stock"


@transaction.atomic
def create_product(*, data: dict, opening_quantity: int = 0, actor=None) -> Product:
    data = dict(data)
    data.pop("quantity", None)
    data.pop("stock_status", None)

    product = Product.objects.create(
        created_by=actor if getattr(actor, "is_authenticated", False) else None,
        **data,
    )

    if opening_quantity:
        result = adjust_stock(
            product_id=product.pk,
            delta=opening_quantity,
            kind=KIND_IN,
            reason=OPENING_STOCK_REASON,
            actor=actor,
        )
        product = result.product

    logger.info(
        "Product created",
        extra={"product_id": str(product.pk), "sku": product.sku, "opening_quantity": opening_quantity},
    )
    return product


def remove_product(*, product: Product) -> str:
    """Returns "hard" or "soft" depending on what was done."""
    mode = (getattr(settings, "PRODUCT_DELETE_MODE", "soft") or "soft").lower()

    if mode == "hard":
        product_id = str(product.pk)
        product.delete()
        logger.info("Product deleted", extra={"product_id": product_id})
        return "hard"

    product.publish = False
    product.save(update_fields=["publish", "updated_at"])
    logger.info("Product unpublished", extra={"product_id": str(product.pk)})
    return "soft"
