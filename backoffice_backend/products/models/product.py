# products/models/product.py

import secrets
import time
import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils.text import slugify

from products.services.stock_status import (
    STOCK_STATUS_CHOICES,
    OUT_OF_STOCK,
    derive_stock_status,
    stock_status_expression,
)

from .brand import Brand
from .category import Category
from .seller import Seller


def generate_barcode() -> str:
    """12 digits: last 8 digits of the epoch millis + 4 random digits."""
    millis = str(int(time.time() * 1000))[-8:]
    return f"{millis}{secrets.randbelow(10000):04d}"


class Product(models.Model):
    """
    Represents a sellable product.

    STOCK MODEL (IMPORTANT):
    - `quantity` is the on-hand count and is written ONLY by
      products.services.stock_adjustments.adjust_stock (conditional UPDATE).
    - `stock_status` is derived from (quantity, low_stock_quantity) and
      re-derived on every save and on every gateway write.
    - save() on an existing row never writes STOCK_FIELDS; the status is
      re-derived in the database from the stored quantity.
    - Every quantity change has exactly one InventoryMovement row.
    """

    STOCK_FIELDS = ("quantity", "sold_quantity", "stock_status")

    class Unit(models.TextChoices):
        PIECE = "piece", "Piece"
        KG = "kg", "Kilogram"
        GRAM = "g", "Gram"
        LITRE = "l", "Litre"
        ML = "ml", "Millilitre"
        BOX = "box", "Box"
        PACK = "pack", "Pack"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    brand = models.ForeignKey(
        Brand,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )
    seller = models.ForeignKey(
        Seller,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products",
    )

    sku =models.CharField(max_length=128, unique=True, db_index=True)
    barcode = models.CharField(max_length=64, unique=True, blank=True)
    slug = models.SlugField(max_length=280, unique=True, blank=True)
    name = models.CharField(max_length=255, db_index=True)
    description = models.TextField(blank=True)
    unit = models.CharField(max_length=16, choices=Unit.choices, default=Unit.PIECE)

    # Current selling price (snapshotted into OrderItem at order time)
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)

    # Gateway-managed
    quantity = models.PositiveIntegerField(default=0)
    low_stock_quantity = models.PositiveIntegerField(default=10)
    stock_status = models.CharField(
        max_length=16,
        choices=STOCK_STATUS_CHOICES,
        default=OUT_OF_STOCK,
        db_index=True,
    )
    sold_quantity = models.PositiveIntegerField(default=0)

    publish = models.BooleanField(default=True)
    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="products_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
            models.Index(fields=["publish", "stock_status"], name="product_publish_status_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.sku})"

    def clean(self):
        if self.unit_price is None or self.unit_price < 0:
            raise ValidationError("Unit price must be non-negative")

    def _unique_slug(self) -> str:
        base = slugify(self.name)[:250] or "product"
        candidate = base
        i = 1
        while Product.objects.filter(slug=candidate).exclude(pk=self.pk).exists():
            i += 1
            candidate = f"{base}-{i}"
        return candidate

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()

        if not self.barcode:
            self.barcode = generate_barcode()
            while Product.objects.filter(barcode=self.barcode).exclude(pk=self.pk).exists():
                self.barcode = generate_barcode()

        if self._state.adding:
            self.stock_status = derive_stock_status(self.quantity, self.low_stock_quantity)
            return super().save(*args, **kwargs)

        # Existing rows: stock columns belong to the gateway, never to this copy.
        update_fields = kwargs.get("update_fields")
        if update_fields is None:
            update_fields = [
                f.name
                for f in self._meta.concrete_fields
                if not f.primary_key and f.name not in self.STOCK_FIELDS
            ]
        kwargs["update_fields"] = [f for f in update_fields if f not in self.STOCK_FIELDS]
        super().save(*args, **kwargs)

        # low_stock_quantity may have changed; derive from the stored quantity.
        Product.objects.filter(pk=self.pk).update(stock_status=stock_status_expression())
        self.refresh_from_db(fields=list(self.STOCK_FIELDS))
