# purchases/models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from products.models import Product

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES)


User = settings.AUTH_USER_MODEL


class Supplier(models.Model):
    """
    Supplier master.

    total_purchase_amount / last_purchase_date are maintained by
    purchases.services.purchase_service.record_purchase.
    """

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=200)
    email = models.EmailField(blank=True, default="")
    phone = models.CharField(max_length=50)
    # {"street", "city", "state", "country", "zip_code"}
    address = models.JSONField(default=dict, blank=True)

    company = models.CharField(max_length=200, blank=True, default="")
    tax_id = models.CharField(max_length=64, blank=True, default="")
    website = models.URLField(blank=True, default="")
    contact_person = models.CharField(max_length=120, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    status = models.CharField(max_length=10, choices=Status.choices, default=Status.ACTIVE)

    total_purchase_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    last_purchase_date = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["name"], name="supplier_name_idx"),
            models.Index(fields=["status"], name="supplier_status_idx"),
        ]

    def __str__(self):
        return self.name


class SupplierPurchase(models.Model):
    """
    Purchase history row (append-only).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    supplier = models.ForeignKey(
        Supplier,
        on_delete=models.CASCADE,
        related_name="purchases",
    )

    date = models.DateTimeField(default=timezone.now)

    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplier_purchases",
    )
    product_name = models.CharField(max_length=255)

    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    total_amount = models.DecimalField(max_digits=14, decimal_places=2)

    invoice_number = models.CharField(max_length=64, blank=True, default="")
    received_into_stock = models.BooleanField(default=False)

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="supplier_purchases",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-date"]
        indexes = [
            models.Index(fields=["supplier", "date"], name="supplier_purchase_date_idx"),
        ]

    def clean(self):
        if self.quantity is None or int(self.quantity) <= 0:
            raise ValidationError("quantity must be >= 1")
        if self.unit_price is None or Decimal(self.unit_price) < Decimal("0.00"):
            raise ValidationError("unit_price must be >= 0")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Purchase history rows are immutable")
        self.full_clean(exclude=["total_amount"])
        self.total_amount = _money(Decimal(self.unit_price) * int(self.quantity))
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Purchase history rows cannot be deleted")

    def __str__(self):
        return f"{self.supplier} | {self.product_name} x{self.quantity}"
