# products/models/inventory_movement.py

"""
CANONICAL INVENTORY LEDGER

Immutable inventory ledger entry.

GUARANTEES:
- Append-only (no updates, no deletes)
- Created ONCE, inside the same DB transaction as the quantity change
- new_quantity - previous_quantity == signed delta of the adjustment
"""

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from .product import Product


class InventoryMovement(models.Model):
    class MovementType(models.TextChoices):
        IN = "in", "Stock In"
        OUT = "out", "Stock Out"
        ADJUSTMENT = "adjustment", "Adjustment"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.ForeignKey(
        Product, on_delete=models.CASCADE, related_name="movements"
    )

    movement_type = models.CharField(max_length=16, choices=MovementType.choices)

    # Always |delta|; direction is movement_type + previous/new quantity
    quantity = models.PositiveIntegerField()
    previous_quantity = models.PositiveIntegerField()
    new_quantity = models.PositiveIntegerField()

    reason = models.CharField(max_length=255, blank=True)
    reference = models.CharField(max_length=128, blank=True, db_index=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="inventory_movements",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["product", "created_at"], name="movement_product_created_idx"),
            models.Index(fields=["movement_type"], name="movement_type_idx"),
        ]

    @property
    def signed_delta(self) -> int:
        return int(self.new_quantity) - int(self.previous_quantity)

    def clean(self):
        if self.quantity <= 0:
            raise ValidationError("quantity must be greater than zero")

        if abs(self.signed_delta) != self.quantity:
            raise ValidationError("quantity must equal |new_quantity - previous_quantity|")

        if self.movement_type == self.MovementType.IN and self.signed_delta < 0:
            raise ValidationError("IN movement cannot decrease stock")

        if self.movement_type == self.MovementType.OUT and self.signed_delta > 0:
            raise ValidationError("OUT movement cannot increase stock")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("InventoryMovement records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "InventoryMovement records are immutable and cannot be deleted"
        )

    def __str__(self):
        product_name = getattr(self.product, "name", "Product")
        return f"{product_name} | {self.movement_type} | {self.quantity}"
