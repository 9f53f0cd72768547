# orders/models/order_item.py

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from products.models import Product


class OrderItem(models.Model):
    """
    Order line. name/price are a snapshot of the product at order time.
    """

    order = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )

    # SET_NULL: a hard-deleted product must not erase order history
    product = models.ForeignKey(
        Product,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    name = models.CharField(max_length=255)
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)

    class Meta:
        ordering = ["id"]

    def save(self, *args, **kwargs):
        self.subtotal = (Decimal(self.price) * self.quantity).quantize(Decimal("0.01"))
        return super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.name} x{self.quantity}"
