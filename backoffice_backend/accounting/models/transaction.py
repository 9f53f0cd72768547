# accounting/models/transaction.py

"""
CASH-BASIS TRANSACTION

One row per money movement: order income on delivery, refund expense on
return, and manual entries (purchases, salary, rent, ...).

GUARANTEES:
- reference is unique (TXN-<epoch ms>-<8 random chars>)
- amount is non-negative; direction is `type`
- a COMPLETED transaction is never edited or deleted (service + model guard)
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone


class Transaction(models.Model):
    class Type(models.TextChoices):
        INCOME = "income", "Income"
        EXPENSE = "expense", "Expense"

    class Category(models.TextChoices):
        SALE = "sale", "Sale"
        PURCHASE = "purchase", "Purchase"
        RETURN = "return", "Return"
        DAMAGE = "damage", "Damage"
        SALARY = "salary", "Salary"
        RENT = "rent", "Rent"
        UTILITY = "utility", "Utility"
        OTHER = "other", "Other"

    class Status(models.TextChoices):
        COMPLETED = "completed", "Completed"
        PENDING = "pending", "Pending"
        CANCELLED = "cancelled", "Cancelled"

    class PaymentMethod(models.TextChoices):
        CASH = "cash", "Cash"
        CARD = "card", "Card"
        ONLINE = "online", "Online"
        BANK_TRANSFER = "bank_transfer", "Bank transfer"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    reference = models.CharField(max_length=40, unique=True)

    type = models.CharField(max_length=8, choices=Type.choices)
    category = models.CharField(max_length=16, choices=Category.choices)
    amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.COMPLETED)

    description = models.CharField(max_length=255, blank=True)
    date = models.DateField(default=timezone.localdate, db_index=True)

    payment_method = models.CharField(max_length=16, choices=PaymentMethod.choices, blank=True)

    related_entity_type = models.CharField(max_length=32, blank=True)
    related_entity_id = models.CharField(max_length=64, blank=True, db_index=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-date", "-created_at"]
        indexes = [
            models.Index(fields=["type", "category"], name="transaction_type_cat_idx"),
            models.Index(fields=["status", "date"], name="transaction_status_date_idx"),
        ]

    def delete(self, *args, **kwargs):
        if self.status == self.Status.COMPLETED:
            raise ValidationError("Completed transactions cannot be deleted")
        return super().delete(*args, **kwargs)

    def __str__(self):
        return f"{self.reference} {self.type} {self.amount}"
