# notifications/models/notification.py

import uuid

from django.conf import settings
from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """
    In-app inbox entry for one user.

    Delivery (push / socket / e-mail) is out of scope: a row here IS the
    notification. Rows are created best-effort after the business
    transaction commits.
    """

    class Type(models.TextChoices):
        ORDER = "order", "Order"
        REJECT = "reject", "Reject"
        COMMENT = "comment", "Comment"
        SYSTEM = "system", "System"
        STOCK = "stock", "Stock"
        OTHER = "other", "Other"

    class Priority(models.TextChoices):
        LOW = "low", "Low"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
    )

    title = models.CharField(max_length=255)
    message = models.TextField()
    type = models.CharField(max_length=16, choices=Type.choices, default=Type.SYSTEM)
    priority = models.CharField(max_length=8, choices=Priority.choices, default=Priority.MEDIUM)

    is_read = models.BooleanField(default=False)
    read_at = models.DateTimeField(null=True, blank=True)

    data = models.JSONField(default=dict, blank=True)

    related_entity_type = models.CharField(max_length=32, blank=True)
    related_entity_id = models.CharField(max_length=64, blank=True)
    action_url = models.CharField(max_length=255, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notification_inbox_idx"),
        ]

    def mark_read(self) -> None:
        if self.is_read:
            return
        self.is_read = True
        self.read_at = timezone.now()
        self.save(update_fields=["is_read", "read_at"])

    def __str__(self):
        return f"{self.title} -> {self.recipient_id}"
