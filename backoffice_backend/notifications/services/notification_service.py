# notifications/services/notification_service.py

"""
NOTIFICATION SERVICE

Rules:
- create_notification() raises on bad input (used by the API)
- notify() is best-effort: failures are logged and swallowed, never
  propagated into the business flow that triggered them
- notify_on_commit() defers notify() until the surrounding transaction
  commits, so a rolled-back order never notifies anyone
"""

from __future__ import annotations

import logging

from django.db import transaction
from django.utils import timezone

from notifications.models import Notification

logger = logging.getLogger(__name__)


def create_notification(
    *,
    recipient,
    title: str,
    message: str,
    type: str = Notification.Type.SYSTEM,
    priority: str = Notification.Priority.MEDIUM,
    related_entity_type: str = "",
    related_entity_id="",
    data: dict | None = None,
    action_url: str = "",
) -> Notification:
    return Notification.objects.create(
        recipient=recipient,
        title=title,
        message=message,
        type=type,
        priority=priority,
        related_entity_type=related_entity_type or "",
        related_entity_id=str(related_entity_id or ""),
        data=data or {},
        action_url=action_url or "",
    )


def notify(**kwargs) -> Notification | None:
    try:
        return create_notification(**kwargs)
    except Exception:
        recipient = kwargs.get("recipient")
        logger.exception(
            "Notification failed",
            extra={
                "recipient_id": str(getattr(recipient, "pk", "") or ""),
                "title": kwargs.get("title", ""),
            },
        )
        return None


def notify_on_commit(**kwargs) -> None:
    transaction.on_commit(lambda: notify(**kwargs))


def unread_count(user) -> int:
    return Notification.objects.filter(recipient=user, is_read=False).count()


def mark_all_read(user) -> int:
    return Notification.objects.filter(recipient=user, is_read=False).update(
        is_read=True,
        read_at=timezone.now(),
    )
