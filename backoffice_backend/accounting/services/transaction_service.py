# accounting/services/transaction_service.py

"""
TRANSACTION SERVICE

Purpose:
- Generate unique references
- Post order income (delivered) and order refund expense (returned)
- Manual entries with the pending-only edit/delete rule

Rules:
- order postings are COMPLETED immediately and linked to the order
- only PENDING transactions may be updated or deleted
"""

from __future__ import annotations

import logging
import secrets
import string
import time
from decimal import Decimal

from django.db import transaction

from accounting.models import Transaction
from accounting.services.exceptions import TransactionLockedError

logger = logging.getLogger(__name__)

_REF_ALPHABET = string.ascii_uppercase + string.digits

# fields a manual entry may change while still pending
EDITABLE_FIELDS = {
    "type",
    "category",
    "amount",
    "status",
    "description",
    "date",
    "payment_method",
    "related_entity_type",
    "related_entity_id",
}


def generate_reference() -> str:
    suffix = "".join(secrets.choice(_REF_ALPHABET) for _ in range(8))
    return f"TXN-{int(time.time() * 1000)}-{suffix}"


def _actor_or_none(actor):
    return actor if getattr(actor, "is_authenticated", False) else None


def record_transaction(
    *,
    type: str,
    category: str,
    amount,
    actor=None,
    description: str = "",
    status: str = Transaction.Status.COMPLETED,
    payment_method: str = "",
    date=None,
    related_entity_type: str = "",
    related_entity_id="",
) -> Transaction:
    fields = {
        "reference": generate_reference(),
        "type": type,
        "category": category,
        "amount": Decimal(str(amount)),
        "status": status,
        "description": description or "",
        "payment_method": payment_method or "",
        "related_entity_type": related_entity_type or "",
        "related_entity_id": str(related_entity_id or ""),
        "created_by": _actor_or_none(actor),
    }
    if date is not None:
        fields["date"] = date

    txn = Transaction.objects.create(**fields)

    logger.info(
        "Transaction recorded",
        extra={
            "reference": txn.reference,
            "type": txn.type,
            "category": txn.category,
            "amount": str(txn.amount),
        },
    )
    return txn


def post_order_sale(*, order, actor=None) -> Transaction:
    return record_transaction(
        type=Transaction.Type.INCOME,
        category=Transaction.Category.SALE,
        amount=order.total_amount,
        description=f"Sale from order {order.order_number}",
        payment_method=order.payment_method,
        related_entity_type="order",
        related_entity_id=order.pk,
        actor=actor,
    )


def post_order_refund(*, order, actor=None) -> Transaction:
    return record_transaction(
        type=Transaction.Type.EXPENSE,
        category=Transaction.Category.RETURN,
        amount=order.total_amount,
        description=f"Refund for returned order {order.order_number}",
        payment_method=order.payment_method,
        related_entity_type="order",
        related_entity_id=order.pk,
        actor=actor,
    )


def _require_pending(txn: Transaction) -> None:
    if txn.status != Transaction.Status.PENDING:
        raise TransactionLockedError(
            f"Transaction {txn.reference} is {txn.status}; only pending transactions can be changed"
        )


@transaction.atomic
def update_transaction(*, txn: Transaction, changes: dict) -> Transaction:
    txn = Transaction.objects.select_for_update().get(pk=txn.pk)
    _require_pending(txn)

    touched = []
    for field, value in changes.items():
        if field not in EDITABLE_FIELDS:
            continue
        setattr(txn, field, value)
        touched.append(field)

    if touched:
        txn.save(update_fields=[*touched, "updated_at"])

    return txn


@transaction.atomic
def delete_transaction(*, txn: Transaction) -> None:
    txn = Transaction.objects.select_for_update().get(pk=txn.pk)
    _require_pending(txn)
    txn.delete()
