"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for orders.

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth
"""

from orders.models import Order
from orders.services.exceptions import InvalidOrderTransition

S = Order.Status

# ============================================================
# STATE DEFINITIONS
# ============================================================

OPEN_STATES = {
    S.PENDING,
    S.PROCESSING,
    S.CONFIRMED,
    S.SHIPPED,
}

TERMINAL_STATES = {
    S.CANCELLED,
    S.REJECTED,
    S.RETURNED,
}

# open orders move freely between open states (never back to pending)
# or close as delivered / cancelled / rejected
ALLOWED_TRANSITIONS = {
    **{
        state: (OPEN_STATES - {state, S.PENDING}) | {S.DELIVERED, S.CANCELLED, S.REJECTED}
        for state in OPEN_STATES
    },
    S.DELIVERED: {S.RETURNED},
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status == to_status:
        return False

    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, order: Order, target_status: str):
    if target_status not in S.values:
        raise InvalidOrderTransition(f"Unknown order status '{target_status}'")

    if not can_transition(from_status=order.status, to_status=target_status):
        raise InvalidOrderTransition(
            f"Order {order.order_number} cannot transition from "
            f"'{order.status}' to '{target_status}'"
        )
