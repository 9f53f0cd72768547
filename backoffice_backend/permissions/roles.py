# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
ROLE_ADMIN = "admin"
ROLE_STAFF = "staff"
ROLE_CUSTOMER = "customer"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_STAFF,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views protect capabilities, not raw roles.
CAP_ORDERS_CREATE = "orders.create"
CAP_ORDERS_MANAGE = "orders.manage"       # status transitions, stats, all orders
CAP_ORDERS_DISCARD = "orders.discard"     # delete a pending order

CAP_CATALOG_EDIT = "catalog.edit"
CAP_CATALOG_DELETE = "catalog.delete"

CAP_INVENTORY_VIEW = "inventory.view"
CAP_INVENTORY_ADJUST = "inventory.adjust"

CAP_ACCOUNTING_VIEW = "accounting.view"
CAP_ACCOUNTING_POST = "accounting.post"
CAP_ACCOUNTING_DELETE = "accounting.delete"

CAP_SUPPLIERS_MANAGE = "suppliers.manage"
CAP_SUPPLIERS_DELETE = "suppliers.delete"

CAP_NOTIFICATIONS_SEND = "notifications.send"

CAP_USERS_MANAGE = "users.manage"       # admin user management

ALL_CAPABILITIES = {
    CAP_ORDERS_CREATE,
    CAP_ORDERS_MANAGE,
    CAP_ORDERS_DISCARD,
    CAP_CATALOG_EDIT,
    CAP_CATALOG_DELETE,
    CAP_INVENTORY_VIEW,
    CAP_INVENTORY_ADJUST,
    CAP_ACCOUNTING_VIEW,
    CAP_ACCOUNTING_POST,
    CAP_ACCOUNTING_DELETE,
    CAP_SUPPLIERS_MANAGE,
    CAP_SUPPLIERS_DELETE,
    CAP_NOTIFICATIONS_SEND,
    CAP_USERS_MANAGE,
}


# =========================================================
# ROLE → CAPABILITY MAP
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        # admin can do everything
        *ALL_CAPABILITIES,
    },
    ROLE_STAFF: {
        CAP_ORDERS_CREATE,
        CAP_ORDERS_MANAGE,
        CAP_CATALOG_EDIT,
        CAP_INVENTORY_VIEW,
        CAP_INVENTORY_ADJUST,
        CAP_ACCOUNTING_VIEW,
        CAP_ACCOUNTING_POST,
        CAP_SUPPLIERS_MANAGE,
        CAP_NOTIFICATIONS_SEND,
    },
    ROLE_CUSTOMER: {
        CAP_ORDERS_CREATE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    if not user or not getattr(user, "is_authenticated", False):
        return False
    return capability in capabilities_for(user)


def is_staff_user(user) -> bool:
    return bool(user and user.is_authenticated and get_user_role(user) in STAFF_ROLES)


# =========================================================
# Capability Permission
# =========================================================
class HasCapability(BasePermission):
    """
    Require a specific capability.

    Usage:
        permission_classes = [IsAuthenticated, HasCapability]
        view.required_capability = CAP_INVENTORY_ADJUST
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_capability", None)
        if not required:
            # deny-by-default
            return False

        return required in capabilities_for(user)
