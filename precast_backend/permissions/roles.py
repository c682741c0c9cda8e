# permissions/roles.py

from __future__ import annotations

from typing import Optional

from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS (STAFF JOB ROLES)
# =========================================================
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"  # plant / commercial manager
ROLE_PRODUCTION = "production"  # foreman filing daily reports
ROLE_USER = "user"

STAFF_ROLES = {
    ROLE_ADMIN,
    ROLE_MANAGER,
    ROLE_PRODUCTION,
    ROLE_USER,
}


# =========================================================
# CAPABILITIES (THE REAL PERMISSION LANGUAGE)
# =========================================================
# Views should protect capabilities, not raw roles.
CAP_REPORTS_CREATE = "reports.create"
CAP_REPORTS_VIEW_ALL = "reports.view_all"  # see + submit other users' reports

CAP_ORDERS_MANAGE = "orders.manage"
CAP_ORDERS_CANCEL = "orders.cancel"

CAP_INVENTORY_VIEW = "inventory.view"
CAP_INVENTORY_ADJUST = "inventory.adjust"  # sensitive manual adjustments

CAP_CATALOG_EDIT = "catalog.edit"

ALL_CAPABILITIES = {
    CAP_REPORTS_CREATE,
    CAP_REPORTS_VIEW_ALL,
    CAP_ORDERS_MANAGE,
    CAP_ORDERS_CANCEL,
    CAP_INVENTORY_VIEW,
    CAP_INVENTORY_ADJUST,
    CAP_CATALOG_EDIT,
}


# =========================================================
# ROLE → CAPABILITY MAP (DEFAULT)
# =========================================================
ROLE_CAPABILITIES: dict[str, set[str]] = {
    ROLE_ADMIN: {
        *ALL_CAPABILITIES,
    },
    ROLE_MANAGER: {
        CAP_REPORTS_CREATE,
        CAP_REPORTS_VIEW_ALL,
        CAP_ORDERS_MANAGE,
        CAP_INVENTORY_VIEW,
        CAP_INVENTORY_ADJUST,
        CAP_CATALOG_EDIT,
        # NOT orders.cancel: cancellation stays with admins
    },
    ROLE_PRODUCTION: {
        CAP_REPORTS_CREATE,
        CAP_INVENTORY_VIEW,
    },
    ROLE_USER: {
        CAP_REPORTS_CREATE,
    },
}


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def capabilities_for(user) -> set[str]:
    if not user or not getattr(user, "is_authenticated", False):
        return set()
    if getattr(user, "is_superuser", False):
        return set(ALL_CAPABILITIES)
    return set(ROLE_CAPABILITIES.get(get_user_role(user), set()))


def user_has_capability(user, capability: str) -> bool:
    """Service-layer check (no request needed)."""
    return capability in capabilities_for(user)


# =========================================================
# Capability Permissions
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
            # deny-by-default to avoid accidental open endpoints
            return False

        return required in capabilities_for(user)


class HasAnyCapability(BasePermission):
    """
    Require ANY capability from a list.

    Usage:
        view.required_any_capabilities = {CAP_INVENTORY_VIEW, CAP_INVENTORY_ADJUST}
    """

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False

        required = getattr(view, "required_any_capabilities", None)
        if not required:
            return False

        caps = capabilities_for(user)
        return any(cap in caps for cap in set(required))
