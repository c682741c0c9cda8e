"""
ORDER LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions
for Order entities.

    draft -> confirmed -> quoted -> quote_accepted -> invoiced -> delivered
                 ^           |
                 +-----------+  (quote rejected / expired)

    cancelled: reachable from every non-terminal state

DESIGN PRINCIPLES:
- No database writes
- No stock mutation
- No side effects
- Single source of truth (Order.save() consults it too)
"""

from core.exceptions import InvalidTransition
from sales.models import Order

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    Order.STATUS_DELIVERED,
    Order.STATUS_CANCELLED,
}

ALLOWED_TRANSITIONS = {
    Order.STATUS_DRAFT: {
        Order.STATUS_CONFIRMED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_CONFIRMED: {
        Order.STATUS_QUOTED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_QUOTED: {
        Order.STATUS_QUOTE_ACCEPTED,
        Order.STATUS_CONFIRMED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_QUOTE_ACCEPTED: {
        Order.STATUS_INVOICED,
        Order.STATUS_CANCELLED,
    },
    Order.STATUS_INVOICED: {
        Order.STATUS_DELIVERED,
        Order.STATUS_CANCELLED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_status_change(*, order_id, from_status: str, to_status: str) -> None:
    if not can_transition(from_status=from_status, to_status=to_status):
        raise InvalidTransition(
            f"Order {order_id} cannot transition from "
            f"'{from_status}' to '{to_status}'"
        )

