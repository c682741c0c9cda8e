# sales/tests/test_lifecycle.py

from django.test import SimpleTestCase

from core.exceptions import InvalidTransition
from sales.models import Order
from sales.services.order_lifecycle import (
    ALLOWED_TRANSITIONS,
    TERMINAL_STATES,
    can_transition,
    validate_status_change,
)

ALL_STATUSES = [choice for choice, _ in Order.STATUS_CHOICES]

EXPECTED = {
    (Order.STATUS_DRAFT, Order.STATUS_CONFIRMED),
    (Order.STATUS_CONFIRMED, Order.STATUS_QUOTED),
    (Order.STATUS_QUOTED, Order.STATUS_QUOTE_ACCEPTED),
    (Order.STATUS_QUOTED, Order.STATUS_CONFIRMED),
    (Order.STATUS_QUOTE_ACCEPTED, Order.STATUS_INVOICED),
    (Order.STATUS_INVOICED, Order.STATUS_DELIVERED),
    (Order.STATUS_DRAFT, Order.STATUS_CANCELLED),
    (Order.STATUS_CONFIRMED, Order.STATUS_CANCELLED),
    (Order.STATUS_QUOTED, Order.STATUS_CANCELLED),
    (Order.STATUS_QUOTE_ACCEPTED, Order.STATUS_CANCELLED),
    (Order.STATUS_INVOICED, Order.STATUS_CANCELLED),
}


class OrderLifecycleTableTests(SimpleTestCase):
    """
    GUARANTEES:
    - Exactly the expected (from, to) pairs are allowed
    - delivered and cancelled are terminal
    - Forbidden transitions raise InvalidTransition
    """

    def test_full_transition_table(self):
        for from_status in ALL_STATUSES:
            for to_status in ALL_STATUSES:
                with self.subTest(from_status=from_status, to_status=to_status):
                    self.assertEqual(
                        can_transition(from_status=from_status, to_status=to_status),
                        (from_status, to_status) in EXPECTED,
                    )

    def test_terminal_states_have_no_exits(self):
        self.assertEqual(TERMINAL_STATES, {Order.STATUS_DELIVERED, Order.STATUS_CANCELLED})
        for status in TERMINAL_STATES:
            self.assertNotIn(status, ALLOWED_TRANSITIONS)

    def test_validate_raises_on_forbidden_transition(self):
        with self.assertRaises(InvalidTransition):
            validate_status_change(
                order_id="x",
                from_status=Order.STATUS_DRAFT,
                to_status=Order.STATUS_INVOICED,
            )

        validate_status_change(
            order_id="x",
            from_status=Order.STATUS_DRAFT,
            to_status=Order.STATUS_CONFIRMED,
        )
