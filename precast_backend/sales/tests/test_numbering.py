# sales/tests/test_numbering.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from django.utils import timezone

from catalog.models import Client, PbaProduct
from core.exceptions import ClientInactive
from sales.models import DocumentSequence, Order
from sales.services.numbering import next_number, period_for
from sales.services.order_service import create_order

User = get_user_model()


class DocumentNumberingTests(TestCase):
    """
    GUARANTEES:
    - Numbers follow PREFIX-YYYYMM-NNNN
    - Numbers are consecutive within a (kind, month) and restart each month
    - Kinds have independent counters
    - A rolled-back document does not consume a number
    - A missing sequence row is seeded from numbers already issued
    """

    def test_format_and_consecutive_numbers(self):
        day = date(2026, 10, 19)

        numbers = [next_number(kind=DocumentSequence.KIND_ORDER, day=day) for _ in range(3)]

        self.assertEqual(numbers, ["CMD-202610-0001", "CMD-202610-0002", "CMD-202610-0003"])

    def test_counters_are_per_kind_and_month(self):
        october = date(2026, 10, 1)
        november = date(2026, 11, 2)

        self.assertEqual(next_number(kind=DocumentSequence.KIND_ORDER, day=october), "CMD-202610-0001")
        self.assertEqual(next_number(kind=DocumentSequence.KIND_QUOTE, day=october), "DEV-202610-0001")
        self.assertEqual(next_number(kind=DocumentSequence.KIND_INVOICE, day=october), "FACT-202610-0001")
        self.assertEqual(next_number(kind=DocumentSequence.KIND_ORDER, day=november), "CMD-202611-0001")
        self.assertEqual(next_number(kind=DocumentSequence.KIND_ORDER, day=october), "CMD-202610-0002")

    def test_failed_creation_leaves_no_gap(self):
        user = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        product = PbaProduct.objects.create(
            code="PBA-9AR", name="9AR", category=PbaProduct.Category.AR9, unit_price=Decimal("10.00")
        )
        active = Client.objects.create(name="Active Co")
        inactive = Client.objects.create(name="Gone Co", is_active=False)
        day = date(2026, 10, 19)

        first = create_order(
            actor=user,
            client_id=active.id,
            items=[{"product_id": product.id, "quantity": 1}],
            today=day,
        )

        with self.assertRaises(ClientInactive):
            create_order(
                actor=user,
                client_id=inactive.id,
                items=[{"product_id": product.id, "quantity": 1}],
                today=day,
            )

        second = create_order(
            actor=user,
            client_id=active.id,
            items=[{"product_id": product.id, "quantity": 2}],
            today=day,
        )

        self.assertEqual(first.number, "CMD-202610-0001")
        self.assertEqual(second.number, "CMD-202610-0002")

    def test_sequence_seeded_from_existing_numbers(self):
        client = Client.objects.create(name="Legacy Co")
        Order.objects.create(number="CMD-202610-0007", client=client, order_date=date(2026, 10, 3))

        self.assertEqual(
            next_number(kind=DocumentSequence.KIND_ORDER, day=date(2026, 10, 20)),
            "CMD-202610-0008",
        )

    def test_backdated_order_is_numbered_in_current_month(self):
        user = User.objects.create_user(email="clerk@example.com", password="pass", role="manager")
        product = PbaProduct.objects.create(
            code="PBA-10B", name="10B", category=PbaProduct.Category.B10, unit_price=Decimal("10.00")
        )
        client = Client.objects.create(name="Late Paperwork Co")

        order = create_order(
            actor=user,
            client_id=client.id,
            items=[{"product_id": product.id, "quantity": 1}],
            order_date=date(2024, 1, 15),
            today=date(2026, 10, 19),
        )

        self.assertEqual(order.number, "CMD-202610-0001")
        self.assertEqual(order.order_date, date(2024, 1, 15))
        self.assertFalse(
            DocumentSequence.objects.filter(kind=DocumentSequence.KIND_ORDER, period="202401").exists()
        )

    def test_order_number_defaults_to_local_date(self):
        user = User.objects.create_user(email="clerk@example.com", password="pass", role="manager")
        product = PbaProduct.objects.create(
            code="PBA-10B", name="10B", category=PbaProduct.Category.B10, unit_price=Decimal("10.00")
        )
        client = Client.objects.create(name="Walk-in Co")

        order = create_order(
            actor=user,
            client_id=client.id,
            items=[{"product_id": product.id, "quantity": 1}],
            order_date=date(2024, 1, 15),
        )

        self.assertEqual(order.number, f"CMD-{period_for(timezone.localdate())}-0001")
