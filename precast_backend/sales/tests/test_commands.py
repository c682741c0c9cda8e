# sales/tests/test_commands.py

from datetime import date, timedelta
from decimal import Decimal
from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from catalog.models import Client, PbaProduct
from sales.models import Invoice, Quote
from sales.services.order_service import (
    accept_quote,
    confirm_order,
    create_invoice,
    create_order,
    create_quote,
)

User = get_user_model()

DAY = date(2026, 10, 1)


class ExpireDocumentsCommandTests(TestCase):
    """
    GUARANTEES:
    - expire_documents expires stale quotes and marks overdue invoices
    - a malformed --date fails loudly
    """

    def setUp(self):
        self.user = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        client = Client.objects.create(name="Demo Construction")
        product = PbaProduct.objects.create(
            code="PBA-10B", name="10B", category=PbaProduct.Category.B10, unit_price=Decimal("10.00")
        )

        def _order():
            order = create_order(
                actor=self.user,
                client_id=client.id,
                items=[{"product_id": product.id, "quantity": 1}],
                today=DAY,
            )
            confirm_order(order_id=order.id, actor=self.user)
            create_quote(order_id=order.id, actor=self.user, validity_days=5, today=DAY)
            return order

        self.quoted = _order()
        self.invoiced = _order()
        accept_quote(order_id=self.invoiced.id, actor=self.user, today=DAY)
        create_invoice(order_id=self.invoiced.id, actor=self.user, due_days=10, today=DAY)

    def test_expire_documents(self):
        out = StringIO()

        call_command("expire_documents", "--date", str(DAY + timedelta(days=20)), stdout=out)

        self.assertEqual(self.quoted.quotes.get().status, Quote.STATUS_EXPIRED)
        self.assertEqual(Invoice.objects.get(order=self.invoiced).status, Invoice.STATUS_OVERDUE)
        self.assertIn("Quotes expired: 1", out.getvalue())
        self.assertIn("Invoices marked overdue: 1", out.getvalue())

    def test_bad_date(self):
        with self.assertRaises(CommandError):
            call_command("expire_documents", "--date", "19/10/2026", stdout=StringIO())
