# inventory/tests/test_deliveries.py

from datetime import date
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase

from catalog.models import Client, PbaProduct
from core.exceptions import InsufficientStock, InvalidQuantity, ItemInactive
from inventory.models import FinishedProductStock, StockMovement
from inventory.services.deliveries import record_delivery
from inventory.services.ledger import open_stock
from inventory.services.reconciliation import reconcile_all
from sales.models import Order

User = get_user_model()


class ManualDeliveryTests(TestCase):
    """
    Tests for hand-recorded finished-product dispatch.

    GUARANTEES:
    - Stock drops and total_delivered rises by the delivered quantity
    - A dispatch larger than the stock on hand is refused, nothing written
    - reference_kind is 'order' with an order, 'manual' without
    - Retired products can still be dispatched against an order, not by hand
    """

    def setUp(self):
        self.manager = User.objects.create_user(
            email="manager@example.com", password="pass", role="manager"
        )
        self.product = PbaProduct.objects.create(
            code="PBA-12AR", name="Poutrelle 12AR", category=PbaProduct.Category.AR12
        )
        open_stock(item=self.product, quantity=10)

    def _stock(self):
        return FinishedProductStock.objects.get(product=self.product)

    def test_manual_delivery(self):
        result = record_delivery(product=self.product, quantity=4, actor=self.manager, notes="Truck 2")

        stock = self._stock()
        self.assertEqual(stock.current_stock, 6)
        self.assertEqual(stock.total_delivered, 4)

        movement = result.movement
        self.assertEqual(movement.kind, StockMovement.Kind.DELIVERY)
        self.assertEqual(movement.quantity, Decimal("-4"))
        self.assertEqual(movement.reference_kind, StockMovement.ReferenceKind.MANUAL)
        self.assertEqual(movement.reference_id, "")
        self.assertEqual(movement.notes, "Manual delivery. Truck 2")
        self.assertTrue(all(line.matches for line in reconcile_all()))

    def test_delivery_against_order(self):
        order = Order.objects.create(
            number="CMD-202610-0001",
            client=Client.objects.create(name="Demo Construction"),
            order_date=date(2026, 10, 19),
        )

        result = record_delivery(product=self.product, quantity=10, actor=self.manager, order=order)

        self.assertEqual(self._stock().current_stock, 0)
        self.assertEqual(result.movement.reference_kind, StockMovement.ReferenceKind.ORDER)
        self.assertEqual(result.movement.reference_id, str(order.id))
        self.assertIn("CMD-202610-0001", result.movement.notes)

    def test_insufficient_stock(self):
        with self.assertRaises(InsufficientStock):
            record_delivery(product=self.product, quantity=11, actor=self.manager)

        stock = self._stock()
        self.assertEqual(stock.current_stock, 10)
        self.assertEqual(stock.total_delivered, 0)
        self.assertFalse(StockMovement.objects.filter(kind=StockMovement.Kind.DELIVERY).exists())

    def test_quantity_must_be_positive_whole_number(self):
        for bad in (0, -2, "1.5"):
            with self.assertRaises(InvalidQuantity):
                record_delivery(product=self.product, quantity=bad, actor=self.manager)

    def test_retired_product(self):
        self.product.is_active = False
        self.product.save(update_fields=["is_active"])

        with self.assertRaises(ItemInactive):
            record_delivery(product=self.product, quantity=1, actor=self.manager)

        order = Order.objects.create(
            number="CMD-202610-0002",
            client=Client.objects.create(name="Demo Construction"),
            order_date=date(2026, 10, 19),
        )
        record_delivery(product=self.product, quantity=1, actor=self.manager, order=order)
        self.assertEqual(self._stock().current_stock, 9)
