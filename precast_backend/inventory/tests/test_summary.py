# inventory/tests/test_summary.py

from decimal import Decimal

from django.test import TestCase, override_settings

from catalog.models import Armature, Material, PbaProduct
from inventory.models import StockMovement
from inventory.services.adjustments import record_sub_assembly_entry
from inventory.services.ledger import apply_movement, open_stock
from inventory.services.summary import stock_summary


def _produce(product, quantity):
    apply_movement(
        item=product,
        kind=StockMovement.Kind.PRODUCTION,
        quantity=quantity,
        reference_kind=StockMovement.ReferenceKind.MANUAL,
    )


class StockSummaryTests(TestCase):
    """
    Tests for the dashboard stock summary.

    GUARANTEES:
    - Totals only count active catalog items
    - Top producers are ordered by total produced, at most five
    - Low stock lists active products under the threshold, lowest first,
      including products that never had a movement
    - Materials are totalled per unit
    """

    def setUp(self):
        self.products = [
            PbaProduct.objects.create(code=f"PBA-{n}", name=f"Product {n}", category=PbaProduct.Category.B10)
            for n in range(1, 8)
        ]
        for index, product in enumerate(self.products[:6], start=1):
            _produce(product, index * 5)

        self.retired = PbaProduct.objects.create(
            code="PBA-OLD", name="Retired", category=PbaProduct.Category.AR9, is_active=False
        )

        cage = Armature.objects.create(code="ARM-1", name="Cage")
        record_sub_assembly_entry(armature=cage, quantity=12)

        cement = Material.objects.create(
            code="CIM", name="Cement", category=Material.Category.CEMENT, unit=Material.Unit.BAG
        )
        steel = Material.objects.create(
            code="FER", name="Steel", category=Material.Category.STEEL, unit=Material.Unit.KG
        )
        open_stock(item=cement, quantity=40)
        open_stock(item=steel, quantity="125.5")

    def test_totals(self):
        summary = stock_summary(low_stock_threshold=10)

        self.assertEqual(summary.finished["total_products"], 7)
        self.assertEqual(summary.finished["total_stock"], 105)
        self.assertEqual(summary.finished["total_produced"], 105)
        self.assertEqual(summary.finished["total_delivered"], 0)

        self.assertEqual(summary.sub_assemblies["total_armatures"], 1)
        self.assertEqual(summary.sub_assemblies["total_stock"], 12)
        self.assertEqual(summary.sub_assemblies["total_entries"], 12)

        self.assertEqual(summary.materials["total_materials"], 2)
        self.assertEqual(summary.materials["by_unit"]["sac"], Decimal("40"))
        self.assertEqual(summary.materials["by_unit"]["kg"], Decimal("125.5"))

    def test_top_producers(self):
        top = stock_summary().top_products

        self.assertEqual([line["code"] for line in top], ["PBA-6", "PBA-5", "PBA-4", "PBA-3", "PBA-2"])
        self.assertEqual(top[0]["total_produced"], 30)

    def test_low_stock(self):
        summary = stock_summary(low_stock_threshold=10)

        # PBA-7 has no ledger row yet, PBA-1 holds 5, PBA-2 holds 10 (not below)
        self.assertEqual([line["code"] for line in summary.low_stock_products], ["PBA-7", "PBA-1"])
        self.assertEqual(summary.finished["low_stock_count"], 2)
        self.assertNotIn("PBA-OLD", [line["code"] for line in summary.low_stock_products])

    @override_settings(LOW_STOCK_THRESHOLD=16)
    def test_threshold_from_settings(self):
        summary = stock_summary()

        self.assertEqual(summary.low_stock_threshold, 16)
        self.assertEqual(
            [line["code"] for line in summary.low_stock_products],
            ["PBA-7", "PBA-1", "PBA-2", "PBA-3"],
        )
