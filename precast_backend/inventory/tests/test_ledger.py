# inventory/tests/test_ledger.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.test import TestCase

from catalog.models import Armature, Material, PbaProduct
from core.exceptions import (
    InvalidQuantity,
    ItemInactive,
    UnsupportedMovement,
)
from inventory.models import (
    FinishedProductStock,
    RawMaterialStock,
    StockMovement,
    SubAssemblyStock,
)
from inventory.services.ledger import apply_movement, open_stock
from inventory.services.reconciliation import reconcile_all, reconcile_item

User = get_user_model()

Kind = StockMovement.Kind
ReferenceKind = StockMovement.ReferenceKind


class StockLedgerTests(TestCase):
    """
    Tests for the ledger primitive.

    GUARANTEES:
    - Every ledger mutation appends exactly one movement
    - Raw materials never go below zero (the movement keeps the request)
    - Finished products have no floor
    - Movement signs are checked against their kind
    - Inactive items reject new movements
    """

    def setUp(self):
        self.user = User.objects.create_user(
            email="foreman@example.com",
            password="pass",
            role="production",
        )

        self.product = PbaProduct.objects.create(
            code="PBA-12AR",
            name="Poutrelle 12AR",
            category=PbaProduct.Category.AR12,
            unit_price=Decimal("60.00"),
        )
        self.material = Material.objects.create(
            code="CIM-42",
            name="Cement",
            category=Material.Category.CEMENT,
            unit=Material.Unit.BAG,
        )
        self.armature = Armature.objects.create(
            code="ARM-12",
            name="Cage 12",
            pba_product=self.product,
        )

    # ======================================================
    # FINISHED PRODUCTS
    # ======================================================

    def test_production_creates_ledger_row_and_movement(self):
        result = apply_movement(
            item=self.product,
            kind=Kind.PRODUCTION,
            quantity=40,
            reference_kind=ReferenceKind.MANUAL,
            actor=self.user,
        )

        stock = FinishedProductStock.objects.get(product=self.product)
        self.assertEqual(stock.current_stock, 40)
        self.assertEqual(stock.total_produced, 40)
        self.assertEqual(StockMovement.objects.filter(product=self.product).count(), 1)
        self.assertFalse(result.clamped)
        self.assertEqual(result.movement.applied_quantity, Decimal("40"))

    def test_opening_stock_counts_as_initial(self):
        open_stock(item=self.product, quantity=15, actor=self.user)

        stock = FinishedProductStock.objects.get(product=self.product)
        self.assertEqual(stock.initial_stock, 15)
        self.assertEqual(stock.current_stock, 15)

        movement = StockMovement.objects.get(product=self.product)
        self.assertEqual(movement.kind, Kind.INITIAL)
        self.assertEqual(movement.reference_kind, ReferenceKind.MANUAL)

    def test_finished_product_delivery_may_go_negative(self):
        apply_movement(
            item=self.product,
            kind=Kind.DELIVERY,
            quantity=-5,
            reference_kind=ReferenceKind.ORDER,
        )

        stock = FinishedProductStock.objects.get(product=self.product)
        self.assertEqual(stock.current_stock, -5)
        self.assertEqual(stock.total_delivered, 5)

    def test_fractional_quantity_rejected_for_finished_product(self):
        with self.assertRaises(InvalidQuantity):
            apply_movement(
                item=self.product,
                kind=Kind.PRODUCTION,
                quantity=Decimal("1.5"),
                reference_kind=ReferenceKind.MANUAL,
            )
        self.assertFalse(StockMovement.objects.exists())

    def test_sign_must_match_kind(self):
        with self.assertRaises(InvalidQuantity):
            apply_movement(
                item=self.product,
                kind=Kind.DELIVERY,
                quantity=3,
                reference_kind=ReferenceKind.ORDER,
            )

        with self.assertRaises(InvalidQuantity):
            apply_movement(
                item=self.product,
                kind=Kind.PRODUCTION,
                quantity=-3,
                reference_kind=ReferenceKind.MANUAL,
            )

    def test_usage_not_allowed_on_finished_product(self):
        with self.assertRaises(UnsupportedMovement):
            apply_movement(
                item=self.product,
                kind=Kind.USAGE,
                quantity=-1,
                reference_kind=ReferenceKind.MANUAL,
            )

    def test_inactive_item_rejects_movements(self):
        self.product.is_active = False
        self.product.save()

        with self.assertRaises(ItemInactive):
            apply_movement(
                item=self.product,
                kind=Kind.PRODUCTION,
                quantity=1,
                reference_kind=ReferenceKind.MANUAL,
            )
        self.assertFalse(StockMovement.objects.exists())

    # ======================================================
    # RAW MATERIALS (FLOOR AT ZERO)
    # ======================================================

    def test_raw_material_usage_is_floored_at_zero(self):
        open_stock(item=self.material, quantity=10)

        result = apply_movement(
            item=self.material,
            kind=Kind.USAGE,
            quantity=-30,
            reference_kind=ReferenceKind.MANUAL,
        )

        stock = RawMaterialStock.objects.get(material=self.material)
        self.assertEqual(stock.current_stock, Decimal("0"))
        self.assertEqual(stock.total_used, Decimal("30"))

        self.assertTrue(result.clamped)
        self.assertEqual(result.movement.quantity, Decimal("-30"))
        self.assertEqual(result.movement.applied_quantity, Decimal("-10"))
        self.assertIn("floored at zero", result.movement.notes)

    def test_raw_material_keeps_fractional_quantities(self):
        open_stock(item=self.material, quantity="12.5")
        apply_movement(
            item=self.material,
            kind=Kind.USAGE,
            quantity="-2.25",
            reference_kind=ReferenceKind.MANUAL,
        )

        stock = RawMaterialStock.objects.get(material=self.material)
        self.assertEqual(stock.current_stock, Decimal("10.25"))
        self.assertEqual(stock.unit, Material.Unit.BAG)

    # ======================================================
    # SUB-ASSEMBLIES
    # ======================================================

    def test_sub_assembly_production_counts_entries(self):
        apply_movement(
            item=self.armature,
            kind=Kind.PRODUCTION,
            quantity=8,
            reference_kind=ReferenceKind.MANUAL,
        )

        stock = SubAssemblyStock.objects.get(armature=self.armature)
        self.assertEqual(stock.current_stock, 8)
        self.assertEqual(stock.total_entries, 8)

    # ======================================================
    # IMMUTABILITY
    # ======================================================

    def test_movements_are_immutable(self):
        result = apply_movement(
            item=self.product,
            kind=Kind.PRODUCTION,
            quantity=2,
            reference_kind=ReferenceKind.MANUAL,
        )
        movement = result.movement

        movement.notes = "edited"
        with self.assertRaises(ValidationError):
            movement.save()

        with self.assertRaises(ValidationError):
            movement.delete()


class LedgerReconstructionTests(TestCase):
    """
    GUARANTEES:
    - For every item, current_stock equals the sum of applied movement
      quantities, including after clamped raw-material usage
    """

    def setUp(self):
        self.product = PbaProduct.objects.create(
            code="PBA-9AR",
            name="Poutrelle 9AR",
            category=PbaProduct.Category.AR9,
        )
        self.material = Material.objects.create(
            code="FER-10",
            name="Steel bar 10",
            category=Material.Category.STEEL,
            unit=Material.Unit.KG,
        )

    def test_replay_matches_ledger_after_mixed_movements(self):
        open_stock(item=self.product, quantity=5)
        apply_movement(item=self.product, kind=Kind.PRODUCTION, quantity=20, reference_kind=ReferenceKind.REPORT)
        apply_movement(item=self.product, kind=Kind.DELIVERY, quantity=-12, reference_kind=ReferenceKind.ORDER)
        apply_movement(item=self.product, kind=Kind.ADJUSTMENT, quantity=-1, reference_kind=ReferenceKind.MANUAL)

        open_stock(item=self.material, quantity="100.5")
        apply_movement(item=self.material, kind=Kind.USAGE, quantity=-40, reference_kind=ReferenceKind.REPORT)
        apply_movement(item=self.material, kind=Kind.USAGE, quantity=-500, reference_kind=ReferenceKind.REPORT)

        product_line = reconcile_item(self.product)
        self.assertTrue(product_line.matches)
        self.assertEqual(product_line.ledger_stock, Decimal("12"))

        material_line = reconcile_item(self.material)
        self.assertTrue(material_line.matches)
        self.assertEqual(material_line.ledger_stock, Decimal("0"))

        self.assertTrue(all(line.matches for line in reconcile_all()))

    def test_item_without_movements_reconciles_to_zero(self):
        line = reconcile_item(self.product)
        self.assertTrue(line.matches)
        self.assertEqual(line.replayed_stock, Decimal("0"))
