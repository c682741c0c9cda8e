# inventory/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Armature, Material, PbaProduct
from inventory.models import FinishedProductStock, StockMovement
from inventory.services.ledger import apply_movement, open_stock

User = get_user_model()


class InventoryApiTests(TestCase):
    """
    Endpoint tests for /api/inventory/.

    GUARANTEES:
    - Ledger reads need inventory.view (or inventory.adjust)
    - Manual writes need inventory.adjust
    - Workflow errors come back with kind + code
    - Movement list filters narrow the audit log
    - Deliveries refuse more than the stock on hand
    - The summary is readable with inventory.view
    """

    def setUp(self):
        self.client = APIClient()

        self.manager = User.objects.create_user(
            email="manager@example.com", password="pass", role="manager"
        )
        self.foreman = User.objects.create_user(
            email="foreman@example.com", password="pass", role="production"
        )
        self.clerk = User.objects.create_user(
            email="clerk@example.com", password="pass", role="user"
        )

        self.product = PbaProduct.objects.create(
            code="PBA-12B", name="Poutrelle 12B", category=PbaProduct.Category.B12
        )
        self.material = Material.objects.create(
            code="CIM-42",
            name="Cement",
            category=Material.Category.CEMENT,
            unit=Material.Unit.BAG,
        )
        self.armature = Armature.objects.create(code="ARM-12B", name="Cage 12B")

    # --------------------------------------------------
    # READS
    # --------------------------------------------------

    def test_anonymous_is_rejected(self):
        res = self.client.get("/api/inventory/finished/")
        self.assertEqual(res.status_code, 401)

    def test_clerk_cannot_read_ledgers(self):
        self.client.force_authenticate(self.clerk)
        res = self.client.get("/api/inventory/finished/")
        self.assertEqual(res.status_code, 403)

    def test_foreman_can_read_ledgers_but_not_adjust(self):
        open_stock(item=self.product, quantity=3)
        self.client.force_authenticate(self.foreman)

        res = self.client.get("/api/inventory/finished/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

        res = self.client.post(
            "/api/inventory/adjustments/",
            {
                "item_class": "finished_product",
                "item_id": str(self.product.id),
                "mode": "add",
                "quantity": "1",
            },
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_movement_filters(self):
        open_stock(item=self.material, quantity=5)
        apply_movement(
            item=self.material,
            kind=StockMovement.Kind.USAGE,
            quantity=-8,
            reference_kind=StockMovement.ReferenceKind.MANUAL,
        )
        open_stock(item=self.product, quantity=2)

        self.client.force_authenticate(self.manager)

        res = self.client.get("/api/inventory/movements/", {"item_class": "raw_material"})
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 2)

        res = self.client.get("/api/inventory/movements/", {"clamped": "true"})
        self.assertEqual(res.data["count"], 1)
        self.assertTrue(res.data["results"][0]["clamped"])

        res = self.client.get("/api/inventory/movements/", {"product": str(self.product.id)})
        self.assertEqual(res.data["count"], 1)
        self.assertEqual(res.data["results"][0]["item_code"], "PBA-12B")

    # --------------------------------------------------
    # WRITES
    # --------------------------------------------------

    def test_adjustment_endpoint(self):
        open_stock(item=self.product, quantity=10)
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/adjustments/",
            {
                "item_class": "finished_product",
                "item_id": str(self.product.id),
                "mode": "set",
                "quantity": "7",
                "notes": "cycle count",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["stock_after"], "7")
        self.assertEqual(FinishedProductStock.objects.get(product=self.product).current_stock, 7)

    def test_noop_adjustment_returns_business_rule_error(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/adjustments/",
            {
                "item_class": "raw_material",
                "item_id": str(self.material.id),
                "mode": "remove",
                "quantity": "3",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "InvalidAdjustment")
        self.assertEqual(res.data["kind"], "BusinessRuleViolation")

    def test_inactive_item_returns_422(self):
        self.product.is_active = False
        self.product.save()
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/opening/",
            {
                "item_class": "finished_product",
                "item_id": str(self.product.id),
                "quantity": "4",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 422)
        self.assertEqual(res.data["code"], "ItemInactive")

    def test_sub_assembly_entry_endpoint(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/sub-assemblies/entries/",
            {"armature_id": str(self.armature.id), "quantity": 4},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(Decimal(res.data["quantity"]), Decimal("4"))
        self.assertEqual(res.data["kind"], "production")

    def test_delivery_endpoint(self):
        open_stock(item=self.product, quantity=5)
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/deliveries/",
            {"product_id": str(self.product.id), "quantity": 3},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["kind"], "delivery")
        self.assertEqual(res.data["reference_kind"], "manual")
        self.assertEqual(res.data["remaining_stock"], 2)

        res = self.client.post(
            "/api/inventory/deliveries/",
            {"product_id": str(self.product.id), "quantity": 3},
            format="json",
        )
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "InsufficientStock")

    def test_delivery_unknown_order_is_404(self):
        open_stock(item=self.product, quantity=5)
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/inventory/deliveries/",
            {
                "product_id": str(self.product.id),
                "quantity": 1,
                "order_id": "00000000-0000-0000-0000-000000000000",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["code"], "OrderNotFound")

    def test_foreman_cannot_record_delivery(self):
        self.client.force_authenticate(self.foreman)

        res = self.client.post(
            "/api/inventory/deliveries/",
            {"product_id": str(self.product.id), "quantity": 1},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_summary_endpoint(self):
        open_stock(item=self.product, quantity=4)
        self.client.force_authenticate(self.foreman)

        res = self.client.get("/api/inventory/summary/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["low_stock_threshold"], 10)
        self.assertEqual(res.data["finished"]["total_products"], 1)
        self.assertEqual(res.data["finished"]["total_stock"], 4)
        self.assertEqual(res.data["low_stock_products"][0]["code"], "PBA-12B")
        self.assertNotIn("total_produced", res.data["low_stock_products"][0])
        self.assertEqual(res.data["top_products"][0]["total_produced"], 0)
