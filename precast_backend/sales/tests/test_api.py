# sales/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Client, PbaProduct
from sales.models import Invoice, Order

User = get_user_model()


class OrderApiTests(TestCase):
    """
    Endpoint tests for /api/sales/.

    GUARANTEES:
    - The whole pipeline can be driven over HTTP
    - Workflow errors map to 404 / 409 / 400 with a stable code
    - orders.manage is required; cancel/ additionally needs orders.cancel
    """

    def setUp(self):
        self.client = APIClient()

        self.admin = User.objects.create_user(
            email="admin@example.com", password="pass", role="admin"
        )
        self.manager = User.objects.create_user(
            email="manager@example.com", password="pass", role="manager"
        )
        self.foreman = User.objects.create_user(
            email="foreman@example.com", password="pass", role="production"
        )

        self.client_row = Client.objects.create(name="Demo Construction")
        self.product = PbaProduct.objects.create(
            code="PBA-12AR",
            name="Poutrelle 12AR",
            category=PbaProduct.Category.AR12,
            unit_price=Decimal("50.00"),
        )

    def _create_order(self):
        return self.client.post(
            "/api/sales/orders/",
            {
                "client_id": str(self.client_row.id),
                "items": [{"product_id": str(self.product.id), "quantity": 20}],
            },
            format="json",
        )

    def test_full_pipeline(self):
        self.client.force_authenticate(self.manager)

        res = self._create_order()
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["status"], "draft")
        self.assertEqual(res.data["total_amount"], "1000.00")
        order_id = res.data["id"]
        base = f"/api/sales/orders/{order_id}"

        res = self.client.post(f"{base}/confirm/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "confirmed")

        res = self.client.post(f"{base}/quote/", {"validity_days": 10}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertTrue(res.data["number"].startswith("DEV-"))

        res = self.client.post(f"{base}/quote/accept/")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "accepted")

        res = self.client.post(f"{base}/invoice/", {"due_days": 15}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertTrue(res.data["number"].startswith("FACT-"))

        res = self.client.post(f"{base}/payment/", {"amount": "400.00", "method": "cash"}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["invoice_status"], "sent")
        self.assertEqual(res.data["remaining_amount"], "600.00")

        res = self.client.post(f"{base}/payment/", {"amount": "600.00", "method": "check"}, format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["invoice_status"], "paid")
        self.assertEqual(res.data["order_status"], "delivered")
        self.assertEqual(res.data["delivery_movements"], 1)

        res = self.client.get(f"{base}/")
        self.assertEqual(res.data["status"], "delivered")
        self.assertEqual(res.data["invoice"]["paid_amount"], "1000.00")
        self.assertEqual(len(res.data["invoice"]["payments"]), 2)

    def test_error_mapping(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post("/api/sales/orders/00000000-0000-0000-0000-000000000000/confirm/")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["code"], "OrderNotFound")

        order_id = self._create_order().data["id"]

        res = self.client.post(f"/api/sales/orders/{order_id}/quote/", {}, format="json")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["code"], "NotConfirmed")

        self.client.post(f"/api/sales/orders/{order_id}/confirm/")
        res = self.client.post(f"/api/sales/orders/{order_id}/confirm/")
        self.assertEqual(res.status_code, 409)
        self.assertEqual(res.data["code"], "NotDraft")

        res = self.client.post(f"/api/sales/orders/{order_id}/payment/", {"amount": "5"}, format="json")
        self.assertEqual(res.status_code, 404)
        self.assertEqual(res.data["code"], "NoInvoice")

    def test_payment_above_remaining_is_400(self):
        self.client.force_authenticate(self.manager)
        order_id = self._create_order().data["id"]
        base = f"/api/sales/orders/{order_id}"
        self.client.post(f"{base}/confirm/")
        self.client.post(f"{base}/quote/", {}, format="json")
        self.client.post(f"{base}/quote/accept/")
        self.client.post(f"{base}/invoice/", {}, format="json")

        res = self.client.post(f"{base}/payment/", {"amount": "1000.01"}, format="json")

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "AmountExceedsRemaining")
        self.assertEqual(Invoice.objects.get().paid_amount, Decimal("0.00"))

    def test_empty_order_is_400(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/sales/orders/",
            {"client_id": str(self.client_row.id), "items": []},
            format="json",
        )

        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "EmptyOrder")

    def test_permissions(self):
        self.client.force_authenticate(self.foreman)
        self.assertEqual(self.client.get("/api/sales/orders/").status_code, 403)

        self.client.force_authenticate(self.manager)
        order_id = self._create_order().data["id"]

        res = self.client.post(f"/api/sales/orders/{order_id}/cancel/", {}, format="json")
        self.assertEqual(res.status_code, 403)

        self.client.force_authenticate(self.admin)
        res = self.client.post(f"/api/sales/orders/{order_id}/cancel/", {"reason": "dup"}, format="json")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["status"], "cancelled")

    def test_discard_draft(self):
        self.client.force_authenticate(self.manager)
        order_id = self._create_order().data["id"]

        res = self.client.delete(f"/api/sales/orders/{order_id}/")

        self.assertEqual(res.status_code, 204)
        self.assertFalse(Order.objects.exists())
