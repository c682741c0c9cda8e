# catalog/tests/test_api.py

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

from catalog.models import Client, PbaProduct

User = get_user_model()


class CatalogApiTests(TestCase):
    """
    GUARANTEES:
    - Every authenticated user can read the catalog
    - Writes need catalog.edit
    - Codes are normalized to upper case
    - DELETE deactivates instead of deleting
    """

    def setUp(self):
        self.client = APIClient()
        self.manager = User.objects.create_user(email="manager@example.com", password="pass", role="manager")
        self.clerk = User.objects.create_user(email="clerk@example.com", password="pass", role="user")

        self.product = PbaProduct.objects.create(
            code="PBA-9AR", name="9AR", category=PbaProduct.Category.AR9, unit_price=Decimal("45.00")
        )

    def test_any_user_can_read(self):
        self.client.force_authenticate(self.clerk)

        res = self.client.get("/api/catalog/products/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["count"], 1)

    def test_clerk_cannot_write(self):
        self.client.force_authenticate(self.clerk)

        res = self.client.post(
            "/api/catalog/clients/", {"name": "Someone"}, format="json"
        )

        self.assertEqual(res.status_code, 403)
        self.assertFalse(Client.objects.exists())

    def test_manager_creates_product_with_normalized_code(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/catalog/products/",
            {"code": " pba-12b ", "name": "12B", "category": "12B", "unit_price": "55.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["code"], "PBA-12B")

    def test_negative_price_rejected(self):
        self.client.force_authenticate(self.manager)

        res = self.client.post(
            "/api/catalog/products/",
            {"code": "PBA-X", "name": "X", "category": "9AR", "unit_price": "-1.00"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)

    def test_delete_deactivates(self):
        self.client.force_authenticate(self.manager)

        res = self.client.delete(f"/api/catalog/products/{self.product.id}/")

        self.assertEqual(res.status_code, 204)
        self.product.refresh_from_db()
        self.assertFalse(self.product.is_active)
