# catalog/tests/test_seed_catalog.py

from io import StringIO

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

from catalog.models import Armature, Client, Material, PbaProduct

User = get_user_model()


class SeedCatalogCommandTests(TestCase):
    """
    GUARANTEES:
    - seed_catalog creates the demo catalog and one user per role
    - running it twice creates nothing new
    """

    def test_idempotent_seed(self):
        call_command("seed_catalog", stdout=StringIO())
        counts = (
            PbaProduct.objects.count(),
            Material.objects.count(),
            Armature.objects.count(),
            Client.objects.count(),
            User.objects.count(),
        )

        out = StringIO()
        call_command("seed_catalog", stdout=out)

        self.assertEqual(counts, (4, 4, 2, 1, 4))
        self.assertEqual(
            counts,
            (
                PbaProduct.objects.count(),
                Material.objects.count(),
                Armature.objects.count(),
                Client.objects.count(),
                User.objects.count(),
            ),
        )
        self.assertIn("Catalog rows created: 0", out.getvalue())
        self.assertEqual(
            set(User.objects.values_list("role", flat=True)),
            {"admin", "manager", "production", "user"},
        )

    def test_skip_users(self):
        call_command("seed_catalog", "--skip-users", stdout=StringIO())
        self.assertFalse(User.objects.exists())
