# catalog/management/commands/seed_catalog.py

from __future__ import annotations

from decimal import Decimal

from django.core.management import call_command
from django.core.management.base import BaseCommand
from django.db import transaction

from catalog.models import Armature, Client, Material, PbaProduct

SEED_PRODUCTS = [
    ("PBA-9AR", "Poutrelle 9AR", PbaProduct.Category.AR9, "45.00"),
    ("PBA-12AR", "Poutrelle 12AR", PbaProduct.Category.AR12, "60.00"),
    ("PBA-12B", "Poutrelle 12B", PbaProduct.Category.B12, "55.00"),
    ("PBA-10B", "Poutrelle 10B", PbaProduct.Category.B10, "50.00"),
]

SEED_MATERIALS = [
    ("FER-8", "Steel bar 8mm", Material.Category.STEEL, Material.Unit.BAR, "85.00"),
    ("FER-10", "Steel bar 10mm", Material.Category.STEEL, Material.Unit.BAR, "120.00"),
    ("CIM-CPJ45", "Cement CPJ45", Material.Category.CEMENT, Material.Unit.BAG, "75.00"),
    ("ETR-6", "Stirrup 6mm", Material.Category.STIRRUP, Material.Unit.KG, "14.00"),
]

# (code, name, product code it goes into)
SEED_ARMATURES = [
    ("ARM-9AR", "Cage for 9AR", "PBA-9AR"),
    ("ARM-12AR", "Cage for 12AR", "PBA-12AR"),
]


class Command(BaseCommand):
    help = "Seed a demo catalog (products, materials, armatures, one client) and one user per role (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--skip-users",
            action="store_true",
            help="Only seed the catalog.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        created = 0

        products = {}
        for code, name, category, price in SEED_PRODUCTS:
            product, was_created = PbaProduct.objects.get_or_create(
                code=code,
                defaults={"name": name, "category": category, "unit_price": Decimal(price)},
            )
            products[code] = product
            created += int(was_created)

        for code, name, category, unit, price in SEED_MATERIALS:
            _, was_created = Material.objects.get_or_create(
                code=code,
                defaults={
                    "name": name,
                    "category": category,
                    "unit": unit,
                    "unit_price": Decimal(price),
                },
            )
            created += int(was_created)

        for code, name, product_code in SEED_ARMATURES:
            _, was_created = Armature.objects.get_or_create(
                code=code,
                defaults={"name": name, "pba_product": products.get(product_code)},
            )
            created += int(was_created)

        _, was_created = Client.objects.get_or_create(
            name="Demo Construction",
            defaults={"contact_person": "Site Office", "city": "Casablanca"},
        )
        created += int(was_created)

        self.stdout.write(f"Catalog rows created: {created}")

        if not options.get("skip_users"):
            call_command("seed_users", stdout=self.stdout)
