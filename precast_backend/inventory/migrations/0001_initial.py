"""
PATH: inventory/migrations/0001_initial.py

MIGRATION: CREATE stock ledger rows + immutable StockMovement
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


UNIT_CHOICES = [
    ("kg", "Kilogram"),
    ("t", "Tonne"),
    ("g", "Gram"),
    ("sac", "Bag"),
    ("barre", "Bar"),
]


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="FinishedProductStock",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("initial_stock", models.IntegerField(default=0)),
                ("current_stock", models.IntegerField(default=0)),
                ("total_produced", models.PositiveIntegerField(default=0)),
                ("total_delivered", models.PositiveIntegerField(default=0)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                (
                    "product",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock",
                        to="catalog.pbaproduct",
                    ),
                ),
            ],
            options={
                "ordering": ["product__code"],
            },
        ),
        migrations.CreateModel(
            name="RawMaterialStock",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("current_stock", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=14)),
                ("total_used", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=14)),
                ("unit", models.CharField(choices=UNIT_CHOICES, max_length=8)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                (
                    "material",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock",
                        to="catalog.material",
                    ),
                ),
            ],
            options={
                "ordering": ["material__code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(current_stock__gte=0),
                        name="raw_material_stock_non_negative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="SubAssemblyStock",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("current_stock", models.IntegerField(default=0)),
                ("total_entries", models.PositiveIntegerField(default=0)),
                ("last_updated", models.DateTimeField(auto_now=True)),
                (
                    "armature",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock",
                        to="catalog.armature",
                    ),
                ),
            ],
            options={
                "ordering": ["armature__code"],
            },
        ),
        migrations.CreateModel(
            name="StockMovement",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "item_class",
                    models.CharField(
                        choices=[
                            ("finished_product", "Finished product"),
                            ("raw_material", "Raw material"),
                            ("sub_assembly", "Sub-assembly"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("initial", "Opening stock"),
                            ("production", "Production"),
                            ("delivery", "Delivery"),
                            ("usage", "Usage"),
                            ("adjustment", "Manual adjustment"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=14)),
                ("applied_quantity", models.DecimalField(decimal_places=3, max_digits=14)),
                (
                    "reference_kind",
                    models.CharField(
                        choices=[
                            ("report", "Daily report"),
                            ("order", "Order"),
                            ("manual", "Manual"),
                        ],
                        max_length=16,
                    ),
                ),
                ("reference_id", models.CharField(blank=True, default="", max_length=64)),
                ("notes", models.TextField(blank=True, default="")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "actor",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="stock_movements",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "armature",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movements",
                        to="catalog.armature",
                    ),
                ),
                (
                    "material",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movements",
                        to="catalog.material",
                    ),
                ),
                (
                    "product",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="stock_movements",
                        to="catalog.pbaproduct",
                    ),
                ),
            ],
            options={
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["created_at"], name="inv_move_created_idx"),
                    models.Index(fields=["kind"], name="inv_move_kind_idx"),
                    models.Index(fields=["reference_kind", "reference_id"], name="inv_move_ref_idx"),
                    models.Index(fields=["product", "created_at"], name="inv_move_product_idx"),
                    models.Index(fields=["material", "created_at"], name="inv_move_material_idx"),
                    models.Index(fields=["armature", "created_at"], name="inv_move_armature_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=(
                            models.Q(
                                item_class="finished_product",
                                product__isnull=False,
                                material__isnull=True,
                                armature__isnull=True,
                            )
                            | models.Q(
                                item_class="raw_material",
                                product__isnull=True,
                                material__isnull=False,
                                armature__isnull=True,
                            )
                            | models.Q(
                                item_class="sub_assembly",
                                product__isnull=True,
                                material__isnull=True,
                                armature__isnull=False,
                            )
                        ),
                        name="stock_movement_single_item",
                    ),
                ],
            },
        ),
    ]
