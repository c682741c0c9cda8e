"""
PATH: production/migrations/0001_initial.py

MIGRATION: CREATE DailyReport + its four line collections
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="DailyReport",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("report_date", models.DateField()),
                ("first_name", models.CharField(blank=True, max_length=100)),
                ("last_name", models.CharField(blank=True, max_length=100)),
                (
                    "status",
                    models.CharField(
                        choices=[("draft", "Draft"), ("submitted", "Submitted")],
                        default="draft",
                        max_length=16,
                    ),
                ),
                ("observations", models.TextField(blank=True, default="")),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "submitted_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="submitted_daily_reports",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Author of the report",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="daily_reports",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-report_date", "-created_at"],
                "indexes": [
                    models.Index(fields=["report_date"], name="prod_report_date_idx"),
                    models.Index(fields=["status"], name="prod_report_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "report_date"),
                        name="uniq_daily_report_per_user_day",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PbaProductionLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("quantity", models.PositiveIntegerField()),
                (
                    "product",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="report_lines",
                        to="catalog.pbaproduct",
                    ),
                ),
                (
                    "report",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pba_lines",
                        to="production.dailyreport",
                    ),
                ),
            ],
            options={
                "ordering": ["product__code"],
            },
        ),
        migrations.CreateModel(
            name="MaterialUsageLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("quantity", models.DecimalField(decimal_places=3, default=Decimal("0.000"), max_digits=12)),
                (
                    "unit",
                    models.CharField(
                        choices=[
                            ("kg", "Kilogram"),
                            ("t", "Tonne"),
                            ("g", "Gram"),
                            ("sac", "Bag"),
                            ("barre", "Bar"),
                        ],
                        max_length=8,
                    ),
                ),
                ("additional_info", models.CharField(blank=True, default="", max_length=255)),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="report_lines",
                        to="catalog.material",
                    ),
                ),
                (
                    "report",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="material_lines",
                        to="production.dailyreport",
                    ),
                ),
            ],
            options={
                "ordering": ["material__code"],
            },
        ),
        migrations.CreateModel(
            name="ArmatureProductionLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("quantity", models.PositiveIntegerField()),
                (
                    "armature",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="report_lines",
                        to="catalog.armature",
                    ),
                ),
                (
                    "report",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="armature_lines",
                        to="production.dailyreport",
                    ),
                ),
            ],
            options={
                "ordering": ["armature__code"],
            },
        ),
        migrations.CreateModel(
            name="PersonnelLine",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "position",
                    models.CharField(
                        choices=[
                            ("production", "Production worker"),
                            ("soudeur", "Welder"),
                            ("ferrailleur", "Steel fixer"),
                            ("ouvrier", "Worker"),
                            ("macon", "Mason"),
                            ("manoeuvre", "Labourer"),
                        ],
                        max_length=16,
                    ),
                ),
                ("quantity", models.PositiveIntegerField()),
                (
                    "report",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="personnel_lines",
                        to="production.dailyreport",
                    ),
                ),
            ],
            options={
                "ordering": ["position"],
            },
        ),
    ]
