# catalog/models/material.py

import uuid
from decimal import Decimal

from django.db import models


class Material(models.Model):
    """
    Raw material consumed by production (steel, cement, stirrups).

    Stock lives in inventory.RawMaterialStock and is floored at zero.
    """

    class Category(models.TextChoices):
        STEEL = "fer", "Steel"
        CEMENT = "ciment", "Cement"
        STIRRUP = "etrier", "Stirrup"

    class Unit(models.TextChoices):
        KG = "kg", "Kilogram"
        TONNE = "t", "Tonne"
        GRAM = "g", "Gram"
        BAG = "sac", "Bag"
        BAR = "barre", "Bar"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=50, unique=True, db_index=True)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=16, choices=Category.choices)
    unit = models.CharField(max_length=8, choices=Unit.choices, default=Unit.KG)
    description = models.TextField(blank=True)

    unit_price = models.DecimalField(
        max_digits=12, decimal_places=2, default=Decimal("0.00")
    )

    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} - {self.name}"
