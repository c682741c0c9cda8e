# inventory/models/stock.py

"""
STOCK LEDGER ROWS (materialized cache of the movement log)

One row per stock item, per item class:
- FinishedProductStock   (PBA products)   integer counts, no floor
- RawMaterialStock       (materials)      decimal quantities, floored at zero
- SubAssemblyStock       (armatures)      integer counts, no floor

GUARANTEES:
- Rows are written ONLY by inventory.services.ledger.apply_movement
- current_stock == sum(StockMovement.applied_quantity) for the item
- Rows are never deleted (PROTECT on the catalog item)
"""

import uuid
from decimal import Decimal

from django.db import models

from catalog.models import Armature, Material, PbaProduct


class FinishedProductStock(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    product = models.OneToOneField(
        PbaProduct, on_delete=models.PROTECT, related_name="stock"
    )

    initial_stock = models.IntegerField(default=0)
    current_stock = models.IntegerField(default=0)
    total_produced = models.PositiveIntegerField(default=0)
    total_delivered = models.PositiveIntegerField(default=0)

    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["product__code"]

    def __str__(self):
        return f"{self.product.code}: {self.current_stock}"


class RawMaterialStock(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    material = models.OneToOneField(
        Material, on_delete=models.PROTECT, related_name="stock"
    )

    current_stock = models.DecimalField(
        max_digits=14, decimal_places=3, default=Decimal("0.000")
    )
    total_used = models.DecimalField(
        max_digits=14, decimal_places=3, default=Decimal("0.000")
    )
    unit = models.CharField(max_length=8, choices=Material.Unit.choices)

    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["material__code"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(current_stock__gte=0),
                name="raw_material_stock_non_negative",
            ),
        ]

    def __str__(self):
        return f"{self.material.code}: {self.current_stock}{self.unit}"


class SubAssemblyStock(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    armature = models.OneToOneField(
        Armature, on_delete=models.PROTECT, related_name="stock"
    )

    current_stock = models.IntegerField(default=0)
    total_entries = models.PositiveIntegerField(default=0)

    last_updated = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["armature__code"]

    def __str__(self):
        return f"{self.armature.code}: {self.current_stock}"
