# catalog/models/pba_product.py

import uuid
from decimal import Decimal

from django.db import models


class PbaProduct(models.Model):
    """
    Finished precast product (PBA line).

    STOCK MODEL (IMPORTANT):
    - PbaProduct itself does NOT store stock
    - Stock lives in inventory.FinishedProductStock (one row, created lazily)
    - Rows are deactivated, never deleted, once referenced by movements
    """

    class Category(models.TextChoices):
        AR9 = "9AR", "9AR"
        AR12 = "12AR", "12AR"
        B12 = "12B", "12B"
        B10 = "10B", "10B"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=50, unique=True, db_index=True)
    name = models.CharField(max_length=255)
    category = models.CharField(max_length=8, choices=Category.choices)
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
