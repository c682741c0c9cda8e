# catalog/models/armature.py

import uuid
from decimal import Decimal

from django.db import models

from .pba_product import PbaProduct


class Armature(models.Model):
    """
    Fabricated reinforcement cage (sub-assembly), optionally tied to the
    PBA product it goes into.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=50, unique=True, db_index=True)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)

    pba_product = models.ForeignKey(
        PbaProduct,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="armatures",
    )

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
