# inventory/models/stock_movement.py

"""
CANONICAL INVENTORY LEDGER

Immutable inventory ledger entry.

GUARANTEES:
- Append-only (no updates, no deletes)
- Exactly one item reference, matching item_class
- quantity is the signed quantity requested by the caller
- applied_quantity is the signed delta actually applied to the ledger row;
  the two differ only when a raw-material floor clamp engaged
- Corrections are new, compensating movements
"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from catalog.models import Armature, Material, PbaProduct


class StockMovement(models.Model):
    class ItemClass(models.TextChoices):
        FINISHED_PRODUCT = "finished_product", "Finished product"
        RAW_MATERIAL = "raw_material", "Raw material"
        SUB_ASSEMBLY = "sub_assembly", "Sub-assembly"

    class Kind(models.TextChoices):
        INITIAL = "initial", "Opening stock"
        PRODUCTION = "production", "Production"
        DELIVERY = "delivery", "Delivery"
        USAGE = "usage", "Usage"
        ADJUSTMENT = "adjustment", "Manual adjustment"

    class ReferenceKind(models.TextChoices):
        REPORT = "report", "Daily report"
        ORDER = "order", "Order"
        MANUAL = "manual", "Manual"

    ITEM_FIELDS = {
        ItemClass.FINISHED_PRODUCT: "product",
        ItemClass.RAW_MATERIAL: "material",
        ItemClass.SUB_ASSEMBLY: "armature",
    }

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    item_class = models.CharField(max_length=20, choices=ItemClass.choices)

    product = models.ForeignKey(
        PbaProduct,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="stock_movements",
    )
    material = models.ForeignKey(
        Material,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="stock_movements",
    )
    armature = models.ForeignKey(
        Armature,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    kind = models.CharField(max_length=16, choices=Kind.choices)

    quantity = models.DecimalField(max_digits=14, decimal_places=3)
    applied_quantity = models.DecimalField(max_digits=14, decimal_places=3)

    reference_kind = models.CharField(max_length=16, choices=ReferenceKind.choices)
    reference_id = models.CharField(max_length=64, blank=True, default="")

    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="stock_movements",
    )

    notes = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        indexes = [
            models.Index(fields=["created_at"], name="inv_move_created_idx"),
            models.Index(fields=["kind"], name="inv_move_kind_idx"),
            models.Index(fields=["reference_kind", "reference_id"], name="inv_move_ref_idx"),
            models.Index(fields=["product", "created_at"], name="inv_move_product_idx"),
            models.Index(fields=["material", "created_at"], name="inv_move_material_idx"),
            models.Index(fields=["armature", "created_at"], name="inv_move_armature_idx"),
        ]
        constraints = [
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
        ]

    @property
    def item(self):
        return getattr(self, self.ITEM_FIELDS[self.item_class])

    @property
    def was_clamped(self) -> bool:
        return self.quantity != self.applied_quantity

    def clean(self):
        if self.quantity == Decimal("0"):
            raise ValidationError("quantity cannot be zero")

        field = self.ITEM_FIELDS.get(self.item_class)
        if field is None:
            raise ValidationError(f"Unknown item_class '{self.item_class}'")

        for other in self.ITEM_FIELDS.values():
            is_set = getattr(self, f"{other}_id") is not None
            if other == field and not is_set:
                raise ValidationError(f"{self.item_class} movement requires {field}")
            if other != field and is_set:
                raise ValidationError(f"{self.item_class} movement cannot reference {other}")

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("StockMovement records are immutable")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            "StockMovement records are immutable and cannot be deleted"
        )

    def __str__(self):
        return f"{self.item} | {self.kind} | {self.quantity}"
