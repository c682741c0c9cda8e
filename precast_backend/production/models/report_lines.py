# production/models/report_lines.py

"""
DAILY REPORT LINES

Four child collections of a DailyReport:
- PbaProductionLine       finished products made   -> +finished stock
- MaterialUsageLine       raw materials consumed   -> -raw material stock
- ArmatureProductionLine  sub-assemblies made      -> +sub-assembly stock
- PersonnelLine           headcount by position    (no stock effect)

Lines are writable only while the parent report is a draft.
"""

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from catalog.models import Armature, Material, PbaProduct

from .daily_report import DailyReport


class _ReportLine(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    class Meta:
        abstract = True

    def _guard_draft(self):
        if not DailyReport.objects.filter(
            pk=self.report_id, status=DailyReport.STATUS_DRAFT
        ).exists():
            raise ValidationError("Lines of a submitted report are frozen")

    def save(self, *args, **kwargs):
        self._guard_draft()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        self._guard_draft()
        return super().delete(*args, **kwargs)


class PbaProductionLine(_ReportLine):
    report = models.ForeignKey(
        DailyReport, on_delete=models.CASCADE, related_name="pba_lines"
    )
    product = models.ForeignKey(
        PbaProduct, on_delete=models.PROTECT, related_name="report_lines"
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["product__code"]

    def __str__(self):
        return f"{self.product.code} = {self.quantity}"


class MaterialUsageLine(_ReportLine):
    report = models.ForeignKey(
        DailyReport, on_delete=models.CASCADE, related_name="material_lines"
    )
    material = models.ForeignKey(
        Material, on_delete=models.PROTECT, related_name="report_lines"
    )
    quantity = models.DecimalField(
        max_digits=12, decimal_places=3, default=Decimal("0.000")
    )
    unit = models.CharField(max_length=8, choices=Material.Unit.choices)
    additional_info = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        ordering = ["material__code"]

    def __str__(self):
        return f"{self.quantity}{self.unit} {self.material.code}"


class ArmatureProductionLine(_ReportLine):
    report = models.ForeignKey(
        DailyReport, on_delete=models.CASCADE, related_name="armature_lines"
    )
    armature = models.ForeignKey(
        Armature, on_delete=models.PROTECT, related_name="report_lines"
    )
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["armature__code"]

    def __str__(self):
        return f"{self.quantity} {self.armature.code}"


class PersonnelLine(_ReportLine):
    class Position(models.TextChoices):
        PRODUCTION = "production", "Production worker"
        WELDER = "soudeur", "Welder"
        STEEL_FIXER = "ferrailleur", "Steel fixer"
        WORKER = "ouvrier", "Worker"
        MASON = "macon", "Mason"
        LABOURER = "manoeuvre", "Labourer"

    report = models.ForeignKey(
        DailyReport, on_delete=models.CASCADE, related_name="personnel_lines"
    )
    position = models.CharField(max_length=16, choices=Position.choices)
    quantity = models.PositiveIntegerField()

    class Meta:
        ordering = ["position"]

    def __str__(self):
        return f"{self.quantity} {self.position}"
