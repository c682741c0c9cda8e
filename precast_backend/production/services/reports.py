# production/services/reports.py

"""
DAILY REPORT DRAFTS SERVICE

Purpose:
- Create, replace and discard DRAFT reports.
- Visibility rules shared with the submission workflow and the API.

Rules:
- one report per (user, report_date): pre-check + unique constraint,
  both surface DuplicateReport
- lines with quantity <= 0 are dropped
- every referenced item must exist (ItemNotFound) and be active (ItemInactive)
- only drafts can be replaced or discarded (AlreadySubmitted)
- authors see their own reports; reports.view_all sees everything
  (a report outside the caller's visibility is reported as ReportNotFound)
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Iterable

from django.db import IntegrityError, transaction

from catalog.models import Armature, Material, PbaProduct
from core.exceptions import (
    AlreadySubmitted,
    DuplicateReport,
    InvalidQuantity,
    ItemInactive,
    ItemNotFound,
    ReportNotFound,
)
from permissions.roles import CAP_REPORTS_VIEW_ALL, user_has_capability
from production.models import (
    ArmatureProductionLine,
    DailyReport,
    MaterialUsageLine,
    PbaProductionLine,
    PersonnelLine,
)

logger = logging.getLogger(__name__)


# ============================================================
# VISIBILITY
# ============================================================


def reports_visible_to(user):
    qs = DailyReport.objects.select_related("user", "submitted_by")
    if user_has_capability(user, CAP_REPORTS_VIEW_ALL):
        return qs
    return qs.filter(user=user)


def get_report_for(*, actor, report_id, lock: bool = False) -> DailyReport:
    qs = reports_visible_to(actor)
    if lock:
        qs = qs.select_for_update(of=("self",))
    try:
        return qs.get(pk=report_id)
    except (DailyReport.DoesNotExist, ValueError) as exc:
        raise ReportNotFound(f"Report {report_id} not found") from exc


# ============================================================
# LINE BUILDERS
# ============================================================


def _active_item(model, item_id, label: str):
    item = model.objects.filter(pk=item_id).first()
    if item is None:
        raise ItemNotFound(f"{label} {item_id} not found")
    if not item.is_active:
        raise ItemInactive(f"{label} {item.code} is inactive")
    return item


def _int_qty(value) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError) as exc:
        raise InvalidQuantity("quantity must be a whole number") from exc


def _decimal_qty(value) -> Decimal:
    try:
        return Decimal(str(value or "0"))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidQuantity("quantity must be a number") from exc


def _write_lines(
    report: DailyReport,
    *,
    pba_lines: Iterable[dict],
    material_lines: Iterable[dict],
    armature_lines: Iterable[dict],
    personnel_lines: Iterable[dict],
) -> None:
    for line in pba_lines or []:
        qty = _int_qty(line.get("quantity"))
        if qty <= 0:
            continue
        PbaProductionLine.objects.create(
            report=report,
            product=_active_item(PbaProduct, line.get("product_id"), "Product"),
            quantity=qty,
        )

    for line in material_lines or []:
        qty = _decimal_qty(line.get("quantity"))
        if qty <= 0:
            continue
        material = _active_item(Material, line.get("material_id"), "Material")
        MaterialUsageLine.objects.create(
            report=report,
            material=material,
            quantity=qty,
            unit=line.get("unit") or material.unit,
            additional_info=(line.get("additional_info") or "").strip(),
        )

    for line in armature_lines or []:
        qty = _int_qty(line.get("quantity"))
        if qty <= 0:
            continue
        ArmatureProductionLine.objects.create(
            report=report,
            armature=_active_item(Armature, line.get("armature_id"), "Armature"),
            quantity=qty,
        )

    for line in personnel_lines or []:
        qty = _int_qty(line.get("quantity"))
        if qty <= 0:
            continue
        PersonnelLine.objects.create(
            report=report,
            position=line.get("position"),
            quantity=qty,
        )


def _clear_lines(report: DailyReport) -> None:
    report.pba_lines.all().delete()
    report.material_lines.all().delete()
    report.armature_lines.all().delete()
    report.personnel_lines.all().delete()


# ============================================================
# OPERATIONS
# ============================================================


@transaction.atomic
def create_report(
    *,
    actor,
    report_date,
    first_name: str = "",
    last_name: str = "",
    observations: str = "",
    pba_lines: Iterable[dict] = (),
    material_lines: Iterable[dict] = (),
    armature_lines: Iterable[dict] = (),
    personnel_lines: Iterable[dict] = (),
) -> DailyReport:
    if DailyReport.objects.filter(user=actor, report_date=report_date).exists():
        logger.warning(
            "Duplicate daily report rejected",
            extra={"user_id": str(actor.pk), "report_date": str(report_date)},
        )
        raise DuplicateReport(f"A report already exists for {report_date}")

    try:
        with transaction.atomic():
            report = DailyReport.objects.create(
                user=actor,
                report_date=report_date,
                first_name=(first_name or actor.first_name or "").strip(),
                last_name=(last_name or actor.last_name or "").strip(),
                observations=(observations or "").strip(),
            )
    except IntegrityError as exc:
        raise DuplicateReport(f"A report already exists for {report_date}") from exc

    _write_lines(
        report,
        pba_lines=pba_lines,
        material_lines=material_lines,
        armature_lines=armature_lines,
        personnel_lines=personnel_lines,
    )

    logger.info(
        "Daily report created",
        extra={"report_id": str(report.id), "user_id": str(actor.pk), "report_date": str(report_date)},
    )
    return report


@transaction.atomic
def update_report(
    *,
    report_id,
    actor,
    first_name: str = "",
    last_name: str = "",
    observations: str = "",
    pba_lines: Iterable[dict] = (),
    material_lines: Iterable[dict] = (),
    armature_lines: Iterable[dict] = (),
    personnel_lines: Iterable[dict] = (),
) -> DailyReport:
    """Replace the header fields and all four line sets of a draft."""
    report = get_report_for(actor=actor, report_id=report_id, lock=True)
    if not report.is_draft:
        raise AlreadySubmitted(f"Report {report.id} is already submitted")

    report.first_name = (first_name or report.first_name).strip()
    report.last_name = (last_name or report.last_name).strip()
    report.observations = (observations or "").strip()
    report.save()

    _clear_lines(report)
    _write_lines(
        report,
        pba_lines=pba_lines,
        material_lines=material_lines,
        armature_lines=armature_lines,
        personnel_lines=personnel_lines,
    )

    logger.info("Daily report updated", extra={"report_id": str(report.id)})
    return report


@transaction.atomic
def discard_report(*, report_id, actor) -> None:
    report = get_report_for(actor=actor, report_id=report_id, lock=True)
    if not report.is_draft:
        raise AlreadySubmitted(f"Report {report.id} is already submitted")

    report_pk = str(report.id)
    report.delete()
    logger.info("Draft daily report discarded", extra={"report_id": report_pk})
