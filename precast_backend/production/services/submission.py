# production/services/submission.py

"""
REPORT SUBMISSION WORKFLOW

Purpose:
- Turn a draft report's lines into ledger movements and freeze the report.

Rules:
- report must be visible to the actor (author, or reports.view_all)
- report must be a draft; a second submit is rejected with AlreadySubmitted
  and touches nothing (movements are not idempotent)
- PBA lines      -> production  +qty  (finished products)
- material lines -> usage       -qty  (raw materials, floored at zero)
- armature lines -> production  +qty  (sub-assemblies)
- personnel lines are kept on the report, no stock effect
- no separate item re-check: apply_movement raises ItemInactive
  (ReferentialIntegrityFailure) for an item retired since drafting;
  line foreign keys are PROTECT, so items cannot vanish

GUARANTEES:
- all movements and the status flip commit together or not at all;
  a failing line leaves the report in draft and the ledgers untouched
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from django.db import transaction
from django.utils import timezone

from core.exceptions import AlreadySubmitted, WorkflowError
from inventory.models import StockMovement
from inventory.services.ledger import MovementResult, apply_movement
from production.models import DailyReport
from production.services.reports import get_report_for

logger = logging.getLogger(__name__)

Kind = StockMovement.Kind
REFERENCE_REPORT = StockMovement.ReferenceKind.REPORT


@dataclass(frozen=True)
class SubmissionResult:
    report: DailyReport
    movements: list[MovementResult] = field(default_factory=list)

    @property
    def movement_count(self) -> int:
        return len(self.movements)

    @property
    def clamped(self) -> list[MovementResult]:
        return [m for m in self.movements if m.clamped]


@transaction.atomic
def submit_report(*, report_id, actor) -> SubmissionResult:
    report = get_report_for(actor=actor, report_id=report_id, lock=True)

    if not report.is_draft:
        logger.warning(
            "Report re-submission rejected",
            extra={"report_id": str(report.id), "actor_id": str(actor.pk)},
        )
        raise AlreadySubmitted(f"Report {report.id} is already submitted")

    logger.info(
        "Submitting daily report",
        extra={"report_id": str(report.id), "actor_id": str(actor.pk)},
    )

    note = f"Daily report {report.report_date}"
    results: list[MovementResult] = []

    try:
        for line in report.pba_lines.select_related("product"):
            if line.quantity > 0:
                results.append(
                    apply_movement(
                        item=line.product,
                        kind=Kind.PRODUCTION,
                        quantity=line.quantity,
                        reference_kind=REFERENCE_REPORT,
                        reference_id=report.id,
                        actor=actor,
                        notes=note,
                    )
                )

        for line in report.material_lines.select_related("material"):
            if line.quantity > 0:
                results.append(
                    apply_movement(
                        item=line.material,
                        kind=Kind.USAGE,
                        quantity=-line.quantity,
                        reference_kind=REFERENCE_REPORT,
                        reference_id=report.id,
                        actor=actor,
                        notes=note,
                    )
                )

        for line in report.armature_lines.select_related("armature"):
            if line.quantity > 0:
                results.append(
                    apply_movement(
                        item=line.armature,
                        kind=Kind.PRODUCTION,
                        quantity=line.quantity,
                        reference_kind=REFERENCE_REPORT,
                        reference_id=report.id,
                        actor=actor,
                        notes=note,
                    )
                )
    except WorkflowError as exc:
        logger.warning(
            "Report submission aborted",
            extra={"report_id": str(report.id), "code": exc.code, "reason": str(exc)},
        )
        raise

    report.status = DailyReport.STATUS_SUBMITTED
    report.submitted_at = timezone.now()
    report.submitted_by = actor
    report.save(update_fields=["status", "submitted_at", "submitted_by", "updated_at"])

    logger.info(
        "Daily report submitted",
        extra={
            "report_id": str(report.id),
            "movements": len(results),
            "clamped": sum(1 for r in results if r.clamped),
        },
    )

    return SubmissionResult(report=report, movements=results)
