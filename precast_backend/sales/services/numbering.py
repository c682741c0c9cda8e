# sales/services/numbering.py

"""
SEQUENTIAL DOCUMENT NUMBERING

Format: PREFIX-YYYYMM-NNNN
- YYYYMM: year + month of the issue date
- NNNN:   zero-padded counter, restarts every month (grows past 4 digits
          rather than wrapping)

Concurrency:
- one DocumentSequence row per (kind, period), locked with select_for_update()
  while incrementing; concurrent creators queue on the row lock
- the row is created on first use, seeded from the highest number already
  issued for that prefix + period; a creation race is settled by the
  (kind, period) unique constraint and a locked re-read

Must be called inside the transaction that persists the document, so a
rolled-back document also rolls back its number (no gaps).
"""

from __future__ import annotations

import logging
import re

from django.db import IntegrityError, transaction
from django.utils import timezone

from sales.models import DocumentSequence, Invoice, Order, Quote

logger = logging.getLogger(__name__)

DOCUMENT_PREFIXES = {
    DocumentSequence.KIND_ORDER: "CMD",
    DocumentSequence.KIND_QUOTE: "DEV",
    DocumentSequence.KIND_INVOICE: "FACT",
}

DOCUMENT_MODELS = {
    DocumentSequence.KIND_ORDER: Order,
    DocumentSequence.KIND_QUOTE: Quote,
    DocumentSequence.KIND_INVOICE: Invoice,
}


def period_for(day) -> str:
    return day.strftime("%Y%m")


def format_number(prefix: str, period: str, counter: int) -> str:
    return f"{prefix}-{period}-{counter:04d}"


def _highest_issued(*, kind: str, prefix: str, period: str) -> int:
    model = DOCUMENT_MODELS.get(kind)
    if model is None:
        return 0

    stem = f"{prefix}-{period}-"
    pattern = re.compile(rf"^{re.escape(stem)}(\d+)$")

    highest = 0
    for number in model.objects.filter(number__startswith=stem).values_list(
        "number", flat=True
    ):
        match = pattern.match(number)
        if match:
            highest = max(highest, int(match.group(1)))
    return highest


def _locked_sequence(*, kind: str, prefix: str, period: str) -> DocumentSequence:
    sequence = (
        DocumentSequence.objects.select_for_update()
        .filter(kind=kind, period=period)
        .first()
    )
    if sequence is not None:
        return sequence

    seed = _highest_issued(kind=kind, prefix=prefix, period=period)
    try:
        with transaction.atomic():
            DocumentSequence.objects.create(kind=kind, period=period, last_number=seed)
    except IntegrityError:
        # another request created the row first; its lock below serializes us
        logger.info(
            "Document sequence created concurrently",
            extra={"kind": kind, "period": period},
        )

    return DocumentSequence.objects.select_for_update().get(kind=kind, period=period)


@transaction.atomic
def next_number(*, kind: str, prefix: str | None = None, day=None) -> str:
    if kind not in DOCUMENT_PREFIXES and not prefix:
        raise ValueError(f"Unknown document kind '{kind}'")

    prefix = prefix or DOCUMENT_PREFIXES[kind]
    period = period_for(day or timezone.localdate())

    sequence = _locked_sequence(kind=kind, prefix=prefix, period=period)
    sequence.last_number += 1
    sequence.save(update_fields=["last_number", "updated_at"])

    return format_number(prefix, period, sequence.last_number)
