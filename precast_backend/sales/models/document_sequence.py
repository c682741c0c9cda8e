# sales/models/document_sequence.py

from django.db import models


class DocumentSequence(models.Model):
    """
    Per-kind, per-month counter row for document numbers.

    Locked with select_for_update() while incrementing, so concurrent
    creators in the same month serialize on this row.
    """

    KIND_ORDER = "order"
    KIND_QUOTE = "quote"
    KIND_INVOICE = "invoice"

    KIND_CHOICES = [
        (KIND_ORDER, "Order"),
        (KIND_QUOTE, "Quote"),
        (KIND_INVOICE, "Invoice"),
    ]

    kind = models.CharField(max_length=16, choices=KIND_CHOICES)
    period = models.CharField(max_length=6, help_text="YYYYMM")
    last_number = models.PositiveIntegerField(default=0)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["kind", "period"]
        constraints = [
            models.UniqueConstraint(
                fields=["kind", "period"], name="uniq_document_sequence_kind_period"
            ),
        ]

    def __str__(self):
        return f"{self.kind} {self.period}: {self.last_number}"
