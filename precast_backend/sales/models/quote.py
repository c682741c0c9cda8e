# sales/models/quote.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from .order import Order


class Quote(models.Model):
    """
    Commercial quote for an order.

    Rules:
    - total_amount is copied from the order at creation time
    - at most one PENDING and at most one ACCEPTED quote per order
      (partial unique constraints; the schema closes the check-then-insert race)
    """

    STATUS_PENDING = "pending"
    STATUS_ACCEPTED = "accepted"
    STATUS_REJECTED = "rejected"
    STATUS_EXPIRED = "expired"

    STATUS_CHOICES = [
        (STATUS_PENDING, "Pending"),
        (STATUS_ACCEPTED, "Accepted"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_EXPIRED, "Expired"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    number = models.CharField(max_length=32, unique=True)

    order = models.ForeignKey(Order, on_delete=models.PROTECT, related_name="quotes")

    issue_date = models.DateField()
    valid_until = models.DateField()

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_PENDING
    )

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="quotes_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["order"],
                condition=models.Q(status="pending"),
                name="uniq_pending_quote_per_order",
            ),
            models.UniqueConstraint(
                fields=["order"],
                condition=models.Q(status="accepted"),
                name="uniq_accepted_quote_per_order",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "valid_until"], name="sales_quote_validity_idx"),
        ]

    def is_expired_on(self, day) -> bool:
        return self.valid_until < day

    def __str__(self):
        return f"{self.number} | {self.status}"
