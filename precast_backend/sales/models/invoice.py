# sales/models/invoice.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from .order import Order


class Invoice(models.Model):
    """
    Invoice for an order (one-to-one).

    GUARANTEES:
    - 0 <= paid_amount <= total_amount (check constraint)
    - paid_amount only grows, via sales.services.order_service.record_payment
    """

    STATUS_DRAFT = "draft"
    STATUS_SENT = "sent"
    STATUS_PAID = "paid"
    STATUS_OVERDUE = "overdue"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_SENT, "Sent"),
        (STATUS_PAID, "Paid"),
        (STATUS_OVERDUE, "Overdue"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    OPEN_STATUSES = {STATUS_DRAFT, STATUS_SENT, STATUS_OVERDUE}

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    number = models.CharField(max_length=32, unique=True)

    order = models.OneToOneField(Order, on_delete=models.PROTECT, related_name="invoice")

    issue_date = models.DateField()
    due_date = models.DateField()

    status = models.CharField(
        max_length=16, choices=STATUS_CHOICES, default=STATUS_DRAFT
    )

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    paid_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="invoices_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(paid_amount__gte=0)
                & models.Q(paid_amount__lte=models.F("total_amount")),
                name="invoice_paid_within_total",
            ),
        ]
        indexes = [
            models.Index(fields=["status", "due_date"], name="sales_invoice_due_idx"),
        ]

    @property
    def remaining_amount(self) -> Decimal:
        return (self.total_amount or Decimal("0.00")) - (self.paid_amount or Decimal("0.00"))

    @property
    def is_fully_paid(self) -> bool:
        return self.remaining_amount <= Decimal("0.00")

    def __str__(self):
        return f"{self.number} | {self.paid_amount}/{self.total_amount}"
