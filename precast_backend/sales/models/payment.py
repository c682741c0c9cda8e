# sales/models/payment.py

import uuid

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from .invoice import Invoice


class Payment(models.Model):
    """
    Money received against an invoice.

    GUARANTEES:
    - Append-only (no updates, no deletes)
    - amount > 0
    - sum(payments) <= invoice.total_amount (enforced by record_payment)
    """

    METHOD_CASH = "cash"
    METHOD_CHECK = "check"
    METHOD_TRANSFER = "transfer"
    METHOD_CARD = "card"

    METHOD_CHOICES = [
        (METHOD_CASH, "Cash"),
        (METHOD_CHECK, "Check"),
        (METHOD_TRANSFER, "Bank transfer"),
        (METHOD_CARD, "Card"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    invoice = models.ForeignKey(Invoice, on_delete=models.PROTECT, related_name="payments")

    payment_date = models.DateField()
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    method = models.CharField(max_length=16, choices=METHOD_CHOICES)
    reference = models.CharField(max_length=100, blank=True, default="")
    notes = models.TextField(blank=True, default="")

    recorded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments_recorded",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(amount__gt=0),
                name="payment_amount_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValidationError("Payment records are immutable")
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Payment records are immutable and cannot be deleted")

    def __str__(self):
        return f"{self.invoice.number} | {self.amount} ({self.method})"
