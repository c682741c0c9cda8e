# sales/models/order.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from catalog.models import Client, PbaProduct

User = settings.AUTH_USER_MODEL


class Order(models.Model):
    """
    Client order for finished PBA products.

    GUARANTEES:
    - status changes ONLY along sales.services.order_lifecycle.ALLOWED_TRANSITIONS
      (save() rejects anything else)
    - total_amount = sum(item.line_total), recomputed by the order service
    - owns zero-or-more quotes (at most one pending, at most one accepted)
      and zero-or-one invoice

    NAMING:
    - STATUS_QUOTE_ACCEPTED means "client accepted the quote"; money
      received is tracked on Invoice.paid_amount / Payment
    """

    STATUS_DRAFT = "draft"
    STATUS_CONFIRMED = "confirmed"
    STATUS_QUOTED = "quoted"
    STATUS_QUOTE_ACCEPTED = "quote_accepted"
    STATUS_INVOICED = "invoiced"
    STATUS_DELIVERED = "delivered"
    STATUS_CANCELLED = "cancelled"

    STATUS_CHOICES = [
        (STATUS_DRAFT, "Draft"),
        (STATUS_CONFIRMED, "Confirmed"),
        (STATUS_QUOTED, "Quoted"),
        (STATUS_QUOTE_ACCEPTED, "Quote accepted"),
        (STATUS_INVOICED, "Invoiced"),
        (STATUS_DELIVERED, "Delivered"),
        (STATUS_CANCELLED, "Cancelled"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    number = models.CharField(
        max_length=32,
        unique=True,
        help_text="System-generated order number (CMD-YYYYMM-NNNN)",
    )

    client = models.ForeignKey(
        Client, on_delete=models.PROTECT, related_name="orders"
    )

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_DRAFT
    )

    order_date = models.DateField()
    delivery_date = models.DateField(null=True, blank=True)

    total_amount = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    notes = models.TextField(blank=True, default="")

    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="orders_created",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"], name="sales_order_status_idx"),
            models.Index(fields=["order_date"], name="sales_order_date_idx"),
        ]

    def save(self, *args, **kwargs):
        from sales.services.order_lifecycle import validate_status_change

        if self._state.adding:
            if self.status != self.STATUS_DRAFT:
                raise ValidationError("Orders are created as drafts")
        else:
            previous = (
                Order.objects.filter(pk=self.pk).values_list("status", flat=True).first()
            )
            if previous is not None and previous != self.status:
                validate_status_change(
                    order_id=self.pk, from_status=previous, to_status=self.status
                )

        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.number} | {self.status}"


class OrderItem(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(
        PbaProduct, on_delete=models.PROTECT, related_name="order_items"
    )

    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=12, decimal_places=2)
    line_total = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    class Meta:
        ordering = ["product__code"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gt=0),
                name="sales_orderitem_quantity_positive",
            ),
        ]

    def save(self, *args, **kwargs):
        self.line_total = (Decimal(self.quantity) * Decimal(self.unit_price)).quantize(
            Decimal("0.01")
        )
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.product.code} x {self.quantity}"
