# sales/services/order_service.py

"""
ORDER WORKFLOW SERVICE

Purpose:
- Every Order status change and every commercial document (quote,
  invoice, payment) is created here, one transaction per call.

Transitions:
- create_order        -> draft              (client + products active)
- confirm_order       draft -> confirmed
- create_quote        confirmed -> quoted   (new pending quote, DEV number)
- accept_quote        quoted -> quote_accepted
- reject_quote        quoted -> confirmed
- create_invoice      quote_accepted -> invoiced (FACT number, paid_amount 0)
- record_payment      invoiced -> delivered once fully paid
                      (one delivery movement per order line)
- cancel_order        any non-terminal -> cancelled (no payments recorded)
- expire_quotes / mark_overdue_invoices   housekeeping (management command)

Rules:
- the order row is locked (select_for_update) before any precondition check
- uniqueness of invoice / pending quote / accepted quote is also enforced
  by the schema; IntegrityError is mapped to the domain error
- money is quantized to 0.01 (ROUND_HALF_UP)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from catalog.models import Client, PbaProduct
from core.exceptions import (
    AmountExceedsRemaining,
    ClientInactive,
    ClientNotFound,
    EmptyOrder,
    InvalidAmount,
    InvalidQuantity,
    InvoiceExists,
    ItemNotFound,
    NoInvoice,
    NoQuotePending,
    NotConfirmed,
    NotDraft,
    NotInvoiced,
    NotQuoted,
    OrderNotFound,
    PaymentsRecorded,
    ProductInactive,
    QuoteAlreadyAccepted,
    QuoteExpired,
    QuoteNotAccepted,
)
from inventory.models import StockMovement
from inventory.services.ledger import MovementResult, apply_movement
from sales.models import DocumentSequence, Invoice, Order, OrderItem, Payment, Quote
from sales.services.numbering import next_number
from sales.services.order_lifecycle import TERMINAL_STATES, validate_status_change

logger = logging.getLogger(__name__)

TWOPLACES = Decimal("0.01")


def _money(v) -> Decimal:
    try:
        return Decimal(str(v if v is not None else "0.00")).quantize(
            TWOPLACES, rounding=ROUND_HALF_UP
        )
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmount("Amount must be a number") from exc


def _today(today=None):
    return today or timezone.localdate()


def _days(value, *, setting: str, label: str) -> int:
    maximum = int(getattr(settings, setting, 365))
    try:
        days = int(value)
    except (TypeError, ValueError) as exc:
        raise InvalidQuantity(f"{label} must be a whole number of days") from exc
    if days < 1 or days > maximum:
        raise InvalidQuantity(f"{label} must be between 1 and {maximum}")
    return days


def _lock_order(order_id) -> Order:
    try:
        return Order.objects.select_for_update().get(pk=order_id)
    except (Order.DoesNotExist, ValueError) as exc:
        raise OrderNotFound(f"Order {order_id} not found") from exc


def _set_status(order: Order, target_status: str, *extra_fields: str) -> None:
    validate_status_change(
        order_id=order.id, from_status=order.status, to_status=target_status
    )
    order.status = target_status
    order.save(update_fields=["status", "updated_at", *extra_fields])


# ============================================================
# RESULTS
# ============================================================


@dataclass(frozen=True)
class PaymentResult:
    payment: Payment
    invoice: Invoice
    order: Order
    delivery_movements: list[MovementResult] = field(default_factory=list)

    @property
    def fully_paid(self) -> bool:
        return self.invoice.status == Invoice.STATUS_PAID


# ============================================================
# CREATE / CONFIRM / DISCARD
# ============================================================


@transaction.atomic
def create_order(
    *,
    actor,
    client_id,
    items: Iterable[dict],
    order_date=None,
    delivery_date=None,
    notes: str = "",
    today=None,
) -> Order:
    """
    items: [{"product_id": ..., "quantity": int, "unit_price": optional}]
    unit_price defaults to the product's current price.

    The number is taken in the current month whatever order_date says;
    order_date defaults to today.
    """
    client = Client.objects.filter(pk=client_id).first()
    if client is None:
        raise ClientNotFound(f"Client {client_id} not found")
    if not client.is_active:
        raise ClientInactive(f"Client {client.name} is inactive")

    lines = []
    for raw in items or []:
        product = PbaProduct.objects.filter(pk=raw.get("product_id")).first()
        if product is None:
            raise ItemNotFound(f"Product {raw.get('product_id')} not found")
        if not product.is_active:
            raise ProductInactive(f"Product {product.code} is inactive")

        try:
            qty = int(raw.get("quantity") or 0)
        except (TypeError, ValueError) as exc:
            raise InvalidQuantity("quantity must be a whole number") from exc
        if qty <= 0:
            raise InvalidQuantity(f"quantity for {product.code} must be > 0")

        price = raw.get("unit_price")
        unit_price = _money(product.unit_price if price is None else price)
        if unit_price < 0:
            raise InvalidAmount(f"unit_price for {product.code} cannot be negative")

        lines.append((product, qty, unit_price))

    if not lines:
        raise EmptyOrder()

    day = _today(today)
    order = Order.objects.create(
        number=next_number(kind=DocumentSequence.KIND_ORDER, day=day),
        client=client,
        order_date=order_date or day,
        delivery_date=delivery_date,
        notes=(notes or "").strip(),
        created_by=actor,
    )

    total = Decimal("0.00")
    for product, qty, unit_price in lines:
        item = OrderItem.objects.create(
            order=order, product=product, quantity=qty, unit_price=unit_price
        )
        total += item.line_total

    order.total_amount = _money(total)
    order.save(update_fields=["total_amount", "updated_at"])

    logger.info(
        "Order created",
        extra={
            "order_id": str(order.id),
            "number": order.number,
            "client_id": str(client.id),
            "total_amount": str(order.total_amount),
        },
    )
    return order


@transaction.atomic
def confirm_order(*, order_id, actor) -> Order:
    order = _lock_order(order_id)
    if order.status != Order.STATUS_DRAFT:
        raise NotDraft(f"Order {order.number} is '{order.status}', not draft")

    _set_status(order, Order.STATUS_CONFIRMED)
    logger.info("Order confirmed", extra={"order_id": str(order.id), "actor_id": str(actor.pk)})
    return order


@transaction.atomic
def discard_order(*, order_id, actor) -> None:
    order = _lock_order(order_id)
    if order.status != Order.STATUS_DRAFT:
        raise NotDraft(f"Only draft orders can be discarded ({order.number} is '{order.status}')")

    number = order.number
    order.delete()
    logger.info("Draft order discarded", extra={"number": number, "actor_id": str(actor.pk)})


# ============================================================
# QUOTES
# ============================================================


@transaction.atomic
def create_quote(
    *,
    order_id,
    actor,
    validity_days: int = 30,
    notes: str = "",
    today=None,
) -> Quote:
    order = _lock_order(order_id)

    if order.quotes.filter(status=Quote.STATUS_ACCEPTED).exists():
        raise QuoteAlreadyAccepted(f"Order {order.number} already has an accepted quote")
    if order.status != Order.STATUS_CONFIRMED:
        raise NotConfirmed(f"Order {order.number} is '{order.status}', not confirmed")

    days = _days(validity_days, setting="QUOTE_MAX_VALIDITY_DAYS", label="validity_days")
    day = _today(today)

    try:
        with transaction.atomic():
            quote = Quote.objects.create(
                number=next_number(kind=DocumentSequence.KIND_QUOTE, day=day),
                order=order,
                issue_date=day,
                valid_until=day + timedelta(days=days),
                total_amount=order.total_amount,
                notes=(notes or "").strip(),
                created_by=actor,
            )
    except IntegrityError as exc:
        raise QuoteAlreadyAccepted(
            f"Order {order.number} already has an open or accepted quote"
        ) from exc

    _set_status(order, Order.STATUS_QUOTED)

    logger.info(
        "Quote created",
        extra={"order_id": str(order.id), "quote": quote.number, "valid_until": str(quote.valid_until)},
    )
    return quote


def _pending_quote(order: Order) -> Quote:
    quote = (
        order.quotes.select_for_update()
        .filter(status=Quote.STATUS_PENDING)
        .first()
    )
    if quote is None or order.status != Order.STATUS_QUOTED:
        raise NoQuotePending(f"Order {order.number} has no pending quote")
    return quote


@transaction.atomic
def accept_quote(*, order_id, actor, today=None) -> Quote:
    order = _lock_order(order_id)
    quote = _pending_quote(order)

    day = _today(today)
    if quote.is_expired_on(day):
        logger.warning(
            "Expired quote acceptance rejected",
            extra={"quote": quote.number, "valid_until": str(quote.valid_until)},
        )
        raise QuoteExpired(f"Quote {quote.number} expired on {quote.valid_until}")

    quote.status = Quote.STATUS_ACCEPTED
    quote.save(update_fields=["status", "updated_at"])

    _set_status(order, Order.STATUS_QUOTE_ACCEPTED)

    logger.info(
        "Quote accepted",
        extra={"order_id": str(order.id), "quote": quote.number, "actor_id": str(actor.pk)},
    )
    return quote


@transaction.atomic
def reject_quote(*, order_id, actor, reason: str = "") -> Quote:
    order = _lock_order(order_id)
    if order.status != Order.STATUS_QUOTED:
        raise NotQuoted(f"Order {order.number} is {order.status}, not quoted")
    quote = _pending_quote(order)

    quote.status = Quote.STATUS_REJECTED
    if reason:
        quote.notes = f"{quote.notes}\nRejected: {reason}".strip()
    quote.save(update_fields=["status", "notes", "updated_at"])

    _set_status(order, Order.STATUS_CONFIRMED)

    logger.info(
        "Quote rejected",
        extra={"order_id": str(order.id), "quote": quote.number, "actor_id": str(actor.pk)},
    )
    return quote


@transaction.atomic
def expire_quotes(*, today=None) -> int:
    """Pending quotes past validity -> expired; their orders go back to confirmed."""
    day = _today(today)
    expired = 0

    stale_orders = (
        Quote.objects.filter(status=Quote.STATUS_PENDING, valid_until__lt=day)
        .values_list("order_id", flat=True)
        .order_by()
        .distinct()
    )

    for order_id in list(stale_orders):
        order = _lock_order(order_id)
        quote = (
            order.quotes.select_for_update()
            .filter(status=Quote.STATUS_PENDING, valid_until__lt=day)
            .first()
        )
        if quote is None:
            continue

        quote.status = Quote.STATUS_EXPIRED
        quote.save(update_fields=["status", "updated_at"])

        if order.status == Order.STATUS_QUOTED:
            _set_status(order, Order.STATUS_CONFIRMED)

        expired += 1
        logger.info("Quote expired", extra={"quote": quote.number, "order_id": str(order.id)})

    return expired


# ============================================================
# INVOICES + PAYMENTS
# ============================================================


@transaction.atomic
def create_invoice(
    *,
    order_id,
    actor,
    due_days: int = 30,
    notes: str = "",
    today=None,
) -> Invoice:
    order = _lock_order(order_id)

    if Invoice.objects.filter(order=order).exists():
        raise InvoiceExists(f"Order {order.number} already has an invoice")
    if order.status != Order.STATUS_QUOTE_ACCEPTED:
        raise QuoteNotAccepted(
            f"Order {order.number} is '{order.status}'; its quote must be accepted first"
        )

    days = _days(due_days, setting="INVOICE_MAX_DUE_DAYS", label="due_days")
    day = _today(today)

    try:
        with transaction.atomic():
            invoice = Invoice.objects.create(
                number=next_number(kind=DocumentSequence.KIND_INVOICE, day=day),
                order=order,
                issue_date=day,
                due_date=day + timedelta(days=days),
                total_amount=order.total_amount,
                paid_amount=Decimal("0.00"),
                notes=(notes or "").strip(),
                created_by=actor,
            )
    except IntegrityError as exc:
        raise InvoiceExists(f"Order {order.number} already has an invoice") from exc

    _set_status(order, Order.STATUS_INVOICED)

    logger.info(
        "Invoice created",
        extra={"order_id": str(order.id), "invoice": invoice.number, "total_amount": str(invoice.total_amount)},
    )
    return invoice


@transaction.atomic
def record_payment(
    *,
    order_id,
    actor,
    amount,
    method: str = Payment.METHOD_CASH,
    payment_date=None,
    reference: str = "",
    notes: str = "",
) -> PaymentResult:
    order = _lock_order(order_id)

    invoice = Invoice.objects.select_for_update().filter(order=order).first()
    if invoice is None:
        raise NoInvoice(f"Order {order.number} has no invoice")
    if invoice.status == Invoice.STATUS_CANCELLED:
        raise NotInvoiced(f"Invoice {invoice.number} is cancelled")

    amt = _money(amount)
    if amt <= Decimal("0.00"):
        raise InvalidAmount("Payment amount must be > 0")

    remaining = invoice.remaining_amount
    if amt > remaining:
        logger.warning(
            "Payment above remaining balance rejected",
            extra={"invoice": invoice.number, "amount": str(amt), "remaining": str(remaining)},
        )
        raise AmountExceedsRemaining(
            f"Amount {amt} exceeds remaining balance {remaining} on {invoice.number}"
        )

    if order.status != Order.STATUS_INVOICED:
        raise NotInvoiced(f"Order {order.number} is '{order.status}', not invoiced")

    pay_date = payment_date or timezone.localdate()

    payment = Payment.objects.create(
        invoice=invoice,
        payment_date=pay_date,
        amount=amt,
        method=(method or Payment.METHOD_CASH).lower().strip(),
        reference=(reference or "").strip(),
        notes=(notes or "").strip(),
        recorded_by=actor,
    )

    invoice.paid_amount = _money(invoice.paid_amount + amt)
    invoice.status = Invoice.STATUS_PAID if invoice.is_fully_paid else Invoice.STATUS_SENT
    invoice.save(update_fields=["paid_amount", "status", "updated_at"])

    movements: list[MovementResult] = []
    if invoice.status == Invoice.STATUS_PAID:
        for item in order.items.select_related("product"):
            movements.append(
                apply_movement(
                    item=item.product,
                    kind=StockMovement.Kind.DELIVERY,
                    quantity=-item.quantity,
                    reference_kind=StockMovement.ReferenceKind.ORDER,
                    reference_id=order.id,
                    actor=actor,
                    notes=f"Delivery for order {order.number}",
                    allow_inactive=True,
                )
            )

        extra_fields = []
        if order.delivery_date is None:
            order.delivery_date = pay_date
            extra_fields.append("delivery_date")
        _set_status(order, Order.STATUS_DELIVERED, *extra_fields)

    logger.info(
        "Payment recorded",
        extra={
            "payment_id": str(payment.id),
            "invoice": invoice.number,
            "amount": str(amt),
            "paid_amount": str(invoice.paid_amount),
            "fully_paid": invoice.status == Invoice.STATUS_PAID,
        },
    )

    return PaymentResult(
        payment=payment,
        invoice=invoice,
        order=order,
        delivery_movements=movements,
    )


@transaction.atomic
def mark_overdue_invoices(*, today=None) -> int:
    """Unpaid draft/sent invoices past their due date -> overdue."""
    day = _today(today)
    updated = Invoice.objects.filter(
        status__in=[Invoice.STATUS_DRAFT, Invoice.STATUS_SENT],
        due_date__lt=day,
    ).update(status=Invoice.STATUS_OVERDUE, updated_at=timezone.now())
    if updated:
        logger.info("Invoices marked overdue", extra={"count": updated, "day": str(day)})
    return updated


# ============================================================
# CANCELLATION
# ============================================================


@transaction.atomic
def cancel_order(*, order_id, actor, reason: str = "") -> Order:
    order = _lock_order(order_id)

    if order.status in TERMINAL_STATES:
        validate_status_change(
            order_id=order.id, from_status=order.status, to_status=Order.STATUS_CANCELLED
        )

    invoice = Invoice.objects.select_for_update().filter(order=order).first()
    if invoice is not None and invoice.paid_amount > 0:
        raise PaymentsRecorded(
            f"Order {order.number} has {invoice.paid_amount} paid on {invoice.number}"
        )

    order.quotes.filter(status=Quote.STATUS_PENDING).update(
        status=Quote.STATUS_REJECTED, updated_at=timezone.now()
    )

    if invoice is not None and invoice.status != Invoice.STATUS_CANCELLED:
        invoice.status = Invoice.STATUS_CANCELLED
        invoice.save(update_fields=["status", "updated_at"])

    if reason:
        order.notes = f"{order.notes}\nCancelled: {reason}".strip()
    _set_status(order, Order.STATUS_CANCELLED, "notes")

    logger.info(
        "Order cancelled",
        extra={"order_id": str(order.id), "number": order.number, "actor_id": str(actor.pk)},
    )
    return order
