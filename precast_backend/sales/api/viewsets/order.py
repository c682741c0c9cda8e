# sales/api/viewsets/order.py

"""
======================================================
PATH: sales/api/viewsets/order.py
======================================================
ORDER VIEWSETS (STAFF)

Purpose:
- Orders: list / create (draft) / retrieve / discard (draft only).
- One POST action per lifecycle transition:
    confirm/  quote/  quote/accept/  quote/reject/
    invoice/  payment/  cancel/
- Quotes and invoices are read-only listings; they are only ever
  created through the order actions.

Security:
- Requires orders.manage
- cancel/ requires orders.cancel

Errors:
- WorkflowError -> core.api.workflow_error_response
  (404 not found, 409 invalid state, 400 business rule, 422 integrity)
======================================================
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.api import workflow_error_response
from core.exceptions import WorkflowError
from permissions.roles import CAP_ORDERS_CANCEL, CAP_ORDERS_MANAGE, HasCapability
from sales.filters import InvoiceFilter, OrderFilter, QuoteFilter
from sales.models import Invoice, Order, Quote
from sales.serializers import (
    InvoiceCreateSerializer,
    InvoiceSerializer,
    OrderCancelSerializer,
    OrderCreateSerializer,
    OrderSerializer,
    PaymentCreateSerializer,
    PaymentSerializer,
    QuoteCreateSerializer,
    QuoteRejectSerializer,
    QuoteSerializer,
)
from sales.services import order_service


class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    required_capability = CAP_ORDERS_MANAGE

    def get_permissions(self):
        if self.action == "cancel":
            self.required_capability = CAP_ORDERS_CANCEL
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        return (
            Order.objects.all()
            .select_related("client", "created_by")
            .prefetch_related("items__product", "quotes")
            .order_by("-created_at")
        )

    def _order_response(self, order_id, http_status=status.HTTP_200_OK):
        order = self.get_queryset().get(pk=order_id)
        return Response(OrderSerializer(order).data, status=http_status)

    # ======================================================
    # CREATE / DISCARD
    # ======================================================

    @extend_schema(request=OrderCreateSerializer, responses={201: OrderSerializer})
    def create(self, request):
        ser = OrderCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            order = order_service.create_order(
                actor=request.user,
                client_id=data["client_id"],
                items=data["items"],
                order_date=data.get("order_date"),
                delivery_date=data.get("delivery_date"),
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return self._order_response(order.pk, status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        try:
            order_service.discard_order(order_id=pk, actor=request.user)
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ======================================================
    # LIFECYCLE ACTIONS
    # ======================================================

    @extend_schema(request=None, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="confirm")
    def confirm(self, request, pk=None):
        try:
            order_service.confirm_order(order_id=pk, actor=request.user)
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return self._order_response(pk)

    @extend_schema(request=QuoteCreateSerializer, responses={201: QuoteSerializer})
    @action(detail=True, methods=["post"], url_path="quote")
    def quote(self, request, pk=None):
        ser = QuoteCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            quote = order_service.create_quote(
                order_id=pk,
                actor=request.user,
                validity_days=ser.validated_data["validity_days"],
                notes=ser.validated_data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(QuoteSerializer(quote).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=None, responses={200: QuoteSerializer})
    @action(detail=True, methods=["post"], url_path="quote/accept")
    def accept_quote(self, request, pk=None):
        try:
            quote = order_service.accept_quote(order_id=pk, actor=request.user)
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(QuoteSerializer(quote).data, status=status.HTTP_200_OK)

    @extend_schema(request=QuoteRejectSerializer, responses={200: QuoteSerializer})
    @action(detail=True, methods=["post"], url_path="quote/reject")
    def reject_quote(self, request, pk=None):
        ser = QuoteRejectSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            quote = order_service.reject_quote(
                order_id=pk,
                actor=request.user,
                reason=ser.validated_data.get("reason", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(QuoteSerializer(quote).data, status=status.HTTP_200_OK)

    @extend_schema(request=InvoiceCreateSerializer, responses={201: InvoiceSerializer})
    @action(detail=True, methods=["post"], url_path="invoice")
    def invoice(self, request, pk=None):
        ser = InvoiceCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            invoice = order_service.create_invoice(
                order_id=pk,
                actor=request.user,
                due_days=ser.validated_data["due_days"],
                notes=ser.validated_data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return Response(InvoiceSerializer(invoice).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=PaymentCreateSerializer, responses={201: PaymentSerializer})
    @action(detail=True, methods=["post"], url_path="payment")
    def payment(self, request, pk=None):
        ser = PaymentCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            result = order_service.record_payment(
                order_id=pk,
                actor=request.user,
                amount=data["amount"],
                method=data["method"],
                payment_date=data.get("payment_date"),
                reference=data.get("reference", ""),
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return Response(
            {
                "payment": PaymentSerializer(result.payment).data,
                "invoice_status": result.invoice.status,
                "paid_amount": str(result.invoice.paid_amount),
                "remaining_amount": str(result.invoice.remaining_amount),
                "order_status": result.order.status,
                "delivery_movements": len(result.delivery_movements),
            },
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=OrderCancelSerializer, responses={200: OrderSerializer})
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        ser = OrderCancelSerializer(data=request.data)
        ser.is_valid(raise_exception=True)

        try:
            order_service.cancel_order(
                order_id=pk,
                actor=request.user,
                reason=ser.validated_data.get("reason", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)
        return self._order_response(pk)


class QuoteViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = QuoteSerializer
    filterset_class = QuoteFilter
    required_capability = CAP_ORDERS_MANAGE

    def get_permissions(self):
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        return Quote.objects.select_related("order").order_by("-issue_date", "-created_at")


class InvoiceViewSet(viewsets.ReadOnlyModelViewSet):
    serializer_class = InvoiceSerializer
    filterset_class = InvoiceFilter
    required_capability = CAP_ORDERS_MANAGE

    def get_permissions(self):
        return [IsAuthenticated(), HasCapability()]

    def get_queryset(self):
        return (
            Invoice.objects.select_related("order")
            .prefetch_related("payments")
            .order_by("-issue_date", "-created_at")
        )
