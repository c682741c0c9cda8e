# inventory/views.py

"""
======================================================
PATH: inventory/views.py
======================================================
INVENTORY API (STAFF)

Purpose:
- Read the three stock ledgers.
- List the movement audit log with typed filters.
- Manual operations: adjustment (add/remove/set), opening stock,
  armature entry, finished-product delivery. All go through the ledger
  service.
- Dashboard summary (totals, top producers, low stock).

Security:
- Reads require ANY of inventory.view / inventory.adjust
- Writes require inventory.adjust
======================================================
"""

from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import generics, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from catalog.models import Armature, PbaProduct
from core.api import workflow_error_response
from core.exceptions import ItemNotFound, OrderNotFound, WorkflowError
from inventory.filters import StockMovementFilter
from inventory.models import (
    FinishedProductStock,
    RawMaterialStock,
    StockMovement,
    SubAssemblyStock,
)
from inventory.serializers import (
    DeliveryInputSerializer,
    FinishedProductStockSerializer,
    OpeningStockInputSerializer,
    RawMaterialStockSerializer,
    StockAdjustmentInputSerializer,
    StockMovementSerializer,
    StockSummarySerializer,
    SubAssemblyEntryInputSerializer,
    SubAssemblyStockSerializer,
)
from inventory.services.adjustments import adjust_stock, record_sub_assembly_entry
from inventory.services.deliveries import record_delivery
from inventory.services.ledger import open_stock, resolve_item
from inventory.services.summary import stock_summary
from permissions.roles import (
    CAP_INVENTORY_ADJUST,
    CAP_INVENTORY_VIEW,
    HasAnyCapability,
    HasCapability,
)
from sales.models import Order


class _InventoryReadMixin:
    required_any_capabilities = {CAP_INVENTORY_VIEW, CAP_INVENTORY_ADJUST}

    def get_permissions(self):
        return [IsAuthenticated(), HasAnyCapability()]


class _InventoryWriteMixin:
    required_capability = CAP_INVENTORY_ADJUST

    def get_permissions(self):
        return [IsAuthenticated(), HasCapability()]


# ==========================================================
# LEDGERS
# ==========================================================


class FinishedProductStockViewSet(_InventoryReadMixin, viewsets.ReadOnlyModelViewSet):
    queryset = FinishedProductStock.objects.select_related("product").order_by("product__code")
    serializer_class = FinishedProductStockSerializer
    filterset_fields = ["product", "product__category"]


class RawMaterialStockViewSet(_InventoryReadMixin, viewsets.ReadOnlyModelViewSet):
    queryset = RawMaterialStock.objects.select_related("material").order_by("material__code")
    serializer_class = RawMaterialStockSerializer
    filterset_fields = ["material", "unit"]


class SubAssemblyStockViewSet(_InventoryReadMixin, viewsets.ReadOnlyModelViewSet):
    queryset = SubAssemblyStock.objects.select_related("armature").order_by("armature__code")
    serializer_class = SubAssemblyStockSerializer
    filterset_fields = ["armature"]


class StockMovementViewSet(_InventoryReadMixin, viewsets.ReadOnlyModelViewSet):
    queryset = (
        StockMovement.objects.select_related("product", "material", "armature", "actor")
        .order_by("-created_at")
    )
    serializer_class = StockMovementSerializer
    filterset_class = StockMovementFilter


# ==========================================================
# MANUAL OPERATIONS
# ==========================================================


class StockAdjustmentView(_InventoryWriteMixin, generics.GenericAPIView):
    serializer_class = StockAdjustmentInputSerializer

    @extend_schema(
        request=StockAdjustmentInputSerializer,
        responses={201: StockMovementSerializer},
        description="Manual stock adjustment: add, remove (floored at zero) or set.",
    )
    def post(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            item = resolve_item(item_class=data["item_class"], item_id=data["item_id"])
            result = adjust_stock(
                item=item,
                mode=data["mode"],
                quantity=data["quantity"],
                actor=request.user,
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        payload = StockMovementSerializer(result.movement).data
        payload["stock_before"] = str(result.stock_before)
        payload["stock_after"] = str(result.stock_after)
        return Response(payload, status=status.HTTP_201_CREATED)


class OpeningStockView(_InventoryWriteMixin, generics.GenericAPIView):
    serializer_class = OpeningStockInputSerializer

    @extend_schema(
        request=OpeningStockInputSerializer,
        responses={201: StockMovementSerializer},
        description="Record opening stock for an item as an 'initial' movement.",
    )
    def post(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            item = resolve_item(item_class=data["item_class"], item_id=data["item_id"])
            result = open_stock(
                item=item,
                quantity=data["quantity"],
                actor=request.user,
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return Response(
            StockMovementSerializer(result.movement).data,
            status=status.HTTP_201_CREATED,
        )


class SubAssemblyEntryView(_InventoryWriteMixin, generics.GenericAPIView):
    serializer_class = SubAssemblyEntryInputSerializer

    @extend_schema(
        request=SubAssemblyEntryInputSerializer,
        responses={201: StockMovementSerializer},
        description="Record fabricated armatures entering stock outside a daily report.",
    )
    def post(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            armature = Armature.objects.filter(pk=data["armature_id"]).first()
            if armature is None:
                raise ItemNotFound(f"Armature {data['armature_id']} not found")
            result = record_sub_assembly_entry(
                armature=armature,
                quantity=data["quantity"],
                actor=request.user,
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        return Response(
            StockMovementSerializer(result.movement).data,
            status=status.HTTP_201_CREATED,
        )


class DeliveryView(_InventoryWriteMixin, generics.GenericAPIView):
    serializer_class = DeliveryInputSerializer

    @extend_schema(
        request=DeliveryInputSerializer,
        responses={201: StockMovementSerializer},
        description="Record finished products leaving the yard, optionally against an order.",
    )
    def post(self, request):
        ser = self.get_serializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data

        try:
            product = PbaProduct.objects.filter(pk=data["product_id"]).first()
            if product is None:
                raise ItemNotFound(f"Product {data['product_id']} not found")

            order = None
            if data.get("order_id"):
                order = Order.objects.filter(pk=data["order_id"]).first()
                if order is None:
                    raise OrderNotFound(f"Order {data['order_id']} not found")

            result = record_delivery(
                product=product,
                quantity=data["quantity"],
                actor=request.user,
                order=order,
                notes=data.get("notes", ""),
            )
        except WorkflowError as exc:
            return workflow_error_response(exc)

        payload = StockMovementSerializer(result.movement).data
        payload["remaining_stock"] = result.stock.current_stock
        return Response(payload, status=status.HTTP_201_CREATED)


# ==========================================================
# SUMMARY
# ==========================================================


class StockSummaryView(_InventoryReadMixin, generics.GenericAPIView):
    serializer_class = StockSummarySerializer

    @extend_schema(responses={200: StockSummarySerializer})
    def get(self, request):
        summary = stock_summary()
        return Response(StockSummarySerializer(summary).data)
