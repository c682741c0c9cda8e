# inventory/serializers.py

from rest_framework import serializers

from inventory.models import (
    FinishedProductStock,
    RawMaterialStock,
    StockMovement,
    SubAssemblyStock,
)
from inventory.services.adjustments import ADJUSTMENT_MODES


# ==========================================================
# LEDGER ROWS (READ)
# ==========================================================


class FinishedProductStockSerializer(serializers.ModelSerializer):
    product_code = serializers.CharField(source="product.code", read_only=True)
    product_name = serializers.CharField(source="product.name", read_only=True)
    category = serializers.CharField(source="product.category", read_only=True)

    class Meta:
        model = FinishedProductStock
        fields = [
            "id",
            "product",
            "product_code",
            "product_name",
            "category",
            "initial_stock",
            "current_stock",
            "total_produced",
            "total_delivered",
            "last_updated",
        ]
        read_only_fields = fields


class RawMaterialStockSerializer(serializers.ModelSerializer):
    material_code = serializers.CharField(source="material.code", read_only=True)
    material_name = serializers.CharField(source="material.name", read_only=True)

    class Meta:
        model = RawMaterialStock
        fields = [
            "id",
            "material",
            "material_code",
            "material_name",
            "current_stock",
            "total_used",
            "unit",
            "last_updated",
        ]
        read_only_fields = fields


class SubAssemblyStockSerializer(serializers.ModelSerializer):
    armature_code = serializers.CharField(source="armature.code", read_only=True)
    armature_name = serializers.CharField(source="armature.name", read_only=True)

    class Meta:
        model = SubAssemblyStock
        fields = [
            "id",
            "armature",
            "armature_code",
            "armature_name",
            "current_stock",
            "total_entries",
            "last_updated",
        ]
        read_only_fields = fields


class StockMovementSerializer(serializers.ModelSerializer):
    item_id = serializers.SerializerMethodField()
    item_code = serializers.SerializerMethodField()
    actor_email = serializers.EmailField(source="actor.email", read_only=True, default=None)
    clamped = serializers.BooleanField(source="was_clamped", read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            "id",
            "item_class",
            "item_id",
            "item_code",
            "kind",
            "quantity",
            "applied_quantity",
            "clamped",
            "reference_kind",
            "reference_id",
            "actor",
            "actor_email",
            "notes",
            "created_at",
        ]
        read_only_fields = fields

    def get_item_id(self, obj) -> str:
        return str(obj.item.pk)

    def get_item_code(self, obj) -> str:
        return obj.item.code


# ==========================================================
# MANUAL OPERATIONS (WRITE)
# ==========================================================


class StockAdjustmentInputSerializer(serializers.Serializer):
    item_class = serializers.ChoiceField(choices=StockMovement.ItemClass.choices)
    item_id = serializers.UUIDField()
    mode = serializers.ChoiceField(choices=[(m, m) for m in ADJUSTMENT_MODES])
    quantity = serializers.DecimalField(max_digits=14, decimal_places=3, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class OpeningStockInputSerializer(serializers.Serializer):
    item_class = serializers.ChoiceField(choices=StockMovement.ItemClass.choices)
    item_id = serializers.UUIDField()
    quantity = serializers.DecimalField(max_digits=14, decimal_places=3)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class SubAssemblyEntryInputSerializer(serializers.Serializer):
    armature_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class DeliveryInputSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=1)
    order_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


# ==========================================================
# SUMMARY (READ)
# ==========================================================


class ProductStockLineSerializer(serializers.Serializer):
    code = serializers.CharField()
    name = serializers.CharField()
    current_stock = serializers.IntegerField()
    total_produced = serializers.IntegerField(required=False)


class StockSummarySerializer(serializers.Serializer):
    low_stock_threshold = serializers.IntegerField()
    finished = serializers.DictField(child=serializers.IntegerField())
    sub_assemblies = serializers.DictField(child=serializers.IntegerField())
    materials = serializers.DictField()
    top_products = ProductStockLineSerializer(many=True)
    low_stock_products = ProductStockLineSerializer(many=True)
