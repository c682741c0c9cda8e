# inventory/admin.py

"""
INVENTORY ADMIN

Ledger rows and movements are read-only here: every change must go
through inventory.services so the movement log stays complete.
"""

from django.contrib import admin

from inventory.models import (
    FinishedProductStock,
    RawMaterialStock,
    StockMovement,
    SubAssemblyStock,
)


class _ReadOnlyAdmin(admin.ModelAdmin):
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(FinishedProductStock)
class FinishedProductStockAdmin(_ReadOnlyAdmin):
    list_display = ("product", "current_stock", "total_produced", "total_delivered", "last_updated")
    search_fields = ("product__code", "product__name")


@admin.register(RawMaterialStock)
class RawMaterialStockAdmin(_ReadOnlyAdmin):
    list_display = ("material", "current_stock", "unit", "total_used", "last_updated")
    search_fields = ("material__code", "material__name")


@admin.register(SubAssemblyStock)
class SubAssemblyStockAdmin(_ReadOnlyAdmin):
    list_display = ("armature", "current_stock", "total_entries", "last_updated")
    search_fields = ("armature__code", "armature__name")


@admin.register(StockMovement)
class StockMovementAdmin(_ReadOnlyAdmin):
    list_display = (
        "created_at",
        "item_class",
        "kind",
        "quantity",
        "applied_quantity",
        "reference_kind",
        "reference_id",
        "actor",
    )
    list_filter = ("item_class", "kind", "reference_kind")
    search_fields = ("reference_id", "notes")
