# inventory/urls.py

"""
INVENTORY URLS

Rules:
- Explicit non-PK routes MUST be registered BEFORE router URLs,
  otherwise the router treats "entries" as a <pk>.

Provides (under /api/inventory/):
- finished/ materials/ sub-assemblies/   ledger rows (read)
- movements/                             audit log (read, filterable)
- adjustments/                           POST manual adjustment
- opening/                               POST opening stock
- sub-assemblies/entries/                POST armature entry
- deliveries/                            POST finished-product dispatch
- summary/                               GET dashboard totals + low stock
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from inventory.views import (
    DeliveryView,
    FinishedProductStockViewSet,
    OpeningStockView,
    RawMaterialStockViewSet,
    StockAdjustmentView,
    StockMovementViewSet,
    StockSummaryView,
    SubAssemblyEntryView,
    SubAssemblyStockViewSet,
)

router = DefaultRouter()

router.register(r"finished", FinishedProductStockViewSet, basename="stock-finished")
router.register(r"materials", RawMaterialStockViewSet, basename="stock-materials")
router.register(r"sub-assemblies", SubAssemblyStockViewSet, basename="stock-sub-assemblies")
router.register(r"movements", StockMovementViewSet, basename="stock-movements")

urlpatterns = [
    # IMPORTANT: explicit routes BEFORE router URLs
    path("adjustments/", StockAdjustmentView.as_view(), name="stock-adjustments"),
    path("opening/", OpeningStockView.as_view(), name="stock-opening"),
    path("deliveries/", DeliveryView.as_view(), name="stock-deliveries"),
    path("summary/", StockSummaryView.as_view(), name="stock-summary"),
    path(
        "sub-assemblies/entries/",
        SubAssemblyEntryView.as_view(),
        name="stock-sub-assembly-entries",
    ),
    path("", include(router.urls)),
]
