# inventory/services/summary.py

"""
STOCK SUMMARY (dashboard read model)

Totals per item class over ACTIVE catalog items, the top producers and
the finished products under the low-stock threshold. Active products with
no ledger row yet count as zero stock.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from django.conf import settings
from django.db.models import Count, IntegerField, Q, Sum, Value
from django.db.models.functions import Coalesce

from catalog.models import Armature, Material, PbaProduct

TOP_PRODUCERS = 5


@dataclass(frozen=True)
class StockSummary:
    low_stock_threshold: int
    finished: dict
    sub_assemblies: dict
    materials: dict
    top_products: list = field(default_factory=list)
    low_stock_products: list = field(default_factory=list)


def _zero_int(expr):
    return Coalesce(expr, Value(0), output_field=IntegerField())


def stock_summary(*, low_stock_threshold: int | None = None) -> StockSummary:
    threshold = (
        settings.LOW_STOCK_THRESHOLD if low_stock_threshold is None else low_stock_threshold
    )

    products = PbaProduct.objects.filter(is_active=True).annotate(
        on_hand=_zero_int("stock__current_stock"),
        produced=_zero_int("stock__total_produced"),
    )

    finished = products.aggregate(
        total_products=Count("id"),
        total_stock=Coalesce(Sum("on_hand"), 0),
        total_produced=Coalesce(Sum("stock__total_produced"), 0),
        total_delivered=Coalesce(Sum("stock__total_delivered"), 0),
        low_stock_count=Count("id", filter=Q(on_hand__lt=threshold)),
    )

    sub_assemblies = Armature.objects.filter(is_active=True).aggregate(
        total_armatures=Count("id"),
        total_stock=Coalesce(Sum("stock__current_stock"), 0),
        total_entries=Coalesce(Sum("stock__total_entries"), 0),
    )

    materials = {
        "total_materials": Material.objects.filter(is_active=True).count(),
        "by_unit": {
            row["stock__unit"]: row["total"]
            for row in Material.objects.filter(is_active=True, stock__isnull=False)
            .values("stock__unit")
            .annotate(total=Sum("stock__current_stock"))
            .order_by("stock__unit")
        },
    }

    top_products = [
        {"code": p.code, "name": p.name, "total_produced": p.produced, "current_stock": p.on_hand}
        for p in products.order_by("-produced", "code")[:TOP_PRODUCERS]
    ]

    low_stock_products = [
        {"code": p.code, "name": p.name, "current_stock": p.on_hand}
        for p in products.filter(on_hand__lt=threshold).order_by("on_hand", "code")
    ]

    return StockSummary(
        low_stock_threshold=threshold,
        finished=finished,
        sub_assemblies=sub_assemblies,
        materials=materials,
        top_products=top_products,
        low_stock_products=low_stock_products,
    )
