# inventory/services/reconciliation.py

"""
LEDGER RECONCILIATION

Replays the movement log and compares it with the cached ledger rows.

GUARANTEE CHECKED:
- current_stock == sum(applied_quantity) over the item's movements
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Sum

from inventory.models import StockMovement
from inventory.services.ledger import BINDINGS, binding_for


@dataclass(frozen=True)
class ReconciliationLine:
    item_class: str
    item_id: str
    code: str
    ledger_stock: Decimal
    replayed_stock: Decimal

    @property
    def matches(self) -> bool:
        return self.ledger_stock == self.replayed_stock

    @property
    def drift(self) -> Decimal:
        return self.ledger_stock - self.replayed_stock


def replay_movements(item) -> Decimal:
    binding = binding_for(item)
    total = StockMovement.objects.filter(
        item_class=binding.item_class, **{binding.item_field: item}
    ).aggregate(total=Sum("applied_quantity"))["total"]
    return Decimal(total or 0)


def reconcile_item(item) -> ReconciliationLine:
    binding = binding_for(item)
    stock = binding.stock_model.objects.filter(**{binding.item_field: item}).first()
    ledger_stock = Decimal(stock.current_stock) if stock else Decimal("0")

    return ReconciliationLine(
        item_class=binding.item_class,
        item_id=str(item.pk),
        code=item.code,
        ledger_stock=ledger_stock,
        replayed_stock=replay_movements(item),
    )


def reconcile_all() -> list[ReconciliationLine]:
    lines: list[ReconciliationLine] = []
    for binding in BINDINGS.values():
        for item in binding.item_model.objects.order_by("code"):
            lines.append(reconcile_item(item))
    return lines
