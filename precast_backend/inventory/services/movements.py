# inventory/services/movements.py

"""
MOVEMENT RECORDER

Purpose:
- Append one immutable StockMovement row.

Rules:
- Pure append: no business validation beyond item/actor integrity
  (enforced by the model's foreign keys and full_clean)
- Callers own the transaction; ledger.apply_movement is the only
  production caller, so a movement always lands with its ledger update
"""

from __future__ import annotations

from decimal import Decimal

from inventory.models import StockMovement


def record(
    *,
    item_class: str,
    item,
    kind: str,
    quantity: Decimal,
    applied_quantity: Decimal | None = None,
    reference_kind: str,
    reference_id=None,
    actor=None,
    notes: str = "",
) -> StockMovement:
    item_field = StockMovement.ITEM_FIELDS[item_class]

    return StockMovement.objects.create(
        item_class=item_class,
        kind=kind,
        quantity=quantity,
        applied_quantity=quantity if applied_quantity is None else applied_quantity,
        reference_kind=reference_kind,
        reference_id=str(reference_id) if reference_id else "",
        actor=actor,
        notes=(notes or "").strip(),
        **{item_field: item},
    )
