# inventory/services/adjustments.py

"""
STOCK ADJUSTMENTS SERVICE

Purpose:
- Manual, out-of-workflow stock corrections (reference_kind = manual).
- Every mode routes through ledger.apply_movement so the movement log
  stays the single audit trail.

Modes:
- add:    +quantity
- remove: -quantity, never below zero; the movement records the delta
          actually removed (-min(quantity, current)). A remove never raises
          stock: on a finished product already negative (deliveries have no
          floor) it changes nothing and is rejected; use set to correct it.
- set:    absolute target >= 0; movement = target - current

Rules:
- quantity must be > 0 for add/remove, >= 0 for set
- an adjustment that would change nothing is rejected (InvalidAdjustment)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import transaction

from catalog.models import Armature
from core.exceptions import InvalidAdjustment, InvalidQuantity
from inventory.models import StockMovement
from inventory.services.ledger import (
    MovementResult,
    apply_movement,
    binding_for,
    lock_item_and_stock,
    to_quantity,
)

logger = logging.getLogger(__name__)

MODE_ADD = "add"
MODE_REMOVE = "remove"
MODE_SET = "set"

ADJUSTMENT_MODES = (MODE_ADD, MODE_REMOVE, MODE_SET)


@dataclass(frozen=True)
class AdjustmentResult:
    mode: str
    stock_before: Decimal
    stock_after: Decimal
    movement_result: MovementResult

    @property
    def movement(self) -> StockMovement:
        return self.movement_result.movement


@transaction.atomic
def adjust_stock(
    *,
    item,
    mode: str,
    quantity,
    actor=None,
    notes: str = "",
) -> AdjustmentResult:
    mode = (mode or "").strip().lower()
    if mode not in ADJUSTMENT_MODES:
        raise InvalidAdjustment(
            f"Invalid adjustment mode '{mode}'. Use one of: {', '.join(ADJUSTMENT_MODES)}"
        )

    binding = binding_for(item)

    requested = to_quantity(
        quantity, integral=binding.integral, allow_zero=(mode == MODE_SET)
    )

    if requested < 0:
        raise InvalidQuantity("quantity cannot be negative")

    _, stock = lock_item_and_stock(item)
    before = Decimal(stock.current_stock)

    if mode == MODE_ADD:
        delta = requested
    elif mode == MODE_REMOVE:
        delta = -min(requested, max(before, Decimal("0")))
    else:
        delta = requested - before

    if delta == 0:
        raise InvalidAdjustment(
            f"Adjustment leaves {binding.item_class} stock unchanged at {before}"
        )

    label = {
        MODE_ADD: f"Manual add of {requested}",
        MODE_REMOVE: f"Manual removal of {requested}",
        MODE_SET: f"Manual set from {before} to {requested}",
    }[mode]
    note = f"{label}. {notes}".strip() if notes else label

    logger.info(
        "Manual stock adjustment",
        extra={
            "item_class": binding.item_class,
            "item_id": str(item.pk),
            "mode": mode,
            "requested": str(requested),
            "delta": str(delta),
        },
    )

    result = apply_movement(
        item=item,
        kind=StockMovement.Kind.ADJUSTMENT,
        quantity=delta,
        reference_kind=StockMovement.ReferenceKind.MANUAL,
        actor=actor,
        notes=note,
    )

    return AdjustmentResult(
        mode=mode,
        stock_before=before,
        stock_after=Decimal(result.stock.current_stock),
        movement_result=result,
    )


def record_sub_assembly_entry(
    *,
    armature: Armature,
    quantity,
    actor=None,
    notes: str = "",
) -> MovementResult:
    """Manual entry of fabricated armatures (outside a daily report)."""
    return apply_movement(
        item=armature,
        kind=StockMovement.Kind.PRODUCTION,
        quantity=quantity,
        reference_kind=StockMovement.ReferenceKind.MANUAL,
        actor=actor,
        notes=notes or "Manual armature entry",
    )
