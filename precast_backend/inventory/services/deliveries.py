# inventory/services/deliveries.py

"""
FINISHED PRODUCT DELIVERIES (outside the payment cascade)

Purpose:
- Yard dispatch recorded by hand, optionally against an order.

Rules:
- quantity is a whole number > 0
- refused with InsufficientStock when current_stock < quantity
  (the payment cascade has no such check: finished goods may go negative
  there, a hand-recorded dispatch may not)
- reference_kind = order when an order is given, otherwise manual
- total_delivered is bumped by the ledger like any delivery
"""

from __future__ import annotations

import logging

from django.db import transaction

from catalog.models import PbaProduct
from core.exceptions import InsufficientStock, InvalidQuantity
from inventory.models import StockMovement
from inventory.services.ledger import (
    MovementResult,
    apply_movement,
    lock_item_and_stock,
    to_quantity,
)

logger = logging.getLogger(__name__)


@transaction.atomic
def record_delivery(
    *,
    product: PbaProduct,
    quantity,
    actor=None,
    order=None,
    notes: str = "",
) -> MovementResult:
    qty = int(to_quantity(quantity, integral=True))
    if qty < 0:
        raise InvalidQuantity("delivery quantity must be > 0")

    _, stock = lock_item_and_stock(product, allow_inactive=order is not None)

    if stock.current_stock < qty:
        logger.warning(
            "Delivery above available stock rejected",
            extra={
                "product": product.code,
                "available": stock.current_stock,
                "requested": qty,
            },
        )
        raise InsufficientStock(
            f"Only {stock.current_stock} x {product.code} in stock, {qty} requested"
        )

    if order is not None:
        reference_kind = StockMovement.ReferenceKind.ORDER
        reference_id = order.id
        label = f"Delivery for order {order.number}"
    else:
        reference_kind = StockMovement.ReferenceKind.MANUAL
        reference_id = None
        label = "Manual delivery"

    return apply_movement(
        item=product,
        kind=StockMovement.Kind.DELIVERY,
        quantity=-qty,
        reference_kind=reference_kind,
        reference_id=reference_id,
        actor=actor,
        notes=f"{label}. {notes}".strip() if notes else label,
        allow_inactive=order is not None,
    )
