# inventory/services/ledger.py

"""
STOCK LEDGER SERVICE

Purpose:
- The ONLY code path that mutates ledger rows.
- Every mutation appends exactly one StockMovement in the same transaction.

Rules:
- item must exist and be active (ItemNotFound / ItemInactive); order
  deliveries may move a since-retired item (allow_inactive)
- quantity must be non-zero; integer for finished products and sub-assemblies
- sign must match the kind:
    initial, production  -> positive
    delivery, usage      -> negative
    adjustment           -> either
- raw materials are floored at zero: the movement keeps the requested
  quantity, applied_quantity holds the delta actually applied
- finished products and sub-assemblies have no floor

Counters:
- finished: initial -> initial_stock, production -> total_produced,
  delivery -> total_delivered
- raw material: usage -> total_used (requested quantity)
- sub-assembly: production -> total_entries
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.db import transaction

from catalog.models import Armature, Material, PbaProduct
from core.exceptions import (
    InvalidQuantity,
    ItemInactive,
    ItemNotFound,
    UnsupportedMovement,
)
from inventory.models import (
    FinishedProductStock,
    RawMaterialStock,
    StockMovement,
    SubAssemblyStock,
)
from inventory.services import movements

logger = logging.getLogger(__name__)

ItemClass = StockMovement.ItemClass
Kind = StockMovement.Kind

QUANTITY_PLACES = Decimal("0.001")


# ============================================================
# ITEM CLASS BINDINGS
# ============================================================


@dataclass(frozen=True)
class ItemBinding:
    item_class: str
    item_model: type
    stock_model: type
    item_field: str
    integral: bool
    floor_at_zero: bool
    kinds: frozenset


BINDINGS = {
    ItemClass.FINISHED_PRODUCT: ItemBinding(
        item_class=ItemClass.FINISHED_PRODUCT,
        item_model=PbaProduct,
        stock_model=FinishedProductStock,
        item_field="product",
        integral=True,
        floor_at_zero=False,
        kinds=frozenset({Kind.INITIAL, Kind.PRODUCTION, Kind.DELIVERY, Kind.ADJUSTMENT}),
    ),
    ItemClass.RAW_MATERIAL: ItemBinding(
        item_class=ItemClass.RAW_MATERIAL,
        item_model=Material,
        stock_model=RawMaterialStock,
        item_field="material",
        integral=False,
        floor_at_zero=True,
        kinds=frozenset({Kind.INITIAL, Kind.USAGE, Kind.ADJUSTMENT}),
    ),
    ItemClass.SUB_ASSEMBLY: ItemBinding(
        item_class=ItemClass.SUB_ASSEMBLY,
        item_model=Armature,
        stock_model=SubAssemblyStock,
        item_field="armature",
        integral=True,
        floor_at_zero=False,
        kinds=frozenset({Kind.INITIAL, Kind.PRODUCTION, Kind.ADJUSTMENT}),
    ),
}

POSITIVE_KINDS = {Kind.INITIAL, Kind.PRODUCTION}
NEGATIVE_KINDS = {Kind.DELIVERY, Kind.USAGE}


def binding_for(item) -> ItemBinding:
    for binding in BINDINGS.values():
        if isinstance(item, binding.item_model):
            return binding
    raise ItemNotFound(f"Unsupported stock item type: {type(item).__name__}")


def binding_for_class(item_class: str) -> ItemBinding:
    try:
        return BINDINGS[item_class]
    except KeyError as exc:
        raise ItemNotFound(f"Unknown item class '{item_class}'") from exc


def resolve_item(*, item_class: str, item_id):
    """Load a catalog item by class + id (used by API callers)."""
    binding = binding_for_class(item_class)
    try:
        return binding.item_model.objects.get(pk=item_id)
    except (binding.item_model.DoesNotExist, ValueError) as exc:
        raise ItemNotFound(f"{item_class} {item_id} not found") from exc


# ============================================================
# RESULT
# ============================================================


@dataclass(frozen=True)
class MovementResult:
    movement: StockMovement
    stock: object
    quantity: Decimal
    applied_quantity: Decimal

    @property
    def clamped(self) -> bool:
        return self.quantity != self.applied_quantity


# ============================================================
# HELPERS
# ============================================================


def to_quantity(value, *, integral: bool, allow_zero: bool = False) -> Decimal:
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidQuantity("quantity is required")

    try:
        qty = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidQuantity("quantity must be a number") from exc

    if not qty.is_finite():
        raise InvalidQuantity("quantity must be a number")

    if integral and qty != qty.to_integral_value():
        raise InvalidQuantity("quantity must be a whole number for this item")

    if qty == 0 and not allow_zero:
        raise InvalidQuantity("quantity cannot be 0")

    return qty.quantize(QUANTITY_PLACES)


def _ledger_value(binding: ItemBinding, qty: Decimal):
    return int(qty) if binding.integral else qty


def _check_kind(binding: ItemBinding, kind: str, qty: Decimal) -> None:
    if kind not in binding.kinds:
        raise UnsupportedMovement(
            f"'{kind}' movements are not allowed for {binding.item_class}"
        )
    if kind in POSITIVE_KINDS and qty < 0:
        raise InvalidQuantity(f"'{kind}' movements must be positive")
    if kind in NEGATIVE_KINDS and qty > 0:
        raise InvalidQuantity(f"'{kind}' movements must be negative")


def _lock_item(binding: ItemBinding, item, *, allow_inactive: bool = False):
    locked = binding.item_model.objects.select_for_update().filter(pk=item.pk).first()
    if locked is None:
        raise ItemNotFound(f"{binding.item_class} {item.pk} not found")
    if not locked.is_active and not allow_inactive:
        raise ItemInactive(f"{binding.item_class} {locked.code} is inactive")
    return locked


def _stock_defaults(binding: ItemBinding, item) -> dict:
    if binding.item_class == ItemClass.RAW_MATERIAL:
        return {"unit": item.unit}
    return {}


def lock_item_and_stock(item, *, allow_inactive: bool = False):
    """
    Row-lock the catalog item, then its ledger row (created on first use).

    Lock order is always item -> ledger row. Must run inside a transaction.
    """
    binding = binding_for(item)
    locked_item = _lock_item(binding, item, allow_inactive=allow_inactive)
    stock, _ = binding.stock_model.objects.select_for_update().get_or_create(
        **{binding.item_field: locked_item},
        defaults=_stock_defaults(binding, locked_item),
    )
    return locked_item, stock


def _bump_counters(binding: ItemBinding, stock, kind: str, qty: Decimal) -> None:
    value = _ledger_value(binding, abs(qty))

    if binding.item_class == ItemClass.FINISHED_PRODUCT:
        if kind == Kind.INITIAL:
            stock.initial_stock += value
        elif kind == Kind.PRODUCTION:
            stock.total_produced += value
        elif kind == Kind.DELIVERY:
            stock.total_delivered += value

    elif binding.item_class == ItemClass.RAW_MATERIAL:
        if kind == Kind.USAGE:
            stock.total_used += value

    elif binding.item_class == ItemClass.SUB_ASSEMBLY:
        if kind == Kind.PRODUCTION:
            stock.total_entries += value


# ============================================================
# PRIMITIVE
# ============================================================


@transaction.atomic
def apply_movement(
    *,
    item,
    kind: str,
    quantity,
    reference_kind: str,
    reference_id=None,
    actor=None,
    notes: str = "",
    allow_inactive: bool = False,
) -> MovementResult:
    """
    Apply one signed quantity to an item's ledger row and record the movement.

    Raw materials clamp at zero; the returned result exposes both the
    requested quantity and the delta actually applied.

    allow_inactive is for fulfilling documents issued while the item was
    still active (order deliveries); new work on a retired item is refused.
    """
    binding = binding_for(item)
    qty = to_quantity(quantity, integral=binding.integral)
    _check_kind(binding, kind, qty)

    locked_item, stock = lock_item_and_stock(item, allow_inactive=allow_inactive)

    before = Decimal(stock.current_stock)
    applied = qty
    notes = (notes or "").strip()

    if binding.floor_at_zero and before + qty < 0:
        applied = -before
        clamp_note = (
            f"Requested {qty} {getattr(stock, 'unit', '')}".rstrip()
            + f", applied {applied} (stock floored at zero)."
        )
        notes = f"{notes} {clamp_note}".strip()
        logger.warning(
            "Raw material usage clamped at zero",
            extra={
                "item_class": binding.item_class,
                "item_id": str(locked_item.pk),
                "requested": str(qty),
                "applied": str(applied),
            },
        )

    stock.current_stock = _ledger_value(binding, before + applied)
    _bump_counters(binding, stock, kind, qty)
    stock.save()

    movement = movements.record(
        item_class=binding.item_class,
        item=locked_item,
        kind=kind,
        quantity=qty,
        applied_quantity=applied,
        reference_kind=reference_kind,
        reference_id=reference_id,
        actor=actor,
        notes=notes,
    )

    logger.info(
        "Stock movement applied",
        extra={
            "movement_id": str(movement.id),
            "item_class": binding.item_class,
            "item_id": str(locked_item.pk),
            "kind": kind,
            "quantity": str(qty),
            "applied_quantity": str(applied),
            "reference_kind": reference_kind,
            "reference_id": movement.reference_id,
        },
    )

    return MovementResult(
        movement=movement,
        stock=stock,
        quantity=qty,
        applied_quantity=applied,
    )


def open_stock(*, item, quantity, actor=None, notes: str = "") -> MovementResult:
    """Record opening stock as an 'initial' movement (manual reference)."""
    return apply_movement(
        item=item,
        kind=Kind.INITIAL,
        quantity=quantity,
        reference_kind=StockMovement.ReferenceKind.MANUAL,
        actor=actor,
        notes=notes or "Opening stock",
    )
