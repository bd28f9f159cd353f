# Overview: Inventory state calculator; folds stock movements into per-item levels.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from .records import (
    MOVEMENT_LABELS,
    InventoryItem,
    StockMovement,
    StockMovementType,
)
"""
Restobooks Inventory Invariants (authoritative)

- Stock levels are derived from StockMovement records; never stored.
- stockIn adds its quantity, out subtracts it, adjustment SETS the level to its
  quantity (absolute overwrite, not a delta).
- Movements are folded in (occurred_at, id) order. The last adjustment by time
  wins and erases everything before it for that item. The store stamps
  occurred_at at creation, so this matches insertion order without relying on
  how the listing happens to be sorted.
- Items with no movements read back as 0. Unknown item ids never fail.
- Low stock: threshold set AND level < threshold (strict).
"""

UNKNOWN_ITEM_NAME = "Unknown"

ZERO = Decimal("0")


def _fold_order(movement: StockMovement):
    return (movement.occurred_at, movement.id)


def compute_stock_levels(movements: Iterable[StockMovement]) -> dict[int, Decimal]:
    levels: dict[int, Decimal] = {}
    for movement in sorted(movements, key=_fold_order):
        current = levels.get(movement.item_id, ZERO)
        if movement.movement_type == StockMovementType.STOCK_IN:
            levels[movement.item_id] = current + movement.quantity
        elif movement.movement_type == StockMovementType.OUT:
            levels[movement.item_id] = current - movement.quantity
        else:
            levels[movement.item_id] = movement.quantity
    return levels


def stock_level(movements: Iterable[StockMovement], item_id: int) -> Decimal:
    return compute_stock_levels(
        m for m in movements if m.item_id == item_id
    ).get(item_id, ZERO)


def is_low_stock(level: Decimal, threshold: Decimal | None) -> bool:
    if threshold is None:
        return False
    return level < threshold


@dataclass(frozen=True)
class ItemStock:
    item: InventoryItem
    level: Decimal
    is_low_stock: bool

    def to_dict(self) -> dict:
        threshold = self.item.low_stock_threshold
        return {
            "item_id": self.item.id,
            "name": self.item.name,
            "unit": self.item.unit,
            "level": str(self.level),
            "low_stock_threshold": str(threshold) if threshold is not None else None,
            "is_low_stock": self.is_low_stock,
        }


def inventory_status(
    items: Iterable[InventoryItem],
    movements: Iterable[StockMovement],
) -> list[ItemStock]:
    """Current level and low-stock flag for every catalog item, in catalog order."""
    levels = compute_stock_levels(movements)
    rows = []
    for item in items:
        level = levels.get(item.id, ZERO)
        rows.append(
            ItemStock(
                item=item,
                level=level,
                is_low_stock=is_low_stock(level, item.low_stock_threshold),
            )
        )
    return rows


def low_stock_items(items, movements) -> list[ItemStock]:
    return [row for row in inventory_status(items, movements) if row.is_low_stock]


@dataclass(frozen=True)
class MovementRow:
    movement: StockMovement
    item_name: str
    unit: str | None

    def to_dict(self) -> dict:
        m = self.movement
        return {
            "id": m.id,
            "item_id": m.item_id,
            "item_name": self.item_name,
            "unit": self.unit,
            "movement_type": m.movement_type.value,
            "movement_label": MOVEMENT_LABELS[m.movement_type],
            "quantity": str(m.quantity),
            "notes": m.notes,
            "occurred_at": m.occurred_at.to_utc_z(),
        }


def describe_movements(
    movements: Iterable[StockMovement],
    items: Iterable[InventoryItem],
) -> list[MovementRow]:
    """Join movements with the catalog; dangling item ids render as Unknown."""
    catalog = {item.id: item for item in items}
    rows = []
    for movement in movements:
        item = catalog.get(movement.item_id)
        rows.append(
            MovementRow(
                movement=movement,
                item_name=item.name if item else UNKNOWN_ITEM_NAME,
                unit=item.unit if item else None,
            )
        )
    return rows
