# Overview: Service-layer operations for inventory; catalog, stock movements and derived levels.

# backend/restobooks/services/inventory_service.py

from datetime import datetime, timedelta, timezone

from flask import current_app

from ..extensions import db
from ..ledger.inventory import describe_movements, inventory_status, low_stock_items
from ..models import InventoryItem, StockMovement
from ..validation import ValidationError
from restobooks.time_utils import utcnow, parse_iso_datetime
from . import snapshot_service
"""
Restobooks Inventory Store Rules (authoritative)

- Catalog items and stock movements are append-only: create + list.
- A movement must reference an existing item when it is recorded. Items may
  disappear later; readers then show the movement as Unknown.
- occurred_at defaults to now. A client may backdate it (e.g. a count taken
  earlier in the day) but never put it in the future beyond clock skew.
- Stock levels are never stored; see ledger.inventory.
"""

FUTURE_SKEW = timedelta(minutes=2)


def _parse_occurred_at(value):
    """
    Normalize occurred_at to canonical UTC-naive datetime.

    Accepts:
    - None -> utcnow() (UTC-naive)
    - datetime:
        - aware -> convert to UTC, strip tzinfo
        - naive -> treat as UTC-naive
    - str -> parse_iso_datetime (accepts Z/offsets; returns UTC-naive)
    """
    if value is None:
        return utcnow()

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).replace(tzinfo=None)
        return value

    if isinstance(value, str):
        try:
            dt = parse_iso_datetime(value)
        except ValueError:
            raise ValidationError("occurred_at must be an ISO-8601 datetime")
        if dt is None:
            raise ValidationError("occurred_at must be an ISO-8601 datetime")
        return dt

    raise ValidationError("occurred_at must be an ISO-8601 datetime")


def resolve_occurred_at(value) -> datetime:
    occurred_dt = _parse_occurred_at(value)
    if occurred_dt > utcnow() + FUTURE_SKEW:
        raise ValidationError("occurred_at cannot be in the future")
    return occurred_dt


def list_items() -> dict:
    rows, snapshot = snapshot_service.load_rows_and_snapshot(snapshot_service.INVENTORY_ITEMS)
    return {
        "items": [r.to_dict() for r in rows],
        "count": len(rows),
        "revision": snapshot.version,
    }


def create_item(*, patch: dict) -> dict:
    try:
        item = InventoryItem(
            name=patch["name"],
            unit=patch["unit"],
            low_stock_threshold=patch.get("low_stock_threshold"),
        )
        db.session.add(item)
        db.session.flush()
        revision = snapshot_service.bump_revision(snapshot_service.INVENTORY_ITEMS)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("inventory item created id=%s revision=%s", item.id, revision)
    return item.to_dict()


def record_movement(*, patch: dict, occurred_at=None) -> dict:
    occurred_dt = resolve_occurred_at(occurred_at)

    item = db.session.get(InventoryItem, patch["item_id"])
    if item is None:
        raise ValidationError(f"inventory item {patch['item_id']} not found")

    try:
        movement = StockMovement(
            item_id=item.id,
            movement_type=patch["movement_type"],
            quantity=patch["quantity"],
            notes=patch.get("notes"),
            occurred_at=occurred_dt,
        )
        db.session.add(movement)
        db.session.flush()
        revision = snapshot_service.bump_revision(snapshot_service.STOCK_MOVEMENTS)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "stock movement recorded id=%s item_id=%s type=%s revision=%s",
        movement.id,
        movement.item_id,
        movement.movement_type,
        revision,
    )
    return movement.to_dict()


def list_movements() -> dict:
    items = snapshot_service.load_snapshot(snapshot_service.INVENTORY_ITEMS)
    movements = snapshot_service.load_snapshot(snapshot_service.STOCK_MOVEMENTS)
    rows = describe_movements(movements.records, items.records)
    return {
        "items": [row.to_dict() for row in rows],
        "count": len(rows),
        "revisions": {
            items.stream: items.version,
            movements.stream: movements.version,
        },
    }


def get_inventory_status(*, low_stock_only: bool = False) -> dict:
    """Current level and low-stock flag per catalog item."""
    items = snapshot_service.load_snapshot(snapshot_service.INVENTORY_ITEMS)
    movements = snapshot_service.load_snapshot(snapshot_service.STOCK_MOVEMENTS)
    if low_stock_only:
        rows = low_stock_items(items.records, movements.records)
    else:
        rows = inventory_status(items.records, movements.records)
    return {
        "items": [row.to_dict() for row in rows],
        "count": len(rows),
        "low_stock_count": sum(1 for row in rows if row.is_low_stock),
        "revisions": {
            items.stream: items.version,
            movements.stream: movements.version,
        },
    }
