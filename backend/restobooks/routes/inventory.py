# backend/restobooks/routes/inventory.py
"""
Inventory routes: item catalog, stock movements, derived stock status.

Time semantics:
- occurred_at accepts ISO-8601 datetimes with Z/offsets; the backend
  normalizes to UTC-naive internally and defaults it to now.
"""
from flask import Blueprint, request, current_app

from ..ledger.records import StockMovementType
from ..models import InventoryItem, StockMovement
from ..services import inventory_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    ValidationError,
    enforce_rules_inventory_item,
    enforce_rules_stock_movement,
)


inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")

ITEM_POLICY = ModelValidationPolicy(
    writable_fields={"name", "unit", "low_stock_threshold"},
    required_on_create={"name", "unit"},
)

MOVEMENT_POLICY = ModelValidationPolicy(
    writable_fields={"item_id", "movement_type", "quantity", "notes"},
    required_on_create={"item_id", "movement_type", "quantity"},
    enum_fields={"movement_type": StockMovementType},
)


@inventory_bp.get("/items")
def list_items_route():
    return inventory_service.list_items()


@inventory_bp.post("/items")
def create_item_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=InventoryItem, payload=payload, policy=ITEM_POLICY, partial=False)
        enforce_rules_inventory_item(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        created = inventory_service.create_item(patch=patch)
    except Exception:
        current_app.logger.exception("Failed to create inventory item")
        raise

    return created, 201


@inventory_bp.get("/movements")
def list_movements_route():
    """
    All stock movements in store order, joined with item name and unit.

    Movements whose item no longer exists are listed with item_name "Unknown".
    """
    return inventory_service.list_movements()


@inventory_bp.post("/movements")
def record_movement_route():
    """
    Record a stock movement.

    movement_type:
    - stockIn: adds quantity
    - out: subtracts quantity
    - adjustment: sets the level to quantity (physical count)
    """
    payload = request.get_json(silent=True) or {}
    if isinstance(payload, dict):
        payload = dict(payload)
        occurred_at = payload.pop("occurred_at", None)
    else:
        occurred_at = None

    try:
        patch = validate_payload(model=StockMovement, payload=payload, policy=MOVEMENT_POLICY, partial=False)
        enforce_rules_stock_movement(patch)
        created = inventory_service.record_movement(patch=patch, occurred_at=occurred_at)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to record stock movement")
        raise

    return created, 201


@inventory_bp.get("/status")
def inventory_status_route():
    """
    Current stock level and low-stock flag for every catalog item.

    Query params:
    - low_stock: "1" / "true" lists only items below their threshold
    """
    low_stock_only = request.args.get("low_stock", "").strip().lower() in ("1", "true", "yes")
    return inventory_service.get_inventory_status(low_stock_only=low_stock_only)
