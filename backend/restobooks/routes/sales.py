# Overview: Flask API routes for sales entries; parses input and returns JSON responses.

from flask import Blueprint, request, current_app

from ..ledger.dates import coerce_date_bound
from ..ledger.errors import MalformedDateError
from ..models import SalesEntry
from ..services import sales_service
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    ValidationError,
    enforce_rules_amount,
    validate_payload,
)

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")

SALES_POLICY = ModelValidationPolicy(
    writable_fields={"date", "amount_cents", "notes"},
    required_on_create={"date", "amount_cents"},
    calendar_date_fields={"date"},
)


@sales_bp.get("")
def list_sales():
    """
    List sales entries, oldest first.

    Query params:
    - start: calendar day (YYYYMMDD or YYYY-MM-DD), inclusive, optional
    - end: calendar day, inclusive, optional
    """
    try:
        start = coerce_date_bound(request.args.get("start"))
        end = coerce_date_bound(request.args.get("end"))
    except MalformedDateError as e:
        return {"error": str(e)}, 400

    return sales_service.list_sales(start=start, end=end)


@sales_bp.post("")
def create_sale_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=SalesEntry, payload=payload, policy=SALES_POLICY, partial=False)
        enforce_rules_amount(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        created = sales_service.create_sale(patch=patch)
    except Exception:
        current_app.logger.exception("Failed to create sales entry")
        raise

    return created, 201


@sales_bp.get("/<int:entry_id>")
def get_sale_route(entry_id: int):
    try:
        return sales_service.get_sale(entry_id)
    except NotFoundError as e:
        return {"error": str(e)}, 404


@sales_bp.put("/<int:entry_id>")
def update_sale_route(entry_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=SalesEntry, payload=payload, policy=SALES_POLICY, partial=True)
        enforce_rules_amount(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        return sales_service.update_sale(entry_id, patch=patch)
    except NotFoundError as e:
        return {"error": str(e)}, 404
    except Exception:
        current_app.logger.exception("Failed to update sales entry")
        raise


@sales_bp.delete("/<int:entry_id>")
def delete_sale_route(entry_id: int):
    try:
        sales_service.delete_sale(entry_id)
    except NotFoundError as e:
        return {"error": str(e)}, 404
    except Exception:
        current_app.logger.exception("Failed to delete sales entry")
        raise

    return {"deleted": True, "id": entry_id}, 200
