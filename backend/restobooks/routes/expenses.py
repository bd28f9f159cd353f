# Overview: Flask API routes for expense entries; parses input and returns JSON responses.

from flask import Blueprint, request, current_app

from ..ledger.dates import coerce_date_bound
from ..ledger.errors import MalformedDateError
from ..ledger.records import ExpenseCategory, ExpenseType, PaymentMethod
from ..models import ExpenseEntry
from ..services import sales_service
from ..validation import (
    ModelValidationPolicy,
    NotFoundError,
    ValidationError,
    enforce_rules_amount,
    validate_payload,
)

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api/expenses")

EXPENSE_POLICY = ModelValidationPolicy(
    writable_fields={"date", "category", "expense_type", "amount_cents", "payment_method", "notes"},
    required_on_create={"date", "category", "expense_type", "amount_cents", "payment_method"},
    calendar_date_fields={"date"},
    enum_fields={
        "category": ExpenseCategory,
        "expense_type": ExpenseType,
        "payment_method": PaymentMethod,
    },
)


def _code_filter(name: str, enum_cls):
    raw = request.args.get(name)
    if not raw or raw == "all":
        return None
    try:
        return enum_cls(raw).value
    except ValueError:
        raise ValidationError(f"{name} must be one of: {', '.join(m.value for m in enum_cls)}")


@expenses_bp.get("")
def list_expenses():
    """
    List expense entries, oldest first.

    Query params:
    - start / end: calendar days, inclusive, optional
    - category: expense category code, optional ("all" = no filter)
    - expense_type: fixed | variable, optional ("all" = no filter)
    """
    try:
        start = coerce_date_bound(request.args.get("start"))
        end = coerce_date_bound(request.args.get("end"))
        category = _code_filter("category", ExpenseCategory)
        expense_type = _code_filter("expense_type", ExpenseType)
    except (MalformedDateError, ValidationError) as e:
        return {"error": str(e)}, 400

    return sales_service.list_expenses(
        start=start,
        end=end,
        category=category,
        expense_type=expense_type,
    )


@expenses_bp.post("")
def create_expense_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=ExpenseEntry, payload=payload, policy=EXPENSE_POLICY, partial=False)
        enforce_rules_amount(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        created = sales_service.create_expense(patch=patch)
    except Exception:
        current_app.logger.exception("Failed to create expense entry")
        raise

    return created, 201


@expenses_bp.get("/<int:entry_id>")
def get_expense_route(entry_id: int):
    try:
        return sales_service.get_expense(entry_id)
    except NotFoundError as e:
        return {"error": str(e)}, 404


@expenses_bp.put("/<int:entry_id>")
def update_expense_route(entry_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=ExpenseEntry, payload=payload, policy=EXPENSE_POLICY, partial=True)
        enforce_rules_amount(patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    try:
        return sales_service.update_expense(entry_id, patch=patch)
    except NotFoundError as e:
        return {"error": str(e)}, 404
    except Exception:
        current_app.logger.exception("Failed to update expense entry")
        raise


@expenses_bp.delete("/<int:entry_id>")
def delete_expense_route(entry_id: int):
    try:
        sales_service.delete_expense(entry_id)
    except NotFoundError as e:
        return {"error": str(e)}, 404
    except Exception:
        current_app.logger.exception("Failed to delete expense entry")
        raise

    return {"deleted": True, "id": entry_id}, 200
