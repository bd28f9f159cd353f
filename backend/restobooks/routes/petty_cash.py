# Overview: Flask API routes for petty cash; parses input and returns JSON responses.

from flask import Blueprint, request, current_app

from ..ledger.records import PettyCashType
from ..models import PettyCashTransaction
from ..services import petty_cash_service
from restobooks.time_utils import parse_timestamp_bound
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    ValidationError,
    enforce_rules_amount,
)

"""
Time semantics:
- start/end are ISO-8601 datetimes; the window is inclusive on occurred_at.
- The window narrows the listing only. balance_cents always covers every
  transaction.
"""

petty_cash_bp = Blueprint("petty_cash", __name__, url_prefix="/api/petty-cash")

PETTY_CASH_POLICY = ModelValidationPolicy(
    writable_fields={"transaction_type", "amount_cents", "reason"},
    required_on_create={"transaction_type", "amount_cents", "reason"},
    enum_fields={"transaction_type": PettyCashType},
)


@petty_cash_bp.get("")
def list_transactions_route():
    try:
        start = parse_timestamp_bound(request.args.get("start"))
        end = parse_timestamp_bound(request.args.get("end"))
    except ValueError:
        return {"error": "start and end must be ISO-8601 datetimes"}, 400

    return petty_cash_service.list_transactions(start=start, end=end)


@petty_cash_bp.get("/balance")
def balance_route():
    return petty_cash_service.get_balance()


@petty_cash_bp.post("")
def record_transaction_route():
    payload = request.get_json(silent=True) or {}
    if isinstance(payload, dict):
        payload = dict(payload)
        occurred_at = payload.pop("occurred_at", None)
    else:
        occurred_at = None

    try:
        patch = validate_payload(
            model=PettyCashTransaction,
            payload=payload,
            policy=PETTY_CASH_POLICY,
            partial=False,
        )
        enforce_rules_amount(patch)
        created = petty_cash_service.record_transaction(patch=patch, occurred_at=occurred_at)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except Exception:
        current_app.logger.exception("Failed to record petty cash transaction")
        raise

    return created, 201
