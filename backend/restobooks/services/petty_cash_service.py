# Overview: Service-layer operations for petty cash; append-only transactions and balance.

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..ledger.dates import EventTimestamp
from ..ledger.petty_cash import filter_by_timestamp, petty_cash_balance
from ..models import PettyCashTransaction
from . import snapshot_service
from .inventory_service import resolve_occurred_at


def get_balance() -> dict:
    snapshot = snapshot_service.load_snapshot(snapshot_service.PETTY_CASH)
    return {
        "balance_cents": petty_cash_balance(snapshot.records),
        "transaction_count": len(snapshot),
        "revision": snapshot.version,
    }


def list_transactions(
    *,
    start: EventTimestamp | None = None,
    end: EventTimestamp | None = None,
) -> dict:
    """
    Transactions inside the inclusive occurred_at window.

    balance_cents always covers the whole stream; the window only narrows
    the listing.
    """
    rows, snapshot = snapshot_service.load_rows_and_snapshot(snapshot_service.PETTY_CASH)
    visible = {t.id for t in filter_by_timestamp(snapshot.records, start, end)}
    rows = [r for r in rows if r.id in visible]
    return {
        "items": [r.to_dict() for r in rows],
        "count": len(rows),
        "balance_cents": petty_cash_balance(snapshot.records),
        "revision": snapshot.version,
    }


def record_transaction(*, patch: dict, occurred_at=None) -> dict:
    occurred_dt = resolve_occurred_at(occurred_at)
    try:
        txn = PettyCashTransaction(
            transaction_type=patch["transaction_type"],
            amount_cents=patch["amount_cents"],
            reason=patch["reason"],
            occurred_at=occurred_dt,
        )
        db.session.add(txn)
        db.session.flush()
        revision = snapshot_service.bump_revision(snapshot_service.PETTY_CASH)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    current_app.logger.info(
        "petty cash %s recorded id=%s amount_cents=%s revision=%s",
        txn.transaction_type,
        txn.id,
        txn.amount_cents,
        revision,
    )
    return txn.to_dict()
