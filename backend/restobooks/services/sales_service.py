# Overview: Service-layer operations for sales and expense entries; encapsulates database work.

from __future__ import annotations

from flask import current_app

from ..extensions import db
from ..ledger.dates import CalendarDate
from ..ledger.reports import filter_by_date_range
from ..models import ExpenseEntry, SalesEntry
from ..validation import NotFoundError
from . import snapshot_service

SALES_MUTABLE_FIELDS = {"date", "amount_cents", "notes"}
EXPENSE_MUTABLE_FIELDS = {
    "date",
    "category",
    "expense_type",
    "amount_cents",
    "payment_method",
    "notes",
}


def _apply_patch(row, patch: dict, mutable: set[str]) -> None:
    for k, v in patch.items():
        if k not in mutable:
            continue
        setattr(row, k, v)


def _get_or_404(model, entry_id: int, label: str):
    row = db.session.get(model, entry_id)
    if row is None:
        raise NotFoundError(f"{label} {entry_id} not found")
    return row


def _write(stream: str, row, action: str) -> dict:
    revision = snapshot_service.bump_revision(stream)
    db.session.commit()
    current_app.logger.info("%s %s id=%s revision=%s", stream, action, row.id, revision)
    return row.to_dict()


# -- sales -------------------------------------------------------------------

def list_sales(
    *,
    start: CalendarDate | None = None,
    end: CalendarDate | None = None,
) -> dict:
    rows, snapshot = snapshot_service.load_rows_and_snapshot(snapshot_service.SALES)
    visible = {r.id for r in filter_by_date_range(snapshot.records, start, end)}
    rows = [r for r in rows if r.id in visible]
    return {
        "items": [r.to_dict() for r in rows],
        "count": len(rows),
        "total_cents": sum(r.amount_cents for r in rows),
        "revision": snapshot.version,
    }


def get_sale(entry_id: int) -> dict:
    return _get_or_404(SalesEntry, entry_id, "Sales entry").to_dict()


def create_sale(*, patch: dict) -> dict:
    try:
        row = SalesEntry(
            date=patch["date"],
            amount_cents=patch["amount_cents"],
            notes=patch.get("notes"),
        )
        db.session.add(row)
        db.session.flush()
        return _write(snapshot_service.SALES, row, "created")
    except Exception:
        db.session.rollback()
        raise


def update_sale(entry_id: int, *, patch: dict) -> dict:
    row = _get_or_404(SalesEntry, entry_id, "Sales entry")
    try:
        _apply_patch(row, patch, SALES_MUTABLE_FIELDS)
        db.session.flush()
        return _write(snapshot_service.SALES, row, "updated")
    except Exception:
        db.session.rollback()
        raise


def delete_sale(entry_id: int) -> None:
    row = _get_or_404(SalesEntry, entry_id, "Sales entry")
    try:
        db.session.delete(row)
        db.session.flush()
        revision = snapshot_service.bump_revision(snapshot_service.SALES)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("sales deleted id=%s revision=%s", entry_id, revision)


# -- expenses ----------------------------------------------------------------

def list_expenses(
    *,
    start: CalendarDate | None = None,
    end: CalendarDate | None = None,
    category: str | None = None,
    expense_type: str | None = None,
) -> dict:
    rows, snapshot = snapshot_service.load_rows_and_snapshot(snapshot_service.EXPENSES)
    entries = filter_by_date_range(snapshot.records, start, end)
    if category:
        entries = [e for e in entries if e.category.value == category]
    if expense_type:
        entries = [e for e in entries if e.expense_type.value == expense_type]
    visible = {e.id for e in entries}
    rows = [r for r in rows if r.id in visible]
    return {
        "items": [r.to_dict() for r in rows],
        "count": len(rows),
        "total_cents": sum(r.amount_cents for r in rows),
        "revision": snapshot.version,
    }


def get_expense(entry_id: int) -> dict:
    return _get_or_404(ExpenseEntry, entry_id, "Expense entry").to_dict()


def create_expense(*, patch: dict) -> dict:
    try:
        row = ExpenseEntry(
            date=patch["date"],
            category=patch["category"],
            expense_type=patch["expense_type"],
            payment_method=patch["payment_method"],
            amount_cents=patch["amount_cents"],
            notes=patch.get("notes"),
        )
        db.session.add(row)
        db.session.flush()
        return _write(snapshot_service.EXPENSES, row, "created")
    except Exception:
        db.session.rollback()
        raise


def update_expense(entry_id: int, *, patch: dict) -> dict:
    row = _get_or_404(ExpenseEntry, entry_id, "Expense entry")
    try:
        _apply_patch(row, patch, EXPENSE_MUTABLE_FIELDS)
        db.session.flush()
        return _write(snapshot_service.EXPENSES, row, "updated")
    except Exception:
        db.session.rollback()
        raise


def delete_expense(entry_id: int) -> None:
    row = _get_or_404(ExpenseEntry, entry_id, "Expense entry")
    try:
        db.session.delete(row)
        db.session.flush()
        revision = snapshot_service.bump_revision(snapshot_service.EXPENSES)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    current_app.logger.info("expenses deleted id=%s revision=%s", entry_id, revision)
