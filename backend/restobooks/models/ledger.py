from __future__ import annotations

from decimal import Decimal

from ..extensions import db
from ..ledger import records
from ..ledger.dates import CalendarDate, EventTimestamp
from restobooks.time_utils import to_utc_z, utcnow


def _calendar_date(value: int | None) -> CalendarDate | None:
    return CalendarDate(value) if value is not None else None


def _decimal_str(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


def _event_z(value) -> str | None:
    # Full microsecond precision so a listed occurred_at selects its own row
    return EventTimestamp.from_datetime(value).to_utc_z() if value is not None else None


class SalesEntry(db.Model):
    """
    A day's sales figure.

    date is the business day as integer YYYYMMDD (see ledger.dates).
    Amounts are authoritative in cents.
    """
    __tablename__ = "sales_entries"
    __table_args__ = (
        db.CheckConstraint("amount_cents >= 0", name="ck_sales_amount_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Integer, nullable=False, index=True)
    amount_cents = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<SalesEntry id={self.id} date={self.date} amount_cents={self.amount_cents}>"

    def to_record(self) -> records.SalesEntry:
        return records.SalesEntry(
            id=self.id,
            date=_calendar_date(self.date),
            amount_cents=self.amount_cents,
            notes=self.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "amount_cents": self.amount_cents,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class ExpenseEntry(db.Model):
    __tablename__ = "expense_entries"
    __table_args__ = (
        db.CheckConstraint("amount_cents >= 0", name="ck_expense_amount_non_negative"),
        db.Index("ix_expense_entries_date_category", "date", "category"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.Integer, nullable=False, index=True)

    # Closed code lists, see ledger.records
    category = db.Column(db.String(32), nullable=False)
    expense_type = db.Column(db.String(16), nullable=False)
    payment_method = db.Column(db.String(16), nullable=False)

    amount_cents = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return (
            f"<ExpenseEntry id={self.id} date={self.date} category={self.category!r} "
            f"amount_cents={self.amount_cents}>"
        )

    def to_record(self) -> records.ExpenseEntry:
        return records.ExpenseEntry(
            id=self.id,
            date=_calendar_date(self.date),
            category=records.ExpenseCategory(self.category),
            expense_type=records.ExpenseType(self.expense_type),
            amount_cents=self.amount_cents,
            payment_method=records.PaymentMethod(self.payment_method),
            notes=self.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "category": self.category,
            "category_label": records.CATEGORY_LABELS[records.ExpenseCategory(self.category)],
            "expense_type": self.expense_type,
            "payment_method": self.payment_method,
            "amount_cents": self.amount_cents,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class InventoryItem(db.Model):
    """
    Catalog entry. Carries no stock level: levels are derived from
    StockMovement rows by ledger.inventory.
    """
    __tablename__ = "inventory_items"
    __table_args__ = (
        db.Index("ix_inventory_items_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    unit = db.Column(db.String(32), nullable=False)
    low_stock_threshold = db.Column(db.Numeric(12, 3), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} name={self.name!r} unit={self.unit!r}>"

    def to_record(self) -> records.InventoryItem:
        return records.InventoryItem(
            id=self.id,
            name=self.name,
            unit=self.unit,
            low_stock_threshold=self.low_stock_threshold,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "unit": self.unit,
            "low_stock_threshold": _decimal_str(self.low_stock_threshold),
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class StockMovement(db.Model):
    """
    Append-only stock ledger row.

    item_id is a reference, not ownership: no foreign key, so a movement
    outlives its catalog item and is then rendered as Unknown.
    """
    __tablename__ = "stock_movements"
    __table_args__ = (
        db.CheckConstraint("quantity >= 0", name="ck_stock_movement_quantity_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, nullable=False, index=True)
    movement_type = db.Column(db.String(16), nullable=False)
    quantity = db.Column(db.Numeric(12, 3), nullable=False)
    notes = db.Column(db.Text, nullable=True)

    # Business time, microsecond precision; stamped by the service on create
    occurred_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return (
            f"<StockMovement id={self.id} item_id={self.item_id} "
            f"type={self.movement_type!r} quantity={self.quantity}>"
        )

    def to_record(self) -> records.StockMovement:
        return records.StockMovement(
            id=self.id,
            item_id=self.item_id,
            movement_type=records.StockMovementType(self.movement_type),
            quantity=self.quantity,
            occurred_at=EventTimestamp.from_datetime(self.occurred_at),
            notes=self.notes,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_id": self.item_id,
            "movement_type": self.movement_type,
            "quantity": _decimal_str(self.quantity),
            "notes": self.notes,
            "occurred_at": _event_z(self.occurred_at),
            "created_at": to_utc_z(self.created_at),
        }


class PettyCashTransaction(db.Model):
    __tablename__ = "petty_cash_transactions"
    __table_args__ = (
        db.CheckConstraint("amount_cents >= 0", name="ck_petty_cash_amount_non_negative"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    transaction_type = db.Column(db.String(16), nullable=False)
    amount_cents = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.String(255), nullable=False)
    occurred_at = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return (
            f"<PettyCashTransaction id={self.id} type={self.transaction_type!r} "
            f"amount_cents={self.amount_cents}>"
        )

    def to_record(self) -> records.PettyCashTransaction:
        return records.PettyCashTransaction(
            id=self.id,
            transaction_type=records.PettyCashType(self.transaction_type),
            amount_cents=self.amount_cents,
            reason=self.reason,
            occurred_at=EventTimestamp.from_datetime(self.occurred_at),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "transaction_type": self.transaction_type,
            "amount_cents": self.amount_cents,
            "reason": self.reason,
            "occurred_at": _event_z(self.occurred_at),
            "created_at": to_utc_z(self.created_at),
        }


class StreamRevision(db.Model):
    """
    Per-stream revision counter.

    Bumped in the same DB transaction as every create/update/delete on the
    stream, so a Snapshot's version identifies exactly which writes it saw.
    """
    __tablename__ = "stream_revisions"

    stream = db.Column(db.String(32), primary_key=True)
    revision = db.Column(db.Integer, nullable=False, default=0)
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )
