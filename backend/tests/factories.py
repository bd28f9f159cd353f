"""Pure record factories for ledger core tests (no database)."""

from datetime import datetime, timedelta
from decimal import Decimal

from restobooks.ledger import (
    CalendarDate,
    EventTimestamp,
    ExpenseCategory,
    ExpenseEntry,
    ExpenseType,
    InventoryItem,
    PaymentMethod,
    PettyCashTransaction,
    PettyCashType,
    SalesEntry,
    StockMovement,
    StockMovementType,
)

BASE_TIME = datetime(2024, 3, 1, 9, 0, 0)


def ts(minutes: int) -> EventTimestamp:
    """EventTimestamp a number of minutes after BASE_TIME."""
    return EventTimestamp.from_datetime(BASE_TIME + timedelta(minutes=minutes))


def sale(entry_id: int, date: int | None, amount_cents: int) -> SalesEntry:
    return SalesEntry(
        id=entry_id,
        date=CalendarDate(date) if date is not None else None,
        amount_cents=amount_cents,
    )


def expense(
    entry_id: int,
    date: int,
    amount_cents: int,
    category: ExpenseCategory = ExpenseCategory.OTHER,
    expense_type: ExpenseType = ExpenseType.VARIABLE,
) -> ExpenseEntry:
    return ExpenseEntry(
        id=entry_id,
        date=CalendarDate(date),
        category=category,
        expense_type=expense_type,
        amount_cents=amount_cents,
        payment_method=PaymentMethod.CASH,
    )


def item(item_id: int, name: str = "Rice", threshold=None) -> InventoryItem:
    return InventoryItem(
        id=item_id,
        name=name,
        unit="kg",
        low_stock_threshold=Decimal(str(threshold)) if threshold is not None else None,
    )


def movement(
    movement_id: int,
    item_id: int,
    movement_type: StockMovementType,
    quantity,
    minutes: int | None = None,
) -> StockMovement:
    """Defaults occurred_at to movement_id minutes, i.e. insertion order."""
    return StockMovement(
        id=movement_id,
        item_id=item_id,
        movement_type=movement_type,
        quantity=Decimal(str(quantity)),
        occurred_at=ts(movement_id if minutes is None else minutes),
    )


def petty(txn_id: int, transaction_type: PettyCashType, amount_cents: int, minutes: int = 0) -> PettyCashTransaction:
    return PettyCashTransaction(
        id=txn_id,
        transaction_type=transaction_type,
        amount_cents=amount_cents,
        reason=f"txn {txn_id}",
        occurred_at=ts(minutes),
    )
