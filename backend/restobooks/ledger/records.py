# Overview: Immutable record snapshots and closed enumerations consumed by the ledger core.

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Generic, Sequence, TypeVar

from .dates import CalendarDate, EventTimestamp


class ExpenseCategory(str, Enum):
    FOOD_COST = "foodCost"
    SUPPLIES = "supplies"
    MAINTENANCE = "maintenance"
    UTILITIES = "utilities"
    RENT = "rent"
    PAYROLL = "payroll"
    MARKETING = "marketing"
    OTHER = "other"


class ExpenseType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class PaymentMethod(str, Enum):
    CASH = "cash"
    BANK = "bank"
    CREDIT_CARD = "creditCard"
    OTHER = "other"


class StockMovementType(str, Enum):
    STOCK_IN = "stockIn"
    OUT = "out"
    ADJUSTMENT = "adjustment"


class PettyCashType(str, Enum):
    CASH_IN = "cashIn"
    OUT = "out"


# Adding a category needs a schema change in the store and a label here.
CATEGORY_LABELS: dict[ExpenseCategory, str] = {
    ExpenseCategory.FOOD_COST: "Food Cost",
    ExpenseCategory.SUPPLIES: "Supplies",
    ExpenseCategory.MAINTENANCE: "Maintenance",
    ExpenseCategory.UTILITIES: "Utilities",
    ExpenseCategory.RENT: "Rent",
    ExpenseCategory.PAYROLL: "Payroll",
    ExpenseCategory.MARKETING: "Marketing",
    ExpenseCategory.OTHER: "Other",
}

MOVEMENT_LABELS: dict[StockMovementType, str] = {
    StockMovementType.STOCK_IN: "Stock In",
    StockMovementType.OUT: "Stock Out",
    StockMovementType.ADJUSTMENT: "Adjustment",
}


@dataclass(frozen=True)
class SalesEntry:
    id: int
    date: CalendarDate | None
    amount_cents: int
    notes: str | None = None


@dataclass(frozen=True)
class ExpenseEntry:
    id: int
    date: CalendarDate | None
    category: ExpenseCategory
    expense_type: ExpenseType
    amount_cents: int
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = None


@dataclass(frozen=True)
class InventoryItem:
    id: int
    name: str
    unit: str
    low_stock_threshold: Decimal | None = None


@dataclass(frozen=True)
class StockMovement:
    id: int
    item_id: int
    movement_type: StockMovementType
    quantity: Decimal
    occurred_at: EventTimestamp
    notes: str | None = None


@dataclass(frozen=True)
class PettyCashTransaction:
    id: int
    transaction_type: PettyCashType
    amount_cents: int
    reason: str
    occurred_at: EventTimestamp


R = TypeVar("R")


@dataclass(frozen=True)
class Snapshot(Generic[R]):
    """
    The complete set of one stream's records as read at a given store revision.

    A new Snapshot must be loaded after every mutation; derived values computed
    from an older version are stale by definition.
    """
    stream: str
    version: int
    records: Sequence[R] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
