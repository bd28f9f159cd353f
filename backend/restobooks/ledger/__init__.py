# Overview: Pure ledger core: derived stock levels, petty cash balance and P&L.

from .dates import CalendarDate, EventTimestamp, coerce_date_bound
from .errors import LedgerError, MalformedDateError
from .inventory import (
    UNKNOWN_ITEM_NAME,
    compute_stock_levels,
    describe_movements,
    inventory_status,
    is_low_stock,
    low_stock_items,
    stock_level,
)
from .petty_cash import filter_by_timestamp, petty_cash_balance
from .records import (
    CATEGORY_LABELS,
    ExpenseCategory,
    ExpenseEntry,
    ExpenseType,
    InventoryItem,
    PaymentMethod,
    PettyCashTransaction,
    PettyCashType,
    SalesEntry,
    Snapshot,
    StockMovement,
    StockMovementType,
)
from .reports import ProfitAndLossReport, category_breakdown, filter_by_date_range, profit_and_loss

__all__ = [
    'CalendarDate', 'EventTimestamp', 'coerce_date_bound',
    'LedgerError', 'MalformedDateError',
    'UNKNOWN_ITEM_NAME', 'compute_stock_levels', 'describe_movements',
    'inventory_status', 'is_low_stock', 'low_stock_items', 'stock_level',
    'filter_by_timestamp', 'petty_cash_balance',
    'CATEGORY_LABELS', 'ExpenseCategory', 'ExpenseEntry', 'ExpenseType',
    'InventoryItem', 'PaymentMethod', 'PettyCashTransaction', 'PettyCashType',
    'SalesEntry', 'Snapshot', 'StockMovement', 'StockMovementType',
    'ProfitAndLossReport', 'category_breakdown', 'filter_by_date_range', 'profit_and_loss',
]
