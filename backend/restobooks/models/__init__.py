from .ledger import (
    SalesEntry,
    ExpenseEntry,
    InventoryItem,
    StockMovement,
    PettyCashTransaction,
    StreamRevision,
)

__all__ = [
    'SalesEntry', 'ExpenseEntry',
    'InventoryItem', 'StockMovement',
    'PettyCashTransaction',
    'StreamRevision',
]
