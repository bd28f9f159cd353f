# Overview: Petty cash balance calculator and listing window.

from __future__ import annotations

from typing import Iterable

from .dates import EventTimestamp
from .records import PettyCashTransaction, PettyCashType


def petty_cash_balance(transactions: Iterable[PettyCashTransaction]) -> int:
    """Sum of cashIn minus sum of out, in cents. Order independent; empty -> 0."""
    balance = 0
    for txn in transactions:
        if txn.transaction_type == PettyCashType.CASH_IN:
            balance += txn.amount_cents
        else:
            balance -= txn.amount_cents
    return balance


def filter_by_timestamp(
    transactions: Iterable[PettyCashTransaction],
    start: EventTimestamp | None = None,
    end: EventTimestamp | None = None,
) -> list[PettyCashTransaction]:
    """Inclusive occurred_at window for listings. Never feeds the balance."""
    rows = []
    for txn in transactions:
        if start is not None and txn.occurred_at < start:
            continue
        if end is not None and txn.occurred_at > end:
            continue
        rows.append(txn)
    return rows
