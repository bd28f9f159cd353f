# Overview: Service-layer operations for stream revisions and record snapshots.

from __future__ import annotations

from sqlalchemy import update

from ..extensions import db
from ..ledger.records import Snapshot
from ..models import (
    ExpenseEntry,
    InventoryItem,
    PettyCashTransaction,
    SalesEntry,
    StockMovement,
    StreamRevision,
)
"""
Restobooks Snapshot Invariants (authoritative)

- Every create/update/delete bumps its stream's revision inside the same DB
  transaction as the write itself.
- A Snapshot is the full record set of one stream plus the revision it was
  read at. Calculators never see partial streams.
- A snapshot read brackets the rows with two revision reads and repeats
  until both agree, so version never lags or leads its records.
- Listing order is ascending id (store insertion order).
"""


class SnapshotError(Exception):
    """Raised when a stream cannot be read at a stable revision."""
    pass


SALES = "sales"
EXPENSES = "expenses"
INVENTORY_ITEMS = "inventory_items"
STOCK_MOVEMENTS = "stock_movements"
PETTY_CASH = "petty_cash"

SNAPSHOT_READ_ATTEMPTS = 5

STREAM_MODELS = {
    SALES: SalesEntry,
    EXPENSES: ExpenseEntry,
    INVENTORY_ITEMS: InventoryItem,
    STOCK_MOVEMENTS: StockMovement,
    PETTY_CASH: PettyCashTransaction,
}


def current_revision(stream: str) -> int:
    revision = (
        db.session.query(StreamRevision.revision)
        .filter_by(stream=stream)
        .scalar()
    )
    return int(revision or 0)


def bump_revision(stream: str) -> int:
    """
    Increment the stream revision. Does not commit; the caller's write and
    the bump land in one transaction.
    """
    if stream not in STREAM_MODELS:
        raise ValueError(f"unknown stream: {stream}")

    stmt = (
        update(StreamRevision)
        .where(StreamRevision.stream == stream)
        .values(revision=StreamRevision.revision + 1)
    )
    result = db.session.execute(stmt)
    if not result.rowcount:
        db.session.add(StreamRevision(stream=stream, revision=1))
    db.session.flush()
    return current_revision(stream)


def list_rows(stream: str) -> list:
    model = STREAM_MODELS[stream]
    return (
        db.session.query(model)
        .populate_existing()
        .order_by(model.id.asc())
        .all()
    )


def load_rows_and_snapshot(stream: str) -> tuple[list, Snapshot]:
    """
    ORM rows for rendering plus the Snapshot derived from the same read.

    The revision is read before and after the rows; a commit in between
    changes it and the read is repeated, so version always matches records.
    """
    if stream not in STREAM_MODELS:
        raise ValueError(f"unknown stream: {stream}")

    for _ in range(SNAPSHOT_READ_ATTEMPTS):
        version = current_revision(stream)
        rows = list_rows(stream)
        if current_revision(stream) == version:
            break
    else:
        raise SnapshotError(f"{stream} kept changing during read; retry the request")

    snapshot = Snapshot(
        stream=stream,
        version=version,
        records=tuple(row.to_record() for row in rows),
    )
    return rows, snapshot


def load_snapshot(stream: str) -> Snapshot:
    return load_rows_and_snapshot(stream)[1]


def revisions() -> dict[str, int]:
    return {stream: current_revision(stream) for stream in STREAM_MODELS}
