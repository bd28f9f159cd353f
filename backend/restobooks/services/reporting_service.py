# Overview: Service-layer operations for reporting; feeds store snapshots to the P&L aggregator.

from __future__ import annotations

from ..ledger.errors import MalformedDateError
from ..ledger.reports import ProfitAndLossReport, profit_and_loss
from . import snapshot_service


class ReportError(Exception):
    """Raised when report generation fails."""
    pass


def _build(start, end) -> tuple[ProfitAndLossReport, dict]:
    sales = snapshot_service.load_snapshot(snapshot_service.SALES)
    expenses = snapshot_service.load_snapshot(snapshot_service.EXPENSES)
    try:
        report = profit_and_loss(sales.records, expenses.records, start=start, end=end)
    except MalformedDateError as exc:
        raise ReportError(str(exc)) from exc
    revisions = {sales.stream: sales.version, expenses.stream: expenses.version}
    return report, revisions


def profit_and_loss_report(*, start=None, end=None) -> dict:
    """
    Full P&L: totals, fixed/variable split and category breakdown.

    start/end are inclusive calendar days (YYYYMMDD or YYYY-MM-DD); either may
    be omitted. A malformed bound fails the whole call.
    """
    report, revisions = _build(start, end)
    data = report.to_dict()
    data["revisions"] = revisions
    return data


def profit_and_loss_summary(*, start=None, end=None) -> dict:
    """Headline totals only, computed by the same aggregator as the full report."""
    report, revisions = _build(start, end)
    data = report.summary()
    data["revisions"] = revisions
    return data
