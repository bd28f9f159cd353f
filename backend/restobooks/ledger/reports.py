# Overview: Profit and loss aggregation over sales and expense snapshots.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, TypeVar

from .dates import CalendarDate, coerce_date_bound
from .records import (
    CATEGORY_LABELS,
    ExpenseCategory,
    ExpenseEntry,
    ExpenseType,
    SalesEntry,
)

E = TypeVar("E", SalesEntry, ExpenseEntry)


def filter_by_date_range(
    entries: Iterable[E],
    start: CalendarDate | None = None,
    end: CalendarDate | None = None,
) -> list[E]:
    """
    Inclusive calendar window. Entries without a date never pass.
    A missing bound is unbounded on that side.
    """
    rows = []
    for entry in entries:
        if entry.date is None:
            continue
        if start is not None and entry.date < start:
            continue
        if end is not None and entry.date > end:
            continue
        rows.append(entry)
    return rows


@dataclass(frozen=True)
class CategoryTotal:
    category: ExpenseCategory
    total_cents: int

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self.category]

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "label": self.label,
            "total_cents": self.total_cents,
        }


@dataclass(frozen=True)
class ProfitAndLossReport:
    start: CalendarDate | None
    end: CalendarDate | None
    total_sales_cents: int
    total_expenses_cents: int
    fixed_expenses_cents: int
    variable_expenses_cents: int
    category_breakdown: tuple[CategoryTotal, ...] = field(default_factory=tuple)

    @property
    def net_profit_loss_cents(self) -> int:
        return self.total_sales_cents - self.total_expenses_cents

    def summary(self) -> dict:
        """The three headline totals (the server-side P&L shape)."""
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "total_sales_cents": self.total_sales_cents,
            "total_expenses_cents": self.total_expenses_cents,
            "net_profit_loss_cents": self.net_profit_loss_cents,
        }

    def to_dict(self) -> dict:
        data = self.summary()
        data.update(
            {
                "fixed_expenses_cents": self.fixed_expenses_cents,
                "variable_expenses_cents": self.variable_expenses_cents,
                "category_breakdown": [c.to_dict() for c in self.category_breakdown],
            }
        )
        return data


def category_breakdown(expenses: Iterable[ExpenseEntry]) -> tuple[CategoryTotal, ...]:
    # dict keeps first-encounter order; sorted() is stable, so equal totals keep it too
    totals: dict[ExpenseCategory, int] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0) + expense.amount_cents
    ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    return tuple(CategoryTotal(category=c, total_cents=t) for c, t in ranked)


def profit_and_loss(
    sales: Iterable[SalesEntry],
    expenses: Iterable[ExpenseEntry],
    start=None,
    end=None,
) -> ProfitAndLossReport:
    """
    Build the P&L report for an inclusive calendar window.

    start/end accept anything CalendarDate.parse does, or None for unbounded.
    A malformed bound raises MalformedDateError and no report is produced.
    """
    start_date = coerce_date_bound(start)
    end_date = coerce_date_bound(end)

    windowed_sales = filter_by_date_range(sales, start_date, end_date)
    windowed_expenses = filter_by_date_range(expenses, start_date, end_date)

    fixed = 0
    variable = 0
    for expense in windowed_expenses:
        if expense.expense_type == ExpenseType.FIXED:
            fixed += expense.amount_cents
        else:
            variable += expense.amount_cents

    return ProfitAndLossReport(
        start=start_date,
        end=end_date,
        total_sales_cents=sum(s.amount_cents for s in windowed_sales),
        total_expenses_cents=fixed + variable,
        fixed_expenses_cents=fixed,
        variable_expenses_cents=variable,
        category_breakdown=category_breakdown(windowed_expenses),
    )
