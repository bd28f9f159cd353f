# Overview: Pytest coverage for profit and loss aggregation.

import random

import pytest

from restobooks.ledger import (
    CalendarDate,
    ExpenseCategory,
    ExpenseType,
    MalformedDateError,
    filter_by_date_range,
    profit_and_loss,
)
from tests.factories import expense, sale

FIXED = ExpenseType.FIXED
VARIABLE = ExpenseType.VARIABLE


def _random_book(seed: int):
    rng = random.Random(seed)
    categories = list(ExpenseCategory)
    sales = [sale(i, 20240100 + rng.randint(1, 28), rng.randint(0, 50_000)) for i in range(1, 30)]
    expenses = [
        expense(
            i,
            20240100 + rng.randint(1, 28),
            rng.randint(0, 20_000),
            category=rng.choice(categories),
            expense_type=rng.choice([FIXED, VARIABLE]),
        )
        for i in range(1, 40)
    ]
    return sales, expenses


class TestDateWindow:

    def test_february_sale_excluded_from_january(self):
        """
        SCENARIO: sales on 2024-01-05 (100) and 2024-02-01 (50), window January
        EXPECTED: total_sales 100
        """
        sales = [sale(1, 20240105, 10_000), sale(2, 20240201, 5_000)]
        report = profit_and_loss(sales, [], start=20240101, end=20240131)
        assert report.total_sales_cents == 10_000

    def test_bounds_are_inclusive(self):
        sales = [sale(1, 20240101, 1), sale(2, 20240131, 2), sale(3, 20231231, 4), sale(4, 20240201, 8)]
        report = profit_and_loss(sales, [], start="2024-01-01", end="2024-01-31")
        assert report.total_sales_cents == 3

    def test_missing_bounds_are_unbounded(self):
        sales = [sale(1, 19991231, 1), sale(2, 20240615, 2), sale(3, 20991231, 4)]
        assert profit_and_loss(sales, []).total_sales_cents == 7
        assert profit_and_loss(sales, [], start=20240101).total_sales_cents == 6
        assert profit_and_loss(sales, [], end=20240101).total_sales_cents == 1

    def test_entries_without_date_never_pass(self):
        sales = [sale(1, None, 999), sale(2, 20240110, 1)]
        assert [s.id for s in filter_by_date_range(sales)] == [2]
        assert profit_and_loss(sales, []).total_sales_cents == 1

    def test_inverted_window_is_empty(self):
        sales = [sale(1, 20240110, 1)]
        report = profit_and_loss(sales, [], start=20240131, end=20240101)
        assert report.total_sales_cents == 0
        assert report.category_breakdown == ()

    def test_malformed_bound_fails_the_report(self):
        with pytest.raises(MalformedDateError):
            profit_and_loss([sale(1, 20240110, 1)], [], start="2024-13-01")


class TestTotals:

    def test_fixed_variable_split(self):
        expenses = [
            expense(1, 20240105, 250_000, ExpenseCategory.RENT, FIXED),
            expense(2, 20240106, 64_300, ExpenseCategory.FOOD_COST, VARIABLE),
            expense(3, 20240107, 18_900, ExpenseCategory.UTILITIES, FIXED),
        ]
        report = profit_and_loss([sale(1, 20240105, 400_000)], expenses)
        assert report.fixed_expenses_cents == 268_900
        assert report.variable_expenses_cents == 64_300
        assert report.total_expenses_cents == 333_200
        assert report.net_profit_loss_cents == 400_000 - 333_200

    def test_loss_is_negative(self):
        report = profit_and_loss([sale(1, 20240105, 100)], [expense(1, 20240105, 300)])
        assert report.net_profit_loss_cents == -200

    def test_empty_input_is_all_zero(self):
        report = profit_and_loss([], [], start=20240101, end=20240131)
        assert report.total_sales_cents == 0
        assert report.total_expenses_cents == 0
        assert report.fixed_expenses_cents == 0
        assert report.variable_expenses_cents == 0
        assert report.net_profit_loss_cents == 0
        assert report.category_breakdown == ()

    @pytest.mark.parametrize("seed", range(10))
    def test_partition_properties(self, seed):
        sales, expenses = _random_book(seed)
        report = profit_and_loss(sales, expenses, start=20240105, end=20240120)
        assert report.net_profit_loss_cents == report.total_sales_cents - report.total_expenses_cents
        assert report.fixed_expenses_cents + report.variable_expenses_cents == report.total_expenses_cents
        assert sum(c.total_cents for c in report.category_breakdown) == report.total_expenses_cents

    def test_idempotent(self):
        sales, expenses = _random_book(7)
        first = profit_and_loss(sales, expenses, start=20240103, end=20240125)
        second = profit_and_loss(sales, expenses, start=20240103, end=20240125)
        assert first == second
        assert first.to_dict() == second.to_dict()


class TestCategoryBreakdown:

    def test_sorted_by_descending_total(self):
        expenses = [
            expense(1, 20240105, 100, ExpenseCategory.SUPPLIES),
            expense(2, 20240105, 900, ExpenseCategory.RENT),
            expense(3, 20240105, 300, ExpenseCategory.SUPPLIES),
            expense(4, 20240105, 500, ExpenseCategory.PAYROLL),
        ]
        breakdown = profit_and_loss([], expenses).category_breakdown
        assert [(c.category, c.total_cents) for c in breakdown] == [
            (ExpenseCategory.RENT, 900),
            (ExpenseCategory.PAYROLL, 500),
            (ExpenseCategory.SUPPLIES, 400),
        ]

    def test_ties_keep_first_encounter_order(self):
        expenses = [
            expense(1, 20240105, 200, ExpenseCategory.MARKETING),
            expense(2, 20240105, 200, ExpenseCategory.FOOD_COST),
            expense(3, 20240105, 200, ExpenseCategory.MAINTENANCE),
        ]
        breakdown = profit_and_loss([], expenses).category_breakdown
        assert [c.category for c in breakdown] == [
            ExpenseCategory.MARKETING,
            ExpenseCategory.FOOD_COST,
            ExpenseCategory.MAINTENANCE,
        ]

    def test_only_windowed_categories_appear(self):
        expenses = [
            expense(1, 20240105, 200, ExpenseCategory.RENT),
            expense(2, 20240301, 900, ExpenseCategory.PAYROLL),
        ]
        breakdown = profit_and_loss([], expenses, end=20240131).category_breakdown
        assert [c.category for c in breakdown] == [ExpenseCategory.RENT]

    def test_labels(self):
        breakdown = profit_and_loss([], [expense(1, 20240105, 1, ExpenseCategory.FOOD_COST)]).category_breakdown
        assert breakdown[0].label == "Food Cost"
        assert breakdown[0].to_dict() == {"category": "foodCost", "label": "Food Cost", "total_cents": 1}


class TestSerialization:

    def test_summary_is_subset_of_full_report(self):
        sales, expenses = _random_book(3)
        report = profit_and_loss(sales, expenses, start=20240101, end=20240131)
        summary = report.summary()
        full = report.to_dict()
        assert set(summary) == {"start", "end", "total_sales_cents", "total_expenses_cents", "net_profit_loss_cents"}
        for key, value in summary.items():
            assert full[key] == value
        assert summary["start"] == "2024-01-01"
        assert summary["end"] == "2024-01-31"

    def test_window_echoed_as_calendar_dates(self):
        report = profit_and_loss([], [], start="20240101", end=None)
        assert report.start == CalendarDate(20240101)
        assert report.end is None
