# Overview: Pytest coverage for the inventory state calculator.

import itertools
import random
from decimal import Decimal

from restobooks.ledger import (
    StockMovementType,
    UNKNOWN_ITEM_NAME,
    compute_stock_levels,
    describe_movements,
    inventory_status,
    is_low_stock,
    low_stock_items,
    stock_level,
)
from tests.factories import item, movement

IN = StockMovementType.STOCK_IN
OUT = StockMovementType.OUT
ADJ = StockMovementType.ADJUSTMENT


class TestStockFold:
    """Fold semantics: stockIn adds, out subtracts, adjustment overwrites."""

    def test_adjustment_overrides_running_total(self):
        """
        SCENARIO: stockIn 10, stockIn 5, out 3, adjustment 20 for one item
        EXPECTED: level 20, not the running 12
        """
        movements = [
            movement(1, 7, IN, 10),
            movement(2, 7, IN, 5),
            movement(3, 7, OUT, 3),
            movement(4, 7, ADJ, 20),
        ]
        assert stock_level(movements, 7) == Decimal("20")

    def test_without_adjustments_order_does_not_matter(self):
        movements = [
            movement(1, 1, IN, "10.5"),
            movement(2, 1, OUT, 3),
            movement(3, 1, IN, 4),
            movement(4, 1, OUT, "0.25"),
        ]
        expected = Decimal("10.5") + 4 - 3 - Decimal("0.25")
        for perm in itertools.permutations(movements):
            assert stock_level(list(perm), 1) == expected

    def test_commutative_when_timestamps_are_shuffled(self):
        rng = random.Random(42)
        movements = []
        for i in range(1, 40):
            kind = IN if rng.random() < 0.6 else OUT
            movements.append(movement(i, 1, kind, rng.randint(1, 9), minutes=rng.randint(0, 1000)))
        total_in = sum(m.quantity for m in movements if m.movement_type == IN)
        total_out = sum(m.quantity for m in movements if m.movement_type == OUT)
        assert stock_level(movements, 1) == total_in - total_out

    def test_trailing_adjustment_sets_exact_level(self):
        prior = [movement(i, 3, IN if i % 2 else OUT, i) for i in range(1, 12)]
        final = movement(99, 3, ADJ, "7.125")
        assert stock_level(prior + [final], 3) == Decimal("7.125")

    def test_later_adjustment_wins(self):
        movements = [
            movement(1, 2, ADJ, 50),
            movement(2, 2, IN, 5),
            movement(3, 2, ADJ, 8),
            movement(4, 2, OUT, 2),
        ]
        assert stock_level(movements, 2) == Decimal("6")

    def test_adjustment_resolved_by_time_not_listing_order(self):
        """
        SCENARIO: listing returns the later count first
        EXPECTED: the count with the later occurred_at still wins
        """
        earlier = movement(1, 4, ADJ, 30, minutes=10)
        later = movement(2, 4, ADJ, 12, minutes=20)
        assert stock_level([later, earlier], 4) == Decimal("12")
        assert stock_level([earlier, later], 4) == Decimal("12")

    def test_same_timestamp_falls_back_to_id(self):
        first = movement(5, 4, ADJ, 30, minutes=10)
        second = movement(6, 4, ADJ, 12, minutes=10)
        assert stock_level([second, first], 4) == Decimal("12")

    def test_items_are_independent(self):
        movements = [
            movement(1, 1, IN, 10),
            movement(2, 2, IN, 4),
            movement(3, 1, ADJ, 2),
            movement(4, 2, OUT, 1),
        ]
        assert compute_stock_levels(movements) == {1: Decimal("2"), 2: Decimal("3")}

    def test_out_can_go_negative(self):
        assert stock_level([movement(1, 1, OUT, 3)], 1) == Decimal("-3")


class TestEmptyAndUnknown:

    def test_no_movements_reads_zero(self):
        assert stock_level([], 1) == Decimal("0")
        assert compute_stock_levels([]) == {}

    def test_unknown_item_reads_zero(self):
        assert stock_level([movement(1, 1, IN, 5)], 999) == Decimal("0")


class TestLowStock:

    def test_threshold_is_strict(self):
        assert is_low_stock(Decimal("5"), Decimal("5")) is False
        assert is_low_stock(Decimal("4"), Decimal("5")) is True

    def test_no_threshold_never_flags(self):
        assert is_low_stock(Decimal("-10"), None) is False

    def test_zero_threshold_is_a_real_threshold(self):
        assert is_low_stock(Decimal("-1"), Decimal("0")) is True
        assert is_low_stock(Decimal("0"), Decimal("0")) is False

    def test_status_rows_follow_catalog(self):
        catalog = [item(1, "Rice", threshold=5), item(2, "Oil", threshold=5), item(3, "Napkins")]
        movements = [
            movement(1, 1, IN, 5),
            movement(2, 2, IN, 4),
        ]
        rows = inventory_status(catalog, movements)
        assert [r.item.id for r in rows] == [1, 2, 3]
        assert [r.level for r in rows] == [Decimal("5"), Decimal("4"), Decimal("0")]
        assert [r.is_low_stock for r in rows] == [False, True, False]
        assert [r.item.id for r in low_stock_items(catalog, movements)] == [2]

    def test_status_row_serialization(self):
        row = inventory_status([item(1, "Rice", threshold="2.5")], [movement(1, 1, IN, "1.5")])[0]
        data = row.to_dict()
        assert data["name"] == "Rice"
        assert Decimal(data["level"]) == Decimal("1.5")
        assert Decimal(data["low_stock_threshold"]) == Decimal("2.5")
        assert data["is_low_stock"] is True


class TestDescribeMovements:

    def test_dangling_reference_renders_unknown(self):
        rows = describe_movements([movement(1, 1, IN, 2), movement(2, 42, OUT, 1)], [item(1, "Rice")])
        assert [r.item_name for r in rows] == ["Rice", UNKNOWN_ITEM_NAME]
        assert rows[1].unit is None
        data = rows[1].to_dict()
        assert data["item_name"] == "Unknown"
        assert data["movement_label"] == "Stock Out"

    def test_keeps_input_order(self):
        movements = [movement(3, 1, IN, 1), movement(1, 1, IN, 1), movement(2, 1, IN, 1)]
        assert [r.movement.id for r in describe_movements(movements, [])] == [3, 1, 2]
