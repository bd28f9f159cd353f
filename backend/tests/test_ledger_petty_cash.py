# Overview: Pytest coverage for the petty cash balance calculator.

import itertools

from restobooks.ledger import PettyCashType, filter_by_timestamp, petty_cash_balance
from tests.factories import petty, ts

CASH_IN = PettyCashType.CASH_IN
OUT = PettyCashType.OUT


class TestPettyCashBalance:

    def test_scenario_balance(self):
        """
        SCENARIO: cashIn 500, out 120, cashIn 30
        EXPECTED: balance 410
        """
        txns = [petty(1, CASH_IN, 50_000), petty(2, OUT, 12_000), petty(3, CASH_IN, 3_000)]
        assert petty_cash_balance(txns) == 41_000

    def test_empty_is_zero(self):
        assert petty_cash_balance([]) == 0

    def test_permutation_invariant(self):
        txns = [
            petty(1, CASH_IN, 10_000),
            petty(2, OUT, 2_500),
            petty(3, OUT, 9_000),
            petty(4, CASH_IN, 125),
        ]
        expected = 10_000 - 2_500 - 9_000 + 125
        for perm in itertools.permutations(txns):
            assert petty_cash_balance(perm) == expected

    def test_balance_can_be_negative(self):
        assert petty_cash_balance([petty(1, OUT, 700)]) == -700

    def test_accepts_generators(self):
        txns = (petty(i, CASH_IN, 100) for i in range(5))
        assert petty_cash_balance(txns) == 500


class TestTimestampWindow:

    def test_inclusive_bounds(self):
        txns = [petty(1, CASH_IN, 1, minutes=0), petty(2, CASH_IN, 1, minutes=10), petty(3, OUT, 1, minutes=20)]
        assert [t.id for t in filter_by_timestamp(txns, ts(10), ts(20))] == [2, 3]

    def test_open_bounds(self):
        txns = [petty(1, CASH_IN, 1, minutes=0), petty(2, CASH_IN, 1, minutes=10)]
        assert [t.id for t in filter_by_timestamp(txns, None, ts(5))] == [1]
        assert [t.id for t in filter_by_timestamp(txns, ts(5), None)] == [2]
        assert [t.id for t in filter_by_timestamp(txns)] == [1, 2]
