"""Tests for core.tax.ug_ruecklage — the statutory reserve of a UG (§ 5a Abs. 3 GmbHG).

reserve = min(25% of net profit, 25000 − current capital), 0 for losses.
"""

from decimal import Decimal

import pytest

from ug_finanzplan.core.tax.ug_ruecklage import (
    GMBH_STAMMKAPITAL,
    RESERVE_RATE,
    calculate_cumulative_stammkapital,
    calculate_ug_reserve,
)


class TestConstants:
    def test_reserve_rate(self):
        assert RESERVE_RATE == Decimal("0.25")

    def test_gmbh_capital(self):
        assert GMBH_STAMMKAPITAL == Decimal("25000")


class TestCalculateUgReserve:
    def test_quarter_of_profit(self):
        # 10000 × 0.25 = 2500.00
        assert calculate_ug_reserve(Decimal("10000"), Decimal("1")) == Decimal("2500.00")

    def test_capped_at_gap_to_25000(self):
        # 25% would be 50000, but only 1000 are missing
        assert calculate_ug_reserve(Decimal("200000"), Decimal("24000")) == Decimal("1000.00")

    def test_large_profit_from_one_euro(self):
        # min(25000, 24999) = 24999.00
        assert calculate_ug_reserve(Decimal("100000"), Decimal("1")) == Decimal("24999.00")

    @pytest.mark.parametrize("profit", [Decimal("0"), Decimal("-5"), Decimal("-100000")])
    def test_no_reserve_without_profit(self, profit):
        assert calculate_ug_reserve(profit, Decimal("1")) == Decimal("0")

    def test_no_reserve_once_capital_reached(self):
        assert calculate_ug_reserve(Decimal("1000"), Decimal("25000")) == Decimal("0")
        assert calculate_ug_reserve(Decimal("1000"), Decimal("30000")) == Decimal("0")

    def test_rounding_half_up(self):
        # 0.10 × 0.25 = 0.025 → 0.03
        assert calculate_ug_reserve(Decimal("0.10"), Decimal("1")) == Decimal("0.03")

    def test_accepts_plain_numbers(self):
        # 4000 × 0.25 = 1000.00
        assert calculate_ug_reserve(4000.0, Decimal("1000")) == Decimal("1000.00")
        assert calculate_ug_reserve(10000, 1) == Decimal("2500.00")


class TestCumulativeStammkapital:
    def test_growth_and_cap(self):
        # 1 + 2500 = 2501; 2501 + min(25000, 22499) = 25000; then nothing
        result = calculate_cumulative_stammkapital(
            Decimal("1"), [Decimal("10000"), Decimal("100000"), Decimal("50000")]
        )
        assert result == [Decimal("2501.00"), Decimal("25000.00"), Decimal("25000.00")]

    def test_loss_year_keeps_capital(self):
        result = calculate_cumulative_stammkapital(
            Decimal("500"), [Decimal("-2000"), Decimal("4000")]
        )
        assert result == [Decimal("500.00"), Decimal("1500.00")]

    def test_never_exceeds_gmbh_capital(self):
        profits = [Decimal(p) for p in ("30000", "90000", "1000000", "5")]
        for capital in calculate_cumulative_stammkapital(Decimal("1"), profits):
            assert capital <= GMBH_STAMMKAPITAL

    def test_empty(self):
        assert calculate_cumulative_stammkapital(Decimal("1"), []) == []
