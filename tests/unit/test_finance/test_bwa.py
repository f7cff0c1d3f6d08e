"""Tests for core.finance.bwa.

Uses the steady scenario (revenue 10,000, salary 4,000, costs 1,000 per
month, capital 1,000, Hebesatz 400). Year 1:

  Umsatz                  120,000.00   100.0%
  - Personalkosten        −48,000.00    40.0%
  = Rohgewinn II           72,000.00    60.0%
  - Betriebskosten        −12,000.00    10.0%
  = Betriebsergebnis       60,000.00    50.0%
  - Steuern               −17,895.00    14.9%
  = Betriebsgewinn         42,105.00    35.1%
  - UG Rücklage           −10,526.25     8.8%
  = Ausschüttungsfähig     31,578.75    26.3%
"""

from decimal import Decimal

import pytest

from ug_finanzplan.core.builder import PlanBuilder
from ug_finanzplan.core.finance import calculate_liquidity, generate_bwa
from ug_finanzplan.core.finance.bwa import percent_of_revenue

LABELS = [
    "Umsatz",
    "+/- Bestandsveränderung",
    "- Materialeinsatz/Wareneinsatz",
    "= Rohgewinn I",
    "- Personalkosten",
    "= Rohgewinn II",
    "- Betriebskosten",
    "- Investitionen",
    "= Erweiterter Cash-flow",
    "- Zinsen",
    "= Cash-flow",
    "= Betriebsergebnis (vor Steuern)",
    "- Steuern (geschätzt)",
    "= Betriebsgewinn (nach Steuern)",
    "- UG Rücklage (25%)",
    "= Ausschüttungsfähiger Gewinn",
]


@pytest.fixture
def bwa():
    plan_input = (
        PlanBuilder(start_year=2026)
        .company("Steady UG", stammkapital=1000, hebesatz=400)
        .fixed_revenue(10000)
        .add_employee("Geschäftsführer", 4000, "2026-01")
        .add_cost_item("Miete", 1000)
        .build()
    )
    return generate_bwa("Steady UG", 2026, calculate_liquidity(plan_input))


def _row(data, label):
    return next(r for r in data.rows if r.label == label)


class TestPercentOfRevenue:
    def test_one_decimal(self):
        assert percent_of_revenue(Decimal("1"), Decimal("3")) == Decimal("33.3")
        assert percent_of_revenue(Decimal("2"), Decimal("3")) == Decimal("66.7")

    def test_half_up(self):
        # 1 / 8 = 12.5% exactly; 1 / 16 = 6.25% → 6.3
        assert percent_of_revenue(Decimal("1"), Decimal("8")) == Decimal("12.5")
        assert percent_of_revenue(Decimal("1"), Decimal("16")) == Decimal("6.3")

    def test_no_revenue(self):
        assert percent_of_revenue(Decimal("500"), Decimal("0")) == Decimal("0")


class TestGenerateBwa:
    def test_layout(self, bwa):
        assert bwa.company_name == "Steady UG"
        assert bwa.years == (2026, 2027, 2028)
        assert [r.label for r in bwa.rows] == LABELS
        assert all(len(r.values) == 3 and len(r.percents) == 3 for r in bwa.rows)

    def test_subtotal_flag(self, bwa):
        assert _row(bwa, "= Cash-flow").is_subtotal
        assert not _row(bwa, "- Zinsen").is_subtotal
        assert not _row(bwa, "Umsatz").is_subtotal

    def test_first_year_values(self, bwa):
        expected = {
            "Umsatz": (Decimal("120000.00"), Decimal("100.0")),
            "= Rohgewinn I": (Decimal("120000.00"), Decimal("100.0")),
            "- Personalkosten": (Decimal("-48000.00"), Decimal("40.0")),
            "= Rohgewinn II": (Decimal("72000.00"), Decimal("60.0")),
            "- Betriebskosten": (Decimal("-12000.00"), Decimal("10.0")),
            "= Erweiterter Cash-flow": (Decimal("60000.00"), Decimal("50.0")),
            "= Cash-flow": (Decimal("60000.00"), Decimal("50.0")),
            "= Betriebsergebnis (vor Steuern)": (Decimal("60000.00"), Decimal("50.0")),
            "- Steuern (geschätzt)": (Decimal("-17895.00"), Decimal("14.9")),
            "= Betriebsgewinn (nach Steuern)": (Decimal("42105.00"), Decimal("35.1")),
            "- UG Rücklage (25%)": (Decimal("-10526.25"), Decimal("8.8")),
            "= Ausschüttungsfähiger Gewinn": (Decimal("31578.75"), Decimal("26.3")),
        }
        for label, (value, percent) in expected.items():
            row = _row(bwa, label)
            assert row.values[0] == value, label
            assert row.percents[0] == percent, label

    def test_placeholder_rows_are_zero(self, bwa):
        for label in ("+/- Bestandsveränderung", "- Materialeinsatz/Wareneinsatz", "- Investitionen", "- Zinsen"):
            assert all(v == 0 for v in _row(bwa, label).values)

    def test_percents_follow_row_amounts(self, bwa):
        revenues = _row(bwa, "Umsatz").values
        for row in bwa.rows:
            for value, percent, revenue in zip(row.values, row.percents, revenues):
                amount = -value if row.label.startswith("- ") else value
                assert percent == percent_of_revenue(amount, revenue), row.label

    def test_deductions_have_unsigned_percents(self, bwa):
        for row in bwa.rows:
            if row.label.startswith("- "):
                assert all(v <= 0 for v in row.values), row.label
                assert all(p >= 0 for p in row.percents), row.label

    def test_negative_subtotal_keeps_sign(self):
        # 1000 revenue vs. 3000 rent: Rohgewinn II 1000, Betriebsergebnis −2000
        plan_input = (
            PlanBuilder(start_year=2026)
            .fixed_revenue(1000)
            .add_cost_item("Miete", 3000)
            .build()
        )
        data = generate_bwa("", 2026, calculate_liquidity(plan_input))
        row = _row(data, "= Betriebsergebnis (vor Steuern)")
        assert row.values[0] == Decimal("-24000.00")
        assert row.percents[0] == Decimal("-200.0")
        assert _row(data, "- Betriebskosten").percents[0] == Decimal("300.0")

    def test_third_year_reserve_hits_cap(self, bwa):
        # capital 22,052.50 after two years, so only 2,947.50 are missing
        assert _row(bwa, "- UG Rücklage (25%)").values[2] == Decimal("-2947.50")

    def test_zero_revenue_plan(self):
        plan_input = PlanBuilder(start_year=2026).add_cost_item("Miete", 500).build()
        data = generate_bwa("", 2026, calculate_liquidity(plan_input))
        assert all(p == 0 for row in data.rows for p in row.percents)
        assert _row(data, "- Betriebskosten").values[0] == Decimal("-6000.00")

    def test_investments_and_interest(self):
        plan_input = (
            PlanBuilder(start_year=2026)
            .fixed_revenue(10000)
            .add_investment("Server", 6000, "2026-02")
            .add_loan("Bank", 12000, 0.06, 24, "2026-01")
            .build()
        )
        data = generate_bwa("", 2026, calculate_liquidity(plan_input))
        investments = _row(data, "- Investitionen").values[0]
        interest = _row(data, "- Zinsen").values[0]
        extended = _row(data, "= Erweiterter Cash-flow").values[0]
        assert investments == Decimal("-6000.00")
        assert interest < 0
        assert extended == Decimal("114000.00")
        assert _row(data, "= Cash-flow").values[0] == extended + interest
