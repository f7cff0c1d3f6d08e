"""BWA (Betriebswirtschaftliche Auswertung) for bank loan applications.

Turns a liquidity result into the fixed row layout banks expect for a
three-year plan: one value and one percent-of-revenue figure per year.

Row labels are part of the contract with renderers:
  "= ..."  subtotal / result row, rendered emphasized
  "- ..."  deduction, value is negative
  "+/- .." change row
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Callable

from ..models import BWAData, BWARow, LiquidityResult, YearSummary
from ..money import ZERO, sum_decimals

PERCENT_STEP = Decimal("0.1")


def percent_of_revenue(value: Decimal, revenue: Decimal) -> Decimal:
    """value / revenue in percent with one decimal place; 0 without revenue."""
    if revenue == 0:
        return Decimal("0.0")
    return (value / revenue * 100).quantize(PERCENT_STEP, rounding=ROUND_HALF_UP)


def _row(
    label: str,
    amounts: list[Decimal],
    revenues: list[Decimal],
    is_subtraction: bool = False,
) -> BWARow:
    """One report row. Deductions show a negative value, positive percent."""
    return BWARow(
        label=label,
        values=tuple(-a if is_subtraction else a for a in amounts),
        percents=tuple(percent_of_revenue(a, r) for a, r in zip(amounts, revenues)),
    )


def generate_bwa(
    company_name: str,
    start_year: int,
    liquidity_result: LiquidityResult,
) -> BWAData:
    """Generate the BWA rows for the three plan years.

    Revenue, profits, taxes and reserve come from the year summaries;
    personnel, operating, investment and interest are summed from the
    monthly records. Deduction rows show the amount negated but its
    percentage of revenue unsigned; subtotal rows keep their sign in both.

    Args:
        company_name: Shown in the report header.
        start_year: First plan year.
        liquidity_result: Output of calculate_liquidity.

    Returns:
        BWAData with the years and the 16 report rows in fixed order.
    """
    years = (start_year, start_year + 1, start_year + 2)
    summaries: list[YearSummary] = [liquidity_result.year_summaries[y] for y in years]
    revenues = [s.total_revenue for s in summaries]

    def detail(field: str) -> list[Decimal]:
        return [
            sum_decimals(getattr(m, field) for m in liquidity_result.months_of_year(y))
            for y in years
        ]

    personnel = detail("personnel_costs")
    operating = detail("operating_costs")
    investment = detail("investment_costs")
    interest = detail("loan_interest")

    def from_summary(get: Callable[[YearSummary], Decimal]) -> list[Decimal]:
        return [get(s) for s in summaries]

    extended_cash_flow = [
        s.operating_profit - inv for s, inv in zip(summaries, investment)
    ]
    cash_flow = [ecf - i for ecf, i in zip(extended_cash_flow, interest)]
    zeros = [ZERO, ZERO, ZERO]

    rows = [
        _row("Umsatz", revenues, revenues),
        _row("+/- Bestandsveränderung", zeros, revenues),
        _row("- Materialeinsatz/Wareneinsatz", zeros, revenues),
        _row("= Rohgewinn I", revenues, revenues),
        _row("- Personalkosten", personnel, revenues, is_subtraction=True),
        _row("= Rohgewinn II", from_summary(lambda s: s.gross_profit), revenues),
        _row("- Betriebskosten", operating, revenues, is_subtraction=True),
        _row("- Investitionen", investment, revenues, is_subtraction=True),
        _row("= Erweiterter Cash-flow", extended_cash_flow, revenues),
        _row("- Zinsen", interest, revenues, is_subtraction=True),
        _row("= Cash-flow", cash_flow, revenues),
        _row("= Betriebsergebnis (vor Steuern)", from_summary(lambda s: s.profit_before_tax), revenues),
        _row("- Steuern (geschätzt)", from_summary(lambda s: s.total_taxes), revenues, is_subtraction=True),
        _row("= Betriebsgewinn (nach Steuern)", from_summary(lambda s: s.net_profit), revenues),
        _row("- UG Rücklage (25%)", from_summary(lambda s: s.ug_reserve), revenues, is_subtraction=True),
        _row(
            "= Ausschüttungsfähiger Gewinn",
            from_summary(lambda s: s.net_profit - s.ug_reserve),
            revenues,
        ),
    ]

    return BWAData(company_name=company_name, years=years, rows=rows)
