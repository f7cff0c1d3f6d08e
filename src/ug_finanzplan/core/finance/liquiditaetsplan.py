"""Liquiditätsplan — the bank's month-by-month liquidity table.

One table per plan year:

  1. Einzahlungen      (header, total inflows)
     Umsatz
  2. Auszahlungen      (header, total outflows)
     Personalkosten / Betriebskosten / Investitionen
     Kreditzinsen / Kredittilgung
  3. Saldo             (net cash flow)
  4. Kontostand        (closing balance; its "sum" is the year-end balance)
"""

from decimal import Decimal
from typing import Callable

from ..models import LiquidityPlanRow, LiquidityPlanYear, LiquidityResult, MonthlyCalculation
from ..money import round_cents, sum_decimals, to_decimal

_ROWS: list[tuple[str, Callable[[MonthlyCalculation], Decimal], bool, bool]] = [
    # label, value, is_header, is_highlight
    ("1. Einzahlungen", lambda m: m.total_inflows, True, False),
    ("   Umsatz", lambda m: m.revenue, False, False),
    ("2. Auszahlungen", lambda m: m.total_outflows, True, False),
    ("   Personalkosten", lambda m: m.personnel_costs, False, False),
    ("   Betriebskosten", lambda m: m.operating_costs, False, False),
    ("   Investitionen", lambda m: m.investment_costs, False, False),
    ("   Kreditzinsen", lambda m: m.loan_interest, False, False),
    ("   Kredittilgung", lambda m: m.loan_principal, False, False),
    ("3. Saldo", lambda m: m.net_cashflow, False, True),
    ("4. Kontostand", lambda m: m.end_balance, False, True),
]

BALANCE_LABEL = "4. Kontostand"


def generate_liquidity_plan(
    liquidity_result: LiquidityResult,
    starting_liquidity: Decimal,
) -> list[LiquidityPlanYear]:
    """Build the Liquiditätsplan tables, one per plan year."""
    tables: list[LiquidityPlanYear] = []
    opening = round_cents(to_decimal(starting_liquidity))

    for year, summary in liquidity_result.year_summaries.items():
        year_months = liquidity_result.months_of_year(year)
        rows = []
        for label, get, is_header, is_highlight in _ROWS:
            values = tuple(get(m) for m in year_months)
            total = summary.end_liquidity if label == BALANCE_LABEL else sum_decimals(values)
            rows.append(LiquidityPlanRow(
                label=label,
                values=values,
                total=round_cents(total),
                is_header=is_header,
                is_highlight=is_highlight,
            ))
        tables.append(LiquidityPlanYear(
            year=year,
            opening_balance=opening,
            total_revenue=summary.total_revenue,
            total_costs=summary.total_costs,
            closing_balance=summary.end_liquidity,
            rows=rows,
        ))
        opening = summary.end_liquidity

    return tables
