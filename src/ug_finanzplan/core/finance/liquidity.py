"""Liquidity engine — 36-month cash-flow projection with tax estimates.

One forward pass over the plan months. Per month it resolves revenue,
personnel, operating costs, investments and loan payments, chains the
cash balance, and estimates the month's share of the annual taxes from
the year-to-date profit. Afterwards it rolls the rounded monthly records
up into exact year summaries, including the UG reserve.

All functions are pure: no I/O, no shared state, no mutation of inputs.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..models import (
    Employee,
    Investment,
    LEGACY_COST_CATEGORIES,
    LegacyOperatingCosts,
    LiquidityInput,
    LiquidityResult,
    MonthlyCalculation,
    OperatingCosts,
    RevenueModel,
    RevenuePlan,
    YearSummary,
)
from ..money import ZERO, round_cents, sum_decimals, to_decimal
from ..months import PLAN_MONTHS, PLAN_YEARS, generate_month_keys, parse_month_key
from ..tax import (
    GMBH_STAMMKAPITAL,
    calculate_tax_components,
    calculate_taxes,
    calculate_ug_reserve,
)
from .loans import calculate_monthly_loan_costs, get_total_remaining_loan_balance

logger = logging.getLogger(__name__)

__all__ = [
    "calculate_burn_rate",
    "calculate_liquidity",
    "calculate_profit_margin",
    "calculate_revenue_growth",
    "calculate_runway",
    "calculate_stammkapital_progress",
    "check_liquidity_warnings",
    "find_break_even_month",
    "generate_month_keys",
    "normalize_operating_costs",
    "resolve_monthly_revenue",
]


# ---------------------------------------------------------------------------
# Per-month resolution of the inputs
# ---------------------------------------------------------------------------

def resolve_monthly_revenue(
    revenue: Optional[RevenuePlan],
    month: str,
    month_index: int,
) -> Decimal:
    """Revenue for one month of the plan.

    An explicit entry in revenue.months always wins. Otherwise:
      fixed  → fixed_monthly_revenue every month
      growth → straight line from growth_start_revenue (month 1) to
               growth_end_revenue (month 36)
      custom → 0 for months without an entry

    Args:
        revenue: The revenue plan, None if not entered yet.
        month: "YYYY-MM".
        month_index: 0-based position of the month within the plan.
    """
    if revenue is None:
        return ZERO
    if month in revenue.months:
        return round_cents(to_decimal(revenue.months[month]))
    if revenue.model == RevenueModel.FIXED:
        return round_cents(to_decimal(revenue.fixed_monthly_revenue))
    if revenue.model == RevenueModel.GROWTH:
        start = to_decimal(revenue.growth_start_revenue)
        end = to_decimal(revenue.growth_end_revenue)
        return round_cents(start + (end - start) * month_index / (PLAN_MONTHS - 1))
    return ZERO


def _personnel_costs(employees: list[Employee], month: str) -> Decimal:
    return sum_decimals(
        round_cents(to_decimal(e.monthly_salary)) for e in employees if e.is_active(month)
    )


def normalize_operating_costs(
    costs: Optional[OperatingCosts],
    month: str,
) -> list[tuple[str, Decimal]]:
    """Fold either operating-cost shape into (name, amount) pairs for a month.

    A list of OperatingCostItem is taken as is. The legacy category shape
    yields one pair per bucket, with the month's overrides replacing the
    bucket amount; override keys outside the ten buckets are added as
    extra positions.
    """
    if costs is None:
        return []
    if isinstance(costs, LegacyOperatingCosts):
        overrides = costs.monthly_overrides.get(month, {})
        named = [
            (category, to_decimal(overrides.get(category, getattr(costs, category))))
            for category in LEGACY_COST_CATEGORIES
        ]
        named.extend(
            (key, to_decimal(value))
            for key, value in overrides.items()
            if key not in LEGACY_COST_CATEGORIES
        )
        return named
    return [(item.name, to_decimal(item.amount)) for item in costs]


def _operating_costs(costs: Optional[OperatingCosts], month: str) -> Decimal:
    return sum_decimals(round_cents(amount) for _, amount in normalize_operating_costs(costs, month))


def _investment_costs(investments: list[Investment], month: str) -> Decimal:
    return sum_decimals(round_cents(to_decimal(i.amount)) for i in investments if i.month == month)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def calculate_liquidity(plan_input: LiquidityInput) -> LiquidityResult:
    """Calculate the full 36-month liquidity plan.

    Monthly:
        outflows = personnel + operating + investments + loan payments
        net      = revenue − outflows
        end      = start + net (next month's start)

    Tax estimate per month: the year-to-date profit (revenue minus
    personnel, operating, investment and loan interest; loan principal is
    not an expense) is annualized as ytd / month_number × 12, taxed, and
    each unrounded tax component divided by 12 before rounding. January
    extrapolates from a single month, so early estimates swing; a
    loss-making year to date yields 0.

    Yearly: sums of the rounded monthly values give revenue, costs,
    gross and operating profit and profit before tax. Taxes are computed
    once on the exact annual profit; 25% of the net profit goes into the
    UG reserve until the capital reaches €25,000, and the grown capital
    is carried into the next year.

    Args:
        plan_input: Company facts, plan window and all plan inputs.
            Missing parts count as zero.

    Returns:
        LiquidityResult with 36 MonthlyCalculation records in month order
        and one YearSummary per plan year.
    """
    company = plan_input.company
    start_year = plan_input.plan.start_year
    hebesatz = company.hebesatz
    revenue = plan_input.revenue
    employees = plan_input.employees or []
    operating_costs = plan_input.operating_costs
    investments = plan_input.investments or []
    loans = plan_input.loans or []

    month_keys = generate_month_keys(start_year, PLAN_YEARS)
    months: dict[str, MonthlyCalculation] = {}

    balance = round_cents(to_decimal(plan_input.plan.starting_liquidity))
    # year -> [revenue, tax-relevant expenses] year to date
    ytd: dict[int, list[Decimal]] = {
        year: [ZERO, ZERO] for year in range(start_year, start_year + PLAN_YEARS)
    }

    for index, month in enumerate(month_keys):
        year, month_number = parse_month_key(month)
        start_balance = balance

        revenue_amount = resolve_monthly_revenue(revenue, month, index)
        other_income = ZERO  # no other income sources yet
        total_inflows = revenue_amount + other_income

        personnel = _personnel_costs(employees, month)
        operating = _operating_costs(operating_costs, month)
        investment = _investment_costs(investments, month)
        loan_costs = calculate_monthly_loan_costs(loans, month)

        total_outflows = personnel + operating + investment + loan_costs.total_payment
        net_cashflow = total_inflows - total_outflows
        balance = start_balance + net_cashflow

        ytd[year][0] += revenue_amount
        ytd[year][1] += personnel + operating + investment + loan_costs.total_interest
        ytd_profit = ytd[year][0] - ytd[year][1]
        annualized_profit = ytd_profit / month_number * 12
        kst, soli, gewst = calculate_tax_components(annualized_profit, hebesatz)

        months[month] = MonthlyCalculation(
            month=month,
            revenue=revenue_amount,
            other_income=other_income,
            total_inflows=round_cents(total_inflows),
            personnel_costs=round_cents(personnel),
            operating_costs=round_cents(operating),
            investment_costs=round_cents(investment),
            loan_interest=loan_costs.total_interest,
            loan_principal=loan_costs.total_principal,
            loan_provision_fees=loan_costs.total_provision_fees,
            total_outflows=round_cents(total_outflows),
            net_cashflow=round_cents(net_cashflow),
            start_balance=round_cents(start_balance),
            end_balance=round_cents(balance),
            koerperschaftsteuer=round_cents(kst / 12),
            solidaritaetszuschlag=round_cents(soli / 12),
            gewerbesteuer=round_cents(gewst / 12),
            loan_remaining_balance=get_total_remaining_loan_balance(loans, month),
        )

    logger.debug("Calculated %d months from %s", len(months), month_keys[0])

    year_summaries = _summarize_years(
        months, start_year, hebesatz, to_decimal(company.stammkapital)
    )
    return LiquidityResult(months=months, year_summaries=year_summaries)


def _summarize_years(
    months: dict[str, MonthlyCalculation],
    start_year: int,
    hebesatz: int,
    stammkapital: Decimal,
) -> dict[int, YearSummary]:
    summaries: dict[int, YearSummary] = {}
    capital = stammkapital

    for year in range(start_year, start_year + PLAN_YEARS):
        year_months = [m for key, m in months.items() if key.startswith(f"{year}-")]

        total_revenue = sum_decimals(m.revenue for m in year_months)
        total_personnel = sum_decimals(m.personnel_costs for m in year_months)
        total_operating = sum_decimals(m.operating_costs for m in year_months)
        total_investment = sum_decimals(m.investment_costs for m in year_months)
        total_interest = sum_decimals(m.loan_interest for m in year_months)

        total_costs = total_personnel + total_operating + total_investment + total_interest
        gross_profit = total_revenue - total_personnel
        operating_profit = gross_profit - total_operating
        profit_before_tax = total_revenue - total_costs

        taxes = calculate_taxes(profit_before_tax, hebesatz)
        net_profit = profit_before_tax - taxes.total_taxes

        reserve = calculate_ug_reserve(net_profit, capital)
        capital += reserve

        summaries[year] = YearSummary(
            year=year,
            total_revenue=round_cents(total_revenue),
            total_costs=round_cents(total_costs),
            gross_profit=round_cents(gross_profit),
            operating_profit=round_cents(operating_profit),
            profit_before_tax=round_cents(profit_before_tax),
            total_taxes=taxes.total_taxes,
            net_profit=round_cents(net_profit),
            end_liquidity=year_months[-1].end_balance,
            ug_reserve=reserve,
            stammkapital_end=round_cents(capital),
        )
        logger.debug(
            "Year %d: profit before tax %s, taxes %s, reserve %s",
            year, profit_before_tax, taxes.total_taxes, reserve,
        )

    return summaries


# ---------------------------------------------------------------------------
# Plan checks
# ---------------------------------------------------------------------------

def check_liquidity_warnings(result: LiquidityResult) -> list[tuple[str, Decimal]]:
    """Months whose closing balance is negative, as (month, balance) pairs."""
    return [
        (month, calc.end_balance)
        for month, calc in result.months.items()
        if calc.end_balance < 0
    ]


def find_break_even_month(result: LiquidityResult) -> Optional[str]:
    """First month whose operating result turns non-negative.

    Operating result = revenue − personnel − operating costs. A plan that
    is profitable from its first month breaks even in that month. Returns
    None if the result never turns non-negative after a negative month.
    """
    previous_negative = True
    for month, calc in result.months.items():
        operating_result = calc.revenue - (calc.personnel_costs + calc.operating_costs)
        if previous_negative and operating_result >= 0:
            return month
        previous_negative = operating_result < 0
    return None


# ---------------------------------------------------------------------------
# Key figures
# ---------------------------------------------------------------------------

WHOLE_PERCENT = Decimal("1")


def calculate_runway(result: LiquidityResult) -> Optional[str]:
    """First month in which the cash runs out (closing balance below 0).

    None means the money lasts through all 36 plan months.
    """
    for month, calc in result.months.items():
        if calc.end_balance < 0:
            return month
    return None


def calculate_burn_rate(summary: YearSummary) -> Decimal:
    """Average monthly cash burn of a year: (costs − revenue) / 12, at least 0."""
    burn = (summary.total_costs - summary.total_revenue) / 12
    return round_cents(burn) if burn > 0 else Decimal("0.00")


def calculate_revenue_growth(start_revenue: Decimal, end_revenue: Decimal) -> Decimal:
    """Revenue change in whole percent of the starting revenue.

    From zero revenue any positive revenue counts as 100% growth.

    Example:
        80,000 → 120,000 = 50
    """
    start = to_decimal(start_revenue)
    end = to_decimal(end_revenue)
    if start == 0:
        return Decimal("100") if end > 0 else Decimal("0")
    return ((end - start) / abs(start) * 100).quantize(WHOLE_PERCENT, rounding=ROUND_HALF_UP)


def calculate_profit_margin(summary: YearSummary) -> Decimal:
    """Net profit in whole percent of revenue; 0 for a year without revenue."""
    if summary.total_revenue == 0:
        return Decimal("0")
    return (summary.net_profit / summary.total_revenue * 100).quantize(
        WHOLE_PERCENT, rounding=ROUND_HALF_UP
    )


def calculate_stammkapital_progress(result: LiquidityResult) -> Decimal:
    """Capital at the end of the plan in percent of €25,000, capped at 100."""
    last_year = max(result.year_summaries)
    capital = result.year_summaries[last_year].stammkapital_end
    progress = min(capital / GMBH_STAMMKAPITAL * 100, Decimal("100"))
    return progress.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
