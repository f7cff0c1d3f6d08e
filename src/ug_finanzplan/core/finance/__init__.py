"""Financial plan calculations.

Pure functions for loan schedules, the 36-month liquidity plan and the
bank reports derived from it. No file access or I/O.

Usage:
    from ug_finanzplan.core.finance import calculate_liquidity, generate_bwa
"""

from .bwa import generate_bwa, percent_of_revenue
from .liquiditaetsplan import generate_liquidity_plan
from .liquidity import (
    calculate_burn_rate,
    calculate_liquidity,
    calculate_profit_margin,
    calculate_revenue_growth,
    calculate_runway,
    calculate_stammkapital_progress,
    check_liquidity_warnings,
    find_break_even_month,
    generate_month_keys,
    normalize_operating_costs,
    resolve_monthly_revenue,
)
from .loans import (
    calculate_kfw_provision_fee,
    calculate_monthly_loan_costs,
    calculate_monthly_payment,
    generate_loan_schedule,
    get_total_remaining_loan_balance,
)

__all__ = [
    # loans
    "calculate_monthly_payment",
    "generate_loan_schedule",
    "calculate_monthly_loan_costs",
    "get_total_remaining_loan_balance",
    "calculate_kfw_provision_fee",
    # liquidity
    "calculate_liquidity",
    "check_liquidity_warnings",
    "find_break_even_month",
    "calculate_runway",
    "calculate_burn_rate",
    "calculate_revenue_growth",
    "calculate_profit_margin",
    "calculate_stammkapital_progress",
    "generate_month_keys",
    "normalize_operating_costs",
    "resolve_monthly_revenue",
    # reports
    "generate_bwa",
    "percent_of_revenue",
    "generate_liquidity_plan",
]
