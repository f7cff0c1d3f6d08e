"""Loan amortization — annuity loans with grace periods and provision fees.

Supports:
  - Annuity loans (level monthly payment, Annuitätendarlehen)
  - Grace periods (tilgungsfreie Zeit): interest only, no principal
  - Provision fees (Bereitstellungsentgelt), charged once in period 0

Portfolio queries (costs and balances for one month) regenerate each
loan's schedule from its own start month on every call. With a 36-month
plan and a handful of loans this stays cheap and keeps
generate_loan_schedule the single source of truth.
"""

import logging
from decimal import Decimal

from ..models import Loan, LoanPayment, LoanSchedule, MonthlyLoanCosts
from ..money import ZERO, round_cents, to_decimal
from ..months import add_months

logger = logging.getLogger(__name__)

#: Months of schedule generated when looking up a loan for a given month.
LOAN_LOOKAHEAD_MONTHS = 60

#: A remaining balance at or below this counts as repaid.
PAID_OFF_THRESHOLD = Decimal("0.01")

#: Typical KfW Bereitstellungsprovision: 0.15% per month on the undisbursed amount
KFW_PROVISION_RATE = Decimal("0.0015")


def calculate_monthly_payment(
    principal: Decimal,
    annual_rate: Decimal,
    term_months: int,
) -> Decimal:
    """Calculate the level monthly payment of an annuity loan.

    Formula: P × r × (1+r)^n / ((1+r)^n − 1) with r = annual_rate / 12.
    A zero rate spreads the principal evenly over the term.

    Args:
        principal: Loan amount.
        annual_rate: Annual interest rate as a fraction (0.035 = 3.5%).
        term_months: Number of repayment months. A term ≤ 0 is treated as
            repayment in a single payment.

    Returns:
        Monthly payment rounded to cents.

    Example:
        100,000 at 3.5% over 60 months → 1,819.17
    """
    principal = to_decimal(principal)
    annual_rate = to_decimal(annual_rate)
    if term_months <= 0:
        return round_cents(principal)
    if annual_rate == 0:
        return round_cents(principal / term_months)

    monthly_rate = annual_rate / 12
    factor = (1 + monthly_rate) ** term_months
    return round_cents(principal * monthly_rate * factor / (factor - 1))


def generate_loan_schedule(
    loan: Loan,
    start_month: str,
    num_months: int = 36,
) -> LoanSchedule:
    """Generate the month-by-month amortization schedule of one loan.

    The level payment is computed over the repayment period only
    (term − grace months): grace months pay interest and leave the
    balance untouched. After the grace period each payment is capped at
    balance + interest, and the last month of the term settles whatever
    cent-rounding left on the balance, so a loan with grace < term is
    repaid within its term.

    Args:
        loan: The loan.
        start_month: First period, "YYYY-MM".
        num_months: Maximum number of periods; generation also stops as
            soon as the balance is ≤ 0.01.

    Returns:
        LoanSchedule with one LoanPayment per period and the totals of
        interest, principal and provision fees.
    """
    amount = to_decimal(loan.amount)
    monthly_rate = to_decimal(loan.interest_rate) / 12
    grace = max(loan.grace_period_months, 0)
    repayment_term = loan.term_months - grace
    level_payment = calculate_monthly_payment(
        amount,
        loan.interest_rate,
        repayment_term if repayment_term > 0 else loan.term_months,
    )
    provision_fee = round_cents(to_decimal(loan.provision_fee))

    payments: list[LoanPayment] = []
    balance = round_cents(amount)
    total_interest = ZERO
    total_principal = ZERO
    total_fees = ZERO

    month = start_month
    for i in range(num_months):
        if balance <= PAID_OFF_THRESHOLD:
            break

        interest = round_cents(balance * monthly_rate)
        if i < grace:
            payment = interest
            principal = ZERO
        else:
            payment = min(level_payment, balance + interest)
            principal = payment - interest
            # Final period of the term, or the payment would overshoot
            if principal > balance or i >= loan.term_months - 1:
                principal = balance
                payment = principal + interest

        fee = provision_fee if i == 0 else ZERO
        balance = max(ZERO, balance - principal)

        total_interest += interest
        total_principal += principal
        total_fees += fee

        payments.append(LoanPayment(
            month=month,
            payment=round_cents(payment),
            principal=round_cents(principal),
            interest=interest,
            remaining_balance=round_cents(balance),
            provision_fee=fee,
        ))
        month = add_months(month, 1)

    return LoanSchedule(
        payments=payments,
        total_interest=round_cents(total_interest),
        total_principal=round_cents(total_principal),
        total_provision_fees=round_cents(total_fees),
    )


def _payment_for_month(loan: Loan, month: str):
    """The loan's schedule entry for `month`, or None if it is paid off by then."""
    lookahead = max(LOAN_LOOKAHEAD_MONTHS, loan.term_months)
    schedule = generate_loan_schedule(loan, loan.start_month, lookahead)
    for payment in schedule.payments:
        if payment.month == month:
            return payment
    return None


def calculate_monthly_loan_costs(loans: list[Loan], month: str) -> MonthlyLoanCosts:
    """Sum the payments of all loans in one month.

    Loans starting after `month` contribute nothing and keep their full
    principal as remaining balance. A started loan without a schedule
    entry for `month` is repaid (balance 0).

    Returns:
        MonthlyLoanCosts with totals and remaining balance per loan key.
    """
    total_payment = ZERO
    total_principal = ZERO
    total_interest = ZERO
    total_fees = ZERO
    balances: dict[str, Decimal] = {}

    for loan in loans:
        if loan.start_month > month:
            balances[loan.key] = round_cents(to_decimal(loan.amount))
            continue

        payment = _payment_for_month(loan, month)
        if payment is None:
            logger.debug("Loan %s repaid before %s", loan.key, month)
            balances[loan.key] = Decimal("0.00")
            continue

        total_payment += payment.payment
        total_principal += payment.principal
        total_interest += payment.interest
        total_fees += payment.provision_fee
        balances[loan.key] = payment.remaining_balance

    return MonthlyLoanCosts(
        total_payment=round_cents(total_payment),
        total_principal=round_cents(total_principal),
        total_interest=round_cents(total_interest),
        total_provision_fees=round_cents(total_fees),
        remaining_balances=balances,
    )


def get_total_remaining_loan_balance(loans: list[Loan], month: str) -> Decimal:
    """Outstanding balance across all loans after `month`'s payments."""
    total = ZERO
    for loan in loans:
        if loan.start_month > month:
            total += to_decimal(loan.amount)
            continue
        payment = _payment_for_month(loan, month)
        if payment is not None:
            total += payment.remaining_balance
    return round_cents(total)


def calculate_kfw_provision_fee(
    loan_amount: Decimal,
    months_before_disbursement: int,
    provision_rate: Decimal = KFW_PROVISION_RATE,
) -> Decimal:
    """Bereitstellungsprovision on an amount that is committed but not yet paid out."""
    return round_cents(to_decimal(loan_amount) * provision_rate * months_before_disbursement)
