"""Umsatzsteuer (VAT) for a German UG.

§ 12 UStG: standard rate 19%, reduced rate 7% (food, books, ...).

Zahllast = Umsatzsteuer on sales − Vorsteuer on purchases (§ 15 UStG).
A negative Zahllast is a refund from the Finanzamt.

§ 19 UStG Kleinunternehmerregelung: a business with at most €22,000
revenue in the previous year and an expected €50,000 in the current year
may opt out of charging VAT, and in turn cannot reclaim Vorsteuer.
"""

from decimal import Decimal

from ..models import AnnualVATResult, VATResult
from ..money import round_cents, sum_decimals, to_decimal

VAT_RATES: dict[str, Decimal] = {
    "standard": Decimal("0.19"),
    "reduced": Decimal("0.07"),
    "exempt": Decimal("0"),
}

STANDARD_RATE = VAT_RATES["standard"]

#: Previous-year revenue ceiling for § 19 UStG
SMALL_BUSINESS_THRESHOLD = Decimal("22000")

#: Expected current-year revenue ceiling for § 19 UStG
SMALL_BUSINESS_CURRENT_YEAR_LIMIT = Decimal("50000")

#: Share of net expenses assumed to carry deductible Vorsteuer. Wages,
#: insurance and fees carry none, so only part of the cost base counts.
INPUT_VAT_SHARE = Decimal("0.8")


def calculate_net_from_gross(gross_amount: Decimal, vat_rate: Decimal = STANDARD_RATE) -> Decimal:
    return round_cents(to_decimal(gross_amount) / (1 + to_decimal(vat_rate)))


def calculate_gross_from_net(net_amount: Decimal, vat_rate: Decimal = STANDARD_RATE) -> Decimal:
    return round_cents(to_decimal(net_amount) * (1 + to_decimal(vat_rate)))


def calculate_vat_from_net(net_amount: Decimal, vat_rate: Decimal = STANDARD_RATE) -> Decimal:
    return round_cents(to_decimal(net_amount) * to_decimal(vat_rate))


def calculate_vat_from_gross(gross_amount: Decimal, vat_rate: Decimal = STANDARD_RATE) -> Decimal:
    """VAT contained in a gross amount.

    Computed as gross − net (net rounded first) so that
    net + VAT always adds back up to the gross amount.
    """
    net_amount = calculate_net_from_gross(gross_amount, vat_rate)
    return round_cents(to_decimal(gross_amount) - net_amount)


def calculate_monthly_vat(
    net_revenue: Decimal,
    net_expenses: Decimal,
    is_small_business: bool = False,
    vat_rate: Decimal = STANDARD_RATE,
) -> VATResult:
    """Calculate one month's Umsatzsteuer position.

    Args:
        net_revenue: Revenue without VAT.
        net_expenses: Expenses without VAT; INPUT_VAT_SHARE of them is
            assumed to carry deductible Vorsteuer.
        is_small_business: Kleinunternehmerregelung applies — no VAT is
            charged or reclaimed and gross revenue equals net revenue.
        vat_rate: VAT rate, default 19%.

    Returns:
        VATResult with collected, paid and payable VAT plus net and gross
        revenue.
    """
    net_revenue = to_decimal(net_revenue)
    net_expenses = to_decimal(net_expenses)
    vat_rate = to_decimal(vat_rate)
    if is_small_business:
        return VATResult(
            vat_collected=Decimal("0.00"),
            vat_paid=Decimal("0.00"),
            vat_payable=Decimal("0.00"),
            net_revenue=net_revenue,
            gross_revenue=net_revenue,
        )

    vat_collected = calculate_vat_from_net(net_revenue, vat_rate)
    vat_paid = calculate_vat_from_net(net_expenses * INPUT_VAT_SHARE, vat_rate)
    return VATResult(
        vat_collected=vat_collected,
        vat_paid=vat_paid,
        vat_payable=round_cents(vat_collected - vat_paid),
        net_revenue=net_revenue,
        gross_revenue=calculate_gross_from_net(net_revenue, vat_rate),
    )


def check_small_business_status(
    previous_year_revenue: Decimal,
    current_year_expected_revenue: Decimal,
) -> bool:
    """True if both § 19 UStG revenue limits are kept."""
    return (
        to_decimal(previous_year_revenue) <= SMALL_BUSINESS_THRESHOLD
        and to_decimal(current_year_expected_revenue) <= SMALL_BUSINESS_CURRENT_YEAR_LIMIT
    )


def calculate_quarterly_vat(monthly_vat_payables: list[Decimal]) -> Decimal:
    """Sum of the monthly Zahllast values of one Voranmeldung period."""
    return round_cents(sum_decimals(monthly_vat_payables))


def calculate_annual_vat(
    monthly_data: list[tuple[Decimal, Decimal]],
    is_small_business: bool = False,
    vat_rate: Decimal = STANDARD_RATE,
) -> AnnualVATResult:
    """Summarize a year of (net_revenue, net_expenses) pairs, January first.

    Quarterly payments are the Zahllast sums of months 1–3, 4–6, 7–9 and
    10–12; missing months count as zero.
    """
    if is_small_business:
        zero = Decimal("0.00")
        return AnnualVATResult(zero, zero, zero, (zero, zero, zero, zero))

    results = [
        calculate_monthly_vat(revenue, expenses, False, vat_rate)
        for revenue, expenses in monthly_data
    ]
    total_collected = round_cents(sum_decimals(r.vat_collected for r in results))
    total_paid = round_cents(sum_decimals(r.vat_paid for r in results))
    quarters = tuple(
        calculate_quarterly_vat([r.vat_payable for r in results[q * 3:q * 3 + 3]])
        for q in range(4)
    )
    return AnnualVATResult(
        total_vat_collected=total_collected,
        total_vat_paid=total_paid,
        total_vat_payable=round_cents(total_collected - total_paid),
        quarterly_payments=quarters,
    )
