"""Gesetzliche Rücklage of the UG (haftungsbeschränkt).

§ 5a Abs. 3 GmbHG: a UG must put a quarter of its annual net profit
(reduced by any loss carried forward) into a statutory reserve. The
obligation ends once the capital reaches the €25,000 Stammkapital of a
regular GmbH (§ 5a Abs. 5 GmbHG), at which point the UG may convert.
"""

from decimal import Decimal

from ..money import round_cents, to_decimal

#: Share of annual profit that must be retained — § 5a Abs. 3 GmbHG
RESERVE_RATE = Decimal("0.25")

#: Minimum Stammkapital of a GmbH — § 5 Abs. 1 GmbHG
GMBH_STAMMKAPITAL = Decimal("25000")


def calculate_ug_reserve(annual_profit: Decimal, current_stammkapital: Decimal) -> Decimal:
    """Calculate the reserve a UG must retain from one year's profit.

    Args:
        annual_profit: Net profit of the year (after taxes).
        current_stammkapital: Capital including reserves accumulated so far.

    Returns:
        min(25% of profit, gap to €25,000), rounded to cents; 0 for a loss
        or once the capital has reached €25,000. Never pushes the capital
        above €25,000.

    Example:
        profit 200,000, capital 24,000 → 1,000 (gap), not 50,000 (25%)
    """
    annual_profit = to_decimal(annual_profit)
    current_stammkapital = to_decimal(current_stammkapital)
    if current_stammkapital >= GMBH_STAMMKAPITAL or annual_profit <= 0:
        return Decimal("0.00")
    gap = GMBH_STAMMKAPITAL - current_stammkapital
    return round_cents(min(annual_profit * RESERVE_RATE, gap))


def calculate_cumulative_stammkapital(
    initial_stammkapital: Decimal,
    yearly_profits: list[Decimal],
) -> list[Decimal]:
    """Capital after each year's reserve allocation.

    Returns one value per profit, each ≤ €25,000 unless the initial
    capital was already above it.
    """
    result: list[Decimal] = []
    capital = to_decimal(initial_stammkapital)
    for profit in yearly_profits:
        capital += calculate_ug_reserve(profit, capital)
        result.append(round_cents(capital))
    return result
