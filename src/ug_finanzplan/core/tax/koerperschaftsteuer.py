"""Körperschaftsteuer (corporate income tax) and Solidaritätszuschlag.

§ 23 Abs. 1 KStG: flat 15% on the taxable income of a corporation.
A UG (haftungsbeschränkt) is a GmbH and pays the same rate.

§ 4 SolZG: Solidaritätszuschlag = 5.5% of the Körperschaftsteuer. The 2021
abolition for most income-tax payers does not extend to corporations.
"""

from decimal import Decimal

from ..money import round_cents, to_decimal

#: Corporate income tax rate — § 23 Abs. 1 KStG
KOERPERSCHAFTSTEUER_RATE = Decimal("0.15")

#: Solidarity surcharge on Körperschaftsteuer — § 4 SolZG
SOLI_RATE = Decimal("0.055")


def calculate_koerperschaftsteuer(taxable_profit: Decimal) -> Decimal:
    """Calculate Körperschaftsteuer (15% of taxable profit).

    Args:
        taxable_profit: Profit before tax, must be ≥ 0.

    Returns:
        Körperschaftsteuer rounded to 2 decimal places.
    """
    return round_cents(to_decimal(taxable_profit) * KOERPERSCHAFTSTEUER_RATE)


def calculate_soli(koerperschaftsteuer: Decimal) -> Decimal:
    """Calculate Solidaritätszuschlag (5.5% of Körperschaftsteuer).

    § 4 SolZG — applied to the tax amount, not to the profit.
    """
    return round_cents(to_decimal(koerperschaftsteuer) * SOLI_RATE)
