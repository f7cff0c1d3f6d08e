"""German corporate tax engine for a UG (haftungsbeschränkt).

High-level entry point:
    from ug_finanzplan.core.tax import calculate_taxes

Taxes on the annual profit of a UG:
  1. Körperschaftsteuer 15%            (§ 23 KStG)
  2. Solidaritätszuschlag 5.5% of KSt  (§ 4 SolZG)
  3. Gewerbesteuer 3.5% × Hebesatz     (§§ 11, 16 GewStG), no Freibetrag

After taxes, 25% of the net profit goes into the gesetzliche Rücklage
until the capital reaches €25,000 (§ 5a GmbHG).

Sub-modules (importable individually for testing or reuse):
    koerperschaftsteuer — corporate tax + Solidaritätszuschlag
    gewerbesteuer       — trade tax and city Hebesatz table
    ug_ruecklage        — statutory reserve of the UG
    umsatzsteuer        — VAT and Kleinunternehmerregelung
"""

from decimal import Decimal

from ..models import TaxResult
from ..money import ZERO, round_cents, to_decimal
from .gewerbesteuer import (
    DEFAULT_HEBESATZ,
    HEBESATZ_DATA,
    STEUERMESSZAHL,
    calculate_gewerbesteuer,
    get_hebesatz_for_city,
)
from .koerperschaftsteuer import (
    KOERPERSCHAFTSTEUER_RATE,
    SOLI_RATE,
    calculate_koerperschaftsteuer,
    calculate_soli,
)
from .ug_ruecklage import (
    GMBH_STAMMKAPITAL,
    RESERVE_RATE,
    calculate_cumulative_stammkapital,
    calculate_ug_reserve,
)
from .umsatzsteuer import (
    VAT_RATES,
    calculate_annual_vat,
    calculate_monthly_vat,
    check_small_business_status,
)

__all__ = [
    "calculate_taxes",
    "calculate_tax_components",
    # koerperschaftsteuer
    "KOERPERSCHAFTSTEUER_RATE",
    "SOLI_RATE",
    "calculate_koerperschaftsteuer",
    "calculate_soli",
    # gewerbesteuer
    "STEUERMESSZAHL",
    "DEFAULT_HEBESATZ",
    "HEBESATZ_DATA",
    "calculate_gewerbesteuer",
    "get_hebesatz_for_city",
    # ug_ruecklage
    "RESERVE_RATE",
    "GMBH_STAMMKAPITAL",
    "calculate_ug_reserve",
    "calculate_cumulative_stammkapital",
    # umsatzsteuer
    "VAT_RATES",
    "calculate_monthly_vat",
    "calculate_annual_vat",
    "check_small_business_status",
]


def calculate_taxes(taxable_profit: Decimal, hebesatz: int) -> TaxResult:
    """Calculate Körperschaftsteuer, Soli and Gewerbesteuer on a profit.

    A loss or zero profit yields zero taxes: no refunds, loss carry-backs
    or carry-forwards are modelled.

    Args:
        taxable_profit: Profit before tax for the period (usually a year).
            Ints, floats and strings are accepted and converted.
        hebesatz: Municipal Hebesatz in percent, e.g. 410 for Berlin.

    Returns:
        TaxResult with each component rounded to cents, their sum and the
        effective tax rate in percent of the profit.

    Example:
        profit 100,000 at Hebesatz 400:
        KSt 15,000.00 + Soli 825.00 + GewSt 14,000.00 = 29,825.00 (29.83%)
    """
    taxable_profit = to_decimal(taxable_profit)
    if taxable_profit <= 0:
        return TaxResult(
            koerperschaftsteuer=Decimal("0.00"),
            solidaritaetszuschlag=Decimal("0.00"),
            gewerbesteuer=Decimal("0.00"),
            total_taxes=Decimal("0.00"),
            effective_tax_rate=Decimal("0.00"),
        )

    # Soli is assessed on the KSt as it appears in the notice, i.e. in cents;
    # the total is the sum of the three rounded amounts.
    kst = calculate_koerperschaftsteuer(taxable_profit)
    soli = calculate_soli(kst)
    gewst = calculate_gewerbesteuer(taxable_profit, hebesatz)
    total = kst + soli + gewst

    return TaxResult(
        koerperschaftsteuer=kst,
        solidaritaetszuschlag=soli,
        gewerbesteuer=gewst,
        total_taxes=total,
        effective_tax_rate=round_cents(total / taxable_profit * 100),
    )


def calculate_tax_components(
    taxable_profit: Decimal,
    hebesatz: int,
) -> tuple[Decimal, Decimal, Decimal]:
    """Unrounded (KSt, Soli, GewSt) on a profit; zeros for a loss.

    For estimates that are divided further before rounding, such as the
    monthly share of an annualized profit.
    """
    taxable_profit = to_decimal(taxable_profit)
    if taxable_profit <= 0:
        return ZERO, ZERO, ZERO
    kst = taxable_profit * KOERPERSCHAFTSTEUER_RATE
    soli = kst * SOLI_RATE
    gewst = taxable_profit * STEUERMESSZAHL * Decimal(hebesatz) / 100
    return kst, soli, gewst
