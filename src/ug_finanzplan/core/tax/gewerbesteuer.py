"""Gewerbesteuer (municipal trade tax).

§ 11 GewStG: Steuermessbetrag = Gewerbeertrag × 3.5% (Steuermesszahl).
§ 16 GewStG: Gewerbesteuer = Steuermessbetrag × Hebesatz / 100, where the
Hebesatz is set by each municipality (minimum 200%).

Corporations get no Freibetrag: the €24,500 allowance of § 11 Abs. 1 Nr. 1
GewStG only applies to sole proprietors and partnerships. A UG pays
trade tax from the first euro of profit.
"""

from decimal import Decimal

from ..money import round_cents, to_decimal

#: Steuermesszahl — § 11 Abs. 2 GewStG
STEUERMESSZAHL = Decimal("0.035")

#: Used when a city is not in HEBESATZ_DATA; roughly the German average.
DEFAULT_HEBESATZ = 400

#: Hebesätze of larger cities and a few low-tax municipalities (in %).
HEBESATZ_DATA: dict[str, int] = {
    "Berlin": 410,
    "Hamburg": 470,
    "München": 490,
    "Köln": 475,
    "Frankfurt am Main": 460,
    "Stuttgart": 420,
    "Düsseldorf": 440,
    "Leipzig": 460,
    "Dortmund": 485,
    "Essen": 480,
    "Bremen": 460,
    "Dresden": 450,
    "Hannover": 480,
    "Nürnberg": 447,
    "Duisburg": 520,
    # Smaller municipalities often undercut the cities
    "Monheim am Rhein": 250,
    "Grünwald": 240,
    "Schönefeld": 300,
}


def calculate_gewerbesteuer(taxable_profit: Decimal, hebesatz: int) -> Decimal:
    """Calculate Gewerbesteuer = profit × 3.5% × Hebesatz / 100.

    Example:
        profit 100,000, Hebesatz 400 → 100,000 × 0.035 × 4.00 = 14,000.00
    """
    return round_cents(to_decimal(taxable_profit) * STEUERMESSZAHL * Decimal(hebesatz) / 100)


def get_hebesatz_for_city(city: str) -> int:
    """Look up a city's Hebesatz, falling back to DEFAULT_HEBESATZ."""
    return HEBESATZ_DATA.get(city, DEFAULT_HEBESATZ)
