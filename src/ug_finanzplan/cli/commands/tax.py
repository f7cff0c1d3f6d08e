"""Tax commands — corporate taxes, UG reserve, Hebesatz table."""

from decimal import Decimal
from typing import Optional

import typer
from rich.table import Table

from ...core.config import get_config
from ...core.tax import (
    GMBH_STAMMKAPITAL,
    HEBESATZ_DATA,
    calculate_taxes,
    calculate_ug_reserve,
    get_hebesatz_for_city,
)
from ..common import console, eur

app = typer.Typer(help="Corporate taxes")


@app.command("calc")
def calc(
    profit: float = typer.Argument(..., help="Annual profit before tax (€)"),
    hebesatz: Optional[int] = typer.Option(None, "--hebesatz", help="Municipal Hebesatz in %"),
    city: Optional[str] = typer.Option(None, "--city", "-c", help="Look up the Hebesatz of a city"),
):
    """Calculate Körperschaftsteuer, Soli and Gewerbesteuer for a UG."""
    if hebesatz is None:
        hebesatz = get_hebesatz_for_city(city) if city else get_config().default_hebesatz
    taxable = Decimal(str(profit))
    result = calculate_taxes(taxable, hebesatz)

    table = Table(title=f"Steuern auf {eur(taxable)} (Hebesatz {hebesatz}%)", show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", justify="right")
    table.add_row("Körperschaftsteuer (15%)", eur(result.koerperschaftsteuer))
    table.add_row("Solidaritätszuschlag (5.5%)", eur(result.solidaritaetszuschlag))
    table.add_row("Gewerbesteuer", eur(result.gewerbesteuer))
    table.add_row("[bold]Total[/bold]", f"[bold]{eur(result.total_taxes)}[/bold]")
    table.add_row("Effective rate", f"{result.effective_tax_rate}%")
    table.add_row("Net profit", eur(taxable - result.total_taxes))
    console.print(table)


@app.command("reserve")
def reserve(
    profit: float = typer.Argument(..., help="Annual net profit (€)"),
    stammkapital: float = typer.Option(1, "--stammkapital", "-k", help="Current capital incl. reserves (€)"),
):
    """Calculate the mandatory UG reserve (25% of profit until €25,000)."""
    capital = Decimal(str(stammkapital))
    amount = calculate_ug_reserve(Decimal(str(profit)), capital)
    console.print(f"\n  Rücklage:          [bold]{eur(amount)}[/bold]")
    console.print(f"  Capital afterwards: {eur(capital + amount)} of {eur(GMBH_STAMMKAPITAL)}\n")


@app.command("hebesatz")
def hebesatz_table():
    """List known municipal Hebesätze."""
    table = Table(title="Gewerbesteuer-Hebesätze")
    table.add_column("City")
    table.add_column("Hebesatz", justify="right")
    for city, value in sorted(HEBESATZ_DATA.items(), key=lambda kv: kv[1]):
        table.add_row(city, f"{value}%")
    console.print(table)
