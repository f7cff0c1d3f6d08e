"""VAT commands — monthly Umsatzsteuer and annual Voranmeldung overview."""

from decimal import Decimal
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ...core.config import get_config
from ...core.finance import calculate_liquidity
from ...core.tax.umsatzsteuer import calculate_annual_vat, calculate_monthly_vat
from ..common import console, eur, load_plan_or_exit

app = typer.Typer(help="Umsatzsteuer (VAT)")


def _small_business(flag: Optional[bool]) -> bool:
    return get_config().small_business if flag is None else flag


@app.command("month")
def month(
    net_revenue: float = typer.Argument(..., help="Net revenue (€)"),
    net_expenses: float = typer.Argument(..., help="Net expenses (€)"),
    small_business: Optional[bool] = typer.Option(
        None, "--small-business/--regular", help="Kleinunternehmerregelung (§ 19 UStG)"
    ),
):
    """Calculate one month's VAT position."""
    cfg = get_config()
    result = calculate_monthly_vat(
        Decimal(str(net_revenue)),
        Decimal(str(net_expenses)),
        _small_business(small_business),
        cfg.vat_rate,
    )
    console.print(f"\n  Umsatzsteuer:  {eur(result.vat_collected)}")
    console.print(f"  Vorsteuer:     {eur(result.vat_paid)}")
    color = "red" if result.vat_payable > 0 else "green"
    console.print(f"  Zahllast:      [{color}]{eur(result.vat_payable)}[/{color}]")
    console.print(f"  Gross revenue: {eur(result.gross_revenue)}\n")


@app.command("annual")
def annual(
    path: Path = typer.Argument(..., help="Plan file (JSON)"),
    small_business: Optional[bool] = typer.Option(
        None, "--small-business/--regular", help="Kleinunternehmerregelung (§ 19 UStG)"
    ),
):
    """Show VAT per plan year with quarterly prepayments."""
    cfg = get_config()
    result = calculate_liquidity(load_plan_or_exit(path))

    table = Table(title="Umsatzsteuer")
    table.add_column("Year")
    table.add_column("USt", justify="right")
    table.add_column("Vorsteuer", justify="right")
    table.add_column("Zahllast", justify="right")
    for q in range(1, 5):
        table.add_column(f"Q{q}", justify="right", style="dim")

    for year in result.year_summaries:
        monthly = [
            (m.revenue, m.operating_costs + m.investment_costs)
            for m in result.months_of_year(year)
        ]
        vat = calculate_annual_vat(monthly, _small_business(small_business), cfg.vat_rate)
        table.add_row(
            str(year),
            eur(vat.total_vat_collected),
            eur(vat.total_vat_paid),
            eur(vat.total_vat_payable),
            *(eur(q) for q in vat.quarterly_payments),
        )
    console.print(table)
