"""Bank reports — BWA and Liquiditätsplan."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ...core.finance import calculate_liquidity, generate_bwa, generate_liquidity_plan
from ..common import colored_eur, console, eur, load_plan_or_exit

app = typer.Typer(help="Bank reports")


@app.command("bwa")
def bwa(path: Path = typer.Argument(..., help="Plan file (JSON)")):
    """Show the three-year BWA with percent-of-revenue columns."""
    plan_input = load_plan_or_exit(path)
    result = calculate_liquidity(plan_input)
    data = generate_bwa(plan_input.company.company_name, plan_input.plan.start_year, result)

    table = Table(title=f"BWA — {data.company_name or path.name}")
    table.add_column("Position")
    for year in data.years:
        table.add_column(str(year), justify="right")
        table.add_column("%", justify="right", style="dim")

    for row in data.rows:
        cells = []
        for value, pct in zip(row.values, row.percents):
            cells.extend([eur(value), f"{pct:.1f}"])
        if row.is_subtotal:
            table.add_row(f"[bold]{row.label}[/bold]", *(f"[bold]{c}[/bold]" for c in cells))
        else:
            table.add_row(row.label, *cells)
    console.print(table)


@app.command("liquidity")
def liquidity_plan(
    path: Path = typer.Argument(..., help="Plan file (JSON)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Only show this plan year"),
):
    """Show the Liquiditätsplan, one table per year."""
    plan_input = load_plan_or_exit(path)
    result = calculate_liquidity(plan_input)
    tables = generate_liquidity_plan(result, plan_input.plan.starting_liquidity)

    for plan_year in tables:
        if year is not None and plan_year.year != year:
            continue
        console.print(
            f"\n[bold]Liquiditätsplan {plan_year.year}[/bold]  "
            f"Anfangsbestand {eur(plan_year.opening_balance)}  "
            f"Umsatz {eur(plan_year.total_revenue)}  "
            f"Kosten {eur(plan_year.total_costs)}  "
            f"Endbestand {colored_eur(plan_year.closing_balance)}"
        )
        table = Table()
        table.add_column("Position")
        for i in range(1, 13):
            table.add_column(f"{i:02d}", justify="right")
        table.add_column("Summe", justify="right")
        for row in plan_year.rows:
            render = colored_eur if row.is_highlight else eur
            cells = [render(v) for v in row.values] + [render(row.total)]
            label = f"[bold]{row.label}[/bold]" if row.is_header else row.label
            table.add_row(label, *cells)
        console.print(table)
