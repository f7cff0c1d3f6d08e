"""Plan commands — liquidity projection, year summaries, export."""

from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from ...core.builder import PlanBuilder
from ...core.finance import (
    calculate_burn_rate,
    calculate_liquidity,
    calculate_profit_margin,
    calculate_revenue_growth,
    calculate_runway,
    calculate_stammkapital_progress,
    check_liquidity_warnings,
    find_break_even_month,
)
from ...core.tax import GMBH_STAMMKAPITAL
from ...data.plan_file import export_months_csv, export_result_json, save_plan
from ..common import colored_eur, console, eur, load_plan_or_exit

app = typer.Typer(help="Liquidity plan")


@app.command("init")
def init(
    path: Path = typer.Argument(..., help="Plan file to create"),
    start_year: int = typer.Option(datetime.now().year, "--start-year", "-y", help="First plan year"),
    company_name: str = typer.Option("Meine UG", "--company", help="Company name"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
):
    """Write a starter plan file with the default cost positions."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists (use --force to overwrite)[/red]")
        raise typer.Exit(1)
    plan_input = (
        PlanBuilder(start_year=start_year)
        .company(company_name)
        .fixed_revenue(0)
        .with_default_cost_items()
        .build()
    )
    save_plan(plan_input, path)
    console.print(f"[green]Created plan file[/green] {path}")


@app.command("liquidity")
def liquidity(
    path: Path = typer.Argument(..., help="Plan file (JSON)"),
    year: Optional[int] = typer.Option(None, "--year", "-y", help="Only show this plan year"),
):
    """Show the monthly cash-flow projection."""
    plan_input = load_plan_or_exit(path)
    result = calculate_liquidity(plan_input)

    title = plan_input.company.company_name or plan_input.plan.name or str(path)
    table = Table(title=f"Liquidity — {title}")
    table.add_column("Month")
    table.add_column("Start", justify="right")
    table.add_column("Revenue", justify="right")
    table.add_column("Personnel", justify="right")
    table.add_column("Operating", justify="right")
    table.add_column("Invest", justify="right")
    table.add_column("Loans", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Tax est.", justify="right", style="dim")

    for m in result.months.values():
        if year is not None and m.year != year:
            continue
        tax_estimate = m.koerperschaftsteuer + m.solidaritaetszuschlag + m.gewerbesteuer
        table.add_row(
            m.month,
            eur(m.start_balance),
            eur(m.revenue),
            eur(m.personnel_costs),
            eur(m.operating_costs),
            eur(m.investment_costs),
            eur(m.loan_interest + m.loan_principal),
            colored_eur(m.net_cashflow),
            colored_eur(m.end_balance),
            eur(tax_estimate),
        )
    console.print(table)


@app.command("summary")
def summary(path: Path = typer.Argument(..., help="Plan file (JSON)")):
    """Show year summaries, key figures, liquidity warnings and break-even."""
    plan_input = load_plan_or_exit(path)
    result = calculate_liquidity(plan_input)

    table = Table(title=f"Year summaries — {plan_input.company.company_name or path.name}")
    table.add_column("", style="dim")
    for year in result.year_summaries:
        table.add_column(str(year), justify="right")

    summaries = list(result.year_summaries.values())
    lines = [
        ("Revenue", [s.total_revenue for s in summaries]),
        ("Costs", [s.total_costs for s in summaries]),
        ("Gross profit", [s.gross_profit for s in summaries]),
        ("Operating profit", [s.operating_profit for s in summaries]),
        ("Profit before tax", [s.profit_before_tax for s in summaries]),
        ("Taxes", [s.total_taxes for s in summaries]),
        ("Net profit", [s.net_profit for s in summaries]),
        ("UG reserve", [s.ug_reserve for s in summaries]),
        ("Stammkapital", [s.stammkapital_end for s in summaries]),
        ("End liquidity", [s.end_liquidity for s in summaries]),
    ]
    for label, values in lines:
        table.add_row(label, *(eur(v) for v in values))
    console.print(table)

    capital = summaries[-1].stammkapital_end
    if capital >= GMBH_STAMMKAPITAL:
        console.print("  [green]Capital reaches €25,000 — conversion to GmbH possible.[/green]")
    else:
        console.print(f"  Capital after plan: {eur(capital)} of {eur(GMBH_STAMMKAPITAL)}")

    first, last = summaries[0], summaries[-1]
    console.print(
        f"  Revenue growth {first.year}–{last.year}: "
        f"{calculate_revenue_growth(first.total_revenue, last.total_revenue)}%"
    )
    console.print(f"  Profit margin {last.year}: {calculate_profit_margin(last)}%")
    console.print(f"  Burn rate {first.year}: {eur(calculate_burn_rate(first))} / month")
    runway = calculate_runway(result)
    if runway:
        console.print(f"  Runway: [red]cash runs out in {runway}[/red]")
    else:
        console.print(f"  Runway: [green]> {len(result.months)} months[/green]")
    progress = calculate_stammkapital_progress(result)
    console.print(f"  Stammkapital progress: {progress}% of {eur(GMBH_STAMMKAPITAL)}")

    break_even = find_break_even_month(result)
    if break_even:
        console.print(f"  Break-even: [green]{break_even}[/green]")
    else:
        console.print("  Break-even: [yellow]not reached within 3 years[/yellow]")

    warnings = check_liquidity_warnings(result)
    if warnings:
        console.print(f"\n  [red]Liquidity warning: negative balance in {len(warnings)} month(s)[/red]")
        for month, balance in warnings:
            console.print(f"    {month}: {colored_eur(balance)}")
    console.print()


@app.command("export")
def export(
    path: Path = typer.Argument(..., help="Plan file (JSON)"),
    out: Path = typer.Option(..., "--out", "-o", help="Output file"),
    fmt: str = typer.Option("csv", "--format", "-f", help="csv or json"),
):
    """Export the monthly calculation (CSV) or the full result (JSON)."""
    if fmt not in ("csv", "json"):
        console.print(f"[red]Unknown format '{fmt}' (use csv or json)[/red]")
        raise typer.Exit(1)
    result = calculate_liquidity(load_plan_or_exit(path))
    if fmt == "csv":
        rows = export_months_csv(result, out)
        console.print(f"[green]Wrote {rows} months to[/green] {out}")
    else:
        export_result_json(result, out)
        console.print(f"[green]Wrote result to[/green] {out}")
