"""Setup commands — planning defaults in config.json."""

from decimal import Decimal

import typer
from rich import box
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from ...core.config import AppConfig, get_config, save_config, update_config
from ...core.exceptions import ConfigError
from ...core.tax import HEBESATZ_DATA, get_hebesatz_for_city
from ..common import console

app = typer.Typer(help="Planning defaults")


def _say(text: str, style: str = ""):
    console.print(f"\n  {text}" if not style else f"\n  [{style}]{text}[/{style}]")


def _config_table(cfg: AppConfig) -> Table:
    table = Table(box=box.ROUNDED, border_style="cyan", show_header=False, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column(style="bold")
    table.add_row("Company", cfg.company_name or "—")
    table.add_row("Hebesatz", f"{cfg.default_hebesatz}%")
    table.add_row("Stammkapital", f"€{cfg.default_stammkapital:,.2f}")
    table.add_row("VAT rate", f"{cfg.vat_rate * 100:.0f}%")
    table.add_row("Kleinunternehmer", "yes" if cfg.small_business else "no")
    table.add_row("Currency", cfg.currency)
    return table


@app.command("run")
def run_setup():
    """Answer a few questions to set the planning defaults."""
    existing = get_config()
    console.print()
    console.print(Panel.fit("[bold]UG Finanzplan — Setup[/bold]", border_style="cyan", padding=(0, 4)))

    _say("Company name? (used when a plan file has none)")
    name = Prompt.ask("  [cyan]>[/cyan]", default=existing.company_name or "", console=console)

    _say("Where is the company registered? The city sets the Gewerbesteuer-Hebesatz.")
    _say(f"[dim]Known: {', '.join(sorted(HEBESATZ_DATA))}[/dim]")
    city = Prompt.ask("  [cyan]>[/cyan] City (Enter to type the Hebesatz)", default="", console=console)
    if city and city in HEBESATZ_DATA:
        hebesatz = get_hebesatz_for_city(city)
        _say(f"Hebesatz {city}: [bold]{hebesatz}%[/bold]", "green")
    else:
        hebesatz = IntPrompt.ask("  [cyan]>[/cyan] Hebesatz in %", default=existing.default_hebesatz, console=console)

    _say("Stammkapital at founding (a UG needs at least €1):")
    raw_capital = Prompt.ask("  [cyan]>[/cyan]", default=str(existing.default_stammkapital), console=console)

    _say("Use the Kleinunternehmerregelung (§ 19 UStG, no VAT up to €22,000 revenue)?")
    small_business = Confirm.ask("  [cyan]>[/cyan]", default=existing.small_business, console=console)

    cfg = AppConfig(
        default_hebesatz=hebesatz,
        default_stammkapital=Decimal(raw_capital),
        vat_rate=existing.vat_rate,
        small_business=small_business,
        currency=existing.currency,
        company_name=name,
    )
    console.print()
    console.print(_config_table(cfg))
    if Confirm.ask("\n  Save?", default=True, console=console):
        save_config(cfg)
        _say("Saved.", "green")
    else:
        _say("Nothing changed.", "dim")


@app.command("show")
def show():
    """Show the current defaults."""
    console.print(_config_table(get_config()))


@app.command("set")
def set_value(
    key: str = typer.Argument(..., help="Config key, e.g. default_hebesatz"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a single default."""
    try:
        cfg = update_config(key, value)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{key} = {getattr(cfg, key)}[/green]")
