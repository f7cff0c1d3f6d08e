"""Helpers shared by the CLI commands."""

from decimal import Decimal
from pathlib import Path

import typer
from rich.console import Console

from ..core.exceptions import UGPlanError
from ..core.models import LiquidityInput
from ..data.plan_file import load_plan

console = Console()


def load_plan_or_exit(path: Path) -> LiquidityInput:
    """Load a plan file; print the problem and exit 1 if it is invalid."""
    try:
        return load_plan(path)
    except UGPlanError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)


def eur(value: Decimal, signed: bool = False) -> str:
    return f"€{value:+,.2f}" if signed else f"€{value:,.2f}"


def colored_eur(value: Decimal) -> str:
    """Green for ≥ 0, red for negative amounts."""
    color = "green" if value >= 0 else "red"
    return f"[{color}]{eur(value)}[/{color}]"
