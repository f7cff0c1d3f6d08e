"""UG Finanzplan CLI — main entry point."""

import logging

import typer

from .commands import loan, plan, report, setup, tax, vat

app = typer.Typer(
    name="ugplan",
    help="Financial plan for a German UG: liquidity, taxes, BWA",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

app.add_typer(plan.app, name="plan", help="Liquidity plan from a plan file")
app.add_typer(report.app, name="report", help="Bank reports (BWA, Liquiditätsplan)")
app.add_typer(loan.app, name="loan", help="Loan amortization schedules")
app.add_typer(tax.app, name="tax", help="Körperschaftsteuer, Gewerbesteuer, UG reserve")
app.add_typer(vat.app, name="vat", help="Umsatzsteuer")
app.add_typer(setup.app, name="setup", help="Planning defaults")


@app.callback()
def startup(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Configure logging before any command runs."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)-8s %(name)s — %(message)s",
        )


if __name__ == "__main__":
    app()
