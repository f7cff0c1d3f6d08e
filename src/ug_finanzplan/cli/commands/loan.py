"""Loan commands — amortization schedules."""

from decimal import Decimal
from typing import Optional

import typer
from rich.table import Table

from ...core.exceptions import InvalidMonthKeyError
from ...core.finance import calculate_monthly_payment, generate_loan_schedule
from ...core.models import Loan
from ...core.months import parse_month_key
from ..common import console, eur

app = typer.Typer(help="Loan schedules")


@app.command("schedule")
def schedule(
    amount: float = typer.Option(..., "--amount", "-a", help="Loan amount (€)"),
    rate: float = typer.Option(..., "--rate", "-r", help="Annual interest rate in % (e.g. 3.5)"),
    term: int = typer.Option(..., "--term", "-t", help="Term in months"),
    start: str = typer.Option(..., "--start", "-s", help="First month (YYYY-MM)"),
    grace: int = typer.Option(0, "--grace", "-g", help="Grace period in months (interest only)"),
    fee: Optional[float] = typer.Option(None, "--fee", help="One-time provision fee (€)"),
):
    """Show the monthly amortization schedule of an annuity loan."""
    try:
        parse_month_key(start)
    except InvalidMonthKeyError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1)

    loan = Loan(
        name="loan",
        amount=Decimal(str(amount)),
        interest_rate=Decimal(str(rate)) / 100,
        term_months=term,
        start_month=start,
        grace_period_months=grace,
        provision_fee=Decimal(str(fee)) if fee is not None else None,
    )
    result = generate_loan_schedule(loan, start, term)
    repayment_term = term - grace if term > grace else term
    level = calculate_monthly_payment(loan.amount, loan.interest_rate, repayment_term)

    table = Table(title=f"Loan {eur(loan.amount)} at {rate}% over {term} months")
    table.add_column("Month")
    table.add_column("Payment", justify="right")
    table.add_column("Interest", justify="right")
    table.add_column("Principal", justify="right")
    table.add_column("Fee", justify="right", style="dim")
    table.add_column("Balance", justify="right")
    for p in result.payments:
        table.add_row(
            p.month,
            eur(p.payment),
            eur(p.interest),
            eur(p.principal),
            eur(p.provision_fee) if p.provision_fee else "—",
            eur(p.remaining_balance),
        )
    console.print(table)

    console.print(f"\n  Monthly rate (after grace): {eur(level)}")
    console.print(f"  Total interest:             {eur(result.total_interest)}")
    console.print(f"  Total principal:            {eur(result.total_principal)}")
    if result.total_provision_fees:
        console.print(f"  Provision fees:             {eur(result.total_provision_fees)}")
    console.print()
