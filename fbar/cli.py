"""Command line entry point for FBAR Facts."""

from pathlib import Path
from typing import Optional

import typer

from fbar.audit import configure_logging
from fbar.config import get_settings
from fbar.errors import FbarError
from fbar.models.account import Account
from fbar.orchestrator import create_report_components
from fbar.report import ReportContext


USD = "usd"

app = typer.Typer(add_completion=False, help="FBAR account data and exchange rates")


@app.command()
def main(
    path: Path = typer.Argument(
        ...,
        help="Directory containing the data document.",
    ),
    year: Optional[int] = typer.Option(
        None,
        "--year",
        "-y",
        help="Show accounts open during this year with their USD rates.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Root logging level (defaults to FBAR_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Load account data from PATH and print a summary."""
    settings = get_settings()
    configure_logging(log_level or settings.log_level, json_logs=settings.json_logs)
    
    typer.echo(f"Generating FBAR data from {path}...")
    try:
        user_data, context, _ = create_report_components(path, settings=settings)
        
        typer.echo(f"Providers ({len(user_data.providers)}):")
        for provider in user_data.providers:
            typer.echo(f"  {provider.handle}: {provider.name}, {provider.address}")
        
        accounts = user_data.accounts or ()
        typer.echo(f"Accounts ({len(accounts)}):")
        for account in accounts:
            typer.echo(f"  {_describe_account(account)}")
        
        if year is not None:
            open_accounts = user_data.accounts_open_during(year)
            typer.echo(f"Accounts open during {year} ({len(open_accounts)}):")
            for account in open_accounts:
                typer.echo(f"  {account.handle}: {_describe_rate(context, year, account)}")
    except FbarError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)


def _describe_account(account: Account) -> str:
    identifier = account.primary_identifier
    parts = [
        f"{account.handle} [{account.provider_handle}]",
        account.currency_code,
        f"{identifier.label} {identifier.value}",
    ]
    if account.is_joint:
        parts.append("joint with " + ", ".join(account.joint_holder_names))
    parts.append(f"opened {account.opening_date.isoformat()}")
    if account.closing_date:
        parts.append(f"closed {account.closing_date.isoformat()}")
    return ", ".join(parts)


def _describe_rate(context: ReportContext, year: int, account: Account) -> str:
    if account.currency_code.lower() == USD:
        return "USD, no conversion needed"
    resolved = context.resolve(year, account.currency_code)
    return (
        f"{account.currency_code} rate {resolved.exchange_rate.rate} "
        f"({resolved.source.value})"
    )


if __name__ == "__main__":
    app()
