"""CLI bootstrap for mess-ledger."""

from datetime import datetime

import typer

from mess_ledger.db.session import SessionFactory, session_scope
from mess_ledger.domain.billing_month import BillingMonth
from mess_ledger.domain.errors import DomainError
from mess_ledger.domain.money import format_exact, format_money
from mess_ledger.repositories.archive_repository import ArchiveRepository
from mess_ledger.repositories.ledger_query_repository import LedgerQueryRepository
from mess_ledger.repositories.mess_repository import MessRepository
from mess_ledger.services.balance_service import BalanceService
from mess_ledger.services.monthly_archive_service import (
    MonthlyArchiveService,
    RolloverStatus,
)

app = typer.Typer(help="CLI for shared-household meal and expense ledgers.")
MESS_ID_OPTION = typer.Option(..., "--mess-id", help="Identifier of the mess.")
MONTH_OPTION = typer.Option(
    None, "--month", help="Billing month as YYYY-MM; defaults to the current one."
)
AT_OPTION = typer.Option(
    None,
    "--at",
    help="ISO timestamp treated as 'now' when deciding which months are over.",
)


@app.command("healthcheck")
def healthcheck() -> None:
    """Verify that the CLI entrypoint is available."""
    typer.echo("mess-ledger is ready")


@app.command("roll-over")
def roll_over(at: str | None = AT_OPTION) -> None:
    """Archive finished months and advance every mess to the current month."""
    now = _parse_instant(at)
    with session_scope(SessionFactory) as session:
        service = MonthlyArchiveService(
            mess_repository=MessRepository(session),
            ledger_query_repository=LedgerQueryRepository(session),
            archive_repository=ArchiveRepository(session),
            session=session,
        )
        reports = service.roll_over_all(now)

    failures = 0
    for report in reports:
        months = ", ".join(report.archived_months) or "-"
        line = f"{report.mess_id}: {report.status} ({months})"
        if report.status == RolloverStatus.ERROR:
            failures += 1
            line = f"{report.mess_id}: {report.status} ({report.error})"
        typer.echo(line)
    typer.echo(f"Messes: {len(reports)} | Failed: {failures}")
    if failures:
        raise typer.Exit(code=1)


@app.command("balances")
def balances(
    mess_id: str = MESS_ID_OPTION,
    month: str | None = MONTH_OPTION,
) -> None:
    """Print the meal rate and each active member's balance for a month."""
    try:
        period = BillingMonth.from_key(month) if month else None
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--month") from error

    with session_scope(SessionFactory) as session:
        service = BalanceService(
            mess_repository=MessRepository(session),
            ledger_query_repository=LedgerQueryRepository(session),
        )
        try:
            summary = service.get_month_balances(mess_id, period)
        except DomainError as error:
            typer.echo(error.message, err=True)
            raise typer.Exit(code=1) from error

    typer.echo(f"Month {summary.month}")
    typer.echo(
        f"Meal rate: {format_money(summary.meal_rate)} "
        f"(exact {format_exact(summary.meal_rate)})"
    )
    typer.echo(
        f"Bazar: {format_money(summary.total_bazar)} | "
        f"Meals: {summary.total_meals} | "
        f"Per head: {format_money(summary.per_head_additional_cost)}"
    )
    for line in summary.members:
        typer.echo(
            f"{line.name}: meals {line.total_meals} | "
            f"deposit {format_money(line.deposit_total)} | "
            f"balance {format_money(line.balance)} ({line.standing})"
        )


def _parse_instant(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="--at") from error


def main() -> None:
    """Run the mess-ledger CLI application."""
    app()


if __name__ == "__main__":
    main()
