from __future__ import annotations

from typing import Any

import pytest
from sqlalchemy.orm import Session, sessionmaker
from typer.testing import CliRunner

from mess_ledger import cli
from mess_ledger.domain.billing_month import BillingMonth, resolve_now

runner = CliRunner()


@pytest.fixture
def cli_sessions(
    sqlite_session_factory: sessionmaker[Session], monkeypatch: pytest.MonkeyPatch
) -> sessionmaker[Session]:
    monkeypatch.setattr(cli, "SessionFactory", sqlite_session_factory)
    return sqlite_session_factory


def test_healthcheck_command() -> None:
    result = runner.invoke(cli.app, ["healthcheck"])

    assert result.exit_code == 0
    assert "mess-ledger is ready" in result.stdout


def test_roll_over_command_reports_each_mess(
    cli_sessions: sessionmaker[Session], mess_seeder: Any
) -> None:
    seeded = mess_seeder(current_month="2025-01")

    result = runner.invoke(cli.app, ["roll-over", "--at", "2025-03-02T10:00:00"])

    assert result.exit_code == 0
    assert f"{seeded.mess_id}: archived (2025-01, 2025-02)" in result.stdout
    assert "Messes: 1 | Failed: 0" in result.stdout


def test_roll_over_command_exits_non_zero_on_failure(
    cli_sessions: sessionmaker[Session], mess_seeder: Any
) -> None:
    mess_seeder(current_month="2025-13")

    result = runner.invoke(cli.app, ["roll-over", "--at", "2025-03-02T10:00:00"])

    assert result.exit_code == 1
    assert "Failed: 1" in result.stdout


def test_balances_command_prints_member_lines(
    cli_sessions: sessionmaker[Session], seeded_mess: Any
) -> None:
    month = BillingMonth.current(resolve_now(None)).to_key()

    result = runner.invoke(
        cli.app, ["balances", "--mess-id", seeded_mess.mess_id, "--month", month]
    )

    assert result.exit_code == 0
    assert f"Month {month}" in result.stdout
    assert "Meal rate: 0.00 (exact 0)" in result.stdout
    assert "Alice: meals 0 | deposit 0.00 | balance 0.00 (settled)" in result.stdout


def test_balances_command_for_unknown_mess_fails(
    cli_sessions: sessionmaker[Session],
) -> None:
    result = runner.invoke(cli.app, ["balances", "--mess-id", "missing"])

    assert result.exit_code == 1


def test_balances_command_rejects_malformed_month(
    cli_sessions: sessionmaker[Session], seeded_mess: Any
) -> None:
    result = runner.invoke(
        cli.app, ["balances", "--mess-id", seeded_mess.mess_id, "--month", "2025/01"]
    )

    assert result.exit_code != 0
