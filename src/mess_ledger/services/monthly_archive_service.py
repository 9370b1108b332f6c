"""Business service for month rollover and archive snapshots."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError

from mess_ledger.db.models.mess import Mess
from mess_ledger.db.models.monthly_archive import MonthlyArchive
from mess_ledger.domain.billing_month import BillingMonth, resolve_now
from mess_ledger.domain.errors import (
    ArchiveNotFoundError,
    DomainInvariantError,
    MessNotFoundError,
    compose_error_message,
)
from mess_ledger.domain.money import format_exact
from mess_ledger.domain.reconciliation import LedgerSummary, MemberBalance, summarize
from mess_ledger.domain.records import PeriodLedger

logger = logging.getLogger(__name__)


class SessionProtocol(Protocol):
    def commit(self) -> None: ...
    def rollback(self) -> None: ...


class MessRepositoryProtocol(Protocol):
    def get(self, mess_id: str) -> Mess | None: ...
    def list_ids(self) -> list[str]: ...
    def read_current_month(self, mess_id: str) -> str | None: ...

    def advance_month(
        self, mess_id: str, *, from_month: str, to_month: str
    ) -> bool: ...


class LedgerQueryRepositoryProtocol(Protocol):
    def load_period_ledger(
        self, mess_id: str, month: BillingMonth
    ) -> PeriodLedger: ...


class ArchiveRepositoryProtocol(Protocol):
    def get(self, mess_id: str, month: str) -> MonthlyArchive | None: ...
    def list_by_mess(self, mess_id: str) -> list[MonthlyArchive]: ...
    def create(self, archive: MonthlyArchive) -> MonthlyArchive: ...


@dataclass(frozen=True, slots=True)
class ArchiveOutcome:
    archive: MonthlyArchive
    created: bool


@dataclass(frozen=True, slots=True)
class RolloverResult:
    """Months closed by one rollover run, oldest first."""

    mess_id: str
    archived_months: tuple[str, ...]
    current_month: str


class RolloverStatus(enum.StrEnum):
    ARCHIVED = "archived"
    SKIPPED = "skipped"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class RolloverReport:
    mess_id: str
    status: RolloverStatus
    archived_months: tuple[str, ...] = ()
    error: str | None = None


class MonthlyArchiveService:
    """Freezes finished billing months and advances each mess to the next one.

    An archive is written at most once per ``(mess, month)``. The database
    unique constraint decides races between concurrent rollovers; the loser
    sees an ``IntegrityError`` and returns the winner's row.
    """

    def __init__(
        self,
        *,
        mess_repository: MessRepositoryProtocol,
        ledger_query_repository: LedgerQueryRepositoryProtocol,
        archive_repository: ArchiveRepositoryProtocol,
        session: SessionProtocol,
        now_provider: Callable[[], datetime] | None = None,
    ) -> None:
        self._mess_repository = mess_repository
        self._ledger_query_repository = ledger_query_repository
        self._archive_repository = archive_repository
        self._session = session
        self._now_provider = now_provider or (lambda: resolve_now(None))

    def archive(self, mess_id: str, month: BillingMonth) -> ArchiveOutcome:
        self._require_mess(mess_id)
        existing = self._archive_repository.get(mess_id, month.to_key())
        if existing is not None:
            return ArchiveOutcome(archive=existing, created=False)

        ledger = self._ledger_query_repository.load_period_ledger(mess_id, month)
        summary = summarize(ledger, include_inactive=True)
        try:
            archive = self._archive_repository.create(
                _build_archive(mess_id, summary)
            )
            self._session.commit()
        except IntegrityError:
            self._session.rollback()
            existing = self._archive_repository.get(mess_id, month.to_key())
            if existing is None:
                raise
            logger.info(
                "archive_already_exists",
                extra={"mess_id": mess_id, "month": month.to_key()},
            )
            return ArchiveOutcome(archive=existing, created=False)
        except Exception:
            self._session.rollback()
            raise

        logger.info(
            "month_archived",
            extra={
                "mess_id": mess_id,
                "month": month.to_key(),
                "meal_rate": format_exact(summary.meal_rate),
                "member_count": len(summary.members),
            },
        )
        return ArchiveOutcome(archive=archive, created=True)

    def roll_over(self, mess_id: str, now: datetime | None = None) -> RolloverResult:
        """Archive and advance month by month until the mess reaches ``now``."""
        self._require_mess(mess_id)
        target = BillingMonth.current(resolve_now(now or self._now_provider()))
        current = self._read_current_month(mess_id)
        archived: list[str] = []

        while current < target:
            self.archive(mess_id, current)
            try:
                advanced = self._mess_repository.advance_month(
                    mess_id,
                    from_month=current.to_key(),
                    to_month=current.next().to_key(),
                )
                self._session.commit()
            except Exception:
                self._session.rollback()
                raise
            if advanced:
                archived.append(current.to_key())
                current = current.next()
            else:
                current = self._read_current_month(mess_id)

        return RolloverResult(
            mess_id=mess_id,
            archived_months=tuple(archived),
            current_month=current.to_key(),
        )

    def roll_over_all(self, now: datetime | None = None) -> list[RolloverReport]:
        """Run :meth:`roll_over` for every mess, isolating failures per mess."""
        instant = resolve_now(now or self._now_provider())
        reports: list[RolloverReport] = []
        for mess_id in self._mess_repository.list_ids():
            try:
                result = self.roll_over(mess_id, instant)
            except Exception as error:
                self._session.rollback()
                logger.exception("rollover_failed", extra={"mess_id": mess_id})
                reports.append(
                    RolloverReport(
                        mess_id=mess_id,
                        status=RolloverStatus.ERROR,
                        error=str(error),
                    )
                )
                continue
            reports.append(
                RolloverReport(
                    mess_id=mess_id,
                    status=(
                        RolloverStatus.ARCHIVED
                        if result.archived_months
                        else RolloverStatus.SKIPPED
                    ),
                    archived_months=result.archived_months,
                )
            )
        return reports

    def get_archive(self, mess_id: str, month: BillingMonth) -> MonthlyArchive:
        self._require_mess(mess_id)
        archive = self._archive_repository.get(mess_id, month.to_key())
        if archive is None:
            raise ArchiveNotFoundError(
                details={"mess_id": mess_id, "month": month.to_key()}
            )
        return archive

    def list_archives(self, mess_id: str) -> list[MonthlyArchive]:
        self._require_mess(mess_id)
        return self._archive_repository.list_by_mess(mess_id)

    def _require_mess(self, mess_id: str) -> Mess:
        mess = self._mess_repository.get(mess_id)
        if mess is None:
            raise MessNotFoundError(details={"mess_id": mess_id})
        return mess

    def _read_current_month(self, mess_id: str) -> BillingMonth:
        key = self._mess_repository.read_current_month(mess_id)
        if key is None:
            raise MessNotFoundError(details={"mess_id": mess_id})
        try:
            return BillingMonth.from_key(key)
        except ValueError as error:
            raise DomainInvariantError(
                message=compose_error_message(
                    cause=f"Stored current month '{key}' is not a valid month.",
                    action="Repair the mess record before running the rollover.",
                ),
                details={"mess_id": mess_id},
            ) from error


def _build_archive(mess_id: str, summary: LedgerSummary) -> MonthlyArchive:
    return MonthlyArchive(
        mess_id=mess_id,
        month=summary.month.to_key(),
        meal_rate=summary.meal_rate,
        total_bazar=summary.total_bazar,
        total_meals=summary.total_meals,
        total_deposits=summary.total_deposits,
        total_additional_costs=summary.total_additional_costs,
        per_head_additional_cost=summary.per_head_additional_cost,
        members_data=[_member_snapshot(line) for line in summary.members],
    )


def _member_snapshot(line: MemberBalance) -> dict[str, Any]:
    return {
        "member_id": line.member_id,
        "name": line.name,
        "is_active": line.is_active,
        "total_meals": line.total_meals,
        "meal_cost": format_exact(line.meal_cost),
        "deposit_total": format_exact(line.deposit_total),
        "bazar_contribution": format_exact(line.bazar_contribution),
        "per_head_additional_cost": format_exact(line.per_head_additional_cost),
        "balance": format_exact(line.balance),
    }
