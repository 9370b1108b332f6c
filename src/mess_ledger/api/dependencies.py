"""API dependency providers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from mess_ledger.core.settings import get_settings
from mess_ledger.db.session import get_db_session
from mess_ledger.repositories.archive_repository import ArchiveRepository
from mess_ledger.repositories.entry_repository import EntryRepository
from mess_ledger.repositories.ledger_query_repository import LedgerQueryRepository
from mess_ledger.repositories.meal_repository import MealRepository
from mess_ledger.repositories.member_repository import MemberRepository
from mess_ledger.repositories.mess_repository import MessRepository
from mess_ledger.repositories.subscription_repository import SubscriptionRepository
from mess_ledger.services.balance_service import BalanceService
from mess_ledger.services.calendar_service import CalendarService
from mess_ledger.services.entry_service import EntryService
from mess_ledger.services.member_service import MemberService
from mess_ledger.services.monthly_archive_service import MonthlyArchiveService


def get_entry_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> EntryService:
    """Build entry service with per-request session."""

    return EntryService(
        mess_repository=MessRepository(session),
        member_repository=MemberRepository(session),
        subscription_repository=SubscriptionRepository(session),
        entry_repository=EntryRepository(session),
        meal_repository=MealRepository(session),
        archive_repository=ArchiveRepository(session),
        session=session,
    )


def get_member_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> MemberService:
    return MemberService(
        mess_repository=MessRepository(session),
        member_repository=MemberRepository(session),
        session=session,
    )


def get_balance_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> BalanceService:
    """Build balance service over the ledger query repository."""

    return BalanceService(
        mess_repository=MessRepository(session),
        ledger_query_repository=LedgerQueryRepository(session),
    )


def get_calendar_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> CalendarService:
    """Build calendar service honoring the configured read-only grace."""

    return CalendarService(
        mess_repository=MessRepository(session),
        subscription_repository=SubscriptionRepository(session),
        ledger_query_repository=LedgerQueryRepository(session),
        archive_repository=ArchiveRepository(session),
        read_only_days_per_plan_month=get_settings().read_only_days_per_plan_month,
    )


def get_monthly_archive_service(
    session: Annotated[Session, Depends(get_db_session)],
) -> MonthlyArchiveService:
    return MonthlyArchiveService(
        mess_repository=MessRepository(session),
        ledger_query_repository=LedgerQueryRepository(session),
        archive_repository=ArchiveRepository(session),
        session=session,
    )
