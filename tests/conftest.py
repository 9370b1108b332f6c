from __future__ import annotations

from collections.abc import Callable, Generator
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from mess_ledger.api.app import create_app
from mess_ledger.db.base import Base, import_orm_models
from mess_ledger.db.models.member import Member
from mess_ledger.db.models.mess import Mess, MessStatus
from mess_ledger.db.models.subscription import Subscription
from mess_ledger.db.session import get_db_session
from mess_ledger.domain.billing_month import BillingMonth, resolve_now
from mess_ledger.domain.subscription import PlanType, SubscriptionStatusValue


@dataclass(frozen=True)
class SeededMess:
    mess_id: str
    alice_id: str
    bob_id: str
    carol_id: str


def seed_mess(
    session: Session,
    *,
    current_month: str | None = None,
    created_at: datetime = datetime(2024, 1, 1, 0, 0),
    subscription_end: date = date(2099, 12, 31),
    status: MessStatus = MessStatus.ACTIVE,
    code: str = "GREEN-01",
) -> SeededMess:
    mess = Mess(
        code=code,
        name="Green House",
        current_month=current_month
        or BillingMonth.current(resolve_now(None)).to_key(),
        status=status,
        created_at=created_at,
    )
    session.add(mess)
    session.flush()

    alice = Member(mess_id=mess.id, name="Alice", is_active=True)
    bob = Member(mess_id=mess.id, name="Bob", is_active=True)
    carol = Member(mess_id=mess.id, name="Carol", is_active=True)
    session.add_all([alice, bob, carol])
    session.add(
        Subscription(
            mess_id=mess.id,
            plan_type=PlanType.YEARLY,
            start_date=created_at.date(),
            end_date=subscription_end,
            status=SubscriptionStatusValue.ACTIVE,
        )
    )
    session.commit()
    return SeededMess(
        mess_id=mess.id,
        alice_id=alice.id,
        bob_id=bob.id,
        carol_id=carol.id,
    )


@pytest.fixture
def sqlite_session_factory() -> Generator[sessionmaker[Session], None, None]:
    import_orm_models()
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)


@pytest.fixture
def client(
    sqlite_session_factory: sessionmaker[Session],
) -> Generator[TestClient, None, None]:
    app = create_app()

    def override_get_db_session() -> Generator[Session, None, None]:
        with sqlite_session_factory() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_mess(sqlite_session_factory: sessionmaker[Session]) -> SeededMess:
    with sqlite_session_factory() as session:
        return seed_mess(session)


@pytest.fixture
def mess_seeder(
    sqlite_session_factory: sessionmaker[Session],
) -> Callable[..., SeededMess]:
    def _seed(**overrides: Any) -> SeededMess:
        with sqlite_session_factory() as session:
            return seed_mess(session, **overrides)

    return _seed
