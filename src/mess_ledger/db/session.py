"""SQLAlchemy engine and session factory definitions."""

from collections.abc import Generator, Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from mess_ledger.core.settings import get_settings

settings = get_settings()

engine = create_engine(settings.database_url, pool_pre_ping=True)

SessionFactory = sessionmaker(
    bind=engine,
    class_=Session,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


def get_db_session() -> Generator[Session, None, None]:
    """Yield a database session per request lifecycle."""

    with SessionFactory() as session:
        yield session


@contextmanager
def session_scope(
    session_factory: sessionmaker[Session] = SessionFactory,
) -> Iterator[Session]:
    """Provide a session for jobs running outside a request."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()
