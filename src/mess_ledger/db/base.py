"""SQLAlchemy base metadata and model registration utilities."""

from importlib import import_module

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


def import_orm_models() -> None:
    """Import ORM models so metadata is fully populated."""

    modules = (
        "mess_ledger.db.models.mess",
        "mess_ledger.db.models.member",
        "mess_ledger.db.models.meal_record",
        "mess_ledger.db.models.bazar_record",
        "mess_ledger.db.models.deposit_record",
        "mess_ledger.db.models.additional_cost_record",
        "mess_ledger.db.models.subscription",
        "mess_ledger.db.models.monthly_archive",
    )
    for module_name in modules:
        import_module(module_name)
