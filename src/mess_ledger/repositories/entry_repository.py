"""Append-only persistence for bazar, deposit and additional cost records."""

from __future__ import annotations

from typing import TypeVar

from sqlalchemy.orm import Session

from mess_ledger.db.models.additional_cost_record import AdditionalCostRecord
from mess_ledger.db.models.bazar_record import BazarRecord
from mess_ledger.db.models.deposit_record import DepositRecord

EntryT = TypeVar("EntryT", BazarRecord, DepositRecord, AdditionalCostRecord)


class EntryRepository:
    """Repository for records created once and never edited."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, entry: EntryT) -> EntryT:
        self._session.add(entry)
        self._session.flush()
        return entry
