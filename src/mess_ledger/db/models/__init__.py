"""ORM models for the mess_ledger domain."""

from mess_ledger.db.models.additional_cost_record import AdditionalCostRecord
from mess_ledger.db.models.bazar_record import BazarRecord
from mess_ledger.db.models.deposit_record import DepositRecord
from mess_ledger.db.models.meal_record import MealRecord, MealType
from mess_ledger.db.models.member import Member
from mess_ledger.db.models.mess import Mess, MessStatus
from mess_ledger.db.models.monthly_archive import MonthlyArchive
from mess_ledger.db.models.subscription import Subscription

__all__ = [
    "AdditionalCostRecord",
    "BazarRecord",
    "DepositRecord",
    "MealRecord",
    "MealType",
    "Member",
    "Mess",
    "MessStatus",
    "MonthlyArchive",
    "Subscription",
]
