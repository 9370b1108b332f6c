"""Billing month helpers based on fixed Dhaka timezone."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from re import fullmatch
from zoneinfo import ZoneInfo

APP_TIMEZONE = ZoneInfo("Asia/Dhaka")


def resolve_now(now: datetime | None) -> datetime:
    """Return now value or current Dhaka timestamp when absent."""

    if now is None:
        return datetime.now(tz=APP_TIMEZONE)
    if now.tzinfo is None:
        return now.replace(tzinfo=APP_TIMEZONE)
    return now.astimezone(APP_TIMEZONE)


def local_today(now: datetime) -> date:
    """Return the calendar day of now as seen by the mess."""

    return resolve_now(now).date()


@dataclass(frozen=True, slots=True, order=True)
class BillingMonth:
    """Represents one calendar month used as a billing period."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError("Month must be between 1 and 12")
        if self.year < 2000 or self.year > 2100:
            raise ValueError("Year must be between 2000 and 2100")

    @classmethod
    def from_key(cls, key: str) -> BillingMonth:
        """Parse a YYYY-MM key."""
        match = fullmatch(r"(\d{4})-(\d{2})", key.strip())
        if match is None:
            raise ValueError(f"Invalid billing month key: {key!r}")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @classmethod
    def from_date(cls, value: date) -> BillingMonth:
        return cls(year=value.year, month=value.month)

    @classmethod
    def current(cls, now: datetime) -> BillingMonth:
        """Return the real-world month of now in the mess timezone."""
        return cls.from_date(local_today(now))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(
            self.year, self.month, calendar.monthrange(self.year, self.month)[1]
        )

    def contains(self, value: date) -> bool:
        return self.first_day <= value <= self.last_day

    def next(self) -> BillingMonth:
        if self.month == 12:
            return BillingMonth(year=self.year + 1, month=1)
        return BillingMonth(year=self.year, month=self.month + 1)

    def to_key(self) -> str:
        """Return normalized month key in YYYY-MM format."""
        return f"{self.year:04d}-{self.month:02d}"

    def __str__(self) -> str:
        return self.to_key()
