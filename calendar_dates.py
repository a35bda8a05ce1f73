"""Calendar-date value type and pure date predicates, free of UI dependencies."""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Any, Mapping

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)


@dataclass(frozen=True, order=True)
class CalendarDate:
    """A (year, month, day) triple with no time-of-day or timezone.

    Ordering follows the calendar, so ``<`` / ``>`` compare chronologically.
    """

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        # Raises ValueError for impossible dates such as 2023-02-30
        date(self.year, self.month, self.day)

    @classmethod
    def from_date(cls, d: date) -> "CalendarDate":
        return cls(d.year, d.month, d.day)

    @classmethod
    def today(cls) -> "CalendarDate":
        return cls.from_date(date.today())

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def add_days(self, n: int) -> "CalendarDate":
        return CalendarDate.from_date(self.to_date() + timedelta(days=n))

    def add_months(self, n: int) -> "CalendarDate":
        """Shift by n months, clamping the day to the target month's length."""
        return CalendarDate.from_date(self.to_date() + relativedelta(months=n))

    def set_day(self, day: int) -> "CalendarDate":
        return CalendarDate(self.year, self.month, day)

    def weekday(self) -> int:
        """0=Sunday .. 6=Saturday."""
        return (self.to_date().weekday() + 1) % 7

    def week_of_year(self) -> int:
        """ISO 8601 week number."""
        return self.to_date().isocalendar()[1]

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}-{self.day:02d}"


# ------------------------------------------------------------------
# Predicates
# ------------------------------------------------------------------
def is_before(a: CalendarDate, b: CalendarDate) -> bool:
    return a < b


def is_after(a: CalendarDate, b: CalendarDate) -> bool:
    return a > b


def is_same_or_before(a: CalendarDate, b: CalendarDate) -> bool:
    return a <= b


def is_same_or_after(a: CalendarDate, b: CalendarDate) -> bool:
    return a >= b


def same_date(a: CalendarDate | None, b: CalendarDate | None) -> bool:
    return a is not None and b is not None and a == b


def same_month(a: CalendarDate | None, b: CalendarDate | None) -> bool:
    return (a is not None and b is not None
            and a.year == b.year and a.month == b.month)


def is_in_range(d: CalendarDate, min_date: CalendarDate | None,
                max_date: CalendarDate | None) -> bool:
    """True unless d falls before min_date or after max_date (None = open)."""
    if min_date is not None and d < min_date:
        return False
    if max_date is not None and d > max_date:
        return False
    return True


# ------------------------------------------------------------------
# Arithmetic
# ------------------------------------------------------------------
def add_months(d: CalendarDate, n: int) -> CalendarDate:
    return d.add_months(n)


def add_days(d: CalendarDate, n: int) -> CalendarDate:
    return d.add_days(n)


def first_of_month(d: CalendarDate) -> CalendarDate:
    return d.set_day(1)


def last_of_month(d: CalendarDate) -> CalendarDate:
    return d.set_day(calendar.monthrange(d.year, d.month)[1])


def week_of_year(d: CalendarDate) -> int:
    return d.week_of_year()


# ------------------------------------------------------------------
# Conversion to / from loosely typed input
# ------------------------------------------------------------------
def _from_timestamp(ms: float) -> CalendarDate:
    return CalendarDate.from_date(
        datetime.fromtimestamp(ms / 1000, tz=timezone.utc).date())


def _parse(value: Any) -> CalendarDate | None:
    if isinstance(value, CalendarDate):
        return value
    if isinstance(value, datetime):
        return CalendarDate.from_date(value.date())
    if isinstance(value, date):
        return CalendarDate.from_date(value)
    if isinstance(value, bool):
        raise TypeError("bool is not a date")
    if isinstance(value, (int, float)):
        return _from_timestamp(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return CalendarDate.from_date(date.fromisoformat(text))
        except ValueError:
            return CalendarDate.from_date(isoparse(text).date())
    if isinstance(value, Mapping):
        if value.get("year"):
            return CalendarDate(int(value["year"]), int(value["month"]),
                                int(value["day"]))
        if value.get("dateString"):
            return _parse(value["dateString"])
        if value.get("timestamp") is not None:
            return _from_timestamp(value["timestamp"])
    raise TypeError(f"unsupported date value {type(value).__name__}")


def parse_date(value: Any) -> CalendarDate | None:
    """Read a date from any supported input form.

    Accepts CalendarDate, date/datetime, ISO strings (date or date-time),
    ``{year, month, day}`` / ``{dateString}`` / ``{timestamp}`` mappings and
    millisecond UTC timestamps. Returns None for None or malformed input.
    """
    if value is None or value == "":
        return None
    try:
        return _parse(value)
    except (TypeError, ValueError, KeyError, OverflowError) as exc:
        logger.warning("Ignoring malformed date %r: %s", value, exc)
        return None


def date_to_data(d: CalendarDate) -> dict:
    """Plain record passed to every callback."""
    return {
        "year": d.year,
        "month": d.month,
        "day": d.day,
        "timestamp": calendar.timegm((d.year, d.month, d.day, 0, 0, 0)) * 1000,
        "dateString": str(d),
    }
