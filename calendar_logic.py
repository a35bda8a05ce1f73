"""Pure month-grid and day-state calculations, free of UI dependencies."""

from enum import Enum
from functools import lru_cache

from calendar_dates import (
    CalendarDate,
    first_of_month,
    is_in_range,
    last_of_month,
    same_date,
    same_month,
)

# Indexed by CalendarDate.weekday(): 0=Sunday
DAY_ABBR = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

SIX_WEEKS = 42


class DayState(str, Enum):
    NORMAL = "normal"
    DISABLED = "disabled"
    TODAY = "today"


def normalize_first_day(first_day) -> int:
    """Map any input onto 0..6; non-integers fall back to Sunday."""
    if isinstance(first_day, bool) or not isinstance(first_day, int):
        return 0
    return first_day % 7


def weekday_names(first_day: int = 0) -> list[str]:
    """Short weekday headers in grid column order."""
    first_day = normalize_first_day(first_day)
    return [DAY_ABBR[(first_day + i) % 7] for i in range(7)]


@lru_cache(maxsize=128)
def month_page(anchor: CalendarDate, first_day: int = 0,
               six_weeks: bool = False) -> tuple[CalendarDate, ...]:
    """Return the dates covering the anchor month in whole weeks.

    The first date falls on ``first_day`` (0=Sunday). The sequence ends on
    the last day of the week holding the month's last day; with
    ``six_weeks`` it is extended by whole weeks to exactly 42 dates.
    Identical inputs return the identical tuple.
    """
    first_day = normalize_first_day(first_day)
    start = first_of_month(anchor)
    start = start.add_days(-((start.weekday() - first_day) % 7))

    end = last_of_month(anchor)
    last_weekday = (first_day + 6) % 7
    end = end.add_days((last_weekday - end.weekday()) % 7)

    count = (end.to_date() - start.to_date()).days + 1
    if six_weeks:
        count = max(count, SIX_WEEKS)

    return tuple(start.add_days(i) for i in range(count))


def week_rows(days) -> list[list]:
    """Slice a page into consecutive weeks of 7, in order."""
    return [list(days[i:i + 7]) for i in range(0, len(days), 7)]


def week_number(week: list[CalendarDate]) -> int:
    """ISO week of a grid row, taken from its last date."""
    return week[-1].week_of_year()


def day_state(day: CalendarDate, anchor: CalendarDate,
              today: CalendarDate | None = None,
              min_date: CalendarDate | None = None,
              max_date: CalendarDate | None = None,
              disabled_by_default: bool = False) -> DayState:
    """Classify a grid date.

    Precedence: disabled-by-default, out of range, foreign month, today.
    """
    if disabled_by_default:
        return DayState.DISABLED
    if not is_in_range(day, min_date, max_date):
        return DayState.DISABLED
    if not same_month(day, anchor):
        return DayState.DISABLED
    if same_date(day, today):
        return DayState.TODAY
    return DayState.NORMAL
