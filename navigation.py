"""Anchor-month state machine: month changes and day interactions."""

from __future__ import annotations

import logging
from typing import Any, Callable

from calendar_dates import (
    CalendarDate,
    date_to_data,
    is_in_range,
    parse_date,
    same_month,
)

logger = logging.getLogger(__name__)

DateCallback = Callable[[dict], Any]


class MonthNavigator:
    """Owns the month the grid displays.

    The anchor only changes through ``sync`` (external, silent) and
    ``update_month`` (user navigation, notified once per real change).
    """

    def __init__(
        self,
        current: Any = None,
        *,
        min_date: Any = None,
        max_date: Any = None,
        disable_month_change: bool = False,
        on_month_change: DateCallback | None = None,
        on_visible_months_change: Callable[[list[dict]], Any] | None = None,
        today: Callable[[], CalendarDate] = CalendarDate.today,
    ) -> None:
        self._current_month: CalendarDate = parse_date(current) or today()
        self.min_date = min_date
        self.max_date = max_date
        self.disable_month_change = disable_month_change
        self.on_month_change = on_month_change
        self.on_visible_months_change = on_visible_months_change

    @property
    def current_month(self) -> CalendarDate:
        return self._current_month

    @property
    def min_date(self) -> CalendarDate | None:
        return self._min_date

    @min_date.setter
    def min_date(self, value: Any) -> None:
        self._min_date = parse_date(value)

    @property
    def max_date(self) -> CalendarDate | None:
        return self._max_date

    @max_date.setter
    def max_date(self, value: Any) -> None:
        self._max_date = parse_date(value)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def sync(self, current: Any) -> bool:
        """Adopt an externally supplied date's month without notifying."""
        day = parse_date(current)
        if day is None or same_month(day, self._current_month):
            return False
        logger.debug("External sync %s -> %s", self._current_month, day)
        self._current_month = day
        return True

    def update_month(self, day: CalendarDate, silent: bool = False) -> bool:
        """Move to the day's month; returns False when already there."""
        if same_month(day, self._current_month):
            return False
        old = self._current_month
        self._current_month = day
        logger.debug("Month change %s -> %s%s", old, day,
                     " (silent)" if silent else "")
        if not silent:
            record = date_to_data(day)
            if self.on_month_change:
                self.on_month_change(record)
            if self.on_visible_months_change:
                self.on_visible_months_change([record])
        return True

    def add_months(self, count: int, silent: bool = False) -> bool:
        return self.update_month(self._current_month.add_months(count), silent)

    def handle_day_interaction(self, day: Any,
                               interaction: DateCallback | None = None) -> bool:
        """Route a tap / long tap; out-of-range days are dropped silently.

        Returns True when the interaction was accepted.
        """
        day = parse_date(day)
        if day is None:
            return False
        if not is_in_range(day, self._min_date, self._max_date):
            logger.debug("Ignoring interaction on out-of-range day %s", day)
            return False
        if not self.disable_month_change:
            self.update_month(day)
        if interaction:
            interaction(date_to_data(day))
        return True
