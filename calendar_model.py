"""Single-month calendar instance: options, navigation and resolved cells.

Hosts render whatever :meth:`Calendar.weeks` and :meth:`Calendar.header`
return and feed user input back through ``press_day``, ``long_press_day``,
``press_arrow_left`` / ``press_arrow_right`` and ``on_swipe``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable

from accessibility import accessibility_label
from calendar_dates import CalendarDate, date_to_data, parse_date, same_month
from calendar_logic import (
    DayState,
    day_state,
    month_page,
    normalize_first_day,
    week_number,
    week_rows,
    weekday_names,
)
from gestures import SwipeDirection
from marking import Marking, MarkingMap, marking_flag, needs_loading_indicator, resolve_marking
from navigation import MonthNavigator

logger = logging.getLogger(__name__)

SELECT_DATE_SLOT = "native.calendar.SELECT_DATE_SLOT"
CHANGE_MONTH_LEFT_ARROW = "native.calendar.CHANGE_MONTH_LEFT_ARROW"
CHANGE_MONTH_RIGHT_ARROW = "native.calendar.CHANGE_MONTH_RIGHT_ARROW"


@dataclass
class CalendarConfig:
    current: Any = None
    min_date: Any = None
    max_date: Any = None
    first_day: int = 0
    show_six_weeks: bool = False
    hide_extra_days: bool = False
    disabled_by_default: bool = False
    disable_month_change: bool = False
    disable_all_touch_events_for_disabled_days: bool = False
    marked_dates: MarkingMap | None = None
    marking_type: str = "dot"
    day_component: Any = None
    show_week_numbers: bool = False
    enable_swipe_months: bool = False
    display_loading_indicator: bool = False
    hide_arrows: bool = False
    disable_arrow_left: bool = False
    disable_arrow_right: bool = False
    hide_day_names: bool = False
    month_format: str = "%B %Y"
    disabled_days_indexes: tuple[int, ...] = ()
    test_id: str | None = None
    on_month_change: Callable[[dict], Any] | None = None
    on_visible_months_change: Callable[[list[dict]], Any] | None = None
    on_day_press: Callable[[dict], Any] | None = None
    on_day_long_press: Callable[[dict], Any] | None = None
    on_press_arrow_left: Callable[[Callable[[], bool], dict], Any] | None = None
    on_press_arrow_right: Callable[[Callable[[], bool], dict], Any] | None = None


CONFIG_FIELDS = frozenset(f.name for f in fields(CalendarConfig))


@dataclass(frozen=True)
class CellRecord:
    date: CalendarDate
    state: DayState
    marking: Marking | None
    accessibility_label: str
    test_id: str
    touch_disabled: bool = False

    @property
    def date_data(self) -> dict:
        return date_to_data(self.date)


@dataclass(frozen=True)
class WeekRow:
    # None marks a hidden extra day that keeps its grid position
    cells: tuple[CellRecord | None, ...]
    week_number: int | None = None


@dataclass(frozen=True)
class HeaderRecord:
    title: str
    day_names: tuple[str, ...]
    disabled_day_indexes: frozenset[int]
    show_arrows: bool
    left_arrow_enabled: bool
    right_arrow_enabled: bool
    show_indicator: bool
    week_numbers: bool
    left_arrow_test_id: str
    right_arrow_test_id: str


class Calendar:
    """One calendar instance bound to a :class:`CalendarConfig`."""

    def __init__(self, config: CalendarConfig | None = None, *,
                 today: Callable[[], CalendarDate] = CalendarDate.today,
                 **options: Any) -> None:
        config = config or CalendarConfig()
        self.config = replace(config, **options) if options else config
        self._today = today
        self.navigator = MonthNavigator(self.config.current, today=today)
        self._configure_navigator()

    def _configure_navigator(self) -> None:
        cfg = self.config
        nav = self.navigator
        nav.min_date = cfg.min_date
        nav.max_date = cfg.max_date
        nav.disable_month_change = cfg.disable_month_change
        nav.on_month_change = cfg.on_month_change
        nav.on_visible_months_change = cfg.on_visible_months_change

    @property
    def current_month(self) -> CalendarDate:
        return self.navigator.current_month

    # ------------------------------------------------------------------
    # Option changes
    # ------------------------------------------------------------------
    def update(self, **options: Any) -> None:
        """Apply new option values; a changed ``current`` re-syncs the month."""
        unknown = set(options) - CONFIG_FIELDS
        if unknown:
            raise TypeError(f"unknown calendar options: {', '.join(sorted(unknown))}")
        previous = parse_date(self.config.current)
        self.config = replace(self.config, **options)
        self._configure_navigator()
        if "current" in options and parse_date(options["current"]) != previous:
            self.navigator.sync(options["current"])

    def sync(self, current: Any) -> bool:
        return self.navigator.sync(current)

    # ------------------------------------------------------------------
    # Grid
    # ------------------------------------------------------------------
    def weeks(self) -> list[WeekRow]:
        """Build the week rows for the anchor month."""
        cfg = self.config
        anchor = self.current_month
        six_weeks = cfg.show_six_weeks and not cfg.hide_extra_days
        page = month_page(anchor, normalize_first_day(cfg.first_day), six_weeks)
        today = self._today()

        rows: list[WeekRow] = []
        for week in week_rows(page):
            cells = tuple(self._cell(day, anchor, today) for day in week)
            number = week_number(week) if cfg.show_week_numbers else None
            rows.append(WeekRow(cells, number))
        return rows

    def _cell(self, day: CalendarDate, anchor: CalendarDate,
              today: CalendarDate) -> CellRecord | None:
        cfg = self.config
        if cfg.hide_extra_days and not same_month(day, anchor):
            return None
        state = day_state(day, anchor, today,
                          self.navigator.min_date, self.navigator.max_date,
                          cfg.disabled_by_default)
        marking = resolve_marking(day, cfg.marked_dates)
        touch_disabled = marking_flag(marking, "disableTouchEvent") or (
            cfg.disable_all_touch_events_for_disabled_days
            and (state == DayState.DISABLED or marking_flag(marking, "disabled"))
        )
        return CellRecord(
            date=day,
            state=state,
            marking=marking,
            accessibility_label=accessibility_label(day, state, marking),
            test_id=f"{SELECT_DATE_SLOT}-{day}",
            touch_disabled=bool(touch_disabled),
        )

    def header(self) -> HeaderRecord:
        cfg = self.config
        first_day = normalize_first_day(cfg.first_day)
        suffix = f"-{cfg.test_id}" if cfg.test_id else ""
        return HeaderRecord(
            title=self.current_month.to_date().strftime(cfg.month_format),
            day_names=() if cfg.hide_day_names else tuple(weekday_names(first_day)),
            disabled_day_indexes=frozenset(cfg.disabled_days_indexes or ()),
            show_arrows=not cfg.hide_arrows,
            left_arrow_enabled=not cfg.disable_arrow_left,
            right_arrow_enabled=not cfg.disable_arrow_right,
            show_indicator=needs_loading_indicator(
                cfg.current, cfg.marked_dates, cfg.display_loading_indicator),
            week_numbers=cfg.show_week_numbers,
            left_arrow_test_id=CHANGE_MONTH_LEFT_ARROW + suffix,
            right_arrow_test_id=CHANGE_MONTH_RIGHT_ARROW + suffix,
        )

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def press_day(self, day: Any) -> bool:
        return self.navigator.handle_day_interaction(day, self.config.on_day_press)

    def long_press_day(self, day: Any) -> bool:
        return self.navigator.handle_day_interaction(day, self.config.on_day_long_press)

    def add_month(self, count: int) -> bool:
        return self.navigator.add_months(count)

    def press_arrow_left(self) -> Any:
        return self._press_arrow(-1, self.config.on_press_arrow_left)

    def press_arrow_right(self) -> Any:
        return self._press_arrow(1, self.config.on_press_arrow_right)

    def _press_arrow(self, count: int, override) -> Any:
        def move() -> bool:
            return self.add_month(count)

        if callable(override):
            return override(move, date_to_data(self.current_month))
        return move()

    def on_swipe(self, direction: SwipeDirection | str | None) -> Any:
        """Left swipe shows the next month, right swipe the previous one."""
        if not self.config.enable_swipe_months or direction is None:
            return None
        try:
            direction = SwipeDirection(direction)
        except ValueError:
            logger.warning("Ignoring unknown swipe direction %r", direction)
            return None
        logger.debug("Swipe %s on %s", direction.value, self.current_month)
        if direction == SwipeDirection.LEFT:
            return self.press_arrow_right()
        if direction == SwipeDirection.RIGHT:
            return self.press_arrow_left()
        return None
