"""Screen-reader labels for day cells, with pluggable locale strings."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from calendar_dates import CalendarDate
from calendar_logic import DayState
from marking import Marking, marking_entries, marking_flag

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday",
             "Thursday", "Friday", "Saturday"]
MONTH_NAMES = ["January", "February", "March", "April", "May", "June", "July",
               "August", "September", "October", "November", "December"]


def english_date_phrase(d: CalendarDate) -> str:
    """e.g. ``Friday 15 March 2024``."""
    return f"{DAY_NAMES[d.weekday()]} {d.day} {MONTH_NAMES[d.month - 1]} {d.year}"


@dataclass(frozen=True)
class LocaleStrings:
    today: str = "today"
    format_date: Callable[[CalendarDate], str] = english_date_phrase
    selected: str = "selected"
    no_entries: str = "You have no entries for this day"
    has_entries: str = "You have entries for this day"
    period_start: str = "period start"
    period_end: str = "period end"
    disabled: str = "disabled"


@dataclass
class _LocaleRegistry:
    locales: dict[str, LocaleStrings] = field(
        default_factory=lambda: {"en": LocaleStrings()})
    default: str = "en"


_registry = _LocaleRegistry()


def register_locale(name: str, strings: LocaleStrings) -> None:
    _registry.locales[name] = strings


def set_default_locale(name: str) -> None:
    if name not in _registry.locales:
        raise KeyError(f"unknown locale {name!r}")
    _registry.default = name


def current_locale() -> LocaleStrings:
    return _registry.locales[_registry.default]


def marking_label(marking: Marking | None,
                  locale: LocaleStrings | None = None) -> str:
    """Phrases for the marking flags, merged across entries in fixed order."""
    locale = locale or current_locale()
    parts: list[str] = []
    if marking_flag(marking, "selected"):
        parts.append(locale.selected)
        if not marking_flag(marking, "marked"):
            parts.append(locale.no_entries)
    if marking_flag(marking, "marked"):
        parts.append(locale.has_entries)
    if marking_flag(marking, "startingDay"):
        parts.append(locale.period_start)
    if marking_flag(marking, "endingDay"):
        parts.append(locale.period_end)
    if marking_flag(marking, "disabled") or marking_flag(marking, "disableTouchEvent"):
        parts.append(locale.disabled)
    return " ".join(parts)


def explicit_label(marking: Marking | None) -> str | None:
    for entry in marking_entries(marking):
        label = entry.get("accessibilityLabel")
        if label and isinstance(label, str):
            return label
    return None


def accessibility_label(day: CalendarDate, state: DayState,
                        marking: Marking | None = None,
                        locale: LocaleStrings | None = None) -> str:
    """Compose the label announced for a day cell.

    An explicit ``accessibilityLabel`` on the marking is used verbatim.
    """
    label = explicit_label(marking)
    if label is not None:
        return label

    locale = locale or current_locale()
    parts = []
    if state == DayState.TODAY:
        parts.append(locale.today)
    parts.append(locale.format_date(day))
    parts.append(marking_label(marking, locale))
    return " ".join(p for p in parts if p)
