"""Marking lookup: date -> annotation(s) from a sparse marking map."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence, Union

from calendar_dates import CalendarDate, last_of_month, parse_date

logger = logging.getLogger(__name__)

MarkingEntry = Mapping[str, Any]
Marking = Union[MarkingEntry, Sequence[MarkingEntry]]
MarkingMap = Mapping[str, Marking]


def _is_entry_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def resolve_marking(day: CalendarDate,
                    marked_dates: MarkingMap | None) -> Marking | None:
    """Return the marking stored under the day's ISO key, or None.

    A missing map, a missing key and an empty sequence all mean "no marking".
    Values that are neither an entry nor a list of entries are ignored.
    The value is returned as stored; the map is never modified.
    """
    if not marked_dates:
        return None
    if not isinstance(marked_dates, Mapping):
        logger.warning("Ignoring marked dates of type %s", type(marked_dates).__name__)
        return None
    key = str(day)
    marking = marked_dates.get(key)
    if marking is None:
        return None
    if isinstance(marking, Mapping):
        return marking
    if not _is_entry_list(marking):
        logger.warning("Ignoring marking for %s: %r", key, marking)
        return None
    return marking or None


def marking_entries(marking: Marking | None) -> list[MarkingEntry]:
    """Flatten a resolved marking into a list of entries."""
    if isinstance(marking, Mapping):
        return [marking]
    if _is_entry_list(marking):
        return [m for m in marking if isinstance(m, Mapping)]
    return []


def marking_flag(marking: Marking | None, name: str) -> bool:
    """True if any entry sets the named flag."""
    return any(entry.get(name) for entry in marking_entries(marking))


def needs_loading_indicator(current: Any, marked_dates: MarkingMap | None,
                            display_loading_indicator: bool) -> bool:
    """Show the header indicator until the current month's last day is marked.

    Hosts that load marks per month fill the map progressively; the last
    day of the month acts as the "loaded" sentinel.
    """
    if not display_loading_indicator:
        return False
    current = parse_date(current)
    if current is None:
        return False
    return resolve_marking(last_of_month(current), marked_dates) is None
