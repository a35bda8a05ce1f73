"""Public holidays for Switzerland and Germany, exposed as calendar markings."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Iterable, NamedTuple

from dateutil.easter import easter

from calendar_dates import CalendarDate


class Holiday(NamedTuple):
    key: str
    name: str
    country: str
    on: Callable[[int], date]


def _fixed(month: int, day: int) -> Callable[[int], date]:
    return lambda year: date(year, month, day)


def _after_easter(days: int) -> Callable[[int], date]:
    return lambda year: easter(year) + timedelta(days=days)


HOLIDAYS: list[Holiday] = [
    # Switzerland
    Holiday("ch_neujahr", "Neujahr", "CH", _fixed(1, 1)),
    Holiday("ch_berchtoldstag", "Berchtoldstag", "CH", _fixed(1, 2)),
    Holiday("ch_karfreitag", "Karfreitag", "CH", _after_easter(-2)),
    Holiday("ch_ostermontag", "Ostermontag", "CH", _after_easter(1)),
    Holiday("ch_tag_der_arbeit", "Tag der Arbeit", "CH", _fixed(5, 1)),
    Holiday("ch_auffahrt", "Auffahrt", "CH", _after_easter(39)),
    Holiday("ch_pfingstmontag", "Pfingstmontag", "CH", _after_easter(50)),
    Holiday("ch_bundesfeier", "Bundesfeier", "CH", _fixed(8, 1)),
    Holiday("ch_weihnachten", "Weihnachten", "CH", _fixed(12, 25)),
    # Germany
    Holiday("de_neujahr", "Neujahr", "DE", _fixed(1, 1)),
    Holiday("de_karfreitag", "Karfreitag", "DE", _after_easter(-2)),
    Holiday("de_ostermontag", "Ostermontag", "DE", _after_easter(1)),
    Holiday("de_tag_der_arbeit", "Tag der Arbeit", "DE", _fixed(5, 1)),
    Holiday("de_christi_himmelfahrt", "Christi Himmelfahrt", "DE", _after_easter(39)),
    Holiday("de_pfingstmontag", "Pfingstmontag", "DE", _after_easter(50)),
    Holiday("de_tag_dt_einheit", "Tag der Deutschen Einheit", "DE", _fixed(10, 3)),
    Holiday("de_weihnachten1", "1. Weihnachtstag", "DE", _fixed(12, 25)),
    Holiday("de_weihnachten2", "2. Weihnachtstag", "DE", _fixed(12, 26)),
]

COUNTRIES: list[tuple[str, str]] = [
    ("CH", "Switzerland"),
    ("DE", "Germany"),
]

DEFAULT_COLORS = {"CH": "#FF0000", "DE": "#FFD700"}

_BY_KEY = {h.key: h for h in HOLIDAYS}


def holidays_by_country(country: str) -> list[tuple[str, str]]:
    """Return [(key, name), ...] for the given country code."""
    return [(h.key, h.name) for h in HOLIDAYS if h.country == country]


def holiday_markings(years: Iterable[int], enabled_keys: Iterable[str],
                     colors: dict[str, str] | None = None) -> dict[str, dict]:
    """Build a marking map for the enabled holidays in the given years.

    Each marked day carries one dot per country (first-seen order) and the
    holiday names under ``holidays``.
    """
    colors = {**DEFAULT_COLORS, **(colors or {})}
    enabled = [_BY_KEY[k] for k in sorted(set(enabled_keys)) if k in _BY_KEY]
    # Registry order keeps dot order stable
    enabled.sort(key=HOLIDAYS.index)

    result: dict[str, dict] = {}
    for year in sorted(set(years)):
        for holiday in enabled:
            key = str(CalendarDate.from_date(holiday.on(year)))
            entry = result.setdefault(key, {"marked": True, "dots": [], "holidays": []})
            entry["holidays"].append(f"{holiday.name} ({holiday.country})")
            if not any(d["key"] == holiday.country for d in entry["dots"]):
                color = colors.get(holiday.country, "#888888")
                entry["dots"].append({"key": holiday.country, "color": color})
                entry.setdefault("dotColor", color)
    return result
