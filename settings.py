"""JSON-based settings persistence for the mini calendar."""

import json
import logging
import os

from calendar_dates import parse_date
from public_holidays import DEFAULT_COLORS

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".mini-calendar-settings.json")

MARKING_TYPES = ("dot", "period", "multi-dot", "multi-period", "custom")

_BOOL_KEYS = (
    "show_six_weeks",
    "hide_extra_days",
    "show_week_numbers",
    "enable_swipe_months",
    "disable_month_change",
    "disable_all_touch_events_for_disabled_days",
)

# Keys handed straight to CalendarConfig
_CONFIG_KEYS = _BOOL_KEYS + ("first_day", "marking_type", "min_date", "max_date")

_DEFAULTS = {
    "first_day": 1,
    "show_six_weeks": True,
    "hide_extra_days": False,
    "show_week_numbers": True,
    "enable_swipe_months": True,
    "disable_month_change": False,
    "disable_all_touch_events_for_disabled_days": False,
    "marking_type": "multi-dot",
    "min_date": None,
    "max_date": None,
    "window_width": None,
    "window_height": None,
    "holidays": [],
    "holiday_colors": dict(DEFAULT_COLORS),
}


def _clean_date(value):
    parsed = parse_date(value)
    return str(parsed) if parsed is not None else None


def load_settings() -> dict:
    """Load settings from disk, returning defaults for missing or bad keys."""
    settings = json.loads(json.dumps(_DEFAULTS))
    try:
        with open(_SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except FileNotFoundError:
        return settings
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Could not read %s, using defaults: %s", _SETTINGS_PATH, exc)
        return settings
    if not isinstance(stored, dict):
        logger.warning("Ignoring settings file %s: not a JSON object", _SETTINGS_PATH)
        return settings

    for key in _BOOL_KEYS:
        if isinstance(stored.get(key), bool):
            settings[key] = stored[key]
    first_day = stored.get("first_day")
    if isinstance(first_day, int) and not isinstance(first_day, bool) and 0 <= first_day <= 6:
        settings["first_day"] = first_day
    if stored.get("marking_type") in MARKING_TYPES:
        settings["marking_type"] = stored["marking_type"]
    for key in ("min_date", "max_date"):
        if key in stored:
            settings[key] = _clean_date(stored[key])
    for key in ("window_width", "window_height"):
        if isinstance(stored.get(key), int):
            settings[key] = stored[key]
    if isinstance(stored.get("holidays"), list):
        settings["holidays"] = [k for k in stored["holidays"] if isinstance(k, str)]
    if isinstance(stored.get("holiday_colors"), dict):
        settings["holiday_colors"].update(
            {k: v for k, v in stored["holiday_colors"].items() if isinstance(v, str)})
    return settings


def save_settings(settings: dict) -> None:
    """Persist settings to disk."""
    with open(_SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def config_options(settings: dict) -> dict:
    """Pick the CalendarConfig keyword arguments out of a settings dict."""
    return {key: settings[key] for key in _CONFIG_KEYS if key in settings}
