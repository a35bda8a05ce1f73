"""Tests for settings persistence and conversion to calendar options."""

import json

import pytest

import settings
from calendar_model import CalendarConfig


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings, "_SETTINGS_PATH", str(path))
    return path


class TestLoadSettings:
    def test_defaults_without_file(self, settings_path):
        loaded = settings.load_settings()
        assert loaded["first_day"] == 1
        assert loaded["show_six_weeks"] is True
        assert loaded["marking_type"] == "multi-dot"
        assert loaded["holidays"] == []

    def test_defaults_are_not_shared(self, settings_path):
        settings.load_settings()["holiday_colors"]["CH"] = "#000000"
        assert settings.load_settings()["holiday_colors"]["CH"] != "#000000"

    def test_unreadable_file(self, settings_path):
        settings_path.write_text("{not json", encoding="utf-8")
        assert settings.load_settings()["first_day"] == 1
        settings_path.write_text("[1, 2]", encoding="utf-8")
        assert settings.load_settings()["first_day"] == 1

    def test_invalid_values_are_dropped(self, settings_path):
        settings_path.write_text(json.dumps({
            "first_day": 9,
            "hide_extra_days": "yes",
            "marking_type": "sparkles",
            "min_date": "2024-02-30",
            "max_date": "2024-12-31",
            "holidays": ["ch_neujahr", 5],
            "holiday_colors": {"DE": "#00FF00", "CH": 3},
        }), encoding="utf-8")
        loaded = settings.load_settings()
        assert loaded["first_day"] == 1
        assert loaded["hide_extra_days"] is False
        assert loaded["marking_type"] == "multi-dot"
        assert loaded["min_date"] is None
        assert loaded["max_date"] == "2024-12-31"
        assert loaded["holidays"] == ["ch_neujahr"]
        assert loaded["holiday_colors"]["DE"] == "#00FF00"
        assert loaded["holiday_colors"]["CH"] == "#FF0000"

    def test_saved_values_survive_reload(self, settings_path):
        current = settings.load_settings()
        current.update(first_day=0, marking_type="period", hide_extra_days=True,
                       window_width=420)
        settings.save_settings(current)
        loaded = settings.load_settings()
        assert loaded["first_day"] == 0
        assert loaded["marking_type"] == "period"
        assert loaded["hide_extra_days"] is True
        assert loaded["window_width"] == 420


class TestConfigOptions:
    def test_only_calendar_options(self, settings_path):
        options = settings.config_options(settings.load_settings())
        assert "holidays" not in options
        assert "window_width" not in options
        config = CalendarConfig(**options)
        assert config.first_day == 1
        assert config.enable_swipe_months is True
