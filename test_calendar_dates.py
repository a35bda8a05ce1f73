"""Tests for the calendar-date value type and predicates."""

from datetime import date, datetime

import pytest

from calendar_dates import (
    CalendarDate,
    add_days,
    add_months,
    date_to_data,
    first_of_month,
    is_after,
    is_before,
    is_in_range,
    is_same_or_after,
    is_same_or_before,
    last_of_month,
    parse_date,
    same_date,
    same_month,
    week_of_year,
)


class TestCalendarDate:
    def test_rejects_impossible_dates(self):
        with pytest.raises(ValueError):
            CalendarDate(2023, 2, 29)
        with pytest.raises(ValueError):
            CalendarDate(2024, 13, 1)

    def test_iso_key(self):
        assert str(CalendarDate(2024, 3, 5)) == "2024-03-05"

    def test_weekday_counts_from_sunday(self):
        assert CalendarDate(2024, 3, 3).weekday() == 0  # Sunday
        assert CalendarDate(2024, 3, 1).weekday() == 5  # Friday
        assert CalendarDate(2024, 3, 9).weekday() == 6  # Saturday

    def test_add_months_clamps_day(self):
        assert CalendarDate(2024, 1, 31).add_months(1) == CalendarDate(2024, 2, 29)
        assert CalendarDate(2023, 1, 31).add_months(1) == CalendarDate(2023, 2, 28)
        assert CalendarDate(2024, 3, 31).add_months(-1) == CalendarDate(2024, 2, 29)
        assert CalendarDate(2024, 12, 15).add_months(1) == CalendarDate(2025, 1, 15)
        assert add_months(CalendarDate(2024, 5, 10), -17) == CalendarDate(2022, 12, 10)

    def test_add_days_crosses_month_and_year(self):
        assert add_days(CalendarDate(2024, 12, 31), 1) == CalendarDate(2025, 1, 1)
        assert CalendarDate(2024, 3, 1).add_days(-1) == CalendarDate(2024, 2, 29)

    def test_set_day(self):
        assert CalendarDate(2024, 3, 15).set_day(1) == CalendarDate(2024, 3, 1)

    def test_iso_week_numbers(self):
        assert week_of_year(CalendarDate(2024, 12, 30)) == 1
        assert week_of_year(CalendarDate(2021, 1, 3)) == 53
        assert CalendarDate(2024, 3, 9).week_of_year() == 10

    def test_month_bounds(self):
        assert first_of_month(CalendarDate(2024, 2, 17)) == CalendarDate(2024, 2, 1)
        assert last_of_month(CalendarDate(2024, 2, 17)) == CalendarDate(2024, 2, 29)
        assert last_of_month(CalendarDate(2023, 12, 1)) == CalendarDate(2023, 12, 31)


class TestPredicates:
    def test_ordering(self):
        a, b = CalendarDate(2024, 3, 9), CalendarDate(2024, 3, 10)
        assert is_before(a, b) and not is_before(b, a)
        assert is_after(b, a) and not is_after(a, a)
        assert is_same_or_before(a, a) and is_same_or_before(a, b)
        assert is_same_or_after(a, a) and not is_same_or_after(a, b)

    def test_same_month_and_date(self):
        assert same_month(CalendarDate(2024, 3, 1), CalendarDate(2024, 3, 31))
        assert not same_month(CalendarDate(2024, 3, 1), CalendarDate(2023, 3, 1))
        assert same_date(CalendarDate(2024, 3, 1), CalendarDate(2024, 3, 1))
        assert not same_date(CalendarDate(2024, 3, 1), None)

    def test_range_bounds_are_inclusive_and_optional(self):
        lo, hi = CalendarDate(2024, 3, 10), CalendarDate(2024, 3, 20)
        assert is_in_range(lo, lo, hi)
        assert is_in_range(hi, lo, hi)
        assert not is_in_range(CalendarDate(2024, 3, 9), lo, hi)
        assert not is_in_range(CalendarDate(2024, 3, 21), lo, hi)
        assert is_in_range(CalendarDate(1900, 1, 1), None, hi)
        assert is_in_range(CalendarDate(2100, 1, 1), lo, None)


class TestParseDate:
    @pytest.mark.parametrize("value", [
        "2024-03-15",
        " 2024-03-15 ",
        "2024-03-15T10:30:00Z",
        date(2024, 3, 15),
        datetime(2024, 3, 15, 23, 59),
        CalendarDate(2024, 3, 15),
        {"year": 2024, "month": 3, "day": 15},
        {"dateString": "2024-03-15"},
    ])
    def test_supported_forms(self, value):
        assert parse_date(value) == CalendarDate(2024, 3, 15)

    def test_millisecond_timestamp_is_utc(self):
        assert parse_date(1704067200000) == CalendarDate(2024, 1, 1)
        assert parse_date({"timestamp": 1704067200000}) == CalendarDate(2024, 1, 1)

    @pytest.mark.parametrize("value", [
        None, "", "not a date", "2023-02-30", [], True, {"foo": 1},
    ])
    def test_malformed_input_is_absent(self, value):
        assert parse_date(value) is None


class TestDateToData:
    def test_record_fields(self):
        assert date_to_data(CalendarDate(2024, 1, 1)) == {
            "year": 2024,
            "month": 1,
            "day": 1,
            "timestamp": 1704067200000,
            "dateString": "2024-01-01",
        }
