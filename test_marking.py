"""Tests for marking lookup and the loading-indicator sentinel."""

from calendar_dates import CalendarDate
from marking import marking_entries, marking_flag, needs_loading_indicator, resolve_marking

D = CalendarDate


class TestResolveMarking:
    def test_absent_or_empty_map(self):
        assert resolve_marking(D(2024, 3, 15), None) is None
        assert resolve_marking(D(2024, 3, 15), {}) is None

    def test_exact_key_only(self):
        marks = {"2024-03-15": {"selected": True}}
        assert resolve_marking(D(2024, 3, 15), marks) == {"selected": True}
        assert resolve_marking(D(2024, 3, 14), marks) is None
        assert resolve_marking(D(2025, 3, 15), marks) is None

    def test_sequence_returned_as_stored(self):
        dots = [{"key": "a", "color": "red"}, {"key": "b", "color": "blue"}]
        assert resolve_marking(D(2024, 3, 15), {"2024-03-15": dots}) is dots

    def test_empty_sequence_is_no_marking(self):
        assert resolve_marking(D(2024, 3, 15), {"2024-03-15": []}) is None

    def test_scalar_values_are_ignored(self):
        for value in (True, False, 0, 7, "selected"):
            assert resolve_marking(D(2024, 3, 15), {"2024-03-15": value}) is None

    def test_map_that_is_not_a_mapping(self):
        assert resolve_marking(D(2024, 3, 15), [("2024-03-15", {"marked": True})]) is None


class TestEntries:
    def test_entries(self):
        assert marking_entries(None) == []
        assert marking_entries({"marked": True}) == [{"marked": True}]
        assert marking_entries([{"a": 1}, None, {"b": 2}]) == [{"a": 1}, {"b": 2}]
        assert marking_entries(True) == []
        assert marking_entries("marked") == []
        assert not marking_flag(0, "marked")

    def test_flag_across_entries(self):
        assert marking_flag([{"marked": False}, {"marked": True}], "marked")
        assert not marking_flag({"selected": True}, "marked")
        assert not marking_flag(None, "selected")


class TestLoadingIndicator:
    def test_off_unless_requested(self):
        assert not needs_loading_indicator("2024-03-01", None, False)

    def test_needs_current_date(self):
        assert not needs_loading_indicator(None, None, True)
        assert not needs_loading_indicator("bogus", None, True)

    def test_waits_for_last_day_of_month(self):
        assert needs_loading_indicator("2024-02-10", {"2024-02-10": {}}, True)
        assert not needs_loading_indicator(
            "2024-02-10", {"2024-02-29": {"marked": True}}, True)

    def test_malformed_map_counts_as_not_loaded(self):
        assert needs_loading_indicator("2024-02-10", ["2024-02-29"], True)
        assert needs_loading_indicator("2024-02-10", {"2024-02-29": True}, True)
