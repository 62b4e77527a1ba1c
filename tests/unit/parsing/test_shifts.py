"""Tests for shift extraction."""

from __future__ import annotations

from hours_import.parsing.shifts import extract_shift


class TestClockTimes:
    def test_last_token_is_entry_and_second_last_is_exit(self):
        shift = extract_shift(["ב", "8.5", "17:00", "08:30"], "ב")
        assert shift.start_time == "08:30"
        assert shift.end_time == "17:00"
        assert shift.total_hours == 8.5

    def test_single_token_is_start(self):
        shift = extract_shift(["ג", "7.25", "9:00"], "ג")
        assert shift.start_time == "09:00"
        assert shift.end_time is None

    def test_out_of_range_clock_is_ignored(self):
        shift = extract_shift(["א", "25:00", "8.5"], "א")
        assert shift.start_time is None
        assert shift.total_hours == 8.5


class TestDuration:
    def test_hour_minute_duration_column(self):
        shift = extract_shift(["ד", "5:22", "19:00", "13:38"], "ד")
        assert shift.total_hours == 5.37

    def test_hour_minute_length_beside_single_clock_in(self):
        shift = extract_shift(["ד", "5:22", "19:00"], "ד")
        assert shift.total_hours == 5.37
        assert shift.start_time == "19:00"
        assert shift.end_time is None

    def test_hour_minute_length_alone(self):
        shift = extract_shift(["ב", "5:22"], "ב")
        assert shift.total_hours == 5.37
        assert shift.start_time is None

    def test_takes_larger_of_decimal_and_hour_minute(self):
        shift = extract_shift(["ה", "5.36", "5:58", "23:00", "17:00"], "ה")
        assert shift.total_hours == 5.97

    def test_comma_decimal(self):
        assert extract_shift(["א", "7,5"], "א").total_hours == 7.5

    def test_rounded_to_two_places(self):
        assert extract_shift(["א", "7.333"], "א").total_hours == 7.33

    def test_overnight_span_wraps_midnight(self):
        shift = extract_shift(["ש", "06:00", "23:00"], "ש")
        assert shift.start_time == "23:00"
        assert shift.end_time == "06:00"
        assert shift.total_hours == 7.0

    def test_day_marker_is_kept(self):
        assert extract_shift(["ו", "4.5"], "ו").day_marker == "ו"


class TestDiscarded:
    def test_no_duration(self):
        assert extract_shift(["ו", "0", ""], "ו") is None

    def test_zero_decimal(self):
        assert extract_shift(["ו", "0.00"], "ו") is None

    def test_decimal_above_a_day(self):
        assert extract_shift(["ו", "25.5"], "ו") is None
