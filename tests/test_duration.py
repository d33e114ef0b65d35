"""Tests for the duration string codec."""

import pytest

from jira_weektime.duration import format_duration, parse_duration
from jira_weektime.exceptions import InvalidDurationError


class TestFormatDuration:
    """Tests for format_duration."""

    def test_zero_is_0m(self):
        assert format_duration(0) == "0m"

    def test_minutes_only(self):
        assert format_duration(45) == "45m"

    def test_full_breakdown(self):
        assert format_duration(7125) == "2w 4d 6h 45m"

    def test_skips_zero_units(self):
        assert format_duration(2400 + 5) == "1w 5m"
        assert format_duration(480 + 60) == "1d 1h"

    def test_day_and_week_rollover(self):
        assert format_duration(479) == "7h 59m"
        assert format_duration(480) == "1d"
        assert format_duration(2399) == "4d 7h 59m"
        assert format_duration(2400) == "1w"

    def test_large_values_stay_in_weeks(self):
        assert format_duration(123456) == "51w 2d 1h 36m"

    def test_negative_raises(self):
        with pytest.raises(InvalidDurationError):
            format_duration(-1)


class TestParseDuration:
    """Tests for parse_duration."""

    @pytest.mark.parametrize("text", [None, "", "0m"])
    def test_empty_values_are_zero(self, text):
        assert parse_duration(text) == 0

    def test_unit_values(self):
        assert parse_duration("1m") == 1
        assert parse_duration("1h") == 60
        assert parse_duration("1d") == 480
        assert parse_duration("1w") == 2400

    def test_full_string(self):
        assert parse_duration("2w 4d 6h 45m") == 7125

    def test_order_does_not_matter(self):
        assert parse_duration("2h 30m") == 150
        assert parse_duration("30m 2h") == 150

    def test_repeated_units_are_summed(self):
        assert parse_duration("1h 1h 15m") == 135

    def test_overflowing_units_are_accepted(self):
        assert parse_duration("90m") == 90
        assert parse_duration("10h") == 600

    @pytest.mark.parametrize(
        "text",
        ["5", "w5", "5x", "-5m", "m", "1.5h", "1h  30m", " 1h", "1H", "one h", "1h30m"],
    )
    def test_malformed_raises(self, text):
        with pytest.raises(InvalidDurationError) as exc_info:
            parse_duration(text)
        assert exc_info.value.text == text

    def test_invalid_duration_is_a_value_error(self):
        with pytest.raises(ValueError, match="Invalid time format supplied: 5x"):
            parse_duration("5x")

    @pytest.mark.parametrize("minutes", [0, 1, 59, 60, 61, 479, 480, 2399, 2400, 123456])
    def test_formatted_values_parse_back(self, minutes):
        assert parse_duration(format_duration(minutes)) == minutes
