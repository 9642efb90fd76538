"""Tests for UTC calendar-day arithmetic."""

from __future__ import annotations

from datetime import date

import pytest

from habitengine.dates import (
    InvalidDateError,
    add_days,
    days_between,
    is_valid_iso,
    parse_iso_date,
    to_iso,
    utc_weekday,
)


class TestParsing:
    def test_parses_iso_date(self):
        """A well-formed ISO date parses to the same calendar day."""
        assert parse_iso_date("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-02-30", "2023-02-29", "2024-13-01", "2024-1-1", "", "garbage"])
    def test_rejects_rolled_or_malformed_dates(self, value):
        """Calendar-rolled and malformed strings fail fast."""
        with pytest.raises(InvalidDateError):
            parse_iso_date(value)

    def test_rejects_non_strings(self):
        """Non-string input is a corrupted date, not a silent None."""
        with pytest.raises(InvalidDateError):
            parse_iso_date(None)  # type: ignore[arg-type]

    def test_invalid_date_error_is_value_error(self):
        """Callers catching ValueError still see date failures."""
        assert issubclass(InvalidDateError, ValueError)

    def test_is_valid_iso(self):
        assert is_valid_iso("2024-01-31")
        assert not is_valid_iso("2024-01-32")


class TestArithmetic:
    def test_add_days_crosses_month_and_year(self):
        """Adding days rolls over month and year boundaries."""
        assert add_days("2023-12-31", 1) == "2024-01-01"
        assert add_days("2024-03-01", -1) == "2024-02-29"

    def test_days_between_is_signed(self):
        assert days_between("2024-01-01", "2024-01-10") == 9
        assert days_between("2024-01-10", "2024-01-01") == -9

    def test_utc_weekday_starts_on_sunday(self):
        """Sunday is 0 and Saturday is 6."""
        assert utc_weekday(date(2024, 1, 7)) == 0  # Sunday
        assert utc_weekday(date(2024, 1, 8)) == 1  # Monday
        assert utc_weekday(date(2024, 1, 13)) == 6  # Saturday

    def test_to_iso_rejects_non_dates(self):
        with pytest.raises(InvalidDateError):
            to_iso("2024-01-01")  # type: ignore[arg-type]
