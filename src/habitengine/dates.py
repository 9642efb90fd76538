"""UTC calendar-day arithmetic on ``YYYY-MM-DD`` strings.

Everything above this module passes dates around as ISO strings because they
compare correctly as plain strings and make cheap dictionary keys. Parsing is
strict: anything that is not an existing calendar day raises
:class:`InvalidDateError` instead of silently rolling over to another day.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class InvalidDateError(ValueError):
    """Raised when a value is not a valid ``YYYY-MM-DD`` calendar day."""


def parse_iso_date(value: str) -> date:
    """Parse ``YYYY-MM-DD`` into a :class:`date`, failing fast on bad input."""

    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise InvalidDateError(f"Not an ISO calendar date: {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        # e.g. 2024-02-30: well-formed but not on the calendar
        raise InvalidDateError(f"Date out of range: {value!r}") from exc


def is_valid_iso(value: str) -> bool:
    try:
        parse_iso_date(value)
    except InvalidDateError:
        return False
    return True


def to_iso(day: date) -> str:
    if not isinstance(day, date):
        raise InvalidDateError(f"Cannot format {day!r} as a calendar date")
    return day.isoformat()


def add_days(date_iso: str, days: int) -> str:
    """Shift an ISO date by ``days`` (negative values go back in time)."""

    return to_iso(parse_iso_date(date_iso) + timedelta(days=days))


def days_between(start_iso: str, end_iso: str) -> int:
    """Signed number of days from ``start_iso`` to ``end_iso``."""

    return (parse_iso_date(end_iso) - parse_iso_date(start_iso)).days


def utc_weekday(day: date) -> int:
    """Weekday with Sunday as 0 and Saturday as 6."""

    return day.isoweekday() % 7


def today_iso() -> str:
    return datetime.now(timezone.utc).date().isoformat()


__all__ = [
    "InvalidDateError",
    "add_days",
    "days_between",
    "is_valid_iso",
    "parse_iso_date",
    "to_iso",
    "today_iso",
    "utc_weekday",
]
