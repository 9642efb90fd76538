"""Recurrence evaluation."""

from __future__ import annotations

from datetime import date
from typing import Optional

from ..dates import InvalidDateError, parse_iso_date, utc_weekday
from ..logging_config import get_logger
from ..models.habit import Daily, Habit, Interval, IntervalUnit, Schedule, SpecificDaysOfWeek
from .cache import MISSING
from .context import EngineContext
from .schedule import resolve_schedule

logger = get_logger(__name__)


def _anchor(ctx: EngineContext, anchor_iso: str) -> date:
    table = ctx.cache.anchor_dates
    cached = table.get(anchor_iso)
    if cached is MISSING:
        cached = table.put(anchor_iso, parse_iso_date(anchor_iso))
    return cached


def _matches(ctx: EngineContext, schedule: Schedule, day: date) -> bool:
    frequency = schedule.frequency
    if isinstance(frequency, Daily):
        return True
    if isinstance(frequency, SpecificDaysOfWeek):
        return utc_weekday(day) in frequency.days
    if isinstance(frequency, Interval):
        anchor = _anchor(ctx, frequency.anchor_date or schedule.anchor_date or schedule.start_date)
        offset = (day - anchor).days
        if offset < 0:
            return False
        if frequency.unit is IntervalUnit.DAYS:
            return offset % frequency.amount == 0
        return day.weekday() == anchor.weekday() and (offset // 7) % frequency.amount == 0
    raise TypeError(f"Unsupported frequency: {frequency!r}")


def is_due(
    ctx: EngineContext, habit: Habit, date_iso: str, parsed: Optional[date] = None
) -> bool:
    """Whether ``habit`` requires action on ``date_iso``.

    ``parsed`` lets callers that already hold the date object skip re-parsing.
    """

    if habit.is_retired_on(date_iso):
        return False

    table = ctx.cache.appearances.table_for(habit.id)
    cached = table.get(date_iso)
    if cached is not MISSING:
        return cached

    try:
        day = parsed or parse_iso_date(date_iso)
    except InvalidDateError:
        logger.warning(
            "Recurrence check skipped for invalid date",
            extra={"habit_id": habit.id, "date": date_iso},
        )
        return False

    schedule = resolve_schedule(ctx, habit, date_iso)
    if schedule is None:
        return table.put(date_iso, False)

    try:
        appears = _matches(ctx, schedule, day)
    except InvalidDateError:
        # Corrupt anchor in the stored schedule; the day simply does not show.
        logger.warning(
            "Interval anchor is not a valid date",
            extra={"habit_id": habit.id, "date": date_iso},
        )
        appears = False

    return table.put(date_iso, appears)
