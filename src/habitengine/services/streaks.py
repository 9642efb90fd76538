"""Completion checks and streak calculation."""

from __future__ import annotations

from datetime import timedelta

from ..dates import InvalidDateError, parse_iso_date, to_iso
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.status import StreakLevel
from .cache import MISSING
from .context import EngineContext
from .recurrence import is_due
from .schedule import effective_times

logger = get_logger(__name__)

_ONE_DAY = timedelta(days=1)


def is_fully_done(ctx: EngineContext, habit: Habit, date_iso: str) -> bool:
    """True when every due time-slot is DONE or DONE_PLUS.

    A day with no due slots counts as done. Deferred slots do not.
    """

    for time in effective_times(ctx, habit, date_iso):
        if not ctx.status(habit.id, date_iso, time).is_completed:
            return False
    return True


def streak(ctx: EngineContext, habit: Habit, end_date_iso: str) -> int:
    """Consecutive due-and-done days up to and including ``end_date_iso``.

    When yesterday's value is already cached the answer is derived from it in
    constant time; otherwise the history is walked backwards, at most
    ``STREAK_LOOKBACK_DAYS`` days, stopping at the first missed due day or at
    the habit's creation date.
    """

    table = ctx.cache.streaks.table_for(habit.id)
    cached = table.get(end_date_iso)
    if cached is not MISSING:
        return cached

    try:
        end_day = parse_iso_date(end_date_iso)
    except InvalidDateError:
        logger.warning(
            "Streak requested for invalid date", extra={"habit_id": habit.id, "date": end_date_iso}
        )
        return 0

    if end_date_iso < habit.created_on:
        return table.put(end_date_iso, 0)

    previous = table.get(to_iso(end_day - _ONE_DAY))
    if previous is not MISSING:
        if not is_due(ctx, habit, end_date_iso, end_day):
            value = previous
        elif is_fully_done(ctx, habit, end_date_iso):
            value = previous + 1
        else:
            value = 0
        return table.put(end_date_iso, value)

    count = 0
    day = end_day
    for _ in range(ctx.config.STREAK_LOOKBACK_DAYS):
        iso = to_iso(day)
        if iso < habit.created_on:
            break
        if is_due(ctx, habit, iso, day):
            if not is_fully_done(ctx, habit, iso):
                break
            count += 1
        day -= _ONE_DAY

    return table.put(end_date_iso, count)


def longest_streak(ctx: EngineContext, habit: Habit, end_date_iso: str) -> int:
    """Longest run of due-and-done days inside the lookback window ending at a date.

    Days the habit is not due neither extend nor break a run. Not cached.
    """

    try:
        day = parse_iso_date(end_date_iso)
    except InvalidDateError:
        logger.warning(
            "Longest streak requested for invalid date", extra={"habit_id": habit.id, "date": end_date_iso}
        )
        return 0

    longest = 0
    run = 0
    for _ in range(ctx.config.STREAK_LOOKBACK_DAYS):
        iso = to_iso(day)
        if iso < habit.created_on:
            break
        if is_due(ctx, habit, iso, day):
            if is_fully_done(ctx, habit, iso):
                run += 1
                longest = max(longest, run)
            else:
                run = 0
        day -= _ONE_DAY
    return longest


def streak_level(ctx: EngineContext, habit: Habit, date_iso: str) -> StreakLevel:
    """Tier of the streak ending at ``date_iso``.

    ``CONSOLIDATED`` from ``CONSOLIDATED_DAYS`` on (the point at which a habit
    may be graduated), ``SEMI_CONSOLIDATED`` from ``SEMI_CONSOLIDATED_DAYS``.
    """

    current = streak(ctx, habit, date_iso)
    if current >= ctx.config.CONSOLIDATED_DAYS:
        return StreakLevel.CONSOLIDATED
    if current >= ctx.config.SEMI_CONSOLIDATED_DAYS:
        return StreakLevel.SEMI_CONSOLIDATED
    return StreakLevel.NONE


def milestone_reached(ctx: EngineContext, habit: Habit, date_iso: str) -> bool:
    """True on the exact day the streak hits one of the two tier thresholds."""

    current = streak(ctx, habit, date_iso)
    return current in (ctx.config.SEMI_CONSOLIDATED_DAYS, ctx.config.CONSOLIDATED_DAYS)


def can_graduate(ctx: EngineContext, habit: Habit, date_iso: str) -> bool:
    """Whether an active habit has a consolidated streak as of ``date_iso``."""

    if habit.is_retired_on(date_iso):
        return False
    return streak_level(ctx, habit, date_iso) is StreakLevel.CONSOLIDATED
