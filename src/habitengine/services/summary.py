"""Per-day aggregation across all habits."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Optional

from ..dates import InvalidDateError, parse_iso_date, to_iso
from ..logging_config import get_logger
from ..models.habit import Habit
from ..models.status import StatusCode
from ..models.summary import ActiveHabit, DaySummary
from .cache import MISSING
from .context import EngineContext
from .goals import current_goal
from .recurrence import is_due
from .schedule import effective_times, schedule_properties

logger = get_logger(__name__)

_ONE_DAY = timedelta(days=1)


def active_habits(
    ctx: EngineContext, date_iso: str, parsed: Optional[date] = None
) -> tuple[ActiveHabit, ...]:
    """Habits due on a date that have at least one time-slot, in habit order."""

    cached = ctx.cache.active_habits.get(date_iso)
    if cached is not MISSING:
        return cached

    try:
        day = parsed or parse_iso_date(date_iso)
    except InvalidDateError:
        logger.warning("Active habits requested for invalid date", extra={"date": date_iso})
        return ()

    active = []
    for habit in ctx.habits:
        if not is_due(ctx, habit, date_iso, day):
            continue
        times = effective_times(ctx, habit, date_iso)
        if times:
            active.append(ActiveHabit(habit=habit, times=times))
    return ctx.cache.active_habits.put(date_iso, tuple(active))


def summarize(ctx: EngineContext, date_iso: str, *, _depth: int = 0) -> DaySummary:
    """Totals for a date plus the three-day progressive-overload flag.

    The flag needs the two previous days to be perfect, which is answered by
    recursing into this function. Dates before any habit existed end the
    recursion with an empty summary, and past ``SUMMARY_MAX_DEPTH`` levels a
    summary is returned without the flag and left out of the cache.
    """

    cached = ctx.cache.day_summaries.get(date_iso)
    if cached is not MISSING:
        return cached

    try:
        day = parse_iso_date(date_iso)
    except InvalidDateError:
        logger.warning("Day summary requested for invalid date", extra={"date": date_iso})
        return DaySummary.empty()

    if ctx.earliest_created_on is None or date_iso < ctx.earliest_created_on:
        return ctx.cache.day_summaries.put(date_iso, DaySummary.empty())

    total = completed = snoozed = pending = 0
    plus_candidates: list[tuple[Habit, str]] = []
    for entry in active_habits(ctx, date_iso, day):
        schedule = schedule_properties(ctx, entry.habit, date_iso)
        is_quantity = schedule is not None and schedule.quantity_total is not None
        for time in entry.times:
            status = ctx.status(entry.habit.id, date_iso, time)
            total += 1
            if status.is_completed:
                completed += 1
                if is_quantity and status is StatusCode.DONE_PLUS:
                    plus_candidates.append((entry.habit, time))
            elif status is StatusCode.DEFERRED:
                snoozed += 1
            else:
                pending += 1

    counts = dict(total=total, completed=completed, snoozed=snoozed, pending=pending)
    if not (plus_candidates and total > 0 and completed == total):
        return ctx.cache.day_summaries.put(date_iso, DaySummary.from_counts(**counts))

    if _depth >= ctx.config.SUMMARY_MAX_DEPTH:
        # Good enough for the caller's "was this day perfect" question only.
        return DaySummary.from_counts(**counts)

    day_1 = to_iso(day - _ONE_DAY)
    day_2 = to_iso(day - 2 * _ONE_DAY)
    show_plus = False
    if summarize(ctx, day_1, _depth=_depth + 1).is_perfect and summarize(
        ctx, day_2, _depth=_depth + 1
    ).is_perfect:
        for habit, time in plus_candidates:
            value = current_goal(ctx, habit, date_iso, time)
            if value > current_goal(ctx, habit, day_1, time) and value > current_goal(
                ctx, habit, day_2, time
            ):
                show_plus = True
                break

    return ctx.cache.day_summaries.put(
        date_iso, DaySummary.from_counts(**counts, show_plus=show_plus)
    )
