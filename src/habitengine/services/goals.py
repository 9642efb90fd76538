"""Adaptive ("smart") quantity goals."""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from ..dates import InvalidDateError, parse_iso_date, to_iso
from ..logging_config import get_logger
from ..models.habit import Habit
from .context import EngineContext
from .recurrence import is_due
from .schedule import schedule_properties
from .streaks import streak

logger = get_logger(__name__)

_ONE_DAY = timedelta(days=1)


def _override(ctx: EngineContext, habit: Habit, date_iso: str, time: str) -> Optional[int]:
    info = ctx.habit_daily_info(habit.id, date_iso)
    return info.goal_override(time) if info is not None else None


def _learned_goal(ctx: EngineContext, habit: Habit, target_iso: str, time: str) -> Optional[int]:
    """Override value the user entered on the two most recent due days, if they agree.

    The search starts the day before the target (today for future targets).
    A due day that was not completed, or was completed without an override,
    ends the search.
    """

    target = parse_iso_date(target_iso)
    today = parse_iso_date(ctx.today())
    day = today if target > today else target - _ONE_DAY

    learned: Optional[int] = None
    matches = 0
    for _ in range(ctx.config.SMART_GOAL_LOOKBACK_DAYS):
        iso = to_iso(day)
        if iso < habit.created_on:
            break
        if is_due(ctx, habit, iso, day):
            if not ctx.status(habit.id, iso, time).is_completed:
                break
            value = _override(ctx, habit, iso, time)
            if value is None or (learned is not None and value != learned):
                break
            learned = value
            matches += 1
            if matches >= 2:
                return learned
        day -= _ONE_DAY
    return None


def smart_goal(ctx: EngineContext, habit: Habit, date_iso: str, time: str) -> int:
    """Quantity target for one habit instance.

    Priority: the instance's explicit override, then a value learned from
    recent overrides, then the base goal raised by ``GOAL_STEP`` for every
    full week of the streak leading up to the date. Check-type habits and
    habits without a numeric total always get 1.
    """

    schedule = schedule_properties(ctx, habit, date_iso)
    base = schedule.quantity_total if schedule is not None else None
    if base is None:
        return 1

    explicit = _override(ctx, habit, date_iso, time)
    if explicit is not None:
        return explicit

    try:
        learned = _learned_goal(ctx, habit, date_iso, time)
        previous_day = to_iso(parse_iso_date(date_iso) - _ONE_DAY)
    except InvalidDateError:
        logger.warning(
            "Smart goal requested for invalid date", extra={"habit_id": habit.id, "date": date_iso}
        )
        return max(ctx.config.MIN_GOAL, base)
    if learned is not None:
        return learned

    weeks = streak(ctx, habit, previous_day) // 7
    return max(ctx.config.MIN_GOAL, base + weeks * ctx.config.GOAL_STEP)


def current_goal(ctx: EngineContext, habit: Habit, date_iso: str, time: str) -> int:
    """Goal shown for an instance: its explicit override, else the smart goal."""

    explicit = _override(ctx, habit, date_iso, time)
    if explicit is not None:
        return explicit
    return smart_goal(ctx, habit, date_iso, time)
