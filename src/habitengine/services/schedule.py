"""Schedule resolution: which version of a habit's configuration applies on a date."""

from __future__ import annotations

from typing import Optional

from ..dates import is_valid_iso
from ..logging_config import get_logger
from ..models.habit import Habit, Schedule
from .cache import MISSING
from .context import EngineContext

logger = get_logger(__name__)


def resolve_schedule(ctx: EngineContext, habit: Habit, date_iso: str) -> Optional[Schedule]:
    """Return the schedule effective on ``date_iso`` or None.

    History is walked newest first because lookups cluster around recent
    dates. The first entry that started on or before the date decides: it is
    the answer unless it has already ended.
    """

    table = ctx.cache.schedules.table_for(habit.id)
    cached = table.get(date_iso)
    if cached is not MISSING:
        return cached
    if not is_valid_iso(date_iso):
        logger.warning(
            "Schedule lookup for invalid date", extra={"habit_id": habit.id, "date": date_iso}
        )
        return None

    schedule: Optional[Schedule] = None
    for candidate in reversed(habit.schedule_history or ()):
        if date_iso >= candidate.start_date:
            if candidate.end_date is None or date_iso < candidate.end_date:
                schedule = candidate
            break

    return table.put(date_iso, schedule)


def effective_times(ctx: EngineContext, habit: Habit, date_iso: str) -> tuple[str, ...]:
    """Time-slots due on a date: a per-date override wins over the recurring schedule."""

    info = ctx.habit_daily_info(habit.id, date_iso)
    if info is not None and info.daily_schedule is not None:
        return info.daily_schedule
    schedule = resolve_schedule(ctx, habit, date_iso)
    return schedule.times if schedule else ()


def schedule_properties(ctx: EngineContext, habit: Habit, date_iso: str) -> Optional[Schedule]:
    """Configuration to read goals from; falls back to the latest history entry."""

    if not habit.schedule_history:
        return None
    return resolve_schedule(ctx, habit, date_iso) or habit.schedule_history[-1]
