"""Public entry point: one engine per set of habits and status store."""

from __future__ import annotations

from datetime import date
from typing import Callable, Iterable, Optional, Union

from .config import EngineConfig
from .dates import today_iso
from .domain.repositories.status import StatusStore
from .logging_config import get_logger
from .models.habit import Habit, Schedule
from .models.status import StreakLevel
from .models.summary import ActiveHabit, DaySummary
from .services import goals, recurrence, schedule, streaks, summary
from .services.cache import EngineCache
from .services.context import EngineContext

logger = get_logger(__name__)

HabitRef = Union[Habit, str]


class HabitEngine:
    """Memoized answers to "is it due", "what's the streak" and "what's the goal".

    The engine never notices changes by itself. Whoever edits a habit's
    schedule or a daily status must call :meth:`invalidate_habit`,
    :meth:`invalidate_date`, :meth:`invalidate_date_change` or
    :meth:`invalidate_all` afterwards. The caches are not thread-safe; keep an
    engine confined to one thread.
    """

    def __init__(
        self,
        habits: Iterable[Habit],
        store: StatusStore,
        *,
        config: Optional[EngineConfig] = None,
        cache: Optional[EngineCache] = None,
        today: Optional[Callable[[], str]] = None,
    ) -> None:
        cfg = config or EngineConfig()
        self.ctx = EngineContext(
            store=store,
            config=cfg,
            cache=cache or EngineCache.from_config(cfg),
            today=today or today_iso,
        )
        self.ctx.replace_habits(habits)

    @property
    def habits(self) -> tuple[Habit, ...]:
        return self.ctx.habits

    @property
    def cache(self) -> EngineCache:
        return self.ctx.cache

    def get_habit(self, habit_id: str) -> Optional[Habit]:
        return self.ctx.habits_by_id.get(habit_id)

    def set_habits(self, habits: Iterable[Habit]) -> None:
        """Replace the habit list (after import/merge/restore) and start cold."""

        self.ctx.replace_habits(habits)
        self.ctx.cache.invalidate_all()

    def _habit(self, ref: HabitRef) -> Optional[Habit]:
        if isinstance(ref, Habit):
            return ref
        habit = self.ctx.habits_by_id.get(ref)
        if habit is None:
            logger.warning("Unknown habit id", extra={"habit_id": ref})
        return habit

    # Queries
    def resolve_schedule(self, habit: HabitRef, date_iso: str) -> Optional[Schedule]:
        resolved = self._habit(habit)
        return schedule.resolve_schedule(self.ctx, resolved, date_iso) if resolved else None

    def effective_times(self, habit: HabitRef, date_iso: str) -> tuple[str, ...]:
        resolved = self._habit(habit)
        return schedule.effective_times(self.ctx, resolved, date_iso) if resolved else ()

    def is_due(self, habit: HabitRef, date_iso: str, parsed: Optional[date] = None) -> bool:
        resolved = self._habit(habit)
        return recurrence.is_due(self.ctx, resolved, date_iso, parsed) if resolved else False

    def is_fully_done(self, habit: HabitRef, date_iso: str) -> bool:
        resolved = self._habit(habit)
        return streaks.is_fully_done(self.ctx, resolved, date_iso) if resolved else False

    def streak(self, habit: HabitRef, end_date_iso: str) -> int:
        resolved = self._habit(habit)
        return streaks.streak(self.ctx, resolved, end_date_iso) if resolved else 0

    def longest_streak(self, habit: HabitRef, end_date_iso: str) -> int:
        resolved = self._habit(habit)
        return streaks.longest_streak(self.ctx, resolved, end_date_iso) if resolved else 0

    def streak_level(self, habit: HabitRef, date_iso: str) -> StreakLevel:
        resolved = self._habit(habit)
        return streaks.streak_level(self.ctx, resolved, date_iso) if resolved else StreakLevel.NONE

    def milestone_reached(self, habit: HabitRef, date_iso: str) -> bool:
        resolved = self._habit(habit)
        return streaks.milestone_reached(self.ctx, resolved, date_iso) if resolved else False

    def can_graduate(self, habit: HabitRef, date_iso: str) -> bool:
        resolved = self._habit(habit)
        return streaks.can_graduate(self.ctx, resolved, date_iso) if resolved else False

    def goal_for(self, habit: HabitRef, date_iso: str, time: str) -> int:
        resolved = self._habit(habit)
        return goals.smart_goal(self.ctx, resolved, date_iso, time) if resolved else 1

    def current_goal(self, habit: HabitRef, date_iso: str, time: str) -> int:
        resolved = self._habit(habit)
        return goals.current_goal(self.ctx, resolved, date_iso, time) if resolved else 1

    def active_habits(self, date_iso: str) -> tuple[ActiveHabit, ...]:
        return summary.active_habits(self.ctx, date_iso)

    def summarize(self, date_iso: str) -> DaySummary:
        return summary.summarize(self.ctx, date_iso)

    # Invalidation
    def invalidate_habit(self, habit_id: str) -> None:
        self.ctx.cache.invalidate_habit(habit_id)

    def invalidate_date(self, date_iso: str) -> None:
        self.ctx.cache.invalidate_date(date_iso)

    def invalidate_date_change(self, date_iso: str, habit_ids: Iterable[str]) -> None:
        self.ctx.cache.invalidate_date_change(date_iso, habit_ids)

    def invalidate_all(self) -> None:
        self.ctx.cache.invalidate_all()

    def cache_stats(self) -> dict[str, int]:
        return self.ctx.cache.stats()
