"""Shared state threaded through the engine's service functions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Mapping, Optional

from ..config import EngineConfig
from ..dates import today_iso
from ..domain.repositories.status import StatusStore
from ..models.habit import Habit
from ..models.status import EMPTY_DAILY_INFO, DailyInfo, StatusCode
from .cache import EngineCache


@dataclass(slots=True)
class EngineContext:
    """Habits, the status store, the caches and settings for one engine."""

    store: StatusStore
    config: EngineConfig
    cache: EngineCache
    today: Callable[[], str] = today_iso
    habits: tuple[Habit, ...] = ()
    habits_by_id: dict[str, Habit] = field(default_factory=dict)
    earliest_created_on: Optional[str] = None

    def replace_habits(self, habits: Iterable[Habit]) -> None:
        self.habits = tuple(habits)
        self.habits_by_id = {habit.id: habit for habit in self.habits}
        self.earliest_created_on = min((h.created_on for h in self.habits), default=None)

    def status(self, habit_id: str, date_iso: str, time: str) -> StatusCode:
        return StatusCode(self.store.get_status(habit_id, date_iso, time))

    def daily_info(self, date_iso: str) -> Mapping[str, DailyInfo]:
        return self.store.get_daily_info(date_iso) or EMPTY_DAILY_INFO

    def habit_daily_info(self, habit_id: str, date_iso: str) -> Optional[DailyInfo]:
        return self.daily_info(date_iso).get(habit_id)
