"""Memoization tables behind every engine query.

Each table is flushed wholesale once it grows past its ceiling. Query locality
during a redraw is high, so losing a whole generation is cheap and keeps the
bookkeeping to a single dict.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Generic, Hashable, Optional, TypeVar

from ..logging_config import get_logger
from ..models.habit import Schedule
from ..models.summary import ActiveHabit, DaySummary

logger = get_logger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


# Distinguishes "not cached" from a cached None.
MISSING: Any = _Missing()


class MemoTable(Generic[K, V]):
    """Bounded dict that clears itself instead of evicting entry by entry."""

    __slots__ = ("name", "max_size", "_data", "flushes")

    def __init__(self, name: str, max_size: int) -> None:
        self.name = name
        self.max_size = max_size
        self._data: dict[K, V] = {}
        self.flushes = 0

    def get(self, key: K, default: Any = MISSING) -> Any:
        return self._data.get(key, default)

    def put(self, key: K, value: V) -> V:
        if len(self._data) > self.max_size:
            logger.debug(
                "Cache table flushed",
                extra={"table": self.name, "entries": len(self._data)},
            )
            self._data.clear()
            self.flushes += 1
        self._data[key] = value
        return value

    def discard(self, key: K) -> None:
        self._data.pop(key, None)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class HabitScopedTable(Generic[V]):
    """Two-level table: habit id, then ISO date."""

    def __init__(self, name: str, max_size: int) -> None:
        self.name = name
        self.max_size = max_size
        self._tables: dict[str, MemoTable[str, V]] = {}

    def table_for(self, habit_id: str) -> MemoTable[str, V]:
        table = self._tables.get(habit_id)
        if table is None:
            table = MemoTable(f"{self.name}[{habit_id}]", self.max_size)
            self._tables[habit_id] = table
        return table

    def peek(self, habit_id: str, date_iso: str) -> Any:
        table = self._tables.get(habit_id)
        if table is None:
            return MISSING
        return table.get(date_iso)

    def drop_habit(self, habit_id: str) -> None:
        self._tables.pop(habit_id, None)

    def drop_date(self, date_iso: str) -> None:
        for table in self._tables.values():
            table.discard(date_iso)

    def clear(self) -> None:
        self._tables.clear()

    def __len__(self) -> int:
        return sum(len(t) for t in self._tables.values())


class EngineCache:
    """The engine's private memo tables plus the invalidation primitives.

    Only the engine writes here. Components that change habits or statuses call
    one of the ``invalidate_*`` methods; they never put values in directly.
    """

    def __init__(self, *, max_size: int = 750, anchor_max_size: int = 365) -> None:
        self.max_size = max_size
        self.schedules: HabitScopedTable[Optional[Schedule]] = HabitScopedTable("schedule", max_size)
        self.appearances: HabitScopedTable[bool] = HabitScopedTable("appearance", max_size)
        self.streaks: HabitScopedTable[int] = HabitScopedTable("streak", max_size)
        self.day_summaries: MemoTable[str, DaySummary] = MemoTable("day_summary", max_size)
        self.active_habits: MemoTable[str, tuple[ActiveHabit, ...]] = MemoTable(
            "active_habits", max_size
        )
        self.anchor_dates: MemoTable[str, date] = MemoTable("anchor_date", anchor_max_size)

    @classmethod
    def from_config(cls, config) -> "EngineCache":
        return cls(max_size=config.MAX_CACHE_SIZE, anchor_max_size=config.ANCHOR_CACHE_SIZE)

    def invalidate_habit(self, habit_id: str) -> None:
        """Forget schedule, appearance and streak results for one habit."""

        self.schedules.drop_habit(habit_id)
        self.appearances.drop_habit(habit_id)
        self.streaks.drop_habit(habit_id)
        logger.debug("Habit caches invalidated", extra={"habit_id": habit_id})

    def invalidate_date(self, date_iso: str) -> None:
        """Forget the day summary and active-habit list for one date."""

        self.day_summaries.discard(date_iso)
        self.active_habits.discard(date_iso)
        logger.debug("Date caches invalidated", extra={"date": date_iso})

    def invalidate_date_change(self, date_iso: str, habit_ids) -> None:
        """A status was toggled on ``date_iso`` for ``habit_ids``.

        Drops that day's summary and active list plus the affected habits'
        streaks, which depend on every day after the toggled one.
        """

        self.invalidate_date(date_iso)
        for habit_id in habit_ids:
            self.streaks.drop_habit(habit_id)

    def invalidate_all(self) -> None:
        self.schedules.clear()
        self.appearances.clear()
        self.streaks.clear()
        self.day_summaries.clear()
        self.active_habits.clear()
        self.anchor_dates.clear()
        logger.info("All engine caches cleared")

    def stats(self) -> dict[str, int]:
        return {
            "schedules": len(self.schedules),
            "appearances": len(self.appearances),
            "streaks": len(self.streaks),
            "day_summaries": len(self.day_summaries),
            "active_habits": len(self.active_habits),
            "anchor_dates": len(self.anchor_dates),
        }
