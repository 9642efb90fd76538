"""Derived, never-persisted aggregates."""

from __future__ import annotations

from dataclasses import dataclass

from .habit import Habit


@dataclass(frozen=True, slots=True)
class ActiveHabit:
    """A habit that is due on a date together with the time-slots it is due in."""

    habit: Habit
    times: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class DaySummary:
    """Totals for one calendar date across every habit."""

    total: int = 0
    completed: int = 0
    snoozed: int = 0
    pending: int = 0
    completed_percent: float = 0.0
    snoozed_percent: float = 0.0
    show_plus_indicator: bool = False

    @classmethod
    def empty(cls) -> "DaySummary":
        return cls()

    @classmethod
    def from_counts(
        cls, *, total: int, completed: int, snoozed: int, pending: int, show_plus: bool = False
    ) -> "DaySummary":
        return cls(
            total=total,
            completed=completed,
            snoozed=snoozed,
            pending=pending,
            completed_percent=(completed / total) * 100 if total else 0.0,
            snoozed_percent=(snoozed / total) * 100 if total else 0.0,
            show_plus_indicator=show_plus,
        )

    @property
    def is_perfect(self) -> bool:
        return self.total > 0 and self.completed == self.total
