"""Habit and schedule-history data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

TIMES_OF_DAY: tuple[str, ...] = ("Morning", "Afternoon", "Evening")


class IntervalUnit(str, Enum):
    DAYS = "days"
    WEEKS = "weeks"


@dataclass(frozen=True, slots=True)
class Daily:
    """Due every calendar day."""


@dataclass(frozen=True, slots=True)
class SpecificDaysOfWeek:
    """Due on a fixed set of weekdays (0 = Sunday ... 6 = Saturday)."""

    days: frozenset[int]

    def __post_init__(self) -> None:
        days = frozenset(self.days)
        if any(d < 0 or d > 6 for d in days):
            raise ValueError(f"Weekdays must be within 0..6, got {sorted(days)}")
        object.__setattr__(self, "days", days)


@dataclass(frozen=True, slots=True)
class Interval:
    """Due every ``amount`` days or weeks counted from an anchor date."""

    unit: IntervalUnit
    amount: int
    anchor_date: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "unit", IntervalUnit(self.unit))
        if self.amount < 1:
            raise ValueError("Interval amount must be a positive integer.")


Frequency = Union[Daily, SpecificDaysOfWeek, Interval]


@dataclass(frozen=True, slots=True)
class CheckGoal:
    """Plain done / not-done habit."""


@dataclass(frozen=True, slots=True)
class QuantityGoal:
    """Numeric target such as pages or minutes."""

    total: Optional[int] = None
    unit: str = ""


Goal = Union[CheckGoal, QuantityGoal]

_FREQUENCY_TYPES = (Daily, SpecificDaysOfWeek, Interval)
_GOAL_TYPES = (CheckGoal, QuantityGoal)


@dataclass(frozen=True, slots=True)
class Schedule:
    """One version of a habit's recurrence/goal configuration.

    ``end_date`` is exclusive; a schedule without one runs indefinitely.
    """

    start_date: str
    end_date: Optional[str] = None
    times: tuple[str, ...] = TIMES_OF_DAY[:1]
    frequency: Frequency = field(default_factory=Daily)
    goal: Goal = field(default_factory=CheckGoal)
    name: str = ""
    anchor_date: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "times", tuple(self.times))
        if not isinstance(self.frequency, _FREQUENCY_TYPES):
            raise ValueError(f"Unsupported schedule frequency: {self.frequency!r}")
        if not isinstance(self.goal, _GOAL_TYPES):
            raise ValueError(f"Unsupported schedule goal: {self.goal!r}")
        if self.end_date is not None and self.end_date <= self.start_date:
            raise ValueError(
                f"Schedule end_date {self.end_date} must come after start_date {self.start_date}"
            )

    @property
    def quantity_total(self) -> Optional[int]:
        if isinstance(self.goal, QuantityGoal) and self.goal.total:
            return self.goal.total
        return None


@dataclass(frozen=True, slots=True)
class Habit:
    """A tracked habit together with its ordered (oldest first) schedule history."""

    id: str
    created_on: str
    schedule_history: tuple[Schedule, ...] = ()
    graduated_on: Optional[str] = None
    deleted_on: Optional[str] = None
    name: str = ""

    def __post_init__(self) -> None:
        history = tuple(self.schedule_history)
        for previous, current in zip(history, history[1:]):
            if current.start_date < previous.start_date:
                raise ValueError(f"Schedule history for habit {self.id} is not ordered by start_date")
            if previous.end_date is not None and current.start_date < previous.end_date:
                raise ValueError(f"Schedule history for habit {self.id} has overlapping entries")
        object.__setattr__(self, "schedule_history", history)

    def is_retired_on(self, date_iso: str) -> bool:
        """True once the habit is graduated or deleted as of ``date_iso``."""

        if self.deleted_on is not None and date_iso >= self.deleted_on:
            return True
        return self.graduated_on is not None and date_iso >= self.graduated_on


__all__ = [
    "CheckGoal",
    "Daily",
    "Frequency",
    "Goal",
    "Habit",
    "Interval",
    "IntervalUnit",
    "QuantityGoal",
    "Schedule",
    "SpecificDaysOfWeek",
    "TIMES_OF_DAY",
]
