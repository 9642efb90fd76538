"""Habit scheduling, streak and smart-goal engine."""

from __future__ import annotations

from .config import EngineConfig
from .dates import InvalidDateError
from .engine import HabitEngine
from .infra.repositories.memory import InMemoryStatusStore
from .models import (
    CheckGoal,
    Daily,
    DaySummary,
    Habit,
    Interval,
    IntervalUnit,
    QuantityGoal,
    Schedule,
    SpecificDaysOfWeek,
    StatusCode,
    StreakLevel,
)
from .services.cache import EngineCache

__all__ = [
    "CheckGoal",
    "Daily",
    "DaySummary",
    "EngineCache",
    "EngineConfig",
    "Habit",
    "HabitEngine",
    "InMemoryStatusStore",
    "Interval",
    "IntervalUnit",
    "InvalidDateError",
    "QuantityGoal",
    "Schedule",
    "SpecificDaysOfWeek",
    "StatusCode",
    "StreakLevel",
]
