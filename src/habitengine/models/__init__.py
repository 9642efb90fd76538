"""Domain types and SQLModel table exports."""

from .habit import (
    TIMES_OF_DAY,
    CheckGoal,
    Daily,
    Frequency,
    Goal,
    Habit,
    Interval,
    IntervalUnit,
    QuantityGoal,
    Schedule,
    SpecificDaysOfWeek,
)
from .instance import HabitDayScheduleRecord, HabitInstanceRecord
from .status import EMPTY_DAILY_INFO, DailyInfo, InstanceInfo, StatusCode, StreakLevel
from .summary import ActiveHabit, DaySummary

__all__ = [
    "ActiveHabit",
    "CheckGoal",
    "Daily",
    "DailyInfo",
    "DaySummary",
    "EMPTY_DAILY_INFO",
    "Frequency",
    "Goal",
    "Habit",
    "HabitDayScheduleRecord",
    "HabitInstanceRecord",
    "InstanceInfo",
    "Interval",
    "IntervalUnit",
    "QuantityGoal",
    "Schedule",
    "SpecificDaysOfWeek",
    "StatusCode",
    "StreakLevel",
    "TIMES_OF_DAY",
]
