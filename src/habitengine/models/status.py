"""Per-day status values as reported by a status store."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping, Optional


class StatusCode(IntEnum):
    """Completion state of one habit/date/time-slot instance."""

    PENDING = 0
    DONE = 1
    DEFERRED = 2
    DONE_PLUS = 3
    NOT_APPLICABLE = 4

    @property
    def is_completed(self) -> bool:
        return self in (StatusCode.DONE, StatusCode.DONE_PLUS)


class StreakLevel(IntEnum):
    """How established a habit is, judged by its current streak."""

    NONE = 0
    SEMI_CONSOLIDATED = 1
    CONSOLIDATED = 2


@dataclass(frozen=True, slots=True)
class InstanceInfo:
    """Ad-hoc data recorded for a single time-slot instance."""

    goal_override: Optional[int] = None
    note: str = ""


@dataclass(frozen=True, slots=True)
class DailyInfo:
    """Everything a store knows about one habit on one date besides statuses."""

    instances: Mapping[str, InstanceInfo] = field(default_factory=dict)
    daily_schedule: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "instances", MappingProxyType(dict(self.instances)))
        if self.daily_schedule is not None:
            object.__setattr__(self, "daily_schedule", tuple(self.daily_schedule))

    def goal_override(self, time: str) -> Optional[int]:
        instance = self.instances.get(time)
        return instance.goal_override if instance else None


EMPTY_DAILY_INFO: Mapping[str, DailyInfo] = MappingProxyType({})

__all__ = ["DailyInfo", "EMPTY_DAILY_INFO", "InstanceInfo", "StatusCode", "StreakLevel"]
