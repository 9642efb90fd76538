"""Persisted per-day habit state used by the SQLModel status store."""

from __future__ import annotations

from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class HabitInstanceRecord(SQLModel, table=True):
    """Status, goal override and note for one habit/date/time-slot."""

    __tablename__: ClassVar[str] = "habit_instance"

    habit_id: str = Field(primary_key=True, max_length=64)
    occurred_on: str = Field(primary_key=True, max_length=10, index=True)
    time_slot: str = Field(primary_key=True, max_length=32)
    status: int = Field(default=0, nullable=False)
    goal_override: Optional[int] = Field(default=None)
    note: str = Field(default="", max_length=500)


class HabitDayScheduleRecord(SQLModel, table=True):
    """Ad-hoc time-slot list replacing a habit's recurring times for one date."""

    __tablename__: ClassVar[str] = "habit_day_schedule"

    habit_id: str = Field(primary_key=True, max_length=64)
    occurred_on: str = Field(primary_key=True, max_length=10, index=True)
    times: str = Field(default="", max_length=255)

    def time_slots(self) -> tuple[str, ...]:
        return tuple(t for t in self.times.split(",") if t)
