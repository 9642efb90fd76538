"""SQLModel implementation of the status store."""

from __future__ import annotations

from typing import Callable, Iterable, Mapping, Optional

from sqlmodel import Session, select

from ...models.instance import HabitDayScheduleRecord, HabitInstanceRecord
from ...models.status import EMPTY_DAILY_INFO, DailyInfo, InstanceInfo, StatusCode


class SQLModelStatusStore:
    """SQLModel-based status store.

    Reads hit the database on every call; the engine's own caches are what keep
    redraws cheap, so nothing is memoized here.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        """Initialize with a session factory."""
        self.session_factory = session_factory

    def get_status(self, habit_id: str, date_iso: str, time: str) -> StatusCode:
        with self.session_factory() as session:
            record = session.get(HabitInstanceRecord, (habit_id, date_iso, time))
            if record is None:
                return StatusCode.PENDING
            return StatusCode(record.status)

    def get_daily_info(self, date_iso: str) -> Mapping[str, DailyInfo]:
        with self.session_factory() as session:
            instances = session.exec(
                select(HabitInstanceRecord).where(HabitInstanceRecord.occurred_on == date_iso)
            ).all()
            schedules = session.exec(
                select(HabitDayScheduleRecord).where(HabitDayScheduleRecord.occurred_on == date_iso)
            ).all()

            by_habit: dict[str, dict[str, InstanceInfo]] = {}
            for row in instances:
                if row.goal_override is None and not row.note:
                    continue
                by_habit.setdefault(row.habit_id, {})[row.time_slot] = InstanceInfo(
                    goal_override=row.goal_override, note=row.note
                )
            day_schedules = {row.habit_id: row.time_slots() for row in schedules}

        habit_ids = set(by_habit) | set(day_schedules)
        if not habit_ids:
            return EMPTY_DAILY_INFO
        return {
            habit_id: DailyInfo(
                instances=by_habit.get(habit_id, {}),
                daily_schedule=day_schedules.get(habit_id),
            )
            for habit_id in habit_ids
        }

    # Mutators
    def set_status(self, habit_id: str, date_iso: str, time: str, status: StatusCode) -> None:
        with self.session_factory() as session:
            record = self._get_or_new(session, habit_id, date_iso, time)
            record.status = int(StatusCode(status))
            session.add(record)
            session.commit()

    def set_goal_override(
        self, habit_id: str, date_iso: str, time: str, goal_override: Optional[int]
    ) -> None:
        with self.session_factory() as session:
            record = self._get_or_new(session, habit_id, date_iso, time)
            record.goal_override = goal_override
            session.add(record)
            session.commit()

    def set_note(self, habit_id: str, date_iso: str, time: str, note: str) -> None:
        with self.session_factory() as session:
            record = self._get_or_new(session, habit_id, date_iso, time)
            record.note = note
            session.add(record)
            session.commit()

    def set_daily_schedule(
        self, habit_id: str, date_iso: str, times: Optional[Iterable[str]]
    ) -> None:
        with self.session_factory() as session:
            existing = session.get(HabitDayScheduleRecord, (habit_id, date_iso))
            if times is None:
                if existing:
                    session.delete(existing)
                    session.commit()
                return
            record = existing or HabitDayScheduleRecord(habit_id=habit_id, occurred_on=date_iso)
            record.times = ",".join(times)
            session.add(record)
            session.commit()

    def clear_day(self, habit_id: str, date_iso: str) -> None:
        """Delete every record for a habit on one date."""
        with self.session_factory() as session:
            rows = session.exec(
                select(HabitInstanceRecord)
                .where(HabitInstanceRecord.habit_id == habit_id)
                .where(HabitInstanceRecord.occurred_on == date_iso)
            ).all()
            for row in rows:
                session.delete(row)
            schedule = session.get(HabitDayScheduleRecord, (habit_id, date_iso))
            if schedule:
                session.delete(schedule)
            session.commit()

    @staticmethod
    def _get_or_new(session: Session, habit_id: str, date_iso: str, time: str) -> HabitInstanceRecord:
        record = session.get(HabitInstanceRecord, (habit_id, date_iso, time))
        if record is None:
            record = HabitInstanceRecord(habit_id=habit_id, occurred_on=date_iso, time_slot=time)
        return record
