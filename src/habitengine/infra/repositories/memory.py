"""Dictionary-backed status store."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from ...models.status import EMPTY_DAILY_INFO, DailyInfo, InstanceInfo, StatusCode


class InMemoryStatusStore:
    """Status store kept entirely in process memory.

    Writes here do not touch any engine cache; whoever calls the setters is
    expected to invalidate the engine afterwards.
    """

    def __init__(self) -> None:
        self._statuses: dict[tuple[str, str, str], StatusCode] = {}
        self._instances: dict[str, dict[str, dict[str, InstanceInfo]]] = {}
        self._day_schedules: dict[str, dict[str, tuple[str, ...]]] = {}
        self._info_cache: dict[str, Mapping[str, DailyInfo]] = {}

    def get_status(self, habit_id: str, date_iso: str, time: str) -> StatusCode:
        return self._statuses.get((habit_id, date_iso, time), StatusCode.PENDING)

    def get_daily_info(self, date_iso: str) -> Mapping[str, DailyInfo]:
        cached = self._info_cache.get(date_iso)
        if cached is not None:
            return cached
        instances = self._instances.get(date_iso, {})
        schedules = self._day_schedules.get(date_iso, {})
        habit_ids = set(instances) | set(schedules)
        if not habit_ids:
            return EMPTY_DAILY_INFO
        info = {
            habit_id: DailyInfo(
                instances=instances.get(habit_id, {}),
                daily_schedule=schedules.get(habit_id),
            )
            for habit_id in habit_ids
        }
        self._info_cache[date_iso] = info
        return info

    # Mutators
    def set_status(self, habit_id: str, date_iso: str, time: str, status: StatusCode) -> None:
        self._statuses[(habit_id, date_iso, time)] = StatusCode(status)

    def mark_days(
        self,
        habit_id: str,
        dates: Iterable[str],
        time: str,
        status: StatusCode = StatusCode.DONE,
    ) -> None:
        """Bulk helper: give every date in ``dates`` the same status."""

        for date_iso in dates:
            self.set_status(habit_id, date_iso, time, status)

    def set_goal_override(
        self, habit_id: str, date_iso: str, time: str, goal_override: Optional[int]
    ) -> None:
        current = self._instance(habit_id, date_iso, time)
        self._put_instance(habit_id, date_iso, time, InstanceInfo(goal_override, current.note))

    def set_note(self, habit_id: str, date_iso: str, time: str, note: str) -> None:
        current = self._instance(habit_id, date_iso, time)
        self._put_instance(habit_id, date_iso, time, InstanceInfo(current.goal_override, note))

    def set_daily_schedule(
        self, habit_id: str, date_iso: str, times: Optional[Iterable[str]]
    ) -> None:
        day = self._day_schedules.setdefault(date_iso, {})
        if times is None:
            day.pop(habit_id, None)
        else:
            day[habit_id] = tuple(times)
        self._info_cache.pop(date_iso, None)

    def clear_day(self, habit_id: str, date_iso: str) -> None:
        """Forget everything recorded for a habit on one date."""

        for key in [k for k in self._statuses if k[0] == habit_id and k[1] == date_iso]:
            del self._statuses[key]
        self._instances.get(date_iso, {}).pop(habit_id, None)
        self._day_schedules.get(date_iso, {}).pop(habit_id, None)
        self._info_cache.pop(date_iso, None)

    def _instance(self, habit_id: str, date_iso: str, time: str) -> InstanceInfo:
        return self._instances.get(date_iso, {}).get(habit_id, {}).get(time, InstanceInfo())

    def _put_instance(self, habit_id: str, date_iso: str, time: str, info: InstanceInfo) -> None:
        self._instances.setdefault(date_iso, {}).setdefault(habit_id, {})[time] = info
        self._info_cache.pop(date_iso, None)
