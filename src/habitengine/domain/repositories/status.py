"""Status store protocol."""

from __future__ import annotations

from typing import Mapping, Protocol

from ...models.status import DailyInfo, StatusCode


class StatusStore(Protocol):
    """Read side of the per-day habit state the engine consumes."""

    def get_status(self, habit_id: str, date_iso: str, time: str) -> StatusCode:
        """Status of one habit/date/time-slot; PENDING when nothing was recorded."""
        ...

    def get_daily_info(self, date_iso: str) -> Mapping[str, DailyInfo]:
        """Goal overrides, notes and ad-hoc schedules for a date, keyed by habit id."""
        ...
