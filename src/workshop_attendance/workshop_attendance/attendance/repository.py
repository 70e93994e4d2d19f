from __future__ import annotations

from datetime import date, datetime
from typing import Protocol, Sequence

from .model import AttendanceDay, CheckEvent, GeoCheckIn


class AttendanceRepository(Protocol):
    def get_month_days(self, *, year: int, month: int) -> Sequence[AttendanceDay]:
        """One row per (staff, day) for every day of the month, unordered."""

        raise NotImplementedError

    def get_checkin_events(self, *, start_utc: datetime, end_utc: datetime) -> Sequence[GeoCheckIn]:
        raise NotImplementedError

    def get_events_for_day(self, *, day: date) -> Sequence[CheckEvent]:
        raise NotImplementedError
