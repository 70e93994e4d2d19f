from __future__ import annotations

from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_today
from ..core.enums import CheckAction
from .model import CheckEvent
from .repository import AttendanceRepository


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, *, tz: ZoneInfo):
        self._attendance = attendance
        self._tz = tz

    def list_today_events(self, *, today: Optional[date] = None) -> list[dict]:
        """Check-in/out events of the local day, newest first, formatted for the UI."""
        today = today or local_today(self._tz)
        events = sorted(self._attendance.get_events_for_day(day=today), key=lambda e: e.timestamp, reverse=True)
        return [self._to_ui(e) for e in events]

    def _to_ui(self, e: CheckEvent) -> dict:
        has_coords = e.lat is not None and e.lon is not None
        return {
            "time": e.timestamp.astimezone(self._tz).strftime("%Y-%m-%d %H:%M:%S"),
            "staff": e.staff_name or e.staff_email,
            "staff_email": e.staff_email,
            "action": e.action.value,
            "distance_m": f"{e.distance_m:g}" if e.distance_m is not None else "-",
            "map_url": f"https://maps.google.com/?q={e.lat},{e.lon}" if has_coords else None,
            "css_class": "bg-success" if e.action == CheckAction.CHECK_IN else "bg-secondary",
        }
