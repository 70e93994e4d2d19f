from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import CheckAction, DayOverride, DayStatus


@dataclass(frozen=True)
class GeoPoint:
    """Where a check-in was made; display/audit only."""

    lat: Optional[float]
    lon: Optional[float]
    distance_m: Optional[float] = None

    @property
    def has_coords(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class AttendanceDay:
    """One (staff, calendar day) observation as read from the backend."""

    staff_email: str
    staff_name: Optional[str]
    day: date
    check_in: Optional[time] = None
    check_out: Optional[time] = None
    check_in_raw: Optional[str] = None
    late_minutes: Optional[int] = None
    override: Optional[DayOverride] = None
    backend_status: Optional[str] = None
    geo: Optional[GeoPoint] = None

    @property
    def has_check_in(self) -> bool:
        # A malformed check-in still means the staff checked in.
        return self.check_in is not None or self.check_in_raw is not None


@dataclass(frozen=True)
class GeoCheckIn:
    staff_email: str
    timestamp: datetime
    day: date
    lat: Optional[float]
    lon: Optional[float]
    distance_m: Optional[float] = None


@dataclass(frozen=True)
class CheckEvent:
    """Raw check-in/out event row."""

    staff_email: str
    staff_name: Optional[str]
    action: CheckAction
    timestamp: datetime
    lat: Optional[float] = None
    lon: Optional[float] = None
    distance_m: Optional[float] = None


@dataclass(frozen=True)
class ReportDay:
    """Read-model for one report row (derived status + lateness)."""

    attendance: AttendanceDay
    status: DayStatus
    late_minutes: Optional[int]

    @property
    def day(self) -> date:
        return self.attendance.day


@dataclass(frozen=True)
class StaffMonthGroup:
    staff_email: str
    staff_name: str
    rows: tuple[ReportDay, ...]
    late_total_minutes: int
    absent_days: int
