from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Optional, Sequence
from zoneinfo import ZoneInfo

from ..attendance.calculator.base import LatenessCalculator
from ..attendance.calculator.cutoff_calculator import CutoffLatenessCalculator
from ..attendance.merger import first_checkins_by_day, merge_coordinates
from ..attendance.model import AttendanceDay, ReportDay, StaffMonthGroup
from ..attendance.repository import AttendanceRepository
from ..attendance.status import SUNDAY, PrecedenceStatusDeriver, StatusDeriver, StatusMismatch, find_status_mismatches
from ..common.datetime_utils import format_clock, local_today, month_title, month_utc_bounds
from ..common.validators import require_month, require_year
from ..core.constants import DEFAULT_LATE_CUTOFF, PENDING_PLACEHOLDER, PRINT_PAGE_SIZE
from ..core.enums import DayStatus
from ..staff.repository import StaffRepository
from .grouping import group_by_staff
from .pagination import paginate

logger = logging.getLogger(__name__)

STATUS_LABELS = {
    DayStatus.PRESENT: "Present",
    DayStatus.ABSENT: "Absent",
    DayStatus.OFFDAY: "Offday",
    DayStatus.MC: "MC",
    DayStatus.PENDING: PENDING_PLACEHOLDER,
}

CSV_FIELDS = [
    "staff_email",
    "staff_name",
    "day",
    "check_in",
    "check_out",
    "late_minutes",
    "status",
    "distance_m",
    "coords",
]


@dataclass(frozen=True)
class MonthlyReport:
    year: int
    month: int
    title: str
    today: date
    groups: tuple[StaffMonthGroup, ...]
    pages: tuple[tuple[StaffMonthGroup, ...], ...]
    mismatches: tuple[StatusMismatch, ...] = ()


def row_view(row: ReportDay) -> dict[str, Any]:
    """Display strings for one report row.

    Times are hidden on PENDING days and on every Sunday, overridden or not;
    lateness only shows on PRESENT days.
    """

    d: AttendanceDay = row.attendance
    blank = PENDING_PLACEHOLDER
    hide_times = row.status == DayStatus.PENDING or d.day.weekday() == SUNDAY

    if hide_times:
        check_in = check_out = blank
    else:
        check_in = format_clock(d.check_in) or d.check_in_raw or blank
        check_out = format_clock(d.check_out) or blank

    geo = d.geo
    distance = f"{geo.distance_m:g} m" if geo and geo.distance_m is not None else blank
    coords = f"{geo.lat:.6f}, {geo.lon:.6f}" if geo and geo.has_coords else blank

    return {
        "day": d.day.isoformat(),
        "check_in": check_in,
        "check_out": check_out,
        "late_minutes": row.late_minutes if row.late_minutes is not None else blank,
        "status": STATUS_LABELS[row.status],
        "status_code": row.status.value,
        "distance_m": distance,
        "coords": coords,
        "map_url": f"https://www.google.com/maps?q={geo.lat},{geo.lon}" if geo and geo.has_coords else None,
    }


def _matches(day: AttendanceDay, needle: str, roster_names: dict[str, str]) -> bool:
    hay = f"{day.staff_name or ''} {roster_names.get(day.staff_email.lower(), '')} {day.staff_email}"
    return needle in hay.casefold()


class MonthlyReportService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        staff: StaffRepository,
        *,
        tz: ZoneInfo,
        deriver: Optional[StatusDeriver] = None,
        calculator: Optional[LatenessCalculator] = None,
        page_size: int = PRINT_PAGE_SIZE,
    ):
        self._attendance = attendance
        self._staff = staff
        self._tz = tz
        self._deriver = deriver or PrecedenceStatusDeriver()
        self._calculator = calculator or CutoffLatenessCalculator(DEFAULT_LATE_CUTOFF)
        self._page_size = int(page_size)

    def build_month_report(
        self,
        *,
        year: Any,
        month: Any,
        today: Optional[date] = None,
        query: Optional[str] = None,
    ) -> MonthlyReport:
        year = require_year(year)
        month = require_month(month)
        today = today or local_today(self._tz)

        days = self._attendance.get_month_days(year=year, month=month)
        start_utc, end_utc = month_utc_bounds(year, month, self._tz)
        checkins = self._attendance.get_checkin_events(start_utc=start_utc, end_utc=end_utc)
        roster_names = {s.email.lower(): s.name for s in self._staff.list_roster()}

        days = merge_coordinates(days, first_checkins_by_day(checkins))

        needle = (query or "").strip().casefold()
        if needle:
            days = [d for d in days if _matches(d, needle, roster_names)]

        mismatches = find_status_mismatches(days, self._deriver, today=today)
        for m in mismatches:
            logger.warning(
                "status mismatch for %s on %s: backend=%s derived=%s",
                m.staff_email,
                m.day.isoformat(),
                m.backend_status,
                m.derived.value,
            )

        groups = group_by_staff(
            days,
            deriver=self._deriver,
            calculator=self._calculator,
            today=today,
            roster_names=roster_names,
        )
        pages = paginate(groups, self._page_size)
        logger.info("report %04d-%02d: %d staff, %d print pages", year, month, len(groups), len(pages))

        return MonthlyReport(
            year=year,
            month=month,
            title=month_title(year, month),
            today=today,
            groups=tuple(groups),
            pages=tuple(pages),
            mismatches=tuple(mismatches),
        )

    def export_rows(self, report: MonthlyReport) -> Sequence[dict]:
        out: list[dict] = []
        for g in report.groups:
            for r in g.rows:
                view = row_view(r)
                out.append(
                    {
                        "staff_email": g.staff_email,
                        "staff_name": g.staff_name,
                        "day": view["day"],
                        "check_in": view["check_in"],
                        "check_out": view["check_out"],
                        "late_minutes": view["late_minutes"],
                        "status": view["status"],
                        "distance_m": view["distance_m"],
                        "coords": view["coords"],
                    }
                )
        return out
