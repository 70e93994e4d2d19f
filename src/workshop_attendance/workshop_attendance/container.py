from __future__ import annotations

from dataclasses import dataclass
from zoneinfo import ZoneInfo

from .attendance.calculator.cutoff_calculator import CutoffLatenessCalculator
from .attendance.events_attendance_repository import EventsAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.rest_attendance_repository import RestAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.status import PrecedenceStatusDeriver
from .backend.connection import BackendConfig, BackendConnection
from .common.datetime_utils import resolve_timezone
from .core.constants import DEFAULT_BACKEND_TIMEOUT_SECONDS, DEFAULT_LATE_CUTOFF, DEFAULT_LOCAL_TIMEZONE
from .core.enums import AttendanceSource
from .overrides.rest_override_repository import RestOverrideRepository
from .overrides.service import OverrideService
from .report.service import MonthlyReportService
from .staff.rest_staff_repository import RestStaffRepository
from .staff.service import StaffService


@dataclass(frozen=True)
class Container:
    conn: BackendConnection
    tz: ZoneInfo

    staff_repo: RestStaffRepository
    overrides_repo: RestOverrideRepository
    attendance_repo: AttendanceRepository

    attendance_service: AttendanceService
    override_service: OverrideService
    staff_service: StaffService
    report_service: MonthlyReportService


def build_container(
    *,
    backend_config: dict,
    local_timezone: str = DEFAULT_LOCAL_TIMEZONE,
    late_cutoff: str = DEFAULT_LATE_CUTOFF,
    attendance_source: str = AttendanceSource.RPC.value,
    conn: BackendConnection | None = None,
) -> Container:
    config = BackendConfig(
        url=str(backend_config["url"]),
        api_key=str(backend_config["api_key"]),
        timeout=float(backend_config.get("timeout", DEFAULT_BACKEND_TIMEOUT_SECONDS)),
        schema=backend_config.get("schema") or None,
    )
    conn = conn or BackendConnection.get_instance(config)
    tz = resolve_timezone(local_timezone)

    staff_repo = RestStaffRepository(conn)
    overrides_repo = RestOverrideRepository(conn)

    source = AttendanceSource(str(attendance_source).lower())
    attendance_repo: AttendanceRepository
    if source == AttendanceSource.EVENTS:
        attendance_repo = EventsAttendanceRepository(conn, tz=tz, staff=staff_repo, overrides=overrides_repo)
    else:
        attendance_repo = RestAttendanceRepository(conn, tz=tz)

    attendance_service = AttendanceService(attendance_repo, tz=tz)
    override_service = OverrideService(overrides_repo)
    staff_service = StaffService(staff_repo)
    report_service = MonthlyReportService(
        attendance_repo,
        staff_repo,
        tz=tz,
        deriver=PrecedenceStatusDeriver(),
        calculator=CutoffLatenessCalculator(late_cutoff),
    )

    return Container(
        conn=conn,
        tz=tz,
        staff_repo=staff_repo,
        overrides_repo=overrides_repo,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        override_service=override_service,
        staff_service=staff_service,
        report_service=report_service,
    )
