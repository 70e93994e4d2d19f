"""Example: build a monthly report through the service layer (no Flask).

Controllers stay thin; the report logic lives in MonthlyReportService.
"""

import importlib
import sys

from config import get_settings_module

from src.workshop_attendance.workshop_attendance.common.datetime_utils import local_today
from src.workshop_attendance.workshop_attendance.container import build_container


def main(argv=None):
    argv = list(sys.argv[1:] if argv is None else argv)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        backend_config=settings.BACKEND_CONFIG,
        local_timezone=settings.LOCAL_TIMEZONE,
        late_cutoff=settings.LATE_CUTOFF,
        attendance_source=settings.ATTENDANCE_SOURCE,
    )

    today = local_today(container.tz)
    year = int(argv[0]) if len(argv) > 0 else today.year
    month = int(argv[1]) if len(argv) > 1 else today.month

    report = container.report_service.build_month_report(year=year, month=month)
    print(f"{report.title}: {len(report.groups)} staff, {len(report.pages)} print pages")
    for g in report.groups:
        print(f"  {g.staff_name} <{g.staff_email}> late={g.late_total_minutes}min absent={g.absent_days}")


if __name__ == "__main__":
    main()
