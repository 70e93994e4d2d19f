from __future__ import annotations

import logging
from datetime import date, time
from typing import Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..backend.connection import BackendConnection
from ..common.datetime_utils import month_days, month_local_bounds, month_utc_bounds
from ..core.enums import CheckAction, DayOverride
from ..overrides.model import DayStatusOverride
from ..overrides.repository import OverrideRepository
from ..staff.model import StaffMember
from ..staff.repository import StaffRepository
from .model import AttendanceDay, CheckEvent
from .rest_attendance_repository import RestAttendanceRepository

logger = logging.getLogger(__name__)


def build_days_from_events(
    *,
    year: int,
    month: int,
    roster: Iterable[StaffMember],
    events: Iterable[CheckEvent],
    overrides: Iterable[DayStatusOverride],
    tz: ZoneInfo,
) -> list[AttendanceDay]:
    """Expand raw events into one AttendanceDay per (staff, day) of the month.

    Every roster member gets a row for every day, with or without events, so
    absences can be detected. Staff seen only in events are included too.
    First check-in and last check-out of each local day are kept.
    """

    names: dict[str, Optional[str]] = {}
    emails: dict[str, str] = {}
    for s in roster:
        key = s.email.lower()
        emails.setdefault(key, s.email)
        names[key] = s.name

    first_in: dict[tuple[str, date], time] = {}
    last_out: dict[tuple[str, date], time] = {}
    for e in sorted(events, key=lambda ev: ev.timestamp):
        key = e.staff_email.lower()
        emails.setdefault(key, e.staff_email)
        if not names.get(key) and e.staff_name:
            names[key] = e.staff_name

        local = e.timestamp.astimezone(tz)
        if local.year != year or local.month != month:
            continue
        slot = (key, local.date())
        clock = local.time().replace(microsecond=0)
        if e.action == CheckAction.CHECK_IN:
            first_in.setdefault(slot, clock)
        else:
            last_out[slot] = clock

    override_by_slot: dict[tuple[str, date], DayOverride] = {
        (o.staff_email.lower(), o.day): o.status for o in overrides
    }

    days: list[AttendanceDay] = []
    for key, email in emails.items():
        for d in month_days(year, month):
            slot = (key, d)
            check_in = first_in.get(slot)
            days.append(
                AttendanceDay(
                    staff_email=email,
                    staff_name=names.get(key),
                    day=d,
                    check_in=check_in,
                    check_out=last_out.get(slot),
                    check_in_raw=check_in.strftime("%H:%M") if check_in else None,
                    override=override_by_slot.get(slot),
                )
            )
    return days


class EventsAttendanceRepository(RestAttendanceRepository):
    """Builds month rows locally from raw check-in/out events."""

    def __init__(
        self,
        conn_factory: BackendConnection,
        *,
        tz: ZoneInfo,
        staff: StaffRepository,
        overrides: OverrideRepository,
    ):
        super().__init__(conn_factory, tz=tz)
        self._staff = staff
        self._overrides = overrides

    def get_month_days(self, *, year: int, month: int) -> Sequence[AttendanceDay]:
        start_utc, end_utc = month_utc_bounds(year, month, self._tz)
        events = self.get_month_events(start_utc=start_utc, end_utc=end_utc)
        roster = self._staff.list_roster()
        start, end = month_local_bounds(year, month)
        overrides = self._overrides.list_range(start=start, end=end)

        days = build_days_from_events(
            year=year, month=month, roster=roster, events=events, overrides=overrides, tz=self._tz
        )
        logger.info("month %04d-%02d: %d rows built from %d events", year, month, len(days), len(events))
        return days
