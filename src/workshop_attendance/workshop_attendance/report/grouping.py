from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional

from ..attendance.calculator.base import LatenessCalculator
from ..attendance.model import AttendanceDay, ReportDay, StaffMonthGroup
from ..attendance.status import StatusDeriver
from ..core.enums import DayStatus

logger = logging.getLogger(__name__)


def display_name(email: str, *candidates: Optional[str]) -> str:
    for name in candidates:
        if name and name.strip():
            return name.strip()
    return email


def group_by_staff(
    days: Iterable[AttendanceDay],
    *,
    deriver: StatusDeriver,
    calculator: LatenessCalculator,
    today: date,
    roster_names: Optional[Mapping[str, str]] = None,
) -> list[StaffMonthGroup]:
    """Partition day rows per staff and compute monthly totals.

    Inputs are never mutated; calling twice on the same rows gives equal results.
    Names compare with str.casefold(), not locale collation.
    """

    roster_names = {k.lower(): v for k, v in (roster_names or {}).items()}
    buckets: dict[str, dict[date, AttendanceDay]] = {}
    emails: dict[str, str] = {}
    row_names: dict[str, Optional[str]] = {}

    for d in days:
        key = d.staff_email.lower()
        emails.setdefault(key, d.staff_email)
        if not row_names.get(key):
            row_names[key] = d.staff_name
        bucket = buckets.setdefault(key, {})
        if d.day in bucket:
            logger.warning("duplicate row for %s on %s ignored", d.staff_email, d.day.isoformat())
            continue
        bucket[d.day] = d

    groups: list[StaffMonthGroup] = []
    for key, bucket in buckets.items():
        rows: list[ReportDay] = []
        late_total = 0
        absent = 0
        for d in sorted(bucket.values(), key=lambda r: r.day):
            status = deriver.derive(d, today=today)
            late = calculator.late_minutes(d, status)
            if status == DayStatus.ABSENT:
                absent += 1
            if status == DayStatus.PRESENT and late is not None:
                late_total += late
            rows.append(ReportDay(attendance=d, status=status, late_minutes=late))

        email = emails[key]
        groups.append(
            StaffMonthGroup(
                staff_email=email,
                staff_name=display_name(email, row_names.get(key), roster_names.get(key)),
                rows=tuple(rows),
                late_total_minutes=late_total,
                absent_days=absent,
            )
        )

    groups.sort(key=lambda g: (g.staff_name.casefold(), g.staff_email.casefold()))
    return groups
