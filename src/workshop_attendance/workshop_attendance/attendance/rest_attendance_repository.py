from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from ..backend.connection import BackendConnection
from ..backend.rest_base import call_rpc, fetchall, select_rows, to_float_or_none, to_int_or_none, to_text_or_none
from ..common.datetime_utils import parse_clock, parse_iso_date, parse_timestamp, to_local_day
from ..core.enums import CheckAction, DayOverride
from .model import AttendanceDay, CheckEvent, GeoCheckIn, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

MONTH_REPORT_RPC = "month_print_report"
EVENTS_TABLE = "attendance"
EVENT_COLUMNS = "staff_email,staff_name,action,ts,lat,lon,distance_m"


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def parse_override(value: Any) -> Optional[DayOverride]:
    text = to_text_or_none(value)
    if not text:
        return None
    try:
        return DayOverride(text.upper())
    except ValueError:
        return None


def geo_from_row(row: Mapping[str, Any]) -> Optional[GeoPoint]:
    lat = to_float_or_none(row.get("lat"))
    lon = to_float_or_none(row.get("lon"))
    distance = to_float_or_none(row.get("distance_m"))
    if lat is None and lon is None and distance is None:
        return None
    return GeoPoint(lat=lat, lon=lon, distance_m=distance)


def attendance_day_from_row(row: Mapping[str, Any]) -> Optional[AttendanceDay]:
    """Map one month-report row; rows without an email or a valid day are dropped."""

    email = to_text_or_none(row.get("staff_email"))
    day_s = to_text_or_none(row.get("day"))
    if not email or not day_s:
        logger.warning("month row without staff_email/day skipped: %r", dict(row))
        return None
    try:
        day = parse_iso_date(day_s[:10])
    except ValueError:
        logger.warning("month row with invalid day skipped: %r", day_s)
        return None

    check_in_raw = to_text_or_none(_first(row, "check_in_kl", "check_in_local"))
    check_out_raw = to_text_or_none(_first(row, "check_out_kl", "check_out_local"))
    status_raw = to_text_or_none(row.get("status"))

    override = parse_override(row.get("status_override"))
    if override is None:
        override = parse_override(status_raw)

    late = to_int_or_none(_first(row, "late_min", "late_minutes"))

    return AttendanceDay(
        staff_email=email,
        staff_name=to_text_or_none(row.get("staff_name")),
        day=day,
        check_in=parse_clock(check_in_raw),
        check_out=parse_clock(check_out_raw),
        check_in_raw=check_in_raw,
        late_minutes=late,
        override=override,
        backend_status=status_raw,
        geo=geo_from_row(row),
    )


def check_event_from_row(row: Mapping[str, Any]) -> Optional[CheckEvent]:
    email = to_text_or_none(row.get("staff_email"))
    ts = parse_timestamp(row.get("ts"))
    action_s = to_text_or_none(row.get("action"))
    if not email or ts is None or not action_s:
        logger.debug("event row skipped: %r", dict(row))
        return None
    try:
        action = CheckAction(action_s)
    except ValueError:
        logger.debug("event row with unknown action skipped: %r", action_s)
        return None
    return CheckEvent(
        staff_email=email,
        staff_name=to_text_or_none(row.get("staff_name")),
        action=action,
        timestamp=ts,
        lat=to_float_or_none(row.get("lat")),
        lon=to_float_or_none(row.get("lon")),
        distance_m=to_float_or_none(row.get("distance_m")),
    )


class RestAttendanceRepository(AttendanceRepository):
    """Month rows from the aggregation RPC; raw events from the attendance table."""

    def __init__(self, conn_factory: BackendConnection, *, tz: ZoneInfo):
        self._conn_factory = conn_factory
        self._tz = tz

    def get_month_days(self, *, year: int, month: int) -> Sequence[AttendanceDay]:
        payload = call_rpc(self._conn_factory, MONTH_REPORT_RPC, {"p_year": int(year), "p_month": int(month)})
        days = [d for d in (attendance_day_from_row(r) for r in fetchall(payload)) if d is not None]
        logger.info("month %04d-%02d: %d attendance rows", year, month, len(days))
        return days

    def _select_events(self, *, start_utc: datetime, end_utc: datetime, action: Optional[CheckAction], order: str):
        params: list[tuple[str, str]] = [
            ("select", EVENT_COLUMNS),
            ("ts", f"gte.{start_utc.isoformat()}"),
            ("ts", f"lt.{end_utc.isoformat()}"),
            ("order", order),
        ]
        if action is not None:
            params.append(("action", f"eq.{action.value}"))
        rows = select_rows(self._conn_factory, EVENTS_TABLE, params=params)
        return [e for e in (check_event_from_row(r) for r in rows) if e is not None]

    def get_month_events(self, *, start_utc: datetime, end_utc: datetime) -> Sequence[CheckEvent]:
        return self._select_events(start_utc=start_utc, end_utc=end_utc, action=None, order="ts.asc")

    def get_checkin_events(self, *, start_utc: datetime, end_utc: datetime) -> Sequence[GeoCheckIn]:
        events = self._select_events(start_utc=start_utc, end_utc=end_utc, action=CheckAction.CHECK_IN, order="ts.asc")
        return [
            GeoCheckIn(
                staff_email=e.staff_email,
                timestamp=e.timestamp,
                day=to_local_day(e.timestamp, self._tz),
                lat=e.lat,
                lon=e.lon,
                distance_m=e.distance_m,
            )
            for e in events
        ]

    def get_events_for_day(self, *, day: date) -> Sequence[CheckEvent]:
        start_utc = datetime.combine(day, time.min, tzinfo=self._tz).astimezone(timezone.utc)
        end_utc = datetime.combine(day + timedelta(days=1), time.min, tzinfo=self._tz).astimezone(timezone.utc)
        return self._select_events(start_utc=start_utc, end_utc=end_utc, action=None, order="ts.desc")
