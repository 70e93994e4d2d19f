from __future__ import annotations

import re
from calendar import monthrange
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse

_CLOCK_RE = re.compile(r"^(\d{1,2}):([0-5]\d)(?::([0-5]\d)(?:\.\d+)?)?$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def resolve_timezone(name: str) -> ZoneInfo:
    return ZoneInfo(name)


def local_today(tz: ZoneInfo) -> date:
    """Current calendar day in the given zone.

    Note: Only called at the service boundary; computations take `today` as a parameter.
    """
    return datetime.now(tz).date()


def month_days(year: int, month: int) -> list[date]:
    days_in_month = monthrange(year, month)[1]
    first = date(year, month, 1)
    return [first + timedelta(days=i) for i in range(days_in_month)]


def month_local_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the next month."""
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def month_utc_bounds(year: int, month: int, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Half-open UTC window covering the local calendar month."""
    start, end = month_local_bounds(year, month)
    start_local = datetime.combine(start, time.min, tzinfo=tz)
    end_local = datetime.combine(end, time.min, tzinfo=tz)
    return start_local.astimezone(timezone.utc), end_local.astimezone(timezone.utc)


def to_local_day(ts: datetime, tz: ZoneInfo) -> date:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(tz).date()


def parse_clock(value: Any) -> Optional[time]:
    """Parse a wall-clock value ('HH:MM', 'HH:MM:SS', 'HH:MM:SS.mmm' or time).

    Returns None for anything that is not a valid clock reading.
    """
    if value is None:
        return None
    if isinstance(value, time):
        return value
    if not isinstance(value, str):
        return None

    m = _CLOCK_RE.match(value.strip())
    if not m:
        return None
    hours = int(m.group(1))
    if hours > 23:
        return None
    seconds = int(m.group(3)) if m.group(3) else 0
    return time(hour=hours, minute=int(m.group(2)), second=seconds)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp from the backend into an aware datetime (UTC if naive).

    Fractional seconds may have any number of digits; Postgres trims trailing zeros (".12").
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        ts = value
    elif isinstance(value, str):
        try:
            ts = isoparse(value.strip())
        except (ValueError, OverflowError):
            return None
    else:
        return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def format_clock(value: Optional[time]) -> str:
    return value.strftime("%H:%M") if value else ""


def month_title(year: int, month: int) -> str:
    """'March 2024'."""
    return date(year, month, 1).strftime("%B %Y")
