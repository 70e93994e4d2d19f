from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Iterable, Mapping

from .model import AttendanceDay, GeoCheckIn, GeoPoint


def day_key(day: date, staff_email: str) -> str:
    return f"{day.isoformat()}|{staff_email}".lower()


def first_checkins_by_day(events: Iterable[GeoCheckIn]) -> dict[str, GeoPoint]:
    """First check-in per (local day, staff).

    Events are ordered by timestamp here; the fetch order is not relied upon.
    """

    out: dict[str, GeoPoint] = {}
    for e in sorted(events, key=lambda ev: ev.timestamp):
        key = day_key(e.day, e.staff_email)
        if key not in out:
            out[key] = GeoPoint(lat=e.lat, lon=e.lon, distance_m=e.distance_m)
    return out


def merge_coordinates(days: Iterable[AttendanceDay], points: Mapping[str, GeoPoint]) -> list[AttendanceDay]:
    """Attach the matching GeoPoint to each day; unmatched days keep what they had."""

    merged: list[AttendanceDay] = []
    for d in days:
        point = points.get(day_key(d.day, d.staff_email))
        merged.append(replace(d, geo=point) if point is not None else d)
    return merged
