from datetime import date, datetime, timezone

from src.workshop_attendance.workshop_attendance.attendance.merger import (
    day_key,
    first_checkins_by_day,
    merge_coordinates,
)
from src.workshop_attendance.workshop_attendance.attendance.model import GeoCheckIn, GeoPoint


def _checkin(email, hour, lat, lon, day=date(2024, 3, 4)):
    return GeoCheckIn(
        staff_email=email,
        timestamp=datetime(2024, 3, 4, hour, 0, tzinfo=timezone.utc),
        day=day,
        lat=lat,
        lon=lon,
        distance_m=12.5,
    )


def test_day_key_is_case_insensitive():
    assert day_key(date(2024, 3, 4), "A@X.com") == day_key(date(2024, 3, 4), "a@x.com")


def test_earliest_checkin_wins_regardless_of_input_order():
    events = [_checkin("a@x.com", 3, 2.0, 2.0), _checkin("a@x.com", 1, 1.0, 1.0)]

    points = first_checkins_by_day(events)

    assert points == {"2024-03-04|a@x.com": GeoPoint(lat=1.0, lon=1.0, distance_m=12.5)}


def test_merge_attaches_coordinates_by_day_and_email(make_day):
    days = [
        make_day("A@X.com", date(2024, 3, 4), "09:00"),
        make_day("a@x.com", date(2024, 3, 5)),
    ]
    points = first_checkins_by_day([_checkin("a@x.com", 1, 3.1, 101.6)])

    merged = merge_coordinates(days, points)

    assert merged[0].geo == GeoPoint(lat=3.1, lon=101.6, distance_m=12.5)
    assert merged[1].geo is None
    assert days[0].geo is None
