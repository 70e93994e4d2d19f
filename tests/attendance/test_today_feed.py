from datetime import date, datetime, timezone

from src.workshop_attendance.workshop_attendance.attendance.model import CheckEvent
from src.workshop_attendance.workshop_attendance.attendance.service import AttendanceService
from src.workshop_attendance.workshop_attendance.core.enums import CheckAction


def test_today_events_newest_first_in_local_time(fakes, kl):
    fakes.attendance.events = [
        CheckEvent("a@x.com", "Alice", CheckAction.CHECK_IN, datetime(2024, 3, 4, 1, 0, tzinfo=timezone.utc), 3.1, 101.6, 8.0),
        CheckEvent("a@x.com", None, CheckAction.CHECK_OUT, datetime(2024, 3, 4, 10, 0, tzinfo=timezone.utc)),
    ]
    svc = AttendanceService(fakes.attendance, tz=kl)

    rows = svc.list_today_events(today=date(2024, 3, 4))

    assert fakes.attendance.calls == [("get_events_for_day", date(2024, 3, 4))]
    assert [r["time"] for r in rows] == ["2024-03-04 18:00:00", "2024-03-04 09:00:00"]
    assert rows[0]["staff"] == "a@x.com"
    assert rows[0]["map_url"] is None
    assert rows[1]["staff"] == "Alice"
    assert rows[1]["distance_m"] == "8"
    assert rows[1]["map_url"] == "https://maps.google.com/?q=3.1,101.6"
