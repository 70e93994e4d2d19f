from datetime import datetime, timezone

from src.workshop_attendance.workshop_attendance.attendance.model import CheckEvent
from src.workshop_attendance.workshop_attendance.core.enums import CheckAction
from src.workshop_attendance.workshop_attendance.core.exceptions import BackendError


def test_today_page_lists_events(client, fakes):
    fakes.attendance.events = [
        CheckEvent("a@x.com", "Alice", CheckAction.CHECK_IN, datetime.now(timezone.utc)),
    ]

    resp = client.get("/today")

    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "Alice" in body
    assert "Check-in" in body


def test_today_page_shows_backend_error(client, fakes):
    fakes.attendance.error = BackendError("timeout")

    resp = client.get("/today")

    assert resp.status_code == 200
    assert "timeout" in resp.get_data(as_text=True)
