from __future__ import annotations

import json
from datetime import date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from src.workshop_attendance.workshop_attendance.attendance.calculator.cutoff_calculator import CutoffLatenessCalculator
from src.workshop_attendance.workshop_attendance.attendance.model import AttendanceDay
from src.workshop_attendance.workshop_attendance.attendance.service import AttendanceService
from src.workshop_attendance.workshop_attendance.backend.connection import BackendConfig, BackendConnection
from src.workshop_attendance.workshop_attendance.common.datetime_utils import parse_clock
from src.workshop_attendance.workshop_attendance.container import Container
from src.workshop_attendance.workshop_attendance.main import create_app
from src.workshop_attendance.workshop_attendance.overrides.service import OverrideService
from src.workshop_attendance.workshop_attendance.report.service import MonthlyReportService
from src.workshop_attendance.workshop_attendance.staff.service import StaffService

KL = ZoneInfo("Asia/Kuala_Lumpur")


class FakeAttendanceRepo:
    def __init__(self, days=(), checkins=(), events=(), error=None):
        self.days = list(days)
        self.checkins = list(checkins)
        self.events = list(events)
        self.error = error
        self.calls = []

    def get_month_days(self, *, year: int, month: int):
        self.calls.append(("get_month_days", year, month))
        if self.error:
            raise self.error
        return list(self.days)

    def get_checkin_events(self, *, start_utc: datetime, end_utc: datetime):
        self.calls.append(("get_checkin_events", start_utc, end_utc))
        return list(self.checkins)

    def get_events_for_day(self, *, day: date):
        self.calls.append(("get_events_for_day", day))
        if self.error:
            raise self.error
        return list(self.events)


class FakeStaffRepo:
    def __init__(self, roster=()):
        self.roster = list(roster)
        self.writes = []

    def list_roster(self):
        return list(self.roster)

    def add_staff(self, *, email, name, is_admin):
        self.writes.append(("add", email, name, is_admin))

    def remove_staff(self, email):
        self.writes.append(("remove", email))

    def set_admin(self, email, is_admin):
        self.writes.append(("set_admin", email, is_admin))


class FakeOverrideRepo:
    def __init__(self, rows=()):
        self.rows = list(rows)
        self.set_calls = []
        self.clear_calls = []
        self.last_range = None

    def list_range(self, *, start: date, end: date):
        self.last_range = (start, end)
        return list(self.rows)

    def set_status(self, *, staff_email, day, status, note=None):
        self.set_calls.append({"staff_email": staff_email, "day": day, "status": status, "note": note})

    def clear_status(self, *, staff_email, day):
        self.clear_calls.append({"staff_email": staff_email, "day": day})


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        if text is not None:
            self.text = text
        elif payload is not None:
            self.text = json.dumps(payload)
        else:
            self.text = ""
        self.content = self.text.encode("utf-8")
        self.reason = "Error" if status_code >= 400 else "OK"

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


class FakeSession:
    """Stands in for requests.Session; answers queued responses in order."""

    def __init__(self, responses=(), error=None):
        self.headers = {}
        self.responses = list(responses)
        self.error = error
        self.requests = []
        self.closed = 0

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append({"method": method, "url": url, "timeout": timeout, **kwargs})
        if self.error:
            raise self.error
        return self.responses.pop(0) if self.responses else FakeResponse(200, [])

    def close(self):
        self.closed += 1


@pytest.fixture
def kl():
    return KL


@pytest.fixture
def make_day():
    def _make(email, day, check_in=None, **kwargs):
        return AttendanceDay(
            staff_email=email,
            staff_name=kwargs.pop("staff_name", None),
            day=day,
            check_in=parse_clock(check_in),
            check_in_raw=check_in,
            **kwargs,
        )

    return _make


@pytest.fixture
def fakes():
    return SimpleNamespace(
        attendance=FakeAttendanceRepo(),
        staff=FakeStaffRepo(),
        overrides=FakeOverrideRepo(),
    )


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def backend_conn(fake_session):
    config = BackendConfig(url="http://backend.test", api_key="test-key", timeout=5)
    return BackendConnection(config, session_factory=lambda: fake_session)


@pytest.fixture
def container(fakes, backend_conn):
    return Container(
        conn=backend_conn,
        tz=KL,
        staff_repo=fakes.staff,
        overrides_repo=fakes.overrides,
        attendance_repo=fakes.attendance,
        attendance_service=AttendanceService(fakes.attendance, tz=KL),
        override_service=OverrideService(fakes.overrides),
        staff_service=StaffService(fakes.staff),
        report_service=MonthlyReportService(
            fakes.attendance,
            fakes.staff,
            tz=KL,
            calculator=CutoffLatenessCalculator("09:30"),
        ),
    )


@pytest.fixture
def client(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()


@pytest.fixture
def make_response():
    return FakeResponse
