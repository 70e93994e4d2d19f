from datetime import date

from src.workshop_attendance.workshop_attendance.core.enums import DayOverride
from src.workshop_attendance.workshop_attendance.overrides.model import DayStatusOverride
from src.workshop_attendance.workshop_attendance.overrides.rest_override_repository import RestOverrideRepository


def test_list_range_keeps_only_offday_and_mc(backend_conn, fake_session, make_response):
    fake_session.responses = [
        make_response(
            200,
            [
                {"staff_email": "a@x.com", "day": "2024-03-12", "status": "MC", "note": "flu"},
                {"staff_email": "a@x.com", "day": "2024-03-13", "status": "ABSENT"},
                {"staff_email": "b@x.com", "day": "bad", "status": "OFFDAY"},
            ],
        )
    ]

    rows = RestOverrideRepository(backend_conn).list_range(start=date(2024, 3, 1), end=date(2024, 4, 1))

    params = fake_session.requests[0]["params"]
    assert ("day", "gte.2024-03-01") in params
    assert ("day", "lt.2024-04-01") in params
    assert rows == [DayStatusOverride(staff_email="a@x.com", day=date(2024, 3, 12), status=DayOverride.MC, note="flu")]


def test_set_and_clear_call_rpcs(backend_conn, fake_session, make_response):
    fake_session.responses = [make_response(204), make_response(204)]
    repo = RestOverrideRepository(backend_conn)

    repo.set_status(staff_email="a@x.com", day=date(2024, 3, 12), status=DayOverride.OFFDAY, note=None)
    repo.clear_status(staff_email="a@x.com", day=date(2024, 3, 12))

    set_req, clear_req = fake_session.requests
    assert set_req["url"] == "http://backend.test/rest/v1/rpc/set_day_status"
    assert set_req["json"] == {"p_email": "a@x.com", "p_day": "2024-03-12", "p_status": "OFFDAY", "p_note": None}
    assert clear_req["url"] == "http://backend.test/rest/v1/rpc/clear_day_status"
    assert clear_req["json"] == {"p_email": "a@x.com", "p_day": "2024-03-12"}
