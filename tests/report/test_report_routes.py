from datetime import date

from src.workshop_attendance.workshop_attendance.core.exceptions import BackendError
from src.workshop_attendance.workshop_attendance.staff.model import StaffMember


def _seed(fakes, make_day, staff=4):
    fakes.attendance.days = [
        make_day(f"s{i}@x.com", date(2024, 3, 4), "09:45", staff_name=f"Staff {i}") for i in range(staff)
    ]
    fakes.staff.roster = [StaffMember(email=f"s{i}@x.com", name=f"Staff {i}") for i in range(staff)]


def test_index_redirects_to_monthly_report(client):
    resp = client.get("/")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/report/monthly")


def test_monthly_page_renders_staff_blocks(client, fakes, make_day):
    _seed(fakes, make_day)

    resp = client.get("/report/monthly?year=2024&month=3")

    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert "March 2024" in body
    assert "Staff 3" in body


def test_monthly_page_shows_inline_error_on_bad_month(client, fakes):
    resp = client.get("/report/monthly?year=2024&month=13")

    assert resp.status_code == 400
    assert "month must be between 1 and 12" in resp.get_data(as_text=True)
    assert fakes.attendance.calls == []


def test_monthly_page_shows_backend_failure(client, fakes):
    fakes.attendance.error = BackendError("connection refused")

    resp = client.get("/report/monthly?year=2024&month=3")

    assert resp.status_code == 502
    assert "Failed to load report: connection refused" in resp.get_data(as_text=True)


def test_print_layout_puts_three_staff_per_page(client, fakes, make_day):
    _seed(fakes, make_day, staff=4)

    resp = client.get("/report/monthly/print?year=2024&month=3")

    body = resp.get_data(as_text=True)
    assert resp.status_code == 200
    assert body.count('<div class="page">') == 2
    assert body.count('<div class="staff-block">') == 4
    assert "A4 landscape" in body


def test_api_returns_report_json(client, fakes, make_day):
    _seed(fakes, make_day, staff=1)

    resp = client.get("/api/report/monthly?year=2024&month=3")

    data = resp.get_json()
    assert resp.status_code == 200
    assert data["success"] is True
    assert data["report"]["title"] == "March 2024"
    (staff,) = data["report"]["staff"]
    assert staff["staff_email"] == "s0@x.com"
    assert staff["late_total_minutes"] == 15
    assert staff["rows"][0]["status_code"] == "PRESENT"


def test_api_rejects_missing_period(client):
    resp = client.get("/api/report/monthly?year=2024")

    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_api_maps_backend_errors_to_502(client, fakes):
    fakes.attendance.error = BackendError("down")

    resp = client.get("/api/report/monthly?year=2024&month=3")

    assert resp.status_code == 502
    assert resp.get_json() == {"success": False, "message": "down"}


def test_csv_export_has_bom_header_and_filename(client, fakes, make_day):
    _seed(fakes, make_day, staff=2)

    resp = client.get("/report/monthly.csv?year=2024&month=3")

    raw = resp.get_data()
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert raw.startswith(b"\xef\xbb\xbf")
    lines = raw.decode("utf-8-sig").splitlines()
    assert lines[0] == "staff_email,staff_name,day,check_in,check_out,late_minutes,status,distance_m,coords"
    assert len(lines) == 3
    assert "attendance_202403.csv" in resp.headers["Content-Disposition"]


def test_print_layout_requires_explicit_period(client, fakes):
    resp = client.get("/report/monthly/print")

    assert resp.status_code == 400
    assert "year is required" in resp.get_data(as_text=True)
    assert fakes.attendance.calls == []


def test_print_layout_requires_month(client, fakes):
    resp = client.get("/report/monthly/print?year=2024")

    assert resp.status_code == 400
    assert fakes.attendance.calls == []
