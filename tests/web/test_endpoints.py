from __future__ import annotations

import io
from datetime import date, datetime, time, timedelta, timezone

import pytest
from openpyxl import load_workbook

from src.salon_suite.salon_suite.appointments.model import Appointment
from src.salon_suite.salon_suite.container import build_services
from src.salon_suite.salon_suite.core.enums import AppointmentStatus, Role
from src.salon_suite.salon_suite.kiosk.service import NO_APPOINTMENT_MESSAGE
from src.salon_suite.salon_suite.locations.model import Location
from src.salon_suite.salon_suite.main import create_app
from src.salon_suite.salon_suite.payroll.model import CommissionTier
from src.salon_suite.salon_suite.shifts.model import Shift
from tests.fakes import (
    InMemoryAppointments,
    InMemoryLocations,
    InMemoryMeetings,
    InMemoryPayroll,
    InMemorySchedules,
    InMemoryShifts,
    InMemorySwaps,
    InMemoryUsers,
    make_user,
)


@pytest.fixture
def repos():
    users = InMemoryUsers(
        [
            make_user(1, Role.ADMIN, name="Avery", username="owner"),
            make_user(2, Role.MANAGER, name="Morgan", username="manager"),
            make_user(3, name="Sam", username="sam"),
            make_user(4, name="Riley", username="riley"),
        ]
    )
    shifts = InMemoryShifts([Shift(shift_id=1, shift_name="Opening", start_time=time(9, 0), end_time=time(17, 0))])
    return {
        "users": users,
        "shifts": shifts,
        "schedules": InMemorySchedules(users, shifts),
        "locations": InMemoryLocations(
            [
                Location(location_id=1, organization_id=1, name="Downtown"),
                Location(location_id=2, organization_id=1, name="Closed", is_active=False),
                Location(location_id=9, organization_id=2, name="Other salon"),
            ]
        ),
        "appointments": InMemoryAppointments(),
        "swaps": InMemorySwaps(),
        "payroll": InMemoryPayroll(
            tiers=[
                CommissionTier(
                    tier_id=1,
                    organization_id=1,
                    tier_name="Level 1",
                    applies_to="services",
                    min_revenue=0,
                    max_revenue=None,
                    commission_rate=0.35,
                )
            ]
        ),
    }


@pytest.fixture
def client(monkeypatch, repos):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(
        conn=None,
        users_repo=repos["users"],
        locations_repo=repos["locations"],
        shifts_repo=repos["shifts"],
        schedules_repo=repos["schedules"],
        appointments_repo=repos["appointments"],
        meetings_repo=InMemoryMeetings(),
        payroll_repo=repos["payroll"],
        swaps_repo=repos["swaps"],
    )
    app = create_app(container=container)
    return app.test_client()


def login(client, username):
    resp = client.post("/api/auth/login", json={"username": username, "password": "secret123"})
    assert resp.status_code == 200
    return resp.get_json()["user"]


def test_login_and_me(client):
    assert client.get("/api/auth/me").status_code == 401

    bad = client.post("/api/auth/login", json={"username": "owner", "password": "nope"})
    assert bad.status_code == 401
    assert bad.get_json() == {"success": False, "message": "Invalid username or password"}

    user = login(client, "owner")
    assert user == {"user_id": 1, "organization_id": 1, "name": "Avery", "role": "admin"}
    assert client.get("/api/auth/me").get_json()["user"]["user_id"] == 1

    client.post("/api/auth/logout")
    assert client.get("/api/auth/me").status_code == 401


def test_role_guards(client):
    login(client, "sam")
    assert client.get("/api/meetings/overview").status_code == 403
    assert client.get("/api/payroll/forecast").status_code == 403
    assert client.post("/api/team", json={}).status_code == 403


def test_team_create_maps_validation_to_400(client):
    login(client, "owner")
    resp = client.post("/api/team", json={"full_name": "Jo", "username": "sam", "password": "secret1"})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Username already exists"

    resp = client.post("/api/team", json={"full_name": "Jo", "username": "jo", "password": "secret1"})
    assert resp.status_code == 201
    assert client.delete("/api/team/404").status_code == 404


def test_meetings_overview_and_cadence(client):
    login(client, "manager")
    overview = client.get("/api/meetings/overview").get_json()["overview"]
    assert overview["summary"]["never_met"] == 4
    assert overview["cadence"] == {"global_default": 14, "overrides": {}}

    assert client.put("/api/meetings/cadence", json={"user_id": 3, "cadence_days": 400}).status_code == 400
    resp = client.put("/api/meetings/cadence", json={"user_id": 3, "cadence_days": 7})
    assert resp.get_json() == {"success": True, "user_id": 3, "cadence_days": 7}

    overview = client.get("/api/meetings/overview").get_json()["overview"]
    assert overview["cadence"]["overrides"] == {"3": 7}

    assert client.delete("/api/meetings/cadence/3").status_code == 200
    assert client.delete("/api/meetings/cadence/3").status_code == 404


def test_kiosk_is_public_and_tracks_its_device(client):
    assert client.get("/api/kiosk/1/state").status_code == 400
    assert client.get("/api/kiosk/2/state?device=front").status_code == 404

    state = client.get("/api/kiosk/1/state?device=front").get_json()["kiosk"]
    assert state["stage"] == "idle"

    resp = client.post("/api/kiosk/1/lookup", json={"device": "front", "phone": "(555) 123-4567"})
    assert resp.get_json()["kiosk"]["stage"] == "error"
    assert resp.get_json()["kiosk"]["message"] == NO_APPOINTMENT_MESSAGE

    assert client.post("/api/kiosk/1/confirm", json={"device": "front"}).status_code == 409
    assert client.post("/api/kiosk/1/reset", json={"device": "front"}).get_json()["kiosk"]["stage"] == "idle"


def test_kiosk_qr_code(client):
    assert client.get("/api/kiosk/1/qr.png").status_code == 401
    login(client, "owner")
    assert client.get("/api/kiosk/9/qr.png").status_code == 404

    resp = client.get("/api/kiosk/1/qr.png")
    assert resp.status_code == 200
    assert resp.mimetype == "image/png"
    assert resp.data.startswith(b"\x89PNG")


def test_swap_request_flow(client, repos):
    work_date = date.today() + timedelta(days=5)
    schedule_id = repos["schedules"].add(user_id=3, location_id=1, work_date=work_date, shift_id=1)

    login(client, "sam")
    resp = client.post("/api/swaps", json={"schedule_id": schedule_id, "swap_type": "giveaway"})
    assert resp.status_code == 201
    swap_id = resp.get_json()["swap_id"]
    assert client.post(f"/api/swaps/{swap_id}/claim").status_code == 400
    assert client.post(f"/api/swaps/{swap_id}/approve").status_code == 403

    login(client, "riley")
    assert client.post(f"/api/swaps/{swap_id}/claim").status_code == 200
    assert client.post(f"/api/swaps/{swap_id}/claim").status_code == 409
    assert client.post("/api/swaps/999/claim").status_code == 404

    login(client, "manager")
    assert client.post(f"/api/swaps/{swap_id}/approve").status_code == 200
    assert repos["schedules"].get_by_id(schedule_id).user_id == 4

    swaps = client.get("/api/swaps?status=approved").get_json()["swaps"]
    assert [s["swap_id"] for s in swaps] == [swap_id]
    assert client.get("/api/swaps?status=bogus").status_code == 400


def test_swap_expiry_with_utc_offset_is_stored_as_local_time(client, repos):
    work_date = date.today() + timedelta(days=5)
    schedule_id = repos["schedules"].add(user_id=3, location_id=1, work_date=work_date, shift_id=1)
    expires = datetime.combine(date.today() + timedelta(days=1), time(12, 0), tzinfo=timezone.utc)

    login(client, "sam")
    resp = client.post("/api/swaps", json={"schedule_id": schedule_id, "expires_at": expires.isoformat()})
    assert resp.status_code == 201

    stored = repos["swaps"].get_by_id(resp.get_json()["swap_id"]).expires_at
    assert stored.tzinfo is None
    assert stored == expires.astimezone().replace(tzinfo=None)


@pytest.mark.parametrize("schedule_id", [[1], {"id": 1}, "abc"])
def test_swap_create_rejects_non_numeric_schedule(client, schedule_id):
    login(client, "sam")
    resp = client.post("/api/swaps", json={"schedule_id": schedule_id})
    assert resp.status_code == 400


def _booking(appointment_id, day, *, status=AppointmentStatus.BOOKED):
    return Appointment(
        appointment_id=appointment_id,
        organization_id=1,
        location_id=1,
        client_name="Jordan",
        appointment_date=day,
        status=status,
        start_time=time(10, 0),
        end_time=time(11, 30),
        service_name="Haircut",
        total_price=90.0,
    )


def test_capacity_report_for_all_locations(client, repos):
    tomorrow = date.today() + timedelta(days=1)
    repos["appointments"].rows[1] = _booking(1, tomorrow)
    repos["appointments"].rows[2] = _booking(2, tomorrow, status=AppointmentStatus.CANCELLED)

    login(client, "manager")
    resp = client.get("/api/capacity?period=tomorrow&location_id=all")
    assert resp.status_code == 200
    report = resp.get_json()["capacity"]
    assert len(report["days"]) == 1
    assert report["days"][0]["date"] == tomorrow.isoformat()
    assert report["total_appointments"] == 1
    assert report["total_booked_hours"] == 1.5
    assert report["breakdown"]["stylist_count"] == 1
    assert report["breakdown"]["days_in_period"] == 1


@pytest.mark.parametrize("query", ["period=14days", "location_id=downtown", "location_id=-1"])
def test_capacity_rejects_bad_arguments(client, query):
    login(client, "manager")
    resp = client.get(f"/api/capacity?{query}")
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_capacity_exports(client, repos):
    repos["appointments"].rows[1] = _booking(1, date.today() + timedelta(days=1))
    login(client, "manager")

    csv_resp = client.get("/api/capacity/export.csv?period=7days")
    assert csv_resp.status_code == 200
    assert csv_resp.mimetype == "text/csv"
    assert "attachment; filename=capacity_7days_" in csv_resp.headers["Content-Disposition"]
    lines = csv_resp.data.decode("utf-8-sig").splitlines()
    assert lines[0].startswith("date,day_name,available_hours")
    assert len(lines) == 8

    xlsx_resp = client.get("/api/capacity/export.xlsx?period=tomorrow")
    assert xlsx_resp.status_code == 200
    assert xlsx_resp.mimetype == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert "capacity_tomorrow_" in xlsx_resp.headers["Content-Disposition"]
    workbook = load_workbook(io.BytesIO(xlsx_resp.data))
    assert workbook.sheetnames == ["Summary", "Days", "Service mix"]
    assert workbook["Days"].max_row == 2


def test_staffing_balance_defaults_to_the_coming_week(client, repos):
    today = date.today()
    repos["schedules"].add(user_id=3, location_id=1, work_date=today, shift_id=1)

    login(client, "manager")
    resp = client.get("/api/staffing/balance")
    assert resp.status_code == 200
    balance = resp.get_json()["balance"]
    assert balance["start"] == today.isoformat()
    assert balance["end"] == (today + timedelta(days=6)).isoformat()
    downtown = balance["locations"][0]
    assert downtown["location_name"] == "Downtown"
    assert downtown["scheduled_staff"] == 1
    assert downtown["scheduled_hours"] == 8.0
    assert downtown["status"] == "overstaffed"
    assert balance["suggestions"] == []


def test_staffing_balance_rejects_reversed_range(client):
    login(client, "manager")
    resp = client.get("/api/staffing/balance?start=2026-03-10&end=2026-03-01")
    assert resp.status_code == 400


def test_payroll_forecast_defaults_to_current_pay_period(client):
    login(client, "owner")
    resp = client.get("/api/payroll/forecast")
    assert resp.status_code == 200
    forecast = resp.get_json()["forecast"]
    monday = date.today() - timedelta(days=date.today().weekday())
    assert forecast["period_start"] == monday.isoformat()
    assert forecast["period_end"] == (monday + timedelta(days=13)).isoformat()
    assert forecast["employees"] == []


def test_tier_resolution_endpoint(client):
    login(client, "manager")
    resp = client.get("/api/payroll/tiers/resolve?revenue=2500")
    assert resp.status_code == 200
    tier = resp.get_json()["tier"]
    assert tier["current"]["name"] == "Level 1"
    assert tier["next"] is None
    assert tier["progress"] == 100


@pytest.mark.parametrize(
    "query", ["revenue=2500&applies_to=tips", "revenue=lots", "revenue=nan", "revenue=inf", "revenue=-inf"]
)
def test_tier_resolution_rejects_bad_arguments(client, query):
    login(client, "manager")
    assert client.get(f"/api/payroll/tiers/resolve?{query}").status_code == 400


def test_schedules_assign_list_and_delete(client):
    work_date = (date.today() + timedelta(days=2)).isoformat()
    login(client, "manager")

    resp = client.post(
        "/api/schedules", json={"user_id": 3, "location_id": 1, "shift_id": 1, "work_date": work_date}
    )
    assert resp.status_code == 201
    schedule_id = resp.get_json()["schedule_id"]

    rows = client.get(f"/api/schedules?start={work_date}&end={work_date}").get_json()["schedules"]
    assert [(r["schedule_id"], r["staff_name"], r["hours"]) for r in rows] == [(schedule_id, "Sam", 8.0)]

    assert client.post("/api/schedules", json={"user_id": [3]}).status_code == 400
    assert client.post("/api/schedules", json={"user_id": 3, "location_id": 1, "shift_id": 1}).status_code == 400

    login(client, "sam")
    assert client.post("/api/schedules", json={}).status_code == 403
    assert client.delete(f"/api/schedules/{schedule_id}").status_code == 403

    login(client, "manager")
    assert client.delete(f"/api/schedules/{schedule_id}").status_code == 200
    assert client.delete(f"/api/schedules/{schedule_id}").status_code == 404
