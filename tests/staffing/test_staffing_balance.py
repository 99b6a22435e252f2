from __future__ import annotations

from datetime import date, time, timedelta

import pytest

from src.salon_suite.salon_suite.appointments.model import Appointment
from src.salon_suite.salon_suite.core.enums import AppointmentStatus, StaffingStatus
from src.salon_suite.salon_suite.core.exceptions import ValidationError
from src.salon_suite.salon_suite.locations.model import Location
from src.salon_suite.salon_suite.shifts.model import Shift
from src.salon_suite.salon_suite.staffing.model import StaffingThresholds
from src.salon_suite.salon_suite.staffing.service import StaffingBalanceService
from tests.fakes import InMemoryAppointments, InMemoryLocations, InMemorySchedules, InMemoryShifts, InMemoryUsers, make_user

DAY = date(2026, 3, 5)
OPENING = Shift(shift_id=1, shift_name="Opening", start_time=time(8, 0), end_time=time(16, 0), break_minutes=30)


def _appointments(location_id, count, start_id):
    return [
        Appointment(
            appointment_id=start_id + i,
            organization_id=1,
            location_id=location_id,
            client_name="Client",
            appointment_date=DAY,
            status=AppointmentStatus.BOOKED,
        )
        for i in range(count)
    ]


@pytest.fixture
def service():
    users = InMemoryUsers([make_user(i) for i in range(1, 5)])
    schedules = InMemorySchedules(users, InMemoryShifts([OPENING]))
    schedules.add(user_id=1, location_id=1, work_date=DAY, shift_id=1)
    schedules.add(user_id=2, location_id=1, work_date=DAY, shift_id=1)
    schedules.add(user_id=3, location_id=2, work_date=DAY, shift_id=1)
    schedules.add(user_id=4, location_id=2, work_date=DAY, shift_id=1)

    locations = InMemoryLocations(
        [
            Location(location_id=1, organization_id=1, name="Downtown", appointment_padding_minutes=0),
            Location(location_id=2, organization_id=1, name="Northside", appointment_padding_minutes=0),
        ]
    )
    appointments = InMemoryAppointments(_appointments(1, 14, 100) + _appointments(2, 3, 200))
    return StaffingBalanceService(locations, schedules, appointments)


def test_balance_per_location(service):
    report = service.build(organization_id=1, start=DAY, end=DAY)
    downtown, northside = report.locations

    assert downtown.scheduled_staff == 2
    assert downtown.scheduled_hours == 15.0
    assert downtown.booked_hours == 14.0
    assert downtown.capacity_hours == 6.8  # 6.75 rounded half up to a tenth
    assert downtown.status == StaffingStatus.UNDERSTAFFED
    assert downtown.hours_delta == 2.8  # 14 - 15 * 0.75, rounded to a tenth

    assert northside.status == StaffingStatus.OVERSTAFFED
    assert northside.hours_delta == -8.2  # -8.25 rounds half up
    assert northside.demand_ratio == 0.2


def test_suggests_moving_spare_hours_to_busy_location(service):
    report = service.build(organization_id=1, start=DAY, end=DAY)

    assert len(report.suggestions) == 1
    move = report.suggestions[0]
    assert (move.from_location_name, move.to_location_name) == ("Northside", "Downtown")
    assert move.hours == 2.5

    data = report.to_dict()
    assert data["start"] == "2026-03-05"
    assert data["locations"][0]["status"] == "understaffed"


def test_classify_edges():
    svc = StaffingBalanceService(None, None, None)
    assert svc.classify(scheduled_hours=0, booked_hours=2) == StaffingStatus.UNSTAFFED
    assert svc.classify(scheduled_hours=0, booked_hours=0) == StaffingStatus.IDLE
    assert svc.classify(scheduled_hours=10, booked_hours=7) == StaffingStatus.BALANCED
    assert svc.classify(scheduled_hours=10, booked_hours=9) == StaffingStatus.BALANCED
    assert svc.classify(scheduled_hours=10, booked_hours=4.9) == StaffingStatus.OVERSTAFFED


def test_padding_counts_toward_booked_hours():
    users = InMemoryUsers([make_user(1)])
    schedules = InMemorySchedules(users, InMemoryShifts([OPENING]))
    locations = InMemoryLocations([Location(location_id=1, organization_id=1, name="Solo", appointment_padding_minutes=15)])
    svc = StaffingBalanceService(locations, schedules, InMemoryAppointments(_appointments(1, 1, 1)))

    (balance,) = svc.build(organization_id=1, start=DAY, end=DAY).locations
    assert balance.booked_hours == 1.3  # 1h + 15m, rounded to a tenth
    assert balance.status == StaffingStatus.UNSTAFFED


def test_range_validation(service):
    with pytest.raises(ValidationError):
        service.build(organization_id=1, start=DAY, end=DAY - timedelta(days=1))
    with pytest.raises(ValidationError):
        service.build(organization_id=1, start=DAY, end=DAY + timedelta(days=62))


def test_thresholds_must_be_ordered():
    with pytest.raises(ValueError):
        StaffingThresholds(under_ratio=0.4, over_ratio=0.6)
