from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .appointments.mysql_appointment_repository import MySQLAppointmentRepository
from .appointments.repository import AppointmentRepository
from .capacity.service import CapacityService
from .database.connection import DBConfig, DatabaseConnection
from .kiosk.service import KioskService
from .kiosk.session_store import KioskSessionStore
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .meetings.mysql_meeting_repository import MySQLMeetingRepository
from .meetings.repository import MeetingRepository
from .meetings.service import TeamMeetingService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollForecastService
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .schedules.repository import ScheduleRepository
from .schedules.service import ScheduleService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.repository import ShiftRepository
from .staffing.model import StaffingThresholds
from .staffing.service import StaffingBalanceService
from .swaps.mysql_swap_repository import MySQLSwapRepository
from .swaps.repository import SwapRepository
from .swaps.service import SwapService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    locations_repo: LocationRepository
    shifts_repo: ShiftRepository
    schedules_repo: ScheduleRepository
    appointments_repo: AppointmentRepository
    meetings_repo: MeetingRepository
    payroll_repo: PayrollRepository
    swaps_repo: SwapRepository

    auth_service: AuthService
    user_service: UserService
    schedule_service: ScheduleService
    capacity_service: CapacityService
    staffing_service: StaffingBalanceService
    meeting_service: TeamMeetingService
    kiosk_service: KioskService
    payroll_service: PayrollForecastService
    swap_service: SwapService


def build_services(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    locations_repo: LocationRepository,
    shifts_repo: ShiftRepository,
    schedules_repo: ScheduleRepository,
    appointments_repo: AppointmentRepository,
    meetings_repo: MeetingRepository,
    payroll_repo: PayrollRepository,
    swaps_repo: SwapRepository,
    kiosk_store: Optional[KioskSessionStore] = None,
    thresholds: Optional[StaffingThresholds] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory fakes)."""

    return Container(
        conn=conn,
        users_repo=users_repo,
        locations_repo=locations_repo,
        shifts_repo=shifts_repo,
        schedules_repo=schedules_repo,
        appointments_repo=appointments_repo,
        meetings_repo=meetings_repo,
        payroll_repo=payroll_repo,
        swaps_repo=swaps_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        schedule_service=ScheduleService(schedules_repo, shifts_repo, users_repo, locations_repo),
        capacity_service=CapacityService(locations_repo, appointments_repo),
        staffing_service=StaffingBalanceService(
            locations_repo, schedules_repo, appointments_repo, thresholds=thresholds
        ),
        meeting_service=TeamMeetingService(meetings_repo, users_repo),
        kiosk_service=KioskService(kiosk_store or KioskSessionStore(), appointments_repo, locations_repo),
        payroll_service=PayrollForecastService(payroll_repo),
        swap_service=SwapService(swaps_repo, schedules_repo),
    )


def build_container(
    *,
    db_config: dict,
    kiosk_idle_seconds: Optional[int] = None,
    thresholds: Optional[StaffingThresholds] = None,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    store = KioskSessionStore(idle_seconds=kiosk_idle_seconds) if kiosk_idle_seconds else KioskSessionStore()
    return build_services(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        locations_repo=MySQLLocationRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        schedules_repo=MySQLScheduleRepository(conn),
        appointments_repo=MySQLAppointmentRepository(conn),
        meetings_repo=MySQLMeetingRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        swaps_repo=MySQLSwapRepository(conn),
        kiosk_store=store,
        thresholds=thresholds,
    )
