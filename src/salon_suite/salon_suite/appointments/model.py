from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..common.datetime_utils import hours_between
from ..core.constants import DEFAULT_APPOINTMENT_HOURS
from ..core.enums import AppointmentStatus


@dataclass(frozen=True)
class Appointment:
    appointment_id: int
    organization_id: int
    location_id: int
    client_name: str
    appointment_date: date
    status: AppointmentStatus
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    service_name: Optional[str] = None
    total_price: float = 0.0
    client_phone: Optional[str] = None
    staff_user_id: Optional[int] = None
    checked_in_at: Optional[datetime] = None

    def duration_hours(self) -> float:
        """Booked length in hours; one hour when the times are unknown."""
        if self.start_time is None or self.end_time is None:
            return DEFAULT_APPOINTMENT_HOURS
        return hours_between(self.start_time, self.end_time)

    @property
    def is_checked_in(self) -> bool:
        return self.status == AppointmentStatus.CHECKED_IN or self.checked_in_at is not None
