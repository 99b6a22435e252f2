from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import Appointment


class AppointmentRepository(Protocol):
    def list_for_range(
        self,
        *,
        organization_id: int,
        start: date,
        end: date,
        location_id: Optional[int] = None,
        exclude_statuses: Sequence[str] = (),
    ) -> Sequence[Appointment]:
        raise NotImplementedError

    def find_for_phone(self, *, organization_id: int, phone_digits: str, work_date: date) -> Sequence[Appointment]:
        """Appointments on `work_date` whose client phone matches (digits only)."""

        raise NotImplementedError

    def mark_checked_in(self, *, appointment_ids: Sequence[int], checked_in_at: datetime) -> int:
        """Returns the number of rows changed."""

        raise NotImplementedError
