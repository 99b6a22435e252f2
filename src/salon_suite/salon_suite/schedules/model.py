from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..shifts.model import Shift


@dataclass(frozen=True)
class Schedule:
    """A staff member assigned to a shift at a location on one day."""

    schedule_id: int
    user_id: int
    location_id: int
    work_date: date
    shift_id: int
    note: Optional[str] = None


@dataclass(frozen=True)
class ScheduledShift:
    """Read-model: schedule joined with its shift and staff name."""

    schedule: Schedule
    shift: Shift
    staff_name: str

    def to_dict(self) -> dict:
        return {
            "schedule_id": self.schedule.schedule_id,
            "work_date": self.schedule.work_date.strftime("%Y-%m-%d"),
            "user_id": self.schedule.user_id,
            "staff_name": self.staff_name,
            "location_id": self.schedule.location_id,
            "shift_id": self.shift.shift_id,
            "shift": self.shift.label(),
            "hours": round(self.shift.working_hours(), 2),
            "note": self.schedule.note or "",
        }
