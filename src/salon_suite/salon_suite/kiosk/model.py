from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..appointments.model import Appointment
from ..core.enums import KioskStage


@dataclass
class KioskSession:
    """Check-in state of one kiosk device. Mutated only under the store lock."""

    device_id: str
    location_id: int
    stage: KioskStage = KioskStage.IDLE
    phone: Optional[str] = None
    appointments: list[Appointment] = field(default_factory=list)
    message: Optional[str] = None
    checked_in_count: int = 0
    updated_at: Optional[datetime] = None

    def clear(self, now: datetime) -> None:
        self.stage = KioskStage.IDLE
        self.phone = None
        self.appointments = []
        self.message = None
        self.checked_in_count = 0
        self.updated_at = now

    def to_dict(self) -> dict:
        return {
            "device_id": self.device_id,
            "location_id": self.location_id,
            "stage": self.stage.value,
            "message": self.message,
            "checked_in_count": self.checked_in_count,
            "appointments": [
                {
                    "appointment_id": a.appointment_id,
                    "location_id": a.location_id,
                    "client_name": a.client_name,
                    "service_name": a.service_name,
                    "start_time": a.start_time.strftime("%H:%M") if a.start_time else None,
                    "checked_in": a.is_checked_in,
                }
                for a in self.appointments
            ],
        }
