from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import SwapStatus, SwapType


@dataclass(frozen=True)
class ShiftSwap:
    swap_id: int
    organization_id: int
    requester_id: int
    schedule_id: int
    original_date: date
    swap_type: SwapType
    status: SwapStatus
    created_at: datetime
    location_id: Optional[int] = None
    reason: Optional[str] = None
    claimer_id: Optional[int] = None
    manager_id: Optional[int] = None
    manager_notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "swap_id": self.swap_id,
            "requester_id": self.requester_id,
            "schedule_id": self.schedule_id,
            "original_date": self.original_date.strftime("%Y-%m-%d"),
            "location_id": self.location_id,
            "swap_type": self.swap_type.value,
            "reason": self.reason or "",
            "status": self.status.value,
            "claimer_id": self.claimer_id,
            "manager_id": self.manager_id,
            "manager_notes": self.manager_notes or "",
            "created_at": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
            "approved_at": self.approved_at.isoformat(timespec="seconds") if self.approved_at else None,
            "expires_at": self.expires_at.isoformat(timespec="seconds") if self.expires_at else None,
        }
