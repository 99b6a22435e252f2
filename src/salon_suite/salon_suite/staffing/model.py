from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Optional

from ..core.constants import (
    DEFAULT_STAFFING_OVER_RATIO,
    DEFAULT_STAFFING_TARGET_RATIO,
    DEFAULT_STAFFING_UNDER_RATIO,
)
from ..core.enums import StaffingStatus


@dataclass(frozen=True)
class StaffingThresholds:
    """Demand ratio (booked / scheduled hours) bands."""

    under_ratio: float = DEFAULT_STAFFING_UNDER_RATIO
    over_ratio: float = DEFAULT_STAFFING_OVER_RATIO
    target_ratio: float = DEFAULT_STAFFING_TARGET_RATIO

    def __post_init__(self):
        if not 0 < self.over_ratio < self.under_ratio:
            raise ValueError("Staffing thresholds need 0 < over_ratio < under_ratio")


@dataclass(frozen=True)
class LocationStaffingBalance:
    location_id: int
    location_name: str
    scheduled_staff: int
    scheduled_hours: float
    capacity_hours: float
    booked_hours: float
    appointment_count: int
    demand_ratio: Optional[float]
    status: StaffingStatus
    # Positive: hours short of target; negative: hours to spare.
    hours_delta: float


@dataclass(frozen=True)
class StaffingSuggestion:
    from_location_id: int
    from_location_name: str
    to_location_id: int
    to_location_name: str
    hours: float


@dataclass(frozen=True)
class StaffingBalanceReport:
    start: date
    end: date
    locations: list[LocationStaffingBalance]
    suggestions: list[StaffingSuggestion]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["start"] = self.start.strftime("%Y-%m-%d")
        data["end"] = self.end.strftime("%Y-%m-%d")
        for loc in data["locations"]:
            loc["status"] = loc["status"].value
        return data
