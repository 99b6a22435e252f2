from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Optional

from ..core.constants import (
    DEFAULT_BREAK_MINUTES,
    DEFAULT_GROSS_HOURS,
    DEFAULT_LUNCH_MINUTES,
    DEFAULT_PADDING_MINUTES,
)


@dataclass(frozen=True)
class ServiceMixItem:
    category: str
    hours: float
    revenue: float
    appointment_count: int
    percentage: int


@dataclass(frozen=True)
class DayCapacity:
    date: str
    day_name: str
    available_hours: float
    booked_hours: float
    utilization_percent: int
    revenue: float
    appointment_count: int
    gap_hours: float
    service_mix: list[ServiceMixItem] = field(default_factory=list)


@dataclass(frozen=True)
class CapacityBreakdown:
    gross_hours_per_stylist: float = DEFAULT_GROSS_HOURS
    break_minutes: int = DEFAULT_BREAK_MINUTES
    lunch_minutes: int = DEFAULT_LUNCH_MINUTES
    padding_minutes: int = DEFAULT_PADDING_MINUTES
    stylist_count: int = 0
    days_in_period: int = 0


@dataclass(frozen=True)
class CapacityReport:
    days: list[DayCapacity]
    total_available_hours: float
    total_booked_hours: float
    total_gap_hours: float
    overall_utilization: int
    total_revenue: float
    total_appointments: int
    avg_hourly_revenue: int
    gap_revenue: int
    service_mix: list[ServiceMixItem]
    peak_day: Optional[DayCapacity]
    low_day: Optional[DayCapacity]
    breakdown: CapacityBreakdown

    @classmethod
    def empty(cls) -> "CapacityReport":
        return cls(
            days=[],
            total_available_hours=0,
            total_booked_hours=0,
            total_gap_hours=0,
            overall_utilization=0,
            total_revenue=0,
            total_appointments=0,
            avg_hourly_revenue=0,
            gap_revenue=0,
            service_mix=[],
            peak_day=None,
            low_day=None,
            breakdown=CapacityBreakdown(),
        )

    def to_dict(self) -> dict:
        return asdict(self)
