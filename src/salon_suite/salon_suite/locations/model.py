from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from ..core.constants import (
    DEFAULT_BREAK_MINUTES,
    DEFAULT_LUNCH_MINUTES,
    DEFAULT_PADDING_MINUTES,
    DEFAULT_STYLIST_CAPACITY,
)


@dataclass(frozen=True)
class DayHours:
    """Opening hours for one weekday. Times are 'HH:MM' strings as stored."""

    open: Optional[str] = None
    close: Optional[str] = None
    closed: bool = False


@dataclass(frozen=True)
class Location:
    location_id: int
    organization_id: int
    name: str
    # None means the location never configured its hours table.
    hours: Optional[Mapping[str, DayHours]] = None
    stylist_capacity: Optional[int] = None
    break_minutes_per_day: Optional[int] = None
    lunch_minutes: Optional[int] = None
    appointment_padding_minutes: Optional[int] = None
    is_active: bool = True

    @property
    def capacity(self) -> int:
        return self.stylist_capacity or DEFAULT_STYLIST_CAPACITY

    @property
    def break_minutes(self) -> int:
        return DEFAULT_BREAK_MINUTES if self.break_minutes_per_day is None else self.break_minutes_per_day

    @property
    def lunch(self) -> int:
        return DEFAULT_LUNCH_MINUTES if self.lunch_minutes is None else self.lunch_minutes

    @property
    def padding_minutes(self) -> int:
        if self.appointment_padding_minutes is None:
            return DEFAULT_PADDING_MINUTES
        return self.appointment_padding_minutes
