"""Operating-hours arithmetic over a location's weekly hours table."""
from __future__ import annotations

import json
from typing import Mapping, Optional

from ..core.constants import DEFAULT_GROSS_HOURS
from .model import DayHours

DAY_NAMES = ("sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday")

HoursTable = Mapping[str, DayHours]


def parse_hours_json(raw) -> Optional[dict[str, DayHours]]:
    """Decode the stored hours_json column; None when the location has none."""

    if raw is None or raw == "":
        return None
    data = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    if not isinstance(data, dict):
        raise ValueError(f"hours_json must be an object, got {type(data).__name__}")

    table: dict[str, DayHours] = {}
    for day_name, value in data.items():
        if not isinstance(value, dict):
            continue
        table[day_name.lower()] = DayHours(
            open=value.get("open"),
            close=value.get("close"),
            closed=bool(value.get("closed", False)),
        )
    return table


def _clock_minutes(value: str) -> int:
    hour, minute = value.split(":")[:2]
    return int(hour) * 60 + int(minute)


def gross_operating_hours(hours: Optional[HoursTable], weekday: int) -> float:
    """Open hours for a weekday (Sunday=0). Locations without a table default to 8."""

    if hours is None:
        return DEFAULT_GROSS_HOURS

    day = hours.get(DAY_NAMES[weekday])
    if not day or day.closed:
        return 0.0
    if not day.open or not day.close:
        return 0.0

    return (_clock_minutes(day.close) - _clock_minutes(day.open)) / 60


def effective_hours(hours: Optional[HoursTable], weekday: int, break_minutes: int, lunch_minutes: int) -> float:
    """Bookable hours per stylist after breaks and lunch; 0 on closed days."""

    gross = gross_operating_hours(hours, weekday)
    if gross == 0:
        return 0.0

    non_productive = (break_minutes + lunch_minutes) / 60
    return max(0.0, gross - non_productive)


def first_open_gross_hours(hours: Optional[HoursTable]) -> float:
    """Gross hours of the first open weekday, Sunday first; 8 when none is open."""

    for weekday in range(7):
        gross = gross_operating_hours(hours, weekday)
        if gross > 0:
            return gross
    return DEFAULT_GROSS_HOURS
