from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_clock(value: str | time | None) -> Optional[time]:
    """Parse 'HH:MM' or 'HH:MM:SS' into a time; None for blank input."""
    if value is None:
        return None
    if isinstance(value, time):
        return value
    v = value.strip()
    if not v:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time (HH:MM): {value!r}")


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def hours_between(start: time, end: time) -> float:
    return (minutes_of_day(end) - minutes_of_day(start)) / 60


def date_range(start: date, end: date):
    """Inclusive range of dates."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def sunday_weekday(day: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6, matching location hours tables."""
    return (day.weekday() + 1) % 7


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
