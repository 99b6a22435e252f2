from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..common.datetime_utils import hours_between


@dataclass(frozen=True)
class Shift:
    """Domain entity: a named shift template (e.g. Opening 08:00-16:00)."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    break_minutes: int = 0

    def working_hours(self) -> float:
        """Shift length minus its break, never below zero."""
        return max(0.0, hours_between(self.start_time, self.end_time) - self.break_minutes / 60)

    def label(self) -> str:
        return f"{self.shift_name} ({self.start_time.strftime('%H:%M')}-{self.end_time.strftime('%H:%M')})"
