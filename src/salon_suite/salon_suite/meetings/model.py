from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..core.constants import DEFAULT_MEETING_CADENCE_DAYS
from ..core.enums import MeetingStatus


@dataclass(frozen=True)
class Meeting:
    meeting_id: int
    organization_id: int
    requester_id: int
    meeting_date: date
    meeting_type: str
    status: str


@dataclass(frozen=True)
class CadenceSettings:
    global_default: int = DEFAULT_MEETING_CADENCE_DAYS
    # user_id -> cadence days
    overrides: dict[int, int] = field(default_factory=dict)

    def cadence_for(self, user_id: int) -> int:
        return self.overrides.get(user_id, self.global_default)


@dataclass(frozen=True)
class StaffMeetingInfo:
    user_id: int
    name: str
    display_name: Optional[str]
    photo_url: Optional[str]
    role: Optional[str]
    last_meeting_date: Optional[date]
    next_meeting_date: Optional[date]
    next_meeting_id: Optional[int]
    days_since_last_meeting: Optional[int]
    cadence_days: int
    has_override: bool
    status: MeetingStatus

    @property
    def sort_priority(self) -> int:
        return self.status.sort_priority

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "display_name": self.display_name,
            "photo_url": self.photo_url,
            "role": self.role,
            "last_meeting_date": self.last_meeting_date.isoformat() if self.last_meeting_date else None,
            "next_meeting_date": self.next_meeting_date.isoformat() if self.next_meeting_date else None,
            "next_meeting_id": self.next_meeting_id,
            "days_since_last_meeting": self.days_since_last_meeting,
            "cadence_days": self.cadence_days,
            "has_override": self.has_override,
            "status": self.status.value,
            "sort_priority": self.sort_priority,
        }


@dataclass(frozen=True)
class TeamMeetingSummary:
    on_track: int = 0
    due_soon: int = 0
    overdue: int = 0
    never_met: int = 0
    total: int = 0


@dataclass(frozen=True)
class TeamMeetingOverview:
    staff: list[StaffMeetingInfo]
    summary: TeamMeetingSummary
    cadence: CadenceSettings

    def to_dict(self) -> dict:
        return {
            "staff": [s.to_dict() for s in self.staff],
            "summary": self.summary.__dict__.copy(),
            "cadence": {
                "global_default": self.cadence.global_default,
                "overrides": {str(k): v for k, v in self.cadence.overrides.items()},
            },
        }
