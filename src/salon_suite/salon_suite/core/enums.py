from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Staff roles used for authorization. Ordered by `rank`."""

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    def at_least(self, other: "Role") -> bool:
        return self.rank >= other.rank


_ROLE_RANK = {
    Role.SUPER_ADMIN: 4,
    Role.ADMIN: 3,
    Role.MANAGER: 2,
    Role.STAFF: 1,
}


def role_rank(value: str | None) -> int:
    """Rank for a raw role string; unknown roles rank 0."""

    try:
        return Role(value).rank
    except ValueError:
        return 0


class AppointmentStatus(str, Enum):
    BOOKED = "booked"
    CONFIRMED = "confirmed"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


class CapacityPeriod(str, Enum):
    TOMORROW = "tomorrow"
    SEVEN_DAYS = "7days"
    THIRTY_DAYS = "30days"

    @property
    def days(self) -> int:
        return {"tomorrow": 1, "7days": 7, "30days": 30}[self.value]


class StaffingStatus(str, Enum):
    UNDERSTAFFED = "understaffed"
    BALANCED = "balanced"
    OVERSTAFFED = "overstaffed"
    UNSTAFFED = "unstaffed"
    IDLE = "idle"


class MeetingStatus(str, Enum):
    """Cadence status of a staff member's 1:1 meetings."""

    ON_TRACK = "on-track"
    DUE_SOON = "due-soon"
    OVERDUE = "overdue"
    NEVER_MET = "never-met"

    @property
    def sort_priority(self) -> int:
        return {
            MeetingStatus.OVERDUE: 0,
            MeetingStatus.DUE_SOON: 1,
            MeetingStatus.NEVER_MET: 2,
            MeetingStatus.ON_TRACK: 3,
        }[self]


class KioskStage(str, Enum):
    IDLE = "idle"
    LOOKUP = "lookup"
    CONFIRM = "confirm"
    WRONG_LOCATION = "wrong_location"
    SUCCESS = "success"
    ERROR = "error"


class PayType(str, Enum):
    HOURLY = "hourly"
    HOURLY_PLUS_COMMISSION = "hourly_plus_commission"
    SALARY = "salary"
    SALARY_PLUS_COMMISSION = "salary_plus_commission"
    COMMISSION = "commission"


class SwapType(str, Enum):
    SWAP = "swap"
    COVER = "cover"
    GIVEAWAY = "giveaway"


class SwapStatus(str, Enum):
    """Lifecycle of a shift swap request."""

    OPEN = "open"
    CLAIMED = "claimed"
    PENDING_APPROVAL = "pending_approval"
    APPROVED = "approved"
    DENIED = "denied"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
