from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..locations.repository import LocationRepository
from ..shifts.repository import ShiftRepository
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .model import ScheduledShift
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


class ScheduleService:
    def __init__(
        self,
        schedules: ScheduleRepository,
        shifts: ShiftRepository,
        users: UserRepository,
        locations: LocationRepository,
    ):
        self._schedules = schedules
        self._shifts = shifts
        self._users = users
        self._locations = locations

    def assign(
        self,
        *,
        current: SessionUser,
        user_id: int,
        location_id: int,
        work_date: date,
        shift_id: int,
        note: Optional[str] = None,
    ) -> int:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("Only managers can assign shifts")

        user = self._users.get_by_id(int(user_id))
        if not user or user.organization_id != current.organization_id or not user.is_active:
            raise ValidationError("Team member not found")

        location = self._locations.get_by_id(int(location_id))
        if not location or location.organization_id != current.organization_id:
            raise ValidationError("Location not found")

        if not self._shifts.get_by_id(int(shift_id)):
            raise ValidationError("Shift not found")

        note = note.strip() if note else None
        schedule_id = self._schedules.upsert(
            user_id=user.user_id,
            location_id=location.location_id,
            work_date=work_date,
            shift_id=int(shift_id),
            note=note,
        )
        logger.info("Assigned user_id=%s to shift_id=%s at location_id=%s on %s", user.user_id, shift_id, location.location_id, work_date)
        return schedule_id

    def delete(self, *, current: SessionUser, schedule_id: int) -> None:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("Only managers can remove shifts")

        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule:
            raise NotFoundError("Schedule not found")
        owner = self._users.get_by_id(schedule.user_id)
        if not owner or owner.organization_id != current.organization_id:
            raise NotFoundError("Schedule not found")

        if not self._schedules.delete(schedule_id=int(schedule_id)):
            raise ValidationError("Failed to remove schedule")

    def list_range(
        self,
        *,
        current: SessionUser,
        start: date,
        end: date,
        location_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[ScheduledShift]:
        if end < start:
            raise ValidationError("End date must not be before start date")
        # Staff only see their own shifts.
        if not current.role.at_least(Role.MANAGER):
            user_id = current.user_id
        return self._schedules.list_range(
            organization_id=current.organization_id,
            start=start,
            end=end,
            location_id=location_id,
            user_id=user_id,
        )
