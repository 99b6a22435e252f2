from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Schedule, ScheduledShift


class ScheduleRepository(Protocol):
    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        raise NotImplementedError

    def upsert(self, *, user_id: int, location_id: int, work_date: date, shift_id: int, note: Optional[str] = None) -> int:
        """Create or update the assignment for (user, date).

        Returns schedule_id.
        """

        raise NotImplementedError

    def reassign(self, *, schedule_id: int, user_id: int) -> bool:
        raise NotImplementedError

    def delete(self, *, schedule_id: int) -> bool:
        raise NotImplementedError

    def list_range(
        self,
        *,
        organization_id: int,
        start: date,
        end: date,
        location_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[ScheduledShift]:
        raise NotImplementedError
