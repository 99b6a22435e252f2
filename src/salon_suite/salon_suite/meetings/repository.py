from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Meeting


class MeetingRepository(Protocol):
    def list_completed_meetings(
        self,
        *,
        organization_id: int,
        requester_ids: Sequence[int],
        meeting_types: Sequence[str],
        today: date,
    ) -> Sequence[Meeting]:
        """Meetings that count as held: completed, or confirmed with a past date.

        Newest first.
        """

        raise NotImplementedError

    def list_upcoming_meetings(
        self,
        *,
        organization_id: int,
        requester_ids: Sequence[int],
        today: date,
    ) -> Sequence[Meeting]:
        """Pending/confirmed meetings on or after today, soonest first."""

        raise NotImplementedError

    def list_cadence_rows(self, organization_id: int) -> Sequence[tuple[Optional[int], int]]:
        """(user_id or None for the org default, cadence_days)."""

        raise NotImplementedError

    def upsert_cadence(self, *, organization_id: int, user_id: Optional[int], cadence_days: int) -> None:
        raise NotImplementedError

    def delete_cadence(self, *, organization_id: int, user_id: int) -> bool:
        raise NotImplementedError
