from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SwapStatus, SwapType
from .model import ShiftSwap


class SwapRepository(Protocol):
    def create(
        self,
        *,
        organization_id: int,
        requester_id: int,
        schedule_id: int,
        original_date: date,
        location_id: Optional[int],
        swap_type: SwapType,
        reason: Optional[str],
        expires_at: Optional[datetime],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        raise NotImplementedError

    def list_for_org(
        self,
        *,
        organization_id: int,
        statuses: Sequence[SwapStatus] = (),
        requester_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[ShiftSwap]:
        raise NotImplementedError

    def find_active_for_schedule(self, schedule_id: int) -> Optional[ShiftSwap]:
        """An open or pending swap for this schedule, if any."""

        raise NotImplementedError

    def claim(self, *, swap_id: int, claimer_id: int) -> bool:
        """Open -> pending_approval. False when the swap is no longer open."""

        raise NotImplementedError

    def decide(
        self,
        *,
        swap_id: int,
        status: SwapStatus,
        manager_id: int,
        manager_notes: Optional[str],
        approved_at: Optional[datetime],
    ) -> bool:
        raise NotImplementedError

    def set_status(self, *, swap_id: int, status: SwapStatus, from_statuses: Sequence[SwapStatus]) -> bool:
        raise NotImplementedError

    def expire_open(self, *, now: datetime) -> int:
        """Mark open swaps whose expires_at has passed as expired; returns how many."""

        raise NotImplementedError
