from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import Role, SwapStatus, SwapType
from ..core.exceptions import AuthorizationError, InvalidTransitionError, NotFoundError, ValidationError
from ..schedules.repository import ScheduleRepository
from ..users.service import SessionUser
from .model import ShiftSwap
from .repository import SwapRepository

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = (SwapStatus.OPEN, SwapStatus.CLAIMED, SwapStatus.PENDING_APPROVAL)
CANCELLABLE_STATUSES = (SwapStatus.OPEN, SwapStatus.PENDING_APPROVAL)


class SwapService:
    """Shift swap board: staff post and claim shifts, managers approve."""

    def __init__(
        self,
        swaps: SwapRepository,
        schedules: ScheduleRepository,
        *,
        clock: Callable[[], datetime] = now_local,
    ):
        self._swaps = swaps
        self._schedules = schedules
        self._clock = clock

    def _get(self, current: SessionUser, swap_id: int) -> ShiftSwap:
        swap = self._swaps.get_by_id(int(swap_id))
        if not swap or swap.organization_id != current.organization_id:
            raise NotFoundError("Shift swap not found")
        return swap

    def _ensure_free(self, current: SessionUser, user_id: int, swap: ShiftSwap) -> None:
        taken = self._schedules.list_range(
            organization_id=current.organization_id,
            start=swap.original_date,
            end=swap.original_date,
            user_id=user_id,
        )
        if taken:
            raise ValidationError("You are already scheduled on that day")

    def list_swaps(
        self,
        *,
        current: SessionUser,
        status: Optional[SwapStatus] = None,
        mine: bool = False,
    ) -> Sequence[ShiftSwap]:
        self.expire_stale(self._clock())
        return self._swaps.list_for_org(
            organization_id=current.organization_id,
            statuses=(status,) if status else ACTIVE_STATUSES,
            requester_id=current.user_id if mine else None,
        )

    def create(
        self,
        *,
        current: SessionUser,
        schedule_id: int,
        swap_type: SwapType,
        reason: str = "",
        expires_at: Optional[datetime] = None,
    ) -> int:
        schedule = self._schedules.get_by_id(int(schedule_id))
        if not schedule or schedule.user_id != current.user_id:
            raise NotFoundError("Shift not found")

        now = self._clock()
        if schedule.work_date <= now.date():
            raise ValidationError("Only future shifts can be posted for swap")
        if self._swaps.find_active_for_schedule(schedule.schedule_id):
            raise ValidationError("This shift is already on the swap board")

        # Unclaimed posts drop off the board when the shift day starts.
        default_expiry = datetime.combine(schedule.work_date, time.min)
        if expires_at is not None and expires_at <= now:
            raise ValidationError("Expiry must be in the future")

        swap_id = self._swaps.create(
            organization_id=current.organization_id,
            requester_id=current.user_id,
            schedule_id=schedule.schedule_id,
            original_date=schedule.work_date,
            location_id=schedule.location_id,
            swap_type=swap_type,
            reason=(reason or "").strip() or None,
            expires_at=min(expires_at, default_expiry) if expires_at else default_expiry,
        )
        logger.info("Swap %s posted by user_id=%s schedule=%s type=%s", swap_id, current.user_id, schedule_id, swap_type.value)
        return swap_id

    def claim(self, *, current: SessionUser, swap_id: int) -> None:
        swap = self._get(current, swap_id)
        if swap.requester_id == current.user_id:
            raise ValidationError("You cannot claim your own shift")
        if swap.status != SwapStatus.OPEN:
            raise InvalidTransitionError(f"Swap is {swap.status.value}, not open")
        self._ensure_free(current, current.user_id, swap)

        if not self._swaps.claim(swap_id=swap.swap_id, claimer_id=current.user_id):
            raise InvalidTransitionError("Swap was claimed by someone else")
        logger.info("Swap %s claimed by user_id=%s", swap.swap_id, current.user_id)

    def approve(self, *, current: SessionUser, swap_id: int, notes: str = "") -> None:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("Only managers can approve swaps")
        swap = self._get(current, swap_id)
        if swap.status != SwapStatus.PENDING_APPROVAL or swap.claimer_id is None:
            raise InvalidTransitionError(f"Swap is {swap.status.value}, not pending approval")
        self._ensure_free(current, swap.claimer_id, swap)

        # The conditional status update decides races with deny/cancel;
        # the shift only moves once this approval has won.
        decided = self._swaps.decide(
            swap_id=swap.swap_id,
            status=SwapStatus.APPROVED,
            manager_id=current.user_id,
            manager_notes=(notes or "").strip() or None,
            approved_at=self._clock(),
        )
        if not decided:
            raise InvalidTransitionError("Swap was already decided")

        if not self._schedules.reassign(schedule_id=swap.schedule_id, user_id=swap.claimer_id):
            self._swaps.set_status(
                swap_id=swap.swap_id,
                status=SwapStatus.PENDING_APPROVAL,
                from_statuses=(SwapStatus.APPROVED,),
            )
            logger.error("Swap %s approved but schedule %s could not be reassigned", swap.swap_id, swap.schedule_id)
            raise ValidationError("Failed to reassign the shift")
        logger.info(
            "Swap %s approved by user_id=%s: schedule %s -> user_id=%s",
            swap.swap_id,
            current.user_id,
            swap.schedule_id,
            swap.claimer_id,
        )

    def deny(self, *, current: SessionUser, swap_id: int, notes: str = "") -> None:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("Only managers can deny swaps")
        swap = self._get(current, swap_id)
        if swap.status != SwapStatus.PENDING_APPROVAL:
            raise InvalidTransitionError(f"Swap is {swap.status.value}, not pending approval")

        decided = self._swaps.decide(
            swap_id=swap.swap_id,
            status=SwapStatus.DENIED,
            manager_id=current.user_id,
            manager_notes=(notes or "").strip() or None,
            approved_at=None,
        )
        if not decided:
            raise InvalidTransitionError("Swap was already decided")
        logger.info("Swap %s denied by user_id=%s", swap.swap_id, current.user_id)

    def cancel(self, *, current: SessionUser, swap_id: int) -> None:
        swap = self._get(current, swap_id)
        if swap.requester_id != current.user_id:
            raise AuthorizationError("Only the requester can cancel this swap")
        if swap.status not in CANCELLABLE_STATUSES:
            raise InvalidTransitionError(f"Swap is {swap.status.value} and can no longer be cancelled")

        if not self._swaps.set_status(
            swap_id=swap.swap_id, status=SwapStatus.CANCELLED, from_statuses=CANCELLABLE_STATUSES
        ):
            raise InvalidTransitionError("Swap changed before it could be cancelled")
        logger.info("Swap %s cancelled by user_id=%s", swap.swap_id, current.user_id)

    def expire_stale(self, now: datetime) -> int:
        count = self._swaps.expire_open(now=now)
        if count:
            logger.info("Expired %d open swap(s)", count)
        return count
