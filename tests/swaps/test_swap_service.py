from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from src.salon_suite.salon_suite.core.enums import Role, SwapStatus, SwapType
from src.salon_suite.salon_suite.core.exceptions import (
    AuthorizationError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from src.salon_suite.salon_suite.shifts.model import Shift
from src.salon_suite.salon_suite.swaps.service import SwapService
from src.salon_suite.salon_suite.users.service import SessionUser
from tests.fakes import InMemorySchedules, InMemoryShifts, InMemorySwaps, InMemoryUsers, make_user

REQUESTER = SessionUser(user_id=1, organization_id=1, name="Sam", role=Role.STAFF)
CLAIMER = SessionUser(user_id=2, organization_id=1, name="Alex", role=Role.STAFF)
MANAGER = SessionUser(user_id=3, organization_id=1, name="Morgan", role=Role.MANAGER)
OUTSIDER = SessionUser(user_id=4, organization_id=2, name="Other", role=Role.ADMIN)


@pytest.fixture
def setup(clock):
    users = InMemoryUsers([make_user(1), make_user(2), make_user(3, Role.MANAGER), make_user(4, Role.ADMIN, org=2)])
    shifts = InMemoryShifts([Shift(shift_id=1, shift_name="Mid", start_time=time(11, 0), end_time=time(19, 0))])
    schedules = InMemorySchedules(users, shifts)
    ids = {
        "future": schedules.add(user_id=1, location_id=1, work_date=date(2026, 3, 6), shift_id=1),
        "today": schedules.add(user_id=1, location_id=1, work_date=date(2026, 3, 4), shift_id=1),
        "claimer_busy": schedules.add(user_id=2, location_id=1, work_date=date(2026, 3, 7), shift_id=1),
        "same_day": schedules.add(user_id=1, location_id=2, work_date=date(2026, 3, 7), shift_id=1),
    }
    swaps = InMemorySwaps()
    return SwapService(swaps, schedules, clock=clock), swaps, schedules, ids


def test_post_claim_approve_reassigns_shift(setup, fixed_now):
    service, swaps, schedules, ids = setup

    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY, reason=" family ")
    swap = swaps.get_by_id(swap_id)
    assert swap.status == SwapStatus.OPEN
    assert swap.reason == "family"
    assert swap.expires_at == datetime(2026, 3, 6, 0, 0)

    service.claim(current=CLAIMER, swap_id=swap_id)
    assert swaps.get_by_id(swap_id).status == SwapStatus.PENDING_APPROVAL

    service.approve(current=MANAGER, swap_id=swap_id, notes="ok")
    swap = swaps.get_by_id(swap_id)
    assert swap.status == SwapStatus.APPROVED
    assert swap.manager_id == 3
    assert swap.approved_at == fixed_now
    assert schedules.get_by_id(ids["future"]).user_id == 2


def test_create_rules(setup):
    service, _, _, ids = setup

    with pytest.raises(ValidationError):
        service.create(current=REQUESTER, schedule_id=ids["today"], swap_type=SwapType.COVER)
    with pytest.raises(NotFoundError):
        service.create(current=REQUESTER, schedule_id=ids["claimer_busy"], swap_type=SwapType.COVER)

    service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.COVER)
    with pytest.raises(ValidationError):
        service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.SWAP)


def test_custom_expiry(setup, fixed_now):
    service, swaps, _, ids = setup
    swap_type = SwapType.SWAP

    early = fixed_now + timedelta(hours=6)
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=swap_type, expires_at=early)
    assert swaps.get_by_id(swap_id).expires_at == early

    with pytest.raises(ValidationError):
        service.create(
            current=REQUESTER, schedule_id=ids["same_day"], swap_type=swap_type, expires_at=fixed_now - timedelta(hours=1)
        )


def test_claim_rules(setup):
    service, _, _, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)

    with pytest.raises(ValidationError):
        service.claim(current=REQUESTER, swap_id=swap_id)

    service.claim(current=CLAIMER, swap_id=swap_id)
    with pytest.raises(InvalidTransitionError):
        service.claim(current=MANAGER, swap_id=swap_id)


def test_cannot_claim_a_day_you_already_work(setup):
    service, _, _, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["same_day"], swap_type=SwapType.COVER)

    with pytest.raises(ValidationError):
        service.claim(current=CLAIMER, swap_id=swap_id)


def test_approval_needs_manager_and_pending_swap(setup):
    service, _, _, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)

    with pytest.raises(InvalidTransitionError):
        service.approve(current=MANAGER, swap_id=swap_id)

    service.claim(current=CLAIMER, swap_id=swap_id)
    with pytest.raises(AuthorizationError):
        service.approve(current=CLAIMER, swap_id=swap_id)
    with pytest.raises(NotFoundError):
        service.approve(current=OUTSIDER, swap_id=swap_id)


def test_deny_keeps_original_assignment(setup):
    service, swaps, schedules, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)
    service.claim(current=CLAIMER, swap_id=swap_id)

    service.deny(current=MANAGER, swap_id=swap_id, notes="short staffed")

    swap = swaps.get_by_id(swap_id)
    assert swap.status == SwapStatus.DENIED
    assert swap.manager_notes == "short staffed"
    assert swap.approved_at is None
    assert schedules.get_by_id(ids["future"]).user_id == 1


def test_cancel(setup):
    service, swaps, _, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)

    with pytest.raises(AuthorizationError):
        service.cancel(current=CLAIMER, swap_id=swap_id)

    service.claim(current=CLAIMER, swap_id=swap_id)
    service.cancel(current=REQUESTER, swap_id=swap_id)
    assert swaps.get_by_id(swap_id).status == SwapStatus.CANCELLED

    with pytest.raises(InvalidTransitionError):
        service.cancel(current=REQUESTER, swap_id=swap_id)


def test_stale_open_swaps_expire(setup, clock):
    service, swaps, _, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)
    assert [s.swap_id for s in service.list_swaps(current=CLAIMER)] == [swap_id]

    clock.now = datetime(2026, 3, 6, 0, 1)
    assert service.list_swaps(current=CLAIMER) == []
    assert swaps.get_by_id(swap_id).status == SwapStatus.EXPIRED
    assert service.expire_stale(clock.now) == 0


class DenyWinsSwaps(InMemorySwaps):
    """A manager's deny lands between the approval's read and its write."""

    def decide(self, *, swap_id, status, manager_id, manager_notes, approved_at) -> bool:
        if status == SwapStatus.APPROVED:
            super().decide(
                swap_id=swap_id, status=SwapStatus.DENIED, manager_id=9, manager_notes=None, approved_at=None
            )
        return super().decide(
            swap_id=swap_id, status=status, manager_id=manager_id, manager_notes=manager_notes, approved_at=approved_at
        )


def test_losing_approval_leaves_shift_with_requester(setup, clock):
    _, _, schedules, ids = setup
    swaps = DenyWinsSwaps()
    service = SwapService(swaps, schedules, clock=clock)

    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)
    service.claim(current=CLAIMER, swap_id=swap_id)

    with pytest.raises(InvalidTransitionError):
        service.approve(current=MANAGER, swap_id=swap_id)

    assert swaps.get_by_id(swap_id).status == SwapStatus.DENIED
    assert schedules.get_by_id(ids["future"]).user_id == 1


def test_failed_reassign_puts_swap_back_to_pending(setup):
    service, swaps, schedules, ids = setup
    swap_id = service.create(current=REQUESTER, schedule_id=ids["future"], swap_type=SwapType.GIVEAWAY)
    service.claim(current=CLAIMER, swap_id=swap_id)
    schedules.reassign = lambda **kwargs: False

    with pytest.raises(ValidationError):
        service.approve(current=MANAGER, swap_id=swap_id)
    assert swaps.get_by_id(swap_id).status == SwapStatus.PENDING_APPROVAL
