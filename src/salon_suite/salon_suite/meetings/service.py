from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..common.validators import require_int_between
from ..core.constants import (
    DEFAULT_MEETING_CADENCE_DAYS,
    DUE_SOON_WINDOW_DAYS,
    MAX_CADENCE_DAYS,
    MIN_CADENCE_DAYS,
    QUALIFYING_MEETING_TYPES,
)
from ..core.enums import MeetingStatus, Role, role_rank
from ..core.exceptions import AuthorizationError, NotFoundError
from ..users.model import User
from ..users.repository import UserRepository
from ..users.service import SessionUser
from .model import CadenceSettings, Meeting, StaffMeetingInfo, TeamMeetingOverview, TeamMeetingSummary
from .repository import MeetingRepository

logger = logging.getLogger(__name__)

# Sort key for people who have never met: behind everyone with a real gap.
_NEVER_MET_DAYS = 999


def meeting_status(days_since: Optional[int], cadence_days: int) -> MeetingStatus:
    if days_since is None:
        return MeetingStatus.NEVER_MET
    if days_since > cadence_days:
        return MeetingStatus.OVERDUE
    if days_since >= cadence_days - DUE_SOON_WINDOW_DAYS:
        return MeetingStatus.DUE_SOON
    return MeetingStatus.ON_TRACK


def _sort_key(info: StaffMeetingInfo):
    days = info.days_since_last_meeting
    return (info.sort_priority, -(_NEVER_MET_DAYS if days is None else days))


class TeamMeetingService:
    """Who on the team is due for a 1:1, based on each person's cadence."""

    def __init__(self, meetings: MeetingRepository, users: UserRepository):
        self._meetings = meetings
        self._users = users

    def cadence_settings(self, organization_id: int) -> CadenceSettings:
        default = DEFAULT_MEETING_CADENCE_DAYS
        overrides: dict[int, int] = {}
        for user_id, days in self._meetings.list_cadence_rows(organization_id):
            if user_id is None:
                default = days
            else:
                overrides[user_id] = days
        return CadenceSettings(global_default=default, overrides=overrides)

    def _highest_roles(self, staff: list[User]) -> dict[int, str]:
        best: dict[int, str] = {u.user_id: u.role.value for u in staff}
        for user_id, role in self._users.list_roles([u.user_id for u in staff]):
            current = best.get(user_id)
            if current is None or role_rank(role) > role_rank(current):
                best[user_id] = role
        return best

    def overview(self, *, organization_id: int, today: date) -> TeamMeetingOverview:
        staff = list(self._users.list_active(organization_id))
        cadence = self.cadence_settings(organization_id)
        if not staff:
            return TeamMeetingOverview(staff=[], summary=TeamMeetingSummary(), cadence=cadence)

        ids = [u.user_id for u in staff]
        roles = self._highest_roles(staff)

        # Rows come newest first, so the first one seen per person wins.
        last: dict[int, Meeting] = {}
        for m in self._meetings.list_completed_meetings(
            organization_id=organization_id,
            requester_ids=ids,
            meeting_types=QUALIFYING_MEETING_TYPES,
            today=today,
        ):
            last.setdefault(m.requester_id, m)

        upcoming: dict[int, Meeting] = {}
        for m in self._meetings.list_upcoming_meetings(
            organization_id=organization_id, requester_ids=ids, today=today
        ):
            upcoming.setdefault(m.requester_id, m)

        infos = []
        for user in staff:
            last_meeting = last.get(user.user_id)
            next_meeting = upcoming.get(user.user_id)
            days_since = (today - last_meeting.meeting_date).days if last_meeting else None
            cadence_days = cadence.cadence_for(user.user_id)
            infos.append(
                StaffMeetingInfo(
                    user_id=user.user_id,
                    name=user.name,
                    display_name=user.display_name,
                    photo_url=user.photo_url,
                    role=roles.get(user.user_id),
                    last_meeting_date=last_meeting.meeting_date if last_meeting else None,
                    next_meeting_date=next_meeting.meeting_date if next_meeting else None,
                    next_meeting_id=next_meeting.meeting_id if next_meeting else None,
                    days_since_last_meeting=days_since,
                    cadence_days=cadence_days,
                    has_override=user.user_id in cadence.overrides,
                    status=meeting_status(days_since, cadence_days),
                )
            )

        infos.sort(key=_sort_key)
        counts = {status: 0 for status in MeetingStatus}
        for info in infos:
            counts[info.status] += 1

        summary = TeamMeetingSummary(
            on_track=counts[MeetingStatus.ON_TRACK],
            due_soon=counts[MeetingStatus.DUE_SOON],
            overdue=counts[MeetingStatus.OVERDUE],
            never_met=counts[MeetingStatus.NEVER_MET],
            total=len(infos),
        )
        return TeamMeetingOverview(staff=infos, summary=summary, cadence=cadence)

    def update_cadence(self, *, current: SessionUser, user_id: Optional[int], cadence_days) -> int:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("You do not have permission to change meeting cadence")
        days = require_int_between(cadence_days, "Cadence days", MIN_CADENCE_DAYS, MAX_CADENCE_DAYS)

        if user_id is not None:
            user = self._users.get_by_id(int(user_id))
            if not user or user.organization_id != current.organization_id:
                raise NotFoundError("Team member not found")

        self._meetings.upsert_cadence(
            organization_id=current.organization_id,
            user_id=None if user_id is None else int(user_id),
            cadence_days=days,
        )
        logger.info(
            "Meeting cadence set org=%s user=%s days=%s by user_id=%s",
            current.organization_id,
            user_id if user_id is not None else "default",
            days,
            current.user_id,
        )
        return days

    def remove_override(self, *, current: SessionUser, user_id: int) -> None:
        if not current.role.at_least(Role.MANAGER):
            raise AuthorizationError("You do not have permission to change meeting cadence")
        removed = self._meetings.delete_cadence(organization_id=current.organization_id, user_id=int(user_id))
        if not removed:
            raise NotFoundError("No cadence override for this team member")
        logger.info(
            "Meeting cadence override removed org=%s user=%s by user_id=%s",
            current.organization_id,
            user_id,
            current.user_id,
        )
