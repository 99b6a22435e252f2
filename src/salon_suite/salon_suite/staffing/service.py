from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date

from ..appointments.repository import AppointmentRepository
from ..common.datetime_utils import date_range
from ..common.numbers import floor_half, round_tenth
from ..core.constants import EXCLUDED_CAPACITY_STATUSES
from ..core.enums import StaffingStatus
from ..core.exceptions import ValidationError
from ..locations.model import Location
from ..locations.repository import LocationRepository
from ..schedules.repository import ScheduleRepository
from ..capacity.service import available_hours_for
from .model import LocationStaffingBalance, StaffingBalanceReport, StaffingSuggestion, StaffingThresholds

logger = logging.getLogger(__name__)

MAX_RANGE_DAYS = 62


class StaffingBalanceService:
    """Compares scheduled staff hours against booked demand per location."""

    def __init__(
        self,
        locations: LocationRepository,
        schedules: ScheduleRepository,
        appointments: AppointmentRepository,
        *,
        thresholds: StaffingThresholds | None = None,
    ):
        self._locations = locations
        self._schedules = schedules
        self._appointments = appointments
        self._thresholds = thresholds or StaffingThresholds()

    def classify(self, *, scheduled_hours: float, booked_hours: float) -> StaffingStatus:
        if scheduled_hours <= 0:
            return StaffingStatus.UNSTAFFED if booked_hours > 0 else StaffingStatus.IDLE

        ratio = booked_hours / scheduled_hours
        if ratio > self._thresholds.under_ratio:
            return StaffingStatus.UNDERSTAFFED
        if ratio < self._thresholds.over_ratio:
            return StaffingStatus.OVERSTAFFED
        return StaffingStatus.BALANCED

    def build(self, *, organization_id: int, start: date, end: date) -> StaffingBalanceReport:
        if end < start:
            raise ValidationError("End date must not be before start date")
        if (end - start).days + 1 > MAX_RANGE_DAYS:
            raise ValidationError(f"Date range is limited to {MAX_RANGE_DAYS} days")

        locations = list(self._locations.list_active(organization_id))
        by_id = {loc.location_id: loc for loc in locations}

        scheduled_hours: dict[int, float] = defaultdict(float)
        scheduled_staff: dict[int, set[int]] = defaultdict(set)
        for row in self._schedules.list_range(organization_id=organization_id, start=start, end=end):
            loc_id = row.schedule.location_id
            if loc_id not in by_id:
                continue
            scheduled_hours[loc_id] += row.shift.working_hours()
            scheduled_staff[loc_id].add(row.schedule.user_id)

        booked_hours: dict[int, float] = defaultdict(float)
        appointment_count: dict[int, int] = defaultdict(int)
        appointments = self._appointments.list_for_range(
            organization_id=organization_id,
            start=start,
            end=end,
            exclude_statuses=EXCLUDED_CAPACITY_STATUSES,
        )
        for apt in appointments:
            loc = by_id.get(apt.location_id)
            if loc is None:
                continue
            # Turnover padding between clients occupies the chair too.
            booked_hours[loc.location_id] += apt.duration_hours() + loc.padding_minutes / 60
            appointment_count[loc.location_id] += 1

        balances = [
            self._balance_for(
                loc,
                start=start,
                end=end,
                scheduled=scheduled_hours[loc.location_id],
                staff=len(scheduled_staff[loc.location_id]),
                booked=booked_hours[loc.location_id],
                count=appointment_count[loc.location_id],
            )
            for loc in locations
        ]
        suggestions = self.suggest_moves(balances)

        logger.debug("Staffing balance org=%s %s..%s locations=%d suggestions=%d", organization_id, start, end, len(balances), len(suggestions))
        return StaffingBalanceReport(start=start, end=end, locations=balances, suggestions=suggestions)

    def _balance_for(
        self,
        loc: Location,
        *,
        start: date,
        end: date,
        scheduled: float,
        staff: int,
        booked: float,
        count: int,
    ) -> LocationStaffingBalance:
        capacity = sum(available_hours_for([loc], day) for day in date_range(start, end))
        ratio = round(booked / scheduled, 3) if scheduled > 0 else None

        return LocationStaffingBalance(
            location_id=loc.location_id,
            location_name=loc.name,
            scheduled_staff=staff,
            scheduled_hours=round_tenth(scheduled),
            capacity_hours=round_tenth(capacity),
            booked_hours=round_tenth(booked),
            appointment_count=count,
            demand_ratio=ratio,
            status=self.classify(scheduled_hours=scheduled, booked_hours=booked),
            hours_delta=round_tenth(booked - scheduled * self._thresholds.target_ratio),
        )

    @staticmethod
    def suggest_moves(balances: list[LocationStaffingBalance]) -> list[StaffingSuggestion]:
        """Greedily pair the largest surplus with the largest deficit."""

        donors = [
            [b, -b.hours_delta]
            for b in balances
            if b.status == StaffingStatus.OVERSTAFFED and b.hours_delta < 0
        ]
        receivers = [
            [b, b.hours_delta]
            for b in balances
            if b.status in (StaffingStatus.UNDERSTAFFED, StaffingStatus.UNSTAFFED) and b.hours_delta > 0
        ]
        donors.sort(key=lambda pair: pair[1], reverse=True)
        receivers.sort(key=lambda pair: pair[1], reverse=True)

        suggestions: list[StaffingSuggestion] = []
        d = r = 0
        while d < len(donors) and r < len(receivers):
            donor, surplus = donors[d]
            receiver, deficit = receivers[r]
            hours = floor_half(min(surplus, deficit))
            if hours <= 0:
                break

            suggestions.append(
                StaffingSuggestion(
                    from_location_id=donor.location_id,
                    from_location_name=donor.location_name,
                    to_location_id=receiver.location_id,
                    to_location_name=receiver.location_name,
                    hours=hours,
                )
            )
            donors[d][1] -= hours
            receivers[r][1] -= hours
            if donors[d][1] < 0.5:
                d += 1
            if receivers[r][1] < 0.5:
                r += 1

        return suggestions
