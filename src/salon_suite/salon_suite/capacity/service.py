from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Optional, Sequence

from ..appointments.categorization import service_category
from ..appointments.repository import AppointmentRepository
from ..common.datetime_utils import sunday_weekday
from ..common.numbers import round_half_up, round_tenth
from ..core.constants import EXCLUDED_CAPACITY_STATUSES
from ..core.enums import CapacityPeriod
from ..locations.hours import effective_hours, first_open_gross_hours
from ..locations.model import Location
from ..locations.repository import LocationRepository
from .model import CapacityBreakdown, CapacityReport, DayCapacity, ServiceMixItem

logger = logging.getLogger(__name__)


@dataclass
class _MixTotals:
    hours: float = 0.0
    revenue: float = 0.0
    count: int = 0


@dataclass
class _DayTotals:
    available_hours: float
    booked_hours: float = 0.0
    revenue: float = 0.0
    count: int = 0
    mix: dict[str, _MixTotals] = field(default_factory=dict)


def period_dates(period: CapacityPeriod, today: date) -> list[date]:
    """The reporting window always starts tomorrow."""
    return [today + timedelta(days=i + 1) for i in range(period.days)]


def available_hours_for(locations: Sequence[Location], day: date) -> float:
    weekday = sunday_weekday(day)
    total = 0.0
    for loc in locations:
        hours = effective_hours(loc.hours, weekday, loc.break_minutes, loc.lunch)
        total += hours * loc.capacity
    return total


def _mix_items(mix: dict[str, _MixTotals], denominator: float, *, zero_when_empty: bool) -> list[ServiceMixItem]:
    items = []
    for category, totals in mix.items():
        if zero_when_empty and denominator <= 0:
            percentage = 0
        else:
            percentage = round_half_up(totals.hours / denominator * 100)
        items.append(
            ServiceMixItem(
                category=category,
                hours=round_tenth(totals.hours),
                revenue=totals.revenue,
                appointment_count=totals.count,
                percentage=percentage,
            )
        )
    # sorted() is stable, so equal hours keep first-seen order.
    return sorted(items, key=lambda item: item.hours, reverse=True)


class CapacityService:
    """Forward-looking chair utilization: booked appointment hours vs. bookable hours."""

    def __init__(self, locations: LocationRepository, appointments: AppointmentRepository):
        self._locations = locations
        self._appointments = appointments

    def _filter_locations(self, organization_id: int, location_id: Optional[int]) -> list[Location]:
        locations = list(self._locations.list_active(organization_id))
        if location_id is None:
            return locations
        return [loc for loc in locations if loc.location_id == int(location_id)]

    def build(
        self,
        *,
        organization_id: int,
        period: CapacityPeriod,
        today: date,
        location_id: Optional[int] = None,
    ) -> CapacityReport:
        locations = self._filter_locations(organization_id, location_id)
        if not locations:
            return CapacityReport.empty()

        dates = period_dates(period, today)
        appointments = self._appointments.list_for_range(
            organization_id=organization_id,
            start=dates[0],
            end=dates[-1],
            location_id=location_id,
            exclude_statuses=EXCLUDED_CAPACITY_STATUSES,
        )

        by_date = {d: _DayTotals(available_hours=available_hours_for(locations, d)) for d in dates}

        for apt in appointments:
            totals = by_date.get(apt.appointment_date)
            if totals is None:
                continue

            duration = apt.duration_hours()
            price = apt.total_price or 0.0
            totals.booked_hours += duration
            totals.revenue += price
            totals.count += 1

            mix = totals.mix.setdefault(service_category(apt.service_name), _MixTotals())
            mix.hours += duration
            mix.revenue += price
            mix.count += 1

        days = [self._build_day(d, by_date[d]) for d in dates]
        report = self._summarize(days, locations)
        logger.debug(
            "Capacity org=%s period=%s location=%s utilization=%s%%",
            organization_id,
            period.value,
            location_id,
            report.overall_utilization,
        )
        return report

    @staticmethod
    def _build_day(day: date, totals: _DayTotals) -> DayCapacity:
        if totals.available_hours > 0:
            utilization = round_half_up(totals.booked_hours / totals.available_hours * 100)
        else:
            utilization = 0

        return DayCapacity(
            date=day.strftime("%Y-%m-%d"),
            day_name=day.strftime("%a"),
            available_hours=round_tenth(totals.available_hours),
            booked_hours=round_tenth(totals.booked_hours),
            utilization_percent=utilization,
            revenue=totals.revenue,
            appointment_count=totals.count,
            gap_hours=round_tenth(totals.available_hours - totals.booked_hours),
            service_mix=_mix_items(totals.mix, totals.booked_hours or 1, zero_when_empty=False),
        )

    @staticmethod
    def _summarize(days: list[DayCapacity], locations: list[Location]) -> CapacityReport:
        total_available = sum(d.available_hours for d in days)
        total_booked = sum(d.booked_hours for d in days)
        total_gap = total_available - total_booked
        total_revenue = sum(d.revenue for d in days)
        total_appointments = sum(d.appointment_count for d in days)

        overall = round_half_up(total_booked / total_available * 100) if total_available > 0 else 0
        avg_hourly = round_half_up(total_revenue / total_booked) if total_booked > 0 else 0
        gap_revenue = round_half_up(total_gap * avg_hourly)

        aggregated: dict[str, _MixTotals] = {}
        for day in days:
            for item in day.service_mix:
                mix = aggregated.setdefault(item.category, _MixTotals())
                mix.hours += item.hours
                mix.revenue += item.revenue
                mix.count += item.appointment_count

        # Closed days (no capacity) never count as peak or low.
        active = [d for d in days if d.available_hours > 0]
        peak = None
        low = None
        for day in active:
            if peak is None or day.utilization_percent > peak.utilization_percent:
                peak = day
            if low is None or day.utilization_percent < low.utilization_percent:
                low = day

        count = len(locations)
        breakdown = CapacityBreakdown(
            gross_hours_per_stylist=round_tenth(first_open_gross_hours(locations[0].hours)),
            break_minutes=round_half_up(sum(loc.break_minutes for loc in locations) / count),
            lunch_minutes=round_half_up(sum(loc.lunch for loc in locations) / count),
            padding_minutes=round_half_up(sum(loc.padding_minutes for loc in locations) / count),
            stylist_count=sum(loc.capacity for loc in locations),
            days_in_period=len(days),
        )

        return CapacityReport(
            days=days,
            total_available_hours=round_tenth(total_available),
            total_booked_hours=round_tenth(total_booked),
            total_gap_hours=round_tenth(total_gap),
            overall_utilization=overall,
            total_revenue=total_revenue,
            total_appointments=total_appointments,
            avg_hourly_revenue=avg_hourly,
            gap_revenue=gap_revenue,
            service_mix=_mix_items(aggregated, total_booked, zero_when_empty=True),
            peak_day=peak,
            low_day=low,
            breakdown=breakdown,
        )
