from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Optional

from ..core.constants import ESTIMATED_TAX_RATE
from ..core.exceptions import ValidationError
from .calculator.base import CompensationCalculator
from .calculator.standard_calculator import StandardCompensationCalculator
from .model import EmployeeProjection, PayrollForecast, SalesTotals, TierResolution
from .repository import PayrollRepository
from .tiers import SERVICES, resolve_tier

logger = logging.getLogger(__name__)


def confidence_level(days_passed: int, total_days: int) -> str:
    if days_passed >= total_days * 0.75:
        return "high"
    if days_passed >= total_days * 0.4:
        return "medium"
    return "low"


class PayrollForecastService:
    """Projects each employee's pay to the end of the current pay period."""

    def __init__(
        self,
        payroll: PayrollRepository,
        *,
        calculator: Optional[CompensationCalculator] = None,
    ):
        self._payroll = payroll
        self._calculator = calculator or StandardCompensationCalculator()

    def resolve(self, *, organization_id: int, revenue: float, applies_to: str = SERVICES) -> TierResolution:
        return resolve_tier(self._payroll.list_tiers(organization_id), revenue, applies_to)

    def forecast(
        self,
        *,
        organization_id: int,
        period_start: date,
        period_end: date,
        today: date,
    ) -> PayrollForecast:
        if period_end < period_start:
            raise ValidationError("Period end must be on or after period start")

        total_days = (period_end - period_start).days + 1
        days_passed = max(1, (today - period_start).days + 1)
        days_remaining = max(0, total_days - days_passed)

        active = [s for s in self._payroll.list_pay_settings(organization_id) if s.is_payroll_active]
        if not active:
            return PayrollForecast(period_start=period_start, period_end=period_end)

        tiers = self._payroll.list_tiers(organization_id)
        sales = self._payroll.sales_by_user(organization_id=organization_id, start=period_start, end=period_end)

        last_end = period_start - timedelta(days=1)
        last_start = period_start - timedelta(days=total_days)
        last_sales = self._payroll.sales_by_user(organization_id=organization_id, start=last_start, end=last_end)
        last_total = sum(s.services + s.products for s in last_sales.values())

        employees = []
        for settings in active:
            current = sales.get(settings.user_id, SalesTotals())
            projected = SalesTotals(
                services=current.services + current.services / days_passed * days_remaining,
                products=current.products + current.products / days_passed * days_remaining,
            )
            tier = resolve_tier(tiers, projected.services, SERVICES)
            employees.append(
                EmployeeProjection(
                    user_id=settings.user_id,
                    name=settings.name,
                    photo_url=settings.photo_url,
                    pay_type=settings.pay_type,
                    current_sales=current,
                    projected_sales=projected,
                    tier=tier,
                    compensation=self._calculator.compensation(settings, projected, tier, tiers),
                )
            )

        gross = sum(e.compensation.total_gross for e in employees)
        commissions = sum(
            e.compensation.service_commission + e.compensation.product_commission for e in employees
        )
        taxes = gross * ESTIMATED_TAX_RATE
        vs_last = (gross - last_total) / last_total * 100 if last_total > 0 else 0.0

        logger.debug(
            "Payroll forecast org=%s %s..%s employees=%d gross=%.2f",
            organization_id,
            period_start,
            period_end,
            len(employees),
            gross,
        )
        return PayrollForecast(
            period_start=period_start,
            period_end=period_end,
            projected_gross_pay=gross,
            projected_commissions=commissions,
            projected_taxes=taxes,
            projected_net_pay=gross - taxes,
            confidence=confidence_level(days_passed, total_days),
            days_of_data=days_passed,
            days_remaining=days_remaining,
            vs_last_period=vs_last,
            employees=employees,
        )
