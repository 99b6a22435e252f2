from __future__ import annotations

from typing import Sequence

from ...core.constants import HOURS_PER_PAY_PERIOD, PAY_PERIODS_PER_YEAR
from ...core.enums import PayType
from ..model import CommissionTier, Compensation, PaySettings, SalesTotals, TierResolution
from ..tiers import PRODUCTS, first_matching_tier
from .base import CompensationCalculator

_HOURLY = {PayType.HOURLY, PayType.HOURLY_PLUS_COMMISSION}
_SALARY = {PayType.SALARY, PayType.SALARY_PLUS_COMMISSION}


class StandardCompensationCalculator(CompensationCalculator):
    """Bi-weekly rule: 80 hours at the hourly rate, or 1/26 of salary, plus tiered commission."""

    def base_pay(self, settings: PaySettings) -> float:
        if settings.pay_type in _HOURLY:
            return (settings.hourly_rate or 0.0) * HOURS_PER_PAY_PERIOD
        if settings.pay_type in _SALARY:
            return (settings.salary_amount or 0.0) / PAY_PERIODS_PER_YEAR
        return 0.0

    def compensation(
        self,
        settings: PaySettings,
        projected: SalesTotals,
        service_tier: TierResolution,
        tiers: Sequence[CommissionTier],
    ) -> Compensation:
        service_commission = 0.0
        product_commission = 0.0

        if settings.commission_enabled:
            if service_tier.current:
                service_commission = projected.services * service_tier.current.rate
            product_tier = first_matching_tier(tiers, projected.products, PRODUCTS)
            if product_tier:
                product_commission = projected.products * product_tier.commission_rate

        return Compensation(
            base_pay=self.base_pay(settings),
            service_commission=service_commission,
            product_commission=product_commission,
        )
