from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional

from ..core.enums import PayType


@dataclass(frozen=True)
class CommissionTier:
    tier_id: int
    organization_id: int
    tier_name: str
    applies_to: str  # services | products | all
    min_revenue: float
    max_revenue: Optional[float]  # None = no upper bound
    commission_rate: float


@dataclass(frozen=True)
class PaySettings:
    user_id: int
    pay_type: PayType
    hourly_rate: Optional[float] = None
    salary_amount: Optional[float] = None
    commission_enabled: bool = False
    is_payroll_active: bool = True
    name: str = "Unknown"
    photo_url: Optional[str] = None


@dataclass(frozen=True)
class SalesTotals:
    services: float = 0.0
    products: float = 0.0


@dataclass(frozen=True)
class TierRef:
    name: str
    rate: float
    threshold: Optional[float] = None


@dataclass(frozen=True)
class TierResolution:
    current: Optional[TierRef] = None
    next: Optional[TierRef] = None
    progress: float = 0.0
    amount_to_next: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Compensation:
    base_pay: float = 0.0
    service_commission: float = 0.0
    product_commission: float = 0.0

    @property
    def total_gross(self) -> float:
        return self.base_pay + self.service_commission + self.product_commission


@dataclass(frozen=True)
class EmployeeProjection:
    user_id: int
    name: str
    photo_url: Optional[str]
    pay_type: PayType
    current_sales: SalesTotals
    projected_sales: SalesTotals
    tier: TierResolution
    compensation: Compensation

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "name": self.name,
            "photo_url": self.photo_url,
            "pay_type": self.pay_type.value,
            "current_sales": asdict(self.current_sales),
            "projected_sales": asdict(self.projected_sales),
            "tier": self.tier.to_dict(),
            "compensation": {
                **asdict(self.compensation),
                "total_gross": self.compensation.total_gross,
            },
        }


@dataclass(frozen=True)
class PayrollForecast:
    period_start: date
    period_end: date
    projected_gross_pay: float = 0.0
    projected_commissions: float = 0.0
    projected_taxes: float = 0.0
    projected_net_pay: float = 0.0
    confidence: str = "low"
    days_of_data: int = 0
    days_remaining: int = 0
    vs_last_period: float = 0.0
    employees: list[EmployeeProjection] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "period_start": self.period_start.isoformat(),
            "period_end": self.period_end.isoformat(),
            "period_label": f"{self.period_start:%b} {self.period_start.day} - {self.period_end:%b} {self.period_end.day}",
            "projected_gross_pay": self.projected_gross_pay,
            "projected_commissions": self.projected_commissions,
            "projected_taxes": self.projected_taxes,
            "projected_net_pay": self.projected_net_pay,
            "confidence": self.confidence,
            "days_of_data": self.days_of_data,
            "days_remaining": self.days_remaining,
            "vs_last_period": self.vs_last_period,
            "employees": [e.to_dict() for e in self.employees],
        }
