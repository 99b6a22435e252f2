from __future__ import annotations

from datetime import date

import pytest

from src.salon_suite.salon_suite.core.enums import PayType
from src.salon_suite.salon_suite.core.exceptions import ValidationError
from src.salon_suite.salon_suite.payroll.model import CommissionTier, PaySettings
from src.salon_suite.salon_suite.payroll.service import PayrollForecastService, confidence_level
from tests.fakes import InMemoryPayroll

START = date(2026, 3, 2)
END = date(2026, 3, 15)

TIERS = [
    CommissionTier(1, 1, "Level 1", "services", 0, 4999.99, 0.35),
    CommissionTier(2, 1, "Level 2", "services", 5000, 9999.99, 0.40),
    CommissionTier(3, 1, "Level 3", "services", 10000, None, 0.45),
    CommissionTier(4, 1, "Retail", "products", 0, None, 0.10),
]


@pytest.fixture
def service():
    repo = InMemoryPayroll(
        tiers=TIERS,
        settings=[
            PaySettings(
                user_id=1,
                pay_type=PayType.HOURLY_PLUS_COMMISSION,
                hourly_rate=20.0,
                commission_enabled=True,
                name="Sam",
            ),
            PaySettings(user_id=2, pay_type=PayType.SALARY, salary_amount=52000.0, name="Riley"),
            PaySettings(user_id=3, pay_type=PayType.COMMISSION, commission_enabled=True, is_payroll_active=False),
        ],
        daily_sales=[
            (1, date(2026, 3, 2), 1500.0, 60.0),
            (1, date(2026, 3, 5), 2000.0, 80.0),
            (2, date(2026, 3, 3), 700.0, 0.0),
            (3, date(2026, 3, 3), 9000.0, 0.0),
            (1, date(2026, 2, 20), 3000.0, 214.0),  # previous period
        ],
    )
    return PayrollForecastService(repo)


def test_projects_to_period_end(service):
    forecast = service.forecast(organization_id=1, period_start=START, period_end=END, today=date(2026, 3, 8))

    assert forecast.days_of_data == 7
    assert forecast.days_remaining == 7
    assert forecast.confidence == "medium"
    assert [e.user_id for e in forecast.employees] == [1, 2]

    sam = forecast.employees[0]
    assert sam.projected_sales.services == pytest.approx(7000)
    assert sam.projected_sales.products == pytest.approx(280)
    assert sam.tier.current.name == "Level 2"
    assert sam.compensation.base_pay == pytest.approx(1600)
    assert sam.compensation.service_commission == pytest.approx(2800)
    assert sam.compensation.product_commission == pytest.approx(28)

    riley = forecast.employees[1]
    assert riley.compensation.total_gross == pytest.approx(2000)

    assert forecast.projected_gross_pay == pytest.approx(6428)
    assert forecast.projected_commissions == pytest.approx(2828)
    assert forecast.projected_taxes == pytest.approx(2249.8)
    assert forecast.projected_net_pay == pytest.approx(4178.2)
    assert forecast.vs_last_period == pytest.approx(100)

    data = forecast.to_dict()
    assert data["period_label"] == "Mar 2 - Mar 15"
    assert data["employees"][0]["pay_type"] == "hourly_plus_commission"


def test_days_passed_is_at_least_one(service):
    forecast = service.forecast(organization_id=1, period_start=START, period_end=END, today=date(2026, 2, 27))
    assert forecast.days_of_data == 1
    assert forecast.days_remaining == 13
    assert forecast.confidence == "low"


def test_no_active_employees():
    forecast = PayrollForecastService(InMemoryPayroll()).forecast(
        organization_id=1, period_start=START, period_end=END, today=START
    )
    assert forecast.employees == []
    assert forecast.projected_gross_pay == 0


def test_period_must_be_ordered(service):
    with pytest.raises(ValidationError):
        service.forecast(organization_id=1, period_start=END, period_end=START, today=START)


def test_confidence_levels():
    assert confidence_level(11, 14) == "high"
    assert confidence_level(6, 14) == "medium"
    assert confidence_level(5, 14) == "low"


def test_resolve_uses_org_tiers(service):
    assert service.resolve(organization_id=1, revenue=12000).current.name == "Level 3"
    assert service.resolve(organization_id=2, revenue=12000).current is None
