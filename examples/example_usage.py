"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

import importlib
from datetime import date

from config import get_settings_module

from src.salon_suite.salon_suite.container import build_container
from src.salon_suite.salon_suite.core.enums import CapacityPeriod


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    report = container.capacity_service.build(organization_id=1, period=CapacityPeriod.SEVEN_DAYS, today=date.today())
    print(f"Next 7 days: {report.overall_utilization}% booked, {report.total_gap_hours}h open")

    overview = container.meeting_service.overview(organization_id=1, today=date.today())
    print(f"1:1s overdue: {overview.summary.overdue} of {overview.summary.total}")


if __name__ == "__main__":
    main()
