from __future__ import annotations

from datetime import date
from typing import Sequence

from ..core.enums import PayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall
from .model import CommissionTier, PaySettings, SalesTotals
from .repository import PayrollRepository


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_tiers(self, organization_id: int) -> Sequence[CommissionTier]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT tier_id, organization_id, tier_name, applies_to, min_revenue, max_revenue, commission_rate
                FROM commission_tiers
                WHERE organization_id=%s
                ORDER BY tier_id
                """,
                (int(organization_id),),
            )
            return [
                CommissionTier(
                    tier_id=int(r["tier_id"]),
                    organization_id=int(r["organization_id"]),
                    tier_name=r["tier_name"],
                    applies_to=r["applies_to"],
                    min_revenue=as_float(r["min_revenue"]),
                    max_revenue=None if r["max_revenue"] is None else as_float(r["max_revenue"]),
                    commission_rate=as_float(r["commission_rate"]),
                )
                for r in fetchall(cur)
            ]

    def list_pay_settings(self, organization_id: int) -> Sequence[PaySettings]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.user_id, p.pay_type, p.hourly_rate, p.salary_amount,
                       p.commission_enabled, p.is_payroll_active,
                       u.full_name, u.display_name, u.photo_url
                FROM employee_pay_settings p
                JOIN users u ON u.user_id = p.user_id
                WHERE u.organization_id=%s AND u.is_active=1
                ORDER BY u.full_name
                """,
                (int(organization_id),),
            )
            return [
                PaySettings(
                    user_id=int(r["user_id"]),
                    pay_type=PayType(r["pay_type"]),
                    hourly_rate=None if r["hourly_rate"] is None else as_float(r["hourly_rate"]),
                    salary_amount=None if r["salary_amount"] is None else as_float(r["salary_amount"]),
                    commission_enabled=bool(r["commission_enabled"]),
                    is_payroll_active=bool(r["is_payroll_active"]),
                    name=r["display_name"] or r["full_name"] or "Unknown",
                    photo_url=r["photo_url"],
                )
                for r in fetchall(cur)
            ]

    def sales_by_user(self, *, organization_id: int, start: date, end: date) -> dict[int, SalesTotals]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.user_id,
                       COALESCE(SUM(s.service_revenue), 0) AS services,
                       COALESCE(SUM(s.product_revenue), 0) AS products
                FROM daily_sales_summary s
                JOIN users u ON u.user_id = s.user_id
                WHERE u.organization_id=%s AND s.summary_date BETWEEN %s AND %s
                GROUP BY s.user_id
                """,
                (int(organization_id), start, end),
            )
            return {
                int(r["user_id"]): SalesTotals(services=as_float(r["services"]), products=as_float(r["products"]))
                for r in fetchall(cur)
            }
