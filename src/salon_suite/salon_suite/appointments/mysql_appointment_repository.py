from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AppointmentStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_float, db_cursor, fetchall, in_clause, normalize_mysql_time
from .model import Appointment
from .repository import AppointmentRepository

_COLUMNS = """
    appointment_id, organization_id, location_id, staff_user_id, client_name, client_phone,
    appointment_date, start_time, end_time, service_name, total_price, status, checked_in_at
"""


def _to_appointment(row: dict) -> Appointment:
    return Appointment(
        appointment_id=int(row["appointment_id"]),
        organization_id=int(row["organization_id"]),
        location_id=int(row["location_id"]),
        client_name=row["client_name"],
        appointment_date=row["appointment_date"],
        status=AppointmentStatus(row["status"]),
        start_time=normalize_mysql_time(row.get("start_time")),
        end_time=normalize_mysql_time(row.get("end_time")),
        service_name=row.get("service_name"),
        total_price=as_float(row.get("total_price")),
        client_phone=row.get("client_phone"),
        staff_user_id=row.get("staff_user_id"),
        checked_in_at=row.get("checked_in_at"),
    )


class MySQLAppointmentRepository(AppointmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_range(
        self,
        *,
        organization_id: int,
        start: date,
        end: date,
        location_id: Optional[int] = None,
        exclude_statuses: Sequence[str] = (),
    ) -> Sequence[Appointment]:
        clauses = ["organization_id=%s", "appointment_date BETWEEN %s AND %s"]
        params: list[object] = [int(organization_id), start, end]
        if location_id is not None:
            clauses.append("location_id=%s")
            params.append(int(location_id))
        if exclude_statuses:
            clause, values = in_clause("status", list(exclude_statuses))
            clauses.append(f"NOT {clause}")
            params.extend(values)

        where = " AND ".join(clauses)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM appointments WHERE {where} ORDER BY appointment_date, start_time",
                tuple(params),
            )
            return [_to_appointment(r) for r in fetchall(cur)]

    def find_for_phone(self, *, organization_id: int, phone_digits: str, work_date: date) -> Sequence[Appointment]:
        # Stored phones may carry punctuation; compare on digits only.
        digits_expr = (
            "REPLACE(REPLACE(REPLACE(REPLACE(REPLACE(REPLACE(client_phone,"
            "'+',''),'-',''),' ',''),'(',''),')',''),'.','')"
        )
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM appointments
                WHERE organization_id=%s
                  AND appointment_date=%s
                  AND ({digits_expr}=%s OR RIGHT({digits_expr}, 10)=RIGHT(%s, 10))
                ORDER BY start_time
                """,
                (int(organization_id), work_date, phone_digits, phone_digits),
            )
            return [_to_appointment(r) for r in fetchall(cur)]

    def mark_checked_in(self, *, appointment_ids: Sequence[int], checked_in_at: datetime) -> int:
        if not appointment_ids:
            return 0
        clause, values = in_clause("appointment_id", [int(i) for i in appointment_ids])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                UPDATE appointments
                SET status=%s, checked_in_at=%s
                WHERE {clause} AND checked_in_at IS NULL
                """,
                (AppointmentStatus.CHECKED_IN.value, checked_in_at, *values),
            )
            return int(cur.rowcount)
