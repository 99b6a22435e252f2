from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..shifts.mysql_shift_repository import to_shift
from .model import Schedule, ScheduledShift
from .repository import ScheduleRepository


def _to_schedule(row: dict) -> Schedule:
    return Schedule(
        schedule_id=int(row["schedule_id"]),
        user_id=int(row["user_id"]),
        location_id=int(row["location_id"]),
        work_date=row["work_date"],
        shift_id=int(row["shift_id"]),
        note=row.get("note"),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, schedule_id: int) -> Optional[Schedule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, user_id, location_id, work_date, shift_id, note
                FROM staff_schedules
                WHERE schedule_id=%s
                """,
                (int(schedule_id),),
            )
            r = fetchone(cur)
            return _to_schedule(r) if r else None

    def upsert(self, *, user_id: int, location_id: int, work_date: date, shift_id: int, note: Optional[str] = None) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff_schedules(user_id, location_id, work_date, shift_id, note)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE location_id=VALUES(location_id), shift_id=VALUES(shift_id), note=VALUES(note)
                """,
                (int(user_id), int(location_id), work_date, int(shift_id), note),
            )

            # If it was an update, lastrowid can be 0; fetch schedule_id.
            if cur.lastrowid:
                return int(cur.lastrowid)

            cur.execute(
                "SELECT schedule_id FROM staff_schedules WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return int(r["schedule_id"]) if r else 0

    def reassign(self, *, schedule_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE staff_schedules SET user_id=%s WHERE schedule_id=%s",
                (int(user_id), int(schedule_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, schedule_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM staff_schedules WHERE schedule_id=%s", (int(schedule_id),))
            return cur.rowcount > 0

    def list_range(
        self,
        *,
        organization_id: int,
        start: date,
        end: date,
        location_id: Optional[int] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[ScheduledShift]:
        clauses = ["u.organization_id=%s", "sc.work_date BETWEEN %s AND %s"]
        params: list[object] = [int(organization_id), start, end]
        if location_id is not None:
            clauses.append("sc.location_id=%s")
            params.append(int(location_id))
        if user_id is not None:
            clauses.append("sc.user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    sc.schedule_id, sc.user_id, sc.location_id, sc.work_date, sc.shift_id, sc.note,
                    s.shift_name, s.start_time, s.end_time, s.break_minutes,
                    COALESCE(u.display_name, u.full_name) AS staff_name
                FROM staff_schedules sc
                JOIN users u ON u.user_id = sc.user_id
                JOIN shifts s ON s.shift_id = sc.shift_id
                WHERE {where}
                ORDER BY sc.work_date ASC, s.start_time ASC, sc.user_id ASC
                """,
                tuple(params),
            )
            return [
                ScheduledShift(schedule=_to_schedule(r), shift=to_shift(r), staff_name=r["staff_name"])
                for r in fetchall(cur)
            ]
