from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause
from .model import Meeting
from .repository import MeetingRepository


def _to_meeting(row: dict) -> Meeting:
    return Meeting(
        meeting_id=int(row["meeting_id"]),
        organization_id=int(row["organization_id"]),
        requester_id=int(row["requester_id"]),
        meeting_date=row["meeting_date"],
        meeting_type=row["meeting_type"],
        status=row["status"],
    )


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_completed_meetings(
        self,
        *,
        organization_id: int,
        requester_ids: Sequence[int],
        meeting_types: Sequence[str],
        today: date,
    ) -> Sequence[Meeting]:
        if not requester_ids or not meeting_types:
            return []
        ids_sql, ids = in_clause("requester_id", [int(i) for i in requester_ids])
        types_sql, types = in_clause("meeting_type", list(meeting_types))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT meeting_id, organization_id, requester_id, meeting_date, meeting_type, status
                FROM one_on_one_meetings
                WHERE organization_id=%s AND {ids_sql} AND {types_sql}
                  AND (status='completed' OR (status='confirmed' AND meeting_date < %s))
                ORDER BY meeting_date DESC, meeting_id DESC
                """,
                (int(organization_id), *ids, *types, today),
            )
            return [_to_meeting(r) for r in fetchall(cur)]

    def list_upcoming_meetings(
        self,
        *,
        organization_id: int,
        requester_ids: Sequence[int],
        today: date,
    ) -> Sequence[Meeting]:
        if not requester_ids:
            return []
        ids_sql, ids = in_clause("requester_id", [int(i) for i in requester_ids])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT meeting_id, organization_id, requester_id, meeting_date, meeting_type, status
                FROM one_on_one_meetings
                WHERE organization_id=%s AND {ids_sql}
                  AND status IN ('pending', 'confirmed') AND meeting_date >= %s
                ORDER BY meeting_date ASC, meeting_id ASC
                """,
                (int(organization_id), *ids, today),
            )
            return [_to_meeting(r) for r in fetchall(cur)]

    def list_cadence_rows(self, organization_id: int) -> Sequence[tuple[Optional[int], int]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, cadence_days FROM meeting_cadence_settings WHERE organization_id=%s",
                (int(organization_id),),
            )
            return [
                (None if r["user_id"] is None else int(r["user_id"]), int(r["cadence_days"]))
                for r in fetchall(cur)
            ]

    def upsert_cadence(self, *, organization_id: int, user_id: Optional[int], cadence_days: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO meeting_cadence_settings(organization_id, user_id, cadence_days)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE cadence_days=VALUES(cadence_days)
                """,
                (int(organization_id), None if user_id is None else int(user_id), int(cadence_days)),
            )

    def delete_cadence(self, *, organization_id: int, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM meeting_cadence_settings WHERE organization_id=%s AND user_id=%s",
                (int(organization_id), int(user_id)),
            )
            return cur.rowcount > 0
