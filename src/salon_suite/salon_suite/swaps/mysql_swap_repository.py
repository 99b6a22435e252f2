from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import SwapStatus, SwapType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import ShiftSwap
from .repository import SwapRepository

_COLUMNS = """
    swap_id, organization_id, requester_id, schedule_id, original_date, location_id,
    swap_type, reason, status, claimer_id, manager_id, manager_notes,
    created_at, approved_at, expires_at
"""


def _to_swap(r: dict) -> ShiftSwap:
    return ShiftSwap(
        swap_id=int(r["swap_id"]),
        organization_id=int(r["organization_id"]),
        requester_id=int(r["requester_id"]),
        schedule_id=int(r["schedule_id"]),
        original_date=r["original_date"],
        location_id=r.get("location_id"),
        swap_type=SwapType(r["swap_type"]),
        reason=r.get("reason"),
        status=SwapStatus(r["status"]),
        claimer_id=r.get("claimer_id"),
        manager_id=r.get("manager_id"),
        manager_notes=r.get("manager_notes"),
        created_at=r["created_at"],
        approved_at=r.get("approved_at"),
        expires_at=r.get("expires_at"),
    )


class MySQLSwapRepository(SwapRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        organization_id: int,
        requester_id: int,
        schedule_id: int,
        original_date: date,
        location_id: Optional[int],
        swap_type: SwapType,
        reason: Optional[str],
        expires_at: Optional[datetime],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO shift_swaps(
                    organization_id, requester_id, schedule_id, original_date, location_id,
                    swap_type, reason, status, expires_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(organization_id),
                    int(requester_id),
                    int(schedule_id),
                    original_date,
                    location_id,
                    swap_type.value,
                    reason,
                    SwapStatus.OPEN.value,
                    expires_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, swap_id: int) -> Optional[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shift_swaps WHERE swap_id=%s", (int(swap_id),))
            r = fetchone(cur)
            return _to_swap(r) if r else None

    def list_for_org(
        self,
        *,
        organization_id: int,
        statuses: Sequence[SwapStatus] = (),
        requester_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[ShiftSwap]:
        where = ["organization_id=%s"]
        params: list = [int(organization_id)]
        if statuses:
            clause, values = in_clause("status", [s.value for s in statuses])
            where.append(clause)
            params.extend(values)
        if requester_id is not None:
            where.append("requester_id=%s")
            params.append(int(requester_id))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_swaps
                WHERE {' AND '.join(where)}
                ORDER BY original_date ASC, swap_id ASC
                LIMIT %s
                """,
                (*params, int(limit)),
            )
            return [_to_swap(r) for r in fetchall(cur)]

    def find_active_for_schedule(self, schedule_id: int) -> Optional[ShiftSwap]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shift_swaps
                WHERE schedule_id=%s AND status IN (%s, %s, %s)
                ORDER BY swap_id DESC
                LIMIT 1
                """,
                (
                    int(schedule_id),
                    SwapStatus.OPEN.value,
                    SwapStatus.CLAIMED.value,
                    SwapStatus.PENDING_APPROVAL.value,
                ),
            )
            r = fetchone(cur)
            return _to_swap(r) if r else None

    def claim(self, *, swap_id: int, claimer_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_swaps
                SET claimer_id=%s, status=%s
                WHERE swap_id=%s AND status=%s
                """,
                (int(claimer_id), SwapStatus.PENDING_APPROVAL.value, int(swap_id), SwapStatus.OPEN.value),
            )
            return cur.rowcount > 0

    def decide(
        self,
        *,
        swap_id: int,
        status: SwapStatus,
        manager_id: int,
        manager_notes: Optional[str],
        approved_at: Optional[datetime],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_swaps
                SET status=%s, manager_id=%s, manager_notes=%s, approved_at=%s
                WHERE swap_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(manager_id),
                    manager_notes,
                    approved_at,
                    int(swap_id),
                    SwapStatus.PENDING_APPROVAL.value,
                ),
            )
            return cur.rowcount > 0

    def set_status(self, *, swap_id: int, status: SwapStatus, from_statuses: Sequence[SwapStatus]) -> bool:
        clause, values = in_clause("status", [s.value for s in from_statuses])
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE shift_swaps SET status=%s WHERE swap_id=%s AND {clause}",
                (status.value, int(swap_id), *values),
            )
            return cur.rowcount > 0

    def expire_open(self, *, now: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE shift_swaps
                SET status=%s
                WHERE status=%s AND expires_at IS NOT NULL AND expires_at < %s
                """,
                (SwapStatus.EXPIRED.value, SwapStatus.OPEN.value, now),
            )
            return int(cur.rowcount)
