from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .hours import parse_hours_json
from .model import Location
from .repository import LocationRepository

logger = logging.getLogger(__name__)

_COLUMNS = """
    location_id, organization_id, name, hours_json, stylist_capacity,
    break_minutes_per_day, lunch_minutes, appointment_padding_minutes, is_active
"""


def _optional_int(value) -> Optional[int]:
    return None if value is None else int(value)


def _to_location(row: dict) -> Location:
    try:
        hours = parse_hours_json(row.get("hours_json"))
    except ValueError:
        logger.warning("Ignoring malformed hours_json for location_id=%s", row["location_id"])
        hours = None

    return Location(
        location_id=int(row["location_id"]),
        organization_id=int(row["organization_id"]),
        name=row["name"],
        hours=hours,
        stylist_capacity=_optional_int(row.get("stylist_capacity")),
        break_minutes_per_day=_optional_int(row.get("break_minutes_per_day")),
        lunch_minutes=_optional_int(row.get("lunch_minutes")),
        appointment_padding_minutes=_optional_int(row.get("appointment_padding_minutes")),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLLocationRepository(LocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self, organization_id: int) -> Sequence[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM locations
                WHERE organization_id=%s AND is_active=1
                ORDER BY location_id
                """,
                (int(organization_id),),
            )
            return [_to_location(r) for r in fetchall(cur)]

    def get_by_id(self, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM locations WHERE location_id=%s", (int(location_id),))
            row = fetchone(cur)
            return _to_location(row) if row else None
