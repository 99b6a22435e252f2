from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, organization_id, full_name, display_name, username,
    password_hash, role, photo_url, is_active
"""


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        organization_id=int(row["organization_id"]),
        full_name=row["full_name"],
        username=row["username"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        display_name=row.get("display_name"),
        photo_url=row.get("photo_url"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_active(self, organization_id: int) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE organization_id=%s AND is_active=1
                ORDER BY full_name
                """,
                (int(organization_id),),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        organization_id: int,
        full_name: str,
        username: str,
        password_hash: str,
        role: Role,
        display_name: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(organization_id, full_name, display_name, username, password_hash, role, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,1)
                """,
                (int(organization_id), full_name, display_name, username, password_hash, role.value),
            )
            return int(cur.lastrowid)

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET is_active=%s WHERE user_id=%s", (1 if is_active else 0, int(user_id)))
            return cur.rowcount > 0

    def list_roles(self, user_ids: Sequence[int]) -> Sequence[tuple[int, str]]:
        if not user_ids:
            return []
        ids = [int(i) for i in user_ids]
        users_in, users_params = in_clause("user_id", ids)
        grants_in, grants_params = in_clause("user_id", ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT user_id, role FROM users WHERE {users_in}
                UNION
                SELECT user_id, role FROM user_roles WHERE {grants_in}
                """,
                users_params + grants_params,
            )
            return [(int(r["user_id"]), r["role"]) for r in fetchall(cur)]
