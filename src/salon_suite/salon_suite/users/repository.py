from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def list_active(self, organization_id: int) -> Sequence[User]:
        """Active users of an organization ordered by full name."""

        raise NotImplementedError

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
        raise NotImplementedError

    def set_active(self, user_id: int, *, is_active: bool) -> bool:
        raise NotImplementedError

    def list_roles(self, user_ids: Sequence[int]) -> Sequence[tuple[int, str]]:
        """All (user_id, role) grants: primary role plus user_roles rows."""

        raise NotImplementedError
