from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(frozen=True)
class SessionUser:
    """What we store into the Flask session after login."""

    user_id: int
    organization_id: int
    name: str
    role: Role


class AuthService:
    """Use case: authenticate a staff login."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME'
            ok = False

        if not ok:
            logger.info("Failed login for user_id=%s", user.user_id)
            raise AuthenticationError("Invalid username or password")

        return SessionUser(
            user_id=user.user_id,
            organization_id=user.organization_id,
            name=user.name,
            role=user.role,
        )


class UserService:
    """Use case: manage the team of an organization (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_team(self, organization_id: int) -> Sequence[User]:
        return self._users.list_active(organization_id)

    def create_account(
        self,
        *,
        current: SessionUser,
        full_name: str,
        username: str,
        password: str,
        role: Role,
        display_name: Optional[str] = None,
    ) -> int:
        if not current.role.at_least(Role.ADMIN):
            raise AuthorizationError("You do not have permission to add team members")
        if role.rank > current.role.rank:
            raise AuthorizationError("You cannot grant a role above your own")

        full_name = require_non_empty(full_name, "Full name")
        username = require_non_empty(username, "Username")
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if self._users.get_by_username(username):
            raise ValidationError("Username already exists")

        user_id = self._users.create_user(
            organization_id=current.organization_id,
            full_name=full_name,
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            display_name=(display_name or "").strip() or None,
        )
        logger.info("User %s created user_id=%s role=%s", current.user_id, user_id, role.value)
        return user_id

    def deactivate(self, *, current: SessionUser, user_id: int) -> None:
        if not current.role.at_least(Role.ADMIN):
            raise AuthorizationError("You do not have permission to deactivate team members")
        if int(user_id) == current.user_id:
            raise ValidationError("You cannot deactivate your own account")

        user = self._users.get_by_id(user_id)
        if not user or user.organization_id != current.organization_id:
            raise NotFoundError("Team member not found")
        if user.role.rank > current.role.rank:
            raise AuthorizationError("You cannot deactivate a higher role")

        if not self._users.set_active(user_id, is_active=False):
            raise ValidationError("Failed to deactivate team member")
