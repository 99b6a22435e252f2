from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: a staff login within one organization.

    Plain data object; no DB access here.
    """

    user_id: int
    organization_id: int
    full_name: str
    username: str
    password_hash: str
    role: Role
    display_name: Optional[str] = None
    photo_url: Optional[str] = None
    is_active: bool = True

    @property
    def name(self) -> str:
        return self.display_name or self.full_name or "Unknown"
