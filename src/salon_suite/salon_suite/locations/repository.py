from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Location


class LocationRepository(Protocol):
    def list_active(self, organization_id: int) -> Sequence[Location]:
        raise NotImplementedError

    def get_by_id(self, location_id: int) -> Optional[Location]:
        raise NotImplementedError
