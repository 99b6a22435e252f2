from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import CommissionTier, PaySettings, SalesTotals


class PayrollRepository(Protocol):
    def list_tiers(self, organization_id: int) -> Sequence[CommissionTier]:
        raise NotImplementedError

    def list_pay_settings(self, organization_id: int) -> Sequence[PaySettings]:
        raise NotImplementedError

    def sales_by_user(self, *, organization_id: int, start: date, end: date) -> dict[int, SalesTotals]:
        """Summed daily sales per user for an inclusive date range."""

        raise NotImplementedError
