from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ..model import CommissionTier, Compensation, PaySettings, SalesTotals, TierResolution


class CompensationCalculator(ABC):
    """Calculator interface (Strategy Pattern for pay projection)."""

    @abstractmethod
    def base_pay(self, settings: PaySettings) -> float:
        raise NotImplementedError

    @abstractmethod
    def compensation(
        self,
        settings: PaySettings,
        projected: SalesTotals,
        service_tier: TierResolution,
        tiers: Sequence[CommissionTier],
    ) -> Compensation:
        raise NotImplementedError
