from __future__ import annotations

from datetime import datetime

import pytest


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 3, 4, 10, 0, 0)


@pytest.fixture
def clock(fixed_now):
    """A settable clock for services that take `clock=`."""

    class _Clock:
        def __init__(self, now: datetime):
            self.now = now

        def __call__(self) -> datetime:
            return self.now

    return _Clock(fixed_now)
