from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def round_tenth(value: float) -> float:
    return math.floor(value * 10 + 0.5) / 10


def floor_half(value: float) -> float:
    """Round down to a multiple of 0.5."""
    return math.floor(value * 2) / 2
