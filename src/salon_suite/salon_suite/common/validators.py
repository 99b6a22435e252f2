from __future__ import annotations

import re

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_int_between(value, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a whole number")
    if number < low or number > high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def normalize_phone(value: str, *, min_digits: int) -> str:
    """Strip everything but digits; reject numbers that are too short."""
    digits = re.sub(r"\D", "", value or "")
    if len(digits) < min_digits:
        raise ValidationError("Please enter a valid phone number")
    return digits
