from __future__ import annotations

import uuid

from ..core.exceptions import InvalidRange, ValidationError
from .intervals import DayLike, as_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_day_range(start: DayLike, end: DayLike, field_name: str = "Date range") -> None:
    if as_date(end) < as_date(start):
        raise InvalidRange(f"{field_name}: end date must be on or after start date")


def new_id() -> str:
    return uuid.uuid4().hex
