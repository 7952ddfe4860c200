from __future__ import annotations

from typing import Optional, Sequence

from ..common.intervals import DayLike, same_day
from ..core.enums import Coverage
from .model import SpecialDay, SpecialDayType


def _types_by_id(types: Sequence[SpecialDayType]) -> dict[str, SpecialDayType]:
    return {t.id: t for t in types}


def holiday_on(
    day: DayLike,
    special_days: Sequence[SpecialDay],
    special_day_types: Sequence[SpecialDayType],
) -> Optional[SpecialDay]:
    """The all-day holiday on ``day``, if any. Only these block scheduling."""
    types = _types_by_id(special_day_types)
    for sd in special_days:
        sd_type = types.get(sd.type_id)
        if sd_type and sd_type.is_holiday and sd.coverage == Coverage.ALL_DAY and same_day(sd.date, day):
            return sd
    return None


def partial_holidays_on(
    day: DayLike,
    special_days: Sequence[SpecialDay],
    special_day_types: Sequence[SpecialDayType],
) -> list[SpecialDay]:
    """Partial-coverage holidays on ``day``.

    Stored and displayed, but not enforced by the conflict checker.
    """
    types = _types_by_id(special_day_types)
    return [
        sd
        for sd in special_days
        if sd.coverage != Coverage.ALL_DAY
        and types.get(sd.type_id) is not None
        and types[sd.type_id].is_holiday
        and same_day(sd.date, day)
    ]


def special_day_on(day: DayLike, special_days: Sequence[SpecialDay]) -> Optional[SpecialDay]:
    return next((sd for sd in special_days if same_day(sd.date, day)), None)
