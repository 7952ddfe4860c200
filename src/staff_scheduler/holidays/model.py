from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..core.enums import Coverage


@dataclass(frozen=True)
class SpecialDayType:
    id: str
    name: str
    is_holiday: bool
    company_id: str


@dataclass(frozen=True)
class SpecialDay:
    id: str
    date: date
    type_id: str
    company_id: str
    coverage: Coverage = Coverage.ALL_DAY
