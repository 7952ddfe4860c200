from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.intervals import DayLike, date_in_range


@dataclass(frozen=True)
class AbsenceType:
    id: str
    name: str
    company_id: str
    color: str = ""


@dataclass(frozen=True)
class Absence:
    """Closed day range during which an employee cannot be scheduled."""

    id: str
    employee_id: str
    absence_type_id: str
    start_date: date
    end_date: date
    company_id: str

    def covers(self, day: DayLike) -> bool:
        return date_in_range(day, self.start_date, self.end_date)
