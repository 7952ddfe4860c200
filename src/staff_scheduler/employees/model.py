from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``access_code`` is the mobile login credential of hourly staff and only
    exists on plans that support clocking.
    """

    id: str
    name: str
    email: str
    company_id: str
    role: str = ""
    phone: str = ""
    gender: str = ""
    avatar_url: Optional[str] = None
    access_code: Optional[str] = None


TimeWindow = tuple[time, time]


@dataclass(frozen=True)
class EmployeeAvailability:
    """Weekly availability of one employee, keyed by the employee id.

    ``weekly`` holds seven lists of time windows, Monday first. Shown to
    schedulers when placing shifts; the conflict checker does not enforce it.
    """

    employee_id: str
    company_id: str
    weekly: tuple[tuple[TimeWindow, ...], ...] = ((),) * 7

    @property
    def id(self) -> str:
        return self.employee_id

    def windows_on(self, day: date) -> tuple[TimeWindow, ...]:
        return self.weekly[day.weekday()]

    def covers(self, start: datetime, end: datetime) -> bool:
        """Whether one window of the start's weekday contains the interval."""
        if end.date() != start.date():
            return False
        return any(w_start <= start.time() and end.time() <= w_end for w_start, w_end in self.windows_on(start.date()))
