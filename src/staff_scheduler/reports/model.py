from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

import pandas as pd

EXPORT_COLUMNS = ["name", "email", "phone", "hours"]


@dataclass(frozen=True)
class HoursFilters:
    """Trailing window in weeks plus optional role/department restrictions."""

    weeks: int = 1
    role_names: Sequence[str] = ()
    department_ids: Sequence[str] = ()


@dataclass(frozen=True)
class EmployeeHours:
    employee_id: str
    name: str
    email: str
    phone: str
    hours: float


@dataclass(frozen=True)
class HoursReport:
    """Cumulative hours per employee, sorted by hours descending."""

    total_hours: float
    per_employee: tuple[EmployeeHours, ...] = ()
    use_actual_times: bool = False

    def to_rows(self, *, total_label: str = "Total") -> list[tuple[str, str, str, float]]:
        """(name, email, phone, hours) per employee followed by a grand-total row."""
        rows = [(e.name, e.email, e.phone, round(e.hours, 1)) for e in self.per_employee]
        rows.append((total_label, "", "", round(self.total_hours, 1)))
        return rows

    def to_dataframe(self, *, total_label: str = "Total") -> pd.DataFrame:
        return pd.DataFrame(self.to_rows(total_label=total_label), columns=EXPORT_COLUMNS)


@dataclass(frozen=True)
class UpcomingItem:
    kind: str
    starts_at: datetime
    item: Any


@dataclass(frozen=True)
class WeeklySummary:
    """Dashboard figures for the ISO week containing ``now``."""

    total_employees: int
    total_shifts: int
    total_hours: float
    open_shifts: int
    assigned_shifts: int
    fulfillment_rate: float
    absences: int
    hours_by_role: tuple[tuple[str, float], ...] = ()
    upcoming: tuple[UpcomingItem, ...] = field(default_factory=tuple)

    def role_hours(self, role: str) -> Optional[float]:
        return dict(self.hours_by_role).get(role)
