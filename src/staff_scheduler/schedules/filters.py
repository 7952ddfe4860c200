from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..absences.model import Absence
from ..company.model import CompanyData
from ..shifts.model import Shift


@dataclass(frozen=True)
class CalendarFilters:
    """Empty sequences mean no restriction."""

    employee_ids: Sequence[str] = ()
    role_names: Sequence[str] = ()
    department_ids: Sequence[str] = ()


def filter_calendar(data: CompanyData, filters: CalendarFilters) -> tuple[list[Shift], list[Absence]]:
    """Shifts and absences visible under ``filters``.

    Open shifts are always kept. Absences ignore the department filter.
    """
    employees = {e.id: e for e in data.employees}

    shifts: list[Shift] = []
    for shift in data.shifts:
        if shift.is_open:
            shifts.append(shift)
            continue
        employee = employees.get(shift.employee_id)
        if employee is None:
            continue
        if filters.employee_ids and employee.id not in filters.employee_ids:
            continue
        if filters.role_names and employee.role not in filters.role_names:
            continue
        if filters.department_ids and shift.department_id not in filters.department_ids:
            continue
        shifts.append(shift)

    absences: list[Absence] = []
    for absence in data.absences:
        employee = employees.get(absence.employee_id)
        if employee is None:
            continue
        if filters.employee_ids and employee.id not in filters.employee_ids:
            continue
        if filters.role_names and employee.role not in filters.role_names:
            continue
        absences.append(absence)

    return shifts, absences
