from __future__ import annotations

import logging
from datetime import datetime, time, timedelta
from typing import Optional, Sequence

import pandas as pd

from ..common.datetime_utils import now_local
from ..common.intervals import start_of_day, week_of
from ..company.model import CompanyData
from ..core.capabilities import Capabilities
from ..core.constants import DAYS_PER_WEEK, UPCOMING_ITEMS_LIMIT
from ..employees.model import Employee
from ..shifts.model import Shift
from .factory import HoursCalculatorFactory
from .model import EmployeeHours, HoursFilters, HoursReport, UpcomingItem, WeeklySummary

logger = logging.getLogger(__name__)


def aggregate_hours(
    shifts: Sequence[Shift],
    employees: Sequence[Employee],
    filters: HoursFilters,
    use_actual_times: bool,
    *,
    now: Optional[datetime] = None,
    calculator_factory: Optional[HoursCalculatorFactory] = None,
) -> HoursReport:
    now = now or now_local()
    calculator = (calculator_factory or HoursCalculatorFactory()).for_report(use_actual_times=use_actual_times)
    window_start = start_of_day(now - timedelta(days=int(filters.weeks) * DAYS_PER_WEEK))
    employee_map = {e.id: e for e in employees}

    total = 0.0
    by_employee: dict[str, EmployeeHours] = {}
    for shift in shifts:
        if shift.is_open:
            continue
        if not window_start <= calculator.reference_time(shift) <= now:
            continue
        if filters.department_ids and shift.department_id not in filters.department_ids:
            continue
        employee = employee_map.get(shift.employee_id)
        if filters.role_names and (employee is None or employee.role not in filters.role_names):
            continue

        hours = calculator.hours(shift)
        if hours is None:
            continue
        total += hours

        entry = by_employee.get(shift.employee_id)
        if entry is None:
            entry = EmployeeHours(
                employee_id=shift.employee_id,
                name=employee.name if employee else "Unknown",
                email=employee.email if employee else "",
                phone=employee.phone if employee else "",
                hours=0.0,
            )
        by_employee[shift.employee_id] = EmployeeHours(
            employee_id=entry.employee_id,
            name=entry.name,
            email=entry.email,
            phone=entry.phone,
            hours=entry.hours + hours,
        )

    per_employee = sorted(by_employee.values(), key=lambda e: e.hours, reverse=True)
    return HoursReport(total_hours=total, per_employee=tuple(per_employee), use_actual_times=use_actual_times)


def weekly_summary(
    data: CompanyData,
    *,
    now: Optional[datetime] = None,
    roles: Optional[Sequence[str]] = None,
) -> WeeklySummary:
    now = now or now_local()
    days = week_of(now)
    week_start = start_of_day(days[0])
    week_end = datetime.combine(days[-1], time.max)

    week_shifts = [s for s in data.shifts if week_start <= s.start_time <= week_end]
    total_hours = sum(s.scheduled_hours for s in week_shifts)
    open_count = sum(1 for s in week_shifts if s.is_open)
    assigned = len(week_shifts) - open_count
    rate = (assigned / len(week_shifts)) * 100 if week_shifts else 100.0

    absences = sum(1 for a in data.absences if a.start_date <= days[-1] and a.end_date >= days[0])

    if roles is None:
        roles = list(dict.fromkeys(e.role for e in data.employees if e.role))
    employee_roles = {e.id: e.role for e in data.employees}
    hours_by_role = []
    for role in roles:
        hours = sum(s.scheduled_hours for s in week_shifts if employee_roles.get(s.employee_id) == role)
        if hours > 0:
            hours_by_role.append((role, hours))

    upcoming = [UpcomingItem("shift", s.start_time, s) for s in data.shifts if s.start_time > now]
    upcoming += [
        UpcomingItem("absence", start_of_day(a.start_date), a)
        for a in data.absences
        if start_of_day(a.start_date) > now
    ]
    upcoming.sort(key=lambda u: u.starts_at)

    return WeeklySummary(
        total_employees=len(data.employees),
        total_shifts=len(week_shifts),
        total_hours=total_hours,
        open_shifts=open_count,
        assigned_shifts=assigned,
        fulfillment_rate=rate,
        absences=absences,
        hours_by_role=tuple(hours_by_role),
        upcoming=tuple(upcoming[:UPCOMING_ITEMS_LIMIT]),
    )


class ReportService:
    """Dashboard and cumulative-hours reporting, gated by the plan.

    Plans with clocking report clocked hours; the others report scheduled hours.
    """

    def __init__(self, capabilities: Capabilities, *, calculator_factory: Optional[HoursCalculatorFactory] = None):
        self._capabilities = capabilities
        self._factory = calculator_factory or HoursCalculatorFactory()

    def dashboard(self, data: CompanyData, *, now: Optional[datetime] = None) -> WeeklySummary:
        self._capabilities.require("can_access_dashboard", "Dashboard")
        return weekly_summary(data, now=now)

    def hours_report(
        self,
        data: CompanyData,
        filters: HoursFilters,
        *,
        now: Optional[datetime] = None,
    ) -> HoursReport:
        self._capabilities.require("can_access_dashboard", "Hours analysis")
        return aggregate_hours(
            data.shifts,
            data.employees,
            filters,
            self._capabilities.supports_clocking,
            now=now,
            calculator_factory=self._factory,
        )

    def export_hours(
        self,
        data: CompanyData,
        filters: HoursFilters,
        *,
        now: Optional[datetime] = None,
        total_label: str = "Total",
    ) -> pd.DataFrame:
        self._capabilities.require("can_export", "Export")
        report = self.hours_report(data, filters, now=now)
        logger.debug("Exporting hours for %d employee(s)", len(report.per_employee))
        return report.to_dataframe(total_label=total_label)
