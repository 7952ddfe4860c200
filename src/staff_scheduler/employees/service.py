from __future__ import annotations

import logging
import secrets
from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping, Optional, Sequence

from ..common.validators import new_id, require_non_empty
from ..company.model import CompanyData, upsert, without
from ..company.repository import ItemWriter
from ..core.capabilities import Capabilities
from ..core.constants import (
    ACCESS_CODE_MAX,
    ACCESS_CODE_MIN,
    DAYS_PER_WEEK,
    DEFAULT_EMPLOYEE_GENDER,
    DEFAULT_EMPLOYEE_ROLE,
)
from ..core.exceptions import CapabilityError, NotFoundError, ValidationError
from ..shifts.repository import ShiftWriter
from ..transaction import TransactionResult, UndoBuffer, run_optimistic
from .model import Employee, EmployeeAvailability, TimeWindow

logger = logging.getLogger(__name__)


def generate_access_code() -> str:
    """Six-digit mobile login code."""
    return str(ACCESS_CODE_MIN + secrets.randbelow(ACCESS_CODE_MAX - ACCESS_CODE_MIN + 1))


def _check_limit(current: int, adding: int, capabilities: Capabilities) -> None:
    if current + adding > capabilities.employee_limit:
        raise CapabilityError(
            f"The {capabilities.plan.value} plan allows at most {capabilities.employee_limit} employees"
        )


def prepare_employee(data: CompanyData, employee: Employee, capabilities: Capabilities) -> Employee:
    """Validate an employee about to be saved and fill in generated fields."""
    name = require_non_empty(employee.name, "Name")
    email = require_non_empty(employee.email, "Email")
    employee = replace(employee, name=name, email=email, id=employee.id or new_id(), company_id=data.company_id)

    if data.employee(employee.id) is None:
        _check_limit(len(data.employees), 1, capabilities)
        if capabilities.supports_clocking and not employee.access_code:
            employee = replace(employee, access_code=generate_access_code())
    return employee


def delete_employee(data: CompanyData, employee_id: str) -> CompanyData:
    """Remove an employee with their shifts and absences.

    Inbox messages stay: they are history and keep the employee id.
    """
    if data.employee(employee_id) is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    return data.with_changes(
        employees=without(data.employees, employee_id),
        shifts=[s for s in data.shifts if s.employee_id != employee_id],
        absences=[a for a in data.absences if a.employee_id != employee_id],
    )


def prepare_availability(
    data: CompanyData,
    employee_id: str,
    weekly: Sequence[Iterable[TimeWindow]],
) -> EmployeeAvailability:
    if data.employee(employee_id) is None:
        raise NotFoundError(f"Employee {employee_id} not found")
    if len(weekly) != DAYS_PER_WEEK:
        raise ValidationError("Availability needs 7 days (Monday first)")

    days = []
    for windows in weekly:
        day = tuple(sorted(tuple(w) for w in windows))
        for start, end in day:
            if end <= start:
                raise ValidationError(f"Availability window {start:%H:%M}-{end:%H:%M} ends before it starts")
        days.append(day)
    return EmployeeAvailability(employee_id=employee_id, company_id=data.company_id, weekly=tuple(days))


def build_imported_employees(
    data: CompanyData,
    rows: Iterable[Mapping[str, Any]],
    capabilities: Capabilities,
    *,
    id_factory: Callable[[], str] = new_id,
) -> list[Employee]:
    """Employees to create from imported rows.

    Rows without a name or email are skipped, and emails already known
    (case-insensitive) are not imported twice.
    """
    capabilities.require("can_import_employees", "Employee import")

    seen = {e.email.lower() for e in data.employees}
    created: list[Employee] = []
    for row in rows:
        name = (row.get("name") or "").strip()
        email = (row.get("email") or "").strip()
        if not name or not email or email.lower() in seen:
            continue

        access_code = row.get("access_code") or None
        if capabilities.supports_clocking and not access_code:
            access_code = generate_access_code()

        created.append(
            Employee(
                id=id_factory(),
                name=name,
                email=email,
                company_id=data.company_id,
                phone=row.get("phone") or "",
                gender=row.get("gender") or DEFAULT_EMPLOYEE_GENDER,
                role=row.get("role") or DEFAULT_EMPLOYEE_ROLE,
                access_code=access_code,
            )
        )
        seen.add(email.lower())

    _check_limit(len(data.employees), len(created), capabilities)
    return created


class EmployeeService:
    def __init__(self, items: ItemWriter, shifts: ShiftWriter, capabilities: Capabilities):
        self._items = items
        self._shifts = shifts
        self._capabilities = capabilities

    def save(
        self,
        data: CompanyData,
        employee: Employee,
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        prepared = prepare_employee(data, employee, self._capabilities)
        return run_optimistic(
            data,
            lambda d: d.with_changes(employees=upsert(d.employees, prepared)),
            lambda _: self._items.save("employees", prepared),
            label=f"employee {prepared.id}",
            undo=undo,
        )

    def delete(
        self,
        data: CompanyData,
        employee_id: str,
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        after = delete_employee(data, employee_id)
        shift_ids = [s.id for s in data.shifts if s.employee_id == employee_id]
        absence_ids = [a.id for a in data.absences if a.employee_id == employee_id]

        def persist(_: CompanyData) -> bool:
            if not self._items.delete("employees", employee_id):
                return False
            if shift_ids and not self._shifts.delete_shifts(shift_ids):
                return False
            return all(self._items.delete("absences", a) for a in absence_ids)

        return run_optimistic(data, lambda _: after, persist, label=f"deletion of employee {employee_id}", undo=undo)

    def save_availability(
        self,
        data: CompanyData,
        employee_id: str,
        weekly: Sequence[Iterable[TimeWindow]],
    ) -> TransactionResult[CompanyData]:
        availability = prepare_availability(data, employee_id, weekly)
        return run_optimistic(
            data,
            lambda d: d.with_changes(employee_availabilities=upsert(d.employee_availabilities, availability)),
            lambda _: self._items.save("employee_availabilities", availability),
            label=f"availability of employee {employee_id}",
        )

    def regenerate_access_code(self, data: CompanyData, employee_id: str) -> TransactionResult[CompanyData]:
        self._capabilities.require("supports_clocking", "Access codes")
        employee = data.employee(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee {employee_id} not found")

        updated = replace(employee, access_code=generate_access_code())
        return run_optimistic(
            data,
            lambda d: d.with_changes(employees=upsert(d.employees, updated)),
            lambda _: self._items.save("employees", updated),
            label=f"access code of employee {employee_id}",
        )

    def import_employees(self, data: CompanyData, rows: Iterable[Mapping[str, Any]]) -> TransactionResult[CompanyData]:
        created = build_imported_employees(data, rows, self._capabilities)
        if not created:
            logger.info("Employee import: nothing new to import")
            return TransactionResult.unchanged(data)

        logger.info("Importing %d employee(s)", len(created))
        return run_optimistic(
            data,
            lambda d: d.with_changes(employees=d.employees + tuple(created)),
            lambda _: self._items.bulk_create("employees", created),
            label=f"import of {len(created)} employee(s)",
        )
