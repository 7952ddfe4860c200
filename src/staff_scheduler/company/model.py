from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from ..absences.model import Absence, AbsenceType
from ..employees.model import Employee, EmployeeAvailability
from ..holidays.model import SpecialDay, SpecialDayType
from ..requests.model import InboxMessage
from ..shifts.model import Shift


@dataclass(frozen=True)
class CompanyData:
    """Immutable snapshot of one company's collections.

    Every mutation in this package takes a snapshot and returns a new one,
    so callers can always fall back to the snapshot they started from.
    """

    company_id: str
    employees: tuple[Employee, ...] = ()
    shifts: tuple[Shift, ...] = ()
    absences: tuple[Absence, ...] = ()
    absence_types: tuple[AbsenceType, ...] = ()
    special_days: tuple[SpecialDay, ...] = ()
    special_day_types: tuple[SpecialDayType, ...] = ()
    inbox_messages: tuple[InboxMessage, ...] = ()
    employee_availabilities: tuple[EmployeeAvailability, ...] = ()

    def employee(self, employee_id: Optional[str]) -> Optional[Employee]:
        return next((e for e in self.employees if e.id == employee_id), None)

    def availability(self, employee_id: str) -> Optional[EmployeeAvailability]:
        return next((a for a in self.employee_availabilities if a.employee_id == employee_id), None)

    def shift(self, shift_id: str) -> Optional[Shift]:
        return next((s for s in self.shifts if s.id == shift_id), None)

    def message(self, message_id: str) -> Optional[InboxMessage]:
        return next((m for m in self.inbox_messages if m.id == message_id), None)

    def absence_type(self, absence_type_id: Optional[str]) -> Optional[AbsenceType]:
        return next((t for t in self.absence_types if t.id == absence_type_id), None)

    def with_shifts(self, shifts: Iterable[Shift]) -> "CompanyData":
        return replace(self, shifts=tuple(shifts))

    def with_changes(self, **collections) -> "CompanyData":
        return replace(self, **{k: tuple(v) for k, v in collections.items()})


def upsert(items: tuple, item) -> tuple:
    """Replace the element with ``item.id`` or append ``item``."""
    if any(i.id == item.id for i in items):
        return tuple(item if i.id == item.id else i for i in items)
    return items + (item,)


def without(items: tuple, item_id: str) -> tuple:
    return tuple(i for i in items if i.id != item_id)
