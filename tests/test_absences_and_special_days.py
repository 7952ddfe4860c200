from __future__ import annotations

from datetime import date
from typing import Any, Sequence

import pytest

from staff_scheduler.absences.model import Absence, AbsenceType
from staff_scheduler.absences.service import AbsenceService
from staff_scheduler.company.model import CompanyData
from staff_scheduler.core.capabilities import Capabilities
from staff_scheduler.core.enums import Coverage, Plan
from staff_scheduler.core.exceptions import CapabilityError, InvalidRange, NotFoundError, ValidationError
from staff_scheduler.employees.model import Employee
from staff_scheduler.holidays.calendar import holiday_on, partial_holidays_on
from staff_scheduler.holidays.model import SpecialDay, SpecialDayType
from staff_scheduler.holidays.service import SpecialDayService

COMPANY = "c1"


class InMemoryItems:
    def __init__(self, *, succeed: bool = True):
        self.succeed = succeed

    def save(self, collection: str, item: Any) -> bool:
        return self.succeed

    def delete(self, collection: str, item_id: str) -> bool:
        return self.succeed

    def bulk_create(self, collection: str, items: Sequence[Any]) -> bool:
        return self.succeed


DATA = CompanyData(
    COMPANY,
    employees=(Employee("e1", "Alice", "alice@example.com", COMPANY),),
    absence_types=(AbsenceType("vac", "Vacation", COMPANY),),
    special_day_types=(
        SpecialDayType("hol", "Public holiday", True, COMPANY),
        SpecialDayType("evt", "Inventory", False, COMPANY),
    ),
)


def test_save_absence():
    result = AbsenceService(InMemoryItems(), Capabilities.for_plan(Plan.PRO)).save_absence(
        DATA, Absence("", "e1", "vac", date(2025, 3, 10), date(2025, 3, 10), "")
    )

    absence = result.state.absences[0]
    assert absence.id
    assert absence.company_id == COMPANY
    assert absence.covers(date(2025, 3, 10))


def test_absence_end_before_start():
    with pytest.raises(InvalidRange):
        AbsenceService(InMemoryItems(), Capabilities.for_plan(Plan.PRO)).save_absence(
            DATA, Absence("a1", "e1", "vac", date(2025, 3, 10), date(2025, 3, 9), COMPANY)
        )


def test_absences_need_plan_capability():
    with pytest.raises(CapabilityError):
        AbsenceService(InMemoryItems(), Capabilities.for_plan(Plan.FREE)).save_absence(
            DATA, Absence("a1", "e1", "vac", date(2025, 3, 10), date(2025, 3, 10), COMPANY)
        )


def test_delete_unknown_absence():
    with pytest.raises(NotFoundError):
        AbsenceService(InMemoryItems(), Capabilities.for_plan(Plan.PRO)).delete_absence(DATA, "missing")


def test_one_special_day_per_date():
    service = SpecialDayService(InMemoryItems())
    data = service.save_special_day(DATA, SpecialDay("sd1", date(2025, 12, 25), "hol", COMPANY)).state

    with pytest.raises(ValidationError):
        service.save_special_day(data, SpecialDay("sd2", date(2025, 12, 25), "evt", COMPANY))


def test_special_day_type_must_exist():
    with pytest.raises(NotFoundError):
        SpecialDayService(InMemoryItems()).save_special_day(DATA, SpecialDay("sd1", date(2025, 12, 25), "nope", COMPANY))


def test_only_all_day_holidays_block():
    days = [
        SpecialDay("sd1", date(2025, 12, 24), "hol", COMPANY, coverage=Coverage.PARTIAL),
        SpecialDay("sd2", date(2025, 12, 25), "hol", COMPANY),
        SpecialDay("sd3", date(2025, 12, 26), "evt", COMPANY),
    ]

    assert holiday_on(date(2025, 12, 24), days, DATA.special_day_types) is None
    assert holiday_on(date(2025, 12, 25), days, DATA.special_day_types).id == "sd2"
    assert holiday_on(date(2025, 12, 26), days, DATA.special_day_types) is None
    assert [d.id for d in partial_holidays_on(date(2025, 12, 24), days, DATA.special_day_types)] == ["sd1"]
