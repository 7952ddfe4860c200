from datetime import date, datetime

from staff_scheduler.absences.model import Absence
from staff_scheduler.core.enums import ConflictKind, Coverage
from staff_scheduler.holidays.model import SpecialDay, SpecialDayType
from staff_scheduler.schedules.conflicts import check_placement
from staff_scheduler.shifts.model import Shift

COMPANY = "c1"
HOLIDAY_TYPE = SpecialDayType(id="t-hol", name="Public holiday", is_holiday=True, company_id=COMPANY)
EVENT_TYPE = SpecialDayType(id="t-evt", name="Inventory", is_holiday=False, company_id=COMPANY)


def _shift(shift_id, start, end, employee_id="e1"):
    return Shift(id=shift_id, company_id=COMPANY, employee_id=employee_id, start_time=start, end_time=end)


def _check(employee_id, start, end, shifts=(), absences=(), special_days=(), exclude=None):
    return check_placement(
        employee_id,
        start,
        end,
        shifts,
        absences,
        special_days,
        [HOLIDAY_TYPE, EVENT_TYPE],
        exclude_shift_id=exclude,
    )


def test_touching_shifts_do_not_conflict():
    existing = [_shift("s1", datetime(2025, 3, 3, 12, 0), datetime(2025, 3, 3, 14, 0))]

    assert _check("e1", datetime(2025, 3, 3, 10, 0), datetime(2025, 3, 3, 12, 0), existing) is None


def test_one_minute_overlap_conflicts():
    existing = [_shift("s1", datetime(2025, 3, 3, 12, 0), datetime(2025, 3, 3, 14, 0))]

    conflict = _check("e1", datetime(2025, 3, 3, 11, 59), datetime(2025, 3, 3, 12, 1), existing)

    assert conflict.kind == ConflictKind.OVERLAP
    assert conflict.blocking_id == "s1"
    assert conflict.date == date(2025, 3, 3)


def test_identical_shift_under_another_id_overlaps():
    s1 = _shift("s1", datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0))

    conflict = _check("e1", s1.start_time, s1.end_time, [s1], exclude="s2")

    assert conflict.kind == ConflictKind.OVERLAP


def test_excluding_own_id_ignores_the_shift_itself():
    s1 = _shift("s1", datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0))

    assert _check("e1", s1.start_time, s1.end_time, [s1], exclude="s1") is None


def test_other_employees_shifts_are_ignored():
    existing = [_shift("s1", datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0), employee_id="e2")]

    assert _check("e1", datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0), existing) is None


def test_holiday_wins_over_absence_and_overlap():
    day = date(2025, 12, 25)
    existing = [_shift("s1", datetime(2025, 12, 25, 9, 0), datetime(2025, 12, 25, 17, 0))]
    absences = [Absence("a1", "e1", "sick", day, day, COMPANY)]
    special_days = [SpecialDay("sd1", day, HOLIDAY_TYPE.id, COMPANY)]

    conflict = _check("e1", datetime(2025, 12, 25, 9, 0), datetime(2025, 12, 25, 17, 0), existing, absences, special_days)

    assert conflict.kind == ConflictKind.HOLIDAY
    assert conflict.blocking_id == "sd1"


def test_absence_wins_over_overlap():
    existing = [_shift("s1", datetime(2025, 3, 4, 9, 0), datetime(2025, 3, 4, 17, 0))]
    absences = [Absence("a1", "e1", "sick", date(2025, 3, 3), date(2025, 3, 5), COMPANY)]

    conflict = _check("e1", datetime(2025, 3, 4, 9, 0), datetime(2025, 3, 4, 17, 0), existing, absences)

    assert conflict.kind == ConflictKind.ABSENCE
    assert conflict.detail == "Absent"


def test_partial_or_non_holiday_special_days_do_not_block():
    day = date(2025, 3, 3)
    special_days = [
        SpecialDay("sd1", day, HOLIDAY_TYPE.id, COMPANY, coverage=Coverage.PARTIAL),
        SpecialDay("sd2", day, EVENT_TYPE.id, COMPANY),
    ]

    assert _check("e1", datetime(2025, 3, 3, 9, 0), datetime(2025, 3, 3, 17, 0), special_days=special_days) is None


def test_open_shift_is_never_blocked():
    day = date(2025, 12, 25)
    special_days = [SpecialDay("sd1", day, HOLIDAY_TYPE.id, COMPANY)]

    assert _check(None, datetime(2025, 12, 25, 9, 0), datetime(2025, 12, 25, 17, 0), special_days=special_days) is None
