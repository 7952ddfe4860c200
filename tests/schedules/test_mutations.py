from dataclasses import replace
from datetime import date, datetime

import pytest

from staff_scheduler.absences.model import Absence
from staff_scheduler.company.model import CompanyData
from staff_scheduler.core.enums import ConflictKind
from staff_scheduler.holidays.model import SpecialDay, SpecialDayType
from staff_scheduler.core.exceptions import InvalidRange, LockedCalendar, NotFoundError
from staff_scheduler.employees.model import Employee
from staff_scheduler.schedules import mutations
from staff_scheduler.shifts.model import Shift

COMPANY = "c1"


def _data(*shifts, absences=()):
    return CompanyData(
        company_id=COMPANY,
        employees=(Employee("e1", "Alice", "alice@example.com", COMPANY),),
        shifts=tuple(shifts),
        absences=tuple(absences),
    )


def _shift(shift_id, start, end, employee_id="e1", **kwargs):
    return Shift(id=shift_id, company_id=COMPANY, employee_id=employee_id, start_time=start, end_time=end, **kwargs)


def test_place_appends_new_shift_and_keeps_before():
    data = _data()
    result = mutations.place_shift(data, _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17)))

    assert result.applied
    assert result.created
    assert result.before == ()
    assert [s.id for s in result.after] == ["s1"]


def test_place_generates_missing_id():
    result = mutations.place_shift(_data(), _shift("", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17)))

    assert result.shift.id
    assert result.after[0].id == result.shift.id


def test_place_rolls_overnight_end():
    result = mutations.place_shift(_data(), _shift("s1", datetime(2025, 3, 3, 22), datetime(2025, 3, 3, 6)))

    assert result.shift.end_time == datetime(2025, 3, 4, 6)
    assert all(s.end_time > s.start_time for s in result.after)


def test_place_updates_existing_shift_in_place():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))
    s2 = _shift("s2", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17))

    result = mutations.place_shift(_data(s1, s2), replace(s1, end_time=datetime(2025, 3, 3, 13)))

    assert not result.created
    assert [s.id for s in result.after] == ["s1", "s2"]
    assert result.after[0].end_time == datetime(2025, 3, 3, 13)


def test_place_rejects_conflict_without_changing_collection():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))
    data = _data(s1)

    result = mutations.place_shift(data, _shift("s2", datetime(2025, 3, 3, 16), datetime(2025, 3, 3, 20)))

    assert not result.applied
    assert result.conflict.kind == ConflictKind.OVERLAP
    assert result.after == data.shifts


def test_place_refused_while_locked():
    with pytest.raises(LockedCalendar):
        mutations.place_shift(_data(), _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17)), locked=True)


def test_editor_rules_lock_clocked_or_finished_shifts():
    now = datetime(2025, 3, 5, 12, 0)
    finished = _shift("s1", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17))
    clocked = _shift("s2", datetime(2025, 3, 5, 9), datetime(2025, 3, 5, 17), actual_start_time=datetime(2025, 3, 5, 9))
    data = _data(finished, clocked)

    with pytest.raises(LockedCalendar):
        mutations.place_shift(data, replace(finished, end_time=datetime(2025, 3, 4, 16)), now=now)
    with pytest.raises(LockedCalendar):
        mutations.place_shift(data, replace(clocked, end_time=datetime(2025, 3, 5, 16)), now=now)


def test_editor_rules_refuse_new_shift_on_past_day():
    with pytest.raises(InvalidRange):
        mutations.place_shift(
            _data(),
            _shift("s1", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17)),
            now=datetime(2025, 3, 5, 8, 0),
        )


def test_move_keeps_time_of_day_and_duration():
    s1 = _shift("s1", datetime(2025, 3, 3, 22), datetime(2025, 3, 4, 6, 30))

    result = mutations.move_shift(_data(s1), "s1", date(2025, 3, 10))

    assert result.applied
    assert result.shift.start_time == datetime(2025, 3, 10, 22)
    assert result.shift.end_time == datetime(2025, 3, 11, 6, 30)
    assert result.shift.end_time - result.shift.start_time == s1.end_time - s1.start_time


def test_move_onto_absence_is_rejected_entirely():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))
    absence = Absence("a1", "e1", "leave", date(2025, 3, 10), date(2025, 3, 12), COMPANY)
    data = _data(s1, absences=[absence])

    result = mutations.move_shift(data, "s1", date(2025, 3, 11))

    assert not result.applied
    assert result.conflict.kind == ConflictKind.ABSENCE
    assert result.after == data.shifts


def test_move_within_same_slot_does_not_conflict_with_itself():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))

    assert mutations.move_shift(_data(s1), "s1", date(2025, 3, 3)).applied


def test_move_unknown_shift():
    with pytest.raises(NotFoundError):
        mutations.move_shift(_data(), "missing", date(2025, 3, 3))


def test_delete_is_unconditional():
    absence = Absence("a1", "e1", "leave", date(2025, 3, 3), date(2025, 3, 3), COMPANY)
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))

    result = mutations.delete_shift(_data(s1, absences=[absence]), "s1")

    assert result.after == ()
    assert result.removed_ids == ("s1",)


def test_delete_many_reports_every_missing_id_before_removing():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))

    with pytest.raises(NotFoundError) as exc:
        mutations.delete_many(_data(s1), ["s1", "x", "y"])

    assert "x" in str(exc.value) and "y" in str(exc.value)


def test_delete_many_removes_all_given_ids():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))
    s2 = _shift("s2", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17))
    s3 = _shift("s3", datetime(2025, 3, 5, 9), datetime(2025, 3, 5, 17))

    result = mutations.delete_many(_data(s1, s2, s3), ["s1", "s3", "s1"])

    assert [s.id for s in result.after] == ["s2"]
    assert result.removed_ids == ("s1", "s3")


def test_replace_all_reports_internal_overlaps():
    shifts = [
        _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17)),
        _shift("s2", datetime(2025, 3, 3, 12), datetime(2025, 3, 3, 20)),
        _shift("s3", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17)),
    ]

    result = mutations.replace_all(_data(), shifts)

    assert not result.applied
    assert sorted((c.employee_id, c.blocking_id) for c in result.conflicts) == [("e1", "s1"), ("e1", "s2")]
    assert result.after == ()


def test_move_refuses_clocked_or_finished_shift_when_now_given():
    clocked = _shift("s1", datetime(2025, 3, 5, 9), datetime(2025, 3, 5, 17), actual_start_time=datetime(2025, 3, 5, 9))
    finished = _shift("s2", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17))
    data = _data(clocked, finished)
    now = datetime(2025, 3, 5, 12, 0)

    with pytest.raises(LockedCalendar):
        mutations.move_shift(data, "s1", date(2025, 3, 20), now=now)
    with pytest.raises(LockedCalendar):
        mutations.move_shift(data, "s2", date(2025, 3, 20), now=now)


def test_replace_all_does_not_recheck_unchanged_shifts():
    holiday_type = SpecialDayType("hol", "Public holiday", True, COMPANY)
    on_holiday = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 17))
    s2 = _shift("s2", datetime(2025, 3, 4, 9), datetime(2025, 3, 4, 17))
    data = replace(
        _data(on_holiday, s2),
        special_days=(SpecialDay("sd1", date(2025, 3, 3), "hol", COMPANY),),
        special_day_types=(holiday_type,),
    )

    result = mutations.replace_all(data, [on_holiday, replace(s2, department_id="kitchen")])

    assert result.applied
    assert result.after[1].department_id == "kitchen"


def test_replace_all_checks_changed_shift_against_later_unchanged_one():
    s1 = _shift("s1", datetime(2025, 3, 3, 9), datetime(2025, 3, 3, 12))
    s2 = _shift("s2", datetime(2025, 3, 3, 13), datetime(2025, 3, 3, 17))

    result = mutations.replace_all(_data(s1, s2), [replace(s1, end_time=datetime(2025, 3, 3, 14)), s2])

    assert not result.applied
    assert [(c.kind, c.blocking_id) for c in result.conflicts] == [(ConflictKind.OVERLAP, "s2")]
