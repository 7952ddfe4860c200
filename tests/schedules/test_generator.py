from datetime import date, datetime, time

import pytest

from staff_scheduler.absences.model import Absence
from staff_scheduler.company.model import CompanyData
from staff_scheduler.core.enums import ConflictKind
from staff_scheduler.core.exceptions import InvalidRange, LockedCalendar, NotFoundError, ValidationError
from staff_scheduler.employees.model import Employee
from staff_scheduler.schedules.generator import generate_shifts, matching_days

COMPANY = "c1"
MON_WED = [True, False, True, False, False, False, False]
# Monday 3 March 2025 .. Wednesday 12 March 2025: two Mondays, two Wednesdays
RANGE = (date(2025, 3, 3), date(2025, 3, 12))


def _data(absences=()):
    return CompanyData(
        company_id=COMPANY,
        employees=(
            Employee("A", "Alice", "alice@example.com", COMPANY),
            Employee("B", "Bob", "bob@example.com", COMPANY),
        ),
        absences=tuple(absences),
    )


def test_matching_days_uses_monday_first_mask():
    assert matching_days(*RANGE, MON_WED) == [
        date(2025, 3, 3),
        date(2025, 3, 5),
        date(2025, 3, 10),
        date(2025, 3, 12),
    ]


def test_generates_one_shift_per_employee_and_day():
    result = generate_shifts(_data(), ["A", "B"], (time(9), time(17)), RANGE, MON_WED, location_id="loc-1")

    assert result.ok
    assert len(result.created) == 8
    assert {s.location_id for s in result.created} == {"loc-1"}
    assert all(s.company_id == COMPANY for s in result.created)


def test_one_absence_blocks_the_whole_batch():
    absence = Absence("a1", "B", "leave", date(2025, 3, 10), date(2025, 3, 10), COMPANY)

    result = generate_shifts(_data([absence]), ["A", "B"], (time(9), time(17)), RANGE, MON_WED)

    assert result.created == ()
    assert len(result.conflicts) == 1
    report = result.conflicts[0]
    assert report.employee_id == "B"
    assert report.date == date(2025, 3, 10)
    assert report.kind == ConflictKind.ABSENCE
    assert str(report) == "Bob on 2025-03-10: Absent"


def test_every_conflict_is_reported():
    absences = [
        Absence("a1", "A", "leave", date(2025, 3, 3), date(2025, 3, 5), COMPANY),
        Absence("a2", "B", "leave", date(2025, 3, 12), date(2025, 3, 12), COMPANY),
    ]

    result = generate_shifts(_data(absences), ["A", "B"], (time(9), time(17)), RANGE, MON_WED)

    assert [(c.employee_id, c.date) for c in result.conflicts] == [
        ("A", date(2025, 3, 3)),
        ("A", date(2025, 3, 5)),
        ("B", date(2025, 3, 12)),
    ]


def test_overnight_time_range_rolls_to_next_day():
    result = generate_shifts(_data(), ["A"], (time(22), time(6)), (date(2025, 3, 3), date(2025, 3, 3)), MON_WED)

    shift = result.created[0]
    assert shift.start_time == datetime(2025, 3, 3, 22)
    assert shift.end_time == datetime(2025, 3, 4, 6)


@pytest.mark.parametrize(
    "employee_ids, date_range, mask",
    [
        ([], RANGE, MON_WED),
        (["A"], RANGE, [False] * 7),
        (["A"], RANGE, [True] * 5),
        (["A"], (date(2025, 3, 12), date(2025, 3, 3)), MON_WED),
    ],
)
def test_invalid_requests_fail_fast(employee_ids, date_range, mask):
    with pytest.raises(InvalidRange):
        generate_shifts(_data(), employee_ids, (time(9), time(17)), date_range, mask)


def test_unknown_employee():
    with pytest.raises(NotFoundError):
        generate_shifts(_data(), ["A", "Z"], (time(9), time(17)), RANGE, MON_WED)


def test_refused_while_locked():
    with pytest.raises(LockedCalendar):
        generate_shifts(_data(), ["A"], (time(9), time(17)), RANGE, MON_WED, locked=True)


def test_accepts_form_strings():
    result = generate_shifts(_data(), ["A"], ("09:00", "17:30"), ("2025-03-03", "2025-03-05"), MON_WED)

    assert [s.start_time for s in result.created] == [datetime(2025, 3, 3, 9), datetime(2025, 3, 5, 9)]
    assert result.created[0].end_time == datetime(2025, 3, 3, 17, 30)


def test_malformed_time_string():
    with pytest.raises(ValidationError):
        generate_shifts(_data(), ["A"], ("9h", "17:00"), RANGE, MON_WED)
