"""Recurring shift generation.

Expands a date range, a Monday-first weekday mask and a time-of-day range
into one candidate per employee and matching day. The batch is
all-or-nothing: a single conflict anywhere means nothing is created, and
every conflict found is reported so the request can be fixed in one go.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time
from typing import Callable, Optional, Sequence, Union

from ..common.datetime_utils import parse_iso_date, parse_time_of_day
from ..common.intervals import interval_on, iter_days
from ..common.validators import new_id, require_day_range
from ..company.model import CompanyData
from ..core.constants import DAYS_PER_WEEK
from ..core.enums import ConflictKind
from ..core.exceptions import InvalidRange, NotFoundError
from ..shifts.model import Shift
from .conflicts import PlacementContext, check_shift
from .mutations import ensure_unlocked

logger = logging.getLogger(__name__)

TimeLike = Union[time, str]
DateLike = Union[date, str]


@dataclass(frozen=True)
class ConflictReport:
    employee_id: str
    employee_name: str
    date: date
    kind: ConflictKind
    detail: str

    def __str__(self) -> str:
        return f"{self.employee_name} on {self.date.isoformat()}: {self.detail}"


@dataclass(frozen=True)
class GenerationResult:
    created: tuple[Shift, ...]
    conflicts: tuple[ConflictReport, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.conflicts


def _as_time(value: TimeLike) -> time:
    return parse_time_of_day(value) if isinstance(value, str) else value


def _as_day(value: DateLike) -> date:
    return parse_iso_date(value) if isinstance(value, str) else value


def matching_days(start: date, end: date, weekday_mask: Sequence[bool]) -> list[date]:
    return [d for d in iter_days(start, end) if weekday_mask[d.weekday()]]


def _validate(employee_ids: Sequence[str], date_range: tuple[date, date], weekday_mask: Sequence[bool]) -> None:
    if not employee_ids:
        raise InvalidRange("Select at least one employee")
    if len(weekday_mask) != DAYS_PER_WEEK:
        raise InvalidRange("Weekday mask must have 7 entries (Monday first)")
    if not any(weekday_mask):
        raise InvalidRange("Select at least one weekday")
    require_day_range(date_range[0], date_range[1])


def generate_shifts(
    data: CompanyData,
    employee_ids: Sequence[str],
    time_range: tuple[TimeLike, TimeLike],
    date_range: tuple[DateLike, DateLike],
    weekday_mask: Sequence[bool],
    *,
    location_id: Optional[str] = None,
    department_id: Optional[str] = None,
    locked: bool = False,
    id_factory: Callable[[], str] = new_id,
) -> GenerationResult:
    """Candidates for every employee on every matching day, or every conflict found.

    Times may be given as ``"HH:MM"`` and dates as ``"YYYY-MM-DD"``.
    """
    ensure_unlocked(locked, "generate shifts")
    date_range = (_as_day(date_range[0]), _as_day(date_range[1]))
    _validate(employee_ids, date_range, weekday_mask)

    ids = list(dict.fromkeys(employee_ids))
    employees = {e.id: e for e in data.employees}
    unknown = [i for i in ids if i not in employees]
    if unknown:
        raise NotFoundError(f"Employees not found: {', '.join(unknown)}")

    days = matching_days(date_range[0], date_range[1], weekday_mask)
    context = PlacementContext.from_company(data)
    start_t, end_t = _as_time(time_range[0]), _as_time(time_range[1])

    candidates: list[Shift] = []
    reports: list[ConflictReport] = []
    for employee_id in ids:
        employee = employees[employee_id]
        for day in days:
            start, end = interval_on(day, start_t, end_t)
            candidate = Shift(
                id=id_factory(),
                company_id=data.company_id,
                employee_id=employee_id,
                start_time=start,
                end_time=end,
                location_id=location_id or None,
                department_id=department_id or None,
            )
            conflict = check_shift(candidate, data.shifts, context)
            if conflict is not None:
                reports.append(
                    ConflictReport(
                        employee_id=employee_id,
                        employee_name=employee.name,
                        date=day,
                        kind=conflict.kind,
                        detail=conflict.detail,
                    )
                )
                continue
            candidates.append(candidate)

    if reports:
        logger.info("Recurring generation refused: %d conflict(s)", len(reports))
        return GenerationResult(created=(), conflicts=tuple(reports))

    logger.debug("Generated %d shift(s) over %d day(s)", len(candidates), len(days))
    return GenerationResult(created=tuple(candidates))
