"""Placement rules for a single shift candidate.

Checks run in a fixed order and stop at the first hit: an all-day holiday,
then an absence of the employee, then an overlapping shift of the same
employee. Conflicts are returned as values, never raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..absences.model import Absence
from ..common.intervals import as_date, overlaps
from ..core.enums import ConflictKind
from ..holidays.calendar import holiday_on, partial_holidays_on
from ..holidays.model import SpecialDay, SpecialDayType
from ..shifts.model import Shift

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    kind: ConflictKind
    employee_id: Optional[str]
    date: date
    detail: str
    blocking_id: Optional[str] = None

    def describe(self) -> str:
        return f"{self.date.isoformat()}: {self.detail}"


@dataclass(frozen=True)
class PlacementContext:
    """Calendar facts a placement is checked against (everything but shifts)."""

    absences: Sequence[Absence] = ()
    special_days: Sequence[SpecialDay] = ()
    special_day_types: Sequence[SpecialDayType] = ()

    @classmethod
    def from_company(cls, data) -> "PlacementContext":
        return cls(
            absences=data.absences,
            special_days=data.special_days,
            special_day_types=data.special_day_types,
        )


def check_placement(
    employee_id: Optional[str],
    candidate_start: datetime,
    candidate_end: datetime,
    existing_shifts: Sequence[Shift],
    absences: Sequence[Absence],
    special_days: Sequence[SpecialDay],
    special_day_types: Sequence[SpecialDayType],
    exclude_shift_id: Optional[str] = None,
) -> Optional[Conflict]:
    # Open shifts are exempt from employee-scoped checks.
    if not employee_id:
        return None

    day = as_date(candidate_start)

    holiday = holiday_on(day, special_days, special_day_types)
    if holiday is not None:
        return Conflict(
            kind=ConflictKind.HOLIDAY,
            employee_id=employee_id,
            date=day,
            detail="Holiday",
            blocking_id=holiday.id,
        )
    if logger.isEnabledFor(logging.DEBUG) and partial_holidays_on(day, special_days, special_day_types):
        logger.debug("Partial holiday on %s is not enforced", day)

    for absence in absences:
        if absence.employee_id == employee_id and absence.covers(day):
            return Conflict(
                kind=ConflictKind.ABSENCE,
                employee_id=employee_id,
                date=day,
                detail="Absent",
                blocking_id=absence.id,
            )

    for other in existing_shifts:
        if other.id == exclude_shift_id or other.employee_id != employee_id:
            continue
        if overlaps(candidate_start, candidate_end, other.start_time, other.end_time):
            return Conflict(
                kind=ConflictKind.OVERLAP,
                employee_id=employee_id,
                date=day,
                detail="Overlapping shift",
                blocking_id=other.id,
            )

    return None


def check_shift(
    shift: Shift,
    existing_shifts: Sequence[Shift],
    context: PlacementContext,
    *,
    exclude_shift_id: Optional[str] = None,
) -> Optional[Conflict]:
    """``check_placement`` for a built shift, excluding its own id by default."""
    return check_placement(
        shift.employee_id,
        shift.start_time,
        shift.end_time,
        existing_shifts,
        context.absences,
        context.special_days,
        context.special_day_types,
        exclude_shift_id=shift.id if exclude_shift_id is None else exclude_shift_id,
    )
