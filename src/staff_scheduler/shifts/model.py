from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import hours_between
from ..common.intervals import roll_overnight


@dataclass(frozen=True)
class Shift:
    """Domain entity: a time-boxed shift.

    ``employee_id`` of ``None`` marks an open (unassigned) shift.
    """

    id: str
    company_id: str
    start_time: datetime
    end_time: datetime
    employee_id: Optional[str] = None
    location_id: Optional[str] = None
    department_id: Optional[str] = None
    actual_start_time: Optional[datetime] = None
    actual_end_time: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return not self.employee_id

    @property
    def scheduled_hours(self) -> float:
        return hours_between(self.start_time, self.end_time)

    @property
    def actual_hours(self) -> Optional[float]:
        if self.actual_start_time is None or self.actual_end_time is None:
            return None
        return hours_between(self.actual_start_time, self.actual_end_time)

    def is_locked(self, now: datetime) -> bool:
        """A clocked or finished shift can no longer be edited by an administrator."""
        return (
            self.actual_start_time is not None
            or self.actual_end_time is not None
            or self.end_time < now
        )

    def normalized(self) -> "Shift":
        end = roll_overnight(self.start_time, self.end_time)
        if end == self.end_time:
            return self
        return replace(self, end_time=end)
