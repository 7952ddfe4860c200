"""Per-shift attendance lifecycle.

future -> not-clocked-in -> present -> closed, with ``absent`` taking
precedence when the employee is on leave on the shift's start day. The
transition functions are pure: they return an updated ``Shift``.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..absences.model import Absence
from ..core.capabilities import Capabilities
from ..core.constants import DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES, DEFAULT_CLOCK_IN_GRACE_MINUTES
from ..core.enums import ClockingStatus
from ..core.exceptions import ClockingError
from ..shifts.model import Shift


def clocking_status(
    shift: Shift,
    absences: Sequence[Absence],
    capabilities: Capabilities,
    now: datetime,
) -> ClockingStatus:
    if not capabilities.supports_clocking or shift.is_open:
        return ClockingStatus.FUTURE

    if any(a.employee_id == shift.employee_id and a.covers(shift.start_time) for a in absences):
        return ClockingStatus.ABSENT
    if shift.actual_start_time is not None and shift.actual_end_time is not None:
        return ClockingStatus.CLOSED
    if shift.actual_start_time is not None:
        return ClockingStatus.PRESENT
    if shift.start_time < now:
        return ClockingStatus.NOT_CLOCKED_IN
    return ClockingStatus.FUTURE


def clock_in(
    shift: Shift,
    now: datetime,
    capabilities: Capabilities,
    *,
    grace_minutes: int = DEFAULT_CLOCK_IN_GRACE_MINUTES,
) -> Shift:
    capabilities.require("supports_clocking", "Clocking")
    if shift.is_open:
        raise ClockingError("Cannot clock in to an unassigned shift")
    if shift.actual_start_time is not None:
        raise ClockingError("Already clocked in to this shift")

    opens_at = shift.start_time - timedelta(minutes=grace_minutes)
    if now < opens_at:
        raise ClockingError(f"Clock-in opens at {opens_at:%H:%M}")
    return replace(shift, actual_start_time=now)


def clock_out(shift: Shift, now: datetime, capabilities: Capabilities) -> Shift:
    capabilities.require("supports_clocking", "Clocking")
    if shift.actual_start_time is None:
        raise ClockingError("Not clocked in to this shift")
    if shift.actual_end_time is not None:
        raise ClockingError("Already clocked out of this shift")
    return replace(shift, actual_end_time=now)


def auto_close(
    shift: Shift,
    now: datetime,
    *,
    after_minutes: int = DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES,
) -> Optional[Shift]:
    """Close a forgotten shift at its scheduled end, or ``None`` when not due.

    Already closed shifts are never due, so repeated sweeps change nothing.
    """
    if shift.actual_start_time is None or shift.actual_end_time is not None:
        return None
    if now <= shift.end_time + timedelta(minutes=after_minutes):
        return None
    return replace(shift, actual_end_time=shift.end_time)


def due_for_auto_close(
    shifts: Iterable[Shift],
    now: datetime,
    *,
    after_minutes: int = DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES,
) -> list[Shift]:
    closed = (auto_close(s, now, after_minutes=after_minutes) for s in shifts)
    return [s for s in closed if s is not None]
