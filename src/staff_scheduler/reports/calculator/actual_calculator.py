from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...shifts.model import Shift
from .base import HoursCalculator


class ActualHoursCalculator(HoursCalculator):
    """Clocked hours. Shifts missing either actual time are left out, not zero-filled."""

    def reference_time(self, shift: Shift) -> datetime:
        return shift.actual_start_time or shift.start_time

    def hours(self, shift: Shift) -> Optional[float]:
        return shift.actual_hours
