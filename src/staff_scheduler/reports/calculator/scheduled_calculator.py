from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...shifts.model import Shift
from .base import HoursCalculator


class ScheduledHoursCalculator(HoursCalculator):
    """Planned hours: scheduled end minus scheduled start."""

    def reference_time(self, shift: Shift) -> datetime:
        return shift.start_time

    def hours(self, shift: Shift) -> Optional[float]:
        return shift.scheduled_hours
