from __future__ import annotations

from dataclasses import dataclass

from .calculator.actual_calculator import ActualHoursCalculator
from .calculator.base import HoursCalculator
from .calculator.scheduled_calculator import ScheduledHoursCalculator


@dataclass
class HoursCalculatorFactory:
    """Factory Pattern: clocked hours when actual times are used, planned hours otherwise."""

    def for_report(self, *, use_actual_times: bool) -> HoursCalculator:
        if use_actual_times:
            return ActualHoursCalculator()
        return ScheduledHoursCalculator()
