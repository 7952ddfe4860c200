from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from ...shifts.model import Shift


class HoursCalculator(ABC):
    """Strategy for which times of a shift count towards worked hours."""

    @abstractmethod
    def reference_time(self, shift: Shift) -> datetime:
        """The moment that decides whether a shift falls in a report window."""

        raise NotImplementedError

    @abstractmethod
    def hours(self, shift: Shift) -> Optional[float]:
        """Counted hours, or ``None`` when the shift is not counted at all."""

        raise NotImplementedError
