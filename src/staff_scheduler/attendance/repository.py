from __future__ import annotations

from datetime import datetime
from typing import Protocol


class ClockWriter(Protocol):
    """Clock surface of the store (clocking plans only)."""

    def clock_in(self, shift_id: str, at: datetime) -> bool:
        raise NotImplementedError

    def clock_out(self, shift_id: str, at: datetime) -> bool:
        raise NotImplementedError

    def auto_close_shift(self, shift_id: str, scheduled_end: datetime) -> bool:
        raise NotImplementedError
