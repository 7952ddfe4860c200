from __future__ import annotations

from typing import Protocol, Sequence

from .model import Shift


class ShiftWriter(Protocol):
    """Write accessors for shifts. Each call reports success or failure."""

    def create_shift(self, shift: Shift) -> bool:
        raise NotImplementedError

    def update_shift(self, shift: Shift) -> bool:
        raise NotImplementedError

    def delete_shift(self, shift_id: str) -> bool:
        raise NotImplementedError

    def bulk_create_shifts(self, shifts: Sequence[Shift]) -> bool:
        raise NotImplementedError

    def delete_shifts(self, shift_ids: Sequence[str]) -> bool:
        raise NotImplementedError

    def update_all_shifts(self, shifts: Sequence[Shift]) -> bool:
        """Replace the stored collection with ``shifts``."""

        raise NotImplementedError
