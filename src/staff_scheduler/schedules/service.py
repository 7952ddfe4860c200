from __future__ import annotations

import logging
from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.intervals import DayLike
from ..company.model import CompanyData
from ..shifts.model import Shift
from ..shifts.repository import ShiftWriter
from ..transaction import TransactionResult, UndoBuffer, run_optimistic
from . import mutations
from .generator import generate_shifts

logger = logging.getLogger(__name__)


class ScheduleService:
    """Use cases: place, move, delete and generate shifts.

    Each call validates against the given snapshot, applies the change
    optimistically and persists it through ``ShiftWriter``. The returned
    result carries the snapshot to keep: the new one on success, the given
    one on conflict or persistence failure. Saving and moving also refuse
    shifts that were clocked or have already ended.
    """

    def __init__(self, shifts: ShiftWriter, *, locked: bool = False):
        self._shifts = shifts
        self._locked = bool(locked)

    @property
    def locked(self) -> bool:
        return self._locked

    def lock(self) -> None:
        self._locked = True

    def unlock(self) -> None:
        self._locked = False

    def _commit(
        self,
        data: CompanyData,
        result: mutations.MutationResult,
        persist,
        *,
        label: str,
        undo: Optional[UndoBuffer[CompanyData]],
    ) -> TransactionResult[CompanyData]:
        if not result.applied:
            return TransactionResult.rejected_with(data, result.conflicts)
        return run_optimistic(data, result.apply_to, persist, label=label, undo=undo)

    def save_shift(
        self,
        data: CompanyData,
        shift: Shift,
        *,
        now: Optional[datetime] = None,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        result = mutations.place_shift(data, shift, locked=self._locked, now=now or now_local())
        placed = result.shift

        def persist(_: CompanyData) -> bool:
            if result.created:
                return self._shifts.create_shift(placed)
            return self._shifts.update_shift(placed)

        return self._commit(data, result, persist, label=f"shift {placed.id}", undo=undo)

    def move_shift(
        self,
        data: CompanyData,
        shift_id: str,
        new_day: DayLike,
        *,
        now: Optional[datetime] = None,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        result = mutations.move_shift(data, shift_id, new_day, locked=self._locked, now=now or now_local())
        return self._commit(
            data,
            result,
            lambda _: self._shifts.update_shift(result.shift),
            label=f"move of shift {shift_id}",
            undo=undo,
        )

    def delete_shift(
        self,
        data: CompanyData,
        shift_id: str,
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        result = mutations.delete_shift(data, shift_id, locked=self._locked)
        return self._commit(
            data,
            result,
            lambda _: self._shifts.delete_shift(shift_id),
            label=f"deletion of shift {shift_id}",
            undo=undo,
        )

    def delete_shifts(
        self,
        data: CompanyData,
        shift_ids: Iterable[str],
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        result = mutations.delete_many(data, shift_ids, locked=self._locked)
        return self._commit(
            data,
            result,
            lambda _: self._shifts.delete_shifts(list(result.removed_ids)),
            label=f"deletion of {len(result.removed_ids)} shift(s)",
            undo=undo,
        )

    def update_all_shifts(
        self,
        data: CompanyData,
        shifts: Iterable[Shift],
        *,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        result = mutations.replace_all(data, shifts, locked=self._locked)
        return self._commit(
            data,
            result,
            lambda _: self._shifts.update_all_shifts(list(result.after)),
            label="shift collection",
            undo=undo,
        )

    def generate(
        self,
        data: CompanyData,
        employee_ids: Sequence[str],
        time_range: tuple[time, time],
        date_range: tuple[date, date],
        weekday_mask: Sequence[bool],
        *,
        location_id: Optional[str] = None,
        department_id: Optional[str] = None,
        undo: Optional[UndoBuffer[CompanyData]] = None,
    ) -> TransactionResult[CompanyData]:
        generated = generate_shifts(
            data,
            employee_ids,
            time_range,
            date_range,
            weekday_mask,
            location_id=location_id,
            department_id=department_id,
            locked=self._locked,
        )
        if not generated.ok:
            return TransactionResult.rejected_with(data, generated.conflicts)
        if not generated.created:
            return TransactionResult.unchanged(data)

        return run_optimistic(
            data,
            lambda d: d.with_shifts(d.shifts + generated.created),
            lambda _: self._shifts.bulk_create_shifts(list(generated.created)),
            label=f"{len(generated.created)} generated shift(s)",
            undo=undo,
        )
