"""Validated create/move/delete over an explicit shift collection.

Functions here never touch a store. Each returns the collection before and
after the change so the caller can persist the new one and fall back to the
old one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.intervals import DayLike, as_date
from ..common.validators import new_id
from ..company.model import CompanyData
from ..core.exceptions import InvalidRange, LockedCalendar, NotFoundError
from ..shifts.model import Shift
from .conflicts import Conflict, PlacementContext, check_shift

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    before: tuple[Shift, ...]
    after: tuple[Shift, ...]
    shift: Optional[Shift] = None
    conflicts: tuple[Conflict, ...] = ()
    removed_ids: tuple[str, ...] = ()
    created: bool = False

    @property
    def applied(self) -> bool:
        return not self.conflicts

    @property
    def conflict(self) -> Optional[Conflict]:
        return self.conflicts[0] if self.conflicts else None

    def apply_to(self, data: CompanyData) -> CompanyData:
        return data.with_shifts(self.after)


def ensure_unlocked(locked: bool, action: str) -> None:
    if locked:
        logger.info("Refused to %s: calendar is locked", action)
        raise LockedCalendar(f"Cannot {action}: the calendar is locked")


def _rejected(data: CompanyData, shift: Shift, conflicts: Sequence[Conflict], action: str) -> MutationResult:
    for c in conflicts:
        logger.info("Refused to %s %s: %s on %s", action, shift.id, c.kind.value, c.date)
    return MutationResult(before=data.shifts, after=data.shifts, shift=shift, conflicts=tuple(conflicts))


def place_shift(
    data: CompanyData,
    candidate: Shift,
    *,
    locked: bool = False,
    now: Optional[datetime] = None,
) -> MutationResult:
    """Add ``candidate`` or replace the shift with the same id.

    With ``now`` given, editor rules apply as well: an existing shift that
    was clocked or has already ended is locked, and new shifts cannot be
    added on a past day.
    """
    ensure_unlocked(locked, "place shift")

    shift = candidate if candidate.id else replace(candidate, id=new_id())
    shift = shift.normalized()
    existing = data.shift(shift.id)

    if now is not None:
        if existing is not None and existing.is_locked(now):
            raise LockedCalendar(f"Shift {shift.id} is locked (clocked or already ended)")
        if existing is None and as_date(shift.start_time) < as_date(now):
            raise InvalidRange("Cannot add a shift on a past day")

    conflict = check_shift(shift, data.shifts, PlacementContext.from_company(data))
    if conflict is not None:
        return _rejected(data, shift, [conflict], "place")

    if existing is None:
        after = data.shifts + (shift,)
    else:
        after = tuple(shift if s.id == shift.id else s for s in data.shifts)
    return MutationResult(before=data.shifts, after=after, shift=shift, created=existing is None)


def move_shift(
    data: CompanyData,
    shift_id: str,
    new_day: DayLike,
    *,
    locked: bool = False,
    now: Optional[datetime] = None,
) -> MutationResult:
    """Move a shift to ``new_day`` keeping its time of day and exact duration.

    With ``now`` given, a shift that was clocked or has already ended cannot move.
    """
    ensure_unlocked(locked, "move shift")

    original = data.shift(shift_id)
    if original is None:
        raise NotFoundError(f"Shift {shift_id} not found")
    if now is not None and original.is_locked(now):
        raise LockedCalendar(f"Shift {shift_id} is locked (clocked or already ended)")

    new_start = datetime.combine(as_date(new_day), original.start_time.time())
    moved = replace(
        original,
        start_time=new_start,
        end_time=new_start + (original.end_time - original.start_time),
    )

    conflict = check_shift(moved, data.shifts, PlacementContext.from_company(data))
    if conflict is not None:
        return _rejected(data, moved, [conflict], "move")

    after = tuple(moved if s.id == shift_id else s for s in data.shifts)
    return MutationResult(before=data.shifts, after=after, shift=moved)


def delete_shift(data: CompanyData, shift_id: str, *, locked: bool = False) -> MutationResult:
    ensure_unlocked(locked, "delete shift")
    if data.shift(shift_id) is None:
        raise NotFoundError(f"Shift {shift_id} not found")

    after = tuple(s for s in data.shifts if s.id != shift_id)
    return MutationResult(before=data.shifts, after=after, removed_ids=(shift_id,))


def delete_many(data: CompanyData, shift_ids: Iterable[str], *, locked: bool = False) -> MutationResult:
    """Remove several shifts; unknown ids are all reported before anything is removed."""
    ensure_unlocked(locked, "delete shifts")

    ids = tuple(dict.fromkeys(shift_ids))
    known = {s.id for s in data.shifts}
    missing = [i for i in ids if i not in known]
    if missing:
        raise NotFoundError(f"Shifts not found: {', '.join(missing)}")

    doomed = set(ids)
    after = tuple(s for s in data.shifts if s.id not in doomed)
    return MutationResult(before=data.shifts, after=after, removed_ids=ids)


def replace_all(data: CompanyData, shifts: Iterable[Shift], *, locked: bool = False) -> MutationResult:
    """Swap in an edited collection.

    Only new or changed shifts are checked, against the whole new collection;
    shifts equal to their stored version are taken as they are.
    """
    ensure_unlocked(locked, "update shifts")

    accepted = [(s if s.id else replace(s, id=new_id())).normalized() for s in shifts]
    context = PlacementContext.from_company(data)
    conflicts: list[Conflict] = []
    for shift in accepted:
        if data.shift(shift.id) == shift:
            continue
        conflict = check_shift(shift, accepted, context)
        if conflict is not None:
            conflicts.append(conflict)

    if conflicts:
        logger.info("Refused to update shifts: %d conflict(s)", len(conflicts))
        return MutationResult(before=data.shifts, after=data.shifts, conflicts=tuple(conflicts))
    return MutationResult(before=data.shifts, after=tuple(accepted))
