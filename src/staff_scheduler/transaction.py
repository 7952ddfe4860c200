"""Optimistic apply / persist / rollback.

The caller applies a change to its snapshot right away, asks a collaborator
to persist it, and falls back to the original snapshot when persistence
fails. Nothing here holds state except the caller-owned ``UndoBuffer``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .core.constants import DEFAULT_UNDO_DEPTH
from .core.exceptions import PersistenceFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class TransactionResult(Generic[T]):
    state: T
    previous: T
    error: Optional[PersistenceFailure] = None
    conflicts: tuple = ()

    @property
    def ok(self) -> bool:
        return self.error is None and not self.conflicts

    @property
    def rolled_back(self) -> bool:
        return self.error is not None and self.state is self.previous

    @property
    def rejected(self) -> bool:
        return bool(self.conflicts)

    @classmethod
    def unchanged(cls, state: T) -> "TransactionResult[T]":
        return cls(state=state, previous=state)

    @classmethod
    def rejected_with(cls, state: T, conflicts) -> "TransactionResult[T]":
        return cls(state=state, previous=state, conflicts=tuple(conflicts))

    def raise_for_error(self) -> "TransactionResult[T]":
        if self.error is not None:
            raise self.error
        return self


class UndoBuffer(Generic[T]):
    """Caller-owned stack of snapshots taken before committed changes."""

    def __init__(self, depth: int = DEFAULT_UNDO_DEPTH):
        self._depth = int(depth)
        self._snapshots: list[T] = []

    def push(self, snapshot: T) -> None:
        self._snapshots.append(snapshot)
        if len(self._snapshots) > self._depth:
            del self._snapshots[0]

    def pop(self) -> T:
        if not self._snapshots:
            raise IndexError("Nothing to undo")
        return self._snapshots.pop()

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)


def run_optimistic(
    current: T,
    apply: Callable[[T], T],
    persist: Callable[[T], bool],
    *,
    label: str = "change",
    undo: Optional[UndoBuffer[T]] = None,
) -> TransactionResult[T]:
    """Apply a change, persist it, and revert to ``current`` if persisting fails."""
    candidate = apply(current)

    try:
        saved = bool(persist(candidate))
    except Exception as exc:
        logger.warning("Persisting %s raised %s; rolling back", label, exc)
        failure = PersistenceFailure(f"Failed to persist {label}: {exc}")
        failure.__cause__ = exc
        return TransactionResult(state=current, previous=current, error=failure)

    if not saved:
        logger.warning("Persisting %s failed; rolling back", label)
        return TransactionResult(
            state=current,
            previous=current,
            error=PersistenceFailure(f"Failed to persist {label}"),
        )

    if undo is not None:
        undo.push(current)
    return TransactionResult(state=candidate, previous=current)
