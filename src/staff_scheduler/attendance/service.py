from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..company.model import CompanyData
from ..core.capabilities import Capabilities
from ..core.constants import DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES, DEFAULT_CLOCK_IN_GRACE_MINUTES
from ..core.enums import ClockingStatus
from ..core.exceptions import NotFoundError, PersistenceFailure
from ..shifts.model import Shift
from ..transaction import TransactionResult, run_optimistic
from . import clocking
from .repository import ClockWriter

logger = logging.getLogger(__name__)


def _replace_shift(data: CompanyData, updated: Shift) -> CompanyData:
    return data.with_shifts(updated if s.id == updated.id else s for s in data.shifts)


class ClockService:
    """Use cases: employee clock-in/out and the automatic clock-out sweep."""

    def __init__(
        self,
        clock: ClockWriter,
        capabilities: Capabilities,
        *,
        grace_minutes: int = DEFAULT_CLOCK_IN_GRACE_MINUTES,
        auto_close_after_minutes: int = DEFAULT_AUTO_CLOCK_OUT_AFTER_MINUTES,
    ):
        self._clock = clock
        self._capabilities = capabilities
        self._grace_minutes = int(grace_minutes)
        self._auto_close_after = int(auto_close_after_minutes)

    def _get_shift(self, data: CompanyData, shift_id: str) -> Shift:
        shift = data.shift(shift_id)
        if shift is None:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def status(self, data: CompanyData, shift_id: str, *, now: Optional[datetime] = None) -> ClockingStatus:
        shift = self._get_shift(data, shift_id)
        return clocking.clocking_status(shift, data.absences, self._capabilities, now or now_local())

    def clock_in(self, data: CompanyData, shift_id: str, *, now: Optional[datetime] = None) -> TransactionResult[CompanyData]:
        now = now or now_local()
        updated = clocking.clock_in(
            self._get_shift(data, shift_id),
            now,
            self._capabilities,
            grace_minutes=self._grace_minutes,
        )
        return run_optimistic(
            data,
            lambda d: _replace_shift(d, updated),
            lambda _: self._clock.clock_in(shift_id, now),
            label=f"clock-in for shift {shift_id}",
        )

    def clock_out(self, data: CompanyData, shift_id: str, *, now: Optional[datetime] = None) -> TransactionResult[CompanyData]:
        now = now or now_local()
        updated = clocking.clock_out(self._get_shift(data, shift_id), now, self._capabilities)
        return run_optimistic(
            data,
            lambda d: _replace_shift(d, updated),
            lambda _: self._clock.clock_out(shift_id, now),
            label=f"clock-out for shift {shift_id}",
        )

    def auto_clock_out(self, data: CompanyData, *, now: Optional[datetime] = None) -> TransactionResult[CompanyData]:
        """Close shifts left open 30 minutes past their scheduled end.

        Shifts are persisted one by one; those that persisted are applied,
        the others stay open and are reported in ``error.failed_ids``.
        """
        if not self._capabilities.supports_clocking:
            return TransactionResult.unchanged(data)

        due = clocking.due_for_auto_close(data.shifts, now or now_local(), after_minutes=self._auto_close_after)
        if not due:
            return TransactionResult.unchanged(data)

        logger.info("Auto-clocking out %d shift(s)", len(due))
        closed: dict[str, Shift] = {}
        failed: list[str] = []
        for shift in due:
            try:
                saved = self._clock.auto_close_shift(shift.id, shift.end_time)
            except Exception as exc:
                logger.warning("Auto clock-out of shift %s raised %s", shift.id, exc)
                saved = False
            if saved:
                closed[shift.id] = shift
            else:
                failed.append(shift.id)

        state = data.with_shifts(closed.get(s.id, s) for s in data.shifts) if closed else data
        error = None
        if failed:
            logger.warning("Auto clock-out failed for %d shift(s)", len(failed))
            error = PersistenceFailure(
                f"Failed to auto clock-out {len(failed)} shift(s)",
                failed_ids=tuple(failed),
            )
        return TransactionResult(state=state, previous=data, error=error)
