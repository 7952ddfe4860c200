from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

from .company.model import CompanyData
from .container import Container
from .tasks import PeriodicTask
from .transaction import TransactionResult

logger = logging.getLogger(__name__)


class SchedulerSession:
    """Holds one company's current snapshot and runs the background refreshes.

    The inbox is re-read every ``inbox_poll_interval_seconds``; on plans with
    clocking, open shifts are swept for auto clock-out every
    ``auto_clock_out_interval_seconds``. Both jobs are stopped by ``stop()``.

    Changes made through ``apply`` run one at a time, but their persistence
    calls happen outside the snapshot lock, so reads and inbox polls never
    wait on a slow write.
    """

    def __init__(self, container: Container, company_id: Optional[str] = None):
        self.container = container
        self.company_id = company_id or container.settings.company_id
        self._lock = threading.Lock()
        self._write_lock = threading.Lock()
        self._data: Optional[CompanyData] = None
        self._tasks: list[PeriodicTask] = []

    @property
    def data(self) -> CompanyData:
        with self._lock:
            if self._data is None:
                raise RuntimeError("Session not loaded; call load() first")
            return self._data

    def load(self) -> CompanyData:
        data = self.container.source.load(self.company_id)
        with self._lock:
            self._data = data
        logger.info(
            "Loaded company %s: %d employees, %d shifts",
            self.company_id,
            len(data.employees),
            len(data.shifts),
        )
        return data

    def apply(self, change: Callable[[CompanyData], TransactionResult[CompanyData]]) -> TransactionResult[CompanyData]:
        """Run a service call against the current snapshot and keep its resulting state.

        An inbox polled while the call was running is kept unless the call
        changed the inbox itself.
        """
        with self._write_lock:
            snapshot = self.data
            result = change(snapshot)
            with self._lock:
                state = result.state
                polled = self._data.inbox_messages
                if polled is not snapshot.inbox_messages and state.inbox_messages is snapshot.inbox_messages:
                    state = state.with_changes(inbox_messages=polled)
                self._data = state
        return result

    def poll_inbox(self) -> None:
        with self._lock:
            if self._data is None:
                return
        messages = self.container.source.list_inbox_messages(self.company_id)
        with self._lock:
            self._data = self._data.with_changes(inbox_messages=messages)

    def sweep_auto_clock_out(self) -> TransactionResult[CompanyData]:
        result = self.apply(lambda d: self.container.clock_service.auto_clock_out(d))
        if result.error is not None:
            logger.warning("%s", result.error)
        return result

    def start(self) -> None:
        if self._data is None:
            self.load()
        if self._tasks:
            return

        settings = self.container.settings
        self._tasks.append(PeriodicTask("inbox-poll", settings.inbox_poll_interval_seconds, self.poll_inbox))
        if self.container.capabilities.supports_clocking:
            self._tasks.append(
                PeriodicTask("auto-clock-out", settings.auto_clock_out_interval_seconds, self.sweep_auto_clock_out)
            )
        for task in self._tasks:
            task.start()

    def stop(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks = []

    @property
    def running_tasks(self) -> list[str]:
        return [t.name for t in self._tasks if t.is_running]
