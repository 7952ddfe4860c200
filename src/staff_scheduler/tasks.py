from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """Run ``action`` every ``interval_seconds`` on a daemon thread until cancelled.

    A failing run is logged and the schedule continues.
    """

    def __init__(self, name: str, interval_seconds: float, action: Callable[[], object]):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.name = name
        self.interval_seconds = float(interval_seconds)
        self._action = action
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> bool:
        try:
            self._action()
        except Exception:
            logger.exception("Periodic task %s failed", self.name)
            return False
        return True

    def _loop(self) -> None:
        while not self._stop.wait(self.interval_seconds):
            self.run_once()

    def start(self) -> None:
        with self._lock:
            if self.is_running:
                return
            self._stop.clear()
            self._thread = threading.Thread(target=self._loop, name=self.name, daemon=True)
            self._thread.start()
        logger.debug("Started periodic task %s every %ss", self.name, self.interval_seconds)

    def cancel(self, timeout: Optional[float] = None) -> None:
        with self._lock:
            thread = self._thread
            self._stop.set()
            self._thread = None
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.debug("Cancelled periodic task %s", self.name)
