"""Cancelable fixed-interval timer."""

from __future__ import annotations

import threading
from typing import Callable, Optional

import structlog

logger = structlog.get_logger(__name__)


class RefreshTimer:
    """Run ``callback`` every ``interval`` seconds on a daemon thread.

    Each tick schedules the next one after the callback returns, so ticks
    never overlap.  ``stop()`` cancels the pending tick; no further ticks
    run after it returns.
    """

    def __init__(self, interval: float, callback: Callable[[], None]) -> None:
        if interval <= 0:
            raise ValueError("Refresh interval must be positive.")
        self.interval = interval
        self._callback = callback
        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        with self._lock:
            if self._running:
                return
            self._running = True
            self._schedule()
        logger.info("kitchen.timer.started", interval=self.interval)

    def stop(self) -> None:
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        logger.info("kitchen.timer.stopped")

    def _schedule(self) -> None:
        self._timer = threading.Timer(self.interval, self._tick)
        self._timer.daemon = True
        self._timer.start()

    def _tick(self) -> None:
        if not self._running:
            return
        try:
            self._callback()
        finally:
            with self._lock:
                if self._running:
                    self._schedule()
