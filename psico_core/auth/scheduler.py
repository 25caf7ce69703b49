# =============================================================================
# psico_core/auth/scheduler.py
# Cancellable delayed callbacks (session expiry timer)
# =============================================================================

from __future__ import annotations
import threading
from abc import ABC, abstractmethod
from typing import Callable


class ScheduledTask(ABC):
    """Handle to a pending callback"""

    @abstractmethod
    def cancel(self) -> None:
        pass

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        pass


class Scheduler(ABC):
    """Runs a callback once after a delay"""

    @abstractmethod
    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        """
        Arrange for callback to run after ``delay`` seconds.

        A negative delay is treated as zero.
        """
        pass


class _TimerTask(ScheduledTask):

    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ThreadingScheduler(Scheduler):
    """Scheduler backed by daemon threading.Timer instances"""

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        timer.name = "psico-session-expiry"
        timer.start()
        return _TimerTask(timer)
