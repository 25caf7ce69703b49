# =============================================================================
# tests/unit/test_scheduler.py
# Unit Tests for the threading-based expiry scheduler
# =============================================================================

import threading

from psico_core.auth import ThreadingScheduler


class TestThreadingScheduler:

    def test_callback_runs_after_delay(self):
        fired = threading.Event()
        task = ThreadingScheduler().schedule(0.01, fired.set)

        assert fired.wait(timeout=2)
        assert not task.cancelled

    def test_negative_delay_runs_immediately(self):
        fired = threading.Event()
        ThreadingScheduler().schedule(-5, fired.set)
        assert fired.wait(timeout=2)

    def test_cancelled_task_never_runs(self):
        fired = threading.Event()
        task = ThreadingScheduler().schedule(0.2, fired.set)
        task.cancel()

        assert task.cancelled
        assert not fired.wait(timeout=0.4)
