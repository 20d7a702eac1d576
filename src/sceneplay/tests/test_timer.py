"""Tests for sceneplay.engine.timer — single-owner auto-advance timer."""

import threading

from sceneplay.engine.timer import AutoAdvanceTimer, ThreadingScheduler


class TestAutoAdvanceTimer:
    def test_arm_schedules_in_seconds(self, scheduler):
        timer = AutoAdvanceTimer(scheduler, lambda token: None)
        timer.arm(1500)
        assert timer.pending is True
        assert scheduler.live[0].delay == 1.5

    def test_rearm_cancels_previous(self, scheduler):
        timer = AutoAdvanceTimer(scheduler, lambda token: None)
        timer.arm(1000)
        timer.arm(2000)
        assert len(scheduler.handles) == 2
        assert scheduler.handles[0].cancelled is True
        assert len(scheduler.live) == 1

    def test_cancel(self, scheduler):
        timer = AutoAdvanceTimer(scheduler, lambda token: None)
        timer.arm(1000)
        timer.cancel()
        assert timer.pending is False
        assert scheduler.live == []

    def test_cancel_when_idle(self, scheduler):
        timer = AutoAdvanceTimer(scheduler, lambda token: None)
        timer.cancel()
        assert timer.pending is False

    def test_fire_passes_current_token(self, scheduler):
        seen = []
        timer = AutoAdvanceTimer(scheduler, lambda token: seen.append(timer.is_current(token)))
        timer.arm(1000)
        scheduler.fire_next()
        assert seen == [True]

    def test_replaced_timer_token_is_stale(self, scheduler):
        seen = []
        timer = AutoAdvanceTimer(scheduler, lambda token: seen.append(timer.is_current(token)))
        timer.arm(1000)
        first = scheduler.handles[0]
        timer.arm(1000)
        # Simulate a callback that was already running when it got replaced.
        scheduler.fire(first)
        assert seen == [False]

    def test_release(self, scheduler):
        tokens = []
        timer = AutoAdvanceTimer(scheduler, tokens.append)
        timer.arm(1000)
        scheduler.fire_next()
        timer.release(tokens[0])
        assert timer.pending is False


class TestThreadingScheduler:
    def test_runs_callback(self):
        done = threading.Event()
        ThreadingScheduler().call_later(0.01, done.set)
        assert done.wait(2.0)

    def test_cancel_prevents_callback(self):
        done = threading.Event()
        handle = ThreadingScheduler().call_later(0.2, done.set)
        handle.cancel()
        assert not done.wait(0.4)
