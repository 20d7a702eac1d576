"""Shared fixtures: a manual scheduler so timer behavior is deterministic."""

import pytest


class FakeHandle:
    def __init__(self, delay: float, callback):
        self.delay = delay
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Records call_later requests; tests fire them explicitly."""

    def __init__(self):
        self.handles: list[FakeHandle] = []

    def call_later(self, delay, callback):
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def live(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def fire(self, handle: FakeHandle):
        handle.fired = True
        handle.callback()

    def fire_next(self):
        live = self.live
        assert live, "no pending timer"
        self.fire(live[0])


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
