"""Single-owner cancellable timer used for auto-play.

At most one timer is pending at any time: arming always cancels the previous
handle first. Schedulers only need ``call_later(delay_seconds, callback)``
returning an object with ``cancel()``, so an asyncio event loop can be passed
in directly instead of the default thread-based scheduler.
"""

import logging
import threading
from typing import Callable, Optional, Protocol

logger = logging.getLogger("ScenePlayMCP.engine.timer")


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class ThreadingScheduler:
    """Runs callbacks on daemon ``threading.Timer`` threads."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class AutoAdvanceTimer:
    """Owns the one pending auto-advance timer.

    Each arming gets a fresh token which is passed to ``on_fire``. The owner
    checks ``is_current(token)`` before acting, so a callback already in
    flight when its timer was replaced does nothing.
    """

    def __init__(self, scheduler: Scheduler, on_fire: Callable[[object], None]):
        self._scheduler = scheduler
        self._on_fire = on_fire
        self._handle: Optional[TimerHandle] = None
        self._token: Optional[object] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def is_current(self, token: object) -> bool:
        return token is not None and token is self._token

    def arm(self, delay_ms: int) -> None:
        self.cancel()
        token = object()
        self._token = token
        self._handle = self._scheduler.call_later(delay_ms / 1000.0, lambda: self._on_fire(token))
        logger.debug(f"Auto-advance armed for {delay_ms}ms")

    def release(self, token: object) -> None:
        """Forget a timer that has fired, if it is still the owned one."""
        if self.is_current(token):
            self._handle = None
            self._token = None

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            logger.debug("Auto-advance cancelled")
        self._handle = None
        self._token = None
