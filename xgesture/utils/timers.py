"""
Cancellable scheduled callbacks for the gesture detector.

The detector only needs to schedule a callback after a delay and to cancel
a pending one. Hosts pick the implementation matching their event loop:

* ``ThreadingTimerService`` for hosts reading input on a background thread
  and guarding detector state with a lock (the evdev listener).
* ``PolledTimerService`` for hosts owning a frame loop (the pygame demo)
  and for tests driving a virtual clock.
"""

import heapq
import itertools
import logging
import threading
from typing import Callable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)


class TimerHandle:
    """A scheduled callback that can be cancelled until it fires."""

    def __init__(self, callback: Callable[[], None]):
        self._callback = callback
        self._cancelled = False
        self._fired = False

    @property
    def active(self) -> bool:
        return not (self._cancelled or self._fired)

    def cancel(self):
        self._cancelled = True

    def fire(self):
        """Run the callback once unless it was cancelled."""
        if not self.active:
            return
        self._fired = True
        self._callback()


class TimerService(Protocol):
    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingTimerService:
    """Schedules callbacks on ``threading.Timer`` threads.

    Every callback runs while holding ``lock``, the same lock the host holds
    while feeding pointer events, so detector state is never touched by two
    threads at once. Pass a re-entrant lock when callbacks may call back
    into the host.
    """

    def __init__(self, lock=None):
        self.lock = lock or threading.RLock()

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ThreadedHandle(callback)
        timer = threading.Timer(delay_ms / 1000.0, self._run, args=(handle,))
        timer.daemon = True
        handle.timer = timer
        timer.start()
        return handle

    def _run(self, handle: 'TimerHandle'):
        with self.lock:
            # cancel() may have happened while this thread waited for the lock
            handle.fire()


class _ThreadedHandle(TimerHandle):

    timer: Optional[threading.Timer] = None

    def cancel(self):
        super().cancel()
        if self.timer is not None:
            self.timer.cancel()


class PolledTimerService:
    """Fires due callbacks whenever the owning loop calls ``poll``.

    With no ``clock`` the service runs on a virtual millisecond clock that
    only moves through ``poll(now_ms)`` and ``advance(delta_ms)``.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()
        self._firing_at: Optional[float] = None
        self.now_ms = clock() if clock else 0.0

    def _now(self) -> float:
        if self._firing_at is not None:
            return self._firing_at
        if self._clock is not None:
            return self._clock()
        return self.now_ms

    def schedule(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(callback)
        due = self._now() + delay_ms
        heapq.heappush(self._queue, (due, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that can still fire."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def poll(self, now_ms: Optional[float] = None) -> int:
        """Fire every callback due at or before ``now_ms``, in due order.

        Returns the number of callbacks that ran.
        """
        if now_ms is None:
            now_ms = self._clock() if self._clock else self.now_ms
        fired = 0
        while self._queue and self._queue[0][0] <= now_ms:
            due, _, handle = heapq.heappop(self._queue)
            if not handle.active:
                continue
            self._firing_at = due
            try:
                handle.fire()
            finally:
                self._firing_at = None
            fired += 1
        self.now_ms = max(self.now_ms, now_ms)
        if fired:
            logger.debug(f"Fired {fired} timer(s) at {now_ms:.0f}ms")
        return fired

    def advance(self, delta_ms: float) -> int:
        """Move the virtual clock forward and fire what became due."""
        return self.poll(self.now_ms + delta_ms)
