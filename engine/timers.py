"""
timers.py — Cooperative Timer Scheduler
========================================
Single-threaded replacement for setTimeout / setInterval.  Nothing runs by
itself: the owner drives the scheduler by calling run_pending() from its
own loop (or run_until_idle() to block until every timer has fired).

    sched  = Scheduler()                     # time.monotonic by default
    handle = sched.call_every(0.4, tick)
    ...
    sched.run_pending()                      # fires whatever is due
    handle.cancel()                          # no further ticks, ever

Design decisions:
  - The clock is injectable.  Tests pass a ManualClock and advance it, so
    timing behaviour is deterministic.
  - A cancelled handle is never invoked again, even if it is already due
    inside the current run_pending() pass.
  - TimerSlot holds at most one handle.  Setting a new one cancels the old
    one, which is how "only one auto-play timer" is enforced.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

MIN_INTERVAL = 0.001


class ManualClock:
    """A clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class TimerHandle:
    __slots__ = ("when", "callback", "interval", "cancelled", "_seq")

    def __init__(self, when: float, callback: Callable[[], None], interval: Optional[float], seq: int):
        self.when      = when
        self.callback  = callback
        self.interval  = interval
        self.cancelled = False
        self._seq      = seq

    @property
    def repeating(self) -> bool:
        return self.interval is not None

    def cancel(self) -> None:
        if not self.cancelled:
            self.cancelled = True
            logger.debug("Timer cancelled (due at %.3f)", self.when)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "active"
        return f"TimerHandle(when={self.when:.3f}, interval={self.interval}, {state})"


class Scheduler:

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` once, `delay` seconds from now."""
        return self._push(self.clock() + max(0.0, delay), callback, None)

    def call_every(self, interval: float, callback: Callable[[], None]) -> TimerHandle:
        """Run `callback` every `interval` seconds until the handle is cancelled."""
        interval = max(MIN_INTERVAL, interval)
        return self._push(self.clock() + interval, callback, interval)

    def _push(self, when: float, callback: Callable[[], None], interval: Optional[float]) -> TimerHandle:
        seq = next(self._counter)
        handle = TimerHandle(when, callback, interval, seq)
        heapq.heappush(self._queue, (when, seq, handle))
        return handle

    # ------------------------------------------------------------------
    # Driving
    # ------------------------------------------------------------------
    def run_pending(self) -> int:
        """Fire every timer that is due.  Returns the number of callbacks run."""
        now = self.clock()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            _, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.callback()
            fired += 1
            if handle.repeating and not handle.cancelled:
                # An overdue interval fires once per pass, then resumes from now.
                handle.when = max(handle.when + handle.interval, now + handle.interval)
                heapq.heappush(self._queue, (handle.when, handle._seq, handle))
        return fired

    def run_until_idle(
        self,
        sleep: Callable[[float], None] = time.sleep,
        timeout: Optional[float] = None,
    ) -> int:
        """
        Keep firing timers until none are left.  `sleep` is called with the
        time to the next deadline; with a ManualClock pass its `advance`.
        Stops early once `timeout` seconds of clock time have passed.
        """
        started = self.clock()
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue:
                return fired
            if timeout is not None and self.clock() - started >= timeout:
                return fired
            wait = self._queue[0][0] - self.clock()
            if wait > 0:
                sleep(wait)
            fired += self.run_pending()

    def cancel_all(self) -> None:
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def next_deadline(self) -> Optional[float]:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)


class TimerSlot:
    """Owns at most one live TimerHandle."""

    def __init__(self):
        self._handle: Optional[TimerHandle] = None

    def set(self, handle: TimerHandle) -> None:
        self.cancel()
        self._handle = handle

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def active(self) -> bool:
        return self._handle is not None and not self._handle.cancelled
