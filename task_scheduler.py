"""
task_scheduler.py
-----------------
Single-threaded timer queue used to simulate the assistant "typing".

Nothing runs in the background.  Callbacks are only executed when the owner
calls ``run_due()``, which fires every task whose due time has passed on the
injected clock.  Tests pass a fake clock and advance it by hand.
"""

import heapq
import itertools
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class ScheduledTask:
    """Handle returned by ``TaskScheduler.call_later``."""

    __slots__ = ("due", "seq", "callback", "args", "cancelled")

    def __init__(self, due: float, seq: int, callback: Callable, args: tuple):
        self.due       = due
        self.seq       = seq
        self.callback  = callback
        self.args      = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "ScheduledTask") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__name__", repr(self.callback))
        return f"<ScheduledTask {name} due={self.due:.3f}{' cancelled' if self.cancelled else ''}>"


class TaskScheduler:
    """
    Ordered delayed-callback queue driven by *clock*.

    Tasks run in (due time, scheduling order).  While a callback runs,
    ``now()`` reports that task's due time, so follow-up tasks are anchored
    to when the timer fired rather than to when ``run_due()`` was called.
    Follow-ups that are already due run in the same ``run_due()`` call.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock   = clock
        self._queue: list = []
        self._counter = itertools.count()
        self._running_due: Optional[float] = None

    def now(self) -> float:
        """Scheduler time: the running task's due time, else the clock."""
        if self._running_due is not None:
            return self._running_due
        return self._clock()

    def lag(self) -> float:
        """Seconds the clock is ahead of ``now()`` (0 outside callbacks)."""
        return max(0.0, self._clock() - self.now())

    def call_later(self, delay: float, callback: Callable, *args) -> ScheduledTask:
        """Schedule ``callback(*args)`` to run *delay* seconds from now."""
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        task = ScheduledTask(self.now() + delay, next(self._counter), callback, args)
        heapq.heappush(self._queue, task)
        return task

    def run_due(self) -> int:
        """Run every task that is due. Returns how many callbacks ran."""
        ran = 0
        while self._queue:
            head = self._queue[0]
            if head.cancelled:
                heapq.heappop(self._queue)
                continue
            if head.due > self._clock():
                break
            heapq.heappop(self._queue)
            self._running_due = head.due
            try:
                head.callback(*head.args)
            finally:
                self._running_due = None
            ran += 1
        if ran:
            logger.debug("run_due: ran %d task(s), %d pending", ran, self.pending)
        return ran

    @property
    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def next_due(self) -> Optional[float]:
        live = [t.due for t in self._queue if not t.cancelled]
        return min(live) if live else None
