from __future__ import annotations

import heapq
import itertools
import logging
import time
from typing import Callable, List, Tuple

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class ManualScheduler:
    """One-shot timers on a virtual clock.

    Nothing fires until `advance()` moves the clock. Callbacks run in deadline
    order, ties broken by registration order, and callbacks scheduled from
    inside a callback fire in the same `advance()` if they fall in its window.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._seq = itertools.count()
        self._queue: List[Tuple[float, int, Callback]] = []

    @property
    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def schedule(self, delay: float, callback: Callback) -> None:
        if delay < 0:
            raise ValueError(f'delay must be non-negative, got {delay}')
        heapq.heappush(self._queue, (self._now + delay, next(self._seq), callback))

    def _fire_until(self, deadline: float) -> int:
        fired = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self._now = max(self._now, due)
            callback()
            fired += 1
        return fired

    def advance(self, dt: float) -> int:
        """Moves the clock forward by `dt` and returns how many callbacks fired."""
        if dt < 0:
            raise ValueError(f'cannot move the clock backwards by {dt}')
        target = self._now + dt
        fired = self._fire_until(target)
        self._now = target
        return fired

    def run_due(self) -> int:
        """Fires callbacks already due at the current time without moving the clock."""
        return self._fire_until(self._now)

    def run_all(self) -> int:
        """Fires every outstanding callback, jumping the clock to the last deadline."""
        fired = 0
        while self._queue:
            fired += self._fire_until(self._queue[0][0])
        return fired


class MonotonicScheduler(ManualScheduler):
    """Same queue, driven by the wall clock; the owner pumps it with `run_due()`."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        super().__init__(start=clock())

    def schedule(self, delay: float, callback: Callback) -> None:
        self._now = max(self._now, self._clock())
        super().schedule(delay, callback)

    def run_due(self) -> int:
        now = self._clock()
        fired = self._fire_until(now)
        self._now = max(self._now, now)
        if fired:
            logger.debug('fired %d timer callback(s)', fired)
        return fired
