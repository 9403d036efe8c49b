"""
Tick scheduling seam shared by the playback loop and the crash animation loop.
Engines only ever ask for "call me back in N seconds", "cancel that" and
"what time is it", so they run the same under NiceGUI timers or a manual clock.
"""

import heapq
import itertools
from typing import Callable, List, Optional, Protocol, Tuple


class TickHandle(Protocol):
    def cancel(self) -> None: ...


class TickScheduler(Protocol):
    def now(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[[], None]) -> TickHandle: ...


class ScheduledCall:
    def __init__(self, callback: Callable[[], None]):
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class TickQueue:
    """
    Callbacks ordered by due time. The owner supplies the clock and decides
    when to drain; cancelled entries are skipped lazily.
    """

    def __init__(self):
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._seq = itertools.count()

    def push(self, due: float, callback: Callable[[], None]) -> ScheduledCall:
        call = ScheduledCall(callback)
        heapq.heappush(self._queue, (due, next(self._seq), call))
        return call

    def pending(self) -> int:
        return sum(1 for _, _, c in self._queue if not c.cancelled)

    def pop_due(self, deadline: float) -> Optional[Tuple[float, ScheduledCall]]:
        """Next live call due at or before deadline, or None."""
        while self._queue and self._queue[0][0] <= deadline:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            call.cancelled = True
            return due, call
        return None


class ManualScheduler:
    """
    Virtual clock driven by advance(). Used by tests and the visual examples.
    """

    def __init__(self, start: float = 0.0):
        self._now = start
        self._calls = TickQueue()

    def now(self) -> float:
        return self._now

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        return self._calls.push(self._now + max(0.0, delay), callback)

    def pending(self) -> int:
        return self._calls.pending()

    def advance(self, seconds: float) -> int:
        """Moves the clock forward, firing due callbacks in order. Returns how many fired."""
        deadline = self._now + seconds
        fired = 0
        while True:
            item = self._calls.pop_due(deadline)
            if item is None:
                break
            self._now, call = item
            call.callback()
            fired += 1
        self._now = deadline
        return fired

    def run_until_idle(self, step: float, max_steps: int = 100000) -> int:
        """Advances in fixed steps until nothing is pending."""
        fired = 0
        for _ in range(max_steps):
            if not self.pending():
                break
            fired += self.advance(step)
        return fired
