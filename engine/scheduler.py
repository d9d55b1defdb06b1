"""
scheduler.py — Replay Timers
=============================
The player never sleeps or spins; it asks a scheduler to call it back
later and keeps the handle so it can cancel.

Two implementations:

  • ThreadingScheduler – real wall-clock timers (threading.Timer).
                         Callbacks fire on a timer thread.
  • ManualScheduler    – a virtual clock.  Nothing fires until the host
                         calls advance(ms); use it from an existing event
                         loop, or in tests.
"""

import threading
from typing import Callable, List, Optional, Tuple


class ThreadingScheduler:
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000.0, callback)
        timer.daemon = True
        timer.start()
        return timer

    def cancel(self, handle: Optional[threading.Timer]) -> None:
        if handle is not None:
            handle.cancel()


class ManualScheduler:
    """
    Attributes:
        now : virtual time in ms.
    """

    def __init__(self):
        self.now: int = 0
        self._seq: int = 0
        # (due, seq, callback); seq keeps same-time callbacks in FIFO order
        self._queue: List[Tuple[int, int, Callable[[], None]]] = []

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> int:
        self._seq += 1
        self._queue.append((self.now + delay_ms, self._seq, callback))
        self._queue.sort(key=lambda item: (item[0], item[1]))
        return self._seq

    def cancel(self, handle: Optional[int]) -> None:
        self._queue = [item for item in self._queue if item[1] != handle]

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing everything that falls due.  Returns #fired."""
        target = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, callback = self._queue.pop(0)
            self.now = due
            callback()
            fired += 1
        self.now = target
        return fired

    def run_until_idle(self, limit: int = 100000) -> int:
        """Fire callbacks until nothing is pending (or `limit` fired)."""
        fired = 0
        while self._queue and fired < limit:
            due, _, callback = self._queue.pop(0)
            self.now = due
            callback()
            fired += 1
        return fired
