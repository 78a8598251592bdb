from __future__ import annotations

"""Cooperative, single-threaded schedulers for deferred callbacks.

Both schedulers hand out opaque tokens; a cancelled token never fires.
LoopScheduler runs on a virtual clock (the CLI sleeps between callbacks,
tests don't). TkScheduler defers to the Tk event loop.
"""

import heapq
import itertools
import time
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Any: ...

    def cancel(self, token: Any) -> None: ...


class LoopScheduler:
    """Heap of (due_ms, seq) entries; run() drains them in due order."""

    def __init__(self, sleep: Optional[Callable[[float], None]] = None) -> None:
        self._sleep = sleep
        self._heap: List[Tuple[int, int]] = []
        self._callbacks: Dict[int, Callable[[], None]] = {}
        self._seq = itertools.count()
        self.now_ms = 0

    @classmethod
    def realtime(cls) -> "LoopScheduler":
        return cls(sleep=time.sleep)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> int:
        token = next(self._seq)
        heapq.heappush(self._heap, (self.now_ms + max(0, int(delay_ms)), token))
        self._callbacks[token] = callback
        return token

    def cancel(self, token: Any) -> None:
        self._callbacks.pop(token, None)

    def pending(self) -> int:
        return len(self._callbacks)

    def _prune(self) -> None:
        while self._heap and self._heap[0][1] not in self._callbacks:
            heapq.heappop(self._heap)

    def run_once(self) -> bool:
        """Fire the next live callback. Returns False when nothing is left."""
        self._prune()
        if not self._heap:
            return False
        due, token = heapq.heappop(self._heap)
        cb = self._callbacks.pop(token)
        if due > self.now_ms:
            if self._sleep is not None:
                self._sleep((due - self.now_ms) / 1000.0)
            self.now_ms = due
        cb()
        return True

    def run(self, until_ms: Optional[int] = None) -> int:
        """Drain callbacks (optionally only those due by until_ms). Returns how many fired."""
        fired = 0
        while True:
            self._prune()
            if not self._heap:
                break
            if until_ms is not None and self._heap[0][0] > until_ms:
                break
            self.run_once()
            fired += 1
        if until_ms is not None and until_ms > self.now_ms:
            self.now_ms = until_ms
        return fired


class TkScheduler:
    """Adapter over widget.after / after_cancel."""

    def __init__(self, widget: Any) -> None:
        self._widget = widget

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> str:
        return self._widget.after(max(0, int(delay_ms)), callback)

    def cancel(self, token: Any) -> None:
        if token is not None:
            self._widget.after_cancel(token)
