from __future__ import annotations

"""Draw Engine: shuffle animation plus one committed pick per draw.

A draw runs `steps` cosmetic shuffle frames, `interval_ms` apart, on a
cooperative scheduler. After the last frame one more independent sample
is taken; that one is appended to history. Every draw is a DrawHandle
the caller can cancel, and starting a new draw cancels the one in flight.
"""

import enum
import logging
import random
from typing import Any, Callable, Optional

from ..app.events import EventBus
from ..app.explain import trace as xtrace
from ..history.schema import QuoteRecord, make_record
from ..history.store import HistoryStore
from ..quotes.catalog import Catalog, Category
from ..util.randomness import make_rng
from .scheduler import Scheduler


logger = logging.getLogger(__name__)


class EmptyPoolError(RuntimeError):
    """A category has no quotes to draw from; the quote data is broken."""

    def __init__(self, category: Category) -> None:
        super().__init__(f"Quote pool for {Category(category).value} is empty")
        self.category = Category(category)


class DrawPhase(str, enum.Enum):
    DRAWING = "drawing"
    RESULT = "result"
    CANCELLED = "cancelled"


class DrawHandle:
    """One draw in progress (or settled)."""

    def __init__(self, category: Category, scheduler: Scheduler, on_cancel: Optional[Callable[["DrawHandle"], None]] = None) -> None:
        self.category = category
        self.phase = DrawPhase.DRAWING
        self.current_text = ""
        self.record: Optional[QuoteRecord] = None
        self.steps_done = 0
        self._scheduler = scheduler
        self._token: Any = None
        self._on_cancel = on_cancel

    @property
    def done(self) -> bool:
        return self.phase is not DrawPhase.DRAWING

    def cancel(self) -> bool:
        """Drop any pending frame. No-op once settled; returns True if it cancelled."""
        if self.done:
            return False
        if self._token is not None:
            self._scheduler.cancel(self._token)
            self._token = None
        self.phase = DrawPhase.CANCELLED
        if self._on_cancel is not None:
            self._on_cancel(self)
        return True

    def __repr__(self) -> str:
        return f"DrawHandle({self.category.value}, {self.phase.value}, steps_done={self.steps_done})"


class DrawEngine:
    def __init__(
        self,
        catalog: Catalog,
        store: HistoryStore,
        scheduler: Scheduler,
        *,
        steps: int = 20,
        interval_ms: int = 100,
        rng: Optional[random.Random] = None,
        bus: Optional[EventBus] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.scheduler = scheduler
        self.steps = int(steps)
        self.interval_ms = int(interval_ms)
        self.rng = rng or make_rng()
        self.bus = bus or EventBus()
        self.clock = clock
        self._active: Optional[DrawHandle] = None

    @property
    def active(self) -> Optional[DrawHandle]:
        if self._active is not None and self._active.done:
            self._active = None
        return self._active

    def cancel(self) -> bool:
        handle = self.active
        return handle.cancel() if handle is not None else False

    def draw(self, category: Category) -> DrawHandle:
        category = Category(category)
        pool = self.catalog.pool(category)
        if not pool:
            raise EmptyPoolError(category)

        self.cancel()
        handle = DrawHandle(category, self.scheduler, on_cancel=self._cancelled)
        self._active = handle
        xtrace("draw_started", {"category": category.value, "steps": self.steps, "interval_ms": self.interval_ms})
        self.bus.emit("draw.started", handle)

        def step() -> None:
            handle._token = None
            if handle.done:
                return
            handle.current_text = self.rng.choice(pool)
            handle.steps_done += 1
            self.bus.emit("draw.step", handle)
            if handle.steps_done < self.steps:
                handle._token = self.scheduler.call_later(self.interval_ms, step)
            else:
                self._commit(handle, pool)

        if self.steps <= 0:
            self._commit(handle, pool)
        else:
            step()
        return handle

    def _commit(self, handle: DrawHandle, pool: tuple) -> None:
        # Independent of the last frame; repeats are expected
        text = self.rng.choice(pool)
        record = make_record(text, self.clock)
        handle.current_text = text
        handle.record = record
        self.store.append(handle.category, record)
        handle.phase = DrawPhase.RESULT
        if self._active is handle:
            self._active = None
        xtrace("draw_committed", {"category": handle.category.value, "id": record.id, "text": text})
        self.bus.emit("draw.result", handle)

    def _cancelled(self, handle: DrawHandle) -> None:
        if self._active is handle:
            self._active = None
        logger.info("Draw for %s cancelled after %d steps", handle.category.value, handle.steps_done)
        self.bus.emit("draw.cancelled", handle)
