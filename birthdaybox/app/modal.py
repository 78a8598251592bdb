from __future__ import annotations

"""Modal state machine behind the category window.

Kept free of Tk so the view transitions (and the rule that a closed or
re-targeted modal never keeps a draw running) can be tested headless.
"""

from datetime import datetime
from typing import Callable, List, Optional

from ..draw.engine import DrawEngine, DrawHandle, EmptyPoolError
from ..history.schema import QuoteRecord
from ..quotes.catalog import Category, CategoryMeta


VIEWS = ("menu", "history", "drawing", "result")

DRAWING_CAPTION = "正在连接宇宙信号..."
EMPTY_HISTORY = "还没有记录哦"


def format_timestamp(ts_ms: int, fmt: str = "%m月%d日 %H:%M") -> str:
    return datetime.fromtimestamp(ts_ms / 1000.0).strftime(fmt)


class ModalController:
    def __init__(self, engine: DrawEngine, *, on_change: Optional[Callable[["ModalController"], None]] = None) -> None:
        self.engine = engine
        self.category: Optional[Category] = None
        self.view = "menu"
        self.current_text = ""
        self._handle: Optional[DrawHandle] = None
        self._on_change = on_change
        engine.bus.subscribe("draw.step", self._on_step)
        engine.bus.subscribe("draw.result", self._on_result)

    @property
    def is_open(self) -> bool:
        return self.category is not None

    @property
    def meta(self) -> CategoryMeta:
        assert self.category is not None
        return self.engine.catalog.meta(self.category)

    def _changed(self) -> None:
        if self._on_change is not None:
            self._on_change(self)

    def _cancel_draw(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def open(self, category: Category) -> None:
        self._cancel_draw()
        self.category = Category(category)
        self.view = "menu"
        self.current_text = ""
        self._changed()

    def close(self) -> None:
        self._cancel_draw()
        self.category = None
        self.view = "menu"
        self.current_text = ""
        self._changed()

    def show_menu(self) -> None:
        self._cancel_draw()
        self.view = "menu"
        self._changed()

    def show_history(self) -> None:
        self._cancel_draw()
        self.view = "history"
        self._changed()

    def draw_new(self) -> DrawHandle:
        """Start a draw; EmptyPoolError propagates to the caller."""
        assert self.category is not None, "open a category first"
        self._cancel_draw()
        self.view = "drawing"
        self.current_text = ""
        self._changed()
        try:
            handle = self.engine.draw(self.category)
        except EmptyPoolError:
            self.view = "menu"
            self._changed()
            raise
        if handle.done:
            # Zero-step draws settle before we get the handle back
            self.current_text = handle.current_text
            self.view = "result"
            self._changed()
        else:
            self._handle = handle
        return handle

    def history_items(self) -> List[QuoteRecord]:
        """Newest first."""
        if self.category is None:
            return []
        return list(reversed(self.engine.store.all(self.category)))

    def history_count(self) -> int:
        if self.category is None:
            return 0
        return self.engine.store.counts()[self.category]

    def _on_step(self, handle: DrawHandle) -> None:
        if self._handle is not None and handle is not self._handle:
            return
        self.current_text = handle.current_text
        self._changed()

    def _on_result(self, handle: DrawHandle) -> None:
        if handle is not self._handle:
            return
        self.current_text = handle.current_text
        self.view = "result"
        self._handle = None
        self._changed()
