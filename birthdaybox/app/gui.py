from __future__ import annotations

"""Tkinter GUI: passphrase gate, six category buttons, and the draw modal.

The main screen mirrors the greeting card layout: four emotion tiles in a
2x2 grid, a birthday cake button in the middle and a "book of answers"
bar along the bottom. Each opens a modal window driven by ModalController.
"""

import logging
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Any, Dict, Optional

from ..config.config import storage_path
from ..draw.engine import DrawEngine, EmptyPoolError
from ..draw.scheduler import TkScheduler
from ..history.store import HistoryStore
from ..quotes.catalog import EMOTIONS, Catalog, Category, load_catalog
from ..session.gate import LoginResult, SessionGate, gate_from_config
from ..util.randomness import make_rng
from .events import EventBus
from .modal import DRAWING_CAPTION, EMPTY_HISTORY, ModalController, format_timestamp


logger = logging.getLogger(__name__)

BG = "#fafaf9"
INK = "#292524"
MUTED = "#a8a29e"


class App(tk.Tk):
    def __init__(self, cfg: Dict[str, Any], catalog: Catalog, store: HistoryStore, gate: SessionGate) -> None:
        super().__init__()
        ui = cfg["ui"]
        self.title(ui["title"])
        self.geometry(ui["geometry"])
        self.configure(background=BG)
        self._date_format = ui["date_format"]

        self.catalog = catalog
        self.store = store
        self.gate = gate
        self.bus = EventBus()
        self.engine = DrawEngine(
            catalog,
            store,
            TkScheduler(self),
            steps=cfg["draw"]["steps"],
            interval_ms=cfg["draw"]["interval_ms"],
            rng=make_rng(),
            bus=self.bus,
        )
        self.modal = ModalController(self.engine, on_change=lambda _m: self._render_modal())

        self.password_var = tk.StringVar(value="")
        self.error_var = tk.StringVar(value="")
        self.current_var = tk.StringVar(value="...")

        self._modal_win: Optional[tk.Toplevel] = None
        self._rendered_view: Optional[str] = None

        self._gate_frame = self._build_gate()
        self._main_frame: Optional[tk.Frame] = None
        self._gate_frame.pack(fill=tk.BOTH, expand=True)
        self.protocol("WM_DELETE_WINDOW", self._on_quit)

    # ------------------------------------------------------------------
    # Gate screen
    # ------------------------------------------------------------------
    def _build_gate(self) -> tk.Frame:
        outer = tk.Frame(self, background=BG)
        card = tk.Frame(outer, background="white", padx=32, pady=32)
        card.place(relx=0.5, rely=0.5, anchor=tk.CENTER)

        tk.Label(card, text="🎂", font=("TkDefaultFont", 48), background="white").pack()
        tk.Label(card, text="Welcome", font=("Georgia", 20, "bold"), foreground=INK, background="white").pack(pady=(8, 0))
        tk.Label(card, text="请输入开启生日祝福的密钥", foreground=MUTED, background="white").pack(pady=(4, 16))

        entry = tk.Entry(card, textvariable=self.password_var, show="•", justify=tk.CENTER, font=("TkDefaultFont", 16), width=16)
        entry.pack(fill=tk.X)
        entry.bind("<Return>", lambda _e: self._on_login())
        entry.focus_set()

        tk.Label(card, textvariable=self.error_var, foreground="#f43f5e", background="white").pack(pady=(6, 0))
        ttk.Button(card, text="进入", command=self._on_login).pack(fill=tk.X, pady=(10, 0))
        return outer

    def _on_login(self) -> None:
        self.gate.state.password_input = self.password_var.get()
        result = self.gate.attempt_login(self.gate.state.password_input)
        self.error_var.set(self.gate.state.error)
        if result is LoginResult.SUCCESS:
            self._gate_frame.pack_forget()
            self._main_frame = self._build_main()
            self._main_frame.pack(fill=tk.BOTH, expand=True)
        else:
            self.password_var.set(self.gate.state.password_input)

    # ------------------------------------------------------------------
    # Main screen
    # ------------------------------------------------------------------
    def _build_main(self) -> tk.Frame:
        frm = tk.Frame(self, background=BG)

        grid = tk.Frame(frm, background=BG)
        grid.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=8)
        for i in range(2):
            grid.columnconfigure(i, weight=1, uniform="tile")
            grid.rowconfigure(i, weight=1, uniform="tile")
        for idx, cat in enumerate(EMOTIONS):
            tile = self._emotion_tile(grid, cat)
            tile.grid(row=idx // 2, column=idx % 2, sticky="nsew", padx=4, pady=4)

        cake = self.catalog.meta(Category.BIRTHDAY)
        tk.Button(
            frm,
            text=f"{cake.icon}\n{cake.title}",
            font=("TkDefaultFont", 18, "bold"),
            background="white",
            foreground=INK,
            relief=tk.RAISED,
            command=lambda: self.open_category(Category.BIRTHDAY),
        ).place(relx=0.5, rely=0.44, anchor=tk.CENTER, width=140, height=140)

        book = self.catalog.meta(Category.ANSWERS)
        bar = tk.Button(
            frm,
            text=f"{book.icon}  {book.title}    {book.hint}",
            anchor=tk.W,
            background=book.color,
            foreground="#e7e5e4",
            activebackground=book.accent,
            font=("TkDefaultFont", 13, "bold"),
            command=lambda: self.open_category(Category.ANSWERS),
        )
        bar.pack(side=tk.BOTTOM, fill=tk.X, padx=12, pady=(0, 12), ipady=10)
        return frm

    def _emotion_tile(self, parent: tk.Widget, cat: Category) -> tk.Frame:
        meta = self.catalog.meta(cat)
        tile = tk.Frame(parent, background=meta.color, cursor="hand2")
        widgets = [
            tk.Label(tile, text=meta.icon, font=("TkDefaultFont", 40), background=meta.color),
            tk.Label(tile, text=meta.label, font=("Georgia", 18, "bold"), foreground=INK, background=meta.color),
            tk.Label(tile, text=meta.hint, foreground=INK, background=meta.color),
        ]
        for w in widgets:
            w.pack(pady=2)
        for w in [tile, *widgets]:
            w.bind("<Button-1>", lambda _e, c=cat: self.open_category(c))
        return tile

    # ------------------------------------------------------------------
    # Modal
    # ------------------------------------------------------------------
    def open_category(self, cat: Category) -> None:
        if self._modal_win is None or not self._modal_win.winfo_exists():
            self._modal_win = tk.Toplevel(self)
            self._modal_win.geometry("520x480")
            self._modal_win.configure(background="white")
            self._modal_win.transient(self)
            self._modal_win.protocol("WM_DELETE_WINDOW", self.close_modal)
        self._rendered_view = None
        self.modal.open(cat)

    def close_modal(self) -> None:
        self.modal.close()
        if self._modal_win is not None and self._modal_win.winfo_exists():
            self._modal_win.destroy()
        self._modal_win = None
        self._rendered_view = None

    def _render_modal(self) -> None:
        win = self._modal_win
        if win is None or not self.modal.is_open or not win.winfo_exists():
            return
        view = self.modal.view
        self.current_var.set(self.modal.current_text or "...")
        if view == self._rendered_view == "drawing":
            return
        self._rendered_view = view

        for child in win.winfo_children():
            child.destroy()
        meta = self.modal.meta
        dark = self.modal.category is Category.ANSWERS
        head_bg, head_fg = ("#292524", "#f5f5f4") if dark else ("white", INK)
        win.title(meta.title)

        header = tk.Frame(win, background=head_bg, pady=12)
        header.pack(side=tk.TOP, fill=tk.X)
        tk.Button(header, text="✕", relief=tk.FLAT, background=head_bg, foreground=head_fg, command=self.close_modal).pack(side=tk.RIGHT, padx=8)
        tk.Label(header, text=meta.icon, font=("TkDefaultFont", 30), background=head_bg).pack()
        tk.Label(header, text=meta.title, font=("Georgia", 16, "bold"), background=head_bg, foreground=head_fg).pack()

        body = tk.Frame(win, background="white", padx=20, pady=16)
        body.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        getattr(self, f"_render_{view}")(body, meta)

    def _render_menu(self, body: tk.Frame, meta) -> None:
        tk.Button(body, text="✨ 抽取新的语录", font=("TkDefaultFont", 14, "bold"), background=meta.accent, foreground="white", command=self._on_draw).pack(fill=tk.X, ipady=14, pady=6)
        tk.Button(body, text="📜 查看过去抽取", font=("TkDefaultFont", 14, "bold"), background="#f5f5f4", foreground="#57534e", command=self.modal.show_history).pack(fill=tk.X, ipady=14, pady=6)

    def _render_history(self, body: tk.Frame, meta) -> None:
        items = self.modal.history_items()
        top = tk.Frame(body, background="white")
        top.pack(side=tk.TOP, fill=tk.X)
        tk.Button(top, text="← 返回", relief=tk.FLAT, background="white", foreground=MUTED, command=self.modal.show_menu).pack(side=tk.LEFT)
        tk.Label(top, text=f"共 {self.modal.history_count()} 条", background="white", foreground=MUTED).pack(side=tk.RIGHT)

        if not items:
            tk.Label(body, text=EMPTY_HISTORY, background="white", foreground=MUTED).pack(expand=True, pady=(40, 4))
            tk.Button(body, text="去抽取一条", relief=tk.FLAT, background="white", foreground="#3b82f6", command=self._on_draw).pack()
            return

        box = tk.Text(body, wrap=tk.WORD, relief=tk.FLAT, background="#fafaf9", height=14)
        box.pack(side=tk.TOP, fill=tk.BOTH, expand=True, pady=(8, 0))
        for rec in items:
            box.insert(tk.END, f"{rec.text}\n")
            box.insert(tk.END, f"{format_timestamp(rec.timestamp, self._date_format)}\n\n", "stamp")
        box.tag_configure("stamp", foreground=MUTED, justify=tk.RIGHT)
        box.configure(state=tk.DISABLED)

    def _render_drawing(self, body: tk.Frame, meta) -> None:
        tk.Label(body, text=meta.icon, font=("TkDefaultFont", 44), background="white").pack(pady=(20, 8))
        tk.Label(body, text=DRAWING_CAPTION, font=("Georgia", 16), background="white", foreground=MUTED).pack()
        tk.Label(body, textvariable=self.current_var, wraplength=420, background="white", foreground=MUTED).pack(pady=(24, 0))

    def _render_result(self, body: tk.Frame, meta) -> None:
        tk.Label(body, text="MESSAGE FOR YOU", background="#f5f5f4", foreground="#78716c", padx=8).pack(pady=(12, 12))
        tk.Label(body, text=f"“{self.modal.current_text}”", wraplength=440, font=("Georgia", 18, "bold"), background="white", foreground=INK).pack(expand=True)
        row = tk.Frame(body, background="white")
        row.pack(side=tk.BOTTOM, pady=8)
        ttk.Button(row, text="返回", command=self.modal.show_menu).pack(side=tk.LEFT, padx=8)
        tk.Button(row, text="再抽一张", background=meta.accent, foreground="white", command=self._on_draw).pack(side=tk.LEFT, padx=8)

    def _on_draw(self) -> None:
        try:
            self.modal.draw_new()
        except EmptyPoolError as exc:
            logger.error("%s", exc)
            messagebox.showerror("Quote data error", str(exc))

    def _on_quit(self) -> None:
        # Pending after() callbacks must not fire into destroyed widgets
        self.engine.cancel()
        self.destroy()


def run_gui(cfg: Dict[str, Any]) -> None:
    catalog = load_catalog(cfg["quotes"].get("path"))
    store = HistoryStore(storage_path(cfg), slot=cfg["storage"]["slot"])
    store.load()
    app = App(cfg, catalog, store, gate_from_config(cfg))
    app.mainloop()
