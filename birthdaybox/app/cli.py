from __future__ import annotations

"""Terminal commands: draw a quote, list history, export history."""

import getpass
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..config.config import storage_path
from ..draw.engine import DrawEngine, DrawHandle
from ..draw.scheduler import LoopScheduler
from ..history.export import counts_by_category, export_ndjson, history_frame
from ..history.store import HistoryStore
from ..quotes.catalog import Category, load_catalog
from ..session.gate import LoginResult, gate_from_config
from ..util.randomness import make_rng
from .events import EventBus
from .modal import DRAWING_CAPTION, EMPTY_HISTORY, format_timestamp


def _open_store(cfg: Dict[str, Any]) -> HistoryStore:
    store = HistoryStore(storage_path(cfg), slot=cfg["storage"]["slot"])
    store.load()
    return store


def _login(cfg: Dict[str, Any], password: Optional[str], ask: Callable[[str], str]) -> bool:
    gate = gate_from_config(cfg)
    candidate = password if password is not None else ask("请输入开启生日祝福的密钥: ")
    if gate.attempt_login(candidate) is LoginResult.FAILURE:
        print(gate.state.error, file=sys.stderr)
        return False
    return True


def cmd_draw(
    cfg: Dict[str, Any],
    category: Category,
    *,
    password: Optional[str] = None,
    animate: bool = True,
    seed: Optional[int] = None,
    ask: Callable[[str], str] = getpass.getpass,
) -> int:
    if not _login(cfg, password, ask):
        return 1

    catalog = load_catalog(cfg["quotes"].get("path"))
    store = _open_store(cfg)
    scheduler = LoopScheduler.realtime() if animate else LoopScheduler()
    bus = EventBus()
    if animate:
        print(f"{catalog.meta(category).icon} {DRAWING_CAPTION}")
        bus.subscribe("draw.step", lambda h: print(f"  ... {h.current_text}"))

    engine = DrawEngine(
        catalog,
        store,
        scheduler,
        steps=cfg["draw"]["steps"],
        interval_ms=cfg["draw"]["interval_ms"],
        rng=make_rng(seed),
        bus=bus,
    )
    handle: DrawHandle = engine.draw(category)
    scheduler.run()

    assert handle.record is not None
    print()
    print("MESSAGE FOR YOU")
    print(f"“{handle.record.text}”")
    return 0


def cmd_history(
    cfg: Dict[str, Any],
    category: Category,
    *,
    password: Optional[str] = None,
    ask: Callable[[str], str] = getpass.getpass,
) -> int:
    if not _login(cfg, password, ask):
        return 1

    catalog = load_catalog(cfg["quotes"].get("path"))
    store = _open_store(cfg)
    records = list(reversed(store.all(category)))
    meta = catalog.meta(category)
    print(f"{meta.icon} {meta.title}  (共 {store.counts()[category]} 条)")
    if not records:
        print(f"  {EMPTY_HISTORY}")
        return 0
    fmt = cfg["ui"]["date_format"]
    for rec in records:
        print(f"  {format_timestamp(rec.timestamp, fmt)}  {rec.text}")
    return 0


def cmd_export(cfg: Dict[str, Any], out_path: str) -> int:
    store = _open_store(cfg)
    df = history_frame(store.snapshot())
    export_ndjson(df, Path(out_path))
    print(f"Exported {len(df)} records to {out_path}")
    for cat, n in counts_by_category(df).items():
        print(f"  {cat}: {n}")
    return 0
