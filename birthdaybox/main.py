from __future__ import annotations

"""CLI entry point for birthdaybox."""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .app import explain
from .config.config import load_config, validate_config
from .quotes.catalog import Category, parse_category


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="birthdaybox", description="Password-gated birthday greetings")
    p.add_argument("--config", type=str, default=None, help="Path to YAML config")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--explain", action="store_true", help="Log one-line traces at milestones (stderr)")
    p.add_argument("--verbose", action="store_true", help="Log at INFO level")

    sub = p.add_subparsers(dest="command")
    sub.add_parser("gui", help="Open the greeting window (default)")

    choices = [c.value for c in Category]
    d = sub.add_parser("draw", help="Draw a quote in the terminal")
    d.add_argument("category", type=str.upper, choices=choices)
    d.add_argument("--password", type=str, default=None, help="Passphrase (prompted when omitted)")
    d.add_argument("--no-animation", action="store_true", help="Skip the shuffle frames")
    d.add_argument("--seed", type=int, default=None, help="Seed for a reproducible draw")

    h = sub.add_parser("history", help="List past draws, newest first")
    h.add_argument("category", type=str.upper, choices=choices)
    h.add_argument("--password", type=str, default=None, help="Passphrase (prompted when omitted)")

    e = sub.add_parser("export", help="Export all history as NDJSON")
    e.add_argument("out", type=str, help="Output .ndjson path")
    return p.parse_args(argv)


def cli(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    if args.version:
        print(f"birthdaybox {__version__}")
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    explain.enable(args.explain)

    cfg = validate_config(load_config(args.config))
    command = args.command or "gui"

    if command == "gui":
        from .app.gui import run_gui

        run_gui(cfg)
        return 0

    # Imported lazily so the terminal commands never pull in tkinter
    from .app import cli as commands

    if command == "draw":
        return commands.cmd_draw(
            cfg,
            parse_category(args.category),
            password=args.password,
            animate=not args.no_animation,
            seed=args.seed,
        )
    if command == "history":
        return commands.cmd_history(cfg, parse_category(args.category), password=args.password)
    if command == "export":
        return commands.cmd_export(cfg, args.out)
    return 2


def main() -> None:
    sys.exit(cli())


if __name__ == "__main__":
    main()
