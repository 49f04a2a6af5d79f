"""Entry point: python -m alien_clicker report"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from alien_clicker.data.balance import BALANCE, load_balance
from alien_clicker.engine.game_state import GameState
from alien_clicker.engine.save import SAVE_FILE, load_game
from alien_clicker.errors import AlienClickerError
from alien_clicker.report import render_report


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="alien_clicker", description="Alien Clicker tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    report = sub.add_parser("report", help="Print cost curves, multipliers and prestige points")
    report.add_argument("--save", type=Path, default=SAVE_FILE, help="Save file to inspect")
    report.add_argument("--level", type=int, help="Use a fresh state at this level instead of a save")
    report.add_argument("--prestige-level", type=int, default=0)
    report.add_argument("--config", type=Path, help="JSON file of balance overrides")
    report.add_argument("--levels", type=int, default=10, help="Rows in the cost table")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    console = Console()

    try:
        balance = load_balance(args.config) if args.config else BALANCE
    except AlienClickerError as exc:
        console.print(f"[red]{exc}[/red]")
        return 2

    if args.level is not None:
        state = GameState(level=max(1, args.level), prestige_level=args.prestige_level)
    else:
        state = load_game(args.save) or GameState()

    render_report(console, state, balance, args.levels)
    return 0


if __name__ == "__main__":
    sys.exit(main())
