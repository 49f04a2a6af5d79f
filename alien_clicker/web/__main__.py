"""Entry point for the web API: python -m alien_clicker.web"""

import argparse
import logging
from pathlib import Path

from alien_clicker.data.balance import BALANCE, load_balance
from alien_clicker.engine.save import SAVE_FILE
from alien_clicker.web.server import configure, run_server


def main() -> None:
    parser = argparse.ArgumentParser(description="Alien Clicker — JSON API")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=5000, help="Port (default: 5000)")
    parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    parser.add_argument("--config", type=Path, help="JSON file of balance overrides")
    parser.add_argument("--save", type=Path, default=SAVE_FILE, help="Save file path")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    balance = load_balance(args.config) if args.config else BALANCE
    configure(balance, args.save)

    print("\n  👾 Alien Clicker (API)")
    print(f"  ➜ http://{args.host}:{args.port}/api/state\n")

    run_server(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
