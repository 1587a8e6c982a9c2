"""Entry point for running ImpossibleXO via ``python -m impossiblexo``."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

import uvicorn

from .console import CommandLineConsole
from .game import Game


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="impossiblexo", description="Tic-tac-toe against a minimax opponent"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    default_depth = int(os.environ.get("IMPOSSIBLEXO_DEPTH", "7"))
    parser.set_defaults(cmd="play", depth=default_depth)
    sub = parser.add_subparsers(dest="cmd")

    play = sub.add_parser("play", help="Play in the terminal (default)")
    play.add_argument(
        "--depth",
        type=int,
        default=default_depth,
        help="Search depth limit for the impossible computer",
    )

    serve = sub.add_parser("serve", help="Start the web server")
    serve.add_argument(
        "--host", default=os.environ.get("IMPOSSIBLEXO_HOST", "0.0.0.0")
    )
    serve.add_argument(
        "--port", type=int, default=int(os.environ.get("IMPOSSIBLEXO_PORT", "8000"))
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Play a console game, or start the FastAPI-powered web server."""

    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if ns.cmd == "serve":
        logging.getLogger("impossiblexo").setLevel(
            logging.DEBUG if ns.verbose else logging.INFO
        )
        uvicorn.run("impossiblexo.ui:app", host=ns.host, port=ns.port, reload=False)
        return

    Game(CommandLineConsole(), depth_limit=ns.depth).run()


if __name__ == "__main__":
    main()
