from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from ..protocol.uhp.loop import run_uhp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hive-engine", description="Hive rules engine")
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: warning)",
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("uhp", help="Speak the Universal Hive Protocol on stdin/stdout (default)")

    serve = sub.add_parser("serve", help="Run the position-analysis HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address (default: 127.0.0.1)")
    serve.add_argument("--port", type=int, default=8000, help="Bind port (default: 8000)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    # Protocol output owns stdout, so logs go to stderr
    logging.basicConfig(level=args.log_level.upper(), stream=sys.stderr)

    if args.command == "serve":
        uvicorn.run(
            "hive_engine.protocol.http.app:create_app",
            factory=True,
            host=args.host,
            port=args.port,
            log_level=args.log_level,
        )
        return
    run_uhp()


if __name__ == "__main__":
    main()
