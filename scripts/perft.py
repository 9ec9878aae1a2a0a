#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo root (which contains `hive_engine/`) to sys.path.
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from hive_engine.engine.game import GAME_TYPE, Game
from hive_engine.engine.perft import perft, perft_divide


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft on a given game string and depth")
    parser.add_argument(
        "--game", type=str, default=GAME_TYPE, help="Game string (default: empty board)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--divide", action="store_true", help="Print counts per root move")
    args = parser.parse_args()

    board = Game.from_game_string(args.game).board
    start = time.perf_counter()
    if args.divide:
        counts = perft_divide(board, args.depth)
        for name in sorted(counts):
            print(f"{name}: {counts[name]}")
        nodes = sum(counts.values())
    else:
        nodes = perft(board, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
