from __future__ import annotations

from typing import Dict

from .board import Board
from .notation import format_move


def perft(board: Board, depth: int) -> int:
    """Compute perft node count for `board` at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are visited with make/unmake, so ``board`` is left unchanged.
    Play does not stop at a surrounded bee; every path of ``depth`` plies is
    counted.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = board.generate_legal_moves()
    if depth == 1:
        return len(moves)
    nodes = 0
    for m in moves:
        board.make_move(m)
        nodes += perft(board, depth - 1)
        board.unmake_move(m)
    return nodes


def perft_divide(board: Board, depth: int) -> Dict[str, int]:
    """Per-root-move breakdown of :func:`perft`, keyed by move notation."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    out: Dict[str, int] = {}
    for m in board.generate_legal_moves():
        name = format_move(board, m)
        board.make_move(m)
        out[name] = perft(board, depth - 1)
        board.unmake_move(m)
    return out
