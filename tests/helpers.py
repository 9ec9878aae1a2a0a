from __future__ import annotations

from typing import Set, Tuple

from hive_engine.engine.board import Board
from hive_engine.engine.bugs import NUM_PIECES
from hive_engine.engine.hexgrid import NEIGHBOURS, coords


def snapshot(board: Board):
    """Everything make/unmake must restore, as a comparable value."""
    return (
        tuple(tuple(s) for s in board.stacks),
        tuple(board.piece_cell),
        tuple(tuple(r.counts()) for r in board.registries),
        frozenset(board.available[0]),
        frozenset(board.available[1]),
        frozenset(board.pinned),
        board.zobrist_hash,
        board.last_moved,
        board.to_play,
        board.ply,
        board.outcome(),
    )


def assert_consistent(board: Board) -> None:
    """Check the stack model agrees with itself and the hive is connected."""
    seen = set()
    for cell, stack in enumerate(board.stacks):
        for pid in stack:
            assert pid not in seen, f"piece {pid} on two cells"
            seen.add(pid)
            assert board.piece_cell[pid] == cell
    for pid in range(NUM_PIECES):
        if board.piece_cell[pid] < 0:
            assert pid not in seen
        else:
            assert pid in seen
            above = board.piece_above(pid)
            if above is not None:
                assert board.piece_below(above) == pid

    occupied = board.occupied_cells()
    if occupied:
        reached = {occupied[0]}
        frontier = [occupied[0]]
        while frontier:
            cell = frontier.pop()
            for n in NEIGHBOURS[cell]:
                if board.stacks[n] and n not in reached:
                    reached.add(n)
                    frontier.append(n)
        assert reached == set(occupied), "hive is disconnected"


def walk(cell: int, *directions: int) -> int:
    """Cell reached from ``cell`` by stepping once in each direction."""
    for d in directions:
        cell = NEIGHBOURS[cell][d]
    return cell


def at(cell: int, *directions: int) -> Tuple[int, int]:
    """Like :func:`walk`, as the ``(col, row)`` pair ``Board.setup`` takes."""
    return coords(walk(cell, *directions))


def destinations(board: Board, from_cell: int) -> Set[int]:
    """Cells the top piece of ``from_cell`` can be relocated to this ply."""
    return {
        m.to_cell
        for m in board.generate_legal_moves()
        if m.from_cell == from_cell
    }