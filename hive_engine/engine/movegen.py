from __future__ import annotations

from typing import Callable, List, Set, Tuple, TYPE_CHECKING

from .bugs import MOSQUITO, PILLBUG, piece_type
from .hexgrid import NEIGHBOURS
from .move import Move
from .sliding import can_step, slides

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


Generator = Callable[["Board", int, List[Move]], None]


def bee_moves(board: "Board", cell: int, out: List[Move]) -> None:
    for dst in slides(board, cell, cell):
        out.append(Move.relocate(cell, dst))


def beetle_moves(board: "Board", cell: int, out: List[Move]) -> None:
    ring = NEIGHBOURS[cell]
    for d in range(6):
        if can_step(board, cell, d, cell):
            out.append(Move.relocate(cell, ring[d]))


def ant_moves(board: "Board", cell: int, out: List[Move]) -> None:
    """Any cell reachable by repeated slides around the hive."""
    visited = {cell}
    frontier = [cell]
    while frontier:
        current = frontier.pop()
        for dst in slides(board, current, cell):
            if dst in visited:
                continue
            visited.add(dst)
            frontier.append(dst)
            out.append(Move.relocate(cell, dst))


def grasshopper_moves(board: "Board", cell: int, out: List[Move]) -> None:
    stacks = board.stacks
    for d in range(6):
        dst = NEIGHBOURS[cell][d]
        if not stacks[dst]:
            continue
        while stacks[dst]:
            dst = NEIGHBOURS[dst][d]
        out.append(Move.relocate(cell, dst))


def spider_moves(board: "Board", cell: int, out: List[Move]) -> None:
    """Exactly three slides without revisiting a cell."""
    found: Set[int] = set()
    # Paths are short (3 steps), so a plain DFS over (cell, path) is enough
    frontier: List[Tuple[int, Tuple[int, ...]]] = [(cell, (cell,))]
    while frontier:
        current, path = frontier.pop()
        if len(path) == 4:
            if current not in found:
                found.add(current)
                out.append(Move.relocate(cell, current))
            continue
        for dst in slides(board, current, cell):
            if dst not in path:
                frontier.append((dst, path + (dst,)))


def ladybug_moves(board: "Board", cell: int, out: List[Move]) -> None:
    """Two steps over the top of the hive, then one step down."""
    stacks = board.stacks
    found: Set[int] = set()
    for d1 in range(6):
        first = NEIGHBOURS[cell][d1]
        if not stacks[first] or not can_step(board, cell, d1, cell):
            continue
        for d2 in range(6):
            second = NEIGHBOURS[first][d2]
            if second == cell or not stacks[second]:
                continue
            if not can_step(board, first, d2, cell):
                continue
            for d3 in range(6):
                dst = NEIGHBOURS[second][d3]
                if dst == cell or stacks[dst] or dst in found:
                    continue
                if can_step(board, second, d3, cell):
                    found.add(dst)
                    out.append(Move.relocate(cell, dst))


def pillbug_moves(board: "Board", cell: int, out: List[Move]) -> None:
    if board.is_movable(board.stacks[cell][-1]):
        bee_moves(board, cell, out)
    pillbug_throws(board, cell, out)


def pillbug_throws(board: "Board", cell: int, out: List[Move]) -> None:
    """Lift an adjacent piece over the piece at ``cell`` onto an empty neighbour.

    The acting piece must sit on the ground and must not be the piece the
    opponent just moved. The thrown piece must be alone in its cell, not
    pinned and not the last-moved piece. It passes over the thrower, so
    both legs are gated like a beetle step.
    """
    stacks = board.stacks
    if len(stacks[cell]) != 1 or stacks[cell][0] == board.last_moved:
        return
    ring = NEIGHBOURS[cell]
    empties = [d for d in range(6) if not stacks[ring[d]]]
    if not empties:
        return
    for d in range(6):
        src = ring[d]
        if len(stacks[src]) != 1:
            continue
        if stacks[src][0] == board.last_moved or src in board.pinned:
            continue
        # Leg one: from src up onto the thrower
        if not can_step(board, src, NEIGHBOURS[src].index(cell), src):
            continue
        for e in empties:
            if can_step(board, cell, e, src):
                out.append(Move.relocate(src, ring[e]))


def mosquito_moves(board: "Board", cell: int, out: List[Move]) -> None:
    """Borrow the movement of every distinct adjacent bug type.

    A mosquito on top of the hive moves only as a beetle. Another mosquito
    lends nothing. Next to a pillbug the mosquito may also throw, even when
    it may not move itself.
    """
    stacks = board.stacks
    if len(stacks[cell]) > 1:
        if board.is_movable(stacks[cell][-1]):
            beetle_moves(board, cell, out)
        return
    types = set()
    for n in NEIGHBOURS[cell]:
        if stacks[n]:
            types.add(piece_type(stacks[n][-1]))
    types.discard(MOSQUITO)
    movable = board.is_movable(stacks[cell][-1])
    for t in sorted(types):
        if t == PILLBUG:
            pillbug_throws(board, cell, out)
        if movable:
            GENERATORS[t](board, cell, out)


GENERATORS: Tuple[Generator, ...] = (
    bee_moves,
    beetle_moves,
    ant_moves,
    grasshopper_moves,
    spider_moves,
    ladybug_moves,
    mosquito_moves,
    bee_moves,  # pillbug's own step; its throw is added by generate_piece_moves
)


def generate_piece_moves(board: "Board", pid: int, out: List[Move]) -> None:
    """Append the moves the on-board piece ``pid`` can make or cause."""
    cell = board.piece_cell[pid]
    t = piece_type(pid)
    if board.stacks[cell][-1] != pid:
        return
    if t == PILLBUG:
        pillbug_moves(board, cell, out)
        return
    if t == MOSQUITO:
        mosquito_moves(board, cell, out)
        return
    if board.is_movable(pid):
        GENERATORS[t](board, cell, out)

