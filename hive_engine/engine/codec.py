from __future__ import annotations

from typing import Optional, Tuple, TYPE_CHECKING

from .bugs import NUM_PIECES, piece_player, piece_type
from .hexgrid import NEIGHBOURS, START_CELL, opposite
from .move import PASS, Move

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


# Relations 0..5 are directions from the reference piece; 6 is "on top of it"
ON_TOP = 6
NUM_RELATIONS = 7
PASS_ACTION = NUM_PIECES * NUM_PIECES * NUM_RELATIONS
NUM_ACTIONS = PASS_ACTION + 1


def moving_piece(board: "Board", move: Move) -> int:
    """Id of the piece ``move`` places or relocates.

    Raises:
        ValueError: For a pass, an exhausted type or an empty source cell.
    """
    if move.is_pass:
        raise ValueError("a pass moves no piece")
    if move.bug_type is not None:
        return board.registries[board.to_play].next_piece(move.bug_type)
    assert move.from_cell is not None
    pid = board.top(move.from_cell)
    if pid is None:
        raise ValueError("no piece to move from from_cell")
    return pid


def reference(board: "Board", move: Move) -> Optional[Tuple[int, int]]:
    """Return ``(reference piece, relation)`` locating the destination.

    The reference is the top piece of the destination when stacking,
    otherwise the first occupied neighbour of the destination scanning
    clockwise from NW, as the board would look with the mover lifted. Returns
    ``None`` for the first placement of the game.

    Raises:
        ValueError: If the destination touches no other piece.
    """
    assert move.to_cell is not None
    dest = move.to_cell
    if board.pieces_placed() == 0:
        return None
    stack = board.stacks[dest]
    if stack and dest != move.from_cell:
        return stack[-1], ON_TOP
    for d, n in enumerate(NEIGHBOURS[dest]):
        s = board.stacks[n]
        if n == move.from_cell:
            # The mover leaves; whatever it rests on stays behind
            if len(s) < 2:
                continue
            return s[-2], opposite(d)
        if s:
            return s[-1], opposite(d)
    raise ValueError("destination is not connected to the hive")


def encode(board: "Board", move: Move) -> int:
    """Pack ``move`` into an integer in ``0..NUM_ACTIONS-1``.

    ``piece + reference * 28 + relation * 28 * 28``; the pass is
    ``PASS_ACTION``. Injective over the legal moves of one position.
    """
    if move.is_pass:
        return PASS_ACTION
    pid = moving_piece(board, move)
    ref = reference(board, move)
    if ref is None:
        return pid
    ref_pid, relation = ref
    return pid + ref_pid * NUM_PIECES + relation * NUM_PIECES * NUM_PIECES


def decode(board: "Board", action: int) -> Move:
    """Inverse of :func:`encode` for the position ``board``.

    Raises:
        ValueError: If ``action`` is out of range, names a reference piece
            that is not on the board, or places a piece out of order.
    """
    if action < 0 or action >= NUM_ACTIONS:
        raise ValueError(f"action out of range: {action}")
    if action == PASS_ACTION:
        return PASS
    pid = action % NUM_PIECES
    ref_pid = (action // NUM_PIECES) % NUM_PIECES
    relation = action // (NUM_PIECES * NUM_PIECES)

    if board.pieces_placed() == 0:
        dest = START_CELL
    else:
        ref_cell = board.piece_cell[ref_pid]
        if ref_cell < 0:
            raise ValueError(f"reference piece {ref_pid} is not on the board")
        dest = ref_cell if relation == ON_TOP else NEIGHBOURS[ref_cell][relation]

    src = board.piece_cell[pid]
    if src < 0:
        t = piece_type(pid)
        registry = board.registries[piece_player(pid)]
        if not registry.has(t) or registry.next_piece(t) != pid:
            raise ValueError(f"piece {pid} cannot be placed yet")
        return Move.place(t, dest)
    return Move.relocate(src, dest)
