from __future__ import annotations

from typing import Iterator, TYPE_CHECKING

from .hexgrid import NEIGHBOURS

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


def _height(board: "Board", cell: int, origin: int) -> int:
    # The moving piece has conceptually left its origin
    h = len(board.stacks[cell])
    return h - 1 if cell == origin else h


def can_slide(board: "Board", cell: int, direction: int, origin: int) -> bool:
    """Return True if a ground piece at ``cell`` may slide in ``direction``.

    The window is (direction - 1, direction, direction + 1) around ``cell``.
    The candidate must be empty and exactly one flank occupied: both flanks
    occupied form a gap too narrow to pass, both empty would lose contact
    with the hive.

    Args:
        board (Board): Position to inspect.
        cell (int): Cell the piece slides from.
        direction (int): Direction of the candidate neighbour.
        origin (int): Cell the moving piece started from; counted one piece
            lower since the piece is no longer there.
    """
    ring = NEIGHBOURS[cell]
    if _height(board, ring[direction], origin):
        return False
    left = _height(board, ring[(direction - 1) % 6], origin) > 0
    right = _height(board, ring[(direction + 1) % 6], origin) > 0
    return left != right


def slides(board: "Board", cell: int, origin: int, clockwise: bool = True) -> Iterator[int]:
    """Yield every neighbour of ``cell`` reachable by one ground slide.

    The ring is scanned clockwise from NW, or counter-clockwise from W.
    """
    order = range(6) if clockwise else range(5, -1, -1)
    ring = NEIGHBOURS[cell]
    for d in order:
        if can_slide(board, cell, d, origin):
            yield ring[d]


def can_step(board: "Board", cell: int, direction: int, origin: int) -> bool:
    """Return True if a piece on top of ``cell`` may step in ``direction``.

    Covers climbing, moving along the top of the hive and stepping down. A
    ground-to-ground step falls back to :func:`can_slide`; anything else is
    blocked only by a gate whose both flanks are taller than the source and
    the destination level.
    """
    ring = NEIGHBOURS[cell]
    src = _height(board, cell, origin)
    dst = _height(board, ring[direction], origin)
    if src == 0 and dst == 0:
        return can_slide(board, cell, direction, origin)
    left = _height(board, ring[(direction - 1) % 6], origin)
    right = _height(board, ring[(direction + 1) % 6], origin)
    return min(left, right) <= max(src, dst)
