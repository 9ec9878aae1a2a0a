from __future__ import annotations

from typing import List, Tuple


# The widest a hive of 28 pieces can span is 28 cells, so an extent of 32
# never lets it wrap around and touch itself. The extent must stay even so
# row parity survives the wrap.
BOARD_SIZE = 32
NUM_CELLS = BOARD_SIZE * BOARD_SIZE

# Directions, clockwise (rows grow downwards):
#    0 1
#   5 . 2
#    4 3
NW, NE, E, SE, SW, W = range(6)

# Pointy-top layout: odd rows are shifted half a cell to the right.
EVEN_ROW_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
)
ODD_ROW_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (0, -1),
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 0),
)


def index(col: int, row: int) -> int:
    """Map a ``(col, row)`` coordinate to its dense cell index.

    Args:
        col (int): Column, reduced modulo ``BOARD_SIZE``.
        row (int): Row, reduced modulo ``BOARD_SIZE``.

    Returns:
        int: Cell index in ``0..NUM_CELLS-1``.
    """
    return (row % BOARD_SIZE) * BOARD_SIZE + (col % BOARD_SIZE)


def coords(cell: int) -> Tuple[int, int]:
    """Inverse of :func:`index`.

    Raises:
        ValueError: If ``cell`` is outside the board.
    """
    if cell < 0 or cell >= NUM_CELLS:
        raise ValueError(f"invalid cell index: {cell}")
    return cell % BOARD_SIZE, cell // BOARD_SIZE


def opposite(direction: int) -> int:
    return (direction + 3) % 6


def _compute_neighbours(cell: int) -> Tuple[int, ...]:
    col, row = coords(cell)
    offsets = EVEN_ROW_OFFSETS if row % 2 == 0 else ODD_ROW_OFFSETS
    return tuple(index(col + dc, row + dr) for dc, dr in offsets)


# Read-only adjacency table, built once
NEIGHBOURS: Tuple[Tuple[int, ...], ...] = tuple(_compute_neighbours(c) for c in range(NUM_CELLS))

START_CELL = index(BOARD_SIZE // 2, BOARD_SIZE // 2)


def neighbours(cell: int) -> Tuple[int, ...]:
    """Return the six neighbours of ``cell`` in clockwise order from NW."""
    return NEIGHBOURS[cell]


def neighbour(cell: int, direction: int) -> int:
    return NEIGHBOURS[cell][direction]


def direction_between(a: int, b: int) -> int:
    """Return the direction leading from ``a`` to its neighbour ``b``.

    Raises:
        ValueError: If the cells are not adjacent.
    """
    try:
        return NEIGHBOURS[a].index(b)
    except ValueError as e:
        raise ValueError(f"cells {a} and {b} are not adjacent") from e


def line(cell: int, direction: int, length: int) -> List[int]:
    """Cells reached by stepping ``length`` times in one direction."""
    out: List[int] = []
    for _ in range(length):
        cell = NEIGHBOURS[cell][direction]
        out.append(cell)
    return out


def cell_to_str(cell: int) -> str:
    col, row = coords(cell)
    return f"({col}, {row})"
