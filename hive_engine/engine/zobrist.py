from __future__ import annotations

from typing import List, TYPE_CHECKING

from .bugs import NUM_PIECES, piece_player, piece_type
from .hexgrid import NUM_CELLS

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


MASK64 = 0xFFFFFFFFFFFFFFFF

# 4 beetles and 2 mosquitoes can climb onto one base piece
MAX_HEIGHT = 7


class _SplitMix64:
    def __init__(self, seed: int) -> None:
        self.state = seed & MASK64

    def next(self) -> int:
        # Deterministic 64-bit SplitMix64
        self.state = (self.state + 0x9E3779B97F4A7C15) & MASK64
        z = self.state
        z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9 & MASK64
        z = (z ^ (z >> 27)) * 0x94D049BB133111EB & MASK64
        z = z ^ (z >> 31)
        return z & MASK64


class Zobrist:
    """Zobrist hashing seeds.

    Table layout:
    - piece_cell[player][bug_type][level * NUM_CELLS + cell]

    Two pieces of the same player and type share terms, so swapping them
    does not change the hash. Side to move is deliberately absent: a
    repeated arrangement counts regardless of whose turn it is.
    """

    piece_cell: List[List[List[int]]]

    def __init__(self, seed: int = 2346) -> None:
        prng = _SplitMix64(seed)
        self.piece_cell = [
            [[prng.next() for _ in range(NUM_CELLS * MAX_HEIGHT)] for _ in range(8)]
            for _ in range(2)
        ]

    def term(self, pid: int, cell: int, level: int) -> int:
        return self.piece_cell[piece_player(pid)][piece_type(pid)][level * NUM_CELLS + cell]


# Global deterministic table
ZOBRIST = Zobrist()


def compute_hash_from_scratch(board: "Board") -> int:
    """Compute the 64-bit Zobrist hash of every piece on ``board``.

    Deterministic across runs given the fixed ZOBRIST table.
    """
    h = 0
    for pid in range(NUM_PIECES):
        cell = board.piece_cell[pid]
        if cell < 0:
            continue
        level = board.stacks[cell].index(pid)
        h ^= ZOBRIST.term(pid, cell, level)
    return h & MASK64
