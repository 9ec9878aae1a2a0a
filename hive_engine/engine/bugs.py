from __future__ import annotations

from typing import List


WHITE, BLACK = 0, 1
PLAYER_CHARS = ("w", "b")
PLAYER_NAMES = ("White", "Black")

# Bug type indices
BEE, BEETLE, ANT, GRASSHOPPER, SPIDER, LADYBUG, MOSQUITO, PILLBUG = range(8)
NUM_BUG_TYPES = 8
BUG_TYPE_CHARS = ("Q", "B", "A", "G", "S", "L", "M", "P")
CHAR_TO_BUG_TYPE = {c: t for t, c in enumerate(BUG_TYPE_CHARS)}

# Pieces per player of each type
BUG_QUOTAS = (1, 2, 3, 3, 2, 1, 1, 1)
# BUG_SERIES[t] is the number of pieces with a type lower than t
BUG_SERIES = (0, 1, 3, 6, 9, 11, 12, 13)
PIECES_PER_PLAYER = sum(BUG_QUOTAS)
NUM_PIECES = 2 * PIECES_PER_PLAYER

_PIECE_TYPES: List[int] = [t for t in range(NUM_BUG_TYPES) for _ in range(BUG_QUOTAS[t])]


def piece_id(player: int, bug_type: int, order: int) -> int:
    """Dense id of a physical piece.

    Args:
        player (int): ``WHITE`` or ``BLACK``.
        bug_type (int): One of the bug type constants.
        order (int): Zero-based order among the player's pieces of that type.

    Returns:
        int: Piece id in ``0..NUM_PIECES-1``.

    Raises:
        ValueError: If ``order`` exceeds the type's quota.
    """
    if order < 0 or order >= BUG_QUOTAS[bug_type]:
        raise ValueError(f"invalid order {order} for bug type {BUG_TYPE_CHARS[bug_type]}")
    return player * PIECES_PER_PLAYER + BUG_SERIES[bug_type] + order


def piece_player(pid: int) -> int:
    return pid // PIECES_PER_PLAYER


def piece_type(pid: int) -> int:
    return _PIECE_TYPES[pid % PIECES_PER_PLAYER]


def piece_order(pid: int) -> int:
    return pid % PIECES_PER_PLAYER - BUG_SERIES[piece_type(pid)]


class PieceRegistry:
    """Inventory of one player's unplaced pieces.

    Pieces of a type are handed out in ascending order and returned in
    reverse, so ``quota - in_hand`` is always the order of the next piece.
    Where placed pieces sit is tracked by the board, not here.
    """

    def __init__(self, player: int) -> None:
        self.player = player
        self._in_hand: List[int] = list(BUG_QUOTAS)

    def in_hand(self, bug_type: int) -> int:
        return self._in_hand[bug_type]

    def has(self, bug_type: int) -> bool:
        return self._in_hand[bug_type] > 0

    def any_in_hand(self) -> bool:
        return any(self._in_hand)

    def placed_count(self) -> int:
        return PIECES_PER_PLAYER - sum(self._in_hand)

    def types_in_hand(self) -> List[int]:
        return [t for t in range(NUM_BUG_TYPES) if self._in_hand[t] > 0]

    def next_piece(self, bug_type: int) -> int:
        """Id of the piece the next placement of ``bug_type`` would use.

        Raises:
            ValueError: If no piece of that type is left in hand.
        """
        if not self.has(bug_type):
            raise ValueError(f"no {BUG_TYPE_CHARS[bug_type]} left in hand")
        order = BUG_QUOTAS[bug_type] - self._in_hand[bug_type]
        return piece_id(self.player, bug_type, order)

    def take(self, bug_type: int) -> int:
        pid = self.next_piece(bug_type)
        self._in_hand[bug_type] -= 1
        return pid

    def give_back(self, bug_type: int) -> int:
        """Return the most recently taken piece of ``bug_type`` to the hand.

        Raises:
            ValueError: If no piece of that type has been taken.
        """
        if self._in_hand[bug_type] >= BUG_QUOTAS[bug_type]:
            raise ValueError(f"no {BUG_TYPE_CHARS[bug_type]} on the board to return")
        self._in_hand[bug_type] += 1
        order = BUG_QUOTAS[bug_type] - self._in_hand[bug_type]
        return piece_id(self.player, bug_type, order)

    def counts(self) -> List[int]:
        return list(self._in_hand)

    def copy(self) -> "PieceRegistry":
        other = PieceRegistry(self.player)
        other._in_hand = list(self._in_hand)
        return other
