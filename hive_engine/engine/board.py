from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from .bugs import (
    BEE,
    BLACK,
    NUM_PIECES,
    PIECES_PER_PLAYER,
    WHITE,
    PieceRegistry,
    piece_id,
    piece_player,
)
from .hexgrid import NEIGHBOURS, NUM_CELLS, START_CELL, index
from .move import PASS, Move
from .movegen import generate_piece_moves
from .pinned import pinned_cells
from .zobrist import MASK64, ZOBRIST


# A player who has not placed the bee by this placement must place it now
BEE_DEADLINE = 4

IN_PROGRESS = "InProgress"
DRAW = "Draw"
WHITE_WINS = "WhiteWins"
BLACK_WINS = "BlackWins"

# (player, bug_type, (col, row)) as accepted by Board.setup
PieceSpec = Tuple[int, int, Tuple[int, int]]


@dataclass
class Board:
    """Hive position with stacked cells and incremental caches.

    Notes:
    - ``stacks[cell]`` lists piece ids bottom first; only the last one is
      adjacent to the neighbouring cells and may normally move.
    - ``piece_cell[pid]`` is ``-1`` while a piece is in hand.
    - ``available``, ``pinned``, ``zobrist_hash`` and the outcome are caches
      kept in step with the stacks by make/unmake.
    """

    stacks: List[List[int]]
    piece_cell: List[int]
    registries: List[PieceRegistry]
    to_play: int = WHITE
    ply: int = 0
    # piece moved or placed on the previous ply
    last_moved: Optional[int] = None
    available: List[Set[int]] = field(default_factory=lambda: [set(), set()])
    pinned: Set[int] = field(default_factory=set)
    zobrist_hash: int = 0
    _outcome: str = IN_PROGRESS
    # internal move history for make/unmake
    _history: List[Tuple[Move, Optional[int], Optional[int]]] = field(
        default_factory=list, repr=False
    )

    @classmethod
    def empty(cls) -> "Board":
        """Create a board with both players' pieces in hand."""
        return cls(
            stacks=[[] for _ in range(NUM_CELLS)],
            piece_cell=[-1] * NUM_PIECES,
            registries=[PieceRegistry(WHITE), PieceRegistry(BLACK)],
        )

    @classmethod
    def setup(
        cls,
        pieces: Iterable[PieceSpec],
        to_play: int = WHITE,
        last_moved: Optional[int] = None,
    ) -> "Board":
        """Build an arbitrary position without checking the rules.

        Args:
            pieces (Iterable[PieceSpec]): ``(player, bug_type, (col, row))``
                entries, bottom of each stack first. Pieces of a type are
                drawn from the hand in order.
            to_play (int): Player to move.
            last_moved (Optional[int]): Piece id treated as moved on the
                previous ply.

        Returns:
            Board: Position with every cache computed.

        Raises:
            ValueError: If a player runs out of pieces of a type.
        """
        board = cls.empty()
        for player, bug_type, (col, row) in pieces:
            pid = board.registries[player].take(bug_type)
            board._put(pid, index(col, row))
        board.to_play = to_play
        board.ply = board.pieces_placed()
        board.last_moved = last_moved
        board._refresh()
        return board

    def copy(self) -> "Board":
        return Board(
            stacks=[list(s) for s in self.stacks],
            piece_cell=list(self.piece_cell),
            registries=[r.copy() for r in self.registries],
            to_play=self.to_play,
            ply=self.ply,
            last_moved=self.last_moved,
            available=[set(a) for a in self.available],
            pinned=set(self.pinned),
            zobrist_hash=self.zobrist_hash,
            _outcome=self._outcome,
            _history=list(self._history),
        )

    # --- Stack queries ---
    def height(self, cell: int) -> int:
        return len(self.stacks[cell])

    def top(self, cell: int) -> Optional[int]:
        s = self.stacks[cell]
        return s[-1] if s else None

    def bottom(self, cell: int) -> Optional[int]:
        s = self.stacks[cell]
        return s[0] if s else None

    def piece_below(self, pid: int) -> Optional[int]:
        cell = self.piece_cell[pid]
        if cell < 0:
            return None
        s = self.stacks[cell]
        level = s.index(pid)
        return s[level - 1] if level > 0 else None

    def piece_above(self, pid: int) -> Optional[int]:
        cell = self.piece_cell[pid]
        if cell < 0:
            return None
        s = self.stacks[cell]
        level = s.index(pid)
        return s[level + 1] if level + 1 < len(s) else None

    def occupied_cells(self) -> List[int]:
        return sorted({c for c in self.piece_cell if c >= 0})

    def pieces_placed(self) -> int:
        return sum(1 for c in self.piece_cell if c >= 0)

    def bee_cell(self, player: int) -> Optional[int]:
        cell = self.piece_cell[piece_id(player, BEE, 0)]
        return cell if cell >= 0 else None

    def is_movable(self, pid: int) -> bool:
        """Return True if ``pid`` may leave its cell this ply.

        The piece must be on top of its stack and must not be the piece
        moved on the previous ply. A ground piece additionally must not be
        pinned; a piece resting on another never disconnects the hive.
        """
        cell = self.piece_cell[pid]
        if cell < 0 or pid == self.last_moved:
            return False
        s = self.stacks[cell]
        if s[-1] != pid:
            return False
        return len(s) > 1 or cell not in self.pinned

    # --- Stack mutation (make/unmake and setup only) ---
    def _put(self, pid: int, cell: int) -> None:
        s = self.stacks[cell]
        self.zobrist_hash ^= ZOBRIST.term(pid, cell, len(s))
        s.append(pid)
        self.piece_cell[pid] = cell
        self._cache_availability(cell)

    def _lift(self, cell: int) -> int:
        s = self.stacks[cell]
        if not s:
            raise ValueError(f"no piece to lift at cell {cell}")
        pid = s.pop()
        self.zobrist_hash ^= ZOBRIST.term(pid, cell, len(s))
        self.piece_cell[pid] = -1
        self._cache_availability(cell)
        return pid

    # --- Placement availability ---
    def _cell_owner(self, cell: int) -> Optional[int]:
        """Player owning every occupied neighbour of empty ``cell``, if any."""
        if self.stacks[cell]:
            return None
        owner: Optional[int] = None
        for n in NEIGHBOURS[cell]:
            s = self.stacks[n]
            if not s:
                continue
            p = piece_player(s[-1])
            if owner is None:
                owner = p
            elif owner != p:
                return None
        return owner

    def _cache_cell_owner(self, cell: int) -> None:
        owner = self._cell_owner(cell)
        self.available[WHITE].discard(cell)
        self.available[BLACK].discard(cell)
        if owner is not None:
            self.available[owner].add(cell)

    def _cache_availability(self, cell: int) -> None:
        self._cache_cell_owner(cell)
        for n in NEIGHBOURS[cell]:
            self._cache_cell_owner(n)

    def placement_cells(self) -> List[int]:
        """Empty cells where the side to move may place a new piece."""
        placed = self.pieces_placed()
        if placed == 0:
            return [START_CELL]
        if placed == 1:
            # The second piece of the game must touch the first
            return list(NEIGHBOURS[self.occupied_cells()[0]])
        return sorted(self.available[self.to_play])

    # --- Move generation ---
    def generate_legal_moves(self) -> List[Move]:
        """Return every legal move for the side to move.

        Returns:
            List[Move]: Placements first, then relocations, without
                duplicates. Contains exactly ``PASS`` when nothing else is
                legal, so it is never empty.

        Notes:
            Pieces may only move once their owner's bee is on the board, and
            the bee must be placed by the owner's fourth placement.
        """
        moves: List[Move] = []
        player = self.to_play
        registry = self.registries[player]
        bee_placed = self.bee_cell(player) is not None

        if registry.any_in_hand():
            if not bee_placed and registry.placed_count() >= BEE_DEADLINE - 1:
                types = [BEE]
            else:
                types = registry.types_in_hand()
            cells = self.placement_cells()
            for t in types:
                for c in cells:
                    moves.append(Move.place(t, c))

        if bee_placed:
            first = player * PIECES_PER_PLAYER
            for pid in range(first, first + PIECES_PER_PLAYER):
                if self.piece_cell[pid] >= 0:
                    generate_piece_moves(self, pid, moves)

        if not moves:
            return [PASS]
        return list(dict.fromkeys(moves))

    # --- Make / unmake ---
    def apply(self, move: Move) -> "Board":
        """Return a new board with ``move`` made, leaving ``self`` untouched.

        Raises:
            ValueError: If ``move`` is not legal in this position.
        """
        if move not in self.generate_legal_moves():
            raise ValueError("illegal move")
        child = self.copy()
        child.make_move(move)
        return child

    def make_move(self, move: Move) -> None:
        """Apply ``move`` to this board in-place with reversible state.

        The move is trusted to come from :meth:`generate_legal_moves`.

        Raises:
            ValueError: If the move has no piece to place or to lift.
        """
        prev_last = self.last_moved
        if move.is_pass:
            pid: Optional[int] = None
        elif move.bug_type is not None:
            assert move.to_cell is not None
            pid = self.registries[self.to_play].take(move.bug_type)
            self._put(pid, move.to_cell)
        else:
            assert move.from_cell is not None and move.to_cell is not None
            if not self.stacks[move.from_cell]:
                raise ValueError("no piece to move from from_cell")
            pid = self._lift(move.from_cell)
            self._put(pid, move.to_cell)

        self._history.append((move, pid, prev_last))
        self.last_moved = pid
        self.to_play ^= 1
        self.ply += 1
        self._refresh()

    def unmake_move(self, move: Move) -> None:
        """Undo the last move in-place, restoring every cache exactly.

        Raises:
            ValueError: If no move has been made, or ``move`` is not the most
                recently made move.
        """
        if not self._history:
            raise ValueError("no move to unmake")
        last, pid, prev_last = self._history[-1]
        if last != move:
            raise ValueError("move does not match the last move made")
        self._history.pop()

        self.to_play ^= 1
        self.ply -= 1
        self.last_moved = prev_last
        if pid is not None:
            assert move.to_cell is not None
            self._lift(move.to_cell)
            if move.bug_type is not None:
                self.registries[self.to_play].give_back(move.bug_type)
            else:
                assert move.from_cell is not None
                self._put(pid, move.from_cell)
        self._refresh()

    def last_move(self) -> Optional[Move]:
        return self._history[-1][0] if self._history else None

    def _refresh(self) -> None:
        self.zobrist_hash &= MASK64
        self.pinned = pinned_cells(self)
        self._cache_outcome()

    # --- Outcome ---
    def is_surrounded(self, player: int) -> bool:
        cell = self.bee_cell(player)
        if cell is None:
            return False
        return all(self.stacks[n] for n in NEIGHBOURS[cell])

    def _cache_outcome(self) -> None:
        white_lost = self.is_surrounded(WHITE)
        black_lost = self.is_surrounded(BLACK)
        if white_lost and black_lost:
            self._outcome = DRAW
        elif white_lost:
            self._outcome = BLACK_WINS
        elif black_lost:
            self._outcome = WHITE_WINS
        else:
            self._outcome = IN_PROGRESS

    def outcome(self) -> str:
        return self._outcome

    def is_terminal(self) -> bool:
        return self._outcome != IN_PROGRESS
