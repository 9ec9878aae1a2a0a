from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

from .board import DRAW, Board
from .bugs import PLAYER_NAMES
from .codec import decode, encode
from .move import Move
from .notation import format_move, parse_move

logger = logging.getLogger(__name__)

GAME_TYPE = "Base+MLP"
NOT_STARTED = "NotStarted"
# A position seen this many times ends the game in a draw
REPETITIONS_TO_DRAW = 3

_TURN_RE = re.compile(r"^(White|Black)\[(\d+)\]$")


@dataclass
class Game:
    """Game wrapper around a board with helper operations.

    Responsibility: track board state and history, expose legal moves and
    actions, apply and undo moves, detect repetition draws.
    """

    board: Board
    move_stack: List[Move] = field(default_factory=list)
    notation_stack: List[str] = field(default_factory=list)
    repetition: Dict[int, int] = field(default_factory=dict)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.empty())

    @classmethod
    def from_game_string(cls, text: str) -> "Game":
        """Replay a game string such as ``Base+MLP;InProgress;Black[1];wQ``.

        The state and turn fields are recomputed from the moves; a mismatch
        is logged, not rejected.

        Raises:
            ValueError: On an unsupported game type, a malformed turn field
                or an invalid or illegal move.
        """
        parts = [p.strip() for p in text.strip().split(";")]
        if parts[0] != GAME_TYPE:
            raise ValueError(f"unsupported game type: {parts[0]!r}")
        game = cls.new()
        if len(parts) == 1:
            return game
        if len(parts) < 3:
            raise ValueError(f"invalid game string: {text!r}")
        state, turn = parts[1], parts[2]
        if not _TURN_RE.match(turn):
            raise ValueError(f"invalid turn string: {turn!r}")
        for move_text in parts[3:]:
            if move_text:
                game.play(move_text)
        if game.state() != state or game.turn_string() != turn:
            logger.warning(
                "game string header %s;%s does not match replayed %s;%s",
                state,
                turn,
                game.state(),
                game.turn_string(),
            )
        return game

    def to_game_string(self) -> str:
        fields = [GAME_TYPE, self.state(), self.turn_string()]
        fields.extend(self.notation_stack)
        return ";".join(fields)

    def __post_init__(self) -> None:
        # Seed repetition with current position
        h = self.board.zobrist_hash
        self.repetition[h] = self.repetition.get(h, 0) + 1

    def current_player(self) -> int:
        return self.board.to_play

    def legal_moves(self) -> List[Move]:
        if self.is_terminal():
            return []
        return self.board.generate_legal_moves()

    def apply_move(self, move: Move) -> None:
        # Validate legality
        if move not in self.legal_moves():
            raise ValueError("illegal move")
        text = format_move(self.board, move)
        self.board.make_move(move)
        self.move_stack.append(move)
        self.notation_stack.append(text)
        h = self.board.zobrist_hash
        self.repetition[h] = self.repetition.get(h, 0) + 1
        logger.debug("played %s (ply %d)", text, self.board.ply)

    def play(self, text: str) -> Move:
        """Parse ``text`` as a move in the current position and apply it.

        Raises:
            ValueError: If the text does not parse or the move is illegal.
        """
        move = parse_move(self.board, text)
        self.apply_move(move)
        return move

    def undo_move(self) -> None:
        if not self.move_stack:
            raise ValueError("no moves to undo")
        # Decrement count for current position
        curr = self.board.zobrist_hash
        if curr in self.repetition:
            self.repetition[curr] -= 1
            if self.repetition[curr] <= 0:
                del self.repetition[curr]
        last = self.move_stack.pop()
        self.notation_stack.pop()
        self.board.unmake_move(last)

    # --- Integer actions ---
    def legal_actions(self) -> List[int]:
        return sorted(encode(self.board, m) for m in self.legal_moves())

    def apply_action(self, action: int) -> None:
        if action not in self.legal_actions():
            raise ValueError("illegal action")
        self.apply_move(decode(self.board, action))

    def action_to_string(self, action: int) -> str:
        return format_move(self.board, decode(self.board, action))

    # --- State flags for protocol ---
    def is_repetition_draw(self) -> bool:
        return self.repetition.get(self.board.zobrist_hash, 0) >= REPETITIONS_TO_DRAW

    def outcome(self) -> str:
        if self.is_repetition_draw():
            return DRAW
        return self.board.outcome()

    def is_terminal(self) -> bool:
        return self.is_repetition_draw() or self.board.is_terminal()

    def state(self) -> str:
        if not self.move_stack and self.board.pieces_placed() == 0:
            return NOT_STARTED
        return self.outcome()

    def turn_string(self) -> str:
        return f"{PLAYER_NAMES[self.board.to_play]}[{self.board.ply // 2 + 1}]"

    def move_history(self) -> List[str]:
        return list(self.notation_stack)
