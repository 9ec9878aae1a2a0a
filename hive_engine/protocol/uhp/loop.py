from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, List, Optional

from ...engine.game import Game
from ...engine.notation import format_move


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]

ENGINE_NAME = "hive_engine"
ENGINE_VERSION = "0.1.0"
EXPANSIONS = "Mosquito;Ladybug;Pillbug"


class InvalidMove(ValueError):
    """A move string that does not parse or is not legal."""


class UHPEngine:
    """Universal Hive Protocol adapter around the core engine.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Command set: info, newgame, play, pass, validmoves, undo, options,
      bestmove (refused; there is no move search).
    - Every response ends with ``ok``. A rejected move answers
      ``invalidmove <reason>``, any other failure ``err <reason>``; the
      game is left as it was in both cases.
    """

    def __init__(self) -> None:
        self.game: Optional[Game] = None

    # ---- Command handlers ----
    def cmd_info(self, write: Writer) -> None:
        write(f"id {ENGINE_NAME} v{ENGINE_VERSION}")
        write(EXPANSIONS)

    def cmd_newgame(self, args: List[str], write: Writer) -> None:
        # newgame [GameTypeString | GameString]
        text = " ".join(args).strip()
        game = Game.from_game_string(text) if text else Game.new()
        self.game = game
        write(game.to_game_string())

    def cmd_play(self, args: List[str], write: Writer) -> None:
        game = self._require_game()
        text = " ".join(args).strip()
        if not text:
            raise ValueError("play needs a move string")
        if game.is_terminal():
            raise ValueError("the game is over")
        try:
            game.play(text)
        except ValueError as e:
            raise InvalidMove(f"{text}: {e}") from e
        write(game.to_game_string())

    def cmd_pass(self, write: Writer) -> None:
        self.cmd_play(["pass"], write)

    def cmd_validmoves(self, write: Writer) -> None:
        game = self._require_game()
        if game.is_terminal():
            raise ValueError("the game is over")
        write(";".join(format_move(game.board, m) for m in game.legal_moves()))

    def cmd_undo(self, args: List[str], write: Writer) -> None:
        game = self._require_game()
        count = 1
        if args:
            try:
                count = int(args[0])
            except ValueError:
                raise ValueError(f"invalid undo count: {args[0]!r}")
        if count < 1 or count > len(game.move_stack):
            raise ValueError(f"cannot undo {count} moves")
        for _ in range(count):
            game.undo_move()
        write(game.to_game_string())

    def cmd_bestmove(self, write: Writer) -> None:
        raise ValueError("bestmove is not supported")

    def cmd_options(self, args: List[str], write: Writer) -> None:
        # No tunable options; any get/set names an unknown one
        if args:
            raise ValueError(f"unknown option: {' '.join(args[1:]) or args[0]}")

    # ---- Dispatch ----
    def handle(self, line: str, write: Writer) -> bool:
        """Run one command line; returns False when the loop should stop."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0], parts[1:]
        if cmd in ("exit", "quit"):
            return False
        try:
            if cmd == "info":
                self.cmd_info(write)
            elif cmd == "newgame":
                self.cmd_newgame(args, write)
            elif cmd == "play":
                self.cmd_play(args, write)
            elif cmd == "pass":
                self.cmd_pass(write)
            elif cmd == "validmoves":
                self.cmd_validmoves(write)
            elif cmd == "undo":
                self.cmd_undo(args, write)
            elif cmd == "bestmove":
                self.cmd_bestmove(write)
            elif cmd == "options":
                self.cmd_options(args, write)
            else:
                raise ValueError(f"unknown command: {cmd}")
        except InvalidMove as e:
            logger.debug("rejected move: %s", e)
            write(f"invalidmove {e}")
        except ValueError as e:
            logger.debug("command %r failed: %s", cmd, e)
            write(f"err {e}")
        write("ok")
        return True

    def _require_game(self) -> Game:
        if self.game is None:
            raise ValueError("no game in progress")
        return self.game


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_uhp(lines: Optional[Iterable[str]] = None, write: Writer = _default_writer) -> None:
    eng = UHPEngine()
    eng.cmd_info(write)
    write("ok")
    for raw in lines if lines is not None else sys.stdin:
        if not eng.handle(raw.strip(), write):
            break
