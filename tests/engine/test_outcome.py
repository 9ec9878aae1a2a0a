from __future__ import annotations

from hive_engine.engine.board import BLACK_WINS, DRAW, IN_PROGRESS, WHITE_WINS, Board
from hive_engine.engine.bugs import ANT, BEE, BEETLE, BLACK, GRASSHOPPER, SPIDER, WHITE
from hive_engine.engine.game import Game
from hive_engine.engine.hexgrid import E, NE, NW, SE, START_CELL, SW, W
from hive_engine.engine.move import Move

from helpers import at, walk

S = START_CELL
WHITE_RING = [BEE, ANT, ANT, ANT, GRASSHOPPER, GRASSHOPPER]


def test_surrounded_bee_loses() -> None:
    pieces = [(BLACK, BEE, at(S))]
    pieces += [(WHITE, t, at(S, d)) for d, t in enumerate(WHITE_RING)]
    b = Board.setup(pieces, to_play=BLACK)
    assert b.is_surrounded(BLACK)
    assert b.is_terminal()
    assert b.outcome() == WHITE_WINS

    g = Game(board=b)
    assert g.outcome() == WHITE_WINS
    assert g.legal_moves() == []


def test_white_bee_surrounded_by_any_colour() -> None:
    pieces = [(WHITE, BEE, at(S))]
    pieces += [(BLACK, t, at(S, d)) for d, t in enumerate(WHITE_RING[:3])]
    pieces += [(WHITE, t, at(S, d + 3)) for d, t in enumerate((ANT, ANT, SPIDER))]
    b = Board.setup(pieces)
    assert b.outcome() == BLACK_WINS


def test_both_bees_surrounded_is_a_draw() -> None:
    e1 = walk(S, E)
    ring = [walk(S, W), walk(S, NW), walk(S, NE), walk(e1, NE), walk(e1, E), walk(e1, SE), walk(S, SE), walk(S, SW)]
    types = [ANT, ANT, ANT, GRASSHOPPER, GRASSHOPPER, GRASSHOPPER, SPIDER, SPIDER]
    pieces = [(WHITE, BEE, at(S)), (BLACK, BEE, at(e1))]
    pieces += [(WHITE, t, at(c)) for c, t in zip(ring, types)]
    b = Board.setup(pieces)
    assert b.outcome() == DRAW


def test_partly_surrounded_bee_is_in_progress() -> None:
    pieces = [(BLACK, BEE, at(S))]
    pieces += [(WHITE, t, at(S, d)) for d, t in enumerate(WHITE_RING[:5])]
    assert Board.setup(pieces).outcome() == IN_PROGRESS


def test_closing_the_ring_ends_the_game_and_undo_reopens_it() -> None:
    # Five white pieces around the black bee, a white beetle ready to close it
    outside = walk(S, W, NW)
    pieces = [(BLACK, BEE, at(S))]
    pieces += [(WHITE, t, at(S, d)) for d, t in enumerate(WHITE_RING[:5])]
    pieces.append((WHITE, BEETLE, at(outside)))
    b = Board.setup(pieces, to_play=WHITE)
    assert b.outcome() == IN_PROGRESS

    close = Move.relocate(outside, walk(S, W))
    assert close in b.generate_legal_moves()
    b.make_move(close)
    assert b.outcome() == WHITE_WINS
    b.unmake_move(close)
    assert b.outcome() == IN_PROGRESS
