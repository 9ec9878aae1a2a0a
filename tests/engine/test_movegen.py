from __future__ import annotations

from hive_engine.engine.board import Board
from hive_engine.engine.bugs import (
    ANT,
    BEE,
    BEETLE,
    BLACK,
    GRASSHOPPER,
    LADYBUG,
    MOSQUITO,
    PILLBUG,
    SPIDER,
    WHITE,
    piece_id,
)
from hive_engine.engine.hexgrid import E, NE, NEIGHBOURS, NW, SE, START_CELL, SW, W

from helpers import at, destinations, walk

S = START_CELL
E1 = walk(S, E)
# Every empty cell touching the two-piece hive {S, E1}, clockwise from W(S)
PERIMETER = [
    walk(S, W),
    walk(S, NW),
    walk(S, NE),
    walk(E1, NE),
    walk(E1, E),
    walk(E1, SE),
    walk(S, SE),
    walk(S, SW),
]


def _with_white_piece(bug_type: int) -> Board:
    # White bee at S, black bee east of it, the piece under test west of S
    return Board.setup(
        [
            (WHITE, BEE, at(S)),
            (BLACK, BEE, at(E1)),
            (WHITE, bug_type, at(S, W)),
        ],
        to_play=WHITE,
    )


def test_bee_steps_around_the_hive() -> None:
    b = Board.setup([(WHITE, BEE, at(S)), (BLACK, BEE, at(E1))], to_play=WHITE)
    assert destinations(b, S) == {walk(S, NE), walk(S, SE)}


def test_grasshopper_jumps_the_whole_line() -> None:
    b = Board.setup(
        [
            (WHITE, BEE, at(S)),
            (BLACK, BEE, at(E1)),
            (BLACK, ANT, at(E1, E)),
            (WHITE, GRASSHOPPER, at(S, W)),
        ],
        to_play=WHITE,
    )
    assert destinations(b, walk(S, W)) == {walk(E1, E, E)}


def test_spider_moves_exactly_three_steps() -> None:
    b = _with_white_piece(SPIDER)
    assert destinations(b, walk(S, W)) == {walk(E1, NE), walk(E1, SE)}


def test_ant_reaches_the_whole_perimeter() -> None:
    b = _with_white_piece(ANT)
    assert destinations(b, walk(S, W)) == set(PERIMETER[1:])


def test_beetle_climbs_or_slides() -> None:
    b = _with_white_piece(BEETLE)
    assert destinations(b, walk(S, W)) == {S, walk(S, NW), walk(S, SW)}


def test_beetle_on_top_reaches_every_neighbour() -> None:
    b = Board.setup(
        [(WHITE, BEE, at(S)), (WHITE, BEETLE, at(S)), (BLACK, BEE, at(E1))],
        to_play=WHITE,
    )
    assert destinations(b, S) == set(NEIGHBOURS[S])


def test_ladybug_moves_two_on_top_and_one_down() -> None:
    b = _with_white_piece(LADYBUG)
    assert destinations(b, walk(S, W)) == {
        walk(S, NE),
        walk(E1, NE),
        walk(E1, E),
        walk(E1, SE),
        walk(S, SE),
    }


def test_mosquito_copies_its_neighbour() -> None:
    b = _with_white_piece(MOSQUITO)
    assert destinations(b, walk(S, W)) == {walk(S, NW), walk(S, SW)}


def test_mosquito_on_top_moves_as_a_beetle() -> None:
    b = Board.setup(
        [(WHITE, BEE, at(S)), (WHITE, MOSQUITO, at(S)), (BLACK, BEE, at(E1))],
        to_play=WHITE,
    )
    assert destinations(b, S) == set(NEIGHBOURS[S])


def test_mosquito_next_to_only_a_mosquito_is_stuck() -> None:
    b = Board.setup(
        [
            (WHITE, BEE, at(S)),
            (BLACK, BEE, at(E1)),
            (BLACK, MOSQUITO, at(S, W)),
            (WHITE, MOSQUITO, at(S, W, W)),
        ],
        to_play=WHITE,
    )
    assert destinations(b, walk(S, W, W)) == set()


def _pillbug_line(last_moved=None) -> Board:
    # wQ - wP - bQ in a row; the pillbug in the middle is pinned
    return Board.setup(
        [
            (WHITE, PILLBUG, at(S)),
            (WHITE, BEE, at(S, W)),
            (BLACK, BEE, at(E1)),
        ],
        to_play=WHITE,
        last_moved=last_moved,
    )


SIDES_OF_S = {walk(S, NW), walk(S, NE), walk(S, SE), walk(S, SW)}


def test_pillbug_throws_adjacent_pieces_of_either_colour() -> None:
    b = _pillbug_line()
    assert destinations(b, E1) == SIDES_OF_S
    # The white bee's own steps are a subset of its throw targets
    assert destinations(b, walk(S, W)) == SIDES_OF_S
    # Pinned, so the pillbug itself stays put
    assert destinations(b, S) == set()


def test_pillbug_cannot_throw_the_piece_just_moved() -> None:
    b = _pillbug_line(last_moved=piece_id(BLACK, BEE, 0))
    assert destinations(b, E1) == set()
    assert destinations(b, walk(S, W)) == SIDES_OF_S


def test_pillbug_just_moved_cannot_throw() -> None:
    b = _pillbug_line(last_moved=piece_id(WHITE, PILLBUG, 0))
    assert destinations(b, E1) == set()
    assert destinations(b, walk(S, W)) == {walk(S, NW), walk(S, SW)}


def test_pillbug_cannot_throw_a_pinned_piece() -> None:
    b = Board.setup(
        [
            (WHITE, PILLBUG, at(S)),
            (WHITE, BEE, at(S, W)),
            (BLACK, BEE, at(E1)),
            (BLACK, ANT, at(E1, E)),
        ],
        to_play=WHITE,
    )
    assert E1 in b.pinned
    assert destinations(b, E1) == set()


def test_mosquito_next_to_a_pillbug_throws_even_when_pinned() -> None:
    b = Board.setup(
        [
            (WHITE, BEE, at(S, W, W)),
            (WHITE, PILLBUG, at(S, W)),
            (WHITE, MOSQUITO, at(S)),
            (BLACK, BEE, at(E1)),
        ],
        to_play=WHITE,
    )
    assert S in b.pinned
    assert destinations(b, E1) == SIDES_OF_S
