from __future__ import annotations

import random

import pytest

from hive_engine.engine.board import Board
from hive_engine.engine.bugs import ANT, BEE, SPIDER
from hive_engine.engine.hexgrid import START_CELL
from hive_engine.engine.move import PASS, Move
from hive_engine.engine.zobrist import compute_hash_from_scratch

from helpers import assert_consistent, snapshot


def test_make_unmake_restores_position() -> None:
    b = Board.empty()
    before = snapshot(b)
    mv = Move.place(ANT, START_CELL)
    assert mv in b.generate_legal_moves()
    b.make_move(mv)
    assert b.top(START_CELL) is not None
    assert b.last_moved == b.top(START_CELL)
    b.unmake_move(mv)
    assert snapshot(b) == before


@pytest.mark.parametrize("seed", [1, 2, 3])
def test_every_legal_move_is_undone_exactly(seed: int) -> None:
    rng = random.Random(seed)
    b = Board.empty()
    for _ in range(40):
        before = snapshot(b)
        moves = b.generate_legal_moves()
        assert moves
        assert len(set(moves)) == len(moves)
        for m in rng.sample(moves, min(len(moves), 12)):
            b.make_move(m)
            assert_consistent(b)
            assert b.zobrist_hash == compute_hash_from_scratch(b)
            b.unmake_move(m)
            assert snapshot(b) == before
        b.make_move(rng.choice(moves))
        if b.is_terminal():
            break


def test_unmake_requires_the_last_move() -> None:
    b = Board.empty()
    with pytest.raises(ValueError):
        b.unmake_move(PASS)
    b.make_move(Move.place(SPIDER, START_CELL))
    with pytest.raises(ValueError):
        b.unmake_move(Move.place(BEE, START_CELL))


def test_apply_returns_a_new_board() -> None:
    b = Board.empty()
    before = snapshot(b)
    child = b.apply(Move.place(BEE, START_CELL))
    assert snapshot(b) == before
    assert child.ply == 1
    assert child.last_move() == Move.place(BEE, START_CELL)
    with pytest.raises(ValueError):
        b.apply(Move.place(BEE, START_CELL + 1))


def test_copy_is_independent() -> None:
    b = Board.empty()
    b.make_move(Move.place(BEE, START_CELL))
    other = b.copy()
    other.unmake_move(Move.place(BEE, START_CELL))
    assert b.ply == 1 and other.ply == 0
    assert b.top(START_CELL) is not None
    assert other.top(START_CELL) is None
