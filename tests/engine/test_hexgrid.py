from __future__ import annotations

import pytest

from hive_engine.engine.hexgrid import (
    BOARD_SIZE,
    E,
    NE,
    NEIGHBOURS,
    NUM_CELLS,
    NW,
    SE,
    START_CELL,
    SW,
    W,
    coords,
    direction_between,
    index,
    line,
    neighbours,
    opposite,
)


def test_index_and_coords_are_inverse() -> None:
    for cell in range(NUM_CELLS):
        col, row = coords(cell)
        assert index(col, row) == cell
    assert coords(START_CELL) == (16, 16)


def test_coordinates_wrap() -> None:
    assert index(-1, 0) == index(BOARD_SIZE - 1, 0)
    assert index(3, BOARD_SIZE + 2) == index(3, 2)
    with pytest.raises(ValueError):
        coords(NUM_CELLS)


def test_neighbours_of_even_and_odd_rows() -> None:
    assert neighbours(index(16, 16)) == (
        index(15, 15),
        index(16, 15),
        index(17, 16),
        index(16, 17),
        index(15, 17),
        index(15, 16),
    )
    assert neighbours(index(16, 15)) == (
        index(16, 14),
        index(17, 14),
        index(17, 15),
        index(17, 16),
        index(16, 16),
        index(15, 15),
    )


def test_adjacency_is_symmetric_everywhere() -> None:
    # Holds across the wrap only because the extent is even
    for cell in range(NUM_CELLS):
        ring = NEIGHBOURS[cell]
        assert len(set(ring)) == 6
        for d in range(6):
            assert NEIGHBOURS[ring[d]][opposite(d)] == cell


def test_consecutive_ring_cells_touch() -> None:
    for cell in range(NUM_CELLS):
        ring = NEIGHBOURS[cell]
        for d in range(6):
            assert ring[(d + 1) % 6] in NEIGHBOURS[ring[d]]


def test_straight_lines() -> None:
    assert line(START_CELL, E, 3) == [index(17, 16), index(18, 16), index(19, 16)]
    assert line(START_CELL, W, 2) == [index(15, 16), index(14, 16)]
    # Two steps NE then two steps SW come back
    there = line(START_CELL, NE, 2)[-1]
    assert line(there, SW, 2)[-1] == START_CELL
    # NW, SE alternate the column shift with the row parity
    assert line(START_CELL, NW, 2) == [index(15, 15), index(15, 14)]
    assert line(START_CELL, SE, 2) == [index(16, 17), index(17, 18)]


def test_direction_between() -> None:
    for d in range(6):
        assert direction_between(START_CELL, NEIGHBOURS[START_CELL][d]) == d
    with pytest.raises(ValueError):
        direction_between(START_CELL, index(20, 20))
