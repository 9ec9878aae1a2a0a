from __future__ import annotations

from typing import Dict, List, Set, TYPE_CHECKING

from .hexgrid import NEIGHBOURS

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


def pinned_cells(board: "Board") -> Set[int]:
    """Return the occupied cells whose removal would split the hive.

    Articulation points of the graph whose nodes are occupied cells and whose
    edges are hex adjacency, found with one depth-first traversal tracking
    discovery order and low-link. A stack counts as a single node, so the
    result applies to the bottom piece; pieces above it never disconnect
    anything by leaving.

    Notes:
        The hive holds at most 28 pieces, so the board recomputes this in
        full after every make/unmake.
    """
    occupied = board.occupied_cells()
    if len(occupied) < 3:
        return set()

    stacks = board.stacks
    disc: Dict[int, int] = {}
    low: Dict[int, int] = {}
    pinned: Set[int] = set()

    root = occupied[0]
    disc[root] = low[root] = 0
    counter = 1
    root_children = 0
    # Iterative DFS: frames of (cell, parent, next neighbour index)
    stack: List[List[int]] = [[root, -1, 0]]
    while stack:
        frame = stack[-1]
        cell, parent, i = frame
        if i < 6:
            frame[2] = i + 1
            nxt = NEIGHBOURS[cell][i]
            if not stacks[nxt]:
                continue
            if nxt not in disc:
                disc[nxt] = low[nxt] = counter
                counter += 1
                if cell == root:
                    root_children += 1
                stack.append([nxt, cell, 0])
            elif nxt != parent:
                low[cell] = min(low[cell], disc[nxt])
            continue
        stack.pop()
        if parent >= 0:
            low[parent] = min(low[parent], low[cell])
            if parent != root and low[cell] >= disc[parent]:
                pinned.add(parent)
    if root_children > 1:
        pinned.add(root)
    return pinned
