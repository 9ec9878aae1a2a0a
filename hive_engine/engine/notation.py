from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .bugs import (
    BUG_QUOTAS,
    BUG_TYPE_CHARS,
    CHAR_TO_BUG_TYPE,
    PLAYER_CHARS,
    piece_id,
    piece_order,
    piece_player,
    piece_type,
)
from .codec import ON_TOP, moving_piece, reference
from .hexgrid import NE, NEIGHBOURS, NW, SE, START_CELL, SW, E, W
from .move import PASS, Move

if TYPE_CHECKING:  # pragma: no cover
    from .board import Board


_PIECE_RE = re.compile(r"^([wb])([QBAGSLMP])([1-3]?)$")

# Direction from the reference piece -> (prefix, suffix) around its name
_SYMBOLS = {
    NW: ("\\", ""),
    NE: ("", "/"),
    E: ("", "-"),
    SE: ("", "\\"),
    SW: ("/", ""),
    W: ("-", ""),
}
_PREFIX_TO_DIR = {"\\": NW, "/": SW, "-": W}
_SUFFIX_TO_DIR = {"/": NE, "-": E, "\\": SE}


def piece_name(pid: int) -> str:
    """Short name of a piece, e.g. ``wQ``, ``bA3`` or ``wM``.

    The order number is only written for types a player owns several of.
    """
    t = piece_type(pid)
    name = PLAYER_CHARS[piece_player(pid)] + BUG_TYPE_CHARS[t]
    if BUG_QUOTAS[t] > 1:
        name += str(piece_order(pid) + 1)
    return name


def parse_piece(text: str) -> int:
    """Inverse of :func:`piece_name`.

    Raises:
        ValueError: If ``text`` does not name a piece.
    """
    m = _PIECE_RE.match(text)
    if not m:
        raise ValueError(f"invalid piece name: {text!r}")
    player = PLAYER_CHARS.index(m.group(1))
    bug_type = CHAR_TO_BUG_TYPE[m.group(2)]
    number = m.group(3)
    if BUG_QUOTAS[bug_type] > 1:
        if not number:
            raise ValueError(f"piece name needs an order number: {text!r}")
        order = int(number) - 1
    else:
        if number:
            raise ValueError(f"piece name takes no order number: {text!r}")
        order = 0
    return piece_id(player, bug_type, order)


def format_move(board: "Board", move: Move) -> str:
    """Describe ``move`` relative to a piece already on ``board``.

    Examples: ``wG1`` (first move), ``bS1 /wG1`` (south-west of wG1),
    ``wB1 bQ`` (on top of bQ), ``pass``.
    """
    if move.is_pass:
        return "pass"
    name = piece_name(moving_piece(board, move))
    ref = reference(board, move)
    if ref is None:
        return name
    ref_pid, relation = ref
    ref_name = piece_name(ref_pid)
    if relation == ON_TOP:
        return f"{name} {ref_name}"
    prefix, suffix = _SYMBOLS[relation]
    return f"{name} {prefix}{ref_name}{suffix}"


def parse_move(board: "Board", text: str) -> Move:
    """Parse a move string in the context of ``board``.

    The result is well formed for ``board`` but not checked for legality.

    Raises:
        ValueError: If the text is malformed, names a piece out of turn
            order, or references a piece that is not on the board.
    """
    text = text.strip()
    if text == "pass":
        return PASS
    parts = text.split()
    if not parts or len(parts) > 2:
        raise ValueError(f"invalid move string: {text!r}")
    pid = parse_piece(parts[0])

    if len(parts) == 1:
        if board.pieces_placed() != 0:
            raise ValueError(f"move needs a reference piece: {text!r}")
        dest = START_CELL
    else:
        token = parts[1]
        relation = ON_TOP
        if token[0] in _PREFIX_TO_DIR:
            relation = _PREFIX_TO_DIR[token[0]]
            token = token[1:]
        elif token[-1] in _SUFFIX_TO_DIR:
            relation = _SUFFIX_TO_DIR[token[-1]]
            token = token[:-1]
        ref_pid = parse_piece(token)
        ref_cell = board.piece_cell[ref_pid]
        if ref_cell < 0:
            raise ValueError(f"reference piece {parts[1]!r} is not on the board")
        dest = ref_cell if relation == ON_TOP else NEIGHBOURS[ref_cell][relation]

    src = board.piece_cell[pid]
    if src >= 0:
        return Move.relocate(src, dest)
    if piece_player(pid) != board.to_play:
        raise ValueError(f"cannot place an opponent piece: {text!r}")
    bug_type = piece_type(pid)
    registry = board.registries[board.to_play]
    if not registry.has(bug_type) or registry.next_piece(bug_type) != pid:
        raise ValueError(f"piece {parts[0]!r} cannot be placed yet")
    return Move.place(bug_type, dest)
