from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .bugs import BUG_TYPE_CHARS
from .hexgrid import cell_to_str


@dataclass(frozen=True)
class Move:
    """Engine-internal move representation.

    Exactly one of three shapes:

    - pass: every field is ``None``;
    - placement: ``bug_type`` and ``to_cell`` are set; the mover's next
      unused piece of that type is placed;
    - relocation: ``from_cell`` and ``to_cell`` are set; the top piece of
      ``from_cell`` moves.

    Attributes:
        to_cell (Optional[int]): Destination cell index.
        from_cell (Optional[int]): Source cell index for relocations.
        bug_type (Optional[int]): Bug type for placements.
    """

    to_cell: Optional[int] = None
    from_cell: Optional[int] = None
    bug_type: Optional[int] = None

    @classmethod
    def place(cls, bug_type: int, to_cell: int) -> "Move":
        return cls(to_cell=to_cell, bug_type=bug_type)

    @classmethod
    def relocate(cls, from_cell: int, to_cell: int) -> "Move":
        return cls(to_cell=to_cell, from_cell=from_cell)

    @property
    def is_pass(self) -> bool:
        return self.to_cell is None

    @property
    def is_placement(self) -> bool:
        return self.bug_type is not None

    @property
    def is_relocation(self) -> bool:
        return self.from_cell is not None

    def __str__(self) -> str:
        if self.is_pass:
            return "pass"
        assert self.to_cell is not None
        if self.bug_type is not None:
            return f"place {BUG_TYPE_CHARS[self.bug_type]} {cell_to_str(self.to_cell)}"
        assert self.from_cell is not None
        return f"move {cell_to_str(self.from_cell)} {cell_to_str(self.to_cell)}"


PASS = Move()
