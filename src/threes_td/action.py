"""
Actions exchanged between agents and the board.

An action is a slide (player move) or a placement (environment move). The
null action means the agent has nothing to play and ends the episode.
"""

from dataclasses import dataclass
from typing import Optional

from .board import ILLEGAL_MOVE, OPCODES, Board


@dataclass(frozen=True)
class Action:
    """Immutable action value."""
    kind: Optional[str] = None  # "slide", "place" or None
    op: int = -1
    position: int = -1
    tile: int = 0
    hint: int = 0

    @classmethod
    def slide(cls, op: int) -> "Action":
        if op not in OPCODES:
            raise ValueError(f"slide op must be one of {OPCODES}, got {op}")
        return cls(kind="slide", op=op)

    @classmethod
    def place(cls, position: int, tile: int, hint: int = 0) -> "Action":
        return cls(kind="place", position=position, tile=tile, hint=hint)

    def __bool__(self) -> bool:
        return self.kind is not None

    def apply(self, board: Board) -> int:
        """Apply to ``board`` in place and return the reward (ILLEGAL_MOVE if refused)."""
        if self.kind == "slide":
            return board.slide(self.op)
        if self.kind == "place":
            return board.place(self.position, self.tile, self.hint)
        return ILLEGAL_MOVE

    def __str__(self) -> str:
        if self.kind == "slide":
            return f"#{'URDL'[self.op]}"
        if self.kind == "place":
            return f"{self.position:X}{self.tile}"
        return "??"
