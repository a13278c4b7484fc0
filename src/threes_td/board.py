"""
Board base class.

Board representation: 16 cells, row-major, each holding a small integer
code in [0, 15] (0 = empty). Game rules live in subclasses, which implement
``slide``; this class owns cell storage and guards the 4-bit range every
lookup index relies on.
"""

import abc
import copy
from typing import Iterable, Optional

import numpy as np

from .errors import InvalidCellError
from .symmetries import NUM_CELLS

# Slide operations, in the order the decision policy tries them
OPCODES = (0, 1, 2, 3)

# Reward returned by an illegal slide
ILLEGAL_MOVE = -1

MAX_CELL = 15


def _integral(raw: np.ndarray) -> bool:
    if raw.dtype.kind in "iu":
        return True
    if raw.dtype.kind != "f":
        return False
    return bool(np.all(np.isfinite(raw) & (raw == np.floor(raw))))


def check_position(position: int) -> int:
    """Validate a board position and return it as an int."""
    if isinstance(position, (bool, np.bool_)) or not isinstance(position, (int, np.integer)):
        raise InvalidCellError(f"board position must be an integer, got {position!r}")
    if not 0 <= position < NUM_CELLS:
        raise InvalidCellError(f"board position must be in [0, {NUM_CELLS - 1}], got {position}")
    return int(position)


def check_cell_value(value: int) -> int:
    """Validate one cell value and return it as an int."""
    raw = np.asarray(value)
    if raw.shape != () or not _integral(raw):
        raise InvalidCellError(f"cell value must be an integer, got {value!r}")
    v = int(raw)
    if not 0 <= v <= MAX_CELL:
        raise InvalidCellError(f"cell value {v} outside [0, {MAX_CELL}]")
    return v


def check_cells(values: Iterable[int]) -> np.ndarray:
    """Validate cell values and return them as a uint8 array of 16 cells."""
    raw = np.asarray(list(values))
    if raw.shape != (NUM_CELLS,):
        raise InvalidCellError(f"board needs {NUM_CELLS} cells, got shape {raw.shape}")
    if not _integral(raw):
        raise InvalidCellError(f"cell values must be integers, got {raw.tolist()}")
    arr = raw.astype(np.int64)
    bad = (arr < 0) | (arr > MAX_CELL)
    if bad.any():
        pos = int(np.flatnonzero(bad)[0])
        raise InvalidCellError(f"cell {pos} holds {int(arr[pos])}, outside [0, {MAX_CELL}]")
    return arr.astype(np.uint8)


class Board(abc.ABC):
    """
    4x4 board with validated cell access.

    Subclasses provide the game rules through ``slide``.
    """

    def __init__(self, tiles: Optional[Iterable[int]] = None):
        if tiles is None:
            self._tiles = np.zeros(NUM_CELLS, dtype=np.uint8)
        else:
            self._tiles = check_cells(tiles)

    def cell(self, position: int) -> int:
        return int(self._tiles[check_position(position)])

    def __call__(self, position: int) -> int:
        return self.cell(position)

    def __getitem__(self, position: int) -> int:
        return self.cell(position)

    def __setitem__(self, position: int, value: int):
        self._tiles[check_position(position)] = check_cell_value(value)

    def tiles(self) -> np.ndarray:
        """Read-only view of the 16 cell values."""
        view = self._tiles.view()
        view.setflags(write=False)
        return view

    def copy(self) -> "Board":
        """Independent copy; the cells are not shared."""
        dup = copy.copy(self)
        dup._tiles = self._tiles.copy()
        return dup

    def max_tile(self) -> int:
        return int(self._tiles.max())

    def empty_cells(self):
        """Positions holding 0."""
        return [int(p) for p in np.flatnonzero(self._tiles == 0)]

    @abc.abstractmethod
    def slide(self, op: int) -> int:
        """
        Apply slide ``op`` in place.

        Returns:
            reward of the move, or ILLEGAL_MOVE (board left unchanged)
        """

    def place(self, position: int, tile: int, hint: int = 0) -> int:
        """
        Put ``tile`` on an empty cell.

        ``hint`` is the next-tile hint of Threes!-style games; the base board
        ignores it. Returns 0, or ILLEGAL_MOVE if the cell is occupied.
        """
        if self._tiles[check_position(position)] != 0:
            return ILLEGAL_MOVE
        self[position] = tile
        return 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self._tiles, other._tiles))

    __hash__ = None

    def __repr__(self) -> str:
        rows = self._tiles.reshape(4, 4)
        body = " / ".join(" ".join(f"{int(v):2d}" for v in row) for row in rows)
        return f"{type(self).__name__}({body})"
