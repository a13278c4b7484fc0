"""
N-tuple lookup table.

A WeightTable holds one dense float32 array indexed by the cell values of a
fixed pattern of board positions. The pattern is read through all 8 board
symmetries; every view indexes the same array, so a value learned on one
orientation of a feature is shared by the other seven.

Index layout: the cell at pattern element i fills bits [4*i, 4*i + 4), so
the first element is the least significant nibble.
"""

from typing import BinaryIO, Sequence, Tuple

import numpy as np

from .board import Board
from .errors import ConfigError, CorruptWeightFileError
from .symmetries import NUM_CELLS, isomorphic_patterns

# 16**7 float32 entries is 1 GiB per table
MAX_PATTERN_LENGTH = 7

BITS_PER_CELL = 4

VALUE_DTYPE = np.dtype("<f4")
SIZE_DTYPE = np.dtype("<u8")


def validate_pattern(pattern: Sequence[int]) -> Tuple[int, ...]:
    """Check a pattern and return it as a tuple of ints."""
    try:
        positions = tuple(int(p) for p in pattern)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"pattern must be a sequence of integers: {pattern!r}") from e
    if not positions:
        raise ConfigError("pattern must contain at least one position")
    if len(positions) > MAX_PATTERN_LENGTH:
        raise ConfigError(
            f"pattern {positions} has {len(positions)} positions; "
            f"at most {MAX_PATTERN_LENGTH} fit in memory (16^L entries)"
        )
    if len(set(positions)) != len(positions):
        raise ConfigError(f"pattern {positions} repeats a position")
    for p in positions:
        if not 0 <= p < NUM_CELLS:
            raise ConfigError(f"pattern {positions} has position {p} outside [0, {NUM_CELLS - 1}]")
    return positions


class WeightTable:
    """
    Lookup table for one n-tuple pattern, shared by its 8 isomorphic views.
    """

    def __init__(self, pattern: Sequence[int]):
        self.pattern = validate_pattern(pattern)
        self.value = np.zeros(1 << (BITS_PER_CELL * len(self.pattern)), dtype=VALUE_DTYPE)
        # [8, L] board positions feeding each view's index
        self.isomorphisms = isomorphic_patterns(self.pattern)
        self._shifts = np.arange(len(self.pattern), dtype=np.int64) * BITS_PER_CELL

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, i: int) -> float:
        return float(self.value[i])

    def __setitem__(self, i: int, v: float):
        self.value[i] = v

    def __repr__(self) -> str:
        return f"WeightTable(pattern={list(self.pattern)}, size={len(self)})"

    def indices(self, board: Board) -> np.ndarray:
        """
        Composite index of each isomorphic view.

        Returns:
            [8] int64 array
        """
        cells = board.tiles()[self.isomorphisms].astype(np.int64)
        return (cells << self._shifts).sum(axis=1)

    def estimate(self, board: Board) -> float:
        """Sum of the 8 view values for ``board``."""
        return float(self.value[self.indices(board)].sum())

    def update(self, board: Board, delta: float) -> float:
        """
        Add ``delta`` to the slot of every view and return the new view sum.

        Views are processed in order, each slot read back right after its own
        increment. When views alias the same slot it is bumped once per view.
        """
        total = 0.0
        for i in self.indices(board):
            self.value[i] += delta
            total += float(self.value[i])
        return total

    def write(self, stream: BinaryIO):
        """Write the record: uint64 entry count, then the float32 values."""
        stream.write(np.array([len(self.value)], dtype=SIZE_DTYPE).tobytes())
        stream.write(self.value.astype(VALUE_DTYPE, copy=False).tobytes())

    def read(self, stream: BinaryIO):
        """
        Replace the values from a record written by ``write``.

        Raises:
            CorruptWeightFileError: wrong entry count or truncated data
        """
        self.value = read_record(stream, expected=len(self.value))


def read_record(stream: BinaryIO, expected: int) -> np.ndarray:
    """Read one table record and check it holds ``expected`` entries."""
    header = stream.read(SIZE_DTYPE.itemsize)
    if len(header) != SIZE_DTYPE.itemsize:
        raise CorruptWeightFileError("truncated table header")
    size = int(np.frombuffer(header, dtype=SIZE_DTYPE)[0])
    if size != expected:
        raise CorruptWeightFileError(f"table record declares {size} entries, expected {expected}")
    nbytes = size * VALUE_DTYPE.itemsize
    data = stream.read(nbytes)
    if len(data) != nbytes:
        raise CorruptWeightFileError(
            f"table record truncated: {len(data)} of {nbytes} bytes present"
        )
    return np.frombuffer(data, dtype=VALUE_DTYPE).copy()
