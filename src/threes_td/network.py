"""
N-tuple network: an ordered set of weight tables summed into one value.

Weight file layout (little-endian):
    uint32  number of tables
    per table, in construction order:
        uint64  number of entries
        float32 * entries
"""

from pathlib import Path
from typing import List, Sequence, Union

import numpy as np

from .board import Board
from .errors import ConfigError, CorruptWeightFileError, WeightFileError
from .weights import BITS_PER_CELL, WeightTable, read_record, validate_pattern

COUNT_DTYPE = np.dtype("<u4")

# 2**30 float32 entries is 4 GiB across all tables
MAX_NETWORK_ENTRIES = 1 << 30

# Two straight and two corner 6-tuples
DEFAULT_PATTERNS = (
    (0, 1, 2, 3, 4, 5),
    (4, 5, 6, 7, 8, 9),
    (0, 1, 2, 4, 5, 6),
    (4, 5, 6, 8, 9, 10),
)


class Network:
    """Sum of weight tables, one per pattern."""

    def __init__(self, patterns: Sequence[Sequence[int]] = DEFAULT_PATTERNS):
        patterns = [validate_pattern(p) for p in patterns]
        if not patterns:
            raise ConfigError("network needs at least one pattern")
        if len(set(patterns)) != len(patterns):
            raise ConfigError(f"network patterns must be distinct: {patterns}")
        entries = sum(1 << (BITS_PER_CELL * len(p)) for p in patterns)
        if entries > MAX_NETWORK_ENTRIES:
            raise ConfigError(
                f"network needs {entries} weights in total; at most {MAX_NETWORK_ENTRIES} fit in memory"
            )
        self.tables: List[WeightTable] = [WeightTable(p) for p in patterns]

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self):
        return iter(self.tables)

    def __getitem__(self, i: int) -> WeightTable:
        return self.tables[i]

    @property
    def patterns(self):
        return [t.pattern for t in self.tables]

    def estimate_board(self, board: Board) -> float:
        """Value of ``board``: sum of every table's estimate."""
        return sum(t.estimate(board) for t in self.tables)

    def weight_update(self, board: Board, total_delta: float) -> float:
        """
        Spread ``total_delta`` evenly over the tables and update each.

        Every table adds its share to all 8 of its views, so the value of
        ``board`` moves by up to 8x ``total_delta``.

        Returns:
            updated value of ``board`` as reported by the tables
        """
        delta = total_delta / len(self.tables)
        return sum(t.update(board, delta) for t in self.tables)

    def save(self, path: Union[str, Path]):
        """Write all tables to ``path``."""
        try:
            with open(path, "wb") as f:
                f.write(np.array([len(self.tables)], dtype=COUNT_DTYPE).tobytes())
                for t in self.tables:
                    t.write(f)
        except OSError as e:
            raise WeightFileError(f"cannot write weights to {path}: {e}") from e

    def load(self, path: Union[str, Path]):
        """
        Replace all table values from ``path``.

        The file must match this network's table count and sizes; nothing
        is modified unless the whole file checks out.

        Raises:
            WeightFileError: file cannot be opened or read
            CorruptWeightFileError: layout does not match this network
        """
        try:
            with open(path, "rb") as f:
                header = f.read(COUNT_DTYPE.itemsize)
                if len(header) != COUNT_DTYPE.itemsize:
                    raise CorruptWeightFileError(f"{path}: missing table count header")
                count = int(np.frombuffer(header, dtype=COUNT_DTYPE)[0])
                if count != len(self.tables):
                    raise CorruptWeightFileError(
                        f"{path}: holds {count} tables, network has {len(self.tables)}"
                    )
                values = [read_record(f, expected=len(t)) for t in self.tables]
                if f.read(1):
                    raise CorruptWeightFileError(f"{path}: trailing bytes after last table")
        except CorruptWeightFileError:
            raise
        except OSError as e:
            raise WeightFileError(f"cannot read weights from {path}: {e}") from e

        for t, v in zip(self.tables, values):
            t.value = v
