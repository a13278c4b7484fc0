"""
D4 symmetries of the 4x4 board (8 transforms).

Rotations: 0°, 90°, 180°, 270° (clockwise)
Reflections: left-right mirror followed by 0°, 90°, 180°, 270°

Symmetry 0 is the identity. Positions are numbered row-major, 0..15.
"""

from typing import List, Sequence

import numpy as np

SIZE = 4
NUM_CELLS = SIZE * SIZE
NUM_SYMMETRIES = 8


def _idx(r: int, c: int) -> int:
    """Convert (row, col) to flat index."""
    return r * SIZE + c


def _build_isomorphisms() -> np.ndarray:
    """Build the 8 forward position maps: table[k, p] is the image of p."""
    n = SIZE - 1
    table = np.zeros((NUM_SYMMETRIES, NUM_CELLS), dtype=np.int64)
    for k in range(NUM_SYMMETRIES):
        for r in range(SIZE):
            for c in range(SIZE):
                if k == 0:   rt, ct = r, c                # identity
                elif k == 1: rt, ct = c, n - r            # rotate 90
                elif k == 2: rt, ct = n - r, n - c        # rotate 180
                elif k == 3: rt, ct = n - c, r            # rotate 270
                elif k == 4: rt, ct = r, n - c            # mirror
                elif k == 5: rt, ct = n - c, n - r        # mirror, rotate 90
                elif k == 6: rt, ct = n - r, c            # mirror, rotate 180
                else:        rt, ct = c, r                # mirror, rotate 270
                table[k, _idx(r, c)] = _idx(rt, ct)
    table.setflags(write=False)
    return table


# Pre-computed position maps, shape (8, 16)
ISOMORPHISMS = _build_isomorphisms()


def _check_position(position: int) -> int:
    position = int(position)
    if not 0 <= position < NUM_CELLS:
        raise ValueError(f"board position must be in [0, {NUM_CELLS - 1}], got {position}")
    return position


def images(position: int) -> List[int]:
    """
    Return the 8 symmetric images of a board position.

    Args:
        position: flat board position (0-15)

    Returns:
        [8] list of positions, identity first
    """
    position = _check_position(position)
    return [int(p) for p in ISOMORPHISMS[:, position]]


def isomorphic_patterns(pattern: Sequence[int]) -> np.ndarray:
    """
    Map every position of a pattern through each symmetry.

    Returns:
        [8, L] array; row k is the pattern seen through symmetry k
    """
    positions = [_check_position(p) for p in pattern]
    return ISOMORPHISMS[:, positions].copy()


def compose(a: int, b: int) -> int:
    """Return the symmetry equal to applying ``b`` and then ``a``."""
    combined = ISOMORPHISMS[a][ISOMORPHISMS[b]]
    for k in range(NUM_SYMMETRIES):
        if np.array_equal(ISOMORPHISMS[k], combined):
            return k
    raise ValueError(f"symmetries {a} and {b} do not compose to a listed symmetry")


def apply_symmetry_tiles(tiles: Sequence[int], sym_id: int) -> np.ndarray:
    """
    Transform a flat board of 16 tiles.

    The tile at position p moves to ``ISOMORPHISMS[sym_id, p]``.
    """
    tiles = np.asarray(tiles)
    out = np.empty_like(tiles)
    out[ISOMORPHISMS[sym_id]] = tiles
    return out
