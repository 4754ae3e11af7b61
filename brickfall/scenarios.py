from __future__ import annotations

from typing import List

import numpy as np

from brickfall.geometry import Coord
from brickfall.snapshot import Endpoints

AXIS_X, AXIS_Y, AXIS_Z = 0, 1, 2


def sample_snapshot(
    rng: np.random.Generator,
    n_bricks: int,
    grid: int = 4,
    max_len: int = 3,
    max_gap: int = 3,
    shuffle: bool = True,
) -> List[Endpoints]:
    """Random well-formed snapshot: straight bricks, no initial overlap.

    Each brick starts above everything generated before it, so overlap is
    impossible; shuffling then decouples input order from height order.
    """
    pairs: List[Endpoints] = []
    top = 0
    for _ in range(int(n_bricks)):
        axis = int(rng.integers(0, 3))
        length = int(rng.integers(1, max_len + 1))
        x = int(rng.integers(0, grid))
        y = int(rng.integers(0, grid))
        z = top + 1 + int(rng.integers(0, max_gap + 1))

        hi = [x, y, z]
        if axis == AXIS_X:
            hi[0] = min(grid - 1, x + length - 1)
        elif axis == AXIS_Y:
            hi[1] = min(grid - 1, y + length - 1)
        else:
            hi[2] = z + length - 1

        pairs.append((Coord(x, y, z), Coord(*hi)))
        top = hi[2]

    if shuffle:
        order = rng.permutation(len(pairs))
        pairs = [pairs[int(i)] for i in order]
    return pairs


def format_snapshot(pairs: List[Endpoints]) -> str:
    return "\n".join(
        f"{a.x},{a.y},{a.z}~{b.x},{b.y},{b.z}" for a, b in pairs
    ) + "\n"
