from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Iterable, List, Sequence

from brickfall.geometry import Brick, BrickId, Coord
from brickfall.state import Occupancy, SettledStack

# The floor is the solid plane z = 0; the lowest legal resting layer is z = 1.
FLOOR_Z = 0


class OverlapError(ValueError):
    """Two bricks claim the same cell; only possible for pre-overlapping input."""


def settle_order(bricks: Iterable[Brick]) -> List[Brick]:
    # A brick can only rest on bricks that start no higher than itself, so
    # lower bricks go first. Ties go to input order.
    return sorted(bricks, key=lambda b: (b.min_z, b.id))


def can_drop(brick: Brick, occupancy: Occupancy) -> bool:
    if brick.min_z - 1 <= FLOOR_Z:
        return False
    lowered = brick.shifted_down_by(1)
    # Every other cell of the lowered brick is one it already occupies.
    return not any(cell in occupancy for cell in lowered.bottom_cells())


def drop_distance(brick: Brick, occupancy: Occupancy) -> int:
    """How many unit steps ``brick`` can fall against ``occupancy``."""
    n = 0
    trial = brick
    while can_drop(trial, occupancy):
        trial = trial.shifted_down_by(1)
        n += 1
    return n


def place(brick: Brick, occupancy: Dict[Coord, BrickId]) -> None:
    cells = list(brick.cells())
    for cell in cells:
        owner = occupancy.get(cell)
        if owner is not None and owner != brick.id:
            raise OverlapError(f"brick {brick.id} overlaps brick {owner} at {tuple(cell)}")
    for cell in cells:
        occupancy[cell] = brick.id


def settle(bricks: Sequence[Brick]) -> SettledStack:
    """Drop every brick until it rests on the floor or on a settled brick."""
    seen = set()
    for b in bricks:
        if b.id in seen:
            raise ValueError(f"duplicate brick id {b.id}")
        seen.add(b.id)

    occupancy: Dict[Coord, BrickId] = {}
    settled: List[Brick] = []
    moved: Dict[BrickId, int] = {}

    for brick in settle_order(bricks):
        n = drop_distance(brick, occupancy)
        final = brick.shifted_down_by(n) if n else brick
        place(final, occupancy)
        settled.append(final)
        moved[final.id] = n

    return SettledStack(bricks=settled, occupancy=MappingProxyType(occupancy), moved=moved)


def is_settled(bricks: Sequence[Brick]) -> bool:
    """True if no brick would move when the configuration is settled again."""
    stack = settle(bricks)
    return all(n == 0 for n in stack.moved.values())
