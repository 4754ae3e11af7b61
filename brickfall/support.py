from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Set, Tuple

from brickfall.dynamics import FLOOR_Z
from brickfall.geometry import BrickId
from brickfall.state import SettledStack


class UnknownBrickError(KeyError):
    """Lookup of a brick id the graph was not built from."""


@dataclass(frozen=True)
class SupportGraph:
    """Rests-on / rests-under relation between settled bricks.

    ``below[b]`` is what ``b`` rests on, ``above[a]`` is what rests on ``a``.
    Every settled brick has an entry in both mappings, possibly empty, and
    the two are inverses of each other.
    """

    below: Dict[BrickId, FrozenSet[BrickId]]
    above: Dict[BrickId, FrozenSet[BrickId]]

    def supports(self, brick_id: BrickId) -> FrozenSet[BrickId]:
        try:
            return self.below[brick_id]
        except KeyError:
            raise UnknownBrickError(brick_id) from None

    def dependents(self, brick_id: BrickId) -> FrozenSet[BrickId]:
        try:
            return self.above[brick_id]
        except KeyError:
            raise UnknownBrickError(brick_id) from None

    def rests_on_floor(self, brick_id: BrickId) -> bool:
        return not self.supports(brick_id)

    def brick_ids(self) -> List[BrickId]:
        return sorted(self.below)

    def edges(self) -> List[Tuple[BrickId, BrickId]]:
        """All ``(support, dependent)`` pairs, sorted."""
        return sorted((s, d) for d, ss in self.below.items() for s in ss)

    def check_consistency(self) -> None:
        if set(self.below) != set(self.above):
            raise ValueError("below/above are keyed by different brick sets")
        down = {(s, d) for d, ss in self.below.items() for s in ss}
        up = {(s, d) for s, ds in self.above.items() for d in ds}
        if down != up:
            raise ValueError(f"below/above disagree on {sorted(down ^ up)}")


def build_support_graph(stack: SettledStack) -> SupportGraph:
    below: Dict[BrickId, Set[BrickId]] = {b.id: set() for b in stack.bricks}
    above: Dict[BrickId, Set[BrickId]] = {b.id: set() for b in stack.bricks}

    for brick in stack.bricks:
        if brick.min_z <= FLOOR_Z:
            continue
        for cell in brick.shifted_down_by(1).bottom_cells():
            owner = stack.occupancy.get(cell)
            if owner is None:
                continue
            below[brick.id].add(owner)
            above[owner].add(brick.id)

    return SupportGraph(
        below={k: frozenset(v) for k, v in below.items()},
        above={k: frozenset(v) for k, v in above.items()},
    )
