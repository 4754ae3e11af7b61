from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Mapping

from brickfall.geometry import Brick, BrickId, Coord

# Cell -> id of the settled brick that owns it.
Occupancy = Mapping[Coord, BrickId]


@dataclass(frozen=True)
class SettledStack:
    """Result of one settling pass.

    Keep this dataclass logic-free; transitions belong in brickfall/dynamics.py.
    """

    bricks: List[Brick]              # in settle order, i.e. sorted by (initial min_z, id)
    occupancy: Occupancy             # read-only view, frozen once every brick has settled
    moved: Dict[BrickId, int] = field(default_factory=dict)   # units each brick fell

    def by_id(self) -> Dict[BrickId, Brick]:
        return {b.id: b for b in self.bricks}
