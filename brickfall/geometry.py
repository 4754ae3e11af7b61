from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterator, NamedTuple, Tuple

BrickId = int


class Coord(NamedTuple):
    x: int
    y: int
    z: int


@dataclass(frozen=True)
class Brick:
    """Axis-aligned cuboid of unit cells between ``lo`` and ``hi`` (inclusive).

    ``id`` is the input order of the brick and is the only key other
    components use to refer to it.
    """

    id: BrickId
    lo: Coord
    hi: Coord

    def __post_init__(self) -> None:
        if min(self.lo) < 0:
            raise ValueError(f"brick {self.id} has a negative coordinate: {tuple(self.lo)}")
        if any(a > b for a, b in zip(self.lo, self.hi)):
            raise ValueError(f"brick {self.id} has lo > hi: {tuple(self.lo)} ~ {tuple(self.hi)}")

    @classmethod
    def from_endpoints(cls, brick_id: BrickId, a: Tuple[int, int, int], b: Tuple[int, int, int]) -> "Brick":
        lo = Coord(*(min(p, q) for p, q in zip(a, b)))
        hi = Coord(*(max(p, q) for p, q in zip(a, b)))
        return cls(id=int(brick_id), lo=lo, hi=hi)

    @property
    def min_z(self) -> int:
        return self.lo.z

    @property
    def max_z(self) -> int:
        return self.hi.z

    def cells(self) -> Iterator[Coord]:
        for x in range(self.lo.x, self.hi.x + 1):
            for y in range(self.lo.y, self.hi.y + 1):
                for z in range(self.lo.z, self.hi.z + 1):
                    yield Coord(x, y, z)

    def bottom_cells(self) -> Iterator[Coord]:
        """Cells of the lowest z layer; the only ones a one-step drop can collide with."""
        z = self.lo.z
        for x in range(self.lo.x, self.hi.x + 1):
            for y in range(self.lo.y, self.hi.y + 1):
                yield Coord(x, y, z)

    def shifted_down_by(self, n: int) -> "Brick":
        """Copy of this brick moved ``n`` units towards the floor.

        Used to test a trial position before a move is committed. The
        lattice has no negative z, so shifting past z=0 is an error.
        """
        if n > self.lo.z:
            raise ValueError(f"cannot shift brick {self.id} down by {n} from z={self.lo.z}")
        return replace(
            self,
            lo=self.lo._replace(z=self.lo.z - n),
            hi=self.hi._replace(z=self.hi.z - n),
        )
