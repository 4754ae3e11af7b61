from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from brickfall.geometry import Brick, Coord

Endpoints = Tuple[Coord, Coord]


class MalformedBrickError(ValueError):
    def __init__(self, line_no: int, text: str, reason: str):
        super().__init__(f"line {line_no}: {reason}: {text!r}")
        self.line_no = line_no
        self.text = text
        self.reason = reason


def parse_coord(token: str, line_no: int, line: str) -> Coord:
    parts = [p.strip() for p in token.split(",")]
    if len(parts) != 3:
        raise MalformedBrickError(line_no, line, f"expected 3 coordinates, got {len(parts)}")
    try:
        x, y, z = (int(p) for p in parts)
    except ValueError:
        raise MalformedBrickError(line_no, line, "non-integer coordinate") from None
    if min(x, y, z) < 0:
        raise MalformedBrickError(line_no, line, "negative coordinate")
    return Coord(x, y, z)


def parse_line(line: str, line_no: int = 1) -> Endpoints:
    ends = line.strip().split("~")
    if len(ends) != 2:
        raise MalformedBrickError(line_no, line, f"expected 2 endpoints, got {len(ends)}")
    return parse_coord(ends[0], line_no, line), parse_coord(ends[1], line_no, line)


def parse_snapshot(text: str) -> List[Endpoints]:
    """Parse ``x1,y1,z1~x2,y2,z2`` lines; blank lines are skipped."""
    out: List[Endpoints] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        out.append(parse_line(line, line_no))
    return out


def load_snapshot(path: str | Path) -> List[Endpoints]:
    return parse_snapshot(Path(path).read_text(encoding="utf-8"))


def to_bricks(pairs: Sequence[Endpoints] | Iterable[Endpoints]) -> List[Brick]:
    """Assign ids by position in ``pairs``."""
    return [Brick.from_endpoints(i, a, b) for i, (a, b) in enumerate(pairs)]
