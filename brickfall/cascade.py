from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Dict, FrozenSet, List, Sequence

from brickfall.geometry import BrickId
from brickfall.metrics import CascadeReport
from brickfall.support import SupportGraph


def falling_set(graph: SupportGraph, brick_id: BrickId) -> FrozenSet[BrickId]:
    """Bricks that fall once ``brick_id`` is disintegrated, including itself.

    A brick falls when everything it rests on is falling. Candidates come off
    a worklist seeded with the bricks resting on ``brick_id``; a candidate
    that still has a standing support is only looked at again when another
    of its supports starts falling and pushes it back.
    """
    falling = {brick_id}
    work = list(graph.dependents(brick_id))

    while work:
        cand = work.pop()
        if cand in falling:
            continue
        if graph.supports(cand) <= falling:
            falling.add(cand)
            work.extend(graph.dependents(cand))

    return frozenset(falling)


def cascade_size(graph: SupportGraph, brick_id: BrickId) -> int:
    return len(falling_set(graph, brick_id)) - 1


def _cascade_chunk(graph: SupportGraph, ids: Sequence[BrickId]) -> Dict[BrickId, int]:
    return {i: cascade_size(graph, i) for i in ids}


def _shards(ids: List[BrickId], n: int) -> List[List[BrickId]]:
    size = -(-len(ids) // n)
    return [ids[i:i + size] for i in range(0, len(ids), size)]


def analyze(graph: SupportGraph, workers: int = 1) -> CascadeReport:
    """Cascade size of every brick plus the two aggregates.

    Queries only read the graph, so with ``workers > 1`` the id space is split
    into contiguous shards run on a thread pool and merged afterwards.
    """
    workers = int(workers)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")

    ids = graph.brick_ids()
    if workers == 1 or len(ids) <= 1:
        sizes = _cascade_chunk(graph, ids)
    else:
        sizes = {}
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(_cascade_chunk, graph, shard) for shard in _shards(ids, workers)]
            for fut in futures:
                sizes.update(fut.result())

    return CascadeReport(
        safe_count=sum(1 for n in sizes.values() if n == 0),
        total_cascade=sum(sizes.values()),
        cascade_sizes=dict(sorted(sizes.items())),
    )


def safe_bricks(graph: SupportGraph) -> List[BrickId]:
    """Ids that can be disintegrated without anything else falling."""
    return [i for i in graph.brick_ids() if cascade_size(graph, i) == 0]
