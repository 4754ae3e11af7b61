from __future__ import annotations

from typing import Optional, Sequence, Tuple

from brickfall.cascade import analyze
from brickfall.dynamics import settle
from brickfall.metrics import CascadeReport
from brickfall.snapshot import Endpoints, to_bricks
from brickfall.state import SettledStack
from brickfall.support import SupportGraph, build_support_graph
from brickfall.utils import logging as runlog


class BrickfallRun:
    """One settle -> support graph -> cascade pass over a snapshot.

    Each phase reads only what the previous one produced: the occupancy index
    is frozen inside the settled stack before the graph is built, and the
    analyzer sees nothing but the graph.
    """

    def __init__(self, pairs: Sequence[Endpoints], workers: int = 1):
        self.bricks = to_bricks(pairs)
        self.workers = int(workers)

        self.stack: Optional[SettledStack] = None
        self.graph: Optional[SupportGraph] = None
        self.report: Optional[CascadeReport] = None

    def settle(self) -> SettledStack:
        self.stack = settle(self.bricks)
        _emit("settled", {
            "n_bricks": len(self.stack.bricks),
            "n_cells": len(self.stack.occupancy),
            "n_moved": sum(1 for n in self.stack.moved.values() if n > 0),
            "total_drop": int(sum(self.stack.moved.values())),
        })
        return self.stack

    def build_graph(self) -> SupportGraph:
        stack = self.stack if self.stack is not None else self.settle()
        self.graph = build_support_graph(stack)
        _emit("support_graph", {
            "n_edges": len(self.graph.edges()),
            "n_floor": sum(1 for i in self.graph.brick_ids() if self.graph.rests_on_floor(i)),
        })
        return self.graph

    def analyze(self) -> CascadeReport:
        graph = self.graph if self.graph is not None else self.build_graph()
        self.report = analyze(graph, workers=self.workers)
        _emit("cascade", {"workers": self.workers, **self.report.summary()})
        return self.report

    def run(self) -> CascadeReport:
        self.settle()
        self.build_graph()
        return self.analyze()


def _emit(event_type: str, payload: dict) -> None:
    if runlog.has_default_logger():
        runlog.log_event(event_type, payload)


def run(pairs: Sequence[Endpoints], workers: int = 1) -> Tuple[int, int]:
    """Safe-to-remove count and total cascade sum for ``pairs``."""
    return BrickfallRun(pairs, workers=workers).run().answers()
