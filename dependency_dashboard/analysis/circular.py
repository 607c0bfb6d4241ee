"""Circular dependency detection over the outgoing edges of a DependencyGraph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from dependency_dashboard.analysis.graph_models import Cycle, DependencyGraph
from dependency_dashboard.models import Direction, Severity

logger = logging.getLogger(__name__)

_WHITE, _GRAY, _BLACK = 0, 1, 2


def cycle_severity(size: int) -> Severity:
    """Classify a cycle by its number of distinct modules."""
    if size == 2:
        return Severity.CRITICAL  # direct A -> B -> A
    if size <= 4:
        return Severity.WARNING
    return Severity.INFO


@dataclass
class CircularDependencyReport:
    cycles: list[Cycle] = field(default_factory=list)

    def count(self, severity: Severity) -> int:
        return sum(1 for c in self.cycles if c.severity == severity.value)

    @property
    def total(self) -> int:
        return len(self.cycles)

    def to_dict(self) -> dict:
        return {
            "totalCircularDependencies": self.total,
            "critical": self.count(Severity.CRITICAL),
            "warnings": self.count(Severity.WARNING),
            "info": self.count(Severity.INFO),
            "circularDependencies": [c.to_dict() for c in self.cycles],
        }


class CircularDependencyDetector:
    """Depth-first cycle search with white/gray/black coloring.

    Works on its own dense copy of the graph: module ids are mapped to
    integers and the walk uses an explicit stack, so deep graphs do not hit
    the recursion limit.  Each back edge to a module on the current path
    yields one cycle; the same simple cycle may be reported more than once
    when it is entered from different modules.
    """

    def __init__(self, graph: DependencyGraph, log: logging.Logger | None = None):
        self.log = log or logger
        self.ids: list[str] = list(graph.nodes)
        self._index = {mid: i for i, mid in enumerate(self.ids)}
        adjacency = graph.adjacency(Direction.OUTGOING)
        self._adj: list[list[int]] = [
            [self._index[t] for t in adjacency[mid] if t in self._index] for mid in self.ids
        ]
        self.cycles: list[Cycle] = []

    def detect(self) -> list[Cycle]:
        self.cycles = []
        color = [_WHITE] * len(self.ids)
        position = [0] * len(self.ids)

        for root in range(len(self.ids)):
            if color[root] != _WHITE:
                continue
            path = [root]
            position[root] = 0
            color[root] = _GRAY
            stack = [(root, iter(self._adj[root]))]

            while stack:
                node, neighbors = stack[-1]
                nxt = next(neighbors, None)
                if nxt is None:
                    stack.pop()
                    path.pop()
                    color[node] = _BLACK
                    continue
                if color[nxt] == _GRAY:
                    self._emit(path[position[nxt]:] + [nxt])
                elif color[nxt] == _WHITE:
                    color[nxt] = _GRAY
                    position[nxt] = len(path)
                    path.append(nxt)
                    stack.append((nxt, iter(self._adj[nxt])))

        self.log.debug("Found %d circular dependencies", len(self.cycles))
        return self.cycles

    def report(self) -> CircularDependencyReport:
        return CircularDependencyReport(cycles=list(self.cycles))

    def _emit(self, walk: list[int]) -> None:
        modules = [self.ids[i] for i in walk]
        severity = cycle_severity(len(modules) - 1)
        self.cycles.append(Cycle(
            modules=modules,
            severity=severity.value,
            description=f"Circular dependency detected: {' → '.join(modules)}",
        ))


def detect_cycles(graph: DependencyGraph) -> CircularDependencyReport:
    detector = CircularDependencyDetector(graph)
    detector.detect()
    return detector.report()
