"""Dependency depth analysis: longest walks, chains, statistics and recommendations."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from dependency_dashboard.analysis.graph_models import DependencyGraph, DepthRecord
from dependency_dashboard.models import Direction, Severity

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHAIN_LENGTH = 10
DEEP_THRESHOLD = 5
CRITICAL_DEPTH = 8


def depth_severity(depth: int, deep_threshold: int = DEEP_THRESHOLD) -> Severity:
    if depth > max(CRITICAL_DEPTH, deep_threshold):
        return Severity.CRITICAL
    if depth > deep_threshold:
        return Severity.WARNING
    return Severity.INFO


def depth_recommendation(depth: int, deep_threshold: int = DEEP_THRESHOLD) -> str:
    if depth > max(CRITICAL_DEPTH, deep_threshold):
        return "Consider breaking down this module or refactoring the dependency structure"
    if depth > deep_threshold:
        return "Review the dependency chain and consider simplification"
    return "Dependency depth is within acceptable range"


@dataclass
class DepthStatistics:
    total_files: int = 0
    average_outgoing_depth: float = 0
    average_incoming_depth: float = 0
    max_outgoing_depth: int = 0
    max_incoming_depth: int = 0
    deep_dependencies: list[tuple[str, DepthRecord]] = field(default_factory=list)
    depth_distribution: dict[str, dict[str, int]] = field(default_factory=dict)
    all_depths: dict[str, DepthRecord] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "averageOutgoingDepth": self.average_outgoing_depth,
            "averageIncomingDepth": self.average_incoming_depth,
            "maxOutgoingDepth": self.max_outgoing_depth,
            "maxIncomingDepth": self.max_incoming_depth,
            "deepDependencies": [
                {"file": mid, **record.to_dict()} for mid, record in self.deep_dependencies
            ],
            "depthDistribution": self.depth_distribution,
            "allDepths": {mid: record.to_dict() for mid, record in self.all_depths.items()},
        }


@dataclass
class DepthAnalysisReport:
    statistics: DepthStatistics
    warnings: list[dict] = field(default_factory=list)
    recommendations: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "statistics": self.statistics.to_dict(),
            "deepDependencyWarnings": list(self.warnings),
            "recommendations": list(self.recommendations),
        }


class DependencyDepthAnalyzer:
    """Longest node-distinct walk per module and direction.

    Results are memoized by ``(module, direction)``.  A module already on the
    current walk contributes depth 0 to that branch, which keeps cyclic
    graphs finite.  The walk is iterative over a dense index with an on-path
    bitmap instead of per-call visited sets.
    """

    def __init__(
        self,
        graph: DependencyGraph,
        deep_threshold: int = DEEP_THRESHOLD,
        log: logging.Logger | None = None,
    ):
        self.log = log or logger
        self.deep_threshold = deep_threshold
        self.ids: list[str] = list(graph.nodes)
        self._index = {mid: i for i, mid in enumerate(self.ids)}
        self._adj: dict[Direction, list[list[int]]] = {}
        for direction in Direction:
            adjacency = graph.adjacency(direction)
            self._adj[direction] = [
                [self._index[n] for n in adjacency[mid] if n in self._index] for mid in self.ids
            ]
        self._memo: dict[Direction, list[int | None]] = {}
        self._on_path = [False] * len(self.ids)
        self.clear_cache()

    def clear_cache(self) -> None:
        self._memo = {direction: [None] * len(self.ids) for direction in Direction}

    def calculate_max_depth(self, module_id: str, direction: Direction = Direction.OUTGOING) -> int:
        start = self._index.get(module_id)
        if start is None:
            return 0
        return self._depth(start, direction)

    def _depth(self, start: int, direction: Direction) -> int:
        memo = self._memo[direction]
        if memo[start] is not None:
            return memo[start]

        adj = self._adj[direction]
        on_path = self._on_path
        on_path[start] = True
        # frame: [node, neighbor iterator, best depth so far]
        stack = [[start, iter(adj[start]), 0]]

        while stack:
            frame = stack[-1]
            nxt = next(frame[1], None)
            if nxt is None:
                stack.pop()
                node, _, best = frame
                on_path[node] = False
                memo[node] = best
                if stack:
                    stack[-1][2] = max(stack[-1][2], best + 1)
                continue
            if memo[nxt] is not None:
                frame[2] = max(frame[2], memo[nxt] + 1)
            elif on_path[nxt]:
                frame[2] = max(frame[2], 1)
            else:
                on_path[nxt] = True
                stack.append([nxt, iter(adj[nxt]), 0])

        return memo[start]

    def calculate_all_depths(self) -> dict[str, DepthRecord]:
        return {
            mid: DepthRecord(
                outgoing_depth=self._depth(i, Direction.OUTGOING),
                incoming_depth=self._depth(i, Direction.INCOMING),
            )
            for i, mid in enumerate(self.ids)
        }

    def find_dependency_chains(
        self,
        module_id: str,
        direction: Direction = Direction.OUTGOING,
        max_length: int = DEFAULT_MAX_CHAIN_LENGTH,
    ) -> list[list[str]]:
        """Enumerate simple walks from ``module_id``, longest first.

        A walk ends when it has no unvisited neighbor left or reaches
        ``max_length`` modules.  Single-module walks are not reported.
        """
        start = self._index.get(module_id)
        if start is None or max_length < 1:
            return []

        adj = self._adj[direction]
        chains: list[list[int]] = []

        def walk(chain: list[int], visited: set[int]) -> None:
            nexts = [n for n in adj[chain[-1]] if n not in visited]
            if len(chain) >= max_length or not nexts:
                if len(chain) > 1:
                    chains.append(chain)
                return
            for n in nexts:
                walk(chain + [n], visited | {n})

        walk([start], {start})
        chains.sort(key=len, reverse=True)
        return [[self.ids[i] for i in chain] for chain in chains]

    def calculate_depth_statistics(self) -> DepthStatistics:
        all_depths = self.calculate_all_depths()
        if not all_depths:
            return DepthStatistics()

        total = len(all_depths)
        outgoing = [r.outgoing_depth for r in all_depths.values()]
        incoming = [r.incoming_depth for r in all_depths.values()]

        deep = [
            (mid, record) for mid, record in all_depths.items()
            if record.max_depth > self.deep_threshold
        ]
        deep.sort(key=lambda pair: pair[1].max_depth, reverse=True)

        return DepthStatistics(
            total_files=total,
            average_outgoing_depth=round(sum(outgoing) / total, 2),
            average_incoming_depth=round(sum(incoming) / total, 2),
            max_outgoing_depth=max(outgoing),
            max_incoming_depth=max(incoming),
            deep_dependencies=deep,
            depth_distribution=self.calculate_depth_distribution(all_depths),
            all_depths=all_depths,
        )

    @staticmethod
    def calculate_depth_distribution(all_depths: dict[str, DepthRecord]) -> dict[str, dict[str, int]]:
        out_counts: Counter = Counter()
        in_counts: Counter = Counter()
        combined: Counter = Counter()
        for record in all_depths.values():
            out_counts[str(record.outgoing_depth)] += 1
            in_counts[str(record.incoming_depth)] += 1
            combined[str(record.max_depth)] += 1
        return {
            "outgoing": dict(out_counts),
            "incoming": dict(in_counts),
            "combined": dict(combined),
        }

    def get_report(self) -> DepthAnalysisReport:
        statistics = self.calculate_depth_statistics()
        report = DepthAnalysisReport(
            statistics=statistics,
            warnings=self.generate_depth_warnings(statistics),
            recommendations=self.generate_recommendations(statistics),
        )
        self.log.debug(
            "Depth analysis: %d file(s), max outgoing %d, %d deep",
            statistics.total_files,
            statistics.max_outgoing_depth,
            len(statistics.deep_dependencies),
        )
        return report

    def generate_depth_warnings(self, statistics: DepthStatistics) -> list[dict]:
        return [
            {
                "file": mid,
                "severity": depth_severity(record.max_depth, self.deep_threshold).value,
                "message": (
                    f"File has deep dependency chains "
                    f"(outgoing: {record.outgoing_depth}, incoming: {record.incoming_depth})"
                ),
                "recommendation": depth_recommendation(record.max_depth, self.deep_threshold),
            }
            for mid, record in statistics.deep_dependencies
        ]

    @staticmethod
    def generate_recommendations(statistics: DepthStatistics) -> list[dict]:
        recommendations: list[dict] = []

        if statistics.average_outgoing_depth > 4:
            recommendations.append({
                "type": "architecture",
                "severity": Severity.WARNING.value,
                "message": f"Average outgoing dependency depth ({statistics.average_outgoing_depth}) is high",
                "suggestion": "Consider implementing a more modular architecture with clearer separation of concerns",
            })

        if len(statistics.deep_dependencies) > statistics.total_files * 0.2:
            recommendations.append({
                "type": "refactoring",
                "severity": Severity.WARNING.value,
                "message": f"{len(statistics.deep_dependencies)} files have deep dependency chains",
                "suggestion": "Consider refactoring deeply nested dependencies to reduce complexity",
            })

        if statistics.max_outgoing_depth > 10:
            recommendations.append({
                "type": "performance",
                "severity": Severity.CRITICAL.value,
                "message": f"Maximum dependency depth ({statistics.max_outgoing_depth}) is very high",
                "suggestion": (
                    "This may impact bundle size and loading performance. "
                    "Consider code splitting or lazy loading"
                ),
            })

        return recommendations


def analyze_depth(graph: DependencyGraph, deep_threshold: int = DEEP_THRESHOLD) -> DepthAnalysisReport:
    return DependencyDepthAnalyzer(graph, deep_threshold=deep_threshold).get_report()
