"""Tests for the graph builder, cycle detection and depth analysis."""

import logging

import pytest

from dependency_dashboard.analysis.circular import (
    CircularDependencyDetector,
    cycle_severity,
    detect_cycles,
)
from dependency_dashboard.analysis.dependency_graph import DependencyGraphBuilder
from dependency_dashboard.analysis.depth import DependencyDepthAnalyzer, analyze_depth
from dependency_dashboard.analysis.graph_models import DependencyGraph
from dependency_dashboard.models import Direction, ImportEdge, Severity
from dependency_dashboard.scanner import discover_modules


# ── Helpers ───────────────────────────────────────────────────

def _graph(*edges, nodes=()):
    graph = DependencyGraph()
    for node in nodes:
        graph.add_node(node)
    for source, target in edges:
        graph.add_edge(source, target, f"{source}->{target}")
    return graph


def _chain(n):
    """m0 -> m1 -> ... -> m{n-1}"""
    return _graph(*[(f"m{i}", f"m{i + 1}") for i in range(n - 1)])


# ── Dependency Graph ──────────────────────────────────────────

class TestDependencyGraph:
    def test_empty(self):
        graph = DependencyGraph()
        assert len(graph) == 0
        assert graph.edge_count == 0

    def test_edges_are_mirrored(self):
        graph = _graph(("a", "b"), ("a", "c"), ("c", "b"))
        for mid in graph.nodes:
            for target in graph.outgoing(mid):
                assert mid in graph.incoming(target)
            for source in graph.incoming(mid):
                assert mid in graph.outgoing(source)

    def test_self_edge_ignored(self):
        graph = _graph(("a", "a"))
        assert graph.outgoing("a") == []
        assert graph.edge_count == 0

    def test_details_kept_per_statement(self):
        graph = DependencyGraph()
        graph.add_edge("a", "b", "Named imports: x")
        graph.add_edge("a", "b", "Named imports: y")
        assert graph.nodes["a"].outgoing == {"b": ["Named imports: x", "Named imports: y"]}
        assert graph.nodes["b"].incoming == {"a": ["Named imports: x", "Named imports: y"]}
        assert graph.edge_count == 1

    def test_adjacency_is_a_copy(self):
        graph = _graph(("a", "b"))
        adjacency = graph.adjacency(Direction.OUTGOING)
        adjacency["a"].append("zzz")
        assert graph.outgoing("a") == ["b"]


class TestDependencyGraphBuilder:
    def test_build_from_tree(self, make_tree):
        root = make_tree({
            "a.js": "import b from './b';\nimport React from 'react';",
            "b.js": "const c = require('./c');",
            "c.js": "",
        })
        graph = DependencyGraphBuilder().build(discover_modules(root))
        assert list(graph.nodes) == ["a", "b", "c"]
        assert graph.outgoing("a") == ["b"]
        assert graph.outgoing("b") == ["c"]
        assert graph.incoming("c") == ["b"]
        assert "react" not in graph

    def test_unreadable_file_stays_a_node(self, make_tree, caplog):
        root = make_tree({"a.js": "import b from './b';", "b.js": ""})
        index = discover_modules(root)
        (root / "a.js").unlink()
        with caplog.at_level(logging.WARNING):
            graph = DependencyGraphBuilder().build(index)
        assert "Could not read file" in caplog.text
        assert "a" in graph
        assert graph.outgoing("a") == []

    def test_assemble_from_extracted_edges(self):
        edges = {
            "a": [ImportEdge("a", "b", "Default import: b")],
            "b": [ImportEdge("b", "c", "Default import: c")],
            "c": [ImportEdge("c", "d", "Default import: d")],
        }
        graph = DependencyGraphBuilder.assemble(["a", "b"], edges)
        assert list(graph.nodes) == ["a", "b", "c"]
        assert graph.outgoing("c") == []

    def test_progress_callback(self, make_tree):
        root = make_tree({"a.js": "", "b.js": ""})
        calls = []
        DependencyGraphBuilder().build(
            discover_modules(root), progress=lambda *args: calls.append(args),
        )
        assert calls[-1] == ("Reading", 2, 2)


# ── Circular Dependencies ─────────────────────────────────────

class TestCircularDependencies:
    def test_no_cycles(self):
        report = detect_cycles(_chain(4))
        assert report.total == 0
        assert report.to_dict()["circularDependencies"] == []

    def test_direct_cycle_is_critical(self):
        report = detect_cycles(_graph(("a", "b"), ("b", "a")))
        assert [c.modules for c in report.cycles] == [["a", "b", "a"]]
        assert report.cycles[0].severity == "critical"
        assert report.cycles[0].description == "Circular dependency detected: a → b → a"
        assert report.to_dict()["critical"] == 1

    @pytest.mark.parametrize("size, severity", [
        (2, Severity.CRITICAL),
        (3, Severity.WARNING),
        (4, Severity.WARNING),
        (5, Severity.INFO),
        (9, Severity.INFO),
    ])
    def test_severity_by_cycle_size(self, size, severity):
        assert cycle_severity(size) == severity
        edges = [(f"n{i}", f"n{(i + 1) % size}") for i in range(size)]
        report = detect_cycles(_graph(*edges))
        assert len(report.cycles) == 1
        assert report.cycles[0].size == size
        assert report.cycles[0].severity == severity.value

    def test_cycle_edges_are_real(self):
        graph = _graph(
            ("a", "b"), ("b", "c"), ("c", "a"), ("c", "d"), ("d", "b"), ("d", "e"),
        )
        report = detect_cycles(graph)
        assert report.total >= 2
        for cycle in report.cycles:
            assert cycle.modules[0] == cycle.modules[-1]
            assert cycle.size >= 1
            for source, target in zip(cycle.modules, cycle.modules[1:]):
                assert target in graph.outgoing(source)

    def test_path_slice_starts_at_reentered_node(self):
        report = detect_cycles(_graph(("entry", "a"), ("a", "b"), ("b", "a")))
        assert [c.modules for c in report.cycles] == [["a", "b", "a"]]

    def test_finished_node_not_reported_again(self):
        # x and y both reach the a<->b pair; it is only walked once
        graph = _graph(("x", "a"), ("y", "a"), ("a", "b"), ("b", "a"))
        assert len(detect_cycles(graph).cycles) == 1

    def test_severity_buckets(self):
        graph = _graph(
            ("a", "b"), ("b", "a"),
            ("p", "q"), ("q", "r"), ("r", "p"),
        )
        data = detect_cycles(graph).to_dict()
        assert data["totalCircularDependencies"] == 2
        assert (data["critical"], data["warnings"], data["info"]) == (1, 1, 0)

    def test_deep_graph_does_not_recurse(self):
        graph = _chain(5000)
        graph.add_edge("m4999", "m0")
        detector = CircularDependencyDetector(graph)
        cycles = detector.detect()
        assert len(cycles) == 1
        assert cycles[0].size == 5000
        assert cycles[0].severity == "info"

    def test_does_not_mutate_graph(self):
        graph = _graph(("a", "b"), ("b", "a"))
        before = graph.to_matrix()
        detect_cycles(graph)
        assert graph.to_matrix() == before


# ── Dependency Depth ──────────────────────────────────────────

class TestDependencyDepth:
    def test_linear_chain(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "c")))
        depths = analyzer.calculate_all_depths()
        assert depths["a"].outgoing_depth == 2
        assert depths["b"].outgoing_depth == 1
        assert depths["c"].outgoing_depth == 0
        assert depths["c"].incoming_depth == 2
        assert depths["a"].incoming_depth == 0

    def test_max_depth_is_max_of_directions(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "c"), ("a", "c"), ("d", "b")))
        for record in analyzer.calculate_all_depths().values():
            assert record.max_depth == max(record.outgoing_depth, record.incoming_depth)

    def test_longest_branch_wins(self):
        graph = _graph(("a", "b"), ("a", "c"), ("c", "d"), ("d", "e"))
        assert DependencyDepthAnalyzer(graph).calculate_max_depth("a") == 3

    def test_cycle_terminates(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "a")))
        assert analyzer.calculate_max_depth("a", Direction.OUTGOING) == 2
        assert analyzer.calculate_max_depth("b", Direction.OUTGOING) == 1

    def test_unknown_module(self):
        assert DependencyDepthAnalyzer(_graph(("a", "b"))).calculate_max_depth("zzz") == 0

    def test_deep_chain_is_iterative(self):
        analyzer = DependencyDepthAnalyzer(_chain(3000))
        assert analyzer.calculate_max_depth("m0") == 2999
        assert analyzer.calculate_max_depth("m2999", Direction.INCOMING) == 2999

    def test_clear_cache(self):
        analyzer = DependencyDepthAnalyzer(_chain(3))
        assert analyzer.calculate_max_depth("m0") == 2
        analyzer.clear_cache()
        assert analyzer.calculate_max_depth("m0") == 2

    def test_statistics(self):
        stats = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "c"))).calculate_depth_statistics()
        assert stats.total_files == 3
        assert stats.average_outgoing_depth == 1.0
        assert stats.max_outgoing_depth == 2
        assert stats.max_incoming_depth == 2
        assert stats.deep_dependencies == []
        assert stats.depth_distribution["outgoing"] == {"2": 1, "1": 1, "0": 1}
        assert stats.depth_distribution["combined"] == {"2": 2, "1": 1}

    def test_empty_statistics(self):
        data = analyze_depth(DependencyGraph()).to_dict()
        assert data["statistics"]["totalFiles"] == 0
        assert data["statistics"]["depthDistribution"] == {}
        assert data["deepDependencyWarnings"] == []
        assert data["recommendations"] == []

    def test_deep_warnings_and_recommendations(self):
        report = analyze_depth(_chain(12))
        stats = report.statistics
        assert stats.max_outgoing_depth == 11
        deep_ids = [mid for mid, _ in stats.deep_dependencies]
        # m0..m5 (outgoing > 5) and m6..m11 (incoming > 5)
        assert len(deep_ids) == 12
        assert deep_ids[0] in ("m0", "m11")

        by_file = {w["file"]: w for w in report.warnings}
        assert by_file["m0"]["severity"] == "critical"
        assert by_file["m0"]["recommendation"].startswith("Consider breaking down this module")
        assert by_file["m3"]["severity"] == "warning"  # outgoing 8
        assert by_file["m3"]["recommendation"].startswith("Review the dependency chain")

        types = [r["type"] for r in report.recommendations]
        assert types == ["architecture", "refactoring", "performance"]

    def test_shallow_tree_has_no_recommendations(self):
        report = analyze_depth(_graph(("a", "b"), ("c", "b")))
        assert report.recommendations == []
        assert report.warnings == []

    def test_custom_deep_threshold_drives_warnings(self):
        report = analyze_depth(_chain(5), deep_threshold=3)
        by_file = {w["file"]: w for w in report.warnings}
        assert sorted(by_file) == ["m0", "m4"]
        for warning in by_file.values():
            assert warning["severity"] == "warning"
            assert warning["recommendation"].startswith("Review the dependency chain")

    def test_raised_deep_threshold_only_flags_critical(self):
        report = analyze_depth(_chain(12), deep_threshold=9)
        by_file = {w["file"]: w for w in report.warnings}
        assert sorted(by_file) == ["m0", "m1", "m10", "m11"]
        assert {w["severity"] for w in by_file.values()} == {"critical"}


class TestDependencyChains:
    def test_chains_longest_first(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("a", "c"), ("c", "d")))
        assert analyzer.find_dependency_chains("a") == [["a", "c", "d"], ["a", "b"]]

    def test_incoming_chains(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "c")))
        assert analyzer.find_dependency_chains("c", Direction.INCOMING) == [["c", "b", "a"]]

    def test_chains_stop_at_cycles(self):
        analyzer = DependencyDepthAnalyzer(_graph(("a", "b"), ("b", "c"), ("c", "a")))
        assert analyzer.find_dependency_chains("a") == [["a", "b", "c"]]

    def test_max_length(self):
        analyzer = DependencyDepthAnalyzer(_chain(20))
        chains = analyzer.find_dependency_chains("m0", max_length=4)
        assert chains == [["m0", "m1", "m2", "m3"]]
        assert len(analyzer.find_dependency_chains("m0")[0]) == 10

    def test_isolated_module_has_no_chains(self):
        analyzer = DependencyDepthAnalyzer(_graph(nodes=["solo"]))
        assert analyzer.find_dependency_chains("solo") == []
        assert analyzer.find_dependency_chains("missing") == []
