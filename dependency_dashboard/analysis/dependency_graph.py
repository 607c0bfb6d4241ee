"""Dependency graph builder: reads each discovered module and records its import edges."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Mapping

from dependency_dashboard.analysis.graph_models import DependencyGraph
from dependency_dashboard.extractor import BaseImportExtractor, extract_edges, get_default_extractor
from dependency_dashboard.models import ImportEdge, ModuleFile
from dependency_dashboard.scanner.discovery import ModuleIndex

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class DependencyGraphBuilder:
    """Build a module dependency graph from a ModuleIndex."""

    def __init__(
        self,
        extractor: BaseImportExtractor | None = None,
        log: logging.Logger | None = None,
    ):
        self.extractor = extractor or get_default_extractor()
        self.log = log or logger

    def build(self, index: ModuleIndex, progress: ProgressCallback | None = None) -> DependencyGraph:
        """Read every indexed module and build the complete graph."""
        graph = DependencyGraph()
        to_read = list(index)
        for module in to_read:
            graph.add_node(module.module_id)

        for i, module in enumerate(to_read):
            if progress:
                progress("Reading", i, len(to_read))
            for edge in self.edges_for(module, index):
                graph.add_edge(edge.source, edge.target, edge.detail)

        if progress:
            progress("Reading", len(to_read), len(to_read))
        return graph

    @staticmethod
    def assemble(modules: Iterable[str], edges: Mapping[str, list[ImportEdge]]) -> DependencyGraph:
        """Graph over ``modules`` plus whatever they import, from already extracted edges."""
        graph = DependencyGraph()
        modules = list(modules)
        for module_id in modules:
            graph.add_node(module_id)
        for module_id in modules:
            for edge in edges.get(module_id, ()):
                graph.add_edge(edge.source, edge.target, edge.detail)
        return graph

    def read(self, module: ModuleFile) -> str | None:
        """Read a module's text; a failure is logged and yields None."""
        try:
            return self.extractor.read_source(module.absolute_path)
        except OSError as e:
            self.log.warning("Warning: Could not read file %s: %s", module.absolute_path, e)
            return None

    def edges_for(self, module: ModuleFile, index: ModuleIndex) -> list[ImportEdge]:
        source = self.read(module)
        if source is None:
            return []
        edges = extract_edges(source, module, index, self.extractor, self.log)
        self.log.debug("Analyzed %s: %d edge(s)", module.relative_path, len(edges))
        return edges

    def dump(self, graph: DependencyGraph) -> None:
        """Log the full matrix at DEBUG level."""
        self.log.debug("Dependency matrix:")
        for module_id, sides in graph.to_matrix().items():
            self.log.debug("  %s:", module_id)
            self.log.debug("    outgoing: %s", ", ".join(sides["outgoing"]))
            self.log.debug("    incoming: %s", ", ".join(sides["incoming"]))
