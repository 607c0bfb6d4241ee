"""Analysis orchestrator: discover -> extract -> graph -> {cycles, depth} -> report."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Callable

from dependency_dashboard.analysis.circular import CircularDependencyDetector
from dependency_dashboard.analysis.dependency_graph import DependencyGraphBuilder
from dependency_dashboard.analysis.depth import DependencyDepthAnalyzer
from dependency_dashboard.analysis.graph_models import DependencyGraph
from dependency_dashboard.analysis.report import (
    FolderReport,
    SingleFileReport,
    build_folder_report,
    find_target,
    probe_module,
)
from dependency_dashboard.extractor import BaseImportExtractor, edges_from_resolved, iter_resolved_imports
from dependency_dashboard.models import AnalysisConfig, Direction, ImportEdge
from dependency_dashboard.scanner.discovery import ModuleIndex, discover_modules

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


def _analyze_graph(graph: DependencyGraph, config: AnalysisConfig, log: logging.Logger):
    circular = CircularDependencyDetector(graph, log=log)
    circular.detect()
    depth = DependencyDepthAnalyzer(graph, deep_threshold=config.deep_threshold, log=log)
    return circular.report(), depth.get_report(), depth


def run_discovery(
    config: AnalysisConfig,
    progress: ProgressCallback | None = None,
    log: logging.Logger | None = None,
) -> ModuleIndex:
    """Stage 1: discover the modules under the scan root."""
    if progress:
        progress("Discovering", 0, 1)
    index = discover_modules(Path(config.source_dir), config, log=log)
    if progress:
        progress("Discovering", 1, 1)
    return index


def analyze_folder(
    source_dir: Path | str,
    config: AnalysisConfig | None = None,
    progress: ProgressCallback | None = None,
    extractor: BaseImportExtractor | None = None,
    log: logging.Logger | None = None,
) -> FolderReport:
    """Build the complete graph of a source tree and report on every file."""
    log = log or logger
    config = replace(config or AnalysisConfig.from_env(), source_dir=Path(source_dir).resolve())

    index = run_discovery(config, progress, log)
    log.info("Found %d files to analyze", len(index))

    builder = DependencyGraphBuilder(extractor, log=log)
    graph = builder.build(index, progress=progress)
    log.info("Built dependency graph: %d module(s), %d edge(s)", len(graph), graph.edge_count)
    if config.verbose:
        builder.dump(graph)

    if progress:
        progress("Analyzing", 0, 1)
    circular, depth, _ = _analyze_graph(graph, config, log)
    report = build_folder_report(graph, index, circular, depth, top_n=config.top_n)
    if progress:
        progress("Analyzing", 1, 1)
    return report


def analyze_single_file(
    target: str,
    source_dir: Path | str,
    config: AnalysisConfig | None = None,
    progress: ProgressCallback | None = None,
    extractor: BaseImportExtractor | None = None,
    log: logging.Logger | None = None,
) -> SingleFileReport:
    """Report the importers and imports of one file.

    ``target`` may be given with or without its extension, or as a bare
    file name.  A target that matches no discovered module yields an empty
    report.
    """
    log = log or logger
    config = replace(config or AnalysisConfig.from_env(), source_dir=Path(source_dir).resolve())

    index = run_discovery(config, progress, log)
    log.info("Found %d files to analyze", len(index))

    target_id = find_target(index, target)
    if target_id is None:
        log.info("Target file %s not found under %s", target, config.source_dir)

    builder = DependencyGraphBuilder(extractor, log=log)
    incoming: dict[str, list[str]] = {}
    outgoing: dict[str, list[str]] = {}
    edges: dict[str, list[ImportEdge]] = {}

    modules = list(index) if target_id is not None else []
    for i, module in enumerate(modules):
        if progress:
            progress("Reading", i, len(modules))
        source = builder.read(module)
        if source is None:
            continue
        resolved_imports = list(iter_resolved_imports(
            source, module.relative_path, index.root, builder.extractor, log,
        ))
        edges[module.module_id] = edges_from_resolved(resolved_imports, module, index, log)
        if module.module_id == target_id:
            for resolved, match in resolved_imports:
                if resolved == target_id or index.lookup(resolved) == target_id:
                    continue
                outgoing.setdefault(resolved, []).append(match.detail)
        else:
            for resolved, match in resolved_imports:
                if index.lookup(resolved) == target_id:
                    incoming.setdefault(module.relative_path, []).append(match.detail)
    if progress and modules:
        progress("Reading", len(modules), len(modules))

    # neighbourhood graph: the target plus its direct importers and imports
    neighbourhood: list[str] = []
    if target_id is not None:
        for spelling in [target_id, *incoming, *outgoing]:
            module_id = probe_module(index, spelling)
            if module_id is not None and module_id not in neighbourhood:
                neighbourhood.append(module_id)
    graph = builder.assemble(neighbourhood, edges)
    if config.verbose:
        builder.dump(graph)

    if progress:
        progress("Analyzing", 0, 1)
    circular, depth_report, depth = _analyze_graph(graph, config, log)
    chains = {}
    if target_id is not None:
        chains = {
            direction.value: depth.find_dependency_chains(target_id, direction, config.max_chain_length)
            for direction in Direction
        }
    if progress:
        progress("Analyzing", 1, 1)

    log.info("Incoming: %s", ", ".join(incoming) or "none")
    log.info("Outgoing: %s", ", ".join(outgoing) or "none")

    return SingleFileReport(
        target_file=target,
        target_module=target_id,
        incoming=incoming,
        outgoing=outgoing,
        total_files=len(index.source_files),
        circular=circular,
        depth=depth_report,
        chains=chains,
    )
