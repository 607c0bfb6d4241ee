"""Report aggregation: single-file and whole-folder snapshots for rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from dependency_dashboard.analysis.circular import CircularDependencyReport
from dependency_dashboard.analysis.depth import DepthAnalysisReport
from dependency_dashboard.analysis.graph_models import DependencyGraph
from dependency_dashboard.scanner.discovery import ModuleIndex
from dependency_dashboard.scanner.language_map import SOURCE_EXTENSIONS, strip_source_extension

TOP_N = 10


def matches_target(path: str, target: str) -> bool:
    """Extension- and suffix-tolerant comparison of a path against a target."""
    stripped = strip_source_extension(target)
    return (
        path in (target, stripped)
        or path.endswith("/" + target)
        or path.endswith("/" + stripped)
        or path.endswith("\\" + target)
        or path.endswith("\\" + stripped)
    )


def find_target(index: ModuleIndex, target: str) -> str | None:
    """Canonical module id for a requested target, or None if absent."""
    exact = index.lookup(target.replace("\\", "/"))
    if exact is not None:
        return exact
    for module in index:
        if matches_target(module.relative_path, target) or matches_target(module.module_id, target):
            return module.module_id
    return None


def probe_module(index: ModuleIndex, spelling: str) -> str | None:
    """Find the module behind a path by trying its spelling variants."""
    variants = [spelling, strip_source_extension(spelling)]
    variants.extend(spelling + ext for ext in SOURCE_EXTENSIONS)
    for variant in variants:
        module_id = index.lookup(variant)
        if module_id is not None:
            return module_id
    return None


@dataclass(frozen=True)
class FileMetrics:
    file: str
    module: str
    incoming: list[str]
    outgoing: list[str]
    incoming_details: dict[str, list[str]]
    outgoing_details: dict[str, list[str]]

    @property
    def incoming_count(self) -> int:
        return len(self.incoming)

    @property
    def outgoing_count(self) -> int:
        return len(self.outgoing)

    @property
    def total_dependencies(self) -> int:
        return self.incoming_count + self.outgoing_count

    @property
    def dependency_ratio(self) -> float:
        # outgoing verbatim when nothing imports the file
        if self.incoming_count > 0:
            return self.outgoing_count / self.incoming_count
        return self.outgoing_count

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "module": self.module,
            "incomingCount": self.incoming_count,
            "outgoingCount": self.outgoing_count,
            "totalDependencies": self.total_dependencies,
            "dependencyRatio": self.dependency_ratio,
            "incoming": list(self.incoming),
            "outgoing": list(self.outgoing),
            "importDetails": {
                "incoming": {k: list(v) for k, v in self.incoming_details.items()},
                "outgoing": {k: list(v) for k, v in self.outgoing_details.items()},
            },
        }


@dataclass(frozen=True)
class SingleFileReport:
    target_file: str
    target_module: str | None
    incoming: dict[str, list[str]]
    outgoing: dict[str, list[str]]
    total_files: int
    circular: CircularDependencyReport
    depth: DepthAnalysisReport
    chains: dict[str, list[list[str]]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "targetFile": self.target_file,
            "targetModule": self.target_module,
            "incoming": {k: list(v) for k, v in self.incoming.items()},
            "outgoing": {k: list(v) for k, v in self.outgoing.items()},
            "totalFiles": self.total_files,
            "circularDependencies": self.circular.to_dict(),
            "depthAnalysis": self.depth.to_dict(),
            "dependencyChains": {k: [list(c) for c in v] for k, v in self.chains.items()},
        }


@dataclass(frozen=True)
class FolderReport:
    files: list[FileMetrics]
    most_depended_on: list[FileMetrics]
    most_dependent: list[FileMetrics]
    highest_ratio: list[FileMetrics]
    circular: CircularDependencyReport
    depth: DepthAnalysisReport

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_dependencies(self) -> int:
        return sum(f.total_dependencies for f in self.files)

    @property
    def average_incoming(self) -> float:
        if not self.files:
            return 0
        return sum(f.incoming_count for f in self.files) / len(self.files)

    @property
    def average_outgoing(self) -> float:
        if not self.files:
            return 0
        return sum(f.outgoing_count for f in self.files) / len(self.files)

    def to_dict(self) -> dict:
        return {
            "totalFiles": self.total_files,
            "files": [f.to_dict() for f in self.files],
            "metrics": {
                "mostDependedOn": [f.to_dict() for f in self.most_depended_on],
                "mostDependent": [f.to_dict() for f in self.most_dependent],
                "highestRatio": [f.to_dict() for f in self.highest_ratio],
            },
            "summary": {
                "totalDependencies": self.total_dependencies,
                "averageIncoming": self.average_incoming,
                "averageOutgoing": self.average_outgoing,
            },
            "circularDependencies": self.circular.to_dict(),
            "depthAnalysis": self.depth.to_dict(),
        }


def build_file_metrics(graph: DependencyGraph, index: ModuleIndex) -> list[FileMetrics]:
    metrics: list[FileMetrics] = []
    for module_id, node in graph.nodes.items():
        module = index.get(module_id)
        metrics.append(FileMetrics(
            file=module.relative_path if module else module_id,
            module=module_id,
            incoming=list(node.incoming),
            outgoing=list(node.outgoing),
            incoming_details={k: list(v) for k, v in node.incoming.items()},
            outgoing_details={k: list(v) for k, v in node.outgoing.items()},
        ))
    return metrics


def build_folder_report(
    graph: DependencyGraph,
    index: ModuleIndex,
    circular: CircularDependencyReport,
    depth: DepthAnalysisReport,
    top_n: int = TOP_N,
) -> FolderReport:
    files = build_file_metrics(graph, index)
    return FolderReport(
        files=files,
        most_depended_on=sorted(files, key=lambda f: f.incoming_count, reverse=True)[:top_n],
        most_dependent=sorted(files, key=lambda f: f.outgoing_count, reverse=True)[:top_n],
        highest_ratio=sorted(files, key=lambda f: f.dependency_ratio, reverse=True)[:top_n],
        circular=circular,
        depth=depth,
    )
