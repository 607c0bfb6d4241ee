"""Data models for the module dependency graph."""

from __future__ import annotations

from dataclasses import dataclass, field

from dependency_dashboard.models import Direction


@dataclass
class ModuleNode:
    module_id: str
    # neighbor -> import details, in scan order
    incoming: dict[str, list[str]] = field(default_factory=dict)
    outgoing: dict[str, list[str]] = field(default_factory=dict)

    def side(self, direction: Direction) -> dict[str, list[str]]:
        return self.outgoing if direction is Direction.OUTGOING else self.incoming


@dataclass
class DependencyGraph:
    """Adjacency structure keyed by module id.

    Edges are mirrored on insertion: ``b in nodes[a].outgoing`` exactly when
    ``a in nodes[b].incoming``.  Both sides keep the import details.
    """
    nodes: dict[str, ModuleNode] = field(default_factory=dict)

    def add_node(self, module_id: str) -> ModuleNode:
        node = self.nodes.get(module_id)
        if node is None:
            node = self.nodes[module_id] = ModuleNode(module_id)
        return node

    def add_edge(self, source: str, target: str, detail: str | None = None) -> None:
        if source == target:
            return
        src = self.add_node(source)
        dst = self.add_node(target)
        out_details = src.outgoing.setdefault(target, [])
        in_details = dst.incoming.setdefault(source, [])
        if detail is not None:
            out_details.append(detail)
            in_details.append(detail)

    def outgoing(self, module_id: str) -> list[str]:
        node = self.nodes.get(module_id)
        return list(node.outgoing) if node else []

    def incoming(self, module_id: str) -> list[str]:
        node = self.nodes.get(module_id)
        return list(node.incoming) if node else []

    @property
    def edge_count(self) -> int:
        return sum(len(node.outgoing) for node in self.nodes.values())

    def adjacency(self, direction: Direction = Direction.OUTGOING) -> dict[str, list[str]]:
        """Independent copy of the neighbor lists in one direction."""
        return {mid: list(node.side(direction)) for mid, node in self.nodes.items()}

    def to_matrix(self) -> dict[str, dict[str, list[str]]]:
        return {
            mid: {"incoming": list(node.incoming), "outgoing": list(node.outgoing)}
            for mid, node in self.nodes.items()
        }

    def __contains__(self, module_id: object) -> bool:
        return module_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)


@dataclass
class Cycle:
    modules: list[str]  # closed: first == last
    severity: str
    description: str

    @property
    def size(self) -> int:
        """Number of distinct modules in the cycle."""
        return len(self.modules) - 1

    def to_dict(self) -> dict:
        return {
            "cycle": list(self.modules),
            "severity": self.severity,
            "description": self.description,
        }


@dataclass(frozen=True)
class DepthRecord:
    outgoing_depth: int
    incoming_depth: int

    @property
    def max_depth(self) -> int:
        return max(self.outgoing_depth, self.incoming_depth)

    def to_dict(self) -> dict:
        return {
            "outgoingDepth": self.outgoing_depth,
            "incomingDepth": self.incoming_depth,
            "maxDepth": self.max_depth,
        }
