"""Data models for the per-directory include graph."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

# Rendering hints read by the visualization front end
INTERNAL_GROUP, INTERNAL_VAL = 1, 10
EXTERNAL_GROUP, EXTERNAL_VAL = 2, 8


@dataclass
class Node:
    id: str
    is_external: bool = False
    is_system_include: bool = False
    full_path: str | None = None
    in_degree: int = 0
    group: int = INTERNAL_GROUP
    val: int = INTERNAL_VAL

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "group": self.group,
            "val": self.val,
            "isExternal": self.is_external,
            "isSystem": self.is_system_include,
        }
        if self.full_path is not None:
            data["fullPath"] = self.full_path
        data["inDegree"] = self.in_degree
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Node:
        is_external = bool(data.get("isExternal", False))
        return cls(
            id=data["id"],
            is_external=is_external,
            is_system_include=bool(data.get("isSystem", False)),
            full_path=data.get("fullPath"),
            in_degree=int(data.get("inDegree", 0)),
            group=data.get("group", EXTERNAL_GROUP if is_external else INTERNAL_GROUP),
            val=data.get("val", EXTERNAL_VAL if is_external else INTERNAL_VAL),
        )


@dataclass(frozen=True)
class Edge:
    source: str  # includer
    target: str  # included

    def to_dict(self) -> dict[str, str]:
        return {"source": self.source, "target": self.target}


class InDegreeCounter:
    """Explicit in-degree tally keyed by node id."""

    def __init__(self) -> None:
        self._counts: dict[str, int] = {}

    def register(self, node_id: str) -> None:
        """Start counting ``node_id`` at zero if it is not yet known."""
        if node_id not in self._counts:
            self._counts[node_id] = 0

    def increment(self, node_id: str) -> int:
        """Increment, initializing to zero first when absent."""
        self.register(node_id)
        self._counts[node_id] += 1
        return self._counts[node_id]

    def get(self, node_id: str) -> int:
        return self._counts.get(node_id, 0)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._counts

    def __iter__(self) -> Iterator[str]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)


@dataclass
class DependencyGraph:
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
    leaf_node_ids: list[str] = field(default_factory=list)

    def node(self, node_id: str) -> Node | None:
        for n in self.nodes:
            if n.id == node_id:
                return n
        return None

    @property
    def internal_nodes(self) -> list[Node]:
        return [n for n in self.nodes if not n.is_external]

    @property
    def external_nodes(self) -> list[Node]:
        return [n for n in self.nodes if n.is_external]

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "leafNodeIds": list(self.leaf_node_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DependencyGraph:
        return cls(
            nodes=[Node.from_dict(n) for n in data.get("nodes", [])],
            edges=[Edge(source=e["source"], target=e["target"]) for e in data.get("edges", [])],
            leaf_node_ids=list(data.get("leafNodeIds", [])),
        )


@dataclass
class DirectoryResult:
    """Analysis of one directory: its graph and its child directories."""
    path: str
    graph: DependencyGraph = field(default_factory=DependencyGraph)
    subdirectories: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "graph": self.graph.to_dict(),
            "subdirectories": list(self.subdirectories),
        }

    @classmethod
    def from_dict(cls, path: str, data: dict[str, Any]) -> DirectoryResult:
        return cls(
            path=path,
            graph=DependencyGraph.from_dict(data.get("graph", {})),
            subdirectories=list(data.get("subdirectories", [])),
        )


@dataclass
class DirectoryFailure:
    path: str
    error: str
    status_code: int | None = None


@dataclass
class CrawlResult:
    results: dict[str, DirectoryResult] = field(default_factory=dict)
    failures: dict[str, DirectoryFailure] = field(default_factory=dict)
    cancelled: bool = False
