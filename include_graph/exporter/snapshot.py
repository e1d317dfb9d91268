"""Aggregate per-directory results into an exportable snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from include_graph.analysis.graph_models import DirectoryResult


def root_of(path: str) -> str:
    """First path segment, i.e. the top-level directory a path lives under."""
    return path.strip("/").split("/", 1)[0]


@dataclass
class Snapshot:
    root_directories: list[str] = field(default_factory=list)
    graphs: dict[str, DirectoryResult] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rootDirectories": list(self.root_directories),
            "graphs": {path: r.to_dict() for path, r in self.graphs.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        return cls(
            root_directories=list(data.get("rootDirectories", [])),
            graphs={
                path: DirectoryResult.from_dict(path, item)
                for path, item in data.get("graphs", {}).items()
            },
        )


@dataclass
class RootSnapshot:
    """The graphs of one top-level directory, stored as its own unit."""
    root: str
    graphs: dict[str, DirectoryResult] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"graphs": {path: r.to_dict() for path, r in self.graphs.items()}}

    @classmethod
    def from_dict(cls, root: str, data: dict[str, Any]) -> RootSnapshot:
        return cls(
            root=root,
            graphs={
                path: DirectoryResult.from_dict(path, item)
                for path, item in data.get("graphs", {}).items()
            },
        )


class SnapshotAssembler:
    """Structural aggregation only: graphs are stored exactly as computed."""

    def assemble(
        self,
        per_directory_results: Mapping[str, DirectoryResult],
        root_directories: Iterable[str] | None = None,
    ) -> Snapshot:
        if root_directories is None:
            roots = sorted({root_of(p) for p in per_directory_results if root_of(p)})
        else:
            roots = list(root_directories)
        return Snapshot(root_directories=roots, graphs=dict(per_directory_results))

    def partition(self, snapshot: Snapshot) -> dict[str, RootSnapshot]:
        """Split a snapshot into one unit per root directory."""
        parts = {root: RootSnapshot(root=root) for root in snapshot.root_directories}
        for path, result in snapshot.graphs.items():
            for root in snapshot.root_directories:
                if path == root or path.startswith(root + "/"):
                    parts[root].graphs[path] = result
                    break
        return parts
