"""Include graph builder: nodes per source file, edges per include, leaf detection."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from include_graph.models import DEFAULT_EXTENSIONS, IncludeDirective, SourceFile
from include_graph.scanner.extensions import filter_source_files
from include_graph.analysis.graph_models import (
    EXTERNAL_GROUP,
    EXTERNAL_VAL,
    DependencyGraph,
    Edge,
    InDegreeCounter,
    Node,
)


class GraphBuilder:
    """Build a directory-local include graph from a file listing and parsed includes.

    Include targets are matched against the listed files by basename only.
    Anything that does not match becomes an external node, whether it is a
    system header or a file living in another directory.
    """

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        self.extensions = tuple(extensions)

    def filter_files(self, files: Iterable[SourceFile]) -> list[SourceFile]:
        return filter_source_files(files, self.extensions)

    def build(
        self,
        files: Sequence[SourceFile],
        includes_by_file: Mapping[SourceFile, Sequence[IncludeDirective]],
    ) -> DependencyGraph:
        source_files = self.filter_files(files)
        in_degree = InDegreeCounter()
        edges: list[Edge] = []

        # Step 1: one internal node per listed source file
        internal: dict[str, Node] = {}
        for f in source_files:
            if f.name in internal:
                continue
            internal[f.name] = Node(id=f.name, full_path=f.path)
            in_degree.register(f.name)

        # Step 2: edges in listing order, then include order
        external: dict[str, Node] = {}
        for f in source_files:
            # Files whose content could not be fetched have no entry
            for directive in includes_by_file.get(f, ()):
                inc_name = directive.target_name
                edges.append(Edge(source=f.name, target=inc_name))
                if inc_name not in internal and inc_name not in external:
                    external[inc_name] = Node(
                        id=inc_name,
                        is_external=True,
                        is_system_include=directive.is_system_include,
                        full_path=directive.target_path,
                        group=EXTERNAL_GROUP,
                        val=EXTERNAL_VAL,
                    )
                in_degree.increment(inc_name)

        # Step 3: settle counts and leaves
        nodes = list(internal.values()) + list(external.values())
        for node in nodes:
            node.in_degree = in_degree.get(node.id)

        leaf_node_ids = [n.id for n in internal.values() if n.in_degree == 0]
        return DependencyGraph(nodes=nodes, edges=edges, leaf_node_ids=leaf_node_ids)

    def detect_cycles(self, graph: DependencyGraph) -> list[list[str]]:
        """Find include cycles among internal nodes using DFS.

        Each cycle is returned once, as a path that starts and ends on the
        same node. A file including itself yields ``[name, name]``.
        """
        forward: dict[str, list[str]] = {n.id: [] for n in graph.internal_nodes}
        for edge in graph.edges:
            if edge.source in forward and edge.target in forward:
                if edge.target not in forward[edge.source]:
                    forward[edge.source].append(edge.target)

        cycles: list[list[str]] = []
        seen: set[tuple[str, ...]] = set()
        visited: set[str] = set()
        rec_stack: set[str] = set()
        path: list[str] = []

        def dfs(node_id: str) -> None:
            visited.add(node_id)
            rec_stack.add(node_id)
            path.append(node_id)

            for neighbor in forward[node_id]:
                if neighbor not in visited:
                    dfs(neighbor)
                elif neighbor in rec_stack:
                    cycle = path[path.index(neighbor):] + [neighbor]
                    key = _rotated(cycle[:-1])
                    if key not in seen:
                        seen.add(key)
                        cycles.append(cycle)

            path.pop()
            rec_stack.discard(node_id)

        for node_id in forward:
            if node_id not in visited:
                dfs(node_id)

        return cycles


def _rotated(nodes: list[str]) -> tuple[str, ...]:
    """Rotate a cycle body to start at its smallest id."""
    start = nodes.index(min(nodes))
    return tuple(nodes[start:] + nodes[:start])
