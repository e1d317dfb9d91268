"""Tests for snapshot assembly and persistence."""

import json

import pytest

from include_graph.analysis.dependency_graph import GraphBuilder
from include_graph.analysis.graph_models import DirectoryResult
from include_graph.exporter import SnapshotAssembler, load_root, load_snapshot, write_snapshot
from include_graph.models import IncludeDirective, SourceFile


def _result(path, subdirectories=()):
    x = SourceFile("x.cc", f"{path}/x.cc")
    y = SourceFile("y.h", f"{path}/y.h")
    graph = GraphBuilder().build([x, y], {x: [IncludeDirective("y.h"), IncludeDirective("memory", True)]})
    return DirectoryResult(path=path, graph=graph, subdirectories=list(subdirectories))


@pytest.fixture
def results():
    return {
        "base": _result("base", ["base/memory"]),
        "base/memory": _result("base/memory"),
        "net": _result("net"),
        "net_log": _result("net_log"),
    }


class TestAssembler:
    def test_roots_derived_from_paths(self, results):
        snapshot = SnapshotAssembler().assemble(results)
        assert snapshot.root_directories == ["base", "net", "net_log"]
        assert list(snapshot.graphs) == ["base", "base/memory", "net", "net_log"]

    def test_graphs_not_recomputed(self, results):
        snapshot = SnapshotAssembler().assemble(results)
        assert snapshot.graphs["base"].graph is results["base"].graph

    def test_explicit_roots(self, results):
        snapshot = SnapshotAssembler().assemble(results, root_directories=["base", "chrome", "net", "net_log"])
        assert snapshot.root_directories == ["base", "chrome", "net", "net_log"]

    def test_partition_by_root(self, results):
        assembler = SnapshotAssembler()
        parts = assembler.partition(assembler.assemble(results))
        assert list(parts["base"].graphs) == ["base", "base/memory"]
        assert list(parts["net"].graphs) == ["net"]
        assert list(parts["net_log"].graphs) == ["net_log"]

    def test_json_shape(self, results):
        data = SnapshotAssembler().assemble({"base": results["base"]}).to_dict()
        assert data["rootDirectories"] == ["base"]
        entry = data["graphs"]["base"]
        assert entry["subdirectories"] == ["base/memory"]
        assert set(entry["graph"]) == {"nodes", "edges", "leafNodeIds"}
        assert entry["graph"]["leafNodeIds"] == ["x.cc"]
        assert {n["id"] for n in entry["graph"]["nodes"]} == {"x.cc", "y.h", "memory"}


class TestWriter:
    def test_partitioned_layout(self, results, tmp_path):
        snapshot = SnapshotAssembler().assemble(results, root_directories=["base", "chrome", "net", "net_log"])
        written = write_snapshot(snapshot, tmp_path)

        assert json.loads((tmp_path / "roots.json").read_text()) == ["base", "chrome", "net", "net_log"]
        assert sorted(p.name for p in (tmp_path / "roots").iterdir()) == ["base.json", "net.json", "net_log.json"]
        assert tmp_path / "roots.json" in written

        base = json.loads((tmp_path / "roots" / "base.json").read_text())
        assert list(base["graphs"]) == ["base", "base/memory"]
        assert base["graphs"]["base"]["graph"]["edges"][0] == {"source": "x.cc", "target": "y.h"}

    def test_single_file_layout(self, results, tmp_path):
        snapshot = SnapshotAssembler().assemble(results)
        written = write_snapshot(snapshot, tmp_path, partitioned=False)
        assert written == [tmp_path / "snapshot.json"]
        data = json.loads(written[0].read_text())
        assert data["rootDirectories"] == ["base", "net", "net_log"]
        assert len(data["graphs"]) == 4

    @pytest.mark.parametrize("partitioned", [True, False])
    def test_load_back(self, results, tmp_path, partitioned):
        snapshot = SnapshotAssembler().assemble(results)
        write_snapshot(snapshot, tmp_path, partitioned=partitioned)
        loaded = load_snapshot(tmp_path)
        assert loaded.to_dict() == snapshot.to_dict()

    def test_load_root(self, results, tmp_path):
        write_snapshot(SnapshotAssembler().assemble(results), tmp_path)
        part = load_root(tmp_path, "base")
        assert part is not None
        assert part.graphs["base/memory"].graph.node("y.h").in_degree == 1
        assert load_root(tmp_path, "missing") is None

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path)
