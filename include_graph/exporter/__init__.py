"""Exporter layer."""

from include_graph.exporter.snapshot import RootSnapshot, Snapshot, SnapshotAssembler
from include_graph.exporter.writer import load_root, load_snapshot, write_snapshot

__all__ = [
    "RootSnapshot",
    "Snapshot",
    "SnapshotAssembler",
    "load_root",
    "load_snapshot",
    "write_snapshot",
]
