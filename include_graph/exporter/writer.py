"""Write snapshots to disk as JSON and read them back."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from include_graph.exporter.snapshot import RootSnapshot, Snapshot, SnapshotAssembler

logger = logging.getLogger(__name__)

ROOTS_FILE = "roots.json"
ROOTS_DIR = "roots"
SNAPSHOT_FILE = "snapshot.json"


def root_file_name(root: str) -> str:
    return root.replace("/", "_") + ".json"


def _write_json(path: Path, data) -> None:
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")


def write_snapshot(snapshot: Snapshot, output_dir: Path, partitioned: bool = True) -> list[Path]:
    """Persist a snapshot.

    Partitioned layout: ``roots.json`` with the root names and one
    ``roots/<root>.json`` per root. Otherwise a single ``snapshot.json``.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if not partitioned:
        path = output_dir / SNAPSHOT_FILE
        _write_json(path, snapshot.to_dict())
        logger.info("Saved snapshot to %s", path)
        return [path]

    roots_path = output_dir / ROOTS_FILE
    _write_json(roots_path, snapshot.root_directories)
    written.append(roots_path)

    roots_dir = output_dir / ROOTS_DIR
    roots_dir.mkdir(exist_ok=True)
    for root, part in SnapshotAssembler().partition(snapshot).items():
        if not part.graphs:
            continue
        path = roots_dir / root_file_name(root)
        _write_json(path, part.to_dict())
        logger.info("Saved root data for %s to %s", root, path)
        written.append(path)

    return written


def load_root(output_dir: Path, root: str) -> RootSnapshot | None:
    """Read one root's unit from a partitioned layout, if present."""
    path = Path(output_dir) / ROOTS_DIR / root_file_name(root)
    if not path.exists():
        return None
    return RootSnapshot.from_dict(root, json.loads(path.read_text(encoding="utf-8")))


def load_snapshot(output_dir: Path) -> Snapshot:
    """Read a snapshot written by :func:`write_snapshot` (either layout)."""
    output_dir = Path(output_dir)
    single = output_dir / SNAPSHOT_FILE
    if single.exists():
        return Snapshot.from_dict(json.loads(single.read_text(encoding="utf-8")))

    roots_path = output_dir / ROOTS_FILE
    if not roots_path.exists():
        raise FileNotFoundError(f"No snapshot found in {output_dir}")

    roots = json.loads(roots_path.read_text(encoding="utf-8"))
    snapshot = Snapshot(root_directories=list(roots))
    for root in roots:
        part = load_root(output_dir, root)
        if part is not None:
            snapshot.graphs.update(part.graphs)
    return snapshot
