"""Source/header extension allow-list."""

from __future__ import annotations

from typing import Iterable

from include_graph.models import DEFAULT_EXTENSIONS, SourceFile


def filter_source_files(
    files: Iterable[SourceFile],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[SourceFile]:
    """Keep files whose name ends with an allowed suffix, preserving order."""
    suffixes = tuple(extensions)
    return [f for f in files if f.name.endswith(suffixes)]
