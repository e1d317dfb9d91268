"""Include scanning: directive parser and source-file filter."""

from __future__ import annotations

from include_graph.scanner.extensions import filter_source_files
from include_graph.scanner.include_parser import IncludeParser, parse_includes

__all__ = [
    "IncludeParser",
    "filter_source_files",
    "parse_includes",
]
