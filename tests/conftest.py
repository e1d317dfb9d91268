"""Shared fixtures: an in-memory repository source."""

from __future__ import annotations

import pytest

from include_graph.errors import NotFoundError
from include_graph.models import DirectoryEntry, EntryType
from include_graph.remote.base import RepositorySource


class FakeSource(RepositorySource):
    """Repository held in memory; records every call it receives."""

    def __init__(self, listings, contents, file_errors=None, dir_errors=None):
        self.listings: dict[str, list[DirectoryEntry]] = listings
        self.contents: dict[str, str] = contents
        self.file_errors: dict[str, Exception] = file_errors or {}
        self.dir_errors: dict[str, Exception] = dir_errors or {}
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    @classmethod
    def from_files(cls, files: dict[str, str], file_errors=None, dir_errors=None) -> FakeSource:
        """Build listings from ``{"dir/file.cc": text}``; order follows the dict."""
        listings: dict[str, list[DirectoryEntry]] = {"": []}
        for path in files:
            parts = path.split("/")
            for depth in range(len(parts)):
                parent = "/".join(parts[:depth])
                child = "/".join(parts[:depth + 1])
                is_file = depth == len(parts) - 1
                entries = listings.setdefault(parent, [])
                if any(e.path == child for e in entries):
                    continue
                entries.append(DirectoryEntry(
                    name=parts[depth],
                    path=child,
                    type=EntryType.FILE if is_file else EntryType.DIR,
                ))
                if not is_file:
                    listings.setdefault(child, [])
        return cls(listings, dict(files), file_errors, dir_errors)

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        self.calls.append(("list", path))
        if path in self.dir_errors:
            raise self.dir_errors[path]
        if path not in self.listings:
            raise NotFoundError(path)
        return list(self.listings[path])

    async def get_content(self, path: str) -> str:
        self.calls.append(("get", path))
        if path in self.file_errors:
            raise self.file_errors[path]
        if path not in self.contents:
            raise NotFoundError(path)
        return self.contents[path]

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(autouse=True)
def no_ambient_token(monkeypatch):
    """Keep a developer's GITHUB_TOKEN out of the tests."""
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)


@pytest.fixture
def make_source():
    return FakeSource.from_files
