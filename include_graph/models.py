"""Data models for the include-graph crawler."""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field
from pathlib import Path

# Source and header suffixes analyzed by default
DEFAULT_EXTENSIONS: tuple[str, ...] = (
    ".c", ".cc", ".cpp", ".cxx",
    ".h", ".hh", ".hpp", ".hxx",
)


class EntryType(enum.Enum):
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


@dataclass(frozen=True)
class SourceFile:
    """A file listed in the directory under analysis."""
    name: str  # basename
    path: str  # repository-relative path


@dataclass(frozen=True)
class IncludeDirective:
    """One ``#include`` found in a file."""
    target_path: str
    is_system_include: bool = False

    @property
    def target_name(self) -> str:
        """Final path segment of the include target."""
        segments = [s for s in self.target_path.split("/") if s]
        return segments[-1] if segments else self.target_path


@dataclass(frozen=True)
class DirectoryEntry:
    """One row of a remote directory listing."""
    name: str
    path: str
    type: EntryType

    @property
    def is_file(self) -> bool:
        return self.type is EntryType.FILE

    @property
    def is_dir(self) -> bool:
        return self.type is EntryType.DIR

    def as_source_file(self) -> SourceFile:
        return SourceFile(name=self.name, path=self.path)

    @classmethod
    def from_api(cls, data: dict) -> DirectoryEntry:
        try:
            entry_type = EntryType(data.get("type", "file"))
        except ValueError:
            entry_type = EntryType.FILE
        return cls(name=data["name"], path=data["path"], type=entry_type)


@dataclass
class CrawlConfig:
    """Configuration for crawling a remote repository."""
    repo: str = "chromium/chromium"
    api_base: str = "https://api.github.com"
    token: str = ""
    ref: str | None = None
    request_delay: float = 0.5
    max_requests: int | None = None
    window_seconds: float = 3600
    timeout: float = 30.0
    user_agent: str = "include-graph"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    max_roots: int | None = 10
    max_depth: int = 1
    output_dir: Path = field(default_factory=lambda: Path("public/data"))
    partitioned: bool = True

    def __post_init__(self):
        if not self.token:
            self.token = os.getenv("GITHUB_TOKEN", "")

    @property
    def contents_url(self) -> str:
        return f"{self.api_base.rstrip('/')}/repos/{self.repo}/contents"
