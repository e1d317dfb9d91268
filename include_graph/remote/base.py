"""Abstract repository source: directory listing and raw content fetch."""

from __future__ import annotations

import abc

from include_graph.models import DirectoryEntry


class RepositorySource(abc.ABC):
    """Collaborator the crawler uses to reach a repository.

    ``list_directory("")`` must return the repository root.
    """

    @abc.abstractmethod
    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        """List the entries of a directory."""

    @abc.abstractmethod
    async def get_content(self, path: str) -> str:
        """Return the raw text of a file."""

    async def close(self) -> None:
        """Release any held connections."""

    async def __aenter__(self) -> RepositorySource:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
