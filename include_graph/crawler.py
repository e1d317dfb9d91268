"""Directory crawler: listing -> fetch -> parse -> graph, one directory at a time."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable

from include_graph.analysis.dependency_graph import GraphBuilder
from include_graph.analysis.graph_models import CrawlResult, DirectoryFailure, DirectoryResult
from include_graph.errors import NotFoundError, ParseError, RateLimitError, TransportError
from include_graph.models import IncludeDirective, SourceFile
from include_graph.remote.base import RepositorySource
from include_graph.scanner.include_parser import IncludeParser

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int, int], None]


class TreeCrawler:
    """Analyze directories of a repository source.

    Requests are awaited one after another; pacing is left to the source.
    """

    def __init__(
        self,
        source: RepositorySource,
        builder: GraphBuilder | None = None,
        parser: IncludeParser | None = None,
    ):
        self.source = source
        self.builder = builder or GraphBuilder()
        self.parser = parser or IncludeParser()

    async def list_roots(self) -> list[str]:
        """Top-level directory names, hidden ones excluded."""
        entries = await self.source.list_directory("")
        return sorted({e.name for e in entries if e.is_dir and not e.name.startswith(".")})

    async def analyze(
        self,
        directory_path: str,
        progress: ProgressCallback | None = None,
    ) -> DirectoryResult:
        """Build the include graph of one directory.

        Raises:
            NotFoundError: the directory does not exist.
            TransportError: the listing could not be retrieved, or the API
                refused a request for quota reasons (``RateLimitError``).
        """
        logger.info("Analyzing dependencies for: %s", directory_path or "<root>")
        entries = await self.source.list_directory(directory_path)

        subdirectories = sorted({e.path for e in entries if e.is_dir})
        files = [e.as_source_file() for e in entries if e.is_file]
        source_files = self.builder.filter_files(files)

        includes_by_file: dict[SourceFile, list[IncludeDirective]] = {}
        total = len(source_files)
        if progress:
            progress("Fetching", 0, total)

        for i, f in enumerate(source_files):
            try:
                content = await self.source.get_content(f.path)
                includes_by_file[f] = self.parser.parse(content)
            except RateLimitError:
                raise
            except (TransportError, NotFoundError, ParseError) as e:
                logger.warning("Failed to fetch %s: %s", f.path, e)
            if progress:
                progress("Fetching", i + 1, total)

        graph = self.builder.build(source_files, includes_by_file)
        return DirectoryResult(path=directory_path, graph=graph, subdirectories=subdirectories)

    async def crawl(
        self,
        path: str,
        max_depth: int = 1,
        cancel_event: asyncio.Event | None = None,
        progress: ProgressCallback | None = None,
    ) -> CrawlResult:
        """Depth-first walk from ``path`` down to ``max_depth`` levels below it.

        A directory that cannot be listed is recorded as a failure and its
        subtree is skipped; a ``RateLimitError`` aborts the whole crawl.
        """
        crawl = CrawlResult()
        stack: list[tuple[str, int]] = [(path, 0)]

        while stack:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Crawl of %s cancelled with %d directories pending", path, len(stack))
                crawl.cancelled = True
                break

            current, depth = stack.pop()
            if current in crawl.results or current in crawl.failures:
                continue

            try:
                result = await self.analyze(current, progress=progress)
            except RateLimitError:
                raise
            except (TransportError, NotFoundError) as e:
                logger.warning("Error analyzing %s: %s", current, e)
                crawl.failures[current] = DirectoryFailure(
                    path=current,
                    error=str(e),
                    status_code=getattr(e, "status_code", None),
                )
                continue

            crawl.results[current] = result
            if depth < max_depth:
                # Reversed so the smallest name is visited first
                for sub in reversed(result.subdirectories):
                    stack.append((sub, depth + 1))

        return crawl
