"""Offline snapshot pipeline: list roots -> crawl each -> assemble -> write."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

from include_graph.analysis.dependency_graph import GraphBuilder
from include_graph.analysis.graph_models import DirectoryFailure, DirectoryResult
from include_graph.crawler import ProgressCallback, TreeCrawler
from include_graph.exporter.snapshot import Snapshot, SnapshotAssembler
from include_graph.exporter.writer import write_snapshot
from include_graph.models import CrawlConfig
from include_graph.remote.base import RepositorySource
from include_graph.remote.github import GitHubContentsClient

logger = logging.getLogger(__name__)


@dataclass
class SnapshotReport:
    snapshot: Snapshot
    files_written: list[Path] = field(default_factory=list)
    failures: dict[str, DirectoryFailure] = field(default_factory=dict)
    cancelled: bool = False


async def run_snapshot(
    config: CrawlConfig,
    source: RepositorySource | None = None,
    progress: ProgressCallback | None = None,
    cancel_event: asyncio.Event | None = None,
) -> SnapshotReport:
    """Crawl the configured repository and write the snapshot files.

    ``RateLimitError`` propagates; other per-directory failures are collected
    in the report.
    """
    owns_source = source is None
    source = source or GitHubContentsClient(config)
    crawler = TreeCrawler(source, builder=GraphBuilder(config.extensions))

    try:
        roots = await crawler.list_roots()
        active_roots = roots[:config.max_roots] if config.max_roots else roots
        logger.info("Crawling %d of %d root directories", len(active_roots), len(roots))

        results: dict[str, DirectoryResult] = {}
        failures: dict[str, DirectoryFailure] = {}
        cancelled = False
        for i, root in enumerate(active_roots):
            if progress:
                progress(f"Root {root}", i, len(active_roots))
            crawl = await crawler.crawl(
                root,
                max_depth=config.max_depth,
                cancel_event=cancel_event,
                progress=progress,
            )
            results.update(crawl.results)
            failures.update(crawl.failures)
            if crawl.cancelled:
                cancelled = True
                break

        if progress:
            progress("Roots", len(active_roots), len(active_roots))
    finally:
        if owns_source:
            await source.close()

    snapshot = SnapshotAssembler().assemble(results, root_directories=roots)
    files = write_snapshot(snapshot, config.output_dir, partitioned=config.partitioned)
    return SnapshotReport(
        snapshot=snapshot,
        files_written=files,
        failures=failures,
        cancelled=cancelled,
    )
