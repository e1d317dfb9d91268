"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from include_graph.analysis.dependency_graph import GraphBuilder
from include_graph.crawler import TreeCrawler
from include_graph.models import CrawlConfig
from include_graph.remote.base import RepositorySource
from include_graph.remote.github import GitHubContentsClient
from include_graph.web.api import router


def create_app(
    config: CrawlConfig | None = None,
    source: RepositorySource | None = None,
    snapshot_dir: Path | None = None,
) -> FastAPI:
    config = config or CrawlConfig()
    source = source or GitHubContentsClient(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await source.close()

    app = FastAPI(title="include-graph", version="0.1.0", lifespan=lifespan)
    app.state.crawler = TreeCrawler(source, builder=GraphBuilder(config.extensions))
    app.state.snapshot_dir = snapshot_dir
    app.include_router(router)
    return app
