"""API consumed by the graph visualization front end."""

from __future__ import annotations

import json
from pathlib import Path

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from include_graph.crawler import TreeCrawler
from include_graph.errors import NotFoundError, RateLimitError, TransportError
from include_graph.exporter.writer import ROOTS_FILE, load_root

router = APIRouter(prefix="/api")


class GraphRequest(BaseModel):
    path: str


def _crawler(request: Request) -> TreeCrawler:
    return request.app.state.crawler


def _snapshot_dir(request: Request) -> Path:
    snapshot_dir = request.app.state.snapshot_dir
    if snapshot_dir is None:
        raise HTTPException(404, "No snapshot directory configured")
    return Path(snapshot_dir)


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(404, str(e))
    if isinstance(e, RateLimitError):
        return HTTPException(
            429, "GitHub API rate limit exceeded. Please provide a Personal Access Token.",
        )
    return HTTPException(502, str(e))


@router.get("/roots")
async def list_roots(request: Request):
    try:
        roots = await _crawler(request).list_roots()
    except (TransportError, NotFoundError) as e:
        raise _http_error(e)
    return {"roots": roots}


@router.post("/graph")
async def analyze_directory(req: GraphRequest, request: Request):
    try:
        result = await _crawler(request).analyze(req.path.strip("/"))
    except (TransportError, NotFoundError) as e:
        raise _http_error(e)
    return {"path": result.path, **result.to_dict()}


@router.get("/snapshot")
async def snapshot_roots(request: Request):
    roots_path = _snapshot_dir(request) / ROOTS_FILE
    if not roots_path.exists():
        raise HTTPException(404, "No snapshot has been generated")
    return {"rootDirectories": json.loads(roots_path.read_text(encoding="utf-8"))}


@router.get("/snapshot/{root}")
async def snapshot_root(root: str, request: Request):
    part = load_root(_snapshot_dir(request), root)
    if part is None:
        raise HTTPException(404, f"No snapshot data for root {root!r}")
    return part.to_dict()
