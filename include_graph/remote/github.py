"""Async client for the GitHub repository-contents API."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from include_graph.errors import NotFoundError, RateLimitError, TransportError
from include_graph.models import CrawlConfig, DirectoryEntry
from include_graph.remote.base import RepositorySource
from include_graph.remote.throttle import RequestThrottle

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/vnd.github.v3+json"
RAW_ACCEPT = "application/vnd.github.v3.raw"

# Statuses after which further requests are pointless
_QUOTA_STATUSES = {401, 403, 429}


class GitHubContentsClient(RepositorySource):
    """List directories and fetch raw files through ``/repos/{repo}/contents``."""

    def __init__(
        self,
        config: CrawlConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.config = config or CrawlConfig()
        self.throttle = RequestThrottle(
            request_delay=self.config.request_delay,
            max_requests=self.config.max_requests,
            window_seconds=self.config.window_seconds,
        )
        self.client = httpx.AsyncClient(
            timeout=self.config.timeout,
            headers={"User-Agent": self.config.user_agent},
            transport=transport,
        )
        if not self.config.token:
            logger.warning("No GitHub token configured; API rate limits will be very restrictive")

    async def list_directory(self, path: str) -> list[DirectoryEntry]:
        response = await self._get(path, JSON_ACCEPT)
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"Malformed listing for {path!r}: {e}",
                path=path,
                status_code=response.status_code,
            ) from e
        if not isinstance(data, list):
            raise NotFoundError(path, f"Not a directory: {path!r}")
        try:
            return [DirectoryEntry.from_api(item) for item in data]
        except (KeyError, TypeError, AttributeError) as e:
            raise TransportError(
                f"Malformed listing entry for {path!r}: {e!r}",
                path=path,
                status_code=response.status_code,
            ) from e

    async def get_content(self, path: str) -> str:
        response = await self._get(path, RAW_ACCEPT)
        return response.text

    async def close(self) -> None:
        await self.client.aclose()

    def _url(self, path: str) -> str:
        path = path.strip("/")
        if not path:
            return f"{self.config.contents_url}/"
        return f"{self.config.contents_url}/{quote(path, safe='/')}"

    async def _get(self, path: str, accept: str) -> httpx.Response:
        url = self._url(path)
        params = {"ref": self.config.ref} if self.config.ref else None
        headers = {"Accept": accept}
        if self.config.token:
            headers["Authorization"] = f"token {self.config.token}"

        try:
            await self.throttle.acquire()
            logger.debug("GET %s", url)
            response = await self.client.get(url, headers=headers, params=params)

            if response.status_code == 401 and "Authorization" in headers:
                logger.warning("Authentication failed (401) for %r; retrying without token", path)
                del headers["Authorization"]
                await self.throttle.acquire()
                response = await self.client.get(url, headers=headers, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request for {path!r} failed: {e}", path=path) from e

        self._raise_for_status(response, path)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, path: str) -> None:
        status = response.status_code
        if status < 400:
            return
        if status == 404:
            raise NotFoundError(path)
        if status in _QUOTA_STATUSES:
            raise RateLimitError(
                f"GitHub API refused {path!r} ({status}); rate limit exceeded or token rejected",
                path=path,
                status_code=status,
            )
        raise TransportError(
            f"GitHub API returned {status} for {path!r}",
            path=path,
            status_code=status,
        )
