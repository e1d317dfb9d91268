"""Remote repository access."""

from include_graph.remote.base import RepositorySource
from include_graph.remote.github import GitHubContentsClient
from include_graph.remote.throttle import RequestThrottle

__all__ = ["GitHubContentsClient", "RepositorySource", "RequestThrottle"]
