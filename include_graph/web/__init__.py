"""Web API for the visualization front end."""

from include_graph.web.app import create_app

__all__ = ["create_app"]
