"""Click CLI with analyze, snapshot, and serve subcommands."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import click

from include_graph.analysis.dependency_graph import GraphBuilder
from include_graph.crawler import TreeCrawler
from include_graph.errors import IncludeGraphError, RateLimitError
from include_graph.models import CrawlConfig
from include_graph.pipeline import run_snapshot
from include_graph.remote.github import GitHubContentsClient


def _remote_options(func):
    func = click.option("--repo", default="chromium/chromium", show_default=True, help="GitHub owner/name")(func)
    func = click.option("--ref", default=None, help="Branch, tag or commit to read")(func)
    func = click.option("--token", envvar="GITHUB_TOKEN", default="", help="GitHub token (or GITHUB_TOKEN)")(func)
    func = click.option("--delay", type=float, default=0.5, show_default=True, help="Seconds to wait before each request")(func)
    return func


@click.group()
@click.version_option(version="0.1.0")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
def cli(verbose: bool):
    """include-graph: Map #include dependencies of a remote C/C++ source tree."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.argument("path")
@_remote_options
@click.option("--json", "as_json", is_flag=True, help="Print the graph document as JSON")
def analyze(path: str, repo: str, ref: str | None, token: str, delay: float, as_json: bool):
    """Analyze the includes of a single directory."""
    config = CrawlConfig(repo=repo, ref=ref, token=token, request_delay=delay)
    builder = GraphBuilder(config.extensions)

    def progress(stage: str, current: int, total: int):
        if not as_json and total > 0:
            click.echo(f"\r  {stage}: {current}/{total}", nl=(current == total))

    async def _run():
        async with GitHubContentsClient(config) as source:
            return await TreeCrawler(source, builder=builder).analyze(path.strip("/"), progress=progress)

    try:
        result = asyncio.run(_run())
    except IncludeGraphError as e:
        raise click.ClickException(str(e))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    graph = result.graph
    click.echo(f"\n{click.style(result.path or '<root>', fg='cyan')}")
    click.echo(f"  files:     {len(graph.internal_nodes)}")
    click.echo(f"  external:  {len(graph.external_nodes)}")
    click.echo(f"  includes:  {len(graph.edges)}")

    if graph.leaf_node_ids:
        click.echo(f"\nUnreferenced files ({len(graph.leaf_node_ids)}):")
        for leaf in graph.leaf_node_ids:
            click.echo(f"  {click.style(leaf, fg='yellow')}")

    cycles = builder.detect_cycles(graph)
    if cycles:
        click.echo(f"\nInclude cycles ({len(cycles)}):")
        for cycle in cycles:
            click.echo(f"  {click.style(' -> '.join(cycle), fg='red')}")

    if result.subdirectories:
        click.echo(f"\nSubdirectories ({len(result.subdirectories)}):")
        for sub in result.subdirectories:
            click.echo(f"  {sub}")


@cli.command()
@_remote_options
@click.option("-o", "--output", "output_dir", type=click.Path(file_okay=False, path_type=Path), default="public/data", show_default=True, help="Output directory")
@click.option("--max-roots", type=int, default=10, show_default=True, help="Top-level directories to crawl (0 = all)")
@click.option("--depth", type=int, default=1, show_default=True, help="Subdirectory levels below each root")
@click.option("--single-file", is_flag=True, help="Write one snapshot.json instead of one file per root")
def snapshot(
    repo: str,
    ref: str | None,
    token: str,
    delay: float,
    output_dir: Path,
    max_roots: int,
    depth: int,
    single_file: bool,
):
    """Crawl the repository and write graph snapshots for offline use."""
    config = CrawlConfig(
        repo=repo,
        ref=ref,
        token=token,
        request_delay=delay,
        max_roots=max_roots or None,
        max_depth=depth,
        output_dir=output_dir,
        partitioned=not single_file,
    )

    click.echo(f"Crawling {repo} -> {output_dir}\n")
    try:
        report = asyncio.run(run_snapshot(config))
    except RateLimitError as e:
        raise click.ClickException(f"{e}. Provide a token with --token or GITHUB_TOKEN.")
    except IncludeGraphError as e:
        raise click.ClickException(str(e))

    click.echo(f"\nDone! Analyzed {len(report.snapshot.graphs)} director(ies)")
    for f in report.files_written:
        click.echo(f"  {f}")
    if report.failures:
        click.echo(click.style(f"\n{len(report.failures)} director(ies) failed:", fg="red"))
        for failure in report.failures.values():
            click.echo(f"  {failure.path}: {failure.error}")


@cli.command()
@click.option("--port", "-p", default=8430, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
@click.option("--snapshot-dir", type=click.Path(file_okay=False, path_type=Path), default="public/data", help="Snapshot directory to serve")
@_remote_options
def serve(port: int, host: str, snapshot_dir: Path, repo: str, ref: str | None, token: str, delay: float):
    """Start the graph API server."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the API server. "
            "Install with: pip install 'include-graph[web]'"
        )

    from include_graph.web import create_app

    config = CrawlConfig(repo=repo, ref=ref, token=token, request_delay=delay)
    click.echo(f"Starting include-graph API at http://{host}:{port}")
    uvicorn.run(create_app(config, snapshot_dir=snapshot_dir), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
