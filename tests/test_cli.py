"""Tests for the click CLI."""

import json
from unittest.mock import patch

from click.testing import CliRunner

from include_graph.cli import cli
from include_graph.errors import RateLimitError

FILES = {
    "base/a.h": '#include "b.h"\n',
    "base/b.h": '#include "a.h"\n',
    "base/main.cc": '#include "a.h"\n#include <vector>\n',
    "base/memory/ref.h": "",
}


def test_analyze_json(make_source):
    with patch("include_graph.cli.GitHubContentsClient", return_value=make_source(FILES)):
        res = CliRunner().invoke(cli, ["analyze", "base", "--json"])
    assert res.exit_code == 0, res.output
    data = json.loads(res.output)
    assert data["graph"]["leafNodeIds"] == ["main.cc"]
    assert data["subdirectories"] == ["base/memory"]


def test_analyze_report(make_source):
    with patch("include_graph.cli.GitHubContentsClient", return_value=make_source(FILES)):
        res = CliRunner().invoke(cli, ["analyze", "base"])
    assert res.exit_code == 0, res.output
    assert "Unreferenced files (1)" in res.output
    assert "main.cc" in res.output
    assert "a.h -> b.h -> a.h" in res.output
    assert "base/memory" in res.output


def test_analyze_missing_directory(make_source):
    with patch("include_graph.cli.GitHubContentsClient", return_value=make_source(FILES)):
        res = CliRunner().invoke(cli, ["analyze", "nope"])
    assert res.exit_code != 0
    assert "not found" in res.output.lower()


def test_snapshot_command(make_source, tmp_path):
    out = tmp_path / "data"
    with patch("include_graph.pipeline.GitHubContentsClient", return_value=make_source(FILES)):
        res = CliRunner().invoke(cli, ["snapshot", "-o", str(out), "--delay", "0", "--max-roots", "0"])
    assert res.exit_code == 0, res.output
    assert json.loads((out / "roots.json").read_text()) == ["base"]
    assert (out / "roots" / "base.json").exists()


def test_snapshot_rate_limited(make_source, tmp_path):
    source = make_source(FILES, dir_errors={"": RateLimitError("quota", status_code=403)})
    with patch("include_graph.pipeline.GitHubContentsClient", return_value=source):
        res = CliRunner().invoke(cli, ["snapshot", "-o", str(tmp_path), "--delay", "0"])
    assert res.exit_code != 0
    assert "GITHUB_TOKEN" in res.output
