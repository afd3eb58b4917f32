"""Shared test fixtures and helpers for chordnet tests.

Provides:
- Graph helpers: graph_from_labels(), graph_from_edges()
- CliRunner fixtures: cli_runner, invoke_cli()
- Input file factory: sequence_file
- JSON validation helpers: parse_json_output(), assert_json_envelope()
"""

from __future__ import annotations

import json
import os

import pytest
from click.testing import CliRunner

from chordnet.graph.builder import ChordEdge, ChordGraph, ChordNode, build_transition_graph

# ===========================================================================
# Graph helpers
# ===========================================================================


def graph_from_labels(*labels):
    """Build a transition graph from bare chord labels."""
    return build_transition_graph(list(labels))


def graph_from_edges(nodes, edges):
    """Hand-build a graph: *nodes* is a list of labels, *edges* (src, tgt, w)."""
    return ChordGraph(
        nodes=tuple(ChordNode(label, 0, "", 1) for label in nodes),
        edges=tuple(ChordEdge(src, tgt, w) for src, tgt, w in edges),
    )


# ===========================================================================
# CliRunner helpers
# ===========================================================================


@pytest.fixture
def cli_runner():
    """Provide a Click CliRunner for in-process CLI testing."""
    return CliRunner()


def invoke_cli(runner, args, cwd=None, json_mode=False, compact=False):
    """Invoke the chordnet CLI via CliRunner.

    Args:
        runner: CliRunner instance
        args: list of CLI arguments (e.g. ["centrality", "song.json"])
        cwd: directory to run in (config discovery starts here)
        json_mode: if True, prepend --json flag
        compact: if True, prepend --compact flag
    Returns:
        click.testing.Result
    """
    from chordnet.cli import cli

    full_args = []
    if json_mode:
        full_args.append("--json")
    if compact:
        full_args.append("--compact")
    full_args.extend(args)

    old_cwd = os.getcwd()
    try:
        if cwd:
            os.chdir(str(cwd))
        result = runner.invoke(cli, full_args, catch_exceptions=False)
    finally:
        os.chdir(old_cwd)
    return result


# ===========================================================================
# JSON validation helpers
# ===========================================================================


def parse_json_output(result, command=None):
    """Parse JSON from a CliRunner result, failing with context on error."""
    assert result.exit_code == 0, f"Command {command or '?'} failed (exit {result.exit_code}):\n{result.output}"
    try:
        return json.loads(result.output)
    except json.JSONDecodeError as e:
        pytest.fail(f"Invalid JSON from {command or '?'}: {e}\nOutput was:\n{result.output[:500]}")


def assert_json_envelope(data, command=None):
    """Validate that a parsed JSON dict follows the chordnet envelope contract."""
    assert isinstance(data, dict), f"Expected dict, got {type(data)}"
    assert "command" in data, "Missing 'command' key in envelope"
    assert "version" in data, "Missing 'version' key in envelope"
    assert "summary" in data, "Missing 'summary' key in envelope"
    assert "timestamp" in data.get("_meta", {}), "Missing 'timestamp' in _meta"
    if command:
        assert data["command"] == command, f"Expected command={command}, got {data['command']}"
    summary = data["summary"]
    assert isinstance(summary, dict), f"summary should be dict, got {type(summary)}"
    assert isinstance(summary.get("verdict"), str), "summary should carry a verdict string"


# ===========================================================================
# Input file fixtures
# ===========================================================================


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Isolated working directory with no CHORDNET_* environment overrides."""
    for key in list(os.environ):
        if key.startswith("CHORDNET_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def sequence_file(workdir):
    """Factory writing a chord sequence to a JSON (or .txt) file.

    Usage:
        path = sequence_file(["C", "F", "G", "C"])
        path = sequence_file("C F G C", name="song.txt")
    """

    def _create(chords, name="song.json"):
        path = workdir / name
        if isinstance(chords, str):
            path.write_text(chords, encoding="utf-8")
        else:
            path.write_text(json.dumps(chords), encoding="utf-8")
        return path

    return _create
