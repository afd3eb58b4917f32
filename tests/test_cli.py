"""Tests for the chordnet CLI: text, compact and JSON output, exit codes.

Covers:
1. Every command in text and --json mode
2. Config file / option precedence
3. Input errors mapped to EXIT_INPUT
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))
from conftest import assert_json_envelope, invoke_cli, parse_json_output

from chordnet.exit_codes import DESCRIPTIONS, EXIT_INPUT, EXIT_USAGE, ChordnetError, InputError

SONG = ["C", "Am", "F", "G", "C", "Am", "F", "G", "C"]


@pytest.fixture
def song(sequence_file):
    return sequence_file(SONG)


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_input_error_carries_code(self):
        err = InputError("bad file")
        assert isinstance(err, ChordnetError)
        assert err.exit_code == EXIT_INPUT == 3
        assert err.format_message() == "bad file"

    def test_empty_sequence_exit_code(self, cli_runner, sequence_file, workdir):
        path = sequence_file([])
        result = invoke_cli(cli_runner, ["build", str(path)], cwd=workdir)
        assert result.exit_code == EXIT_INPUT
        assert "must not be empty" in result.output

    def test_malformed_file_exit_code(self, cli_runner, sequence_file, workdir):
        path = sequence_file("{oops", name="bad.json")
        result = invoke_cli(cli_runner, ["cycles", str(path)], cwd=workdir)
        assert result.exit_code == EXIT_INPUT

    def test_missing_file_is_usage_error(self, cli_runner, workdir):
        result = invoke_cli(cli_runner, ["build", "nope.json"], cwd=workdir)
        assert result.exit_code == EXIT_USAGE

    def test_bad_damping(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["centrality", str(song), "--damping", "1.5"], cwd=workdir)
        assert result.exit_code == EXIT_INPUT
        assert "damping" in result.output

    def test_zero_weight_export_exit_code(self, cli_runner, sequence_file, workdir):
        doc = {"nodes": [{"label": "A"}, {"label": "B"}], "edges": [{"from": "A", "to": "B", "weight": 0}]}
        path = sequence_file(doc, name="graph.json")
        result = invoke_cli(cli_runner, ["communities", str(path)], cwd=workdir)
        assert result.exit_code == EXIT_INPUT
        assert "weight 0" in result.output

    def test_bad_config_file(self, cli_runner, song, workdir):
        (workdir / ".chordnet.json").write_text(json.dumps({"iterations": "lots"}), encoding="utf-8")
        result = invoke_cli(cli_runner, ["centrality", str(song)], cwd=workdir)
        assert result.exit_code == EXIT_INPUT


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


class TestBuild:
    def test_text(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["build", str(song)], cwd=workdir)
        assert result.exit_code == 0
        assert "VERDICT: 4 chords, 4 distinct transitions" in result.output
        assert "NODES:" in result.output
        assert "EDGES:" in result.output

    def test_json(self, cli_runner, song, workdir):
        data = parse_json_output(invoke_cli(cli_runner, ["build", str(song)], cwd=workdir, json_mode=True), "build")
        assert_json_envelope(data, "build")
        assert data["summary"]["nodes"] == 4
        assert data["summary"]["transitions"] == 8
        assert {"from": "G", "to": "C", "weight": 2} in data["graph"]["edges"]

    def test_export_and_reload(self, cli_runner, song, workdir):
        out = workdir / "graph.json"
        result = invoke_cli(cli_runner, ["build", str(song), "--export", str(out)], cwd=workdir)
        assert result.exit_code == 0
        exported = json.loads(out.read_text(encoding="utf-8"))
        assert len(exported["nodes"]) == 4

        again = invoke_cli(cli_runner, ["build", str(out)], cwd=workdir, json_mode=True)
        assert parse_json_output(again)["graph"] == exported

    def test_compact(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["build", str(song)], cwd=workdir, compact=True)
        assert "label\troot\tquality\tcount" in result.output


class TestTransitions:
    def test_json(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["C", "F", "C", "G"])
        data = parse_json_output(invoke_cli(cli_runner, ["transitions", str(path)], cwd=workdir, json_mode=True))
        assert_json_envelope(data, "transitions")
        assert data["transitions"]["C"] == {"F": 0.5, "G": 0.5}
        assert data["summary"]["terminal"] == ["G"]

    def test_text(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["transitions", str(song)], cwd=workdir)
        assert result.exit_code == 0
        assert "1.000" in result.output


class TestCentrality:
    def test_json(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["A", "B", "A", "B", "C"])
        data = parse_json_output(invoke_cli(cli_runner, ["centrality", str(path)], cwd=workdir, json_mode=True))
        assert_json_envelope(data, "centrality")
        chords = {c["label"]: c for c in data["chords"]}
        assert data["chords"][0]["label"] == "B"
        assert chords["B"]["betweenness"] == 1.0
        assert sum(c["pagerank"] for c in data["chords"]) == pytest.approx(1.0)
        assert data["summary"]["iterations"] == 100

    def test_top(self, cli_runner, song, workdir):
        data = parse_json_output(
            invoke_cli(cli_runner, ["centrality", str(song), "--top", "2"], cwd=workdir, json_mode=True)
        )
        assert len(data["chords"]) == 2

    def test_config_file_defaults(self, cli_runner, song, workdir):
        (workdir / ".chordnet.json").write_text(json.dumps({"iterations": 3, "damping": 0.5}), encoding="utf-8")
        data = parse_json_output(invoke_cli(cli_runner, ["centrality", str(song)], cwd=workdir, json_mode=True))
        assert data["summary"]["iterations"] == 3
        assert data["summary"]["damping"] == 0.5

    def test_option_beats_env(self, cli_runner, song, workdir, monkeypatch):
        monkeypatch.setenv("CHORDNET_ITERATIONS", "5")
        args = ["centrality", str(song), "--iterations", "9"]
        data = parse_json_output(invoke_cli(cli_runner, args, cwd=workdir, json_mode=True))
        assert data["summary"]["iterations"] == 9

    def test_text(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["centrality", str(song)], cwd=workdir)
        assert result.exit_code == 0
        assert "pagerank" in result.output
        assert "damping=0.85  iterations=100" in result.output

    def test_empty_graph_verdict(self, cli_runner, sequence_file, workdir):
        path = sequence_file({"nodes": [], "edges": []}, name="graph.json")
        result = invoke_cli(cli_runner, ["centrality", str(path)], cwd=workdir)
        assert result.exit_code == 0
        assert "VERDICT: no chords to rank" in result.output
        assert "None" not in result.output


class TestCommunities:
    def test_json(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["C", "G", "C", "G", "C", "Am", "Em", "Am", "Em", "Am"])
        data = parse_json_output(invoke_cli(cli_runner, ["communities", str(path)], cwd=workdir, json_mode=True))
        assert_json_envelope(data, "communities")
        assert data["summary"]["count"] == len(data["communities"])
        assert set(data["assignment"]) == {"C", "G", "Am", "Em"}
        assert "modularity" in data["summary"]

    def test_text(self, cli_runner, song, workdir):
        result = invoke_cli(cli_runner, ["communities", str(song)], cwd=workdir)
        assert result.exit_code == 0
        assert "communities" in result.output


class TestCycles:
    def test_json(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["G", "C", "F", "G", "C"])
        data = parse_json_output(invoke_cli(cli_runner, ["cycles", str(path)], cwd=workdir, json_mode=True))
        assert_json_envelope(data, "cycles")
        assert data["cycles"] == [["C", "F", "G"]]
        assert data["summary"]["by_length"] == {"3": 1}

    def test_max_length(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["G", "C", "F", "G"])
        args = ["cycles", str(path), "--max-length", "2"]
        data = parse_json_output(invoke_cli(cli_runner, args, cwd=workdir, json_mode=True))
        assert data["cycles"] == []

    def test_text(self, cli_runner, sequence_file, workdir):
        path = sequence_file(["G", "C", "F", "G"])
        result = invoke_cli(cli_runner, ["cycles", str(path)], cwd=workdir)
        assert "C -> F -> G -> C" in result.output


class TestCompare:
    def test_same_file(self, cli_runner, song, workdir):
        data = parse_json_output(
            invoke_cli(cli_runner, ["compare", str(song), str(song)], cwd=workdir, json_mode=True)
        )
        assert_json_envelope(data, "compare")
        assert data["summary"]["jaccard_nodes"] == 1.0
        assert data["summary"]["jaccard_edges"] == 1.0
        assert data["summary"]["cosine"] == pytest.approx(1.0)

    def test_text(self, cli_runner, song, sequence_file, workdir):
        other = sequence_file("D A D", name="other.txt")
        result = invoke_cli(cli_runner, ["compare", str(song), str(other)], cwd=workdir)
        assert result.exit_code == 0
        assert "chords 0% shared" in result.output


class TestHelp:
    def test_lists_commands(self, cli_runner):
        result = invoke_cli(cli_runner, ["--help"])
        assert result.exit_code == 0
        for name in ("build", "transitions", "centrality", "communities", "cycles", "compare"):
            assert name in result.output

    def test_lists_exit_codes(self, cli_runner):
        result = invoke_cli(cli_runner, ["--help"])
        assert "Exit codes:" in result.output
        for code, text in DESCRIPTIONS.items():
            assert f"{code}  {text}" in result.output
