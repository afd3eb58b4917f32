"""Shared helpers for commands: input loading and config resolution."""

from __future__ import annotations

import click

from chordnet.config import AnalysisConfig, get_config
from chordnet.exit_codes import InputError
from chordnet.graph.builder import ChordGraph
from chordnet.output.formatter import format_table, format_table_compact


def open_graph(path: str) -> ChordGraph:
    """Load *path* as a chord graph, mapping input problems to InputError."""
    from chordnet.sequence import load_graph

    try:
        return load_graph(path)
    except (OSError, ValueError) as exc:
        raise InputError(f"{path}: {exc}") from exc


def analysis_config(ctx: click.Context) -> AnalysisConfig:
    """Resolve analysis defaults once per invocation and cache on ctx.obj."""
    obj = ctx.ensure_object(dict)
    if "config" not in obj:
        try:
            obj["config"] = get_config()
        except ValueError as exc:
            raise InputError(f"config: {exc}") from exc
    return obj["config"]


def output_modes(ctx: click.Context) -> tuple[bool, bool]:
    """Return ``(json_mode, compact)`` from the group options."""
    obj = ctx.obj or {}
    return bool(obj.get("json")), bool(obj.get("compact"))


def table(headers: list[str], rows: list[list], compact: bool, budget: int = 0) -> str:
    if compact:
        return format_table_compact(headers, rows, budget)
    return format_table(headers, rows, budget)
