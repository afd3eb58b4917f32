"""Plain-text tables and JSON envelopes for CLI output."""

from __future__ import annotations

import json as _json
from datetime import datetime, timezone

# Envelope schema versioning (semver: major.minor.patch)
ENVELOPE_SCHEMA_VERSION = "1.0.0"
ENVELOPE_SCHEMA_NAME = "chordnet-envelope-v1"


def section(title: str, lines: list[str], budget: int = 0) -> str:
    out = [title]
    if budget and len(lines) > budget:
        out.extend(lines[:budget])
        out.append(f"  (+{len(lines) - budget} more)")
    else:
        out.extend(lines)
    return "\n".join(out)


def format_score(value: float, digits: int = 4) -> str:
    return f"{value:.{digits}f}"


def format_table(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    if not rows:
        return "(none)"
    widths = [len(h) for h in headers]
    num_cols = len(widths)
    for row in rows:
        for i, cell in enumerate(row):
            if i < num_cols:
                widths[i] = max(widths[i], len(str(cell)))
    lines = []
    lines.append("  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)))
    lines.append("  ".join("-" * w for w in widths))
    display_rows = rows[:budget] if budget and len(rows) > budget else rows
    for row in display_rows:
        lines.append("  ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def format_table_compact(headers: list[str], rows: list[list[str]], budget: int = 0) -> str:
    """Tab-separated table output for scripts and agents."""
    if not rows:
        return "(none)"
    lines = ["\t".join(headers)]
    display_rows = rows[:budget] if budget and len(rows) > budget else rows
    for row in display_rows:
        lines.append("\t".join(str(cell) for cell in row))
    if budget and len(rows) > budget:
        lines.append(f"(+{len(rows) - budget} more)")
    return "\n".join(lines)


def to_json(data) -> str:
    """Serialize data to a JSON string with deterministic key ordering.

    Uses ``sort_keys=True`` so that identical data always produces
    byte-identical output.
    """
    return _json.dumps(data, indent=2, default=str, sort_keys=True)


def _compact_mode_enabled() -> bool:
    """Return True when the CLI requested compact output."""
    import click

    ctx = click.get_current_context(silent=True)
    if ctx and isinstance(ctx.obj, dict):
        return bool(ctx.obj.get("compact"))
    return False


def _get_version() -> str:
    from chordnet import __version__

    return __version__


def compact_json_envelope(command: str, **payload) -> dict:
    """Minimal JSON envelope: command name and payload only."""
    out = {"command": command}
    out.update(payload)
    return out


def json_envelope(command: str, summary: dict | None = None, **payload) -> dict:
    """Wrap command output in a self-describing envelope.

    Non-deterministic metadata (``timestamp``) lives in ``_meta`` so the
    content keys stay byte-identical across runs on the same input.

    Returns a dict with at minimum::

        {
            "schema":         "chordnet-envelope-v1",
            "schema_version": "1.0.0",
            "command":        "centrality",
            "version":        "<current>",
            "summary":        { "verdict": ..., ... },
            "_meta":          { "timestamp": "2026-02-12T14:30:00Z" },
            ...payload
        }
    """
    if _compact_mode_enabled():
        return compact_json_envelope(command, summary=summary or {}, **payload)

    ts = datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
    out: dict = {
        "schema": ENVELOPE_SCHEMA_NAME,
        "schema_version": ENVELOPE_SCHEMA_VERSION,
        "command": command,
        "version": _get_version(),
        "summary": summary or {},
    }
    out.update(payload)
    out["_meta"] = {"timestamp": ts}
    return out
