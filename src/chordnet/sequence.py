"""Load chord sequences and exported graphs from disk."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from chordnet.graph.builder import (
    ChordGraph,
    ChordItem,
    GraphFormatError,
    build_transition_graph,
    coerce_item,
    graph_from_dict,
)

log = logging.getLogger(__name__)


def _read_json(path: Path):
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise GraphFormatError(f"{path}: invalid JSON ({exc})") from exc


def _items_from_document(doc, path: Path) -> list[ChordItem]:
    if isinstance(doc, dict):
        if "chords" not in doc:
            raise GraphFormatError(f"{path}: expected a list of chords or an object with 'chords'")
        doc = doc["chords"]
    if not isinstance(doc, list):
        raise GraphFormatError(f"{path}: 'chords' must be a list")
    try:
        return [coerce_item(entry) for entry in doc]
    except (TypeError, ValueError) as exc:
        raise GraphFormatError(f"{path}: {exc}") from exc


def load_sequence(path: str | Path) -> list[ChordItem]:
    """Read a chord sequence.

    ``.txt`` files hold whitespace-separated labels.  Anything else is
    parsed as JSON: a list of labels or ``{"label", "root", "quality"}``
    objects, optionally wrapped as ``{"chords": [...]}``.
    """
    path = Path(path)
    if path.suffix.lower() == ".txt":
        items = [ChordItem(token) for token in path.read_text(encoding="utf-8").split()]
    else:
        items = _items_from_document(_read_json(path), path)
    log.info("Read %d chords from %s", len(items), path)
    return items


def load_graph(path: str | Path) -> ChordGraph:
    """Load an exported graph document, or build one from a sequence file."""
    path = Path(path)
    if path.suffix.lower() != ".txt":
        doc = _read_json(path)
        if isinstance(doc, dict) and "nodes" in doc and "edges" in doc:
            return graph_from_dict(doc)
        return build_transition_graph(_items_from_document(doc, path))
    return build_transition_graph(load_sequence(path))
