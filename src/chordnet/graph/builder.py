"""Build chord transition graphs from ordered chord sequences."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import networkx as nx

log = logging.getLogger(__name__)


class EmptySequenceError(ValueError):
    """Raised when a transition graph is requested for zero chords."""


class GraphFormatError(ValueError):
    """Raised when a serialized graph or sequence document is malformed."""


@dataclass(frozen=True)
class ChordItem:
    """One observed chord in a time-ordered sequence."""

    label: str
    root: int = 0
    quality: str = ""


@dataclass(frozen=True)
class ChordNode:
    """A unique chord label with its occurrence count."""

    label: str
    root: int
    quality: str
    count: int


@dataclass(frozen=True)
class ChordEdge:
    """A directed transition ``source -> target`` seen ``weight`` times."""

    source: str
    target: str
    weight: int


@dataclass(frozen=True)
class ChordGraph:
    """Immutable directed weighted chord transition graph.

    Nodes are unique by label and edges unique by ``(source, target)``
    when produced by :func:`build_transition_graph`.  Hand-built graphs
    may violate that; the analyses skip edges whose endpoints are unknown.
    """

    nodes: tuple[ChordNode, ...]
    edges: tuple[ChordEdge, ...]

    def labels(self) -> list[str]:
        return [node.label for node in self.nodes]

    def node(self, label: str) -> ChordNode | None:
        for node in self.nodes:
            if node.label == label:
                return node
        return None

    def edge_weights(self) -> dict[tuple[str, str], int]:
        return {(e.source, e.target): e.weight for e in self.edges}

    def index(self) -> dict[str, int]:
        """Return the ``{label: position}`` table used by the analyses."""
        return {node.label: i for i, node in enumerate(self.nodes)}


def coerce_item(item) -> ChordItem:
    if isinstance(item, ChordItem):
        return item
    if isinstance(item, str):
        return ChordItem(item)
    if isinstance(item, Mapping):
        if "label" not in item:
            raise GraphFormatError(f"chord entry has no label: {item!r}")
        return ChordItem(str(item["label"]), int(item.get("root", 0)), str(item.get("quality", "")))
    try:
        return ChordItem(str(item.label), int(item.root), str(item.quality))
    except AttributeError as exc:
        raise GraphFormatError(f"cannot read a chord from {item!r}") from exc


def build_transition_graph(items: Iterable) -> ChordGraph:
    """Build a transition graph from an ordered chord sequence.

    Each distinct label becomes a node carrying the root/quality of its
    first occurrence and its total count.  Each consecutive pair adds one
    to the weight of the directed edge between them.  Nodes and edges are
    emitted in first-seen order.

    Raises :class:`EmptySequenceError` when *items* is empty.
    """
    chords = [coerce_item(item) for item in items]
    if not chords:
        raise EmptySequenceError("chord sequence must not be empty")

    first_seen: dict[str, ChordItem] = {}
    counts: dict[str, int] = {}
    for chord in chords:
        if chord.label not in first_seen:
            first_seen[chord.label] = chord
            counts[chord.label] = 0
        counts[chord.label] += 1

    weights: dict[tuple[str, str], int] = {}
    for prev, cur in zip(chords, chords[1:]):
        key = (prev.label, cur.label)
        weights[key] = weights.get(key, 0) + 1

    nodes = tuple(
        ChordNode(label, chord.root, chord.quality, counts[label]) for label, chord in first_seen.items()
    )
    edges = tuple(ChordEdge(src, tgt, w) for (src, tgt), w in weights.items())
    log.info("Built transition graph: %d nodes, %d edges from %d chords", len(nodes), len(edges), len(chords))
    return ChordGraph(nodes=nodes, edges=edges)


def to_networkx(graph: ChordGraph) -> nx.DiGraph:
    """Return a frozen NetworkX view of *graph*.

    Nodes are labels with attributes: root, quality, count.
    Edges carry a ``weight`` attribute.
    """
    G = nx.DiGraph()
    G.add_nodes_from((n.label, {"root": n.root, "quality": n.quality, "count": n.count}) for n in graph.nodes)
    node_set = set(G)
    skipped = 0
    for edge in graph.edges:
        if edge.source in node_set and edge.target in node_set:
            G.add_edge(edge.source, edge.target, weight=edge.weight)
        else:
            skipped += 1
    if skipped:
        log.warning("Skipped %d edges with unknown endpoints", skipped)
    return nx.freeze(G)


def graph_to_dict(graph: ChordGraph) -> dict:
    """Serialize *graph* to plain data (``{"nodes": [...], "edges": [...]}``)."""
    return {
        "nodes": [
            {"label": n.label, "root": n.root, "quality": n.quality, "count": n.count} for n in graph.nodes
        ],
        "edges": [{"from": e.source, "to": e.target, "weight": e.weight} for e in graph.edges],
    }


def graph_from_dict(data: Mapping) -> ChordGraph:
    """Rebuild a graph serialized by :func:`graph_to_dict`.

    Raises :class:`GraphFormatError` on missing keys, bad value types, or
    node counts and edge weights below 1.
    """
    try:
        nodes = tuple(
            ChordNode(str(n["label"]), int(n.get("root", 0)), str(n.get("quality", "")), int(n.get("count", 1)))
            for n in data["nodes"]
        )
        edges = tuple(ChordEdge(str(e["from"]), str(e["to"]), int(e["weight"])) for e in data["edges"])
    except (KeyError, TypeError, ValueError) as exc:
        raise GraphFormatError(f"malformed graph document: {exc}") from exc
    for node in nodes:
        if node.count < 1:
            raise GraphFormatError(f"malformed graph document: node {node.label!r} has count {node.count}")
    for edge in edges:
        if edge.weight < 1:
            raise GraphFormatError(
                f"malformed graph document: edge {edge.source!r} -> {edge.target!r} has weight {edge.weight}"
            )
    return ChordGraph(nodes=nodes, edges=edges)


def graph_summary(graph: ChordGraph) -> dict:
    """Structural overview used by the ``build`` command.

    ``tangled_components`` counts strongly connected components with more
    than one chord, i.e. groups of chords that can reach each other.
    """
    G = to_networkx(graph)
    n = len(G)
    sccs = [c for c in nx.strongly_connected_components(G) if len(c) > 1] if n else []
    return {
        "nodes": len(graph.nodes),
        "edges": len(graph.edges),
        "transitions": sum(e.weight for e in graph.edges),
        "self_loops": sum(1 for e in graph.edges if e.source == e.target),
        "density": round(nx.density(G), 4) if n > 1 else 0.0,
        "tangled_components": len(sccs),
        "largest_component": max((len(c) for c in sccs), default=0),
    }
