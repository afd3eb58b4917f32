"""Per-chord outgoing transition probabilities."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from chordnet.graph.builder import ChordGraph


def transition_probabilities(graph: ChordGraph) -> Mapping[str, Mapping[str, float]]:
    """Normalize outgoing edge weights of every node to sum to 1.0.

    Returns ``{from_label: {to_label: probability}}`` with an entry for
    every node.  Nodes without outgoing edges map to an empty mapping.
    """
    known = set(graph.labels())
    out_sums: dict[str, int] = {}
    outgoing: dict[str, dict[str, float]] = {label: {} for label in known}
    for edge in graph.edges:
        if edge.source in known and edge.target in known:
            out_sums[edge.source] = out_sums.get(edge.source, 0) + edge.weight

    for edge in graph.edges:
        total = out_sums.get(edge.source, 0)
        if total > 0 and edge.target in known:
            row = outgoing[edge.source]
            row[edge.target] = row.get(edge.target, 0.0) + edge.weight / total

    return MappingProxyType(
        {node.label: MappingProxyType(outgoing[node.label]) for node in graph.nodes}
    )
