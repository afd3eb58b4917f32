"""Similarity between two chord transition graphs."""

from __future__ import annotations

import math
from dataclasses import dataclass

from chordnet.graph.builder import ChordGraph


@dataclass(frozen=True)
class GraphComparison:
    jaccard_nodes: float
    jaccard_edges: float
    cosine: float


def _jaccard(a: set, b: set) -> float:
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def compare_graphs(a: ChordGraph, b: ChordGraph) -> GraphComparison:
    """Compare *a* and *b* by node overlap, edge overlap and edge weights.

    - ``jaccard_nodes``: |labels(a) & labels(b)| / |labels(a) | labels(b)|
    - ``jaccard_edges``: same over directed ``(from, to)`` keys
    - ``cosine``: cosine of the edge-weight vectors over the union of
      edge keys, a missing edge counting as weight 0

    Every metric is 0.0 when its denominator would be zero.
    """
    weights_a = a.edge_weights()
    weights_b = b.edge_weights()
    keys = weights_a.keys() | weights_b.keys()

    dot = mag_a = mag_b = 0.0
    for key in keys:
        wa = weights_a.get(key, 0)
        wb = weights_b.get(key, 0)
        dot += wa * wb
        mag_a += wa * wa
        mag_b += wb * wb
    denom = math.sqrt(mag_a) * math.sqrt(mag_b)

    return GraphComparison(
        jaccard_nodes=_jaccard(set(a.labels()), set(b.labels())),
        jaccard_edges=_jaccard(set(weights_a), set(weights_b)),
        cosine=dot / denom if denom > 0 else 0.0,
    )
