"""PageRank and betweenness centrality for chord transition graphs."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from chordnet.graph.builder import ChordGraph

log = logging.getLogger(__name__)

DEFAULT_DAMPING = 0.85
DEFAULT_ITERATIONS = 100

_EMPTY: Mapping[str, float] = MappingProxyType({})


@dataclass(frozen=True)
class CentralityResult:
    """PageRank (sums to ~1.0) and raw betweenness, keyed by chord label."""

    pagerank: Mapping[str, float]
    betweenness: Mapping[str, float]


def _adjacency(graph: ChordGraph, index: dict[str, int]) -> list[list[tuple[int, int]]]:
    """Index-addressed ``[(target, weight), ...]`` lists, unknown endpoints dropped."""
    adj: list[list[tuple[int, int]]] = [[] for _ in range(len(index))]
    for edge in graph.edges:
        src = index.get(edge.source)
        tgt = index.get(edge.target)
        if src is not None and tgt is not None:
            adj[src].append((tgt, edge.weight))
    return adj


def _validate(damping: float, iterations: int) -> None:
    if isinstance(damping, bool) or not 0.0 < damping <= 1.0:
        raise ValueError(f"damping must be in (0, 1], got {damping!r}")
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 1:
        raise ValueError(f"iterations must be a positive integer, got {iterations!r}")


def compute_pagerank(
    graph: ChordGraph,
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
) -> Mapping[str, float]:
    """Compute PageRank by power iteration over weighted out-edges.

    Every iteration gives each node ``(1 - damping) / n`` and passes
    ``damping * rank`` of each node along its out-edges in proportion to
    edge weight.  Dangling nodes (zero out-weight) spread their damped
    rank uniformly over all nodes, so the total stays 1.0.

    Always runs exactly *iterations* rounds; there is no tolerance check.
    Returns ``{label: score}``, empty for an empty graph.
    """
    _validate(damping, iterations)
    labels = [node.label for node in graph.nodes]
    n = len(labels)
    if n == 0:
        return _EMPTY

    adj = _adjacency(graph, {label: i for i, label in enumerate(labels)})
    out_weight = [sum(w for _, w in edges) for edges in adj]

    ranks = [1.0 / n] * n
    for _ in range(iterations):
        new_ranks = [(1.0 - damping) / n] * n
        for i in range(n):
            if adj[i] and out_weight[i] > 0:
                share = damping * ranks[i] / out_weight[i]
                for j, w in adj[i]:
                    new_ranks[j] += share * w
            else:
                spread = damping * ranks[i] / n
                for j in range(n):
                    new_ranks[j] += spread
        ranks = new_ranks

    log.debug("PageRank: %d nodes, %d iterations, damping %.3f", n, iterations, damping)
    return MappingProxyType(dict(zip(labels, ranks)))


def compute_betweenness(graph: ChordGraph) -> Mapping[str, float]:
    """Compute unnormalized shortest-path betweenness (Brandes, 2001).

    Shortest paths follow directed edges and ignore weights.  For every
    source a BFS records distances, path counts (sigma) and predecessor
    lists; nodes are then popped in reverse discovery order and their
    dependency pushed back to predecessors in proportion to
    ``sigma[v] / sigma[w]``.  The source never scores for its own paths.

    Returns ``{label: score}``, empty for an empty graph.
    """
    labels = [node.label for node in graph.nodes]
    n = len(labels)
    if n == 0:
        return _EMPTY

    adj = [[j for j, _ in edges] for edges in _adjacency(graph, {label: i for i, label in enumerate(labels)})]
    scores = [0.0] * n

    for s in range(n):
        dist = [-1] * n
        sigma = [0] * n
        pred: list[list[int]] = [[] for _ in range(n)]
        dist[s] = 0
        sigma[s] = 1
        queue = deque([s])
        order: list[int] = []

        while queue:
            v = queue.popleft()
            order.append(v)
            for w in adj[v]:
                if dist[w] < 0:
                    dist[w] = dist[v] + 1
                    queue.append(w)
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]
                    pred[w].append(v)

        delta = [0.0] * n
        for w in reversed(order):
            coeff = (1.0 + delta[w]) / sigma[w]
            for v in pred[w]:
                delta[v] += sigma[v] * coeff
            if w != s:
                scores[w] += delta[w]

    log.debug("Betweenness: %d sources processed", n)
    return MappingProxyType(dict(zip(labels, scores)))


def compute_centrality(
    graph: ChordGraph,
    damping: float = DEFAULT_DAMPING,
    iterations: int = DEFAULT_ITERATIONS,
) -> CentralityResult:
    """Compute PageRank and betweenness together.

    Parameters are validated before any work: *damping* must lie in
    (0, 1] and *iterations* must be a positive integer, otherwise
    ``ValueError`` is raised.
    """
    _validate(damping, iterations)
    if not graph.nodes:
        return CentralityResult(pagerank=_EMPTY, betweenness=_EMPTY)
    result = CentralityResult(
        pagerank=compute_pagerank(graph, damping, iterations),
        betweenness=compute_betweenness(graph),
    )
    log.info("Computed centrality for %d chords", len(graph.nodes))
    return result


def rank_nodes(scores: Mapping[str, float], top: int | None = None) -> list[tuple[str, float]]:
    """Sort ``{label: score}`` descending, ties broken by label."""
    ranked = sorted(scores.items(), key=lambda item: (-item[1], item[0]))
    if top is not None:
        ranked = ranked[:top]
    return ranked
