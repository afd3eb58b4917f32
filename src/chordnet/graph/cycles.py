"""Bounded simple-cycle enumeration for chord transition graphs."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from chordnet.graph.builder import ChordGraph

log = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 6


def canonical_cycle(labels: Sequence[str]) -> tuple[str, ...]:
    """Rotate *labels* so the lexicographically smallest label comes first."""
    if not labels:
        return ()
    start = min(range(len(labels)), key=lambda i: labels[i])
    return tuple(labels[start:]) + tuple(labels[:start])


def find_cycles(graph: ChordGraph, max_length: int = DEFAULT_MAX_LENGTH) -> tuple[tuple[str, ...], ...]:
    """Enumerate simple directed cycles of 2 to *max_length* chords.

    Runs a depth-first search from every node, closing a cycle whenever
    an edge leads back to the start node.  Each cycle is reported once,
    rotated by :func:`canonical_cycle`, in discovery order.  Self-loops
    are ignored.  A *max_length* below 2 yields no cycles.

    Cost is exponential in the worst case; graphs are expected to hold at
    most a few hundred chords.
    """
    if max_length < 2:
        return ()

    labels = graph.labels()
    index = graph.index()
    n = len(labels)
    adj: list[list[int]] = [[] for _ in range(n)]
    for edge in graph.edges:
        src = index.get(edge.source)
        tgt = index.get(edge.target)
        if src is not None and tgt is not None and src != tgt:
            adj[src].append(tgt)

    seen: set[tuple[str, ...]] = set()
    cycles: list[tuple[str, ...]] = []

    for start in range(n):
        path = [start]
        on_path = {start}
        # Explicit stack of neighbor iterators mirrors the recursive DFS.
        stack = [iter(adj[start])]
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if nxt == start and len(path) >= 2:
                cycle = canonical_cycle([labels[i] for i in path])
                if cycle not in seen:
                    seen.add(cycle)
                    cycles.append(cycle)
            elif nxt not in on_path and len(path) < max_length:
                path.append(nxt)
                on_path.add(nxt)
                stack.append(iter(adj[nxt]))

    log.info("Found %d cycles (max length %d) in %d chords", len(cycles), max_length, n)
    return tuple(cycles)
