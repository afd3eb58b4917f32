"""Weighted label-propagation communities for chord transition graphs."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

import networkx as nx

from chordnet.graph.builder import ChordGraph, to_networkx

log = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True)
class CommunityResult:
    """``{label: community_id}`` with ids numbered 0..count-1."""

    communities: Mapping[str, int]
    count: int

    def members(self) -> dict[int, tuple[str, ...]]:
        groups: dict[int, list[str]] = {}
        for label, cid in self.communities.items():
            groups.setdefault(cid, []).append(label)
        return {cid: tuple(labels) for cid, labels in sorted(groups.items())}


def _neighbors(graph: ChordGraph, index: dict[str, int]) -> list[list[tuple[int, int]]]:
    # a -> b votes in both directions; b -> a adds a second, separate vote.
    neigh: list[list[tuple[int, int]]] = [[] for _ in range(len(index))]
    for edge in graph.edges:
        src = index.get(edge.source)
        tgt = index.get(edge.target)
        if src is None or tgt is None:
            continue
        neigh[src].append((tgt, edge.weight))
        neigh[tgt].append((src, edge.weight))
    return neigh


def _renumber(labels: list[str], community: list[int]) -> CommunityResult:
    id_map: dict[int, int] = {}
    result: dict[str, int] = {}
    for label, raw in zip(labels, community):
        if raw not in id_map:
            id_map[raw] = len(id_map)
        result[label] = id_map[raw]
    return CommunityResult(communities=MappingProxyType(result), count=len(id_map))


def detect_communities(
    graph: ChordGraph,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    initial: Mapping[str, int] | None = None,
) -> CommunityResult:
    """Partition chords by weighted label propagation.

    Every node starts in its own community (its index), or in the
    community given by *initial*.  Each pass visits nodes in order and
    moves a node to the community with the highest edge-weighted vote
    among its neighbors, updating in place.  A node whose current
    community already has the top vote stays put; otherwise the first
    community to reach the top vote in neighbor order wins.  Propagation
    stops after a pass with no moves or after *max_iterations* passes.

    Community ids are renumbered 0, 1, 2, ... in order of first
    appearance over the original node order.
    """
    labels = [node.label for node in graph.nodes]
    n = len(labels)
    if n == 0:
        return CommunityResult(communities=MappingProxyType({}), count=0)

    if initial is None:
        community = list(range(n))
    else:
        # Fresh ids for unassigned nodes must not collide with given ones.
        offset = max(initial.values(), default=-1) + 1
        community = [initial[label] if label in initial else offset + i for i, label in enumerate(labels)]

    neigh = _neighbors(graph, {label: i for i, label in enumerate(labels)})

    passes = 0
    for passes in range(1, max_iterations + 1):
        changed = False
        for i in range(n):
            if not neigh[i]:
                continue
            votes: dict[int, int] = {}
            for j, w in neigh[i]:
                votes[community[j]] = votes.get(community[j], 0) + w

            best = community[i]
            best_vote = votes.get(best)
            if best_vote is None or best_vote < max(votes.values()):
                best_vote = -1
                for cid, vote in votes.items():
                    if vote > best_vote:
                        best, best_vote = cid, vote

            if best != community[i]:
                community[i] = best
                changed = True
        if not changed:
            break

    result = _renumber(labels, community)
    log.info("Label propagation: %d communities over %d chords after %d passes", result.count, n, passes)
    return result


def community_quality(graph: ChordGraph, result: CommunityResult) -> dict:
    """Modularity of *result* on the weighted undirected projection.

    Returns ``{"modularity": Q, "sizes": {community_id: size}}``.
    Q > 0.3 usually indicates meaningful community structure
    (Newman, 2004).  Graphs without edges score 0.0.
    """
    sizes = {cid: len(members) for cid, members in result.members().items()}
    if not graph.nodes:
        return {"modularity": 0.0, "sizes": sizes}

    G = to_networkx(graph)
    undirected = nx.Graph()
    undirected.add_nodes_from(G)
    for u, v, w in G.edges(data="weight"):
        prev = undirected.get_edge_data(u, v, {}).get("weight", 0)
        undirected.add_edge(u, v, weight=prev + w)

    if undirected.number_of_edges() == 0:
        return {"modularity": 0.0, "sizes": sizes}

    groups: dict[int, set[str]] = {}
    for label, cid in result.communities.items():
        if label in undirected:
            groups.setdefault(cid, set()).add(label)
    q = nx.community.modularity(undirected, list(groups.values()), weight="weight")
    return {"modularity": round(q, 4), "sizes": sizes}
