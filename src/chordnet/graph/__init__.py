"""Graph algorithms for chord transition analysis."""

from chordnet.graph.builder import (
    ChordEdge,
    ChordGraph,
    ChordItem,
    ChordNode,
    EmptySequenceError,
    GraphFormatError,
    build_transition_graph,
    graph_from_dict,
    graph_summary,
    graph_to_dict,
    to_networkx,
)
from chordnet.graph.centrality import (
    CentralityResult,
    compute_betweenness,
    compute_centrality,
    compute_pagerank,
    rank_nodes,
)
from chordnet.graph.communities import CommunityResult, community_quality, detect_communities
from chordnet.graph.compare import GraphComparison, compare_graphs
from chordnet.graph.cycles import canonical_cycle, find_cycles
from chordnet.graph.transitions import transition_probabilities

__all__ = [
    "ChordItem",
    "ChordNode",
    "ChordEdge",
    "ChordGraph",
    "EmptySequenceError",
    "GraphFormatError",
    "build_transition_graph",
    "to_networkx",
    "graph_to_dict",
    "graph_from_dict",
    "graph_summary",
    "transition_probabilities",
    "CentralityResult",
    "compute_pagerank",
    "compute_betweenness",
    "compute_centrality",
    "rank_nodes",
    "CommunityResult",
    "detect_communities",
    "community_quality",
    "find_cycles",
    "canonical_cycle",
    "GraphComparison",
    "compare_graphs",
]
