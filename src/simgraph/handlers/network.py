"""
Whole-graph analytics: connected components, degree centrality and
Welsh-Powell coloring.

These take only the graph and look at structure (actual adjacency), never
at the connectionCount override used for weighting. Ties are broken by
ascending node id throughout.
"""

import logging

import networkx as nx

from ..config import TOP_N
from ..graph import Graph, sort_ids
from ..models import NodeId
from .base import (
    CentralityResult,
    ColoringResult,
    ComponentsResult,
    elapsed_ms,
    start_timer,
)

logger = logging.getLogger(__name__)


def connected_components(graph: Graph) -> ComponentsResult:
    """
    Partition all nodes into connected components.

    Each component is seeded by its smallest id and listed in breadth-first
    discovery order from that seed; components are ordered by seed. Every
    node appears in exactly one component; isolated nodes form singletons.

    Returns:
        ComponentsResult with components and component_count
    """
    started = start_timer()

    G = graph.to_networkx()
    seeds = sort_ids(min(component, key=str) for component in nx.connected_components(G))
    components: list[list[NodeId]] = [
        [seed] + [child for _, child in nx.bfs_edges(G, seed, sort_neighbors=sort_ids)]
        for seed in seeds
    ]

    result = ComponentsResult("connected_components", components, elapsed_ms(started))
    logger.debug("Found %d component(s)", result.component_count)
    return result


def degree_centrality(graph: Graph, top_n: int = TOP_N) -> CentralityResult:
    """
    Rank nodes by degree (number of incident edges).

    Args:
        graph: Graph to analyze (not modified)
        top_n: Number of leading nodes to report in ``top`` (default 5)

    Returns:
        CentralityResult with:
            - degrees: every (node id, degree), degree descending then id ascending
            - top: the first top_n entries of degrees
    """
    if top_n < 0:
        raise ValueError(f"top_n must be non-negative, got {top_n}")
    started = start_timer()

    degrees = [(node_id, graph.degree_of(node_id)) for node_id in graph.node_ids()]
    # node_ids() is already id-ascending and sort is stable
    degrees.sort(key=lambda item: item[1], reverse=True)

    return CentralityResult(
        "centrality",
        degrees=degrees,
        top=degrees[:top_n],
        execution_time=elapsed_ms(started),
    )


def welsh_powell(graph: Graph) -> ColoringResult:
    """
    Greedy Welsh-Powell vertex coloring.

    Nodes are processed by degree descending (ties: id ascending); each takes
    the lowest color index not used by an already-colored neighbor. The number
    of colors used is an upper bound on the chromatic number, not the optimum.

    Returns:
        ColoringResult with colors (node id -> index from 0) and chromatic_number
    """
    started = start_timer()

    ordered = sorted(graph.node_ids(), key=graph.degree_of, reverse=True)
    colors: dict[NodeId, int] = {}

    for node_id in ordered:
        taken = {colors[n] for n in graph.neighbor_ids(node_id) if n in colors}
        color = 0
        while color in taken:
            color += 1
        colors[node_id] = color

    result = ColoringResult("welsh_powell", colors, elapsed_ms(started))
    logger.debug(
        "Colored %d node(s) with %d color(s)", len(colors), result.chromatic_number
    )
    return result
