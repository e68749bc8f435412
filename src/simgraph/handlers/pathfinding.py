"""
Shortest path handlers: Dijkstra and A*.

Edge weights are similarities, so both searches minimize cost = 1 / weight.
Weights lie in (0, 1], which makes every edge cost >= 1 and non-negative
relaxation valid.

Both searches run NetworkX over Graph.to_networkx(), whose adjacency lists
are in ascending id order. NetworkX breaks heap ties by push order, so
results are reproducible for a given graph state.
"""

import logging

import networkx as nx

from ..graph import Graph
from ..models import EdgeId, NodeId
from ..weights import astar_heuristic
from .base import UNREACHABLE, PathResult, elapsed_ms, require_nodes, start_timer

logger = logging.getLogger(__name__)


def dijkstra(graph: Graph, start_id: NodeId, end_id: NodeId) -> PathResult:
    """
    Find the cheapest path between two nodes using Dijkstra.

    Stops as soon as end_id is popped as the cheapest open node.

    Args:
        graph: Graph to search (not modified)
        start_id: Path origin
        end_id: Path destination

    Returns:
        PathResult with:
            - path: node ids from start to end ([start] when start == end,
              [] when unreachable)
            - distance: total cost (0 when start == end, UNREACHABLE when
              there is no path)
            - edges: edge ids along the path
            - nodes_explored: nodes expanded before stopping

    Raises:
        NodeNotFound: If start_id or end_id is not in the graph

    Example:
        >>> result = dijkstra(graph, "a", "c")
        >>> print(f"{' -> '.join(result.path)} costs {result.distance:.2f}")
    """
    require_nodes(graph, "dijkstra", start_id, end_id)
    started = start_timer()

    G = graph.to_networkx()
    expanded: set[NodeId] = set()

    try:
        distance, path = nx.single_source_dijkstra(
            G, start_id, end_id, weight=_counting_cost(expanded)
        )
    except nx.NetworkXNoPath:
        return _no_path("dijkstra", start_id, end_id, len(expanded), started)

    return _found_path("dijkstra", G, path, float(distance), len(expanded), started)


def astar(graph: Graph, start_id: NodeId, end_id: NodeId) -> PathResult:
    """
    Find the cheapest path between two nodes using A*.

    Same cost model and result shape as dijkstra(). The frontier is ordered
    by f = g + h where h = 1 + (activity(node) - activity(end))^2.

    Raises:
        NodeNotFound: If start_id or end_id is not in the graph
    """
    require_nodes(graph, "astar", start_id, end_id)
    started = start_timer()

    G = graph.to_networkx()
    target = graph.get_node(end_id)
    expanded: set[NodeId] = set()

    def heuristic(node_id: NodeId, _end_id: NodeId) -> float:
        return astar_heuristic(graph.get_node(node_id), target)

    try:
        path = nx.astar_path(
            G, start_id, end_id, heuristic=heuristic, weight=_counting_cost(expanded)
        )
    except nx.NetworkXNoPath:
        return _no_path("astar", start_id, end_id, len(expanded), started)

    distance = float(nx.path_weight(G, path, weight="cost"))
    return _found_path("astar", G, path, distance, len(expanded), started)


def _counting_cost(expanded: set[NodeId]):
    """
    Edge cost function for NetworkX searches.

    NetworkX calls it with the node being expanded as the first argument,
    so the collected set is the set of expanded nodes.
    """

    def cost(u: NodeId, v: NodeId, data: dict) -> float:
        expanded.add(u)
        return data["cost"]

    return cost


def _found_path(
    algorithm: str,
    G: nx.Graph,
    path: list[NodeId],
    distance: float,
    nodes_explored: int,
    started: float,
) -> PathResult:
    path_edges: list[EdgeId] = [G[a][b]["id"] for a, b in zip(path, path[1:])]
    result = PathResult(
        algorithm,
        path=path,
        distance=distance,
        edges=path_edges,
        nodes_explored=nodes_explored,
        execution_time=elapsed_ms(started),
    )
    logger.debug(
        "%s found path of %d hop(s) from %r to %r, cost %.4f",
        algorithm, len(path) - 1, path[0], path[-1], distance,
    )
    return result


def _no_path(
    algorithm: str,
    start_id: NodeId,
    end_id: NodeId,
    nodes_explored: int,
    started: float,
) -> PathResult:
    logger.debug("%s found no path from %r to %r", algorithm, start_id, end_id)
    return PathResult(
        algorithm,
        path=[],
        distance=UNREACHABLE,
        nodes_explored=nodes_explored,
        execution_time=elapsed_ms(started),
    )
