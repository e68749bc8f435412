"""
Breadth-first and depth-first traversal from a start node.

Both return the visitation order and the discovery edge of every non-start
node, i.e. the spanning tree of the start node's component. Neighbors are
expanded in ascending id order.
"""

import logging
from typing import Iterator

import networkx as nx

from ..graph import Graph, sort_ids
from ..models import EdgeId, NodeId
from .base import TraversalResult, elapsed_ms, require_nodes, start_timer

logger = logging.getLogger(__name__)


def bfs(graph: Graph, start_id: NodeId) -> TraversalResult:
    """
    Breadth-first traversal using a FIFO queue.

    Args:
        graph: Graph to traverse (not modified)
        start_id: Node to start from

    Returns:
        TraversalResult with nodes in visit order and discovery edges

    Raises:
        NodeNotFound: If start_id is not in the graph

    Example:
        >>> result = bfs(graph, "a")
        >>> result.nodes
        ['a', 'b', 'c']
    """
    require_nodes(graph, "bfs", start_id)
    started = start_timer()

    G = graph.to_networkx()
    order, tree_edges = _collect_tree(
        G, start_id, nx.bfs_edges(G, start_id, sort_neighbors=sort_ids)
    )

    result = TraversalResult("bfs", order, tree_edges, elapsed_ms(started))
    logger.debug("bfs from %r visited %d node(s)", start_id, result.visited_count)
    return result


def dfs(graph: Graph, start_id: NodeId) -> TraversalResult:
    """
    Depth-first traversal using a LIFO stack.

    Nodes are recorded in pre-order on first visit, the smallest unvisited
    neighbor explored first, and an edge is only recorded when it actually
    discovers a node.

    Raises:
        NodeNotFound: If start_id is not in the graph
    """
    require_nodes(graph, "dfs", start_id)
    started = start_timer()

    G = graph.to_networkx()
    order, tree_edges = _collect_tree(
        G, start_id, nx.dfs_edges(G, start_id, sort_neighbors=sort_ids)
    )

    result = TraversalResult("dfs", order, tree_edges, elapsed_ms(started))
    logger.debug("dfs from %r visited %d node(s)", start_id, result.visited_count)
    return result


def _collect_tree(
    G: nx.Graph, start_id: NodeId, tree: Iterator[tuple[NodeId, NodeId]]
) -> tuple[list[NodeId], list[EdgeId]]:
    """Visit order and edge ids from (parent, child) discovery pairs."""
    order: list[NodeId] = [start_id]
    tree_edges: list[EdgeId] = []
    for parent, child in tree:
        order.append(child)
        tree_edges.append(G[parent][child]["id"])
    return order, tree_edges
