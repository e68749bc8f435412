"""
Similarity weight derivation.

weight(n1, n2) = 1 / (1 + (a1-a2)^2 + (i1-i2)^2 + (c1-c2)^2)

where a is activity, i is interaction and c is the node's connectionCount
override when set, otherwise its live degree. The result is a similarity
in (0, 1]: identical nodes score 1 and the denominator is always >= 1.

Path algorithms minimize cost = 1 / weight, so cost is always >= 1.
"""

from .models import Node


def effective_degree(node: Node, degree: int) -> int:
    """Connection count used for weighting: the override if set, else degree."""
    if node.properties.connection_count is not None:
        return node.properties.connection_count
    return degree


def similarity_weight(node1: Node, node2: Node, degree1: int, degree2: int) -> float:
    """
    Compute the similarity weight between two nodes.

    Args:
        node1: First endpoint
        node2: Second endpoint
        degree1: Live degree of node1 in the graph
        degree2: Live degree of node2 in the graph

    Returns:
        Weight in (0, 1], symmetric in its arguments
    """
    activity_diff = node1.properties.activity - node2.properties.activity
    interaction_diff = node1.properties.interaction - node2.properties.interaction
    conn_diff = effective_degree(node1, degree1) - effective_degree(node2, degree2)

    denominator = 1 + activity_diff**2 + interaction_diff**2 + conn_diff**2
    return 1 / denominator


def edge_cost(weight: float) -> float:
    """Traversal cost of an edge with the given similarity weight."""
    return 1 / weight


def astar_heuristic(node: Node, target: Node) -> float:
    """
    A* estimate of the remaining cost from node to target.

    Every edge costs 1 + da^2 + di^2 + dc^2, so 1 + da^2 is the cheapest a
    single hop spanning the activity gap can be.
    """
    activity_diff = node.properties.activity - target.properties.activity
    return 1 + activity_diff**2
