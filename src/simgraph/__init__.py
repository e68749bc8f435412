"""
simgraph - Similarity-weighted graph engine.

An undirected graph over labeled entities whose edge weights are derived
from the endpoints' behavioral metrics, plus the algorithm suite (traversal,
shortest path, A*, connectivity, centrality, coloring) that drives the
visualization and analytics UI.
"""

from .errors import GraphError, InputError, MalformedInput, NodeNotFound, UnknownAlgorithm
from .graph import Graph
from .models import Edge, Node, NodeProperties
from .weights import similarity_weight

__version__ = "0.1.0"

__all__ = [
    "Graph",
    "Node",
    "NodeProperties",
    "Edge",
    "similarity_weight",
    "GraphError",
    "NodeNotFound",
    "MalformedInput",
    "InputError",
    "UnknownAlgorithm",
]
