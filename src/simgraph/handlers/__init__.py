"""
Graph algorithm handlers.

This package provides the algorithm suite run over a Graph:
- traversal: BFS/DFS from a start node
- pathfinding: Dijkstra and A* over cost = 1 / weight
- network: connected components, degree centrality, Welsh-Powell coloring

Each handler is also registered by name in ALGORITHMS for callers that pick
the algorithm at runtime:
    from simgraph.handlers import run_algorithm
    result = run_algorithm("dijkstra", graph, "a", "c")
"""

from typing import Any, Callable

from ..errors import UnknownAlgorithm
from ..graph import Graph
from .base import (
    UNREACHABLE,
    # Result types
    CentralityResult,
    ColoringResult,
    ComponentsResult,
    PathResult,
    Result,
    TraversalResult,
)
from .network import (
    connected_components,
    degree_centrality,
    welsh_powell,
)
from .pathfinding import (
    astar,
    dijkstra,
)
from .traversal import (
    bfs,
    dfs,
)

ALGORITHMS: dict[str, Callable[..., Result]] = {
    "bfs": bfs,
    "dfs": dfs,
    "dijkstra": dijkstra,
    "astar": astar,
    "connected_components": connected_components,
    "centrality": degree_centrality,
    "welsh_powell": welsh_powell,
}

# Positional node-id parameters each algorithm takes after the graph
ALGORITHM_ARITY: dict[str, int] = {
    "bfs": 1,
    "dfs": 1,
    "dijkstra": 2,
    "astar": 2,
    "connected_components": 0,
    "centrality": 0,
    "welsh_powell": 0,
}


def run_algorithm(name: str, graph: Graph, *args: Any, **kwargs: Any) -> Result:
    """
    Run a registered algorithm by name.

    Raises:
        UnknownAlgorithm: If name is not registered
        TypeError: If the number of node ids does not match the algorithm
    """
    handler = ALGORITHMS.get(name)
    if handler is None:
        raise UnknownAlgorithm(
            f"Unknown algorithm {name!r}; expected one of: {', '.join(ALGORITHMS)}"
        )
    expected = ALGORITHM_ARITY[name]
    if len(args) != expected:
        raise TypeError(f"{name} takes {expected} node id(s), got {len(args)}")
    return handler(graph, *args, **kwargs)


__all__ = [
    # Constants
    "UNREACHABLE",
    "ALGORITHMS",
    "ALGORITHM_ARITY",
    # Result types
    "Result",
    "TraversalResult",
    "PathResult",
    "ComponentsResult",
    "CentralityResult",
    "ColoringResult",
    # Traversal handlers
    "bfs",
    "dfs",
    # Pathfinding handlers
    "dijkstra",
    "astar",
    # Network handlers
    "connected_components",
    "degree_centrality",
    "welsh_powell",
    # Dispatch
    "run_algorithm",
]
