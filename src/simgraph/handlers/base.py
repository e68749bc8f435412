"""
Core handler infrastructure shared by every algorithm.

This module provides:
- Result dataclasses, one per algorithm family, unified as ``Result``
- The UI envelope rendering (``to_dict``) with camelCase metric keys
- Timing and start/end validation helpers

Every handler is a pure function of (graph, parameters) -> Result and never
mutates the graph. Working state (NetworkX exports, color maps) lives
only for the duration of one call.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from ..graph import Graph
from ..models import EdgeId, NodeId

# Sentinel distance reported when no path exists
UNREACHABLE = math.inf


def start_timer() -> float:
    return time.perf_counter()


def elapsed_ms(started: float) -> float:
    """Milliseconds since started (a start_timer() value)."""
    return (time.perf_counter() - started) * 1000


def require_nodes(graph: Graph, algorithm: str, *node_ids: NodeId) -> None:
    """
    Fail fast if any parameter node is missing.

    Raises:
        NodeNotFound: For the first missing id
    """
    for node_id in node_ids:
        graph.require_node(node_id, f"{algorithm} parameter")


# === RESULT TYPES ===


@dataclass
class TraversalResult:
    """Result of bfs() and dfs()."""

    algorithm: str
    nodes: list[NodeId]
    """Node ids in visitation order, starting with the start node."""

    edges: list[EdgeId]
    """Discovery edge per non-start node, in discovery order."""

    execution_time: float = 0.0
    kind: Literal["traversal"] = "traversal"

    @property
    def visited_count(self) -> int:
        return len(self.nodes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": list(self.nodes),
            "edges": list(self.edges),
            "metrics": {
                "executionTime": self.execution_time,
                "visitedCount": self.visited_count,
            },
        }


@dataclass
class PathResult:
    """Result of dijkstra() and astar()."""

    algorithm: str
    path: list[NodeId]
    """Node ids from start to end inclusive; empty when unreachable."""

    distance: float
    """Total cost (sum of 1 / weight); UNREACHABLE when there is no path."""

    edges: list[EdgeId] = field(default_factory=list)
    """Edge ids along the path."""

    nodes_explored: int = 0
    execution_time: float = 0.0
    kind: Literal["path"] = "path"

    @property
    def reachable(self) -> bool:
        return not math.isinf(self.distance)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": list(self.path),
            "edges": list(self.edges),
            "metrics": {
                "executionTime": self.execution_time,
                # JSON has no infinity
                "distance": self.distance if self.reachable else None,
                "reachable": self.reachable,
                "nodesExplored": self.nodes_explored,
            },
        }


@dataclass
class ComponentsResult:
    """Result of connected_components()."""

    algorithm: str
    components: list[list[NodeId]]
    """Each component's members in BFS discovery order."""

    execution_time: float = 0.0
    kind: Literal["metrics"] = "metrics"

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def largest_component_size(self) -> int:
        return max((len(c) for c in self.components), default=0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": {
                "executionTime": self.execution_time,
                "componentCount": self.component_count,
                "components": [list(c) for c in self.components],
                "largestComponentSize": self.largest_component_size,
            },
        }


@dataclass
class CentralityResult:
    """Result of degree_centrality()."""

    algorithm: str
    degrees: list[tuple[NodeId, int]]
    """All (node id, degree) pairs, degree descending then id ascending."""

    top: list[tuple[NodeId, int]]
    """Leading entries of degrees."""

    execution_time: float = 0.0
    kind: Literal["metrics"] = "metrics"

    def to_dict(self) -> dict[str, Any]:
        # "top5" is the fixed UI key and always holds five entries at most;
        # "top" follows the requested top_n
        return {
            "nodes": [node_id for node_id, _ in self.top],
            "metrics": {
                "executionTime": self.execution_time,
                "degrees": [{"id": n, "degree": d} for n, d in self.degrees],
                "top": [{"id": n, "degree": d} for n, d in self.top],
                "top5": [{"id": n, "degree": d} for n, d in self.degrees[:5]],
            },
        }


@dataclass
class ColoringResult:
    """Result of welsh_powell()."""

    algorithm: str
    colors: dict[NodeId, int]
    """Color index per node, indices start at 0."""

    execution_time: float = 0.0
    kind: Literal["metrics"] = "metrics"

    @property
    def chromatic_number(self) -> int:
        """Colors used: an upper bound on the true chromatic number."""
        return max(self.colors.values()) + 1 if self.colors else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "metrics": {
                "executionTime": self.execution_time,
                "colors": dict(self.colors),
                "chromaticNumber": self.chromatic_number,
            },
        }


Result = Union[TraversalResult, PathResult, ComponentsResult, CentralityResult, ColoringResult]
