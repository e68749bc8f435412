"""
Graph store: owns nodes and edges and keeps edge weights derived.

The store is the single owner of the node and edge maps. Every structural
mutation and every property update triggers a full recomputation of all
edge weights, so a weight is always re-derivable from current node state.

Adjacency is indexed with a NetworkX graph keyed by node id that stores the
edge id as an edge attribute. Pair lookups are O(1) and neighbor enumeration
is O(degree). Neighbors are always returned in ascending id order so that
every algorithm is deterministic for a given graph state.

Not thread-safe: callers serialize mutations and algorithm runs, or run
algorithms against snapshot().
"""

import copy
import logging
import math
from dataclasses import replace
from typing import Any, Iterable, Mapping

import networkx as nx

from .errors import InputError, MalformedInput, NodeNotFound
from .models import Edge, EdgeId, Node, NodeId, NodeProperties
from .weights import edge_cost, similarity_weight

logger = logging.getLogger(__name__)

# Accepted keys for partial property updates (wire and Python spellings)
_PROPERTY_KEYS = {
    "activity": "activity",
    "interaction": "interaction",
    "connectionCount": "connection_count",
    "connection_count": "connection_count",
}


def sort_ids(ids: Iterable[NodeId]) -> list[NodeId]:
    """Canonical id order used for neighbor enumeration and tie-breaks."""
    return sorted(ids, key=str)


class Graph:
    """
    Undirected similarity-weighted graph.

    Usage:
        graph = Graph()
        graph.add_node(Node("a", "Alice", NodeProperties(activity=0.8, interaction=12)))
        graph.add_node(Node("b", "Bob", NodeProperties(activity=0.4, interaction=5)))
        graph.add_edge(Edge("e1", "a", "b"))
        graph.edge_between("b", "a").weight
    """

    def __init__(self):
        self._nodes: dict[NodeId, Node] = {}
        self._edges: dict[EdgeId, Edge] = {}
        self._index = nx.Graph()

    # === READ-ONLY VIEWS ===

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={len(self._nodes)}, edges={len(self._edges)})"

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def node_ids(self) -> list[NodeId]:
        """All node ids in ascending id order."""
        return sort_ids(self._nodes)

    def number_of_edges(self) -> int:
        return len(self._edges)

    def get_node(self, node_id: NodeId) -> Node | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: EdgeId) -> Edge | None:
        return self._edges.get(edge_id)

    def require_node(self, node_id: NodeId, context: str | None = None) -> Node:
        """Return the node or raise NodeNotFound."""
        node = self._nodes.get(node_id)
        if node is None:
            raise NodeNotFound(node_id, context)
        return node

    # === ADJACENCY QUERIES ===

    def edge_between(self, a: NodeId, b: NodeId) -> Edge | None:
        """Edge joining a and b in either direction, or None."""
        data = self._index.get_edge_data(a, b)
        if data is None:
            return None
        return self._edges[data["edge_id"]]

    def neighbor_ids(self, node_id: NodeId) -> list[NodeId]:
        """
        Ids of nodes sharing an edge with node_id, ascending.

        Self-loops are excluded. Unknown ids have no neighbors.
        """
        if node_id not in self._index:
            return []
        return sort_ids(n for n in self._index.adj[node_id] if n != node_id)

    def neighbors_of(self, node_id: NodeId) -> list[Node]:
        return [self._nodes[n] for n in self.neighbor_ids(node_id)]

    def incident_edges(self, node_id: NodeId) -> list[Edge]:
        """Edges touching node_id, ordered by the opposite endpoint's id."""
        if node_id not in self._index:
            return []
        adjacency = self._index.adj[node_id]
        return [self._edges[adjacency[n]["edge_id"]] for n in sort_ids(adjacency)]

    def degree_of(self, node_id: NodeId) -> int:
        """Number of incident edges (0 for unknown ids)."""
        if node_id not in self._index:
            return 0
        return self._index.degree(node_id)

    # === MUTATORS ===

    def add_node(self, node: Node) -> bool:
        """
        Insert a node, replacing any node with the same id.

        Returns:
            True (insertion always succeeds)
        """
        replaced = node.id in self._nodes
        self._nodes[node.id] = node
        self._index.add_node(node.id)
        logger.debug("%s node %r", "Replaced" if replaced else "Added", node.id)
        self.recalculate_weights()
        return True

    def remove_node(self, node_id: NodeId) -> bool:
        """
        Remove a node and every edge touching it.

        Returns:
            False if the node was not present
        """
        if node_id not in self._nodes:
            return False

        incident = [self._index.adj[node_id][n]["edge_id"] for n in self._index.adj[node_id]]
        for edge_id in incident:
            del self._edges[edge_id]
        self._index.remove_node(node_id)
        del self._nodes[node_id]

        logger.debug("Removed node %r with %d incident edge(s)", node_id, len(incident))
        self.recalculate_weights()
        return True

    def add_edge(self, edge: Edge) -> bool:
        """
        Insert an undirected edge unless its endpoint pair is already joined.

        A request for an already-connected pair is a silent no-op. Self-loops
        are not supported and are rejected the same way. Reusing an existing
        edge id replaces that edge.

        Returns:
            True if the edge was inserted

        Raises:
            NodeNotFound: If either endpoint is absent (graph unchanged)
        """
        self.require_node(edge.source, f"source of edge {edge.id!r}")
        self.require_node(edge.target, f"target of edge {edge.id!r}")

        if edge.source == edge.target:
            logger.debug("Ignored self-loop edge %r on %r", edge.id, edge.source)
            return False
        if self._index.has_edge(edge.source, edge.target):
            logger.debug(
                "Ignored duplicate edge %r between %r and %r",
                edge.id, edge.source, edge.target,
            )
            return False

        previous = self._edges.get(edge.id)
        if previous is not None:
            self._index.remove_edge(previous.source, previous.target)

        self._edges[edge.id] = edge
        self._index.add_edge(edge.source, edge.target, edge_id=edge.id)
        logger.debug("Added edge %r between %r and %r", edge.id, edge.source, edge.target)
        self.recalculate_weights()
        return True

    def remove_edge(self, edge_id: EdgeId) -> bool:
        """
        Remove an edge by id.

        Returns:
            False if the edge was not present
        """
        edge = self._edges.pop(edge_id, None)
        if edge is None:
            return False
        self._index.remove_edge(edge.source, edge.target)
        logger.debug("Removed edge %r", edge_id)
        self.recalculate_weights()
        return True

    def update_properties_of(self, node_id: NodeId, partial: Mapping[str, Any]) -> Node:
        """
        Merge the given property fields into a node's properties.

        Accepts ``activity``, ``interaction`` and ``connectionCount`` (or
        ``connection_count``). A connection count of None clears the override.

        Returns:
            The updated node

        Raises:
            NodeNotFound: If the node is absent
            MalformedInput: If a key is unknown or a value has the wrong type
        """
        node = self.require_node(node_id, "property update")

        errors: list[InputError] = []
        changes: dict[str, Any] = {}
        if not isinstance(partial, Mapping):
            errors.append(InputError("properties", "expected a mapping"))
        else:
            for key, value in partial.items():
                location = f"properties.{key}"
                field_name = _PROPERTY_KEYS.get(key)
                if field_name is None:
                    errors.append(InputError(location, "unknown property"))
                elif field_name == "connection_count":
                    changes[field_name] = _parse_count(value, location, errors)
                else:
                    changes[field_name] = _parse_number(value, location, errors)
        if errors:
            raise MalformedInput(errors)

        node.properties = replace(node.properties, **changes)
        logger.debug("Updated properties of node %r: %s", node_id, sorted(changes))
        self.recalculate_weights()
        return node

    def clear(self) -> bool:
        """
        Remove all nodes and edges.

        Returns:
            True (clearing always succeeds)
        """
        self._nodes.clear()
        self._edges.clear()
        self._index.clear()
        logger.debug("Cleared graph")
        return True

    def recalculate_weights(self) -> None:
        """Recompute every edge weight from current node state."""
        degrees = dict(self._index.degree())
        for edge in self._edges.values():
            source = self._nodes[edge.source]
            target = self._nodes[edge.target]
            edge.weight = similarity_weight(
                source, target, degrees[edge.source], degrees[edge.target]
            )

    # === SNAPSHOT / INTERCHANGE ===

    def snapshot(self) -> "Graph":
        """Independent deep copy for running algorithms off the live store."""
        return copy.deepcopy(self)

    def to_networkx(self) -> nx.Graph:
        """
        Export as a NetworkX graph.

        Nodes carry label/activity/interaction attributes; edges carry
        id, weight and cost (1 / weight). Nodes and every adjacency list
        are inserted in ascending id order, so NetworkX searches over the
        export expand neighbors in the same order as neighbor_ids().
        """
        G = nx.Graph()
        for node_id in self.node_ids():
            node = self._nodes[node_id]
            G.add_node(
                node_id,
                label=node.label,
                activity=node.properties.activity,
                interaction=node.properties.interaction,
            )
        for node_id in self.node_ids():
            for edge in self.incident_edges(node_id):
                neighbor = edge.other(node_id)
                if G.has_edge(node_id, neighbor):
                    continue
                G.add_edge(
                    node_id, neighbor,
                    id=edge.id, weight=edge.weight, cost=edge_cost(edge.weight),
                )
        return G

    def serialize(self) -> dict[str, list[dict[str, Any]]]:
        """Render the graph as ``{"nodes": [...], "edges": [...]}``."""
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "edges": [edge.to_dict() for edge in self._edges.values()],
        }

    def deserialize(self, data: Any) -> None:
        """
        Replace the whole graph with serialized data.

        Input is validated completely before anything changes. Weights in the
        input are ignored and recomputed. Edges repeating an already-joined
        pair are dropped, matching add_edge.

        Raises:
            MalformedInput: Listing every structural problem found
        """
        nodes, edges = _parse_graph_data(data)

        self._nodes.clear()
        self._edges.clear()
        self._index.clear()
        for node in nodes:
            self._nodes[node.id] = node
            self._index.add_node(node.id)

        dropped = 0
        for edge in edges:
            if self._index.has_edge(edge.source, edge.target):
                dropped += 1
                continue
            self._edges[edge.id] = edge
            self._index.add_edge(edge.source, edge.target, edge_id=edge.id)

        self.recalculate_weights()
        logger.debug(
            "Loaded %d node(s) and %d edge(s), dropped %d duplicate edge(s)",
            len(self._nodes), len(self._edges), dropped,
        )

    @classmethod
    def from_dict(cls, data: Any) -> "Graph":
        graph = cls()
        graph.deserialize(data)
        return graph


# === INPUT PARSING ===


def _parse_number(value: Any, location: str, errors: list[InputError]) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        errors.append(InputError(location, f"expected a number, got {type(value).__name__}"))
        return 0.0
    if not math.isfinite(value):
        errors.append(InputError(location, "expected a finite number"))
        return 0.0
    return float(value)


def _parse_optional_number(
    value: Any, location: str, errors: list[InputError]
) -> float | None:
    if value is None:
        return None
    return _parse_number(value, location, errors)


def _parse_count(value: Any, location: str, errors: list[InputError]) -> int | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(InputError(location, f"expected an integer, got {type(value).__name__}"))
        return None
    if value < 0:
        errors.append(InputError(location, "expected a non-negative integer"))
        return None
    return value


def _parse_id(value: Any, location: str, errors: list[InputError]) -> str | None:
    # Integer ids (e.g. from YAML) are accepted and normalized to strings
    if isinstance(value, bool) or not isinstance(value, (str, int)):
        errors.append(InputError(location, "expected a string or integer id"))
        return None
    if value == "":
        errors.append(InputError(location, "id must not be empty"))
        return None
    return str(value)


def _parse_node(record: Any, location: str, errors: list[InputError]) -> Node | None:
    if not isinstance(record, Mapping):
        errors.append(InputError(location, "expected a mapping"))
        return None

    missing = [key for key in ("id", "label", "properties") if key not in record]
    for key in missing:
        errors.append(InputError(f"{location}.{key}", "required field missing"))
    if missing:
        return None

    node_id = _parse_id(record["id"], f"{location}.id", errors)
    label = record["label"]
    if not isinstance(label, str):
        errors.append(InputError(f"{location}.label", "expected a string"))

    props = record["properties"]
    if not isinstance(props, Mapping):
        errors.append(InputError(f"{location}.properties", "expected a mapping"))
        return None

    prop_errors_before = len(errors)
    for key in ("activity", "interaction"):
        if key not in props:
            errors.append(InputError(f"{location}.properties.{key}", "required field missing"))
    activity = _parse_number(props.get("activity", 0.0), f"{location}.properties.activity", errors)
    interaction = _parse_number(
        props.get("interaction", 0.0), f"{location}.properties.interaction", errors
    )
    count_key = "connectionCount" if "connectionCount" in props else "connection_count"
    connection_count = _parse_count(
        props.get(count_key), f"{location}.properties.{count_key}", errors
    )

    # Optional layout hints carried for the UI; never used in weighting
    x = _parse_optional_number(record.get("x"), f"{location}.x", errors)
    y = _parse_optional_number(record.get("y"), f"{location}.y", errors)
    color = record.get("color")
    if color is not None and not isinstance(color, str):
        errors.append(InputError(f"{location}.color", "expected a string"))

    if node_id is None or not isinstance(label, str) or len(errors) > prop_errors_before:
        return None
    return Node(
        id=node_id,
        label=label,
        properties=NodeProperties(
            activity=activity,
            interaction=interaction,
            connection_count=connection_count,
        ),
        x=x,
        y=y,
        color=color,
    )


def _parse_edge(record: Any, location: str, errors: list[InputError]) -> Edge | None:
    if not isinstance(record, Mapping):
        errors.append(InputError(location, "expected a mapping"))
        return None

    missing = [key for key in ("id", "from", "to") if key not in record]
    for key in missing:
        errors.append(InputError(f"{location}.{key}", "required field missing"))
    if missing:
        return None

    edge_id = _parse_id(record["id"], f"{location}.id", errors)
    source = _parse_id(record["from"], f"{location}.from", errors)
    target = _parse_id(record["to"], f"{location}.to", errors)
    if edge_id is None or source is None or target is None:
        return None
    return Edge(id=edge_id, source=source, target=target)


def _require_list(data: Mapping, key: str, errors: list[InputError]) -> list:
    if key not in data:
        errors.append(InputError(key, "required field missing"))
        return []
    value = data[key]
    if not isinstance(value, list):
        errors.append(InputError(key, "expected a list"))
        return []
    return value


def _parse_graph_data(data: Any) -> tuple[list[Node], list[Edge]]:
    """Validate serialized graph data, collecting every error before raising."""
    errors: list[InputError] = []

    if not isinstance(data, Mapping):
        raise MalformedInput([InputError("<root>", "expected a mapping with nodes and edges")])

    raw_nodes = _require_list(data, "nodes", errors)
    raw_edges = _require_list(data, "edges", errors)

    nodes: list[Node] = []
    node_ids: set[NodeId] = set()
    for i, record in enumerate(raw_nodes):
        node = _parse_node(record, f"nodes[{i}]", errors)
        if node is None:
            continue
        if node.id in node_ids:
            errors.append(InputError(f"nodes[{i}].id", f"duplicate node id {node.id!r}"))
            continue
        node_ids.add(node.id)
        nodes.append(node)

    edges: list[Edge] = []
    edge_ids: set[EdgeId] = set()
    for i, record in enumerate(raw_edges):
        location = f"edges[{i}]"
        edge = _parse_edge(record, location, errors)
        if edge is None:
            continue
        if edge.id in edge_ids:
            errors.append(InputError(f"{location}.id", f"duplicate edge id {edge.id!r}"))
            continue
        dangling = False
        for key, endpoint in (("from", edge.source), ("to", edge.target)):
            if endpoint not in node_ids:
                errors.append(InputError(f"{location}.{key}", f"unknown node {endpoint!r}"))
                dangling = True
        if dangling:
            continue
        if edge.source == edge.target:
            errors.append(InputError(location, "self-loops are not supported"))
            continue
        edge_ids.add(edge.id)
        edges.append(edge)

    if errors:
        logger.warning("Rejected graph data with %d error(s)", len(errors))
        raise MalformedInput(errors)
    return nodes, edges
