"""
Entity records for the similarity graph.

Nodes carry two behavioral metrics (activity, interaction) and an optional
connection count override. Edges are undirected and carry a derived
similarity weight that the Graph store keeps in sync with node properties.

Wire form (to_dict/from_dict) keeps the camelCase keys the UI exchanges:
``from``/``to`` on edges and ``connectionCount`` on node properties.
Optional fields (``connectionCount``, node ``x``/``y``/``color``) are
omitted while unset.
"""

from dataclasses import dataclass, field
from typing import Any

# Node and edge identifiers are opaque strings chosen by the caller
NodeId = str
EdgeId = str


@dataclass
class NodeProperties:
    """Behavioral metrics used to derive edge weights."""

    activity: float = 0.0
    interaction: float = 0.0
    connection_count: int | None = None
    """Overrides the computed degree for weight purposes only."""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "activity": self.activity,
            "interaction": self.interaction,
        }
        if self.connection_count is not None:
            data["connectionCount"] = self.connection_count
        return data


@dataclass
class Node:
    """A labeled entity in the graph."""

    id: NodeId
    label: str
    properties: NodeProperties = field(default_factory=NodeProperties)

    # Layout hints owned by the UI; round-tripped but never read by the engine
    x: float | None = None
    y: float | None = None
    color: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "label": self.label,
            "properties": self.properties.to_dict(),
        }
        for key in ("x", "y", "color"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class Edge:
    """
    Undirected edge between two nodes.

    ``source``/``target`` only record the order the edge was created in;
    an edge A-B is the same edge as B-A.
    """

    id: EdgeId
    source: NodeId
    target: NodeId
    weight: float = 0.0

    @property
    def endpoints(self) -> frozenset[NodeId]:
        return frozenset((self.source, self.target))

    def connects(self, a: NodeId, b: NodeId) -> bool:
        """True if this edge joins a and b in either direction."""
        return (self.source == a and self.target == b) or (
            self.source == b and self.target == a
        )

    def other(self, node_id: NodeId) -> NodeId:
        """Return the endpoint opposite node_id."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        raise ValueError(f"Node {node_id!r} is not an endpoint of edge {self.id!r}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "from": self.source,
            "to": self.target,
            "weight": self.weight,
        }
