"""
Pytest configuration and shared fixtures.

Graphs here are built in memory; nothing touches disk except the config
tests, which use tmp_path.
"""

import random

import pytest

from simgraph.graph import Graph
from simgraph.models import Edge, Node, NodeProperties


def make_node(node_id, activity=0.0, interaction=0.0, connection_count=None, label=None):
    """Build a node with the given metrics."""
    return Node(
        id=node_id,
        label=label or node_id,
        properties=NodeProperties(
            activity=activity,
            interaction=interaction,
            connection_count=connection_count,
        ),
    )


def build_graph(nodes, edges):
    """
    Build a graph from node tuples and (edge_id, from, to) triples.

    Node tuples are (id, activity, interaction[, connection_count]).
    """
    graph = Graph()
    for entry in nodes:
        graph.add_node(make_node(*entry))
    for edge_id, source, target in edges:
        graph.add_edge(Edge(edge_id, source, target))
    return graph


def random_graph(seed, node_count=12, edge_probability=0.3):
    """Deterministic random graph with activities in [0, 1]."""
    rng = random.Random(seed)
    graph = Graph()
    ids = [f"n{i:02d}" for i in range(node_count)]
    for node_id in ids:
        graph.add_node(
            make_node(node_id, round(rng.random(), 3), round(rng.uniform(0, 10), 3))
        )
    edge_number = 0
    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            if rng.random() < edge_probability:
                graph.add_edge(Edge(f"e{edge_number}", a, b))
                edge_number += 1
    return graph


@pytest.fixture
def triangle():
    """
    Three mutually connected nodes.

    A(0.8, 12), B(0.4, 5), C(0.6, 8); every node has degree 2, so weights
    depend only on activity and interaction:
        A-B: 1 / (1 + 0.16 + 49)  = 1 / 50.16
        A-C: 1 / (1 + 0.04 + 16)  = 1 / 17.04
        B-C: 1 / (1 + 0.04 + 9)   = 1 / 10.04
    """
    return build_graph(
        [("A", 0.8, 12), ("B", 0.4, 5), ("C", 0.6, 8)],
        [("ab", "A", "B"), ("ac", "A", "C"), ("bc", "B", "C")],
    )


@pytest.fixture
def two_islands():
    """
    Two components: path A-B-C and pair D-E, plus isolated F.
    """
    return build_graph(
        [
            ("A", 0.1, 1),
            ("B", 0.2, 1),
            ("C", 0.3, 1),
            ("D", 0.4, 2),
            ("E", 0.5, 2),
            ("F", 0.6, 3),
        ],
        [("ab", "A", "B"), ("bc", "B", "C"), ("de", "D", "E")],
    )


@pytest.fixture(params=[1, 7, 42, 1234, 2024])
def random_graphs(request):
    """A handful of seeded random graphs for property checks."""
    return random_graph(request.param)
