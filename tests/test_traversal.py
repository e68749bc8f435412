"""
Tests for traversal handlers (bfs, dfs).
"""

import networkx as nx
import pytest

from simgraph.errors import NodeNotFound
from simgraph.handlers.traversal import bfs, dfs

from conftest import build_graph


@pytest.fixture
def tree_graph():
    """
         r
        / \\
       a   b
      / \\   \\
     c   d   e
    with a cross edge d-e.
    """
    return build_graph(
        [(n, 0.5, 1) for n in ["r", "a", "b", "c", "d", "e"]],
        [
            ("ra", "r", "a"),
            ("rb", "r", "b"),
            ("ac", "a", "c"),
            ("ad", "a", "d"),
            ("be", "b", "e"),
            ("de", "d", "e"),
        ],
    )


class TestBFS:
    """Tests for bfs function."""

    def test_triangle_order(self, triangle):
        """BFS from A visits A, B, C and uses A's edges for discovery."""
        result = bfs(triangle, "A")
        assert result.nodes == ["A", "B", "C"]
        assert result.edges == ["ab", "ac"]
        assert result.visited_count == 3
        assert result.algorithm == "bfs"

    def test_level_order(self, tree_graph):
        """Nodes are visited level by level, ties by ascending id."""
        result = bfs(tree_graph, "r")
        assert result.nodes == ["r", "a", "b", "c", "d", "e"]
        assert result.edges == ["ra", "rb", "ac", "ad", "be"]

    def test_unreachable_nodes_not_visited(self, two_islands):
        result = bfs(two_islands, "D")
        assert result.nodes == ["D", "E"]
        assert result.edges == ["de"]

    def test_isolated_start(self, two_islands):
        result = bfs(two_islands, "F")
        assert result.nodes == ["F"]
        assert result.edges == []

    def test_missing_start(self, triangle):
        with pytest.raises(NodeNotFound):
            bfs(triangle, "Z")

    def test_does_not_mutate(self, triangle):
        before = triangle.serialize()
        bfs(triangle, "A")
        assert triangle.serialize() == before

    def test_envelope(self, triangle):
        data = bfs(triangle, "A").to_dict()
        assert data["nodes"] == ["A", "B", "C"]
        assert data["edges"] == ["ab", "ac"]
        assert data["metrics"]["visitedCount"] == 3
        assert data["metrics"]["executionTime"] >= 0


class TestDFS:
    """Tests for dfs function."""

    def test_triangle_order(self, triangle):
        """DFS from A goes deep through B before reaching C."""
        result = dfs(triangle, "A")
        assert result.nodes == ["A", "B", "C"]
        assert result.edges == ["ab", "bc"]

    def test_preorder(self, tree_graph):
        """Smallest neighbor first; the cross edge d-e reaches e before b does."""
        result = dfs(tree_graph, "r")
        assert result.nodes == ["r", "a", "c", "d", "e", "b"]
        assert result.edges == ["ra", "ac", "ad", "de", "be"]

    def test_only_tree_edges(self, tree_graph):
        """One discovery edge per non-start node."""
        result = dfs(tree_graph, "r")
        assert len(result.edges) == len(result.nodes) - 1
        assert len(set(result.edges)) == len(result.edges)

    def test_missing_start(self, triangle):
        with pytest.raises(NodeNotFound):
            dfs(triangle, "Z")


class TestTraversalProperties:
    """Properties shared by both traversals."""

    @pytest.mark.parametrize("traverse", [bfs, dfs])
    def test_visits_exactly_the_component(self, random_graphs, traverse):
        """Visited set equals the start node's connected component."""
        G = random_graphs.to_networkx()
        for start in random_graphs.node_ids():
            result = traverse(random_graphs, start)
            assert len(result.nodes) <= len(random_graphs)
            assert set(result.nodes) == nx.node_connected_component(G, start)
            assert len(result.nodes) == len(set(result.nodes))
            assert len(result.edges) == len(result.nodes) - 1

    @pytest.mark.parametrize("traverse", [bfs, dfs])
    def test_deterministic(self, random_graphs, traverse):
        start = random_graphs.node_ids()[0]
        first = traverse(random_graphs, start)
        second = traverse(random_graphs.snapshot(), start)
        assert first.nodes == second.nodes
        assert first.edges == second.edges
