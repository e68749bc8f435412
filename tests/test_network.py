"""
Tests for network analysis handlers (connected_components, degree_centrality,
welsh_powell).
"""

import networkx as nx
import pytest

from simgraph.graph import Graph
from simgraph.handlers.network import connected_components, degree_centrality, welsh_powell

from conftest import build_graph


@pytest.fixture
def star():
    """Hub h joined to a..e, plus a-b and an isolated node z."""
    leaves = ["a", "b", "c", "d", "e"]
    return build_graph(
        [("h", 0.5, 1)] + [(n, 0.5, 1) for n in leaves] + [("z", 0.5, 1)],
        [(f"h{n}", "h", n) for n in leaves] + [("ab", "a", "b")],
    )


class TestConnectedComponents:
    """Tests for connected_components function."""

    def test_components_in_discovery_order(self, two_islands):
        result = connected_components(two_islands)
        assert result.component_count == 3
        assert result.components == [["A", "B", "C"], ["D", "E"], ["F"]]
        assert result.largest_component_size == 3

    def test_bfs_order_within_component(self):
        graph = build_graph(
            [(n, 0, 0) for n in ["m", "a", "q", "b"]],
            [("ma", "m", "a"), ("mq", "m", "q"), ("qb", "q", "b")],
        )
        result = connected_components(graph)
        assert result.components == [["a", "m", "q", "b"]]

    def test_connected_graph_has_one_component(self, triangle):
        assert connected_components(triangle).component_count == 1

    def test_empty_graph(self):
        result = connected_components(Graph())
        assert result.component_count == 0
        assert result.components == []
        assert result.largest_component_size == 0

    def test_partition(self, random_graphs):
        """Components are disjoint, cover every node and match NetworkX."""
        result = connected_components(random_graphs)
        members = [n for component in result.components for n in component]
        assert len(members) == len(set(members))
        assert set(members) == set(random_graphs.node_ids())
        G = random_graphs.to_networkx()
        assert result.component_count == nx.number_connected_components(G)

    def test_envelope(self, two_islands):
        metrics = connected_components(two_islands).to_dict()["metrics"]
        assert metrics["componentCount"] == 3
        assert metrics["components"][1] == ["D", "E"]


class TestDegreeCentrality:
    """Tests for degree_centrality function."""

    def test_ranking(self, star):
        result = degree_centrality(star)
        assert result.degrees[0] == ("h", 5)
        # a and b tie at 2, ordered by id
        assert result.degrees[1:3] == [("a", 2), ("b", 2)]
        assert result.degrees[-1] == ("z", 0)
        assert len(result.degrees) == 7

    def test_top_five(self, star):
        result = degree_centrality(star)
        assert result.top == [("h", 5), ("a", 2), ("b", 2), ("c", 1), ("d", 1)]

    def test_top_n(self, star):
        assert degree_centrality(star, top_n=2).top == [("h", 5), ("a", 2)]
        assert degree_centrality(star, top_n=0).top == []

    def test_negative_top_n(self, star):
        with pytest.raises(ValueError):
            degree_centrality(star, top_n=-1)

    def test_ignores_connection_count(self, star):
        """Centrality reflects adjacency, not the weighting override."""
        star.update_properties_of("z", {"connectionCount": 50})
        assert dict(degree_centrality(star).degrees)["z"] == 0

    def test_matches_networkx(self, random_graphs):
        G = random_graphs.to_networkx()
        assert dict(degree_centrality(random_graphs).degrees) == dict(G.degree())

    def test_envelope(self, star):
        data = degree_centrality(star).to_dict()
        assert data["nodes"] == ["h", "a", "b", "c", "d"]
        assert data["metrics"]["top5"][0] == {"id": "h", "degree": 5}
        assert data["metrics"]["top"] == data["metrics"]["top5"]

    @pytest.mark.parametrize("top_n, expected", [(2, 2), (6, 6)])
    def test_envelope_top_follows_top_n(self, star, top_n, expected):
        """top tracks top_n; top5 always holds the five leading nodes."""
        metrics = degree_centrality(star, top_n=top_n).to_dict()["metrics"]
        assert len(metrics["top"]) == expected
        assert len(metrics["top5"]) == 5
        assert metrics["top5"][0] == {"id": "h", "degree": 5}


class TestWelshPowell:
    """Tests for welsh_powell function."""

    def test_triangle_needs_three_colors(self, triangle):
        result = welsh_powell(triangle)
        assert result.colors == {"A": 0, "B": 1, "C": 2}
        assert result.chromatic_number == 3

    def test_path_is_two_colorable(self, two_islands):
        result = welsh_powell(two_islands)
        assert result.colors == {"B": 0, "A": 1, "C": 1, "D": 0, "E": 1, "F": 0}
        assert result.chromatic_number == 2

    def test_highest_degree_colored_first(self, star):
        result = welsh_powell(star)
        assert result.colors["h"] == 0
        assert result.colors["a"] != result.colors["b"]
        assert result.chromatic_number == 3

    def test_empty_graph(self):
        result = welsh_powell(Graph())
        assert result.colors == {}
        assert result.chromatic_number == 0

    def test_proper_coloring(self, random_graphs):
        """No two adjacent nodes share a color."""
        result = welsh_powell(random_graphs)
        assert set(result.colors) == set(random_graphs.node_ids())
        for edge in random_graphs.edges:
            assert result.colors[edge.source] != result.colors[edge.target]
        assert result.chromatic_number == max(result.colors.values()) + 1

    def test_bounded_by_max_degree(self, random_graphs):
        """Greedy coloring never needs more than max degree + 1 colors."""
        max_degree = max(random_graphs.degree_of(n) for n in random_graphs.node_ids())
        assert welsh_powell(random_graphs).chromatic_number <= max_degree + 1

    def test_envelope(self, triangle):
        metrics = welsh_powell(triangle).to_dict()["metrics"]
        assert metrics["chromaticNumber"] == 3
        assert metrics["colors"]["A"] == 0
