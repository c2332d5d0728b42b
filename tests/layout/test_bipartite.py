"""Tests for the bipartite layout engine."""

import networkx as nx
import pytest

from visgraph.config.settings import Settings
from visgraph.core.errors import BipartiteViolation, LayoutError
from visgraph.core.graph_view import EdgeListGraphView
from visgraph.layout import BipartiteLayout, compute_layout
from visgraph.layout.engines.bipartite import LEFT, RIGHT, two_color


class TestTwoColor:
    """Test breadth-first 2-coloring."""

    def test_even_cycle(self):
        view = EdgeListGraphView([0, 1, 2, 3], [(0, 1), (1, 2), (2, 3), (3, 0)])
        colors = two_color(view, [0, 1, 2, 3])
        assert colors == {0: LEFT, 1: RIGHT, 2: LEFT, 3: RIGHT}

    def test_component_roots_go_left(self):
        view = EdgeListGraphView(["a", "b", "c"], [("b", "c")])
        colors = two_color(view, ["a", "b", "c"])
        assert colors["a"] == LEFT
        assert colors["b"] == LEFT
        assert colors["c"] == RIGHT


class TestBipartiteLayout:
    """Test two-column placement and rejection of non-bipartite graphs."""

    def test_triangle_rejected(self):
        with pytest.raises(BipartiteViolation) as exc_info:
            compute_layout(nx.cycle_graph(3), BipartiteLayout(), Settings())
        error = exc_info.value
        assert error.strategy == "bipartite"
        assert error.precondition == "two_colorable"
        assert nx.cycle_graph(3).has_edge(*error.edge)
        assert error.edge[0] != error.edge[1]
        assert isinstance(error, LayoutError)

    def test_self_loop_rejected(self):
        graph = nx.Graph([("a", "b"), ("b", "b")])
        with pytest.raises(BipartiteViolation):
            compute_layout(graph, BipartiteLayout(), Settings())

    def test_four_cycle_two_per_column(self):
        positions = compute_layout(nx.cycle_graph(4), BipartiteLayout(), Settings())
        xs = sorted({round(p.x, 6) for p in positions.values()})
        assert xs == [275, 725]
        assert positions[0].x == positions[2].x == pytest.approx(275)
        assert positions[1].x == positions[3].x == pytest.approx(725)
        assert positions[0].y == pytest.approx(50)
        assert positions[2].y == pytest.approx(950)

    def test_edges_cross_columns(self):
        graph = nx.complete_bipartite_graph(3, 4)
        positions = compute_layout(graph, BipartiteLayout(), Settings())
        for source, target in graph.edges():
            assert positions[source].x != positions[target].x

    def test_lone_node_mid_height(self):
        graph = nx.Graph([("a", "b"), ("a", "c")])
        positions = compute_layout(graph, BipartiteLayout(), Settings())
        assert positions["a"].y == pytest.approx(500)

    def test_custom_offset(self):
        positions = compute_layout(
            nx.path_graph(2), BipartiteLayout(), Settings(bipartite_offset=100)
        )
        assert positions[0].x == pytest.approx(450)
        assert positions[1].x == pytest.approx(550)

    def test_supplied_partition(self):
        graph = nx.Graph([("a", "b"), ("c", "b")])
        positions = compute_layout(graph, BipartiteLayout(left=["b"]), Settings())
        assert positions["b"].x < positions["a"].x
        assert positions["a"].x == positions["c"].x

    def test_supplied_partition_violated(self):
        graph = nx.Graph([("a", "b")])
        with pytest.raises(BipartiteViolation) as exc_info:
            compute_layout(graph, BipartiteLayout(left={"a", "b"}), Settings())
        assert exc_info.value.edge == ("a", "b")

    def test_supplied_partition_unknown_node(self):
        graph = nx.Graph([("a", "b")])
        with pytest.raises(LayoutError) as exc_info:
            compute_layout(graph, BipartiteLayout(left=["zzz"]), Settings())
        assert exc_info.value.precondition == "partition_in_graph"

    def test_single_node_at_center(self):
        graph = nx.Graph()
        graph.add_node(1)
        positions = compute_layout(graph, BipartiteLayout(), Settings())
        assert positions[1].as_tuple() == (500, 500)
