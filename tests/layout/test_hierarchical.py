"""Tests for the hierarchical layout engine."""

import networkx as nx
import pytest

from visgraph.config.settings import Settings
from visgraph.core.errors import CyclicGraphError, LayoutError
from visgraph.core.graph_view import EdgeListGraphView, NetworkXGraphView
from visgraph.layout import HierarchicalLayout, Orientation, compute_layout
from visgraph.layout.engines.hierarchical import assign_layers, count_crossings


class TestAssignLayers:
    """Test longest-path layering."""

    def test_path(self):
        view = NetworkXGraphView(nx.path_graph(5, create_using=nx.DiGraph))
        assert assign_layers(view) == {0: 0, 1: 1, 2: 2, 3: 3, 4: 4}

    def test_longest_path_wins(self):
        view = EdgeListGraphView([], [("a", "b"), ("b", "c"), ("a", "c")], directed=True)
        assert assign_layers(view) == {"a": 0, "b": 1, "c": 2}

    def test_edges_point_to_later_layers(self):
        graph = nx.gn_graph(40, seed=3).reverse()
        layers = assign_layers(NetworkXGraphView(graph))
        for source, target in graph.edges():
            assert layers[source] < layers[target]

    def test_cycle_rejected_with_concrete_cycle(self):
        graph = nx.DiGraph([("x", "a"), ("a", "b"), ("b", "c"), ("c", "a")])
        with pytest.raises(CyclicGraphError) as exc_info:
            assign_layers(NetworkXGraphView(graph))
        cycle = exc_info.value.cycle
        assert set(cycle) == {"a", "b", "c"}
        for source, target in zip(cycle, cycle[1:] + cycle[:1]):
            assert graph.has_edge(source, target)

    def test_self_loop_is_a_cycle(self):
        graph = nx.DiGraph([("a", "a")])
        with pytest.raises(CyclicGraphError) as exc_info:
            assign_layers(NetworkXGraphView(graph))
        assert exc_info.value.cycle == ["a"]


class TestCountCrossings:
    """Test crossing counts between adjacent layers."""

    def test_single_crossing(self):
        assert count_crossings([["a", "b"], ["c", "d"]], [("a", "d"), ("b", "c")]) == 1

    def test_no_crossing(self):
        assert count_crossings([["a", "b"], ["c", "d"]], [("a", "c"), ("b", "d")]) == 0

    def test_shared_endpoint_does_not_cross(self):
        assert count_crossings([["a", "b"], ["c"]], [("a", "c"), ("b", "c")]) == 0

    def test_long_edges_ignored(self):
        assert count_crossings([["a"], ["b"], ["c"]], [("a", "c")]) == 0


class TestHierarchicalLayout:
    """Test layered placement."""

    def test_path_of_five_gives_five_layers(self):
        graph = nx.path_graph(5, create_using=nx.DiGraph)
        positions = compute_layout(graph, HierarchicalLayout(), Settings())
        ys = [positions[node].y for node in range(5)]
        assert ys == pytest.approx([50, 150, 250, 350, 450])
        assert all(positions[node].x == pytest.approx(500) for node in range(5))

    def test_cycle_rejected(self):
        graph = nx.DiGraph([(1, 2), (2, 3), (3, 1)])
        with pytest.raises(CyclicGraphError) as exc_info:
            compute_layout(graph, HierarchicalLayout(), Settings())
        error = exc_info.value
        assert isinstance(error, LayoutError)
        assert error.strategy == "hierarchical"
        assert error.precondition == "acyclic"
        assert set(error.cycle) == {1, 2, 3}

    def test_edges_go_downward(self):
        graph = nx.gn_graph(30, seed=11).reverse()
        positions = compute_layout(graph, HierarchicalLayout(), Settings())
        for source, target in graph.edges():
            assert positions[source].y < positions[target].y

    def test_barycenter_removes_crossing(self):
        """Enumeration order has one crossing; the sweep finds the ordering without it."""
        graph = nx.DiGraph()
        graph.add_nodes_from(["a", "b", "c", "d"])
        graph.add_edges_from([("a", "d"), ("b", "c")])
        positions = compute_layout(graph, HierarchicalLayout(), Settings())
        assert positions["a"].x < positions["b"].x
        assert positions["d"].x < positions["c"].x

    def test_barycenter_never_increases_crossings(self):
        graph = nx.gn_graph(25, seed=5).reverse()
        view = NetworkXGraphView(graph)
        layers = assign_layers(view)
        initial = [[] for _ in range(max(layers.values()) + 1)]
        for node in graph.nodes():
            initial[layers[node]].append(node)

        positions = compute_layout(graph, HierarchicalLayout(), Settings())
        final = [
            sorted(layer, key=lambda node: positions[node].x) for layer in initial
        ]
        edges = list(graph.edges())
        assert count_crossings(final, edges) <= count_crossings(initial, edges)

    def test_layers_centered(self):
        graph = nx.DiGraph([("r", "a"), ("r", "b")])
        positions = compute_layout(graph, HierarchicalLayout(), Settings(node_spacing=100))
        assert positions["r"].x == pytest.approx(500)
        assert positions["a"].x == pytest.approx(450)
        assert positions["b"].x == pytest.approx(550)

    def test_layers_left_aligned(self):
        graph = nx.DiGraph([("r", "a"), ("r", "b")])
        settings = Settings(node_spacing=100, center_layers=False)
        positions = compute_layout(graph, HierarchicalLayout(), settings)
        assert positions["r"].x == pytest.approx(50)
        assert positions["b"].x == pytest.approx(150)

    @pytest.mark.parametrize("orientation,expected", [
        (Orientation.TOP_TO_BOTTOM, [(500, 50), (500, 150), (500, 250)]),
        (Orientation.BOTTOM_TO_TOP, [(500, 950), (500, 850), (500, 750)]),
        (Orientation.LEFT_TO_RIGHT, [(50, 500), (150, 500), (250, 500)]),
        (Orientation.RIGHT_TO_LEFT, [(950, 500), (850, 500), (750, 500)]),
    ])
    def test_orientation(self, orientation, expected):
        graph = nx.path_graph(3, create_using=nx.DiGraph)
        positions = compute_layout(graph, HierarchicalLayout(orientation=orientation), Settings())
        for node, point in enumerate(expected):
            assert positions[node].as_tuple() == pytest.approx(point)

    def test_undirected_edges_follow_enumeration(self):
        view = EdgeListGraphView([], [("b", "a"), ("a", "c")])
        positions = compute_layout(view, HierarchicalLayout(), Settings())
        assert positions["b"].y < positions["a"].y < positions["c"].y

    def test_single_node(self):
        graph = nx.DiGraph()
        graph.add_node("solo")
        positions = compute_layout(graph, HierarchicalLayout(), Settings())
        assert positions["solo"].as_tuple() == (500, 500)

    def test_single_node_self_loop_rejected(self):
        with pytest.raises(CyclicGraphError):
            compute_layout(nx.DiGraph([("solo", "solo")]), HierarchicalLayout(), Settings())
