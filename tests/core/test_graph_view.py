"""Tests for the GraphView adapters."""

import networkx as nx
import pytest

from visgraph.core.graph_view import (
    EdgeListGraphView,
    GraphView,
    NetworkXGraphView,
    as_graph_view,
)


class TestEdgeListGraphView:
    """Test the plain node/edge list adapter."""

    def test_nodes_from_edges_appended(self):
        """Nodes only named in edges follow the listed nodes."""
        view = EdgeListGraphView(["a"], [("b", "c"), ("a", "b")])
        assert list(view.nodes()) == ["a", "b", "c"]
        assert view.node_count() == 3

    def test_parallel_edges_kept(self):
        view = EdgeListGraphView([], [("a", "b"), ("a", "b"), ("b", "a")])
        assert list(view.edges()) == [("a", "b"), ("a", "b"), ("b", "a")]
        assert view.edge_count() == 3
        assert list(view.neighbors("a")) == ["b"]
        assert view.degree("a") == 3

    def test_self_loop_counts_twice(self):
        view = EdgeListGraphView(["a"], [("a", "a")])
        assert view.degree("a") == 2
        assert list(view.neighbors("a")) == ["a"]

    def test_neighbors_ignore_direction(self):
        view = EdgeListGraphView([], [("a", "b"), ("c", "a")], directed=True)
        assert view.directed is True
        assert list(view.neighbors("a")) == ["b", "c"]


class TestNetworkXGraphView:
    """Test the zero-copy networkx adapter."""

    def test_wraps_without_copy(self):
        graph = nx.path_graph(3)
        view = NetworkXGraphView(graph)
        assert view.graph is graph
        graph.add_edge(2, 3)
        assert list(view.nodes()) == [0, 1, 2, 3]

    def test_multigraph_edges(self):
        graph = nx.MultiGraph()
        graph.add_edges_from([("a", "b"), ("a", "b"), ("b", "c")])
        view = NetworkXGraphView(graph)
        assert list(view.edges()) == [("a", "b"), ("a", "b"), ("b", "c")]
        assert view.edge_count() == 3

    def test_directed_neighbors_merge_both_directions(self):
        graph = nx.DiGraph([("a", "b"), ("c", "a"), ("b", "a")])
        view = NetworkXGraphView(graph)
        assert view.directed is True
        assert sorted(view.neighbors("a")) == ["b", "c"]

    def test_undirected(self):
        view = NetworkXGraphView(nx.cycle_graph(4))
        assert view.directed is False
        assert view.degree(0) == 2


class TestAsGraphView:
    """Test adapter selection."""

    def test_graph_view_passthrough(self):
        view = EdgeListGraphView(["a"], [])
        assert as_graph_view(view) is view

    def test_networkx_wrapped(self):
        view = as_graph_view(nx.DiGraph())
        assert isinstance(view, NetworkXGraphView)
        assert isinstance(view, GraphView)

    def test_unsupported_type(self):
        with pytest.raises(TypeError) as exc_info:
            as_graph_view({"a": ["b"]})
        assert "No GraphView adapter" in str(exc_info.value)
