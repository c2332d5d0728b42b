"""Tests for strategy parsing, the engine registry and the shared output checks."""

import math

import networkx as nx
import pytest

from visgraph.config.settings import Settings
from visgraph.core.errors import LayoutDefectError
from visgraph.core.graph_view import EdgeListGraphView
from visgraph.layout import (
    ENGINES,
    BipartiteLayout,
    CircularLayout,
    ForceDirectedLayout,
    HierarchicalLayout,
    LayoutEngine,
    Orientation,
    RandomLayout,
    compute_layout,
    get_engine,
    parse_strategy,
)
from visgraph.layout.strategies import STRATEGY_KINDS

ALL_STRATEGIES = [
    CircularLayout(),
    BipartiteLayout(),
    HierarchicalLayout(),
    ForceDirectedLayout(),
    RandomLayout(),
]


class TestParseStrategy:
    """Test building strategies from JSON-like input."""

    def test_from_kind_name(self):
        assert parse_strategy("circular") == CircularLayout()

    def test_from_dict(self):
        strategy = parse_strategy({"kind": "hierarchical", "orientation": "left_to_right"})
        assert strategy == HierarchicalLayout(orientation=Orientation.LEFT_TO_RIGHT)

    def test_bipartite_left_coerced(self):
        strategy = parse_strategy({"kind": "bipartite", "left": ["a", "b", "a"]})
        assert strategy.left == frozenset({"a", "b"})

    def test_unhashable_left_entry(self):
        with pytest.raises(ValueError) as exc_info:
            parse_strategy({"kind": "bipartite", "left": [["a"], "b"]})
        assert "hashable" in str(exc_info.value)

    def test_unknown_kind(self):
        with pytest.raises(ValueError) as exc_info:
            parse_strategy("spiral")
        assert "Unknown layout strategy" in str(exc_info.value)
        assert "circular" in str(exc_info.value)

    def test_unknown_option(self):
        with pytest.raises(ValueError):
            parse_strategy({"kind": "circular", "radius": 5})

    def test_bad_orientation(self):
        with pytest.raises(ValueError):
            parse_strategy({"kind": "hierarchical", "orientation": "diagonal"})


class TestRegistry:
    """Test that every strategy kind has exactly one engine."""

    def test_registry_covers_all_kinds(self):
        assert set(ENGINES) == set(STRATEGY_KINDS)

    def test_engine_names_match_kinds(self):
        for kind, engine_class in ENGINES.items():
            assert engine_class().name == kind

    def test_get_engine(self):
        assert issubclass(get_engine("random"), LayoutEngine)

    def test_get_unknown_engine(self):
        with pytest.raises(ValueError) as exc_info:
            get_engine("spiral")
        assert "Available" in str(exc_info.value)


class TestComputeLayout:
    """Properties shared by every strategy."""

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.kind)
    def test_covers_every_node_in_order(self, strategy):
        graph = nx.balanced_tree(2, 3, create_using=nx.DiGraph)
        positions = compute_layout(graph, strategy, Settings(iterations=20))
        assert list(positions) == list(graph.nodes())
        for position in positions.values():
            assert math.isfinite(position.x) and math.isfinite(position.y)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.kind)
    def test_deterministic(self, strategy):
        graph = nx.balanced_tree(3, 2, create_using=nx.DiGraph)
        settings = Settings(iterations=20, seed=9)
        assert compute_layout(graph, strategy, settings) == compute_layout(graph, strategy, settings)

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.kind)
    def test_empty_graph(self, strategy):
        assert len(compute_layout(EdgeListGraphView([], []), strategy, Settings())) == 0

    @pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: s.kind)
    def test_single_node_at_center(self, strategy):
        view = EdgeListGraphView(["only"], [])
        positions = compute_layout(view, strategy, Settings(width=800, height=600))
        assert positions["only"].as_tuple() == (400, 300)

    def test_default_settings(self):
        positions = compute_layout(nx.path_graph(3), CircularLayout())
        assert len(positions) == 3

    def test_random_layout_inside_drawing_area(self):
        settings = Settings(margin_x=0.2, margin_y=0.3, seed=4)
        positions = compute_layout(nx.path_graph(50), RandomLayout(), settings)
        box = positions.bounding_box()
        left, top, right, bottom = settings.drawing_bounds()
        assert box.min_x >= left and box.max_x <= right
        assert box.min_y >= top and box.max_y <= bottom

    def test_unsupported_graph_type(self):
        with pytest.raises(TypeError):
            compute_layout([("a", "b")], CircularLayout(), Settings())


class BrokenEngine(LayoutEngine):
    """Engine returning whatever it was configured with."""

    def __init__(self, raw):
        self.raw = raw

    @property
    def name(self):
        return "broken"

    def _compute(self, graph, nodes, strategy, settings):
        return self.raw


class TestOutputChecks:
    """Incomplete or non-finite engine output is a defect."""

    def test_missing_node(self):
        view = EdgeListGraphView(["a", "b"], [])
        with pytest.raises(LayoutDefectError) as exc_info:
            BrokenEngine({"a": (0.0, 0.0)}).layout(view, CircularLayout(), Settings())
        assert "missing" in str(exc_info.value)

    def test_extraneous_node(self):
        view = EdgeListGraphView(["a", "b"], [])
        raw = {"a": (0.0, 0.0), "b": (1.0, 1.0), "c": (2.0, 2.0)}
        with pytest.raises(LayoutDefectError):
            BrokenEngine(raw).layout(view, CircularLayout(), Settings())

    def test_non_finite(self):
        view = EdgeListGraphView(["a", "b"], [])
        raw = {"a": (0.0, 0.0), "b": (math.nan, 1.0)}
        with pytest.raises(LayoutDefectError):
            BrokenEngine(raw).layout(view, CircularLayout(), Settings())
