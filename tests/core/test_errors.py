"""Tests for the error taxonomy."""

from visgraph.core.errors import (
    BipartiteViolation,
    CyclicGraphError,
    InvalidSettings,
    LayoutDefectError,
    LayoutError,
    VisGraphError,
)


class TestErrorMessages:
    """Every layout error names its strategy and precondition."""

    def test_layout_error(self):
        error = LayoutError("scene", "positions cover graph", "missing 'a'")
        assert error.strategy == "scene"
        assert error.precondition == "positions cover graph"
        assert str(error) == "[scene] precondition 'positions cover graph' failed: missing 'a'"

    def test_bipartite_violation(self):
        error = BipartiteViolation(("a", "b"))
        assert isinstance(error, LayoutError)
        assert error.edge == ("a", "b")
        assert error.strategy == "bipartite"
        assert error.precondition == "two_colorable"
        assert "'a'" in str(error)

    def test_cyclic_graph_error(self):
        error = CyclicGraphError(["a", "b"])
        assert error.cycle == ["a", "b"]
        assert error.strategy == "hierarchical"
        assert "'a' -> 'b' -> 'a'" in str(error)

    def test_invalid_settings(self):
        error = InvalidSettings([("width", -1, "must be positive")])
        assert error.fields == ["width"]
        assert str(error) == "Invalid settings: width=-1: must be positive"
        assert isinstance(error, ValueError)

    def test_hierarchy(self):
        assert issubclass(LayoutError, VisGraphError)
        assert issubclass(LayoutDefectError, AssertionError)
        assert issubclass(LayoutDefectError, VisGraphError)
