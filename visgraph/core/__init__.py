"""Core graph access and error types."""

from visgraph.core.errors import (
    BipartiteViolation,
    CyclicGraphError,
    InvalidSettings,
    LayoutDefectError,
    LayoutError,
    RasterizationError,
    VisGraphError,
)
from visgraph.core.graph_view import EdgeListGraphView, GraphView, NetworkXGraphView, as_graph_view

__all__ = [
    "VisGraphError",
    "InvalidSettings",
    "LayoutError",
    "BipartiteViolation",
    "CyclicGraphError",
    "LayoutDefectError",
    "RasterizationError",
    "GraphView",
    "NetworkXGraphView",
    "EdgeListGraphView",
    "as_graph_view",
]
