"""visgraph: deterministic graph layout and SVG rendering.

Typical use:
    import networkx as nx
    from visgraph import HierarchicalLayout, Settings, compute_layout, graph_to_svg

    graph = nx.DiGraph([("a", "b"), ("a", "c"), ("b", "d")])
    positions = compute_layout(graph, HierarchicalLayout(), Settings())
    svg = graph_to_svg(graph, HierarchicalLayout())
"""

__version__ = "0.1.0"

from visgraph.config.settings import Settings
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
from visgraph.exporters import CairoSvgRasterizer, Rasterizer, SvgExporter, export_svg
from visgraph.layout import (
    BipartiteLayout,
    CircularLayout,
    ForceDirectedLayout,
    HierarchicalLayout,
    LayoutStrategy,
    Orientation,
    RandomLayout,
    compute_layout,
    parse_strategy,
)
from visgraph.models import Position, PositionMap, Scene
from visgraph.render import graph_to_image, graph_to_svg, positions_to_svg
from visgraph.visualization import build_scene

__all__ = [
    "__version__",
    "Settings",
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
    "LayoutStrategy",
    "CircularLayout",
    "BipartiteLayout",
    "HierarchicalLayout",
    "ForceDirectedLayout",
    "RandomLayout",
    "Orientation",
    "parse_strategy",
    "compute_layout",
    "Position",
    "PositionMap",
    "Scene",
    "build_scene",
    "SvgExporter",
    "export_svg",
    "Rasterizer",
    "CairoSvgRasterizer",
    "graph_to_svg",
    "positions_to_svg",
    "graph_to_image",
]
