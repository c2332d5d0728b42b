"""One-call rendering pipeline: layout -> scene -> SVG -> image.

Example:
    >>> import networkx as nx
    >>> from visgraph import CircularLayout, Settings, graph_to_svg
    >>> svg = graph_to_svg(nx.cycle_graph(5), CircularLayout(), Settings(width=400, height=400))
"""

import logging
from typing import Any, Hashable, Mapping, Optional

from visgraph.config.settings import Settings
from visgraph.exporters.raster import CairoSvgRasterizer, Rasterizer
from visgraph.exporters.svg_exporter import export_svg
from visgraph.layout.engines import compute_layout
from visgraph.visualization.scene_builder import EdgeLabeler, NodeLabeler, build_scene

logger = logging.getLogger(__name__)


def positions_to_svg(
    graph: Any,
    positions: Mapping[Hashable, Any],
    settings: Optional[Settings] = None,
    node_label: Optional[NodeLabeler] = None,
    edge_label: Optional[EdgeLabeler] = None,
) -> str:
    """Render a graph with caller-supplied positions to SVG."""
    settings = settings if settings is not None else Settings()
    scene = build_scene(graph, positions, settings, node_label=node_label, edge_label=edge_label)
    return export_svg(scene, settings)


def graph_to_svg(
    graph: Any,
    strategy,
    settings: Optional[Settings] = None,
    node_label: Optional[NodeLabeler] = None,
    edge_label: Optional[EdgeLabeler] = None,
) -> str:
    """Lay out a graph with the given strategy and render it to SVG.

    The canvas is Settings.width x Settings.height and is not resized to the
    layout. Hierarchical positions advance by layer_spacing per layer and
    circular layouts grow their radius to keep node_spacing, so deep DAGs
    (about 10+ layers) or large circles (about 40+ nodes) extend past the
    canvas with default settings and are clipped. Enlarge width/height or
    shrink the spacings for such graphs.

    Raises:
        LayoutError: If the strategy's precondition does not hold
    """
    settings = settings if settings is not None else Settings()
    positions = compute_layout(graph, strategy, settings)
    return positions_to_svg(graph, positions, settings, node_label=node_label, edge_label=edge_label)


def graph_to_image(
    graph: Any,
    strategy,
    settings: Optional[Settings] = None,
    rasterizer: Optional[Rasterizer] = None,
    node_label: Optional[NodeLabeler] = None,
    edge_label: Optional[EdgeLabeler] = None,
) -> bytes:
    """Lay out a graph, render it to SVG and rasterize it at canvas size.

    Raises:
        LayoutError: If the strategy's precondition does not hold
        RasterizationError: If rasterization is unavailable or fails
    """
    settings = settings if settings is not None else Settings()
    svg = graph_to_svg(graph, strategy, settings, node_label=node_label, edge_label=edge_label)
    rasterizer = rasterizer if rasterizer is not None else CairoSvgRasterizer()
    image = rasterizer.rasterize(svg, settings.width, settings.height)
    logger.info(f"Rendered {strategy.kind} layout to {len(image)} image bytes")
    return image
