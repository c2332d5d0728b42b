"""Circular layout engine.

Nodes are placed evenly on a circle centred on the canvas, in node
enumeration order, starting on the +x axis:

    angle_i = 2 * pi * i / n

The radius is large enough that neighbouring centres are at least
``node_spacing`` apart along the chord, and never below the configured
minimum (by default the circle fills the drawing area).
"""

import logging
import math
from typing import Hashable, List

from visgraph.config.settings import Settings
from visgraph.core.graph_view import GraphView
from visgraph.layout.engines.base import LayoutEngine, RawPositions
from visgraph.layout.strategies import CircularLayout

logger = logging.getLogger(__name__)


def circle_radius(node_count: int, settings: Settings) -> float:
    """Radius used by the circular layout for node_count nodes.

    For n >= 2 the chord between neighbours is 2 * r * sin(pi / n). Requiring
    it to be at least node_spacing gives r >= node_spacing / (2 sin(pi / n)),
    which is never smaller than the arc bound n * node_spacing / (2 * pi).
    """
    if node_count < 2:
        return 0.0

    required = settings.node_spacing / (2 * math.sin(math.pi / node_count))
    if settings.min_circle_radius is not None:
        minimum = settings.min_circle_radius
    else:
        minimum = min(settings.drawing_width, settings.drawing_height) / 2
    return max(required, minimum)


class CircularLayoutEngine(LayoutEngine):
    """Places nodes on a circle."""

    @property
    def name(self) -> str:
        return "circular"

    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy: CircularLayout,
        settings: Settings,
    ) -> RawPositions:
        count = len(nodes)
        if count == 0:
            return {}

        radius = circle_radius(count, settings)
        center_x, center_y = settings.center
        logger.debug(f"Circular layout radius {radius:.2f} for {count} nodes")

        positions: RawPositions = {}
        for index, node in enumerate(nodes):
            angle = 2 * math.pi * index / count
            positions[node] = (
                center_x + radius * math.cos(angle),
                center_y + radius * math.sin(angle),
            )
        return positions
