"""Bipartite layout engine.

Nodes of one color class go in a left column, the others in a right column.
The coloring is either supplied by the caller (``BipartiteLayout.left``) or
computed by breadth-first 2-coloring of every connected component, ignoring
edge direction. Any edge joining two nodes of the same color (a self-loop
included) is a BipartiteViolation; there is no fallback layout.
"""

import logging
from collections import deque
from typing import Dict, Hashable, List, Tuple

from visgraph.config.settings import Settings
from visgraph.core.errors import BipartiteViolation, LayoutError
from visgraph.core.graph_view import GraphView
from visgraph.layout.engines.base import LayoutEngine, RawPositions
from visgraph.layout.strategies import BipartiteLayout

logger = logging.getLogger(__name__)

LEFT = 0
RIGHT = 1


def two_color(graph: GraphView, nodes: List[Hashable]) -> Dict[Hashable, int]:
    """Compute a 2-coloring by breadth-first search.

    Components are visited in node enumeration order; the first node of every
    component is colored LEFT.

    Raises:
        BipartiteViolation: Naming the first edge found between equal colors
    """
    colors: Dict[Hashable, int] = {}

    for root in nodes:
        if root in colors:
            continue
        colors[root] = LEFT
        queue = deque([root])
        while queue:
            current = queue.popleft()
            for neighbor in graph.neighbors(current):
                if neighbor not in colors:
                    colors[neighbor] = 1 - colors[current]
                    queue.append(neighbor)
                elif colors[neighbor] == colors[current]:
                    raise BipartiteViolation(
                        (current, neighbor),
                        reason=(
                            f"odd cycle: edge ({current!r}, {neighbor!r}) joins two nodes "
                            f"of the same color"
                        ),
                    )
    return colors


def check_partition(graph: GraphView, nodes: List[Hashable], left: frozenset) -> Dict[Hashable, int]:
    """Validate a caller-supplied partition and return the coloring.

    Raises:
        LayoutError: If the partition names nodes that are not in the graph
        BipartiteViolation: If an edge has both endpoints on the same side
    """
    node_set = set(nodes)
    unknown = [node for node in left if node not in node_set]
    if unknown:
        raise LayoutError(
            "bipartite",
            "partition_in_graph",
            f"partition contains nodes not in the graph: {sorted(map(repr, unknown))[:5]}",
        )

    colors = {node: LEFT if node in left else RIGHT for node in nodes}
    for source, target in graph.edges():
        if colors[source] == colors[target]:
            raise BipartiteViolation((source, target))
    return colors


def _column_ys(count: int, top: float, bottom: float) -> List[float]:
    """Evenly spaced y coordinates for a column; a lone node sits at mid-height."""
    if count == 0:
        return []
    if count == 1:
        return [(top + bottom) / 2]
    step = (bottom - top) / (count - 1)
    return [top + index * step for index in range(count)]


class BipartiteLayoutEngine(LayoutEngine):
    """Two-column layout for 2-colorable graphs."""

    @property
    def name(self) -> str:
        return "bipartite"

    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy: BipartiteLayout,
        settings: Settings,
    ) -> RawPositions:
        if strategy.left is None:
            colors = two_color(graph, nodes)
        else:
            colors = check_partition(graph, nodes, strategy.left)

        columns: Tuple[List[Hashable], List[Hashable]] = ([], [])
        for node in nodes:
            columns[colors[node]].append(node)
        logger.debug(
            f"Bipartite partition: {len(columns[LEFT])} left, {len(columns[RIGHT])} right"
        )

        _, top, _, bottom = settings.drawing_bounds()
        center_x, _ = settings.center
        offset = (
            settings.bipartite_offset
            if settings.bipartite_offset is not None
            else settings.drawing_width / 2
        )
        column_x = (center_x - offset / 2, center_x + offset / 2)

        positions: RawPositions = {}
        for side in (LEFT, RIGHT):
            for node, y in zip(columns[side], _column_ys(len(columns[side]), top, bottom)):
                positions[node] = (column_x[side], y)
        return positions
