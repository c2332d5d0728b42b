"""Scene builder: turns a graph plus node positions into drawable primitives.

Geometry rules:
- every node becomes a Circle of radius Settings.node_radius
- a simple edge is a straight segment between the two circle boundaries
- m parallel edges between one unordered pair fan out as quadratic curves,
  offset along the pair's normal by (k - (m - 1) / 2) * parallel_edge_spacing;
  the normal follows the first enumerated orientation of the pair so both
  directions share one fan
- self-loops are cubic curves above the node, nested by self_loop_size
- edges whose endpoints coincide collapse onto the centre
"""

import logging
import math
from typing import Any, Callable, Dict, Hashable, List, Mapping, Optional, Tuple

from visgraph.config.settings import Settings
from visgraph.core.errors import LayoutError
from visgraph.core.graph_view import as_graph_view
from visgraph.models.positions import Position
from visgraph.models.scene import Circle, Curve, EdgeRef, Label, Point, Scene

logger = logging.getLogger(__name__)

NodeLabeler = Callable[[Hashable], str]
EdgeLabeler = Callable[[EdgeRef], Optional[str]]

# Self-loop control point angles, measured in canvas coordinates (y down)
LOOP_START_ANGLE = math.radians(-135)
LOOP_END_ANGLE = math.radians(-45)


def _point(position: Any) -> Point:
    if isinstance(position, Position):
        return position.as_tuple()
    x, y = position
    return (float(x), float(y))


def _towards(origin: Point, target: Point, distance: float) -> Point:
    """Move from origin toward target by distance (origin if they coincide)."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    length = math.hypot(dx, dy)
    if length == 0:
        return origin
    return (origin[0] + dx / length * distance, origin[1] + dy / length * distance)


def _on_circle(center: Point, radius: float, angle: float) -> Point:
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def straight_edge(start: Point, end: Point, radius: float) -> Tuple[Point, Point]:
    """Endpoints of a straight edge trimmed to the circle boundaries.

    Overlapping circles leave nothing to trim, so the centres are used.
    """
    if math.hypot(end[0] - start[0], end[1] - start[1]) <= 2 * radius:
        return start, end
    return _towards(start, end, radius), _towards(end, start, radius)


def parallel_edge(
    start: Point,
    end: Point,
    reference: Tuple[Point, Point],
    offset: float,
    radius: float,
) -> Tuple[Point, Point, Tuple[Point, ...]]:
    """Endpoints and control point of one curve in a parallel-edge fan.

    Args:
        start: Centre of the edge's source
        end: Centre of the edge's target
        reference: Centres in the pair's first enumerated orientation
        offset: Signed distance of the control point from the midpoint
        radius: Node radius used for trimming
    """
    if offset == 0:
        trimmed_start, trimmed_end = straight_edge(start, end, radius)
        return trimmed_start, trimmed_end, ()

    (ax, ay), (bx, by) = reference
    length = math.hypot(bx - ax, by - ay)
    normal = (-(by - ay) / length, (bx - ax) / length)
    control = (
        (start[0] + end[0]) / 2 + normal[0] * offset,
        (start[1] + end[1]) / 2 + normal[1] * offset,
    )
    if length <= 2 * radius:
        return start, end, (control,)
    return _towards(start, control, radius), _towards(end, control, radius), (control,)


def self_loop(center: Point, radius: float, loop_index: int, loop_size: float) -> Tuple[Point, Point, Tuple[Point, ...]]:
    """Endpoints and control points of the loop_index-th self-loop on a node."""
    reach = radius + (loop_index + 1) * loop_size
    return (
        _on_circle(center, radius, LOOP_START_ANGLE),
        _on_circle(center, radius, LOOP_END_ANGLE),
        (_on_circle(center, reach, LOOP_START_ANGLE), _on_circle(center, reach, LOOP_END_ANGLE)),
    )


def _pair_key(source: Hashable, target: Hashable, groups: Dict[Tuple, List[int]]) -> Tuple:
    """Key shared by (u, v) and (v, u): whichever orientation was seen first."""
    if (target, source) in groups:
        return (target, source)
    return (source, target)


def build_scene(
    graph: Any,
    positions: Mapping[Hashable, Any],
    settings: Optional[Settings] = None,
    node_label: Optional[NodeLabeler] = None,
    edge_label: Optional[EdgeLabeler] = None,
) -> Scene:
    """Build the drawable scene for a laid-out graph.

    Args:
        graph: GraphView or networkx graph
        positions: Node -> Position (or (x, y)), e.g. a PositionMap
        settings: Settings (defaults when omitted)
        node_label: Text for a node label (default: str(node))
        edge_label: Text for an edge label; no edge labels when omitted.
            Returning None skips the label for that edge.

    Returns:
        Scene with circles, then curves, then labels

    Raises:
        LayoutError: If positions do not cover every node of the graph
    """
    settings = settings if settings is not None else Settings()
    view = as_graph_view(graph)
    nodes = list(view.nodes())
    edges = list(view.edges())

    missing = [node for node in nodes if node not in positions]
    if missing:
        raise LayoutError(
            "scene",
            "positions cover graph",
            f"no position for {len(missing)} node(s), e.g. {missing[:5]}",
        )

    centers: Dict[Hashable, Point] = {node: _point(positions[node]) for node in nodes}
    radius = settings.node_radius

    circles = [Circle(center=centers[node], radius=radius, node=node) for node in nodes]

    # Group parallel edges by unordered pair, self-loops by node
    pair_groups: Dict[Tuple, List[int]] = {}
    loop_groups: Dict[Hashable, List[int]] = {}
    for index, (source, target) in enumerate(edges):
        if source == target:
            loop_groups.setdefault(source, []).append(index)
        else:
            pair_groups.setdefault(_pair_key(source, target, pair_groups), []).append(index)

    geometry: Dict[int, Tuple[Point, Point, Tuple[Point, ...]]] = {}
    for node, indices in loop_groups.items():
        for loop_index, edge_index in enumerate(indices):
            geometry[edge_index] = self_loop(centers[node], radius, loop_index, settings.self_loop_size)

    for (first, second), indices in pair_groups.items():
        reference = (centers[first], centers[second])
        count = len(indices)
        for order, edge_index in enumerate(indices):
            source, target = edges[edge_index]
            start, end = centers[source], centers[target]
            if start == end:
                geometry[edge_index] = (start, end, ())
            elif count == 1:
                geometry[edge_index] = (*straight_edge(start, end, radius), ())
            else:
                offset = (order - (count - 1) / 2) * settings.parallel_edge_spacing
                geometry[edge_index] = parallel_edge(start, end, reference, offset, radius)

    curves = []
    for index, (source, target) in enumerate(edges):
        start, end, controls = geometry[index]
        curves.append(
            Curve(
                start=start,
                end=end,
                control_points=controls,
                edge=EdgeRef(source=source, target=target, index=index),
            )
        )

    labels = []
    if settings.show_labels:
        labeler = node_label or str
        for node in nodes:
            labels.append(Label(anchor=centers[node], text=labeler(node), owner="node", node=node))
    if edge_label is not None:
        for curve in curves:
            text = edge_label(curve.edge)
            if text is None:
                continue
            labels.append(Label(anchor=curve.midpoint(), text=str(text), owner="edge", edge=curve.edge))

    logger.debug(
        f"Built scene: {len(circles)} circles, {len(curves)} curves, {len(labels)} labels"
    )
    return Scene(
        width=settings.width,
        height=settings.height,
        primitives=tuple(circles + curves + labels),
    )
