"""Hierarchical (layered) layout engine.

Pipeline:
  1. Layer assignment: longest path from any source, via Kahn's topological
     processing. A cycle is a hard precondition failure (CyclicGraphError).
  2. Crossing reduction: alternating downward/upward barycenter sweeps; the
     ordering with the fewest adjacent-layer crossings seen is kept, so the
     result never has more crossings than the enumeration order.
  3. Coordinate assignment: layer index * layer_spacing along the layer axis,
     order index * node_spacing across it, optionally centred per layer.

Undirected edges are oriented as the graph view enumerates them.
"""

import logging
from collections import deque
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

from visgraph.config.settings import Settings
from visgraph.core.errors import CyclicGraphError
from visgraph.core.graph_view import GraphView
from visgraph.layout.engines.base import LayoutEngine, RawPositions
from visgraph.layout.strategies import HierarchicalLayout, Orientation

logger = logging.getLogger(__name__)

Ordering = List[List[Hashable]]


def _adjacency(
    graph: GraphView, nodes: Sequence[Hashable]
) -> Tuple[Dict[Hashable, List[Hashable]], Dict[Hashable, List[Hashable]], List[Tuple[Hashable, Hashable]]]:
    """Successor and predecessor lists (duplicates kept) plus the edge list."""
    successors: Dict[Hashable, List[Hashable]] = {node: [] for node in nodes}
    predecessors: Dict[Hashable, List[Hashable]] = {node: [] for node in nodes}
    edges = list(graph.edges())
    for source, target in edges:
        successors[source].append(target)
        predecessors[target].append(source)
    return successors, predecessors, edges


def _find_cycle(
    remaining: Sequence[Hashable], predecessors: Dict[Hashable, List[Hashable]]
) -> List[Hashable]:
    """Return one concrete cycle among nodes left over by Kahn's algorithm.

    Every leftover node has a leftover predecessor, so walking predecessors
    must revisit a node. The walk is reversed to read in edge direction.
    """
    pending = set(remaining)
    current = remaining[0]
    path: List[Hashable] = []
    index_in_path: Dict[Hashable, int] = {}
    while current not in index_in_path:
        index_in_path[current] = len(path)
        path.append(current)
        current = next(pred for pred in predecessors[current] if pred in pending)
    cycle = path[index_in_path[current]:]
    cycle.reverse()
    return cycle


def assign_layers(graph: GraphView, nodes: Optional[Sequence[Hashable]] = None) -> Dict[Hashable, int]:
    """Assign every node the length of the longest path reaching it from a source.

    Args:
        graph: Graph view (edges read as source -> target)
        nodes: Node enumeration; read from the graph when omitted

    Returns:
        Mapping node -> layer index, in node enumeration order

    Raises:
        CyclicGraphError: If the graph contains a cycle (self-loops included)
    """
    nodes = list(graph.nodes()) if nodes is None else list(nodes)
    successors, predecessors, _ = _adjacency(graph, nodes)

    in_degree = {node: len(predecessors[node]) for node in nodes}
    layers: Dict[Hashable, int] = {node: 0 for node in nodes}
    queue = deque(node for node in nodes if in_degree[node] == 0)
    processed = 0

    while queue:
        current = queue.popleft()
        processed += 1
        for succ in successors[current]:
            layers[succ] = max(layers[succ], layers[current] + 1)
            in_degree[succ] -= 1
            if in_degree[succ] == 0:
                queue.append(succ)

    if processed < len(nodes):
        remaining = [node for node in nodes if in_degree[node] > 0]
        cycle = _find_cycle(remaining, predecessors)
        logger.info(f"Hierarchical layout rejected: cycle through {len(cycle)} nodes")
        raise CyclicGraphError(cycle)

    return layers


def count_crossings(ordering: Ordering, edges: Sequence[Tuple[Hashable, Hashable]]) -> int:
    """Count crossings between edges that join adjacent layers.

    Edges spanning more than one layer are not counted.
    """
    layer_of: Dict[Hashable, int] = {}
    index_of: Dict[Hashable, int] = {}
    for layer_index, layer in enumerate(ordering):
        for order_index, node in enumerate(layer):
            layer_of[node] = layer_index
            index_of[node] = order_index

    between: Dict[int, List[Tuple[int, int]]] = {}
    for source, target in edges:
        upper, lower = (source, target) if layer_of[source] <= layer_of[target] else (target, source)
        if layer_of[lower] - layer_of[upper] == 1:
            between.setdefault(layer_of[upper], []).append((index_of[upper], index_of[lower]))

    total = 0
    for segments in between.values():
        for i in range(len(segments)):
            a_top, a_bottom = segments[i]
            for j in range(i + 1, len(segments)):
                b_top, b_bottom = segments[j]
                if (a_top - b_top) * (a_bottom - b_bottom) < 0:
                    total += 1
    return total


def _sort_by_barycenter(
    layer: List[Hashable],
    neighbors: Dict[Hashable, List[Hashable]],
    reference: List[Hashable],
) -> List[Hashable]:
    """Stable sort of a layer by mean index of neighbours in the reference layer."""
    reference_index = {node: index for index, node in enumerate(reference)}

    def barycenter(item: Tuple[int, Hashable]) -> float:
        current_index, node = item
        indices = [reference_index[nb] for nb in neighbors[node] if nb in reference_index]
        if not indices:
            return float(current_index)
        return sum(indices) / len(indices)

    return [node for _, node in sorted(enumerate(layer), key=barycenter)]


def reduce_crossings(
    ordering: Ordering,
    successors: Dict[Hashable, List[Hashable]],
    predecessors: Dict[Hashable, List[Hashable]],
    edges: Sequence[Tuple[Hashable, Hashable]],
    iterations: int,
) -> Ordering:
    """Barycenter heuristic with alternating sweeps; returns the best ordering seen."""
    best = [list(layer) for layer in ordering]
    best_crossings = count_crossings(best, edges)
    current = [list(layer) for layer in ordering]

    for sweep in range(iterations):
        if best_crossings == 0:
            break

        for layer_index in range(1, len(current)):
            current[layer_index] = _sort_by_barycenter(
                current[layer_index], predecessors, current[layer_index - 1]
            )
        for layer_index in range(len(current) - 2, -1, -1):
            current[layer_index] = _sort_by_barycenter(
                current[layer_index], successors, current[layer_index + 1]
            )

        crossings = count_crossings(current, edges)
        logger.debug(f"Barycenter sweep {sweep + 1}: {crossings} crossings")
        if crossings < best_crossings:
            best = [list(layer) for layer in current]
            best_crossings = crossings

    return best


def _coordinates(
    ordering: Ordering, settings: Settings, orientation: Orientation
) -> RawPositions:
    """Map (layer, order) to canvas coordinates for the given orientation."""
    left, top, right, bottom = settings.drawing_bounds()
    center_x, center_y = settings.center
    horizontal = orientation in (Orientation.LEFT_TO_RIGHT, Orientation.RIGHT_TO_LEFT)

    positions: RawPositions = {}
    for layer_index, layer in enumerate(ordering):
        along = layer_index * settings.layer_spacing
        for order_index, node in enumerate(layer):
            if settings.center_layers:
                across = (order_index - (len(layer) - 1) / 2) * settings.node_spacing
                across += center_y if horizontal else center_x
            else:
                across = order_index * settings.node_spacing
                across += top if horizontal else left

            if orientation == Orientation.TOP_TO_BOTTOM:
                positions[node] = (across, top + along)
            elif orientation == Orientation.BOTTOM_TO_TOP:
                positions[node] = (across, bottom - along)
            elif orientation == Orientation.LEFT_TO_RIGHT:
                positions[node] = (left + along, across)
            else:
                positions[node] = (right - along, across)
    return positions


class HierarchicalLayoutEngine(LayoutEngine):
    """Layered layout for directed acyclic graphs."""

    @property
    def name(self) -> str:
        return "hierarchical"

    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy: HierarchicalLayout,
        settings: Settings,
    ) -> RawPositions:
        layers = assign_layers(graph, nodes)
        if not nodes:
            return {}

        layer_count = max(layers.values()) + 1
        ordering: Ordering = [[] for _ in range(layer_count)]
        for node in nodes:
            ordering[layers[node]].append(node)

        successors, predecessors, edges = _adjacency(graph, nodes)
        ordering = reduce_crossings(
            ordering, successors, predecessors, edges, settings.barycenter_iterations
        )
        logger.debug(f"Hierarchical layout: {layer_count} layers for {len(nodes)} nodes")

        return _coordinates(ordering, settings, strategy.orientation)
