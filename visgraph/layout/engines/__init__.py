"""Layout engines registry.

Available engines (one per LayoutStrategy kind):
- circular: nodes evenly spaced on a circle
- bipartite: two columns from a 2-coloring
- hierarchical: longest-path layers with barycenter ordering
- force_directed: spring-electrical simulation
- random: seeded uniform placement
"""

import logging
from typing import Any, Optional

from visgraph.config.settings import Settings
from visgraph.core.graph_view import as_graph_view
from visgraph.layout.engines.base import LayoutEngine
from visgraph.layout.engines.bipartite import BipartiteLayoutEngine
from visgraph.layout.engines.circular import CircularLayoutEngine
from visgraph.layout.engines.force_directed import ForceDirectedLayoutEngine
from visgraph.layout.engines.hierarchical import HierarchicalLayoutEngine
from visgraph.layout.engines.random_layout import RandomLayoutEngine
from visgraph.layout.strategies import STRATEGY_KINDS
from visgraph.models.positions import PositionMap

logger = logging.getLogger(__name__)

# Engine registry
ENGINES = {
    "circular": CircularLayoutEngine,
    "bipartite": BipartiteLayoutEngine,
    "hierarchical": HierarchicalLayoutEngine,
    "force_directed": ForceDirectedLayoutEngine,
    "random": RandomLayoutEngine,
}

if set(ENGINES) != set(STRATEGY_KINDS):
    raise ImportError(
        f"Layout engine registry out of sync with strategies: "
        f"engines={sorted(ENGINES)}, strategies={sorted(STRATEGY_KINDS)}"
    )


def get_engine(name: str) -> type:
    """Get layout engine class by strategy kind.

    Args:
        name: Strategy kind ('circular', 'hierarchical', ...)

    Returns:
        Layout engine class

    Raises:
        ValueError: If engine not found
    """
    if name not in ENGINES:
        raise ValueError(f"Unknown layout engine: {name}. Available: {list(ENGINES.keys())}")
    return ENGINES[name]


def compute_layout(
    graph: Any,
    strategy,
    settings: Optional[Settings] = None,
) -> PositionMap:
    """Compute node positions for a graph.

    Args:
        graph: GraphView or networkx graph
        strategy: LayoutStrategy variant selecting the engine
        settings: Settings (defaults when omitted)

    Returns:
        PositionMap covering every node exactly once

    Raises:
        LayoutError: If the strategy's precondition does not hold
        LayoutDefectError: If the engine output is incomplete or non-finite
    """
    settings = settings if settings is not None else Settings()
    view = as_graph_view(graph)
    engine: LayoutEngine = get_engine(strategy.kind)()
    positions = engine.layout(view, strategy, settings)
    logger.info(f"Computed {strategy.kind} layout for {len(positions)} nodes")
    return positions


__all__ = [
    "LayoutEngine",
    "CircularLayoutEngine",
    "BipartiteLayoutEngine",
    "HierarchicalLayoutEngine",
    "ForceDirectedLayoutEngine",
    "RandomLayoutEngine",
    "ENGINES",
    "get_engine",
    "compute_layout",
]
