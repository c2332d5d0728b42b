"""Layout module for automatic graph positioning.

This module provides:
- Layout strategy selectors (closed tagged variant on ``kind``)
- Layout engine abstraction and one engine per strategy
- compute_layout, the single dispatch entry point

Coordinates are canvas pixels with a top-left origin; every engine places
nodes inside the drawing area (canvas minus margins).
"""

from visgraph.layout.engines import ENGINES, LayoutEngine, compute_layout, get_engine
from visgraph.layout.strategies import (
    BipartiteLayout,
    CircularLayout,
    ForceDirectedLayout,
    HierarchicalLayout,
    LayoutStrategy,
    Orientation,
    RandomLayout,
    parse_strategy,
)

__all__ = [
    "LayoutEngine",
    "ENGINES",
    "get_engine",
    "compute_layout",
    "LayoutStrategy",
    "CircularLayout",
    "BipartiteLayout",
    "HierarchicalLayout",
    "ForceDirectedLayout",
    "RandomLayout",
    "Orientation",
    "parse_strategy",
]
