"""Random layout engine: uniform placement in the drawing area."""

import random
from typing import Hashable, List, Optional

from visgraph.config.settings import Settings
from visgraph.core.graph_view import GraphView
from visgraph.layout.engines.base import LayoutEngine, RawPositions
from visgraph.layout.strategies import RandomLayout


class RandomLayoutEngine(LayoutEngine):
    """Seeded uniform placement, mainly useful as a baseline."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    @property
    def name(self) -> str:
        return "random"

    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy: RandomLayout,
        settings: Settings,
    ) -> RawPositions:
        rng = self.rng if self.rng is not None else random.Random(settings.seed)
        left, top, right, bottom = settings.drawing_bounds()
        return {node: (rng.uniform(left, right), rng.uniform(top, bottom)) for node in nodes}
