"""Base layout engine.

Defines the interface that all layout engines implement and the checks every
engine output passes before it is handed to the caller.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, Hashable, List, Tuple

from visgraph.config.settings import Settings
from visgraph.core.errors import LayoutDefectError
from visgraph.core.graph_view import GraphView
from visgraph.models.positions import PositionMap

logger = logging.getLogger(__name__)

RawPositions = Dict[Hashable, Tuple[float, float]]


class LayoutEngine(ABC):
    """Abstract base class for layout engines.

    Subclasses implement ``_compute``, which receives the node enumeration and
    returns raw (x, y) tuples. ``layout`` wraps it with the degenerate-input
    rules shared by all engines and with coverage/finiteness checks.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy kind handled by this engine (e.g. 'circular')."""
        ...

    @abstractmethod
    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy,
        settings: Settings,
    ) -> RawPositions:
        """Compute raw positions for the given nodes.

        Preconditions are checked here, so an empty or single-node graph still
        goes through this method.
        """
        ...

    def layout(self, graph: GraphView, strategy, settings: Settings) -> PositionMap:
        """Compute a PositionMap for the graph.

        Args:
            graph: Read-only graph view
            strategy: Strategy variant with engine-specific options
            settings: Validated settings

        Returns:
            PositionMap with exactly one entry per node, in enumeration order

        Raises:
            LayoutError: If a strategy precondition does not hold
        """
        nodes = list(graph.nodes())
        logger.debug(f"{self.name} layout: {len(nodes)} nodes")

        raw = self._compute(graph, nodes, strategy, settings)

        if len(nodes) == 1:
            # A single node always sits at the canvas centre
            raw = {nodes[0]: settings.center}

        return self._finalize(nodes, raw)

    def _finalize(self, nodes: List[Hashable], raw: RawPositions) -> PositionMap:
        """Check coverage and finiteness, then freeze into a PositionMap."""
        if len(raw) != len(nodes) or any(node not in raw for node in nodes):
            missing = [node for node in nodes if node not in raw]
            extra = [node for node in raw if node not in set(nodes)]
            raise LayoutDefectError(
                f"{self.name} layout returned incomplete positions "
                f"(missing={missing[:5]}, extraneous={extra[:5]})"
            )

        for node in nodes:
            x, y = raw[node]
            if not (math.isfinite(x) and math.isfinite(y)):
                raise LayoutDefectError(
                    f"{self.name} layout produced non-finite position ({x}, {y}) for {node!r}"
                )

        return PositionMap({node: raw[node] for node in nodes})
