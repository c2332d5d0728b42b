"""Force-directed (spring-electrical) layout engine.

Each iteration computes, for every node, the net force from
- repulsion against every other node: repulsion_constant / max(d, min_distance)^2
- attraction along every incident non-loop edge: spring_constant * (d - ideal_edge_length)

and moves the node along the force by at most the current temperature. The
temperature cools linearly or geometrically, and positions are clamped to the
drawing area after every move, so the layout stays bounded for any iteration
count.

Cost is O(n^2) per iteration. With Settings.workers > 1 the per-node forces of
an iteration are computed on a thread pool against a snapshot of the previous
positions; positions are written only after every force is collected. Each
node's force is summed in the same fixed order in both modes, so the output
does not depend on the worker count.
"""

import logging
import math
import random
from concurrent.futures import ThreadPoolExecutor
from typing import Hashable, List, Optional, Sequence, Tuple

from visgraph.config.feature_flags import is_enabled
from visgraph.config.settings import Settings
from visgraph.core.graph_view import GraphView
from visgraph.layout.engines.base import LayoutEngine, RawPositions
from visgraph.layout.strategies import ForceDirectedLayout

logger = logging.getLogger(__name__)

Vector = Tuple[float, float]


def initial_positions(
    count: int, settings: Settings, rng: random.Random
) -> List[List[float]]:
    """Uniform pseudo-random positions inside the drawing area."""
    left, top, right, bottom = settings.drawing_bounds()
    return [
        [rng.uniform(left, right), rng.uniform(top, bottom)] for _ in range(count)
    ]


def temperature_at(step: int, settings: Settings) -> float:
    """Displacement cap for the given iteration (monotonically non-increasing)."""
    start = settings.start_temperature()
    if settings.cooling == "geometric":
        return start * settings.cooling_factor ** step
    if settings.iterations == 0:
        return start
    return start * (1 - step / settings.iterations)


class _ForceModel:
    """Force evaluation against a fixed snapshot of positions."""

    def __init__(self, incident: List[List[int]], settings: Settings):
        self.incident = incident
        self.repulsion = settings.repulsion_constant
        self.spring = settings.spring_constant
        self.rest_length = settings.ideal_edge_length
        self.min_distance = settings.min_distance

    def force_on(self, index: int, snapshot: Sequence[Sequence[float]]) -> Vector:
        x, y = snapshot[index]
        fx = 0.0
        fy = 0.0

        for other, (ox, oy) in enumerate(snapshot):
            if other == index:
                continue
            dx = x - ox
            dy = y - oy
            distance = math.hypot(dx, dy)
            magnitude = self.repulsion / max(distance, self.min_distance) ** 2
            if distance == 0:
                # Coincident nodes separate along x, lower index to +x
                fx += magnitude if index < other else -magnitude
            else:
                fx += magnitude * dx / distance
                fy += magnitude * dy / distance

        for other in self.incident[index]:
            ox, oy = snapshot[other]
            dx = ox - x
            dy = oy - y
            distance = math.hypot(dx, dy)
            if distance == 0:
                continue
            magnitude = self.spring * (distance - self.rest_length)
            fx += magnitude * dx / distance
            fy += magnitude * dy / distance

        return fx, fy

    def forces(self, indices: Sequence[int], snapshot: Sequence[Sequence[float]]) -> List[Vector]:
        return [self.force_on(index, snapshot) for index in indices]


def capped_step(fx: float, fy: float, temperature: float) -> Vector:
    """Displacement along (fx, fy) with length min(|F|, temperature).

    Components that overflowed to infinity keep only their sign; NaN
    components (opposing infinite terms) contribute nothing.
    """
    overflowed = not (math.isfinite(fx) and math.isfinite(fy))
    if overflowed:
        fx = math.copysign(1.0, fx) if math.isinf(fx) else 0.0
        fy = math.copysign(1.0, fy) if math.isinf(fy) else 0.0

    largest = max(abs(fx), abs(fy))
    if largest == 0:
        return 0.0, 0.0
    # Normalize first so the length never overflows
    ux = fx / largest
    uy = fy / largest
    norm = math.hypot(ux, uy)
    length = temperature if overflowed else min(largest * norm, temperature)
    step = length / norm
    return ux * step, uy * step


def _chunks(count: int, workers: int) -> List[range]:
    size = max(1, math.ceil(count / workers))
    return [range(start, min(start + size, count)) for start in range(0, count, size)]


class ForceDirectedLayoutEngine(LayoutEngine):
    """Spring-electrical simulation with a cooling displacement cap.

    Args:
        rng: Random source for the initial placement. Defaults to a fresh
            ``random.Random(settings.seed)`` per call.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng

    @property
    def name(self) -> str:
        return "force_directed"

    def _compute(
        self,
        graph: GraphView,
        nodes: List[Hashable],
        strategy: ForceDirectedLayout,
        settings: Settings,
    ) -> RawPositions:
        count = len(nodes)
        if count < 2:
            return {node: settings.center for node in nodes}

        index_of = {node: index for index, node in enumerate(nodes)}
        incident: List[List[int]] = [[] for _ in nodes]
        for source, target in graph.edges():
            if source == target:
                continue
            incident[index_of[source]].append(index_of[target])
            incident[index_of[target]].append(index_of[source])

        rng = self.rng if self.rng is not None else random.Random(settings.seed)
        positions = initial_positions(count, settings, rng)
        model = _ForceModel(incident, settings)

        threaded = settings.workers > 1 and is_enabled('threaded_forces')
        if threaded:
            with ThreadPoolExecutor(max_workers=settings.workers) as executor:
                steps = self._simulate(positions, model, settings, executor)
        else:
            steps = self._simulate(positions, model, settings, None)

        logger.debug(
            f"Force-directed layout: {count} nodes, {steps} iterations, "
            f"workers={settings.workers if threaded else 1}"
        )
        return {node: (positions[index][0], positions[index][1]) for index, node in enumerate(nodes)}

    def _simulate(
        self,
        positions: List[List[float]],
        model: _ForceModel,
        settings: Settings,
        executor: Optional[ThreadPoolExecutor],
    ) -> int:
        """Run the iterations in place; returns the number of iterations run."""
        left, top, right, bottom = settings.drawing_bounds()
        count = len(positions)
        all_indices = range(count)
        chunks = _chunks(count, settings.workers) if executor is not None else None

        for step in range(settings.iterations):
            snapshot = [tuple(position) for position in positions]
            if executor is None:
                forces = model.forces(all_indices, snapshot)
            else:
                forces = []
                for part in executor.map(lambda chunk: model.forces(chunk, snapshot), chunks):
                    forces.extend(part)

            temperature = temperature_at(step, settings)
            largest_move = 0.0
            for index, (fx, fy) in enumerate(forces):
                dx, dy = capped_step(fx, fy, temperature)
                if dx == 0 and dy == 0:
                    continue
                old_x, old_y = positions[index]
                new_x = min(max(old_x + dx, left), right)
                new_y = min(max(old_y + dy, top), bottom)
                positions[index][0] = new_x
                positions[index][1] = new_y
                largest_move = max(largest_move, math.hypot(new_x - old_x, new_y - old_y))

            if (
                settings.convergence_threshold is not None
                and largest_move < settings.convergence_threshold
            ):
                return step + 1

        return settings.iterations
