"""Settings for graph layout and rendering.

Settings is an immutable, validated value object. All numeric fields are
checked at construction; an invalid value raises InvalidSettings naming the
field instead of propagating NaNs into a layout.

Usage:
    from visgraph.config.settings import Settings

    # All values not given explicitly use their defaults
    settings = Settings(width=800, height=600, seed=7)

    # Derive a modified copy (validated again)
    bigger = settings.replace(node_radius=40)
"""

import logging
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from visgraph.core.errors import InvalidSettings

logger = logging.getLogger(__name__)

# Defaults for canvas and styling
DEFAULT_WIDTH = 1000.0
DEFAULT_HEIGHT = 1000.0
DEFAULT_RADIUS = 25.0
DEFAULT_FONT_SIZE = 16.0
DEFAULT_STROKE_WIDTH = 5.0
# Margin as a fraction of width/height on each side: 0.05 leaves 90% for drawing
DEFAULT_MARGIN = 0.05

# Defaults for the layout engines
DEFAULT_NODE_SPACING = 75.0
DEFAULT_LAYER_SPACING = 100.0
DEFAULT_ITERATIONS = 300
DEFAULT_SPRING_CONSTANT = 0.05
DEFAULT_REPULSION_CONSTANT = 50000.0
DEFAULT_IDEAL_EDGE_LENGTH = 100.0
DEFAULT_MIN_DISTANCE = 1.0


class Settings(BaseModel):
    """Immutable configuration bundle shared by layout, scene and export.

    Attributes:
        width: Canvas width in pixels
        height: Canvas height in pixels
        node_radius: Radius of node circles in pixels
        font_size: Label font size in pixels
        stroke_width: Edge stroke width in pixels
        margin_x: Horizontal margin as a fraction of width, in [0, 0.5)
        margin_y: Vertical margin as a fraction of height, in [0, 0.5)
        node_spacing: Centre-to-centre spacing between neighbouring nodes
        min_circle_radius: Minimum circular-layout radius (None = fill drawing area)
        layer_spacing: Distance between hierarchical layers
        center_layers: Centre every hierarchical layer horizontally
        barycenter_iterations: Number of down/up barycenter sweep pairs
        bipartite_offset: Distance between the two bipartite columns
            (None = half the drawing width)
        iterations: Force-directed iteration cap
        convergence_threshold: Stop early once the largest per-node displacement
            of an iteration falls below this value (None = always run all iterations)
        spring_constant: Edge attraction constant
        repulsion_constant: Node repulsion constant
        ideal_edge_length: Rest length of the edge springs
        min_distance: Distance clamp for repulsion between (near-)coincident nodes
        initial_temperature: Starting displacement cap
            (None = 10% of the smaller drawing dimension)
        cooling: Cooling schedule, 'linear' or 'geometric'
        cooling_factor: Per-iteration ratio for geometric cooling
        seed: Seed for pseudo-random placement
        workers: Worker threads for force computation
        show_labels: Emit node labels in the scene
        parallel_edge_spacing: Offset between parallel edge curves
        self_loop_size: Height step between nested self-loops
    """

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Canvas
    width: float = Field(default=DEFAULT_WIDTH, gt=0, description="Canvas width (px)")
    height: float = Field(default=DEFAULT_HEIGHT, gt=0, description="Canvas height (px)")
    node_radius: float = Field(default=DEFAULT_RADIUS, gt=0, description="Node radius (px)")
    font_size: float = Field(default=DEFAULT_FONT_SIZE, gt=0, description="Label font size (px)")
    stroke_width: float = Field(
        default=DEFAULT_STROKE_WIDTH, gt=0, description="Edge stroke width (px)"
    )
    margin_x: float = Field(
        default=DEFAULT_MARGIN, ge=0, lt=0.5, description="Horizontal margin fraction"
    )
    margin_y: float = Field(
        default=DEFAULT_MARGIN, ge=0, lt=0.5, description="Vertical margin fraction"
    )

    # Circular / hierarchical geometry
    node_spacing: float = Field(
        default=DEFAULT_NODE_SPACING, gt=0, description="Spacing between neighbouring nodes"
    )
    min_circle_radius: Optional[float] = Field(
        default=None, ge=0, description="Minimum circular layout radius"
    )
    layer_spacing: float = Field(
        default=DEFAULT_LAYER_SPACING, gt=0, description="Spacing between layers"
    )
    center_layers: bool = Field(default=True, description="Centre each layer")
    barycenter_iterations: int = Field(
        default=4, ge=0, description="Barycenter down/up sweep pairs"
    )

    # Bipartite geometry
    bipartite_offset: Optional[float] = Field(
        default=None, gt=0, description="Horizontal distance between the two columns"
    )

    # Force-directed simulation
    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=0, description="Iteration cap")
    convergence_threshold: Optional[float] = Field(
        default=None, ge=0, description="Early-exit displacement threshold"
    )
    spring_constant: float = Field(default=DEFAULT_SPRING_CONSTANT, gt=0)
    repulsion_constant: float = Field(default=DEFAULT_REPULSION_CONSTANT, gt=0)
    ideal_edge_length: float = Field(default=DEFAULT_IDEAL_EDGE_LENGTH, gt=0)
    min_distance: float = Field(default=DEFAULT_MIN_DISTANCE, gt=0)
    initial_temperature: Optional[float] = Field(default=None, gt=0)
    cooling: Literal["linear", "geometric"] = Field(default="linear")
    cooling_factor: float = Field(default=0.95, gt=0, lt=1)
    seed: int = Field(default=0, description="Seed for pseudo-random placement")
    workers: int = Field(default=1, ge=1, description="Force computation threads")

    # Scene
    show_labels: bool = Field(default=True, description="Emit node labels")
    parallel_edge_spacing: float = Field(default=20.0, gt=0)
    self_loop_size: float = Field(default=30.0, gt=0)

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            errors = _collect_errors(exc)
            logger.debug(f"Rejected settings: {errors}")
            raise InvalidSettings(errors) from exc

    def replace(self, **changes: Any) -> "Settings":
        """Return a new validated Settings with the given fields changed."""
        data: Dict[str, Any] = self.model_dump()
        data.update(changes)
        return Settings(**data)

    @property
    def center(self) -> Tuple[float, float]:
        """Canvas centre point."""
        return (self.width / 2, self.height / 2)

    def drawing_bounds(self) -> Tuple[float, float, float, float]:
        """Drawing area (canvas minus margins) as (left, top, right, bottom)."""
        left = self.margin_x * self.width
        top = self.margin_y * self.height
        return (left, top, self.width - left, self.height - top)

    @property
    def drawing_width(self) -> float:
        left, _, right, _ = self.drawing_bounds()
        return right - left

    @property
    def drawing_height(self) -> float:
        _, top, _, bottom = self.drawing_bounds()
        return bottom - top

    def start_temperature(self) -> float:
        """Initial force-directed temperature."""
        if self.initial_temperature is not None:
            return self.initial_temperature
        return 0.1 * min(self.drawing_width, self.drawing_height)


def _collect_errors(exc: ValidationError) -> List[Tuple[str, Any, str]]:
    """Flatten a pydantic ValidationError into (field, value, message) tuples."""
    collected = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ())) or "settings"
        collected.append((field, error.get("input"), error.get("msg", "invalid value")))
    return collected
