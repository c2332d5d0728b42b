"""Position models produced by every layout strategy.

- Position: a finite 2-D coordinate (NaN/inf are rejected)
- PositionMap: immutable mapping node -> Position, ordered by node enumeration
- BoundingBox: extent of a set of positions

Coordinates are canvas pixels with a top-left origin and y growing downward.
"""

import math
from typing import (
    TYPE_CHECKING,
    Dict,
    Hashable,
    Iterable,
    Iterator,
    Mapping,
    Optional,
    Tuple,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from visgraph.config.settings import Settings


class Position(BaseModel):
    """Position of a single node in 2D canvas space.

    Attributes:
        x: Horizontal coordinate
        y: Vertical coordinate
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float = Field(..., description="Horizontal coordinate")
    y: float = Field(..., description="Vertical coordinate")

    @classmethod
    def of(cls, point: Tuple[float, float]) -> "Position":
        """Create Position from an (x, y) tuple."""
        return cls(x=point[0], y=point[1])

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Position") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


class BoundingBox(BaseModel):
    """Bounding box for a set of positions.

    Attributes:
        min_x: Minimum x coordinate
        max_x: Maximum x coordinate
        min_y: Minimum y coordinate
        max_y: Maximum y coordinate
    """

    model_config = ConfigDict(frozen=True)

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Tuple[float, float]:
        return ((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, position: Position, tolerance: float = 1e-9) -> bool:
        """Whether position lies inside the box (inclusive, with tolerance)."""
        return (
            self.min_x - tolerance <= position.x <= self.max_x + tolerance
            and self.min_y - tolerance <= position.y <= self.max_y + tolerance
        )


PointLike = Union[Position, Tuple[float, float]]


class PositionMap(Mapping[Hashable, Position]):
    """Immutable mapping from node identifier to Position.

    Iteration order is insertion order, which every engine makes equal to the
    graph's node enumeration order. Values given as (x, y) tuples are converted
    to Position, so non-finite coordinates fail at construction.

    Example:
        positions = PositionMap({"a": (0.0, 0.0), "b": Position(x=10, y=0)})
        positions["b"].x  # 10.0
    """

    __slots__ = ("_positions",)

    def __init__(self, positions: Optional[Mapping[Hashable, PointLike]] = None):
        converted: Dict[Hashable, Position] = {}
        for node, point in (positions or {}).items():
            converted[node] = point if isinstance(point, Position) else Position.of(point)
        self._positions = converted

    def __getitem__(self, node: Hashable) -> Position:
        return self._positions[node]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)

    def __eq__(self, other: object) -> bool:
        """Order-sensitive against a PositionMap; plain mappings compare like dicts.

        Values of a plain mapping may be Position or (x, y) tuples.
        """
        if isinstance(other, PositionMap):
            return list(self._positions.items()) == list(other._positions.items())
        if isinstance(other, Mapping):
            try:
                converted = PositionMap(other)
            except (TypeError, ValueError, IndexError):
                return False
            return self._positions == converted._positions
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._positions.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{node!r}: ({p.x:g}, {p.y:g})" for node, p in self._positions.items())
        return f"PositionMap({{{inner}}})"

    def to_dict(self) -> Dict[Hashable, Tuple[float, float]]:
        """Plain {node: (x, y)} dictionary."""
        return {node: position.as_tuple() for node, position in self._positions.items()}

    def bounding_box(self) -> BoundingBox:
        """Compute bounding box of all positions.

        Raises:
            ValueError: If the map is empty
        """
        if not self._positions:
            raise ValueError("Cannot compute bounding box from empty positions")

        xs = [p.x for p in self._positions.values()]
        ys = [p.y for p in self._positions.values()]
        return BoundingBox(min_x=min(xs), max_x=max(xs), min_y=min(ys), max_y=max(ys))

    def centroid(self) -> Tuple[float, float]:
        """Mean of all positions.

        Raises:
            ValueError: If the map is empty
        """
        if not self._positions:
            raise ValueError("Cannot compute centroid of empty positions")
        count = len(self._positions)
        return (
            sum(p.x for p in self._positions.values()) / count,
            sum(p.y for p in self._positions.values()) / count,
        )

    @classmethod
    def from_normalized(
        cls,
        positions: Mapping[Hashable, Tuple[float, float]],
        settings: "Settings",
    ) -> "PositionMap":
        """Scale normalized [0, 1] coordinates into the settings' drawing area.

        With margin_x = 0.1 on a 1000 px canvas, x = 0.0 maps to 100 and
        x = 1.0 maps to 900.
        """
        left, top, right, bottom = settings.drawing_bounds()
        return cls(
            {
                node: (left + x * (right - left), top + y * (bottom - top))
                for node, (x, y) in positions.items()
            }
        )

    @classmethod
    def from_items(cls, items: Iterable[Tuple[Hashable, PointLike]]) -> "PositionMap":
        return cls(dict(items))
