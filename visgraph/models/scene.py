"""Scene primitives produced by the scene builder.

A Scene is an ordered sequence of drawable primitives:
- Circle: one per node
- Curve: one per edge (straight when it has no control points)
- Label: optional text anchored at a node or edge midpoint

Ordering only matters for deterministic serialization.
"""

from typing import Annotated, Any, Hashable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Point = Tuple[float, float]


class EdgeRef(BaseModel):
    """Identity of one edge, parallel edges included.

    Attributes:
        source: Source node as enumerated by the graph view
        target: Target node as enumerated by the graph view
        index: Position of the edge in the graph view's edge enumeration
    """

    model_config = ConfigDict(frozen=True)

    source: Any
    target: Any
    index: int = Field(..., ge=0)

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target


class Circle(BaseModel):
    """Node circle."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["circle"] = "circle"
    center: Point
    radius: float = Field(..., gt=0)
    node: Any


class Curve(BaseModel):
    """Edge drawn from start to end.

    No control points means a straight segment, one control point a quadratic
    Bezier curve and two control points a cubic Bezier curve.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["curve"] = "curve"
    start: Point
    end: Point
    control_points: Tuple[Point, ...] = Field(default=())
    edge: EdgeRef

    @field_validator("control_points")
    @classmethod
    def validate_control_point_count(cls, v: Tuple[Point, ...]) -> Tuple[Point, ...]:
        """Only straight, quadratic and cubic curves are supported."""
        if len(v) > 2:
            raise ValueError(f"Curve supports at most 2 control points, got {len(v)}")
        return v

    @property
    def is_straight(self) -> bool:
        return not self.control_points

    def point_at(self, t: float) -> Point:
        """Point on the curve at parameter t in [0, 1]."""
        points = [self.start, *self.control_points, self.end]
        # De Casteljau
        while len(points) > 1:
            points = [
                (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
                for a, b in zip(points, points[1:])
            ]
        return points[0]

    def midpoint(self) -> Point:
        return self.point_at(0.5)


class Label(BaseModel):
    """Text anchored at a point."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    kind: Literal["label"] = "label"
    anchor: Point
    text: str
    owner: Literal["node", "edge"] = "node"
    node: Optional[Any] = None
    edge: Optional[EdgeRef] = None


Primitive = Annotated[Union[Circle, Curve, Label], Field(discriminator="kind")]


class Scene(BaseModel):
    """Ordered drawable primitives on a canvas of the given size."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    primitives: Tuple[Primitive, ...] = ()

    def circles(self) -> List[Circle]:
        return [p for p in self.primitives if isinstance(p, Circle)]

    def curves(self) -> List[Curve]:
        return [p for p in self.primitives if isinstance(p, Curve)]

    def labels(self) -> List[Label]:
        return [p for p in self.primitives if isinstance(p, Label)]

    def circle_for(self, node: Hashable) -> Optional[Circle]:
        for circle in self.circles():
            if circle.node == node:
                return circle
        return None
