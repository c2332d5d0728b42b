"""Layout strategy selectors.

LayoutStrategy is a closed tagged variant: each member carries a literal
``kind`` plus the options specific to that layout. Dispatch happens in
visgraph.layout.engines, which registers exactly one engine per kind.

Example:
    strategy = HierarchicalLayout(orientation=Orientation.LEFT_TO_RIGHT)
    strategy = parse_strategy({"kind": "bipartite", "left": ["a", "b"]})
"""

from enum import Enum
from typing import Annotated, Any, Dict, FrozenSet, Literal, Optional, Tuple, Union, get_args

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator


class Orientation(str, Enum):
    """Direction in which hierarchical layers advance."""

    TOP_TO_BOTTOM = "top_to_bottom"
    BOTTOM_TO_TOP = "bottom_to_top"
    LEFT_TO_RIGHT = "left_to_right"
    RIGHT_TO_LEFT = "right_to_left"


class CircularLayout(BaseModel):
    """Nodes evenly spaced on a circle around the canvas centre."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["circular"] = "circular"


class BipartiteLayout(BaseModel):
    """Two vertical columns, one per color class.

    Attributes:
        left: Nodes of the left column. When omitted the partition is computed
            by breadth-first 2-coloring.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["bipartite"] = "bipartite"
    left: Optional[FrozenSet[Any]] = Field(
        default=None, description="Nodes of the left column (computed by 2-coloring when omitted)"
    )

    @field_validator("left", mode="before")
    @classmethod
    def coerce_left(cls, v: Any) -> Any:
        """Accept any iterable of node ids (list, set, tuple)."""
        if v is None or isinstance(v, frozenset):
            return v
        try:
            return frozenset(v)
        except TypeError as e:
            raise ValueError("partition entries must be hashable node ids") from e


class HierarchicalLayout(BaseModel):
    """Longest-path layering with barycenter ordering for DAGs."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["hierarchical"] = "hierarchical"
    orientation: Orientation = Field(
        default=Orientation.TOP_TO_BOTTOM, description="Direction in which layers advance"
    )


class ForceDirectedLayout(BaseModel):
    """Spring-electrical simulation seeded from Settings.seed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["force_directed"] = "force_directed"


class RandomLayout(BaseModel):
    """Uniform pseudo-random placement seeded from Settings.seed."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["random"] = "random"


LayoutStrategy = Annotated[
    Union[CircularLayout, BipartiteLayout, HierarchicalLayout, ForceDirectedLayout, RandomLayout],
    Field(discriminator="kind"),
]

STRATEGY_TYPES: Tuple[type, ...] = get_args(get_args(LayoutStrategy)[0])

# kind -> strategy class, e.g. "circular" -> CircularLayout
STRATEGY_KINDS: Dict[str, type] = {
    strategy_type.model_fields["kind"].default: strategy_type
    for strategy_type in STRATEGY_TYPES
}

_strategy_adapter: TypeAdapter = TypeAdapter(LayoutStrategy)


def parse_strategy(data: Union[str, Dict[str, Any]]) -> LayoutStrategy:
    """Build a strategy from a kind name or a JSON-like dictionary.

    Args:
        data: "circular", or {"kind": "hierarchical", "orientation": "left_to_right"}

    Returns:
        Strategy instance

    Raises:
        ValueError: If the kind is unknown or the options are invalid
    """
    if isinstance(data, str):
        data = {"kind": data}
    kind = data.get("kind")
    if kind not in STRATEGY_KINDS:
        raise ValueError(
            f"Unknown layout strategy: {kind}. Available: {list(STRATEGY_KINDS.keys())}"
        )
    return _strategy_adapter.validate_python(data)
