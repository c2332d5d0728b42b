"""Error taxonomy for layout, scene and export operations.

Precondition violations are surfaced to the caller and never retried:
- BipartiteViolation: bipartite layout requested on a non-2-colorable graph
- CyclicGraphError: hierarchical layout requested on a graph with a cycle
- InvalidSettings: settings values outside their valid range

LayoutDefectError signals an engine bug (incomplete or non-finite position
map). It must be unreachable; tests assert it never fires.
"""

from typing import Any, Hashable, List, Optional, Sequence, Tuple


class VisGraphError(Exception):
    """Base class for all visgraph errors."""


class InvalidSettings(VisGraphError, ValueError):
    """Raised when Settings values fail validation.

    Attributes:
        errors: List of (field, value, message) tuples, one per failed field
    """

    def __init__(self, errors: Sequence[Tuple[str, Any, str]]):
        self.errors: List[Tuple[str, Any, str]] = list(errors)
        details = "; ".join(
            f"{field}={value!r}: {message}" for field, value, message in self.errors
        )
        super().__init__(f"Invalid settings: {details}")

    @property
    def fields(self) -> List[str]:
        """Names of the fields that failed validation."""
        return [field for field, _, _ in self.errors]


class LayoutError(VisGraphError):
    """Raised when a layout strategy's precondition does not hold.

    Attributes:
        strategy: Strategy kind that failed (e.g. 'bipartite')
        precondition: Short name of the violated precondition
    """

    def __init__(self, strategy: str, precondition: str, message: str):
        self.strategy = strategy
        self.precondition = precondition
        super().__init__(f"[{strategy}] precondition '{precondition}' failed: {message}")


class BipartiteViolation(LayoutError):
    """Raised when the graph has no valid 2-coloring."""

    def __init__(self, edge: Tuple[Hashable, Hashable], reason: Optional[str] = None):
        self.edge = edge
        source, target = edge
        super().__init__(
            "bipartite",
            "two_colorable",
            reason or f"edge ({source!r}, {target!r}) joins two nodes of the same color",
        )


class CyclicGraphError(LayoutError):
    """Raised when a hierarchical layout is requested on a cyclic graph."""

    def __init__(self, cycle: Sequence[Hashable]):
        self.cycle = list(cycle)
        path = " -> ".join(repr(node) for node in self.cycle + self.cycle[:1])
        super().__init__("hierarchical", "acyclic", f"graph contains cycle {path}")


class LayoutDefectError(VisGraphError, AssertionError):
    """Raised when an engine returns an incomplete or non-finite position map."""


class RasterizationError(VisGraphError):
    """Raised when SVG markup cannot be rasterized."""
