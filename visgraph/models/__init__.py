"""Data models for layout output and drawable scenes."""

from visgraph.models.positions import BoundingBox, Position, PositionMap
from visgraph.models.scene import Circle, Curve, EdgeRef, Label, Primitive, Scene

__all__ = [
    "Position",
    "PositionMap",
    "BoundingBox",
    "Circle",
    "Curve",
    "EdgeRef",
    "Label",
    "Primitive",
    "Scene",
]
