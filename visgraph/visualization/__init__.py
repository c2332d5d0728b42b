"""Scene construction from graphs and node positions."""

from visgraph.visualization.scene_builder import build_scene

__all__ = ["build_scene"]
