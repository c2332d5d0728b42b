"""SVG exporter for scenes.

Serializes a Scene into SVG markup with lxml. The document layout is fixed:

    <svg width= height= viewBox=>
      <g id="nodes">  circles  </g>
      <g id="edges">  lines / paths  </g>
      <g id="labels"> text  </g>
    </svg>

Straight curves become <line>, quadratic curves <path d="M .. Q ..">, cubic
curves <path d="M .. C ..">. Numbers are written with at most three decimals
and no trailing zeros, so identical scenes serialize byte-identically.
"""

import logging
from pathlib import Path
from typing import Optional

from lxml import etree

from visgraph.config.settings import Settings
from visgraph.models.scene import Circle, Curve, Label, Point, Scene

logger = logging.getLogger(__name__)

SVG_NAMESPACE = "http://www.w3.org/2000/svg"
DEFAULT_FONT_FAMILY = "DejaVu Sans"


def _tag(name: str) -> str:
    return f"{{{SVG_NAMESPACE}}}{name}"


def format_number(value: float) -> str:
    """Deterministic short decimal: 12.5000 -> '12.5', 3.0 -> '3', -0.0 -> '0'."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _point_text(point: Point) -> str:
    return f"{format_number(point[0])} {format_number(point[1])}"


def path_data(curve: Curve) -> str:
    """SVG path data for a curve with control points."""
    command = "Q" if len(curve.control_points) == 1 else "C"
    points = " ".join(_point_text(point) for point in (*curve.control_points, curve.end))
    return f"M {_point_text(curve.start)} {command} {points}"


class SvgExporter:
    """Renders Scene primitives into an SVG document.

    Attributes:
        settings: Styling (stroke width, font size)
        font_family: Font family for labels
    """

    def __init__(self, settings: Optional[Settings] = None, font_family: str = DEFAULT_FONT_FAMILY):
        self.settings = settings if settings is not None else Settings()
        self.font_family = font_family

    def export(self, scene: Scene) -> str:
        """Serialize the scene to SVG text."""
        root = self._create_root_element(scene)
        nodes_group = etree.SubElement(root, _tag("g"), id="nodes")
        edges_group = etree.SubElement(root, _tag("g"), id="edges")
        labels_group = etree.SubElement(root, _tag("g"), id="labels")

        for primitive in scene.primitives:
            if isinstance(primitive, Circle):
                self._export_circle(nodes_group, primitive)
            elif isinstance(primitive, Curve):
                self._export_curve(edges_group, primitive)
            elif isinstance(primitive, Label):
                self._export_label(labels_group, primitive)

        markup = etree.tostring(root, encoding="unicode", pretty_print=True)
        logger.debug(f"Exported SVG ({len(markup)} chars, {len(scene.primitives)} primitives)")
        return markup

    def write(self, scene: Scene, output_path: Path) -> None:
        """Write the scene as an SVG file.

        Args:
            scene: Scene to serialize
            output_path: Output file path (parent directories are created)
        """
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.export(scene), encoding="utf-8")

    def _create_root_element(self, scene: Scene) -> etree._Element:
        root = etree.Element(_tag("svg"), nsmap={None: SVG_NAMESPACE})
        root.set("width", format_number(scene.width))
        root.set("height", format_number(scene.height))
        root.set("viewBox", f"0 0 {format_number(scene.width)} {format_number(scene.height)}")
        return root

    def _export_circle(self, parent: etree._Element, circle: Circle) -> None:
        elem = etree.SubElement(parent, _tag("circle"))
        elem.set("cx", format_number(circle.center[0]))
        elem.set("cy", format_number(circle.center[1]))
        elem.set("r", format_number(circle.radius))
        elem.set("fill", "white")
        elem.set("stroke", "black")
        elem.set("stroke-width", format_number(self.settings.stroke_width))

    def _export_curve(self, parent: etree._Element, curve: Curve) -> None:
        if curve.is_straight:
            elem = etree.SubElement(parent, _tag("line"))
            elem.set("x1", format_number(curve.start[0]))
            elem.set("y1", format_number(curve.start[1]))
            elem.set("x2", format_number(curve.end[0]))
            elem.set("y2", format_number(curve.end[1]))
        else:
            elem = etree.SubElement(parent, _tag("path"))
            elem.set("d", path_data(curve))
            elem.set("fill", "none")
        elem.set("stroke", "black")
        elem.set("stroke-width", format_number(self.settings.stroke_width))

    def _export_label(self, parent: etree._Element, label: Label) -> None:
        elem = etree.SubElement(parent, _tag("text"))
        elem.set("x", format_number(label.anchor[0]))
        elem.set("y", format_number(label.anchor[1]))
        elem.set("font-family", self.font_family)
        elem.set("font-size", format_number(self.settings.font_size))
        elem.set("text-anchor", "middle")
        elem.set("dominant-baseline", "central")
        elem.text = label.text


def export_svg(scene: Scene, settings: Optional[Settings] = None) -> str:
    """Convenience function to serialize a scene to SVG text.

    Example:
        >>> positions = compute_layout(graph, CircularLayout(), settings)
        >>> svg = export_svg(build_scene(graph, positions, settings), settings)
    """
    return SvgExporter(settings).export(scene)
