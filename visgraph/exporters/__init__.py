"""Exporters for laid-out scenes.

Available Exporters:
    - SvgExporter: Scene -> SVG markup (lxml)
    - CairoSvgRasterizer: SVG markup -> PNG bytes (optional cairosvg)
"""

from visgraph.exporters.raster import CairoSvgRasterizer, Rasterizer
from visgraph.exporters.svg_exporter import SvgExporter, export_svg, format_number

__all__ = [
    "SvgExporter",
    "export_svg",
    "format_number",
    "Rasterizer",
    "CairoSvgRasterizer",
]
