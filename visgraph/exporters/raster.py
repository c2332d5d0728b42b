"""Rasterization of SVG markup.

The layout and scene code never depends on a rasterization library. Raster
output goes through the Rasterizer interface; CairoSvgRasterizer is the
default implementation and needs the optional ``cairosvg`` package
(``pip install visgraph[img]``).
"""

import logging
from abc import ABC, abstractmethod

from visgraph.config.feature_flags import is_enabled
from visgraph.core.errors import RasterizationError

logger = logging.getLogger(__name__)


class Rasterizer(ABC):
    """Converts SVG markup to image bytes."""

    @abstractmethod
    def rasterize(self, svg: str, width: float, height: float) -> bytes:
        """Render svg at the given output size in pixels.

        Raises:
            RasterizationError: If the markup cannot be rendered
        """
        ...


class CairoSvgRasterizer(Rasterizer):
    """PNG output via cairosvg."""

    def rasterize(self, svg: str, width: float, height: float) -> bytes:
        if not is_enabled('rasterization'):
            raise RasterizationError(
                "Rasterization is disabled (set VISGRAPH_RASTERIZATION=true to enable)"
            )

        try:
            import cairosvg
        except ImportError as exc:
            raise RasterizationError(
                "cairosvg is not installed. Install with: pip install visgraph[img]"
            ) from exc

        try:
            png = cairosvg.svg2png(
                bytestring=svg.encode("utf-8"),
                output_width=int(round(width)),
                output_height=int(round(height)),
            )
        except Exception as exc:
            logger.error(f"cairosvg failed to render SVG: {exc}", exc_info=True)
            raise RasterizationError(f"Failed to rasterize SVG: {exc}") from exc

        logger.debug(f"Rasterized SVG to {len(png)} PNG bytes")
        return png
