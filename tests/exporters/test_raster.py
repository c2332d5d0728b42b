"""Tests for the rasterization adapter."""

import sys
import types

import networkx as nx
import pytest

from visgraph.config.feature_flags import is_enabled, set_flag
from visgraph.config.settings import Settings
from visgraph.core.errors import RasterizationError
from visgraph.exporters.raster import CairoSvgRasterizer, Rasterizer
from visgraph.layout import CircularLayout
from visgraph.render import graph_to_image


class RecordingRasterizer(Rasterizer):
    """Rasterizer that records its input."""

    def __init__(self):
        self.calls = []

    def rasterize(self, svg, width, height):
        self.calls.append((svg, width, height))
        return b"image"


@pytest.fixture
def rasterization_flag():
    original = is_enabled("rasterization")
    yield
    set_flag("rasterization", original)


@pytest.fixture
def fake_cairosvg(monkeypatch):
    """Stand-in cairosvg module recording svg2png calls."""
    module = types.ModuleType("cairosvg")
    module.calls = []

    def svg2png(bytestring=None, output_width=None, output_height=None):
        module.calls.append((bytestring, output_width, output_height))
        if b"broken" in bytestring:
            raise ValueError("cannot parse")
        return b"\x89PNG"

    module.svg2png = svg2png
    monkeypatch.setitem(sys.modules, "cairosvg", module)
    return module


class TestCairoSvgRasterizer:
    """Test the cairosvg-backed rasterizer."""

    def test_disabled_flag(self, rasterization_flag):
        set_flag("rasterization", False)
        with pytest.raises(RasterizationError) as exc_info:
            CairoSvgRasterizer().rasterize("<svg/>", 10, 10)
        assert "disabled" in str(exc_info.value)

    def test_delegates_to_cairosvg(self, rasterization_flag, fake_cairosvg):
        set_flag("rasterization", True)
        png = CairoSvgRasterizer().rasterize("<svg/>", 640.4, 480)
        assert png == b"\x89PNG"
        assert fake_cairosvg.calls == [(b"<svg/>", 640, 480)]

    def test_render_failure(self, rasterization_flag, fake_cairosvg):
        set_flag("rasterization", True)
        with pytest.raises(RasterizationError) as exc_info:
            CairoSvgRasterizer().rasterize("<svg>broken</svg>", 10, 10)
        assert "cannot parse" in str(exc_info.value)

    def test_missing_library(self, rasterization_flag, monkeypatch):
        set_flag("rasterization", True)
        monkeypatch.setitem(sys.modules, "cairosvg", None)
        with pytest.raises(RasterizationError) as exc_info:
            CairoSvgRasterizer().rasterize("<svg/>", 10, 10)
        assert "pip install" in str(exc_info.value)


class TestGraphToImage:
    """Test the full pipeline with an injected rasterizer."""

    def test_uses_canvas_size(self):
        rasterizer = RecordingRasterizer()
        image = graph_to_image(
            nx.path_graph(3), CircularLayout(), Settings(width=300, height=200), rasterizer=rasterizer
        )
        assert image == b"image"
        ((svg, width, height),) = rasterizer.calls
        assert svg.startswith("<svg")
        assert (width, height) == (300, 200)
