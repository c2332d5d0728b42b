"""MCP tools for graph layout and SVG rendering.

Provides tools to:
- Compute node positions with any layout strategy
- Render a laid-out graph to SVG markup
- List the available strategies and their options

Graphs are passed inline as node and edge lists, so the tools hold no state
between calls.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from mcp import Tool

from ..config.settings import Settings
from ..core.errors import VisGraphError
from ..core.graph_view import EdgeListGraphView
from ..exporters.svg_exporter import export_svg
from ..layout.engines import compute_layout
from ..layout.strategies import STRATEGY_KINDS, Orientation, parse_strategy
from ..models.positions import PositionMap
from ..utils.response import error_response, layout_error_response, success_response
from ..visualization.scene_builder import build_scene

logger = logging.getLogger(__name__)


class ToolInputError(ValueError):
    """Raised when tool arguments are malformed.

    Attributes:
        code: Error code for the response envelope
    """

    def __init__(self, message: str, code: str = "INVALID_ARGUMENTS"):
        self.code = code
        super().__init__(message)


GRAPH_PROPERTIES: Dict[str, Any] = {
    "nodes": {
        "type": "array",
        "items": {"type": ["string", "integer"]},
        "description": "Node identifiers (nodes that only appear in edges are added)",
    },
    "edges": {
        "type": "array",
        "items": {
            "type": "array",
            "items": {"type": ["string", "integer"]},
            "minItems": 2,
            "maxItems": 2,
        },
        "description": "Edges as [source, target] pairs; repeated pairs are parallel edges",
    },
    "directed": {
        "type": "boolean",
        "description": "Treat edges as directed (required for meaningful hierarchical layouts)",
        "default": False,
    },
    "strategy": {
        "description": (
            "Layout strategy: a kind name or an object such as "
            "{\"kind\": \"hierarchical\", \"orientation\": \"left_to_right\"}"
        ),
        "oneOf": [
            {"type": "string", "enum": list(STRATEGY_KINDS.keys())},
            {
                "type": "object",
                "properties": {"kind": {"type": "string", "enum": list(STRATEGY_KINDS.keys())}},
                "required": ["kind"],
            },
        ],
        "default": "circular",
    },
    "settings": {
        "type": "object",
        "description": "Settings overrides (width, height, node_radius, seed, iterations, ...)",
        "default": {},
    },
}


class LayoutTools:
    """Provides stateless layout computation and rendering tools."""

    def get_tools(self) -> List[Tool]:
        """Return layout MCP tools."""
        return [
            Tool(
                name="layout_compute",
                description=(
                    "Compute node positions for a graph. Strategies: circular, bipartite, "
                    "hierarchical (DAGs only), force_directed, random. Coordinates are canvas "
                    "pixels with a top-left origin."
                ),
                inputSchema={
                    "type": "object",
                    "properties": dict(GRAPH_PROPERTIES),
                    "required": ["edges"],
                },
            ),
            Tool(
                name="layout_render_svg",
                description="Compute a layout and render the graph as SVG markup.",
                inputSchema={
                    "type": "object",
                    "properties": {
                        **GRAPH_PROPERTIES,
                        "show_labels": {
                            "type": "boolean",
                            "description": "Draw node labels",
                            "default": True,
                        },
                    },
                    "required": ["edges"],
                },
            ),
            Tool(
                name="layout_list_strategies",
                description="List available layout strategies and their options.",
                inputSchema={"type": "object", "properties": {}},
            ),
        ]

    async def handle_tool(self, name: str, arguments: dict) -> dict:
        """Route tool call to appropriate handler.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Standardized response
        """
        handlers = {
            "layout_compute": self._compute_layout,
            "layout_render_svg": self._render_svg,
            "layout_list_strategies": self._list_strategies,
        }

        handler = handlers.get(name)
        if not handler:
            return error_response(f"Unknown layout tool: {name}", code="UNKNOWN_TOOL")

        try:
            return await handler(arguments or {})
        except VisGraphError as e:
            logger.info(f"{name} rejected: {e}")
            return layout_error_response(e)
        except ToolInputError as e:
            return error_response(str(e), code=e.code)
        except Exception as e:
            logger.error(f"Error in {name}: {e}", exc_info=True)
            return error_response(str(e), code="TOOL_ERROR")

    async def _compute_layout(self, args: dict) -> dict:
        """Compute positions for an inline graph."""
        graph = self._build_graph(args)
        strategy = self._parse_strategy(args)
        settings = Settings(**args.get("settings", {}))

        positions = compute_layout(graph, strategy, settings)

        result = {
            "strategy": strategy.kind,
            "node_count": len(positions),
            "edge_count": graph.edge_count(),
            "positions": [
                {"node": node, "x": position.x, "y": position.y}
                for node, position in positions.items()
            ],
            "bounding_box": self._bounding_box(positions),
        }
        return success_response(result)

    async def _render_svg(self, args: dict) -> dict:
        """Compute a layout and return SVG markup."""
        graph = self._build_graph(args)
        strategy = self._parse_strategy(args)
        settings_data = dict(args.get("settings", {}))
        if "show_labels" in args:
            settings_data["show_labels"] = args["show_labels"]
        settings = Settings(**settings_data)

        positions = compute_layout(graph, strategy, settings)
        scene = build_scene(graph, positions, settings)
        svg = export_svg(scene, settings)

        return success_response({
            "strategy": strategy.kind,
            "width": settings.width,
            "height": settings.height,
            "node_count": len(scene.circles()),
            "edge_count": len(scene.curves()),
            "svg": svg,
        })

    async def _list_strategies(self, args: dict) -> dict:
        """Describe every strategy kind and its options."""
        strategies = []
        for kind, strategy_type in STRATEGY_KINDS.items():
            options = {
                field_name: (field.description or "")
                for field_name, field in strategy_type.model_fields.items()
                if field_name != "kind"
            }
            strategies.append({
                "kind": kind,
                "description": (strategy_type.__doc__ or "").strip().splitlines()[0],
                "options": options,
            })

        return success_response({
            "strategies": strategies,
            "orientations": [orientation.value for orientation in Orientation],
        })

    def _parse_strategy(self, args: dict):
        try:
            return parse_strategy(args.get("strategy", "circular"))
        except ValueError as e:
            raise ToolInputError(str(e), code="INVALID_STRATEGY") from e

    def _build_graph(self, args: dict) -> EdgeListGraphView:
        """Validate node/edge arguments and wrap them in a graph view."""
        nodes = args.get("nodes", [])
        raw_edges = args.get("edges", [])
        if not isinstance(nodes, list) or not isinstance(raw_edges, list):
            raise ToolInputError("'nodes' and 'edges' must be arrays", code="INVALID_GRAPH")

        for node in nodes:
            self._check_node_id(node)

        edges: List[Tuple[Any, Any]] = []
        for edge in raw_edges:
            if not isinstance(edge, (list, tuple)) or len(edge) != 2:
                raise ToolInputError(f"Edge must be a [source, target] pair, got {edge!r}", code="INVALID_GRAPH")
            source, target = edge
            self._check_node_id(source)
            self._check_node_id(target)
            edges.append((source, target))

        return EdgeListGraphView(nodes, edges, directed=bool(args.get("directed", False)))

    @staticmethod
    def _check_node_id(node: Any) -> None:
        if isinstance(node, bool) or not isinstance(node, (str, int)):
            raise ToolInputError(f"Node identifiers must be strings or integers, got {node!r}", code="INVALID_GRAPH")

    @staticmethod
    def _bounding_box(positions: PositionMap) -> Optional[Dict[str, float]]:
        if not positions:
            return None
        box = positions.bounding_box()
        return {
            "min_x": box.min_x,
            "max_x": box.max_x,
            "min_y": box.min_y,
            "max_y": box.max_y,
            "width": box.width,
            "height": box.height,
        }
