"""Standardized response utilities for MCP tools."""

from typing import Any, Dict, List, Optional

from visgraph.core.errors import (
    BipartiteViolation,
    CyclicGraphError,
    InvalidSettings,
    LayoutError,
    RasterizationError,
)


def is_success(result: Dict[str, Any]) -> bool:
    """Check if operation succeeded."""
    return bool(result.get("ok"))


def success_response(
    data: Any,
    warnings: Optional[List[str]] = None
) -> Dict[str, Any]:
    """Create a successful response envelope.

    Args:
        data: The response data
        warnings: Optional list of warning messages

    Returns:
        Standardized success response
    """
    response = {
        "ok": True,
        "data": data
    }

    if warnings:
        response["warnings"] = warnings

    return response


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Create an error response envelope.

    Args:
        message: Error message
        code: Optional error code
        details: Optional error details

    Returns:
        Standardized error response
    """
    error = {"message": message}

    if code:
        error["code"] = code

    if details:
        error["details"] = details

    return {
        "ok": False,
        "error": error
    }


def layout_error_response(exc: Exception) -> Dict[str, Any]:
    """Map a visgraph error to an error envelope with a stable code.

    Codes:
        BIPARTITE_VIOLATION, CYCLIC_GRAPH: strategy precondition failures
        LAYOUT_ERROR: any other precondition failure
        INVALID_SETTINGS: settings validation failure (failed fields in details)
        RASTERIZATION_ERROR: image output unavailable or failed
    """
    if isinstance(exc, InvalidSettings):
        return error_response(
            str(exc),
            code="INVALID_SETTINGS",
            details={"fields": exc.fields},
        )

    if isinstance(exc, LayoutError):
        details: Dict[str, Any] = {
            "strategy": exc.strategy,
            "precondition": exc.precondition,
        }
        if isinstance(exc, BipartiteViolation):
            code = "BIPARTITE_VIOLATION"
            details["edge"] = [_jsonable(node) for node in exc.edge]
        elif isinstance(exc, CyclicGraphError):
            code = "CYCLIC_GRAPH"
            details["cycle"] = [_jsonable(node) for node in exc.cycle]
        else:
            code = "LAYOUT_ERROR"
        return error_response(str(exc), code=code, details=details)

    if isinstance(exc, RasterizationError):
        return error_response(str(exc), code="RASTERIZATION_ERROR")

    return error_response(str(exc), code="TOOL_ERROR")


def _jsonable(node: Any) -> Any:
    if isinstance(node, (str, int, float, bool)) or node is None:
        return node
    return str(node)
