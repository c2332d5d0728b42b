"""
Feature flags for optional collaborators and execution modes.

Flags are controlled via environment variables so that deployments can switch
optional behaviour off without code changes.

Usage:
    from visgraph.config.feature_flags import is_enabled

    if is_enabled('threaded_forces'):
        # compute force-directed forces on a thread pool
        ...

Environment Variables:
    VISGRAPH_RASTERIZATION=true/false   - Allow SVG -> raster conversion
    VISGRAPH_THREADED_FORCES=true/false - Allow worker threads in force-directed layout
"""

import os
from typing import Dict


FEATURE_FLAGS: Dict[str, bool] = {
    # Rasterization is delegated to an optional external library
    'rasterization': os.getenv('VISGRAPH_RASTERIZATION', 'true').lower() == 'true',

    # Per-iteration parallel force computation (Settings.workers > 1)
    'threaded_forces': os.getenv('VISGRAPH_THREADED_FORCES', 'true').lower() == 'true',
}


def is_enabled(flag: str) -> bool:
    """
    Check if a feature flag is enabled.

    Args:
        flag: Feature flag name (e.g., 'rasterization')

    Returns:
        True if flag is enabled, False otherwise

    Raises:
        KeyError: If flag name is not recognized

    Example:
        >>> is_enabled('threaded_forces')
        True  # Default
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    return FEATURE_FLAGS[flag]


def get_all_flags() -> Dict[str, bool]:
    """
    Get all feature flags and their current state.

    Returns:
        Dictionary of flag names to boolean values
    """
    return FEATURE_FLAGS.copy()


def set_flag(flag: str, enabled: bool) -> None:
    """
    Programmatically set a feature flag (for testing only).

    Args:
        flag: Feature flag name
        enabled: True to enable, False to disable

    Warning:
        This is for testing only. In production, use environment variables.
    """
    if flag not in FEATURE_FLAGS:
        available = ', '.join(FEATURE_FLAGS.keys())
        raise KeyError(
            f"Unknown feature flag: '{flag}'. "
            f"Available flags: {available}"
        )

    FEATURE_FLAGS[flag] = enabled
