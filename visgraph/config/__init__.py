"""Configuration: validated Settings and environment feature flags."""

from visgraph.config.feature_flags import get_all_flags, is_enabled, set_flag
from visgraph.config.settings import Settings

__all__ = [
    "Settings",
    "is_enabled",
    "get_all_flags",
    "set_flag",
]
