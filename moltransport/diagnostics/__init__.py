"""Diagnostics and debugging utilities for moltransport."""

from .core import centroid, grid_sum, peak_location, total_mass
from .debug_mode import (
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

__all__ = [
    "centroid",
    "grid_sum",
    "peak_location",
    "total_mass",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
]
