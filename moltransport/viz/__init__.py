"""Visualization of solution records.

This module provides:
- A narrow ``render(t, state)`` driver over a record
- Heatmap snapshots and animated GIFs (matplotlib, optional)
"""

from .heatmap import animate_record, plot_snapshot, render_record

__all__ = [
    "animate_record",
    "plot_snapshot",
    "render_record",
]
