"""Heatmap rendering of solution records.

Rendering is a one-way consumer of a `SolutionRecord`: nothing here calls
back into the discretization or the integrator. Matplotlib is an optional
dependency.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional, Union

import numpy as np

from ..logging import get_logger
from ..record import SolutionRecord

# Type hint for matplotlib Axes (optional dependency)
try:
    from matplotlib import animation
    from matplotlib import pyplot as plt
    from matplotlib.axes import Axes

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    if False:
        from matplotlib.axes import Axes

logger = get_logger(__name__)

Renderer = Callable[[float, np.ndarray], None]


def _require_matplotlib() -> None:
    if not HAS_MATPLOTLIB:
        raise RuntimeError(
            "matplotlib required for plotting; install with pip install matplotlib"
        )


def render_record(record: SolutionRecord, render: Renderer) -> int:
    """
    Call ``render(t, state)`` for every sample, in time order.

    Returns the number of rendered samples.
    """
    count = 0
    for t, state in record:
        render(t, state)
        count += 1
    return count


def _imshow_kwargs(record: SolutionRecord, vmin: float, vmax: float, cmap: str) -> dict:
    kwargs = {"origin": "lower", "cmap": cmap, "vmin": vmin, "vmax": vmax, "aspect": "auto"}
    if record.grid is not None:
        kwargs["extent"] = record.grid.extent
    return kwargs


def plot_snapshot(
    record: SolutionRecord,
    index: int = -1,
    ax: Optional["Axes"] = None,
    cmap: str = "viridis",
) -> "Axes":
    """
    Draw the sample at position ``index`` as a heatmap over the ``(x, y)`` plane.

    Parameters
    ----------
    record:
        Solution record to draw from.
    index:
        Sample position, default the final sample.
    ax:
        Matplotlib axes to plot on. If None, creates a new figure.
    cmap:
        Colormap name.

    Returns
    -------
    matplotlib.axes.Axes
        The axes object used for plotting.

    Raises
    ------
    RuntimeError
        If matplotlib is not installed.
    """
    _require_matplotlib()
    if len(record) == 0:
        raise ValueError("Cannot plot an empty SolutionRecord.")

    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 5))

    t, state = record[index]
    # imshow puts the first array axis vertically; states are indexed [x, y]
    image = ax.imshow(state.T, **_imshow_kwargs(record, float(state.min()), float(state.max()), cmap))
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(f"t = {t:.2f}")
    ax.figure.colorbar(image, ax=ax)
    return ax


def animate_record(
    record: SolutionRecord,
    path: Union[str, Path],
    fps: int = 10,
    cmap: str = "viridis",
) -> Path:
    """
    Write one heatmap frame per sample to an animated GIF at ``path``.

    The colour scale is fixed across frames to the global range of the
    record so that decay and spreading stay visible.
    """
    _require_matplotlib()
    if len(record) == 0:
        raise ValueError("Cannot animate an empty SolutionRecord.")
    if fps <= 0:
        raise ValueError("fps must be positive.")

    path = Path(path)
    vmin, vmax = float(record.states.min()), float(record.states.max())
    fig, ax = plt.subplots(figsize=(6, 5))
    t0, state0 = record[0]
    image = ax.imshow(state0.T, **_imshow_kwargs(record, vmin, vmax, cmap))
    fig.colorbar(image, ax=ax)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    title = ax.set_title(f"t = {t0:.2f}")

    def update(frame: int):
        t, state = record[frame]
        image.set_data(state.T)
        title.set_text(f"t = {t:.2f}")
        return image, title

    anim = animation.FuncAnimation(fig, update, frames=len(record), interval=1000 // fps, blit=False)
    try:
        anim.save(str(path), writer=animation.PillowWriter(fps=fps))
    finally:
        plt.close(fig)
    logger.info("wrote %d frames to %s", len(record), path)
    return path
