"""
Utility helpers for the transport discretization: CFL numbers, axes, and the
canonical Gaussian initial condition.
"""

from __future__ import annotations

import math
from typing import Callable, Sequence, Tuple

import numpy as np


def compute_cfl(hx: float, hy: float, dt: float, b: Sequence[float]) -> float:
    """Return the 2D advective Courant number ``dt * (|b_x|/hx + |b_y|/hy)``."""
    if hx <= 0.0 or hy <= 0.0 or dt <= 0.0:
        raise ValueError("hx, hy and dt must be positive.")
    bx, by = b
    return dt * (abs(bx) / hx + abs(by) / hy)


def is_stable_explicit(cfl: float, limit: float = 1.0) -> bool:
    """Return True if an explicit upwind step is stable under the provided limit."""
    return cfl <= limit + 1e-12


def linspace_axis(lo: float, hi: float, n: int, periodic: bool = False) -> np.ndarray:
    """Create ``n + 1`` uniform nodes on ``[lo, hi]`` (``n`` if periodic)."""
    if n < 2:
        raise ValueError("n must be at least 2 to form an axis.")
    if periodic:
        return lo + (hi - lo) / n * np.arange(n, dtype=float)
    return np.linspace(float(lo), float(hi), int(n) + 1)


def gaussian_2d(
    sigma: float, center: Tuple[float, float] = (0.0, 0.0)
) -> Callable[[np.ndarray, np.ndarray], np.ndarray]:
    """
    Return the normalised 2D Gaussian ``1/(2 pi sigma^2) exp(-r^2 / (2 sigma^2))``.

    The returned callable evaluates on coordinate arrays of any matching
    shape, e.g. the meshgrid of a `Grid2D`.
    """
    if sigma <= 0.0:
        raise ValueError("sigma must be positive.")
    x0, y0 = center
    norm = 1.0 / (2.0 * math.pi * sigma**2)

    def u0(x: np.ndarray, y: np.ndarray) -> np.ndarray:
        r2 = (np.asarray(x) - x0) ** 2 + (np.asarray(y) - y0) ** 2
        return norm * np.exp(-r2 / (2.0 * sigma**2))

    return u0
