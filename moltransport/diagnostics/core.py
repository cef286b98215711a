"""Derived quantities of a sampled field: mass, centroid, peak."""

from __future__ import annotations

from typing import Tuple

import numpy as np

from ..pde.grid import Grid2D


def _trapezoid_weights(n_points: int, spacing: float, periodic: bool) -> np.ndarray:
    weights = np.full(n_points, spacing)
    if not periodic:
        weights[0] *= 0.5
        weights[-1] *= 0.5
    return weights


def _check_shape(state: np.ndarray, grid: Grid2D) -> np.ndarray:
    u = np.asarray(state, dtype=float)
    if u.shape != grid.shape:
        raise ValueError(f"state must have shape {grid.shape}, got {u.shape}.")
    return u


def grid_sum(state: np.ndarray) -> float:
    """Plain sum of all nodal values."""
    return float(np.sum(state))


def total_mass(state: np.ndarray, grid: Grid2D) -> float:
    """
    Integral of the field over the domain (composite trapezoid rule).

    On a periodic grid every node carries the full cell weight ``hx * hy``.
    """
    u = _check_shape(state, grid)
    wx = _trapezoid_weights(grid.shape[0], grid.hx, grid.periodic)
    wy = _trapezoid_weights(grid.shape[1], grid.hy, grid.periodic)
    return float(wx @ u @ wy)


def centroid(state: np.ndarray, grid: Grid2D) -> Tuple[float, float]:
    """Mass-weighted mean position ``(x_bar, y_bar)`` of the field."""
    u = _check_shape(state, grid)
    mass = total_mass(u, grid)
    if mass == 0.0:
        raise ValueError("Centroid is undefined for a field with zero mass.")
    xv, yv = grid.meshgrid()
    return total_mass(u * xv, grid) / mass, total_mass(u * yv, grid) / mass


def peak_location(state: np.ndarray, grid: Grid2D) -> Tuple[float, float, float]:
    """Coordinates and value ``(x, y, u)`` of the largest nodal value."""
    u = _check_shape(state, grid)
    i, j = np.unravel_index(int(np.argmax(u)), u.shape)
    return float(grid.x[i]), float(grid.y[j]), float(u[i, j])
