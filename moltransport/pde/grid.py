"""
Uniform Cartesian grid on a rectangular 2D domain.

Arrays living on a `Grid2D` have shape ``grid.shape`` and are indexed
``u[i, j] = u(x[i], y[j])``. Each axis is divided into ``n`` equal intervals,
giving ``n + 1`` nodes per axis, or ``n`` nodes when the grid is periodic (the
right/top endpoint is identified with the left/bottom one).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Tuple

import numpy as np

from ..errors import InvalidDomainError
from .utils import linspace_axis


@dataclass(frozen=True)
class Grid2D:
    """Immutable tensor-product grid on ``[x_min, x_max] x [y_min, y_max]``."""

    x_min: float
    x_max: float
    nx: int
    y_min: float
    y_max: float
    ny: int
    periodic: bool = False
    _x: np.ndarray = field(init=False, repr=False, compare=False)
    _y: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise InvalidDomainError(f"{name} must be finite, got {value}.")
        if self.x_max <= self.x_min:
            raise InvalidDomainError(
                f"x_max must exceed x_min, got [{self.x_min}, {self.x_max}]."
            )
        if self.y_max <= self.y_min:
            raise InvalidDomainError(
                f"y_max must exceed y_min, got [{self.y_min}, {self.y_max}]."
            )
        if self.nx < 2 or self.ny < 2:
            raise InvalidDomainError(
                f"nx, ny must be >= 2 intervals per axis, got nx={self.nx}, ny={self.ny}."
            )

        x = linspace_axis(self.x_min, self.x_max, self.nx, self.periodic)
        y = linspace_axis(self.y_min, self.y_max, self.ny, self.periodic)
        x.setflags(write=False)
        y.setflags(write=False)
        object.__setattr__(self, "_x", x)
        object.__setattr__(self, "_y", y)

    # ------------------------------------------------------------------
    @property
    def x(self) -> np.ndarray:
        """Node coordinates along x (read-only)."""
        return self._x

    @property
    def y(self) -> np.ndarray:
        """Node coordinates along y (read-only)."""
        return self._y

    @property
    def hx(self) -> float:
        return (self.x_max - self.x_min) / self.nx

    @property
    def hy(self) -> float:
        return (self.y_max - self.y_min) / self.ny

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._x.size, self._y.size)

    @property
    def num_points(self) -> int:
        return self._x.size * self._y.size

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """Bounds in the order expected by ``matplotlib.pyplot.imshow``."""
        return (self.x_min, self.x_max, self.y_min, self.y_max)

    def meshgrid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(X, Y)`` coordinate arrays of shape ``self.shape``."""
        return np.meshgrid(self._x, self._y, indexing="ij")

    def sample(self, func: Callable[[np.ndarray, np.ndarray], np.ndarray]) -> np.ndarray:
        """Evaluate ``func(X, Y)`` on the grid and return a fresh float array."""
        xv, yv = self.meshgrid()
        values = np.array(np.broadcast_to(func(xv, yv), self.shape), dtype=float)
        return values

    def __repr__(self) -> str:
        return (
            f"Grid2D(x=[{self.x_min}, {self.x_max}], nx={self.nx}, "
            f"y=[{self.y_min}, {self.y_max}], ny={self.ny}, periodic={self.periodic})"
        )


def make_grid(
    x_min: float,
    x_max: float,
    nx: int,
    y_min: float,
    y_max: float,
    ny: int,
    periodic: bool = False,
) -> Grid2D:
    """
    Build a uniform grid with ``nx`` x ``ny`` intervals.

    Raises
    ------
    InvalidDomainError
        If a bound is non-finite, an interval is empty or reversed, or fewer
        than two intervals are requested on an axis.
    """
    if int(nx) != nx or int(ny) != ny:
        raise InvalidDomainError(f"nx, ny must be integers, got nx={nx}, ny={ny}.")
    return Grid2D(
        x_min=float(x_min),
        x_max=float(x_max),
        nx=int(nx),
        y_min=float(y_min),
        y_max=float(y_max),
        ny=int(ny),
        periodic=bool(periodic),
    )
