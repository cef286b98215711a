"""
First-order upwind discretization of the linear transport operator

    L(u) = -(b . grad u + c u)

on a uniform 2D grid.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import numpy as np

from .boundary import NEUMANN, BoundaryPolicy, as_boundary_policy
from .grid import Grid2D
from .utils import compute_cfl


@dataclass(frozen=True)
class TransportParameters:
    """Advection velocity ``b = (b_x, b_y)`` and decay coefficient ``c``."""

    b: Tuple[float, float]
    c: float = 0.0

    def __post_init__(self) -> None:
        if len(self.b) != 2:
            raise ValueError(f"b must have two components, got {self.b!r}.")
        b = (float(self.b[0]), float(self.b[1]))
        if not all(math.isfinite(v) for v in b):
            raise ValueError("Advection velocity b must be finite.")
        if not math.isfinite(self.c):
            raise ValueError("Decay coefficient c must be finite.")
        object.__setattr__(self, "b", b)
        object.__setattr__(self, "c", float(self.c))

    @property
    def classical(self) -> bool:
        """True for the classical transport equation (no decay term)."""
        return self.c == 0.0


def _upwind_difference(
    padded: np.ndarray, speed: float, spacing: float, axis: int
) -> np.ndarray:
    # padded carries one ghost cell on every side
    center = padded[1:-1, 1:-1]
    if axis == 0:
        behind, ahead = padded[:-2, 1:-1], padded[2:, 1:-1]
    else:
        behind, ahead = padded[1:-1, :-2], padded[1:-1, 2:]
    if speed > 0.0:
        return (center - behind) / spacing
    return (ahead - center) / spacing


def discretize(
    state: np.ndarray,
    grid: Grid2D,
    b: Sequence[float],
    c: float = 0.0,
    boundary: Union[BoundaryPolicy, str] = NEUMANN,
) -> np.ndarray:
    """
    Evaluate ``-(b . grad u + c u)`` with first-order upwind differences.

    For each axis the one-sided difference looks upstream: a positive
    velocity component uses the backward difference, a negative one the
    forward difference, and a zero component contributes nothing. Stencil
    reads outside the grid are served by the ghost layer of ``boundary``.

    Parameters
    ----------
    state:
        Field values of shape ``grid.shape``. Not modified.
    grid:
        Uniform grid the state lives on.
    b:
        Advection velocity ``(b_x, b_y)``.
    c:
        Decay coefficient.
    boundary:
        Ghost-layer policy, default zero-flux (Neumann).

    Returns
    -------
    np.ndarray
        Time derivative, same shape as ``state``.
    """
    u = np.asarray(state, dtype=float)
    if u.shape != grid.shape:
        raise ValueError(f"state must have shape {grid.shape}, got {u.shape}.")
    policy = as_boundary_policy(boundary)
    if policy.type == "periodic" and not grid.periodic:
        raise ValueError("Periodic boundary policy requires a periodic grid.")

    bx, by = float(b[0]), float(b[1])
    derivative = -float(c) * u if c != 0.0 else np.zeros_like(u)
    if bx == 0.0 and by == 0.0:
        return derivative

    padded = policy.pad(u)
    if bx != 0.0:
        derivative -= bx * _upwind_difference(padded, bx, grid.hx, axis=0)
    if by != 0.0:
        derivative -= by * _upwind_difference(padded, by, grid.hy, axis=1)
    return derivative


class TransportOperator:
    """
    Spatial operator bound to a grid, transport parameters and boundary policy.

    Calling the operator on a state returns its time derivative, see
    `discretize`.
    """

    def __init__(
        self,
        grid: Grid2D,
        params: TransportParameters,
        boundary: Union[BoundaryPolicy, str] = NEUMANN,
    ) -> None:
        self.grid = grid
        self.params = params
        self.boundary = as_boundary_policy(boundary)
        if self.boundary.type == "periodic" and not grid.periodic:
            raise ValueError("Periodic boundary policy requires a periodic grid.")

    def __call__(self, state: np.ndarray) -> np.ndarray:
        return discretize(
            state, self.grid, self.params.b, self.params.c, self.boundary
        )

    def cfl(self, dt: float) -> float:
        """Advective Courant number of a step of size ``dt``."""
        return compute_cfl(self.grid.hx, self.grid.hy, dt, self.params.b)

    def max_stable_step(self, cfl: float = 1.0) -> float:
        """Largest ``dt`` whose advective Courant number stays below ``cfl``."""
        if cfl <= 0.0:
            raise ValueError("cfl must be positive.")
        bx, by = self.params.b
        rate = abs(bx) / self.grid.hx + abs(by) / self.grid.hy
        if rate == 0.0:
            return math.inf
        return cfl / rate

    def __repr__(self) -> str:
        return (
            f"TransportOperator(b={self.params.b}, c={self.params.c}, "
            f"boundary={self.boundary.type!r}, grid={self.grid!r})"
        )
