"""
Method-of-lines adapter: packages the upwind operator and the sampled initial
condition as an ODE system ``dU/dt = rhs(t, U)`` ready for time integration.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple, Union

import numpy as np

from .boundary import NEUMANN, BoundaryPolicy
from .grid import Grid2D
from .operators import TransportOperator, TransportParameters

InitialCondition = Union[Callable[[np.ndarray, np.ndarray], np.ndarray], np.ndarray]
RHS = Callable[[float, np.ndarray], np.ndarray]


@dataclass(frozen=True)
class TransportSystem:
    """Immutable bundle consumed by `moltransport.integrate.integrate`."""

    operator: TransportOperator
    initial_state: np.ndarray
    time_span: Tuple[float, float]

    @property
    def grid(self) -> Grid2D:
        return self.operator.grid

    @property
    def params(self) -> TransportParameters:
        return self.operator.params

    @property
    def boundary(self) -> BoundaryPolicy:
        return self.operator.boundary

    def rhs(self, t: float, state: np.ndarray) -> np.ndarray:
        """Time derivative of ``state``; the operator is time-invariant."""
        del t
        return self.operator(state)


def _validate_time_span(time_span: Sequence[float]) -> Tuple[float, float]:
    if len(time_span) != 2:
        raise ValueError(f"time_span must be (t0, tf), got {time_span!r}.")
    t0, tf = float(time_span[0]), float(time_span[1])
    if not (math.isfinite(t0) and math.isfinite(tf)):
        raise ValueError("time_span bounds must be finite.")
    if tf <= t0:
        raise ValueError(f"time_span must satisfy t0 < tf, got ({t0}, {tf}).")
    return t0, tf


def build_transport_system(
    grid: Grid2D,
    b: Sequence[float],
    c: float,
    initial_condition: InitialCondition,
    time_span: Sequence[float],
    boundary: Union[BoundaryPolicy, str] = NEUMANN,
) -> TransportSystem:
    """
    Discretize ``u_t + b . grad u + c u = 0`` in space on ``grid``.

    ``initial_condition`` is either a function of ``(X, Y)`` evaluated once on
    the grid, or an array of shape ``grid.shape``. In both cases the system
    keeps its own read-only copy.
    """
    params = TransportParameters(b=tuple(b), c=c)
    operator = TransportOperator(grid, params, boundary)
    span = _validate_time_span(time_span)

    if callable(initial_condition):
        u0 = grid.sample(initial_condition)
    else:
        u0 = np.array(initial_condition, dtype=float)
        if u0.shape != grid.shape:
            raise ValueError(
                f"initial_condition must have shape {grid.shape}, got {u0.shape}."
            )
    if not np.all(np.isfinite(u0)):
        raise ValueError("initial_condition contains non-finite values.")
    u0.setflags(write=False)

    return TransportSystem(operator=operator, initial_state=u0, time_span=span)
