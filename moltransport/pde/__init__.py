"""
Method-of-lines spatial discretization of linear transport equations

    u_t + b . grad u + c u = 0

on a uniform rectangular 2D grid.

The module provides:

* `Grid2D` / `make_grid` – immutable uniform grid with coordinate axes.
* `discretize` / `TransportOperator` – first-order upwind finite differences
  for the advection term plus a pointwise decay term.
* `BoundaryPolicy` – ghost-layer rule at the domain edges (zero-flux by
  default, fixed-value or periodic on request).
* `build_transport_system` – the ODE right-hand side plus sampled initial
  state, ready for `moltransport.integrate.integrate`.
* CFL helpers and the canonical Gaussian initial condition.

Example
-------
>>> from moltransport.pde import build_transport_system, gaussian_2d, make_grid
>>> grid = make_grid(-3.0, 3.0, 60, -3.0, 3.0, 60)
>>> system = build_transport_system(
...     grid, b=(1.0, 2.0), c=0.0, initial_condition=gaussian_2d(0.1),
...     time_span=(0.0, 3.0),
... )
>>> system.initial_state.shape
(61, 61)
"""

from .boundary import NEUMANN, PERIODIC, BoundaryPolicy, BoundaryType, as_boundary_policy
from .grid import Grid2D, make_grid
from .operators import TransportOperator, TransportParameters, discretize
from .system import TransportSystem, build_transport_system
from .utils import compute_cfl, gaussian_2d, is_stable_explicit, linspace_axis

__all__ = [
    "BoundaryPolicy",
    "BoundaryType",
    "NEUMANN",
    "PERIODIC",
    "as_boundary_policy",
    "Grid2D",
    "make_grid",
    "TransportOperator",
    "TransportParameters",
    "discretize",
    "TransportSystem",
    "build_transport_system",
    "compute_cfl",
    "gaussian_2d",
    "is_stable_explicit",
    "linspace_axis",
]
