"""
Boundary policies for the 2D upwind discretization.

A `BoundaryPolicy` fills the one-cell ghost layer that the upwind stencil
reads on inflow edges. Three policies are available:

* ``"neumann"`` – zero-flux extrapolation: each ghost node copies its nearest
  boundary node. This is the default.
* ``"dirichlet"`` – ghost nodes hold a fixed constant ``value``.
* ``"periodic"`` – ghost nodes wrap around to the opposite edge; requires a
  periodic grid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

import numpy as np

BoundaryType = Literal["neumann", "dirichlet", "periodic"]

_BOUNDARY_TYPES = ("neumann", "dirichlet", "periodic")


@dataclass(frozen=True)
class BoundaryPolicy:
    """Ghost-layer rule applied at every domain edge."""

    type: BoundaryType = "neumann"
    value: float = 0.0

    def __post_init__(self) -> None:
        if self.type not in _BOUNDARY_TYPES:
            raise ValueError(
                f"Unsupported boundary type '{self.type}'; expected one of {_BOUNDARY_TYPES}."
            )
        if not np.isfinite(self.value):
            raise ValueError("Boundary value must be finite.")

    def pad(self, u: np.ndarray) -> np.ndarray:
        """Return ``u`` surrounded by a one-cell ghost layer."""
        if self.type == "neumann":
            return np.pad(u, 1, mode="edge")
        if self.type == "dirichlet":
            return np.pad(u, 1, mode="constant", constant_values=self.value)
        return np.pad(u, 1, mode="wrap")


NEUMANN = BoundaryPolicy("neumann")
PERIODIC = BoundaryPolicy("periodic")


def as_boundary_policy(boundary: Union[BoundaryPolicy, str]) -> BoundaryPolicy:
    """Accept either a policy or one of the boundary type names."""
    if isinstance(boundary, BoundaryPolicy):
        return boundary
    return BoundaryPolicy(str(boundary).lower())
