"""Exception hierarchy for the method-of-lines transport solver.

Argument validation throughout the package raises plain ``ValueError``.
The classes below mark the three failure modes of a solve:

* `InvalidDomainError` – malformed grid or domain bounds, raised at
  construction time.
* `IntegrationFailureError` – the adaptive step size collapsed below its
  floor (or the step budget ran out). Carries the last accepted time and
  state together with the partial `SolutionRecord`.
* `NumericalDivergenceError` – the right-hand side produced non-finite
  values. Fatal, never retried.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import numpy as np

if TYPE_CHECKING:
    from .record import SolutionRecord


class TransportError(Exception):
    """Base class for all solver errors."""


class InvalidDomainError(TransportError, ValueError):
    """Grid or domain bounds are malformed."""


class IntegrationFailureError(TransportError, RuntimeError):
    """Adaptive integration could not make progress."""

    def __init__(
        self,
        message: str,
        t: float,
        state: np.ndarray,
        partial: Optional["SolutionRecord"] = None,
    ) -> None:
        super().__init__(message)
        self.t = float(t)
        self.state = state
        self.partial = partial


class NumericalDivergenceError(TransportError, FloatingPointError):
    """The right-hand side or the state became non-finite."""

    def __init__(self, message: str, t: float) -> None:
        super().__init__(message)
        self.t = float(t)


__all__ = [
    "TransportError",
    "InvalidDomainError",
    "IntegrationFailureError",
    "NumericalDivergenceError",
]
