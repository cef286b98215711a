"""Immutable container for the sampled solution of a time integration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np

from .pde.grid import Grid2D


@dataclass(frozen=True)
class IntegrationStats:
    """Work counters of an adaptive integration run."""

    nfev: int = 0
    naccept: int = 0
    nreject: int = 0
    min_step: float = float("inf")
    max_step: float = 0.0


@dataclass(frozen=True)
class SolutionRecord:
    """
    Ordered sequence of ``(t_k, state_k)`` samples in increasing time order.

    Both arrays are copied on construction and marked read-only, so a record
    can be handed to plotting or analysis code without defensive copies.
    ``states[k]`` is the state at ``times[k]``.

    Attributes:
        times: 1D array of sample times, strictly increasing.
        states: Array of shape ``(n_samples, *state_shape)``.
        grid: Grid the states live on, if known. Carries the coordinate axes
            for downstream consumers.
        stats: Work counters of the run that produced the record.

    Example:
        >>> record = integrate(system.rhs, system.initial_state, 0.0, 1.0,
        ...                    output_times=[0.0, 0.5, 1.0])
        >>> for t, state in record:
        ...     render(t, state)
    """

    times: np.ndarray
    states: np.ndarray
    grid: Optional[Grid2D] = None
    stats: IntegrationStats = field(default_factory=IntegrationStats)

    def __post_init__(self) -> None:
        times = np.array(self.times, dtype=float).reshape(-1)
        states = np.array(self.states, dtype=float)

        if states.ndim < 1 or states.shape[0] != times.shape[0]:
            raise ValueError(
                f"times and states must have the same length, "
                f"got {times.shape[0]} and {states.shape[0] if states.ndim else 0}"
            )
        if times.size > 1 and np.any(np.diff(times) <= 0.0):
            raise ValueError("times must be strictly increasing.")
        if self.grid is not None and states.shape[1:] != self.grid.shape:
            raise ValueError(
                f"states must have shape (n, {self.grid.shape[0]}, {self.grid.shape[1]}), "
                f"got {states.shape}"
            )

        times.setflags(write=False)
        states.setflags(write=False)
        object.__setattr__(self, "times", times)
        object.__setattr__(self, "states", states)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return int(self.times.shape[0])

    def __getitem__(self, index: int) -> Tuple[float, np.ndarray]:
        return float(self.times[index]), self.states[index]

    def __iter__(self) -> Iterator[Tuple[float, np.ndarray]]:
        for k in range(len(self)):
            yield float(self.times[k]), self.states[k]

    @property
    def final(self) -> Tuple[float, np.ndarray]:
        """Last sample ``(t, state)``."""
        if len(self) == 0:
            raise IndexError("SolutionRecord is empty.")
        return self[-1]

    def index_of(self, t: float, rtol: float = 1e-12) -> int:
        """Position of the sample taken at time ``t``; ``KeyError`` if absent."""
        if len(self) == 0:
            raise KeyError(t)
        k = int(np.argmin(np.abs(self.times - t)))
        if abs(self.times[k] - t) > rtol * max(1.0, abs(t)):
            raise KeyError(t)
        return k

    def at_time(self, t: float, rtol: float = 1e-12) -> np.ndarray:
        """State sampled at exactly ``t`` (up to ``rtol``)."""
        return self.states[self.index_of(t, rtol)]

    def nearest(self, t: float) -> Tuple[float, np.ndarray]:
        """Sample whose time is closest to ``t``."""
        if len(self) == 0:
            raise IndexError("SolutionRecord is empty.")
        k = int(np.argmin(np.abs(self.times - t)))
        return self[k]

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view (lists and floats) of the record and its axes."""
        payload: Dict[str, Any] = {
            "times": self.times.tolist(),
            "states": self.states.tolist(),
        }
        if self.grid is not None:
            payload["x"] = self.grid.x.tolist()
            payload["y"] = self.grid.y.tolist()
        return payload

    def __repr__(self) -> str:
        span = (
            f"t=[{self.times[0]:g}, {self.times[-1]:g}]" if len(self) else "empty"
        )
        return f"SolutionRecord(n_samples={len(self)}, {span}, state_shape={self.states.shape[1:]})"


__all__ = ["IntegrationStats", "SolutionRecord"]
