"""Core pieces of the explicit adaptive integrator.

A single Dormand–Prince step is a pure function (`rk_step`) returning a
`StepResult` that carries every stage derivative. Dense output
(`dense_output`) and the step-size controller (`step_factor`) are pure
functions of that value, so no solver state lives outside the main loop.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np

from .tableau import A, B, C, E, ERROR_ESTIMATOR_ORDER, N_STAGES, P

Array = np.ndarray
RHS = Callable[[float, Array], Array]
Tolerance = Union[float, Array]

RTOL = 1e-3
ATOL = 1e-6


@dataclass(frozen=True)
class IntegratorConfig:
    """
    Step-size control settings of the adaptive integrator.

    Attributes:
        first_step: Initial step size. ``None`` selects it automatically.
        min_step: Floor below which a still-rejected step aborts the run.
            ``0.0`` means the floor is a few ulps of the current time.
        max_step: Upper bound on any step.
        max_steps: Budget of attempted (accepted or rejected) steps.
        safety: Safety factor applied to the optimal step-size ratio.
        min_factor: Smallest allowed shrink ratio per attempt.
        max_factor: Largest allowed growth ratio per accepted step.
        dense_output: If True, steps are not shortened to hit output times;
            samples are interpolated from the continuous extension instead.
    """

    first_step: Optional[float] = None
    min_step: float = 0.0
    max_step: float = math.inf
    max_steps: int = 100_000
    safety: float = 0.9
    min_factor: float = 0.2
    max_factor: float = 10.0
    dense_output: bool = False

    def __post_init__(self) -> None:
        """Validate IntegratorConfig invariants."""
        if self.first_step is not None and not (
            math.isfinite(self.first_step) and self.first_step > 0.0
        ):
            raise ValueError(f"first_step must be positive and finite, got {self.first_step}.")
        if self.min_step < 0.0:
            raise ValueError(f"min_step must be non-negative, got {self.min_step}.")
        if self.max_step <= 0.0:
            raise ValueError(f"max_step must be positive, got {self.max_step}.")
        if self.min_step > self.max_step:
            raise ValueError("min_step must not exceed max_step.")
        if self.max_steps < 1:
            raise ValueError(f"max_steps must be >= 1, got {self.max_steps}.")
        if not 0.0 < self.safety <= 1.0:
            raise ValueError(f"safety must be in (0, 1], got {self.safety}.")
        if not 0.0 < self.min_factor < 1.0:
            raise ValueError(f"min_factor must be in (0, 1), got {self.min_factor}.")
        if self.max_factor <= 1.0:
            raise ValueError(f"max_factor must exceed 1, got {self.max_factor}.")


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of one attempted Dormand–Prince step from ``(t, y)`` with size ``h``.

    ``k`` stacks the seven stage derivatives, shape ``(7, *y.shape)``; the
    last one is the derivative at ``(t + h, y_new)``.
    """

    t: float
    h: float
    y: Array
    y_new: Array
    k: Array
    error_norm: float

    @property
    def accepted(self) -> bool:
        return self.error_norm <= 1.0

    @property
    def t_new(self) -> float:
        return self.t + self.h


def rms_norm(x: Array) -> float:
    """Root-mean-square norm over all components."""
    if x.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(np.square(x))))


def rk_step(
    fun: RHS,
    t: float,
    y: Array,
    f: Array,
    h: float,
    atol: Tolerance,
    rtol: Tolerance,
) -> StepResult:
    """
    Attempt one Dormand–Prince 5(4) step.

    ``f`` is the derivative at ``(t, y)`` (first-same-as-last reuse). The
    error norm is the RMS of the embedded error estimate scaled by
    ``atol + rtol * max(|y|, |y_new|)``.
    """
    k = np.empty((N_STAGES,) + y.shape, dtype=float)
    k[0] = f
    for s in range(1, N_STAGES - 1):
        dy = np.tensordot(A[s, :s], k[:s], axes=1) * h
        k[s] = fun(t + C[s] * h, y + dy)

    y_new = y + h * np.tensordot(B[:-1], k[:-1], axes=1)
    k[-1] = fun(t + h, y_new)

    err = h * np.tensordot(E, k, axes=1)
    scale = atol + np.maximum(np.abs(y), np.abs(y_new)) * rtol
    return StepResult(
        t=t, h=h, y=y, y_new=y_new, k=k, error_norm=rms_norm(err / scale)
    )


def dense_output(step: StepResult, t: float) -> Array:
    """
    Evaluate the continuous extension of ``step`` at time ``t``.

    The 4th-order interpolant matches ``step.y`` at ``step.t`` and
    ``step.y_new`` at ``step.t + step.h``.
    """
    x = (t - step.t) / step.h
    if x < -1e-12 or x > 1.0 + 1e-12:
        raise ValueError(
            f"t={t} lies outside the step [{step.t}, {step.t_new}]."
        )
    q = np.tensordot(P.T, step.k, axes=1)
    powers = np.cumprod(np.full(P.shape[1], x))
    return step.y + step.h * np.tensordot(powers, q, axes=1)


def step_factor(error_norm: float, config: IntegratorConfig) -> float:
    """Step-size ratio ``safety * err^(-1/5)`` clipped to the configured bounds."""
    if error_norm == 0.0:
        return config.max_factor
    factor = config.safety * error_norm ** (-1.0 / (ERROR_ESTIMATOR_ORDER + 1))
    return min(config.max_factor, max(config.min_factor, factor))


def select_initial_step(
    fun: RHS,
    t0: float,
    y0: Array,
    f0: Array,
    t_bound: float,
    atol: Tolerance,
    rtol: Tolerance,
    max_step: float = math.inf,
) -> float:
    """
    Empirical starting step (Hairer, Nørsett & Wanner, Sec. II.4).

    Balances the size of the state against its derivative and the change of
    the derivative over one trial Euler step.
    """
    interval = t_bound - t0
    if y0.size == 0:
        return min(interval, max_step)

    scale = atol + np.abs(y0) * rtol
    d0 = rms_norm(y0 / scale)
    d1 = rms_norm(f0 / scale)
    if d0 < 1e-5 or d1 < 1e-5:
        h0 = 1e-6
    else:
        h0 = 0.01 * d0 / d1
    h0 = min(h0, interval)

    y1 = y0 + h0 * f0
    f1 = fun(t0 + h0, y1)
    d2 = rms_norm((f1 - f0) / scale) / h0

    if d1 <= 1e-15 and d2 <= 1e-15:
        h1 = max(1e-6, h0 * 1e-3)
    else:
        h1 = (0.01 / max(d1, d2)) ** (1.0 / (ERROR_ESTIMATOR_ORDER + 1))

    return min(100.0 * h0, h1, interval, max_step)


__all__ = [
    "ATOL",
    "RTOL",
    "IntegratorConfig",
    "StepResult",
    "dense_output",
    "rk_step",
    "rms_norm",
    "select_initial_step",
    "step_factor",
]
