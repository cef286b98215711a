"""Adaptive Dormand–Prince time integration with sampled output."""

from __future__ import annotations

import math
from typing import List, Optional, Sequence

import numpy as np

from ..diagnostics.debug_mode import is_debug_enabled
from ..errors import IntegrationFailureError, NumericalDivergenceError
from ..logging import get_logger
from ..pde.grid import Grid2D
from ..pde.system import TransportSystem
from ..record import IntegrationStats, SolutionRecord
from .core import (
    ATOL,
    RHS,
    RTOL,
    Array,
    IntegratorConfig,
    Tolerance,
    dense_output,
    rk_step,
    select_initial_step,
    step_factor,
)

logger = get_logger(__name__)


class _CheckedRHS:
    """Right-hand side wrapper: counts calls and rejects non-finite output.

    Every state handed to the wrapped function is read-only, so a function
    that writes into its input fails loudly instead of corrupting a stage.
    """

    def __init__(self, fun: RHS, shape: tuple) -> None:
        self.fun = fun
        self.shape = shape
        self.nfev = 0

    def __call__(self, t: float, y: Array) -> Array:
        y.setflags(write=False)
        out = self.fun(t, y)
        self.nfev += 1

        if is_debug_enabled() and isinstance(out, np.ndarray) and np.may_share_memory(out, y):
            raise ValueError("rhs returned an array sharing memory with its input state.")
        out = np.asarray(out, dtype=float)
        if out.shape != self.shape:
            raise ValueError(f"rhs returned shape {out.shape}, expected {self.shape}.")
        if not np.all(np.isfinite(out)):
            raise NumericalDivergenceError(
                f"rhs returned non-finite values at t={t:g}.", t
            )
        return out


def output_stride(t0: float, tf: float, dt_out: float) -> np.ndarray:
    """Regular output times ``t0, t0 + dt_out, ...`` always ending exactly at ``tf``."""
    if dt_out <= 0.0:
        raise ValueError(f"dt_out must be positive, got {dt_out}.")
    if tf <= t0:
        raise ValueError(f"Require t0 < tf, got ({t0}, {tf}).")
    n = int(math.floor((tf - t0) / dt_out + 1e-9))
    times = t0 + dt_out * np.arange(n + 1, dtype=float)
    times = times[times < tf - 1e-12 * max(1.0, abs(tf))]
    return np.append(times, float(tf))


def _validate_output_times(
    output_times: Optional[Sequence[float]], t0: float, tf: float
) -> np.ndarray:
    if output_times is None:
        return np.array([t0, tf])
    times = np.asarray(output_times, dtype=float)
    if times.ndim != 1 or times.size == 0:
        raise ValueError("output_times must be a non-empty 1D sequence.")
    if not np.all(np.isfinite(times)):
        raise ValueError("output_times must be finite.")
    if times.size > 1 and np.any(np.diff(times) <= 0.0):
        raise ValueError("output_times must be strictly increasing.")
    if times[0] < t0 or times[-1] > tf:
        raise ValueError(
            f"output_times must lie within [{t0}, {tf}], "
            f"got [{times[0]}, {times[-1]}]."
        )
    return times


def _validate_tolerances(atol: Tolerance, rtol: Tolerance) -> None:
    if np.any(np.asarray(atol) <= 0.0):
        raise ValueError("atol must be positive.")
    if np.any(np.asarray(rtol) < 0.0):
        raise ValueError("rtol must be non-negative.")


def _record(
    times: List[float], states: List[Array], shape: tuple, grid: Optional[Grid2D], stats: IntegrationStats
) -> SolutionRecord:
    stacked = np.stack(states) if states else np.empty((0,) + shape)
    return SolutionRecord(times=np.asarray(times, dtype=float), states=stacked, grid=grid, stats=stats)


def integrate(
    rhs: RHS,
    initial_state: Array,
    t0: float,
    tf: float,
    output_times: Optional[Sequence[float]] = None,
    atol: Tolerance = ATOL,
    rtol: Tolerance = RTOL,
    config: Optional[IntegratorConfig] = None,
    grid: Optional[Grid2D] = None,
) -> SolutionRecord:
    """
    Solve ``dy/dt = rhs(t, y)``, ``y(t0) = initial_state`` on ``[t0, tf]``.

    Steps are taken with the Dormand–Prince 5(4) pair. A step is accepted
    when the RMS of its scaled error estimate is at most one; the next step
    size follows ``safety * err^(-1/5)`` clipped to the configured factors,
    without growth right after a rejection. Steps are shortened so that every
    output time, and ``tf``, is hit exactly (or, with
    ``config.dense_output``, sampled from the continuous extension).

    Parameters
    ----------
    rhs:
        Function ``(t, state) -> derivative``. Receives read-only arrays and
        must return a new array of the same shape.
    initial_state:
        State at ``t0``. Copied; never modified.
    t0, tf:
        Integration interval, ``t0 < tf``.
    output_times:
        Strictly increasing sample times inside ``[t0, tf]``. Defaults to
        ``[t0, tf]``.
    atol, rtol:
        Absolute (positive) and relative (non-negative) tolerances, scalars
        or arrays broadcastable to the state shape.
    config:
        Step-size control settings.
    grid:
        Optional grid attached to the returned record.

    Returns
    -------
    SolutionRecord
        One sample per output time.

    Raises
    ------
    IntegrationFailureError
        If the step size drops below its floor while the step is still
        rejected, or the step budget is exhausted. Carries the last accepted
        ``(t, state)`` and the samples collected so far.
    NumericalDivergenceError
        If ``rhs`` returns non-finite values.
    """
    config = config or IntegratorConfig()
    t0, tf = float(t0), float(tf)
    if not (math.isfinite(t0) and math.isfinite(tf)) or tf <= t0:
        raise ValueError(f"Require finite t0 < tf, got ({t0}, {tf}).")
    _validate_tolerances(atol, rtol)
    times = _validate_output_times(output_times, t0, tf)

    y = np.array(initial_state, dtype=float)
    if not np.all(np.isfinite(y)):
        raise NumericalDivergenceError("initial_state contains non-finite values.", t0)
    shape = y.shape
    fun = _CheckedRHS(rhs, shape)

    sample_times: List[float] = []
    sample_states: List[Array] = []
    next_out = 0
    if times[0] == t0:
        sample_times.append(t0)
        sample_states.append(y.copy())
        next_out = 1

    t = t0
    f = fun(t, y)
    if config.first_step is not None:
        h = config.first_step
    else:
        h = select_initial_step(fun, t, y, f, tf, atol, rtol, config.max_step)
    h = min(h, config.max_step)

    naccept = 0
    nreject = 0
    h_min_used = math.inf
    h_max_used = 0.0
    step_rejected = False

    def stats() -> IntegrationStats:
        return IntegrationStats(
            nfev=fun.nfev,
            naccept=naccept,
            nreject=nreject,
            min_step=h_min_used,
            max_step=h_max_used,
        )

    def fail(message: str) -> IntegrationFailureError:
        logger.warning("%s (t=%g, %d accepted, %d rejected)", message, t, naccept, nreject)
        partial = _record(sample_times, sample_states, shape, grid, stats())
        return IntegrationFailureError(message, t, y.copy(), partial)

    while t < tf:
        if naccept + nreject >= config.max_steps:
            raise fail(f"Step budget of {config.max_steps} attempts exhausted")

        if config.dense_output or next_out >= times.size:
            target = tf
        else:
            target = float(times[next_out])
        gap = target - t
        landing = h >= gap or t + h >= target
        h_step = gap if landing else h

        step = rk_step(fun, t, y, f, h_step, atol, rtol)

        if not step.accepted:
            nreject += 1
            step_rejected = True
            h = h_step * step_factor(step.error_norm, config)
            logger.debug(
                "step rejected at t=%g: h=%g err=%.3g, retrying with h=%g",
                t, h_step, step.error_norm, h,
            )
            floor = max(config.min_step, 10.0 * np.spacing(t))
            if h < floor:
                raise fail(
                    f"Step size {h:g} fell below the minimum {floor:g} without meeting tolerance"
                )
            continue

        t_new = target if landing else t + h_step
        if config.dense_output:
            while next_out < times.size and times[next_out] <= t_new:
                t_out = float(times[next_out])
                value = step.y_new if t_out == t_new else dense_output(step, t_out)
                sample_times.append(t_out)
                sample_states.append(np.array(value, dtype=float))
                next_out += 1
        elif landing and next_out < times.size and target == times[next_out]:
            sample_times.append(target)
            sample_states.append(step.y_new.copy())
            next_out += 1

        naccept += 1
        h_min_used = min(h_min_used, h_step)
        h_max_used = max(h_max_used, h_step)
        factor = step_factor(step.error_norm, config)
        if step_rejected:
            factor = min(1.0, factor)
        proposal = h_step * factor
        if landing and factor >= 1.0:
            # keep the controller proposal across steps shortened to hit a target
            proposal = max(proposal, h)
        h = min(proposal, config.max_step)
        step_rejected = False

        t, y, f = t_new, step.y_new, step.k[-1]

    result_stats = stats()
    logger.info(
        "integrated [%g, %g]: %d accepted, %d rejected, %d rhs evaluations",
        t0, tf, result_stats.naccept, result_stats.nreject, result_stats.nfev,
    )
    return _record(sample_times, sample_states, shape, grid, result_stats)


def integrate_system(
    system: TransportSystem,
    output_times: Optional[Sequence[float]] = None,
    atol: Tolerance = ATOL,
    rtol: Tolerance = RTOL,
    config: Optional[IntegratorConfig] = None,
) -> SolutionRecord:
    """Integrate a `TransportSystem` over its time span; the record carries its grid."""
    t0, tf = system.time_span
    return integrate(
        system.rhs,
        system.initial_state,
        t0,
        tf,
        output_times=output_times,
        atol=atol,
        rtol=rtol,
        config=config,
        grid=system.grid,
    )
