"""Explicit adaptive time integration for method-of-lines systems.

Example
-------
>>> import numpy as np
>>> from moltransport.integrate import integrate
>>> record = integrate(lambda t, y: -y, np.ones(3), 0.0, 1.0, atol=1e-9, rtol=1e-9)
>>> bool(np.allclose(record.final[1], np.exp(-1.0)))
True
"""

from .adaptive import integrate, integrate_system, output_stride
from .core import (
    ATOL,
    RTOL,
    IntegratorConfig,
    StepResult,
    dense_output,
    rk_step,
    rms_norm,
    select_initial_step,
    step_factor,
)

__all__ = [
    "ATOL",
    "RTOL",
    "IntegratorConfig",
    "StepResult",
    "dense_output",
    "integrate",
    "integrate_system",
    "output_stride",
    "rk_step",
    "rms_norm",
    "select_initial_step",
    "step_factor",
]
