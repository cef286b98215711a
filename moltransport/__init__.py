"""moltransport - method-of-lines solver for linear transport equations.

The pipeline is Grid -> upwind discretization -> ODE system -> adaptive
Dormand–Prince integration -> SolutionRecord.

Example
-------
>>> import moltransport as mt
>>> grid = mt.make_grid(-3.0, 3.0, 60, -3.0, 3.0, 60)
>>> system = mt.build_transport_system(
...     grid, b=(1.0, 2.0), c=0.0,
...     initial_condition=mt.gaussian_2d(0.1), time_span=(0.0, 1.0),
... )
>>> record = mt.integrate_system(system, output_times=mt.output_stride(0.0, 1.0, 0.1))
>>> len(record)
11
"""

__version__ = "0.1.0"

# Diagnostics
from .diagnostics import (
    centroid,
    debug_context,
    grid_sum,
    is_debug_enabled,
    peak_location,
    set_debug_enabled,
    total_mass,
)

# Errors
from .errors import (
    IntegrationFailureError,
    InvalidDomainError,
    NumericalDivergenceError,
    TransportError,
)

# Time integration
from .integrate import (
    IntegratorConfig,
    StepResult,
    dense_output,
    integrate,
    integrate_system,
    output_stride,
    rk_step,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Spatial discretization
from .pde import (
    NEUMANN,
    PERIODIC,
    BoundaryPolicy,
    Grid2D,
    TransportOperator,
    TransportParameters,
    TransportSystem,
    build_transport_system,
    compute_cfl,
    discretize,
    gaussian_2d,
    is_stable_explicit,
    make_grid,
)

# Problems
from .problems import (
    TransportProblem,
    classical_transport,
    modified_transport,
    solve_problem,
)
from .record import IntegrationStats, SolutionRecord

__all__ = [
    "__version__",
    # Diagnostics
    "centroid",
    "debug_context",
    "grid_sum",
    "is_debug_enabled",
    "peak_location",
    "set_debug_enabled",
    "total_mass",
    # Errors
    "IntegrationFailureError",
    "InvalidDomainError",
    "NumericalDivergenceError",
    "TransportError",
    # Time integration
    "IntegratorConfig",
    "StepResult",
    "dense_output",
    "integrate",
    "integrate_system",
    "output_stride",
    "rk_step",
    # Logging
    "configure_logging",
    "get_logger",
    "set_log_level",
    # Spatial discretization
    "NEUMANN",
    "PERIODIC",
    "BoundaryPolicy",
    "Grid2D",
    "TransportOperator",
    "TransportParameters",
    "TransportSystem",
    "build_transport_system",
    "compute_cfl",
    "discretize",
    "gaussian_2d",
    "is_stable_explicit",
    "make_grid",
    # Problems
    "TransportProblem",
    "classical_transport",
    "modified_transport",
    "solve_problem",
    # Records
    "IntegrationStats",
    "SolutionRecord",
]
