#!/usr/bin/env python3
"""
Benchmark the adaptive integrator against scipy's RK45.

Both solvers integrate the same method-of-lines system (classical transport
of a Gaussian pulse, b = (1, 2), on [-3, 3]^2 up to t = 1) at the same
tolerances. Reported are wall time, accepted/rejected steps, right-hand-side
evaluations and the max difference of the final states.

Run: python benchmarks/benchmark_vs_scipy.py
"""

import time
from dataclasses import dataclass
from typing import List, Optional

import numpy as np

import moltransport as mt


@dataclass
class BenchmarkResult:
    library: str
    n: int
    time_ms: float
    nfev: int
    naccept: Optional[int]
    max_diff: float = 0.0


def _system(n: int) -> mt.TransportSystem:
    grid = mt.make_grid(-3.0, 3.0, n, -3.0, 3.0, n)
    return mt.build_transport_system(
        grid,
        b=(1.0, 2.0),
        c=0.0,
        initial_condition=mt.gaussian_2d(0.1),
        time_span=(0.0, 1.0),
    )


def benchmark_moltransport(n: int, atol: float, rtol: float):
    """Integrate with moltransport; return the result and the final state."""
    system = _system(n)
    start = time.perf_counter()
    record = mt.integrate_system(system, atol=atol, rtol=rtol)
    elapsed = (time.perf_counter() - start) * 1000
    stats = record.stats
    result = BenchmarkResult("moltransport", n, elapsed, stats.nfev, stats.naccept)
    return result, record.final[1]


def benchmark_scipy(n: int, atol: float, rtol: float):
    """Integrate the flattened system with scipy.integrate.solve_ivp(RK45)."""
    from scipy.integrate import solve_ivp

    system = _system(n)
    shape = system.grid.shape

    def flat_rhs(t, y):
        return system.rhs(t, y.reshape(shape)).ravel()

    start = time.perf_counter()
    sol = solve_ivp(
        flat_rhs,
        system.time_span,
        system.initial_state.ravel(),
        method="RK45",
        atol=atol,
        rtol=rtol,
    )
    elapsed = (time.perf_counter() - start) * 1000
    result = BenchmarkResult("scipy RK45", n, elapsed, sol.nfev, None)
    return result, sol.y[:, -1].reshape(shape)


def print_results_table(results: List[BenchmarkResult]) -> None:
    """Print results as a formatted table."""
    print(f"{'Library':<15} {'n':>5} {'Time (ms)':>12} {'nfev':>8} {'accepted':>9} {'max diff':>10}")
    print("-" * 64)
    for r in results:
        accepted = "-" if r.naccept is None else str(r.naccept)
        print(
            f"{r.library:<15} {r.n:>5} {r.time_ms:>12.2f} {r.nfev:>8} "
            f"{accepted:>9} {r.max_diff:>10.2e}"
        )


def main() -> None:
    atol, rtol = 1e-8, 1e-6
    results: List[BenchmarkResult] = []

    try:
        import scipy  # noqa: F401

        has_scipy = True
    except ImportError:
        has_scipy = False
        print("scipy not installed; timing moltransport only")

    for n in (40, 80, 120):
        ours, final = benchmark_moltransport(n, atol, rtol)
        results.append(ours)
        if has_scipy:
            theirs, reference = benchmark_scipy(n, atol, rtol)
            theirs.max_diff = float(np.max(np.abs(final - reference)))
            results.append(theirs)

    print_results_table(results)


if __name__ == "__main__":
    main()
