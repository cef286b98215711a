"""Benchmark the upwind spatial operator."""

import time
from typing import Dict

import moltransport as mt


def benchmark_discretize(n: int, repeats: int = 200, boundary: str = "neumann") -> Dict[str, float]:
    """Benchmark one evaluation of the transport operator on an n x n grid.

    Args:
        n: Number of intervals per axis.
        repeats: Number of timed evaluations.
        boundary: Boundary policy name.

    Returns:
        Dictionary with timing results.
    """
    grid = mt.make_grid(-3.0, 3.0, n, -3.0, 3.0, n, periodic=boundary == "periodic")
    state = grid.sample(mt.gaussian_2d(0.1))
    op = mt.TransportOperator(grid, mt.TransportParameters(b=(1.0, 2.0), c=1.0), boundary)

    # Warmup
    op(state)

    start = time.perf_counter()
    for _ in range(repeats):
        op(state)
    end = time.perf_counter()

    total_time = end - start
    return {
        "n": n,
        "num_points": grid.num_points,
        "time_per_eval_sec": total_time / repeats,
        "points_per_sec": grid.num_points * repeats / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking upwind discretization...")

    for n in (60, 120, 240, 480):
        results = benchmark_discretize(n)
        print(f"Grid {n}x{n} ({results['num_points']} nodes):")
        print(f"  Time per evaluation: {results['time_per_eval_sec']*1e6:.1f} μs")
        print(f"  Nodes per second: {results['points_per_sec']:.3g}")
