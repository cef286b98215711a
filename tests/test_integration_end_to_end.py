"""End-to-end transport runs: grid -> discretization -> integration -> record."""

import numpy as np
import pytest

from moltransport.diagnostics import centroid, peak_location, total_mass
from moltransport.problems import (
    TransportProblem,
    classical_transport,
    modified_transport,
    solve_problem,
)


def test_classical_transport_moves_pulse_along_velocity():
    """The centroid travels with velocity b = (1, 2) while the pulse spreads."""
    problem = classical_transport(t_range=(0.0, 0.75), resolution=(120, 120), dt_out=0.25)
    record = solve_problem(problem, atol=1e-7, rtol=1e-4)

    assert record.times.tolist() == [0.0, 0.25, 0.5, 0.75]
    grid = record.grid
    mass0 = total_mass(record.states[0], grid)
    assert mass0 == pytest.approx(1.0, rel=1e-6)

    for t, state in record:
        x_bar, y_bar = centroid(state, grid)
        assert x_bar == pytest.approx(t, abs=0.02)
        assert y_bar == pytest.approx(2.0 * t, abs=0.02)
        assert total_mass(state, grid) == pytest.approx(mass0, rel=1e-4)

    x_peak, y_peak, u_peak = peak_location(record.final[1], grid)
    assert x_peak == pytest.approx(0.75, abs=0.1)
    assert y_peak == pytest.approx(1.5, abs=0.1)
    # first-order upwinding smears the pulse
    assert 0.0 < u_peak < record.states[0].max()


def test_default_classical_problem_leaves_domain():
    """On [-3, 3]^2 the pulse heads for (3, 6) and exits through the outflow edges."""
    record = solve_problem(classical_transport())

    assert len(record) == 31
    assert record.times[-1] == 3.0
    assert record.grid.shape == (61, 61)
    assert np.all(np.isfinite(record.states))

    for t, state in record:
        if t > 0.8:
            break
        x_bar, y_bar = centroid(state, record.grid)
        assert x_bar == pytest.approx(t, abs=0.1)
        assert y_bar == pytest.approx(2.0 * t, abs=0.1)

    mass0 = total_mass(record.states[0], record.grid)
    assert total_mass(record.final[1], record.grid) < 0.01 * mass0


def test_modified_transport_decays_mass_exponentially():
    """With c = 1 the total mass follows exp(-t) while the pulse is inside the domain."""
    problem = modified_transport(t_range=(0.0, 0.75), resolution=(120, 120), dt_out=0.25)
    assert problem.c == 1.0
    record = solve_problem(problem, atol=1e-9, rtol=1e-6)

    mass0 = total_mass(record.states[0], record.grid)
    for t, state in record:
        assert total_mass(state, record.grid) == pytest.approx(mass0 * np.exp(-t), rel=1e-4)
        x_bar, y_bar = centroid(state, record.grid)
        assert x_bar == pytest.approx(t, abs=0.02)
        assert y_bar == pytest.approx(2.0 * t, abs=0.02)


def test_periodic_problem_conserves_mass():
    problem = TransportProblem(
        x_range=(0.0, 1.0),
        y_range=(0.0, 1.0),
        t_range=(0.0, 1.0),
        resolution=(32, 32),
        sigma=0.1,
        center=(0.5, 0.5),
        dt_out=0.5,
        boundary="periodic",
    )
    record = solve_problem(problem)

    assert record.grid.periodic
    assert record.grid.shape == (32, 32)
    mass0 = total_mass(record.states[0], record.grid)
    for _, state in record:
        assert total_mass(state, record.grid) == pytest.approx(mass0, rel=1e-9)


def test_problem_validation():
    with pytest.raises(ValueError):
        TransportProblem(sigma=0.0)
    with pytest.raises(ValueError):
        TransportProblem(dt_out=-0.1)
    with pytest.raises(ValueError):
        TransportProblem(t_range=(1.0, 0.0)).build()


def test_modified_transport_respects_explicit_decay():
    assert modified_transport(c=0.25).c == 0.25
    assert classical_transport().c == 0.0
