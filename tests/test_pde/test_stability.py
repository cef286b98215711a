from __future__ import annotations

import math

import numpy as np
import pytest

from moltransport.pde import TransportOperator, TransportParameters, make_grid
from moltransport.pde.utils import (
    compute_cfl,
    gaussian_2d,
    is_stable_explicit,
    linspace_axis,
)


def test_compute_cfl_and_stability_helpers() -> None:
    cfl = compute_cfl(hx=0.1, hy=0.2, dt=0.02, b=(1.0, -2.0))
    assert cfl == pytest.approx(0.4)
    assert is_stable_explicit(cfl)
    assert not is_stable_explicit(1.1)
    assert is_stable_explicit(1.5, limit=2.0)


def test_utils_validation_helpers() -> None:
    with pytest.raises(ValueError):
        compute_cfl(hx=0.0, hy=0.1, dt=0.1, b=(1.0, 1.0))
    with pytest.raises(ValueError):
        compute_cfl(hx=0.1, hy=0.1, dt=-0.1, b=(1.0, 1.0))
    with pytest.raises(ValueError):
        linspace_axis(0.0, 1.0, 1)
    with pytest.raises(ValueError):
        gaussian_2d(0.0)


def test_linspace_axis_periodic_and_closed() -> None:
    closed = linspace_axis(0.0, 1.0, 4)
    periodic = linspace_axis(0.0, 1.0, 4, periodic=True)

    np.testing.assert_allclose(closed, [0.0, 0.25, 0.5, 0.75, 1.0])
    np.testing.assert_allclose(periodic, [0.0, 0.25, 0.5, 0.75])


def test_operator_max_stable_step_matches_unit_cfl() -> None:
    grid = make_grid(-3.0, 3.0, 60, -3.0, 3.0, 60)
    op = TransportOperator(grid, TransportParameters(b=(1.0, 2.0)))

    dt = op.max_stable_step()
    assert dt == pytest.approx(1.0 / 30.0)
    assert op.cfl(dt) == pytest.approx(1.0)
    assert op.max_stable_step(cfl=0.5) == pytest.approx(dt / 2)
    with pytest.raises(ValueError):
        op.max_stable_step(cfl=0.0)


def test_pure_decay_has_no_advective_step_limit() -> None:
    grid = make_grid(0.0, 1.0, 10, 0.0, 1.0, 10)
    op = TransportOperator(grid, TransportParameters(b=(0.0, 0.0), c=3.0))
    assert math.isinf(op.max_stable_step())


def test_gaussian_is_normalised() -> None:
    grid = make_grid(-2.0, 2.0, 200, -2.0, 2.0, 200)
    values = grid.sample(gaussian_2d(0.2, center=(0.5, -0.5)))

    assert values.sum() * grid.hx * grid.hy == pytest.approx(1.0, rel=1e-6)
    i, j = np.unravel_index(np.argmax(values), values.shape)
    assert grid.x[i] == pytest.approx(0.5)
    assert grid.y[j] == pytest.approx(-0.5)
