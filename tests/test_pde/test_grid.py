from __future__ import annotations

import math

import numpy as np
import pytest

from moltransport.errors import InvalidDomainError, TransportError
from moltransport.pde import Grid2D, make_grid


def test_make_grid_has_n_plus_one_nodes_per_axis() -> None:
    grid = make_grid(-3.0, 3.0, 60, -2.0, 2.0, 40)

    assert grid.shape == (61, 41)
    assert grid.num_points == 61 * 41
    assert grid.x[0] == -3.0
    assert grid.x[-1] == 3.0
    assert grid.y[0] == -2.0
    assert grid.y[-1] == 2.0
    assert grid.hx == pytest.approx(0.1)
    assert grid.hy == pytest.approx(0.1)
    np.testing.assert_allclose(np.diff(grid.x), grid.hx)


def test_periodic_grid_drops_the_right_endpoint() -> None:
    grid = make_grid(0.0, 1.0, 8, 0.0, 2.0, 4, periodic=True)

    assert grid.shape == (8, 4)
    assert grid.x[-1] == pytest.approx(1.0 - 0.125)
    assert grid.y[-1] == pytest.approx(1.5)
    assert grid.hx == pytest.approx(0.125)
    assert grid.hy == pytest.approx(0.5)


def test_grid_coordinates_are_read_only() -> None:
    grid = make_grid(0.0, 1.0, 4, 0.0, 1.0, 4)
    with pytest.raises(ValueError):
        grid.x[0] = 5.0
    with pytest.raises(ValueError):
        grid.y[1] = 5.0


def test_meshgrid_uses_matrix_indexing() -> None:
    grid = make_grid(0.0, 1.0, 4, 10.0, 12.0, 2)
    xv, yv = grid.meshgrid()

    assert xv.shape == grid.shape
    assert yv.shape == grid.shape
    np.testing.assert_array_equal(xv[:, 0], grid.x)
    np.testing.assert_array_equal(yv[0, :], grid.y)


def test_sample_evaluates_function_on_nodes() -> None:
    grid = make_grid(0.0, 1.0, 4, 0.0, 2.0, 4)
    values = grid.sample(lambda x, y: x + 10.0 * y)

    assert values.shape == grid.shape
    assert values[2, 3] == pytest.approx(grid.x[2] + 10.0 * grid.y[3])
    values[0, 0] = -1.0  # sampled arrays are owned by the caller


def test_sample_broadcasts_constants() -> None:
    grid = make_grid(0.0, 1.0, 4, 0.0, 1.0, 4)
    values = grid.sample(lambda x, y: 2.5)
    assert values.shape == grid.shape
    assert np.all(values == 2.5)


@pytest.mark.parametrize(
    "args",
    [
        (1.0, 1.0, 10, 0.0, 1.0, 10),
        (2.0, 1.0, 10, 0.0, 1.0, 10),
        (0.0, 1.0, 10, 1.0, -1.0, 10),
        (0.0, 1.0, 1, 0.0, 1.0, 10),
        (0.0, 1.0, 10, 0.0, 1.0, 0),
        (0.0, math.inf, 10, 0.0, 1.0, 10),
        (math.nan, 1.0, 10, 0.0, 1.0, 10),
        (0.0, 1.0, 10.5, 0.0, 1.0, 10),
    ],
)
def test_make_grid_rejects_invalid_domains(args) -> None:
    with pytest.raises(InvalidDomainError):
        make_grid(*args)


def test_invalid_domain_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Grid2D(0.0, -1.0, 10, 0.0, 1.0, 10)
    assert issubclass(InvalidDomainError, TransportError)


def test_extent_and_repr() -> None:
    grid = make_grid(-1.0, 2.0, 6, -3.0, 4.0, 7)
    assert grid.extent == (-1.0, 2.0, -3.0, 4.0)
    assert "nx=6" in repr(grid)
    assert "periodic=False" in repr(grid)
