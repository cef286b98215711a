from __future__ import annotations

import numpy as np
import pytest

from moltransport.pde import (
    NEUMANN,
    build_transport_system,
    discretize,
    gaussian_2d,
)


def test_build_from_callable_samples_initial_condition(small_grid, wide_pulse) -> None:
    system = build_transport_system(
        small_grid, b=(1.0, 2.0), c=0.0, initial_condition=wide_pulse, time_span=(0.0, 1.0)
    )

    assert system.initial_state.shape == small_grid.shape
    np.testing.assert_allclose(system.initial_state, small_grid.sample(wide_pulse))
    assert system.time_span == (0.0, 1.0)
    assert system.grid is small_grid
    assert system.params.b == (1.0, 2.0)
    assert system.boundary == NEUMANN


def test_initial_state_is_an_independent_read_only_copy(small_grid) -> None:
    u0 = np.ones(small_grid.shape)
    system = build_transport_system(
        small_grid, b=(1.0, 0.0), c=0.0, initial_condition=u0, time_span=(0.0, 1.0)
    )

    u0[0, 0] = 100.0
    assert system.initial_state[0, 0] == 1.0
    with pytest.raises(ValueError):
        system.initial_state[0, 0] = 5.0


def test_rhs_is_time_invariant_upwind_operator(small_grid, wide_pulse, rng) -> None:
    system = build_transport_system(
        small_grid, b=(-1.0, 0.5), c=0.3, initial_condition=wide_pulse, time_span=(0.0, 2.0)
    )
    u = rng.normal(size=small_grid.shape)

    expected = discretize(u, small_grid, (-1.0, 0.5), c=0.3)
    np.testing.assert_array_equal(system.rhs(0.0, u), expected)
    np.testing.assert_array_equal(system.rhs(1.7, u), expected)


def test_rhs_does_not_mutate_its_input(small_grid, wide_pulse) -> None:
    system = build_transport_system(
        small_grid, b=(1.0, 2.0), c=1.0, initial_condition=wide_pulse, time_span=(0.0, 1.0)
    )
    state = system.initial_state
    before = state.copy()
    out = system.rhs(0.0, state)

    np.testing.assert_array_equal(state, before)
    assert not np.may_share_memory(out, state)


@pytest.mark.parametrize(
    "time_span", [(1.0, 1.0), (2.0, 1.0), (0.0,), (0.0, float("inf"))]
)
def test_build_rejects_bad_time_span(small_grid, wide_pulse, time_span) -> None:
    with pytest.raises(ValueError):
        build_transport_system(
            small_grid, b=(1.0, 2.0), c=0.0, initial_condition=wide_pulse, time_span=time_span
        )


def test_build_rejects_bad_initial_condition(small_grid) -> None:
    with pytest.raises(ValueError):
        build_transport_system(
            small_grid, b=(1.0, 2.0), c=0.0, initial_condition=np.zeros((4, 4)), time_span=(0.0, 1.0)
        )
    bad = np.zeros(small_grid.shape)
    bad[3, 3] = np.nan
    with pytest.raises(ValueError):
        build_transport_system(
            small_grid, b=(1.0, 2.0), c=0.0, initial_condition=bad, time_span=(0.0, 1.0)
        )


def test_build_accepts_boundary_by_name(periodic_grid) -> None:
    system = build_transport_system(
        periodic_grid,
        b=(1.0, 1.0),
        c=0.0,
        initial_condition=gaussian_2d(0.1, center=(0.5, 0.5)),
        time_span=(0.0, 1.0),
        boundary="periodic",
    )
    assert system.boundary.type == "periodic"
