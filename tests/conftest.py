"""Pytest configuration and shared fixtures for moltransport tests.

This module provides:
- A deterministic numpy RNG fixture
- Small grids and Gaussian pulses shared by the discretization and
  integration tests
"""

import os

import numpy as np
import pytest

from moltransport.pde import gaussian_2d, make_grid


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds() -> None:
    """Auto-use fixture to set the global numpy seed for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))


@pytest.fixture
def small_grid():
    """Non-periodic 21 x 21 node grid on [-1, 1]^2."""
    return make_grid(-1.0, 1.0, 20, -1.0, 1.0, 20)


@pytest.fixture
def periodic_grid():
    """Periodic 32 x 32 node grid on [0, 1)^2."""
    return make_grid(0.0, 1.0, 32, 0.0, 1.0, 32, periodic=True)


@pytest.fixture
def wide_pulse():
    """Gaussian initial condition wide enough to be resolved by `small_grid`."""
    return gaussian_2d(0.3)
