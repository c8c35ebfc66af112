"""Shared fixtures for the lsq_estimation test suite."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    """Seeded random generator so that synthetic problems are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def three_observation_problem():
    """Two parameters observed directly and through their sum."""
    J = np.array([[1.0, 0.0], [0.0, 1.0], [1.0, 1.0]])
    r = np.array([1.0, 1.0, 2.0])
    return J, r


@pytest.fixture
def synthetic_linear_problem(rng):
    """Well-conditioned overdetermined problem with known parameters and noise."""
    n_obs, n_params = 40, 4
    J = rng.standard_normal((n_obs, n_params))
    x_true = np.array([1.5, -2.0, 0.25, 4.0])
    sigma = rng.uniform(0.01, 0.1, size=n_obs)
    r = J @ x_true + sigma * rng.standard_normal(n_obs)
    return J, r, sigma, x_true
