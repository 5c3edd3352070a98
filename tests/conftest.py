"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def small_counts():
    """Ten goal counts with mean 1.6."""
    return np.array([0, 1, 2, 1, 3, 0, 2, 4, 1, 2], dtype=np.float64)


@pytest.fixture
def poisson_data(rng):
    """Simulated goals ~ shots data with known coefficients."""
    n = 1000
    shots = rng.uniform(0, 20, size=n)
    X = np.column_stack([np.ones(n), shots])
    beta_true = np.array([0.5, 0.1])
    y = rng.poisson(np.exp(X @ beta_true)).astype(np.float64)
    return X, y, beta_true


@pytest.fixture
def collinear_data(rng):
    """Design whose last column is the sum of the two before it."""
    n = 50
    x1 = rng.uniform(0, 5, size=n)
    x2 = rng.uniform(0, 5, size=n)
    X = np.column_stack([np.ones(n), x1, x2, x1 + x2])
    y = rng.poisson(2.0, size=n).astype(np.float64)
    return X, y
