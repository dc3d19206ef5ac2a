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
def simple_regression_data(rng):
    """Three features, intercept 0.3, low noise."""
    n, p = 100, 3
    X = rng.standard_normal((n, p))
    weights_true = np.array([0.3, 1.0, -2.0, 0.5])
    y = weights_true[0] + X @ weights_true[1:] + rng.standard_normal(n) * 0.1
    return X, y, weights_true


@pytest.fixture
def line_data():
    """Four points close to y = 2x."""
    xt = [[1.0], [2.0], [3.0], [4.0]]
    y = [2.1, 3.9, 6.1, 7.9]
    return xt, y


@pytest.fixture
def collinear_data(rng):
    """Dataset with perfect collinearity (should fail)."""
    n = 100
    x1 = rng.standard_normal(n)
    x2 = rng.standard_normal(n)
    x3 = x1 + x2  # Perfect collinearity
    X = np.column_stack([x1, x2, x3])
    y = rng.standard_normal(n)
    return X, y
