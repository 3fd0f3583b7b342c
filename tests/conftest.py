"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from ovb.correlation import build_corr_matrix
from ovb.simulate import TRUE_BETA


DOCUMENTED_LOWER = [
    1.0,
    0.8, 1.0,
    0.5, 0.2, 1.0,
    0.5, 0.4, 0.8, 1.0,
]


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def corr():
    """The correlated-scenario matrix over var1..var4."""
    return build_corr_matrix(DOCUMENTED_LOWER)


@pytest.fixture
def beta():
    return dict(TRUE_BETA)


@pytest.fixture
def simple_regression_data(rng):
    """Small design with known coefficients and little noise."""
    n = 200
    x = rng.standard_normal((n, 2))
    beta_true = np.array([1.0, -2.0, 0.5])
    y = beta_true[0] + x @ beta_true[1:] + rng.standard_normal(n) * 0.1
    return x, y, beta_true
