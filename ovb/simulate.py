"""
Steps 2-3: Data generation

Draws regressors (jointly normal with a given correlation matrix, or
independent) and builds the outcome Y = sum_i beta_i * var_i + eps.
Every draw takes an explicit numpy Generator; nothing touches the
global numpy seed.
"""

import numpy as np
import pandas as pd

from .correlation import check_psd


TRUE_BETA = {"var1": 2.0, "var2": 4.0, "var3": 10.0, "var4": 1.5}


def _check_n(n):
    if int(n) != n or n < 1:
        raise ValueError(f"Sample size must be a positive integer, got {n!r}")
    return int(n)


def sample_correlated(corr, n, rng):
    """
    Draw n jointly normal rows with zero mean and unit variance.

    Parameters
    ----------
    corr : pd.DataFrame, shape (k, k)
        Correlation matrix labeled by variable name.
    n : int
        Number of rows.
    rng : np.random.Generator
        Source of randomness.

    Returns
    -------
    pd.DataFrame, shape (n, k)
    """
    n = _check_n(n)
    check_psd(corr)
    names = list(corr.columns)
    draws = rng.multivariate_normal(
        np.zeros(len(names)), np.asarray(corr, dtype=float),
        size=n, method="eigh",
    )
    return pd.DataFrame(draws, columns=names)


def sample_independent(names, n, rng):
    """Draw n rows of independent N(0, 1) regressors, one column per name."""
    n = _check_n(n)
    names = list(names)
    return pd.DataFrame(rng.standard_normal((n, len(names))), columns=names)


def generate_outcome(data, beta, rng, outcome="Y"):
    """
    Append the outcome column  Y = X @ beta + eps,  eps ~ N(0, 1).

    Parameters
    ----------
    data : pd.DataFrame
        Regressors.
    beta : dict
        True coefficient per column name.
    rng : np.random.Generator
        Source of the noise draw.
    outcome : str
        Name of the new column.

    Returns
    -------
    pd.DataFrame
        Copy of `data` with the outcome column added.
    """
    missing = [name for name in beta if name not in data.columns]
    if missing:
        raise KeyError(f"Coefficients given for unknown columns: {missing}")

    names = list(beta)
    X = data[names].to_numpy(dtype=float)
    b = np.array([beta[name] for name in names], dtype=float)
    eps = rng.standard_normal(len(data))

    out = data.copy()
    out[outcome] = X @ b + eps
    return out
