"""
Shared linear-algebra helpers used by the fitting and simulation modules.
"""

import numpy as np


def ols_fit(X, y):
    """
    Least-squares solve with classical (homoskedastic) standard errors.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix; include a ones column for an intercept.
    y : ndarray, shape (n,)
        Outcome.

    Returns
    -------
    b : ndarray, shape (k,)
        beta_hat = (X'X)^{-1} X'y, computed with lstsq.
    se : ndarray, shape (k,)
        sqrt(diag(s2 * (X'X)^{-1})).
    e : ndarray, shape (n,)
        Residuals y - X b.
    s2 : float
        e'e / (n - k).
    """
    n, k = X.shape
    if n <= k:
        raise ValueError(f"Need more observations than regressors (n={n}, k={k})")
    b = np.linalg.lstsq(X, y, rcond=None)[0]
    e = y - X @ b
    s2 = (e @ e) / (n - k)
    se = np.sqrt(np.diag(s2 * np.linalg.inv(X.T @ X)))
    return b, se, e, s2


def add_const(x):
    """Return [1, x]: x (vector or matrix) with a leading intercept column."""
    x = np.asarray(x, dtype=float)
    x = np.atleast_2d(x).T if x.ndim == 1 else x
    return np.column_stack([np.ones(x.shape[0]), x])


def r_squared(y, e):
    """Centered R^2 = 1 - e'e / sum((y - mean(y))^2)."""
    tss = np.sum((y - np.mean(y)) ** 2)
    return 1.0 - (e @ e) / tss
