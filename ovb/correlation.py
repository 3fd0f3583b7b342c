"""
Step 1: Correlation matrices

Expands a row-major lower triangle (diagonal included) into a labeled,
symmetric correlation matrix and checks that it can parameterize a
multivariate normal.
"""

import numpy as np
import pandas as pd


def _triangular_order(length):
    """Return k such that k(k+1)/2 == length, or raise."""
    k = int(round((np.sqrt(8 * length + 1) - 1) / 2))
    if k < 1 or k * (k + 1) // 2 != length:
        raise ValueError(
            f"Lower triangle has {length} values; expected k(k+1)/2 for some k"
        )
    return k


def build_corr_matrix(lower, names=None):
    """
    Build a symmetric correlation matrix from its lower triangle.

    Parameters
    ----------
    lower : sequence of float
        Row-major lower-triangular values including the diagonal, e.g.
        for k=3: [r11, r21, r22, r31, r32, r33].
    names : list of str or None
        Variable labels. Defaults to var1..vark.

    Returns
    -------
    pd.DataFrame, shape (k, k)
        Correlation matrix indexed and labeled by variable name.
    """
    lower = np.asarray(lower, dtype=float).ravel()
    k = _triangular_order(len(lower))
    if names is None:
        names = [f"var{i + 1}" for i in range(k)]
    names = list(names)
    if len(names) != k:
        raise ValueError(f"Got {len(names)} names for a {k}x{k} matrix")

    R = np.zeros((k, k))
    R[np.tril_indices(k)] = lower
    R = R + np.tril(R, -1).T

    diag = np.diag(R)
    if not np.allclose(diag, 1.0):
        raise ValueError(f"Diagonal must be all ones, got {diag.tolist()}")
    if np.any(np.abs(R) > 1.0):
        raise ValueError("Correlations must lie in [-1, 1]")

    return pd.DataFrame(R, index=names, columns=names)


def check_psd(corr, tol=1e-10):
    """
    Verify that a correlation matrix is positive semi-definite.

    Returns
    -------
    float
        Smallest eigenvalue.
    """
    R = np.asarray(corr, dtype=float)
    if not np.allclose(R, R.T):
        raise ValueError("Correlation matrix is not symmetric")
    min_eig = np.linalg.eigvalsh(R).min()
    if min_eig < -tol:
        raise ValueError(
            f"Correlation matrix is not positive semi-definite "
            f"(smallest eigenvalue {min_eig:.4g})"
        )
    return min_eig


def empirical_corr(data, names=None):
    """Sample correlation matrix of the chosen columns of `data`."""
    names = list(data.columns) if names is None else list(names)
    return data[names].corr()


def max_abs_deviation(a, b):
    """Largest |a_ij - b_ij| between two labeled matrices (aligned on labels)."""
    b = b.loc[a.index, a.columns]
    return float(np.max(np.abs(a.values - b.values)))
