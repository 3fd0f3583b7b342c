"""
Step 4: OLS -- fitting the true and mis-specified models

Fits OLS on explicit column subsets of a simulated dataset and provides
tools for diagnosing omitted variable bias: the textbook bias formula,
its multi-regressor generalization, and a Monte Carlo check.
"""

import numpy as np
import pandas as pd
from scipy import stats

from .utils import ols_fit, add_const, r_squared
from .simulate import sample_correlated, sample_independent, generate_outcome


# Fits run per scenario, in reporting order.
MODEL_SPECS = {
    "Full (X1..X4)": ["var1", "var2", "var3", "var4"],
    "X1 only": ["var1"],
    "X1 + X2": ["var1", "var2"],
    "X1 + X3 + X4": ["var1", "var3", "var4"],
}


def estimate(X, y):
    """
    OLS estimation: beta_hat = (X'X)^{-1} X'y.

    Parameters
    ----------
    X : ndarray, shape (n, k)
        Design matrix (include a constant column for intercept).
    y : ndarray, shape (n,)
        Outcome vector.

    Returns
    -------
    dict with keys:
        beta      : coefficient vector
        se        : standard errors (homoskedastic)
        tstat     : beta / se
        pvalue    : two-sided p-values, Student t with n - k df
        r2        : centered R^2
        adj_r2    : adjusted R^2
        s2        : estimated error variance
        df_resid  : n - k
        n         : number of observations
        residuals : OLS residuals
        fitted    : fitted values X @ beta
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    n, k = X.shape
    b, se, e, s2 = ols_fit(X, y)
    df_resid = n - k
    t = b / se
    p = 2 * stats.t.sf(np.abs(t), df_resid)
    r2 = r_squared(y, e)
    adj_r2 = 1 - (1 - r2) * (n - 1) / df_resid
    return dict(
        beta=b, se=se, tstat=t, pvalue=p, r2=r2, adj_r2=adj_r2, s2=s2,
        df_resid=df_resid, n=n, residuals=e, fitted=X @ b,
    )


def fit_subset(data, outcome, regressors, label=None):
    """
    Regress `outcome` on an intercept plus the named columns of `data`.

    Parameters
    ----------
    data : pd.DataFrame
        Dataset holding the outcome and regressors.
    outcome : str
        Outcome column.
    regressors : list of str
        Columns to include; the order is kept in the output.
    label : str or None
        Display name for the model (defaults to "Y ~ a + b").

    Returns
    -------
    dict
        The `estimate` result plus `label`, `outcome` and `names`
        (coefficient names, starting with "const").
    """
    regressors = list(regressors)
    if not regressors:
        raise ValueError("At least one regressor is required")
    unknown = [c for c in [outcome] + regressors if c not in data.columns]
    if unknown:
        raise ValueError(f"Columns not in data: {unknown}")

    X = add_const(data[regressors].to_numpy(dtype=float))
    res = estimate(X, data[outcome].to_numpy(dtype=float))
    res.update(
        label=label or f"{outcome} ~ " + " + ".join(regressors),
        outcome=outcome,
        names=["const"] + regressors,
    )
    return res


def fit_models(data, specs=None, outcome="Y"):
    """Fit each {label: regressors} spec; returns the fits in spec order."""
    specs = MODEL_SPECS if specs is None else specs
    return [fit_subset(data, outcome, cols, label=label)
            for label, cols in specs.items()]


def coef(model, name):
    """(estimate, se) of a named coefficient, or (nan, nan) if absent."""
    if name not in model["names"]:
        return np.nan, np.nan
    j = model["names"].index(name)
    return model["beta"][j], model["se"][j]


def ovb_formula(beta_omitted, cov_included_omitted, var_included):
    """
    Single-regressor bias from leaving out one variable:

        bias = beta_omitted * Cov(included, omitted) / Var(included)

    With several omitted variables the biases add up; see `predicted_bias`
    for the general case.
    """
    return beta_omitted * cov_included_omitted / var_included


def predicted_bias(corr, beta, included):
    """
    Population bias of the short-regression coefficients.

    With regressors partitioned into included S and omitted O,
        plim beta_hat_S = beta_S + Sigma_SS^{-1} Sigma_SO beta_O.

    Parameters
    ----------
    corr : pd.DataFrame
        Covariance (here correlation) matrix of the regressors.
    beta : dict
        True coefficients for every regressor in the DGP.
    included : list of str
        Regressors kept in the short regression.

    Returns
    -------
    pd.Series
        Bias per included regressor.
    """
    included = list(included)
    omitted = [name for name in beta if name not in included]
    if not omitted:
        return pd.Series(0.0, index=included)
    S = corr.loc[included, included].to_numpy(dtype=float)
    S_O = corr.loc[included, omitted].to_numpy(dtype=float)
    b_O = np.array([beta[name] for name in omitted], dtype=float)
    return pd.Series(np.linalg.solve(S, S_O @ b_O), index=included)


def monte_carlo_ovb(corr, beta, n, n_sims, rng, specs=None, target="var1"):
    """
    Monte Carlo demonstration of omitted variable bias.

    Redraws the regressors (correlated if `corr` is given, independent
    otherwise) and the outcome `n_sims` times, refits every spec and
    records the estimate on `target`.

    Parameters
    ----------
    corr : pd.DataFrame or None
        Correlation matrix; None draws independent regressors.
    beta : dict
        True coefficients.
    n : int
        Sample size per simulation.
    n_sims : int
        Number of Monte Carlo replications.
    rng : np.random.Generator
        Source of randomness for all replications.
    specs : dict or None
        {label: regressors}; defaults to MODEL_SPECS.
    target : str
        Coefficient to track.

    Returns
    -------
    dict with keys:
        estimates : {label: array of target estimates}
        bias      : {label: mean(estimates) - beta[target]}
    """
    specs = MODEL_SPECS if specs is None else specs
    estimates = {label: np.empty(n_sims) for label in specs}

    for sim in range(n_sims):
        if corr is None:
            X = sample_independent(list(beta), n, rng)
        else:
            X = sample_correlated(corr, n, rng)
        data = generate_outcome(X, beta, rng)
        for label, cols in specs.items():
            estimates[label][sim] = coef(fit_subset(data, "Y", cols), target)[0]

    return dict(
        estimates=estimates,
        bias={label: np.mean(v) - beta[target] for label, v in estimates.items()},
    )
