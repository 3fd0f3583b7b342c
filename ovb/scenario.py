"""
One pass of the pipeline: sample regressors, build the outcome, fit
every model spec and tabulate the results.
"""

import numpy as np
import pandas as pd

from .simulate import sample_correlated, sample_independent, generate_outcome
from .ols import MODEL_SPECS, fit_models
from .reporting import compare_models, bias_table


def run_scenario(name, beta, n, seed, corr=None, specs=None, target="var1"):
    """
    Run the simulate -> fit -> compare pipeline once.

    Parameters
    ----------
    name : str
        Scenario label, e.g. "correlated".
    beta : dict
        True coefficients (their keys are the regressor names).
    n : int
        Sample size. The noise vector always has this length.
    seed : int
        Seed; split into independent streams for the regressors and noise.
    corr : pd.DataFrame or None
        Regressor correlation matrix; None draws independent regressors.
    specs : dict or None
        {label: regressors}; defaults to MODEL_SPECS.
    target : str
        Coefficient reported in the bias table.

    Returns
    -------
    dict with keys:
        name, corr (population matrix; identity when independent),
        data, models, table (compare_models), bias (bias_table)
    """
    specs = MODEL_SPECS if specs is None else specs
    x_seed, noise_seed = np.random.SeedSequence(seed).spawn(2)
    x_rng = np.random.default_rng(x_seed)
    noise_rng = np.random.default_rng(noise_seed)

    names = list(beta)
    if corr is None:
        X = sample_independent(names, n, x_rng)
        population = pd.DataFrame(np.eye(len(names)), index=names, columns=names)
    else:
        X = sample_correlated(corr, n, x_rng)
        population = corr

    data = generate_outcome(X, beta, noise_rng)
    models = fit_models(data, specs)

    return dict(
        name=name,
        corr=population,
        data=data,
        models=models,
        table=compare_models(models),
        bias=bias_table(models, beta, corr=population, target=target),
    )
