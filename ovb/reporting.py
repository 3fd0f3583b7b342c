"""
Step 5: Reporting

Text summaries and comparison tables for fitted models. Models are the
dicts returned by `ols.fit_subset`.
"""

import numpy as np
import pandas as pd

from .ols import coef, predicted_bias


def significance_stars(p):
    """Conventional significance codes: *** 0.001, ** 0.01, * 0.05, . 0.1."""
    if np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""


def summary_text(model):
    """
    Regression summary for a single fit.

    Parameters
    ----------
    model : dict
        Output of `ols.fit_subset`.

    Returns
    -------
    str
    """
    coefs = pd.DataFrame({
        "Estimate": model["beta"],
        "Std. Error": model["se"],
        "t value": model["tstat"],
        "Pr(>|t|)": model["pvalue"],
        "": [significance_stars(p) for p in model["pvalue"]],
    }, index=model["names"])

    lines = [
        f"Model: {model['label']}",
        f"Outcome: {model['outcome']}",
        "",
        "Coefficients:",
        coefs.to_string(float_format=lambda v: f"{v:.4f}"),
        "---",
        "Signif. codes: 0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
        "",
        f"Residual standard error: {np.sqrt(model['s2']):.4f} "
        f"on {model['df_resid']} degrees of freedom",
        f"Multiple R-squared: {model['r2']:.4f},  "
        f"Adjusted R-squared: {model['adj_r2']:.4f}",
        f"Observations: {model['n']}",
    ]
    return "\n".join(lines)


def compare_models(models):
    """
    Side-by-side comparison of several fits.

    Each coefficient cell reads "estimate stars (se)"; coefficients a model
    does not include are left blank. R^2, adjusted R^2 and N follow.

    Parameters
    ----------
    models : list of dict
        Fits from `ols.fit_subset` / `ols.fit_models`.

    Returns
    -------
    pd.DataFrame
        One column per model label.
    """
    names = []
    for m in models:
        names.extend(name for name in m["names"] if name not in names)

    table = {}
    for m in models:
        col = {}
        for name in names:
            b, se = coef(m, name)
            if np.isnan(b):
                col[name] = ""
            else:
                p = m["pvalue"][m["names"].index(name)]
                col[name] = f"{b:.3f}{significance_stars(p)} ({se:.3f})"
        col["R2"] = f"{m['r2']:.3f}"
        col["Adj. R2"] = f"{m['adj_r2']:.3f}"
        col["N"] = f"{m['n']}"
        table[m["label"]] = col

    return pd.DataFrame(table, index=names + ["R2", "Adj. R2", "N"])


def bias_table(models, beta, corr=None, target="var1"):
    """
    Estimated vs. true coefficient on `target` across models.

    Parameters
    ----------
    models : list of dict
        Fits to compare.
    beta : dict
        True coefficients of the data-generating process.
    corr : pd.DataFrame or None
        Population correlation matrix; adds the analytic `predicted` bias.
    target : str
        Coefficient of interest.

    Returns
    -------
    pd.DataFrame
        Indexed by model label, columns estimate, se, true, bias,
        bias_se (bias in SE units) and optionally predicted.
    """
    rows = {}
    for m in models:
        b, se = coef(m, target)
        row = dict(estimate=b, se=se, true=beta[target],
                   bias=b - beta[target], bias_se=(b - beta[target]) / se)
        if corr is not None:
            included = m["names"][1:]
            row["predicted"] = (predicted_bias(corr, beta, included)[target]
                                if target in included else np.nan)
        rows[m["label"]] = row
    return pd.DataFrame.from_dict(rows, orient="index")
