"""
Figures for the omitted variable bias demonstration.

Each function builds and returns a matplotlib Figure; `savefig` writes
and closes it.
"""

import numpy as np
import matplotlib.pyplot as plt

from .correlation import empirical_corr
from .ols import coef

# -- Style --
STYLE = {
    "figure.facecolor": "#FAFAFA", "axes.facecolor": "#FAFAFA",
    "axes.edgecolor": "#333", "axes.labelcolor": "#222",
    "xtick.color": "#555", "ytick.color": "#555", "text.color": "#222",
    "font.size": 10, "axes.titlesize": 12, "axes.titleweight": "bold",
    "axes.grid": True, "grid.alpha": 0.25, "grid.color": "#AAA", "figure.dpi": 140,
}
CB, CO, CG, CR, CP, CY = "#2171B5", "#E6550D", "#31A354", "#DE2D26", "#756BB1", "#888"
PALETTE = [CB, CO, CG, CP, CR, CY]


def set_style():
    plt.rcParams.update(STYLE)


def savefig(fig, path):
    fig.savefig(path, bbox_inches="tight", dpi=150); plt.close(fig)


def plot_correlations(data, names=None, title="", max_points=2000, seed=0):
    """
    Heatmap of the sample correlations plus var1-vs-other scatter panels.

    Parameters
    ----------
    data : pd.DataFrame
        Simulated regressors.
    names : list of str or None
        Columns to show; the first is plotted against each of the others.
    title : str
        Figure title.
    max_points : int
        Scatter panels show at most this many (randomly chosen) rows.
    seed : int
        Seed for the row subsample.

    Returns
    -------
    matplotlib.figure.Figure
    """
    set_style()
    names = list(data.columns) if names is None else list(names)
    R = empirical_corr(data, names)
    others = names[1:]

    fig, axes = plt.subplots(1, 1 + len(others), figsize=(4.2 * (1 + len(others)), 4.2))
    axes = np.atleast_1d(axes)

    ax = axes[0]
    im = ax.imshow(R.values, cmap="RdBu_r", vmin=-1, vmax=1)
    ax.set_xticks(range(len(names))); ax.set_xticklabels(names, rotation=45)
    ax.set_yticks(range(len(names))); ax.set_yticklabels(names)
    ax.grid(False)
    for i in range(len(names)):
        for j in range(len(names)):
            v = R.values[i, j]
            ax.text(j, i, f"{v:.2f}", ha="center", va="center", fontsize=8,
                    color="white" if abs(v) > 0.6 else "#222")
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04)
    ax.set_title("A) Sample correlations")

    rows = np.random.default_rng(seed).permutation(len(data))[:max_points]
    sub = data.iloc[rows]
    for i, (ax, other) in enumerate(zip(axes[1:], others)):
        ax.scatter(sub[names[0]], sub[other], alpha=.25, s=8,
                   c=PALETTE[i % len(PALETTE)], edgecolors="none")
        ax.set_xlabel(names[0]); ax.set_ylabel(other)
        ax.set_title(f"{chr(66 + i)}) r = {R.loc[names[0], other]:.2f}")

    fig.suptitle(title, fontsize=14, y=1.03); fig.tight_layout()
    return fig


def plot_coefficients(models, beta, target="var1", title=""):
    """Estimate +/- 1.96 SE on `target` for each model, against the true value."""
    set_style()
    labels = [m["label"] for m in models]
    est = np.array([coef(m, target) for m in models])

    fig, ax = plt.subplots(figsize=(7, 4.5))
    y = np.arange(len(models))
    ax.errorbar(est[:, 0], y, xerr=1.96 * est[:, 1], fmt="o", color=CB,
                ms=8, capsize=5, elinewidth=2, label="Estimate (95% CI)")
    ax.axvline(beta[target], color=CG, lw=2, ls="--", label=f"True = {beta[target]:g}")
    ax.set_yticks(y); ax.set_yticklabels(labels); ax.invert_yaxis()
    ax.set_xlabel(f"beta_hat({target})")
    ax.legend(fontsize=8)
    ax.set_title(title)
    fig.tight_layout()
    return fig


def plot_monte_carlo(mc, beta_true, title=""):
    """
    Sampling distributions of the tracked coefficient, one histogram per model.

    Parameters
    ----------
    mc : dict
        Output of `ols.monte_carlo_ovb`.
    beta_true : float
        True value of the tracked coefficient.
    """
    set_style()
    fig, ax = plt.subplots(figsize=(8, 4.5))
    for i, (label, est) in enumerate(mc["estimates"].items()):
        est = est[~np.isnan(est)]
        if len(est) == 0:
            continue
        ax.hist(est, bins=30, alpha=.5, color=PALETTE[i % len(PALETTE)],
                label=f"{label} (bias {mc['bias'][label]:+.3f})")
    ax.axvline(beta_true, color="black", lw=2, ls="--", label=f"True = {beta_true:g}")
    ax.set_xlabel("Estimate"); ax.set_ylabel("Frequency")
    ax.legend(fontsize=8)
    ax.set_title(title)
    fig.tight_layout()
    return fig
