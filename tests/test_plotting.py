import os

import matplotlib
matplotlib.use("Agg")
import numpy as np
import pytest
from matplotlib.figure import Figure

from ovb.ols import fit_models, monte_carlo_ovb
from ovb.plotting import plot_correlations, plot_coefficients, plot_monte_carlo, savefig
from ovb.report import build_pdf
from ovb.simulate import sample_correlated, generate_outcome


@pytest.fixture
def data(corr, beta, rng):
    return generate_outcome(sample_correlated(corr, 500, rng), beta, rng)


def test_plot_correlations(data, tmp_path):
    fig = plot_correlations(data, ["var1", "var2", "var3", "var4"], title="t")
    assert isinstance(fig, Figure)
    assert len(fig.axes) == 5  # heatmap, colorbar, three scatters
    path = tmp_path / "corr.png"
    savefig(fig, str(path))
    assert path.stat().st_size > 0


def test_plot_coefficients(data, beta, tmp_path):
    fig = plot_coefficients(fit_models(data), beta, "var1")
    path = tmp_path / "coef.png"
    savefig(fig, str(path))
    assert path.exists()


def test_plot_monte_carlo(corr, beta, rng, tmp_path):
    mc = monte_carlo_ovb(corr, beta, n=200, n_sims=5, rng=rng)
    fig = plot_monte_carlo(mc, beta["var1"])
    path = tmp_path / "mc.png"
    savefig(fig, str(path))
    assert path.exists()


def test_build_pdf(data, tmp_path):
    png = tmp_path / "corr.png"
    savefig(plot_correlations(data), str(png))
    out = build_pdf([("Section <1> & co\n\n  a   b\n1 2", str(png)),
                     ("Text only", None)],
                    str(tmp_path / "report.pdf"))
    assert os.path.exists(out)
    with open(out, "rb") as f:
        assert f.read(4) == b"%PDF"


def test_importing_plotting_leaves_backend_alone(monkeypatch):
    import importlib
    import ovb.plotting

    calls = []
    monkeypatch.setattr(matplotlib, "use", lambda *a, **k: calls.append(a))
    importlib.reload(ovb.plotting)
    assert calls == []
