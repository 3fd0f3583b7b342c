import numpy as np
import pytest

from ovb.ols import fit_models
from ovb.reporting import significance_stars, summary_text, compare_models, bias_table
from ovb.simulate import sample_correlated, generate_outcome


@pytest.fixture
def models(corr, beta, rng):
    data = generate_outcome(sample_correlated(corr, 1000, rng), beta, rng)
    return fit_models(data)


@pytest.mark.parametrize("p, stars", [
    (0.0, "***"), (0.0009, "***"), (0.005, "**"), (0.03, "*"),
    (0.07, "."), (0.5, ""), (np.nan, ""),
])
def test_significance_stars(p, stars):
    assert significance_stars(p) == stars


def test_summary_text_lists_every_coefficient(models):
    text = summary_text(models[0])
    assert text.startswith("Model: Full (X1..X4)")
    for name in ["const", "var1", "var2", "var3", "var4"]:
        assert name in text
    assert "Multiple R-squared" in text
    assert "on 995 degrees of freedom" in text
    assert "Observations: 1000" in text


def test_compare_models_layout(models):
    table = compare_models(models)
    assert list(table.columns) == [m["label"] for m in models]
    assert list(table.index) == ["const", "var1", "var2", "var3", "var4",
                                 "R2", "Adj. R2", "N"]
    assert table.loc["var2", "X1 only"] == ""
    assert table.loc["var2", "X1 + X2"] != ""
    assert table.loc["N"].tolist() == ["1000"] * 4
    assert "***" in table.loc["var3", "Full (X1..X4)"]
    assert "(" in table.loc["var1", "X1 only"]


def test_bias_table_without_population(models, beta):
    table = bias_table(models, beta)
    assert list(table.columns) == ["estimate", "se", "true", "bias", "bias_se"]
    assert (table["true"] == 2.0).all()
    np.testing.assert_allclose(table["bias"], table["estimate"] - 2.0)


def test_bias_table_predicted_column(models, beta, corr):
    table = bias_table(models, beta, corr=corr)
    assert table.loc["Full (X1..X4)", "predicted"] == 0.0
    assert table.loc["X1 only", "predicted"] == pytest.approx(8.95)


def test_bias_table_missing_target(models, beta, corr):
    table = bias_table(models, beta, corr=corr, target="var2")
    assert np.isnan(table.loc["X1 only", "estimate"])
    assert np.isnan(table.loc["X1 only", "predicted"])
