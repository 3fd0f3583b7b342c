import numpy as np
import pandas as pd
import pytest

from ovb.ols import MODEL_SPECS, coef
from ovb.scenario import run_scenario


FULL, SHORT = "Full (X1..X4)", "X1 only"


@pytest.fixture(scope="module")
def correlated():
    from ovb.correlation import build_corr_matrix
    from ovb.simulate import TRUE_BETA
    corr = build_corr_matrix([1.0, 0.8, 1.0, 0.5, 0.2, 1.0, 0.5, 0.4, 0.8, 1.0])
    return run_scenario("correlated", TRUE_BETA, 10_000, seed=42, corr=corr)


@pytest.fixture(scope="module")
def independent():
    from ovb.simulate import TRUE_BETA
    return run_scenario("independent", TRUE_BETA, 10_000, seed=43)


def _by_label(result):
    return {m["label"]: m for m in result["models"]}


def test_result_layout(correlated):
    assert correlated["name"] == "correlated"
    assert len(correlated["data"]) == 10_000
    assert list(correlated["data"].columns) == ["var1", "var2", "var3", "var4", "Y"]
    assert [m["label"] for m in correlated["models"]] == list(MODEL_SPECS)
    assert list(correlated["table"].columns) == list(MODEL_SPECS)
    assert list(correlated["bias"].index) == list(MODEL_SPECS)


def test_full_model_recovers_true_coefficients(correlated, beta):
    full = _by_label(correlated)[FULL]
    for name, true in beta.items():
        assert coef(full, name)[0] == pytest.approx(true, abs=0.1)


def test_full_model_has_highest_r2(correlated):
    models = _by_label(correlated)
    for label, m in models.items():
        if label != FULL:
            assert models[FULL]["r2"] > m["r2"]


def test_short_model_is_biased_when_correlated(correlated):
    b, se = coef(_by_label(correlated)[SHORT], "var1")
    assert abs(b - 2.0) > 10 * se
    row = correlated["bias"].loc[SHORT]
    assert row["predicted"] == pytest.approx(8.95)
    assert row["bias"] == pytest.approx(row["predicted"], abs=0.5)


def test_every_short_model_is_biased_when_correlated(correlated):
    bias = correlated["bias"]
    assert abs(bias.loc[FULL, "bias_se"]) < 4
    for label in ["X1 only", "X1 + X2", "X1 + X3 + X4"]:
        assert abs(bias.loc[label, "bias_se"]) > 4


def test_short_model_is_unbiased_when_independent(independent):
    models = _by_label(independent)
    b_short, se_short = coef(models[SHORT], "var1")
    b_full, _ = coef(models[FULL], "var1")
    assert abs(b_short - b_full) < 4 * se_short
    assert (independent["bias"]["bias_se"].abs() < 4).all()
    np.testing.assert_allclose(independent["bias"]["predicted"], 0.0)


def test_independent_scenario_uses_identity_population(independent):
    np.testing.assert_array_equal(independent["corr"].values, np.eye(4))


def test_same_seed_is_reproducible(corr, beta):
    a = run_scenario("a", beta, 2000, seed=5, corr=corr)
    b = run_scenario("b", beta, 2000, seed=5, corr=corr)
    pd.testing.assert_frame_equal(a["data"], b["data"])
    for ma, mb in zip(a["models"], b["models"]):
        np.testing.assert_array_equal(ma["beta"], mb["beta"])
        np.testing.assert_array_equal(ma["se"], mb["se"])


def test_different_seed_changes_data(corr, beta):
    a = run_scenario("a", beta, 200, seed=5, corr=corr)
    b = run_scenario("b", beta, 200, seed=6, corr=corr)
    assert not np.allclose(a["data"].values, b["data"].values)
