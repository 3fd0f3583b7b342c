"""
Omitted Variable Bias -- Correlated vs. Independent Regressors
===============================================================

Simulates Y = 2*var1 + 4*var2 + 10*var3 + 1.5*var4 + eps twice: once with
strongly correlated regressors, once with independent ones. Fits the full
model and three short models in each case and shows that dropping
regressors biases the coefficient on var1 only when the dropped regressors
are correlated with var1.
"""

import argparse
import matplotlib
matplotlib.use("Agg")
import numpy as np
import sys
import os

# Add project root to path so the ovb package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from ovb.correlation import build_corr_matrix, empirical_corr, max_abs_deviation
from ovb.simulate import TRUE_BETA
from ovb.ols import MODEL_SPECS, monte_carlo_ovb
from ovb.reporting import summary_text
from ovb.scenario import run_scenario

# =============================================================================
# CONFIGURATION
# =============================================================================

SEED = 42
N_CORRELATED = 10_000
N_INDEPENDENT = 10_000

# Row-major lower triangle, diagonal included:
#   var2: 0.8
#   var3: 0.5 0.2
#   var4: 0.5 0.4 0.8
CORR_LOWER = [
    1.0,
    0.8, 1.0,
    0.5, 0.2, 1.0,
    0.5, 0.4, 0.8, 1.0,
]
VARIABLES = ["var1", "var2", "var3", "var4"]
TARGET = "var1"

MC_SIMS = 200
MC_N = 1_000


def report_scenario(result, title):
    print("\n" + "=" * 70)
    print(title)
    print("=" * 70)
    data = result["data"]
    print(f"\n[Data] N={len(data)}  columns={list(data.columns)}")
    emp = empirical_corr(data, VARIABLES)
    print("\n[Data] Sample correlations of the regressors:")
    print(emp.round(3).to_string())
    print(f"  max |sample - population| = "
          f"{max_abs_deviation(result['corr'], emp):.4f}")

    for m in result["models"]:
        print(f"\n[Fit] {m['label']}")
        print(summary_text(m))

    print("\n[Fit] Model comparison:")
    print(result["table"].to_string())
    print(f"\n[Fit] Coefficient on {TARGET} (true = {TRUE_BETA[TARGET]}):")
    print(result["bias"].round(4).to_string())
    return "\n".join([
        title,
        "",
        "Model comparison",
        result["table"].to_string(),
        "",
        f"Coefficient on {TARGET} (true = {TRUE_BETA[TARGET]})",
        result["bias"].round(4).to_string(),
    ])


def main():
    parser = argparse.ArgumentParser(
        description="Omitted variable bias in OLS -- simulation demo"
    )
    parser.add_argument("--n", type=int, default=None,
                        help=f"Sample size for both scenarios "
                             f"(default: {N_CORRELATED} / {N_INDEPENDENT})")
    parser.add_argument("--seed", type=int, default=SEED,
                        help=f"Random seed (default: {SEED})")
    parser.add_argument("--outdir", default=os.path.dirname(os.path.abspath(__file__)),
                        help="Directory for figures and the PDF "
                             "(default: this script's directory)")
    parser.add_argument("--no-plots", action="store_true",
                        help="Skip figures")
    parser.add_argument("--mc-sims", type=int, default=MC_SIMS,
                        help=f"Monte Carlo replications, 0 to skip (default: {MC_SIMS})")
    parser.add_argument("--pdf", action="store_true",
                        help="Also combine text and figures into a PDF")
    args = parser.parse_args()

    n_corr = N_CORRELATED if args.n is None else args.n
    n_ind = N_INDEPENDENT if args.n is None else args.n
    os.makedirs(args.outdir, exist_ok=True)

    corr = build_corr_matrix(CORR_LOWER, VARIABLES)
    print("=" * 70)
    print("Omitted Variable Bias -- OLS on simulated data")
    print("=" * 70)
    print(f"\nTrue coefficients: {TRUE_BETA}")
    print("\nPopulation correlation matrix:")
    print(corr.to_string())

    correlated = run_scenario("correlated", TRUE_BETA, n_corr, args.seed,
                              corr=corr, specs=MODEL_SPECS, target=TARGET)
    text_corr = report_scenario(correlated, "Scenario 1: correlated regressors")

    independent = run_scenario("independent", TRUE_BETA, n_ind, args.seed + 1,
                               corr=None, specs=MODEL_SPECS, target=TARGET)
    text_ind = report_scenario(independent, "Scenario 2: independent regressors")

    mc = None
    if args.mc_sims > 0:
        print("\n" + "=" * 70)
        print(f"[MC] {args.mc_sims} replications, N={MC_N}, correlated regressors")
        mc = monte_carlo_ovb(corr, TRUE_BETA, MC_N, args.mc_sims,
                             np.random.default_rng(args.seed + 2),
                             specs=MODEL_SPECS, target=TARGET)
        for label, bias in mc["bias"].items():
            est = mc["estimates"][label]
            print(f"  {label:<16s} mean={np.mean(est):7.3f}  sd={np.std(est):.3f}  "
                  f"bias={bias:+.3f}")

    figures = {}
    if not args.no_plots:
        figures = write_figures(correlated, independent, mc, args.outdir)

    if args.pdf:
        from ovb.report import build_pdf
        sections = [
            (text_corr, figures.get("correlated_corr")),
            ("Scenario 1: coefficient on " + TARGET, figures.get("correlated_coef")),
            (text_ind, figures.get("independent_corr")),
            ("Scenario 2: coefficient on " + TARGET, figures.get("independent_coef")),
        ]
        if "mc" in figures:
            sections.append(("Monte Carlo", figures["mc"]))
        if args.no_plots:
            sections = [(text_corr, None), (text_ind, None)]
        pdf_path = build_pdf(sections, os.path.join(args.outdir, "omitted_variable_bias.pdf"))
        print(f"[PDF] {pdf_path}")

    print("\nDone!")


def write_figures(correlated, independent, mc, outdir):
    from ovb.plotting import (plot_correlations, plot_coefficients,
                              plot_monte_carlo, savefig)

    figures = {}
    for result in (correlated, independent):
        name = result["name"]
        path = os.path.join(outdir, f"fig_{name}_correlations.png")
        savefig(plot_correlations(result["data"], VARIABLES,
                                  title=f"Regressors: {name}"), path)
        figures[f"{name}_corr"] = path
        path = os.path.join(outdir, f"fig_{name}_coefficients.png")
        savefig(plot_coefficients(result["models"], TRUE_BETA, TARGET,
                                  title=f"beta_hat({TARGET}) by model: {name}"), path)
        figures[f"{name}_coef"] = path
    if mc is not None:
        path = os.path.join(outdir, "fig_monte_carlo.png")
        savefig(plot_monte_carlo(mc, TRUE_BETA[TARGET],
                                 title=f"Sampling distribution of beta_hat({TARGET})"), path)
        figures["mc"] = path
    for path in figures.values():
        print(f"[Plot] {path}")
    return figures


if __name__ == "__main__":
    main()
