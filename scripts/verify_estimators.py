#!/usr/bin/env python3
"""
Verification script for the least-squares adjustment on synthetic data.

Generates a linear observation model with known parameters, runs an
unweighted and a weighted adjustment, adds a consider parameter and compares
the results with numpy's least-squares solver.

Usage:
    python3 verify_estimators.py [--observations N] [--seed S]
"""

import argparse
import logging

import numpy as np

from lsq_estimation import (
    covariance_with_consider_parameters,
    least_squares_polynomial_fit,
    perform_least_squares_adjustment,
)

PARAM_NAMES = ["bias", "drift", "amplitude", "phase"]


def generate_problem(n_obs: int, rng: np.random.Generator):
    """Build information matrix, residuals and noise levels of a synthetic problem."""
    t = np.linspace(0.0, 10.0, n_obs)
    J = np.column_stack([np.ones(n_obs), t, np.sin(t), np.cos(t)])
    x_true = np.array([0.5, -0.02, 1.2, 0.3])

    sigma = rng.uniform(0.01, 0.1, size=n_obs)
    residuals = J @ x_true + sigma * rng.standard_normal(n_obs)

    return J, residuals, sigma, x_true


def format_params(params: np.ndarray, name: str, errors=None) -> str:
    """Format parameters for display."""
    lines = [f"{name}:"]
    for i, (pname, val) in enumerate(zip(PARAM_NAMES, params)):
        line = f"  x{i + 1:d} ({pname:9s}): {val:12.6f}"
        if errors is not None:
            line += f" +/- {errors[i]:.6f}"
        lines.append(line)
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--observations", type=int, default=200)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    rng = np.random.default_rng(args.seed)

    print("=" * 60)
    print("Least-Squares Adjustment - Verification")
    print("=" * 60)

    J, residuals, sigma, x_true = generate_problem(args.observations, rng)
    weights = 1.0 / sigma**2

    print("\n" + format_params(x_true, "Ground Truth"))

    # Unweighted adjustment
    ols = perform_least_squares_adjustment(J, residuals)
    reference, *_ = np.linalg.lstsq(J, residuals, rcond=None)
    print("\n" + format_params(ols.correction, "Unweighted"))
    print(f"\n  ||unweighted - lstsq|| = {np.linalg.norm(ols.correction - reference):.6e}")

    # Weighted adjustment
    wls = perform_least_squares_adjustment(J, residuals, weights=weights)
    print("\n" + format_params(wls.correction, "Weighted", wls.formal_errors()))

    # Consider parameter: unmodeled quadratic drift with 1e-4 uncertainty
    t = J[:, 1]
    J_c = (t**2).reshape(-1, 1)
    total = covariance_with_consider_parameters(J, weights, None, J_c, np.array([[1.0e-8]]))
    print("\n" + format_params(np.sqrt(np.diag(total)), "Formal errors with consider parameter"))

    # Polynomial fit of the noise-free bias + drift part
    coefficients = least_squares_polynomial_fit(t, x_true[0] + x_true[1] * t, [0, 1])
    print(f"\n  Polynomial fit of bias + drift: {coefficients}")

    print("\n" + "-" * 60)
    print("Error vs Ground Truth:")
    print("-" * 60)
    for name, estimate in [("Unweighted", ols.correction), ("Weighted", wls.correction)]:
        error = np.linalg.norm(estimate - x_true)
        print(f"  {name:12s}: ||error|| = {error:.6f}")

    print("\n" + "=" * 60)
    print("Verification Complete")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    exit(main())
