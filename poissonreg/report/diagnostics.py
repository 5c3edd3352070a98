"""
Regression diagnostics for a fitted Poisson model.

Computes the quantities behind R's plot.glm panels:

    hat values        h_i = diag(√W X (X'WX)⁻¹ X' √W)
    std. deviance     r_D,i / sqrt(1 - h_i)
    std. Pearson      r_P,i / sqrt(1 - h_i)
    Cook's distance   r_P,i² h_i / (p (1 - h_i)²)
    Q-Q coordinates   sorted std. deviance residuals vs normal quantiles
                      at R's ppoints()
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy import stats

from poissonreg.regression.solution import PoissonSolution


@dataclass(frozen=True)
class Diagnostics:
    """Per-observation influence and residual diagnostics."""
    fitted_values: NDArray[np.floating[Any]]
    linear_predictor: NDArray[np.floating[Any]]
    residuals_deviance: NDArray[np.floating[Any]]
    residuals_pearson: NDArray[np.floating[Any]]
    hat_values: NDArray[np.floating[Any]]
    std_residuals_deviance: NDArray[np.floating[Any]]
    std_residuals_pearson: NDArray[np.floating[Any]]
    cooks_distance: NDArray[np.floating[Any]]
    qq_theoretical: NDArray[np.floating[Any]]
    qq_sample: NDArray[np.floating[Any]]

    def influential(self, threshold: float | None = None) -> NDArray[np.intp]:
        """Indices with Cook's distance above threshold (default 4/n)."""
        if threshold is None:
            threshold = 4.0 / len(self.cooks_distance)
        return np.flatnonzero(self.cooks_distance > threshold)


def ppoints(n: int) -> NDArray[np.floating[Any]]:
    """Probability points (i - a) / (n + 1 - 2a), a = 3/8 for n <= 10 else 1/2."""
    a = 3.0 / 8.0 if n <= 10 else 0.5
    return (np.arange(1, n + 1) - a) / (n + 1 - 2 * a)


def hat_values(model: PoissonSolution) -> NDArray[np.floating[Any]]:
    """Leverages of the weighted design at convergence."""
    X_w = model.params.X * np.sqrt(model.weights)[:, np.newaxis]
    # Row-wise quadratic form x_w,i' (X'WX)⁻¹ x_w,i
    return np.einsum('ij,jk,ik->i', X_w, model.covariance, X_w)


def diagnose(model: PoissonSolution) -> Diagnostics:
    """Compute residual and influence diagnostics for a fitted model."""
    h = hat_values(model)
    # h == 1 happens for observations that alone determine a coefficient
    with np.errstate(divide='ignore', invalid='ignore'):
        denom = np.sqrt(1.0 - h)
        std_dev = model.residuals_deviance / denom
        std_pearson = model.residuals_pearson / denom
        cooks = model.residuals_pearson ** 2 * h / (model.rank * (1.0 - h) ** 2)

    finite = np.isfinite(std_dev)
    sample = np.sort(std_dev[finite])
    theoretical = stats.norm.ppf(ppoints(len(sample)))

    return Diagnostics(
        fitted_values=model.fitted_values,
        linear_predictor=model.linear_predictor,
        residuals_deviance=model.residuals_deviance,
        residuals_pearson=model.residuals_pearson,
        hat_values=h,
        std_residuals_deviance=std_dev,
        std_residuals_pearson=std_pearson,
        cooks_distance=cooks,
        qq_theoretical=theoretical,
        qq_sample=sample,
    )
