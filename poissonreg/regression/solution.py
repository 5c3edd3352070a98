"""
Poisson regression solution types.

PoissonParams is the immutable payload computed by a backend.
PoissonSolution wraps Result[PoissonParams] and provides the accessors a
report needs: the coefficient table, deviances with their degrees of
freedom, information criteria, residuals and predictions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, NamedTuple
import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy import stats

from poissonreg.core.result import Result
from poissonreg.core.exceptions import DimensionError
from poissonreg.core.validation import check_array, check_finite
from poissonreg.regression.families import Poisson


@dataclass(frozen=True)
class PoissonParams:
    """
    Parameter payload for a converged Poisson fit.

    All statistics are evaluated at the converged fitted means.
    """
    coefficients: NDArray[np.floating[Any]]
    standard_errors: NDArray[np.floating[Any]]
    z_values: NDArray[np.floating[Any]]
    p_values: NDArray[np.floating[Any]]
    covariance: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    linear_predictor: NDArray[np.floating[Any]]
    weights: NDArray[np.floating[Any]]
    y: NDArray[np.floating[Any]]
    X: NDArray[np.floating[Any]]
    deviance: float
    null_deviance: float
    log_likelihood: float
    aic: float
    rank: int
    df_residual: int
    df_null: int
    n_iter: int
    names: tuple[str, ...]


class CoefficientRow(NamedTuple):
    """One line of the coefficient table."""
    name: str
    estimate: float
    std_error: float
    z_value: float
    p_value: float


def _significance_stars(p: float) -> str:
    """Return significance stars like R."""
    if p < 0.001:
        return '***'
    elif p < 0.01:
        return '**'
    elif p < 0.05:
        return '*'
    elif p < 0.1:
        return '.'
    else:
        return ' '


def _format_pvalue(p: float) -> str:
    """Format p-value like R."""
    if p < 2e-16:
        return '< 2e-16'
    elif p < 0.001:
        return f'{p:.2e}'
    else:
        return f'{p:.4f}'


class PoissonSolution:
    """Fitted Poisson regression model.

    Read-only view over an immutable Result; nothing is cached or mutated
    after construction.
    """

    def __init__(self, _result: Result[PoissonParams]):
        self._result = _result

    @property
    def params(self) -> PoissonParams:
        return self._result.params

    # --- Coefficients ---

    @property
    def names(self) -> tuple[str, ...]:
        return self.params.names

    @property
    def coefficients(self) -> NDArray:
        return self.params.coefficients

    @property
    def standard_errors(self) -> NDArray:
        """sqrt(diag((X'WX)⁻¹)) at the converged weights."""
        return self.params.standard_errors

    @property
    def z_values(self) -> NDArray:
        return self.params.z_values

    @property
    def p_values(self) -> NDArray:
        """Two-sided p-values from the standard normal."""
        return self.params.p_values

    @property
    def covariance(self) -> NDArray:
        """Covariance of the estimates, (X'WX)⁻¹ (dispersion fixed at 1)."""
        return self.params.covariance

    def coefficient_table(self) -> tuple[CoefficientRow, ...]:
        """(name, estimate, std_error, z, p) per column of X, in order."""
        p = self.params
        return tuple(
            CoefficientRow(name, float(b), float(se), float(z), float(pv))
            for name, b, se, z, pv in zip(
                p.names, p.coefficients, p.standard_errors, p.z_values, p.p_values
            )
        )

    @property
    def rate_ratios(self) -> NDArray:
        """exp(β): multiplicative change in the expected count per unit."""
        return np.exp(self.coefficients)

    def conf_int(self, level: float = 0.95) -> NDArray:
        """Wald confidence intervals, one (lower, upper) row per coefficient.

        Matches R's confint.default(), not the profile-likelihood confint().
        """
        if not 0.0 < level < 1.0:
            raise ValueError(f"level must be in (0, 1), got {level}")
        q = stats.norm.ppf(0.5 + level / 2.0)
        half = q * self.standard_errors
        return np.column_stack([self.coefficients - half, self.coefficients + half])

    # --- Model fit ---

    @property
    def deviance(self) -> float:
        """Residual deviance."""
        return self.params.deviance

    @property
    def null_deviance(self) -> float:
        return self.params.null_deviance

    @property
    def df_residual(self) -> int:
        return self.params.df_residual

    @property
    def df_null(self) -> int:
        return self.params.df_null

    @property
    def log_likelihood(self) -> float:
        return self.params.log_likelihood

    @property
    def aic(self) -> float:
        return self.params.aic

    @property
    def bic(self) -> float:
        n = len(self.params.y)
        return -2.0 * self.log_likelihood + np.log(n) * self.rank

    @property
    def rank(self) -> int:
        return self.params.rank

    @property
    def n_iter(self) -> int:
        return self.params.n_iter

    @property
    def converged(self) -> bool:
        # Non-converged fits raise ConvergenceError instead of returning
        return True

    # --- Fitted values and residuals ---

    @property
    def fitted_values(self) -> NDArray:
        """Fitted means μ̂."""
        return self.params.fitted_values

    @property
    def linear_predictor(self) -> NDArray:
        """η̂ = Xβ̂."""
        return self.params.linear_predictor

    @property
    def weights(self) -> NDArray:
        """Working weights W at convergence."""
        return self.params.weights

    @property
    def residuals_response(self) -> NDArray:
        return self.params.y - self.fitted_values

    @property
    def residuals_working(self) -> NDArray:
        return self.residuals_response / self.fitted_values

    @property
    def residuals_pearson(self) -> NDArray:
        return self.residuals_response / np.sqrt(self.fitted_values)

    @property
    def residuals_deviance(self) -> NDArray:
        """Signed square roots of the unit deviances."""
        d = Poisson().unit_deviance(self.params.y, self.fitted_values)
        return np.sign(self.residuals_response) * np.sqrt(np.maximum(d, 0.0))

    def predict(
        self,
        X_new: ArrayLike | None = None,
        type: Literal['link', 'response'] = 'response',
    ) -> NDArray:
        """Predict on new rows of the design matrix.

        Args:
            X_new: New design rows (m x p). None returns in-sample values.
            type: 'link' for η, 'response' for μ = exp(η).
        """
        if type not in ('link', 'response'):
            raise ValueError(f"type must be 'link' or 'response', got {type!r}")
        if X_new is None:
            eta = self.linear_predictor
        else:
            X_arr = check_array(X_new, 'X_new')
            if X_arr.ndim == 1:
                X_arr = X_arr.reshape(1, -1)
            check_finite(X_arr, 'X_new')
            if X_arr.ndim != 2 or X_arr.shape[1] != len(self.coefficients):
                raise DimensionError(
                    f"X_new: expected {len(self.coefficients)} columns, "
                    f"got shape {X_arr.shape}"
                )
            eta = X_arr @ self.coefficients
        if type == 'link':
            return eta
        return Poisson().link.linkinv(eta)

    # --- Metadata ---

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Output ---

    def summary(self) -> str:
        """R-style summary of the fit."""
        lines = [
            "Poisson GLM Results",
            "=" * 70,
            "Family: poisson    Link: log",
            f"Observations: {len(self.params.y)}",
            "",
            "Coefficients:",
            f"{'':<16} {'Estimate':>11} {'Std. Error':>11} {'z value':>9} {'Pr(>|z|)':>10}",
        ]
        for row in self.coefficient_table():
            lines.append(
                f"{row.name:<16} {row.estimate:>11.6f} {row.std_error:>11.6f} "
                f"{row.z_value:>9.3f} {_format_pvalue(row.p_value):>10} "
                f"{_significance_stars(row.p_value)}"
            )
        lines += [
            "---",
            "Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1",
            "",
            "(Dispersion parameter for poisson family taken to be 1)",
            "",
            f"    Null deviance: {self.null_deviance:10.4f}  on {self.df_null} degrees of freedom",
            f"Residual deviance: {self.deviance:10.4f}  on {self.df_residual} degrees of freedom",
            f"AIC: {self.aic:.4f}",
            "",
            f"Number of Fisher Scoring iterations: {self.n_iter}",
        ]
        if self.warnings:
            lines.append("")
            lines.extend(f"Warning: {w}" for w in self.warnings)
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"PoissonSolution(n={len(self.params.y)}, p={len(self.coefficients)}, "
            f"deviance={self.deviance:.4f}, aic={self.aic:.4f})"
        )
