"""
Poisson family with its canonical log link.

The family supplies the pieces IRLS needs:
- the link g(μ) = log μ, its inverse and dμ/dη
- the variance function V(μ) = μ
- the deviance, log-likelihood and AIC
- the starting values for the iteration

References:
    McCullagh, P., & Nelder, J. A. (1989). Generalized Linear Models (2nd ed.)
    R Core Team. stats::poisson, stats::glm.fit
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.special import gammaln, xlogy

from poissonreg.core.validation import check_nonnegative, check_integer_valued

# exp(ETA_MAX) stays far below the float64 overflow threshold even after
# squaring in X'WX.
ETA_MAX = 350.0
# Lower bound for fitted means (R: .Machine$double.eps), keeps 1/μ finite in
# the working response.
MU_MIN = float(np.finfo(np.float64).eps)


class LogLink:
    """Log link: g(μ) = log(μ)."""

    @property
    def name(self) -> str:
        return 'log'

    def link(self, mu: NDArray) -> NDArray:
        return np.log(np.maximum(mu, MU_MIN))

    def linkinv(self, eta: NDArray) -> NDArray:
        eta = np.clip(eta, -ETA_MAX, ETA_MAX)
        return np.maximum(np.exp(eta), MU_MIN)

    def mu_eta(self, eta: NDArray) -> NDArray:
        """dμ/dη, which for the log link is μ itself."""
        return self.linkinv(eta)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class Poisson:
    """Poisson family. Link: log.

    V(μ) = μ
    Deviance = 2 * Σ [y_i log(y_i/μ_i) - (y_i - μ_i)]
    """

    def __init__(self):
        self._link = LogLink()

    @property
    def name(self) -> str:
        return 'poisson'

    @property
    def link(self) -> LogLink:
        return self._link

    def validate(self, y: NDArray, require_integer: bool = True) -> None:
        """Check that y is a valid vector of counts.

        Raises:
            ValidationError: On negative values, or on fractional values
                when require_integer is set.
        """
        check_nonnegative(y, 'y')
        if require_integer:
            check_integer_valued(y, 'y')

    def variance(self, mu: NDArray) -> NDArray:
        return np.maximum(mu, MU_MIN)

    def initialize(self, y: NDArray) -> NDArray:
        # R: mustart <- y + 0.1
        return y + 0.1

    def unit_deviance(self, y: NDArray, mu: NDArray) -> NDArray:
        """Per-observation deviance with the convention 0·log(0) = 0."""
        with np.errstate(divide='ignore', invalid='ignore'):
            term = np.where(y > 0, y * np.log(y / np.maximum(mu, MU_MIN)), 0.0)
        return 2.0 * (term - (y - mu))

    def deviance(self, y: NDArray, mu: NDArray) -> float:
        return float(np.sum(self.unit_deviance(y, mu)))

    def null_deviance(self, y: NDArray) -> float:
        """Deviance of the intercept-only fit, whose fitted mean is ȳ."""
        return self.deviance(y, np.full_like(y, np.mean(y)))

    def log_likelihood(self, y: NDArray, mu: NDArray) -> float:
        # Σ [y_i log(μ_i) - μ_i - log(y_i!)], log(y!) = lgamma(y + 1)
        mu = np.maximum(mu, MU_MIN)
        return float(np.sum(xlogy(y, mu) - mu - gammaln(y + 1)))

    def aic(self, y: NDArray, mu: NDArray, rank: int) -> float:
        """AIC = -2 * loglik + 2 * rank."""
        return -2.0 * self.log_likelihood(y, mu) + 2.0 * rank

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(link={self._link.name!r})"
