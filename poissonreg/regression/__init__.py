"""
Log-linear Poisson regression.

Public API:
    fit(X, y, ...) -> PoissonSolution
    PoissonRegressor(...).fit(X, y) -> PoissonSolution

Both entry points handle:
    - Input validation
    - Design construction
    - Backend selection
    - Result wrapping

Example:
    >>> from poissonreg.regression import fit
    >>> result = fit(X, y)
    >>> print(result.coefficients)
    >>> print(result.summary())
"""

from poissonreg.regression.design import Design
from poissonreg.regression.families import Poisson, LogLink
from poissonreg.regression.solution import PoissonSolution, PoissonParams, CoefficientRow
from poissonreg.regression.solvers import fit, PoissonRegressor

__all__ = [
    "fit",
    "PoissonRegressor",
    "Design",
    "Poisson",
    "LogLink",
    "PoissonSolution",
    "PoissonParams",
    "CoefficientRow",
]
