"""
Solver dispatch for Poisson regression.

This module provides the public entry points, fit() and PoissonRegressor,
and backend selection. Validation happens here, at the boundary; backends
trust the Design they receive.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Literal
from numpy.typing import ArrayLike

from poissonreg.core.exceptions import ValidationError
from poissonreg.core.protocols import Backend
from poissonreg.regression.design import Design
from poissonreg.regression.families import Poisson
from poissonreg.regression.solution import PoissonSolution
from poissonreg.regression.backends.cpu_irls import CPUIRLSBackend


BackendChoice = Literal['auto', 'cpu', 'cpu_irls']


@dataclass(frozen=True)
class PoissonRegressor:
    """
    Log-linear Poisson regression fitted by IRLS.

    The regressor only carries configuration and is immutable, so a single
    instance can be shared between threads; each fit() is independent.

    Attributes:
        tol: Relative deviance change at which IRLS stops
        max_iter: Iteration cap; reaching it raises ConvergenceError
        require_integer: Reject fractional responses as invalid counts
        backend: Computational backend ('auto', 'cpu', 'cpu_irls')

    Example:
        >>> reg = PoissonRegressor()
        >>> model = reg.fit(X, y)
        >>> for row in model.coefficient_table():
        ...     print(row.name, row.estimate, row.p_value)
    """
    tol: float = 1e-8
    max_iter: int = 25
    require_integer: bool = True
    backend: BackendChoice = 'auto'

    def __post_init__(self):
        if not self.tol > 0:
            raise ValidationError(f"tol: must be positive, got {self.tol}")
        if isinstance(self.max_iter, bool) or not isinstance(self.max_iter, int) \
                or self.max_iter < 1:
            raise ValidationError(
                f"max_iter: must be a positive integer, got {self.max_iter!r}"
            )

    def fit(self, X_or_design: ArrayLike | Design, y: ArrayLike | None = None) -> PoissonSolution:
        """Fit the model. See poissonreg.regression.fit for the arguments."""
        if isinstance(X_or_design, Design):
            if y is not None:
                raise ValidationError("y must not be given together with a Design")
            design = X_or_design
        else:
            if y is None:
                raise ValidationError("y required when X is an array")
            design = Design.from_arrays(X_or_design, y)

        Poisson().validate(design.y, require_integer=self.require_integer)
        if not self.require_integer and (design.y != design.y.round()).any():
            warnings.warn(
                "y contains non-integer values; fitting as a quasi-count response",
                RuntimeWarning,
                stacklevel=3,
            )

        backend_impl = _get_backend(self.backend)
        result = backend_impl.solve(design, tol=self.tol, max_iter=self.max_iter)
        return PoissonSolution(result)


def fit(
    X_or_design: ArrayLike | Design,
    y: ArrayLike | None = None,
    *,
    tol: float = 1e-8,
    max_iter: int = 25,
    require_integer: bool = True,
    backend: BackendChoice = 'auto',
) -> PoissonSolution:
    """
    Fit a Poisson regression with log link.

    Maximizes the Poisson likelihood of log(μ) = Xβ by iteratively
    reweighted least squares. X is used as given: include a column of ones
    for an intercept (or build the Design with intercept=True).

    Args:
        X_or_design: Design matrix (n x p) or a Design.
        y: Response counts (n,). Required when X is an array.
        tol: Convergence tolerance on the relative deviance change.
        max_iter: Maximum IRLS iterations.
        require_integer: Reject non-integer responses.
        backend: Computational backend.

    Returns:
        PoissonSolution with coefficients, standard errors, deviances, AIC

    Raises:
        ValidationError: Negative or non-integer counts, non-finite
            values, n <= p
        DimensionError: X and y have inconsistent lengths
        SingularMatrixError: X (weighted) is rank-deficient
        ConvergenceError: max_iter reached; carries the last iterate

    Example:
        >>> import numpy as np
        >>> from poissonreg.regression import fit
        >>>
        >>> y = np.array([0, 1, 2, 1, 3, 0, 2, 4, 1, 2])
        >>> result = fit(np.ones((10, 1)), y)
        >>> result.coefficients   # log(mean(y))
        array([0.47000363])
    """
    regressor = PoissonRegressor(
        tol=tol,
        max_iter=max_iter,
        require_integer=require_integer,
        backend=backend,
    )
    return regressor.fit(X_or_design, y)


def _get_backend(choice: BackendChoice) -> Backend:
    """
    Select and instantiate the appropriate backend.

    Raises:
        ValueError: If unknown backend specified
    """
    if choice in ('auto', 'cpu', 'cpu_irls'):
        return CPUIRLSBackend()
    raise ValueError(f"Unknown backend: {choice!r}")
