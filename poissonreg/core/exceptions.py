"""
Exception hierarchy for poissonreg.

All exceptions inherit from PoissonRegError to allow catching any
library-specific error. The three fit failures map onto:

    ValidationError       invalid input (caller's fault, not retried)
    SingularMatrixError   rank-deficient design (caller must fix X)
    ConvergenceError      IRLS iteration cap reached (caller may retry)

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""

from __future__ import annotations

from typing import Any

import numpy as np
from numpy.typing import NDArray


class PoissonRegError(Exception):
    """Base exception for all poissonreg errors."""
    pass


class ValidationError(PoissonRegError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: negative or
    non-integer counts, non-finite values, too few observations.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when X and y have a different number of rows.
    """
    pass


class NumericalError(PoissonRegError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Weighted cross-product X'WX is singular or nearly singular.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of columns)
        aliased: Names of the columns that are linear combinations of
            earlier columns
        iteration: IRLS iteration at which the defect was detected
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        rank: int | None = None,
        expected_rank: int | None = None,
        aliased: tuple[str, ...] = (),
        iteration: int | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.rank = rank
        self.expected_rank = expected_rank
        self.aliased = tuple(aliased)
        self.iteration = iteration


class ConvergenceError(PoissonRegError):
    """
    IRLS failed to converge within the iteration cap.

    The last iterate is kept on the exception so callers can inspect it
    or use it as a starting point for a retry.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final relative deviance change
        reason: Why convergence failed (e.g., 'max_iterations')
        threshold: The convergence threshold that was not met
        deviance: Deviance of the last iterate
        coefficients: Coefficients of the last iterate
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None,
        deviance: float | None = None,
        coefficients: NDArray[np.floating[Any]] | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
        self.deviance = deviance
        self.coefficients = coefficients
