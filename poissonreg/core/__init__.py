"""
Core infrastructure for poissonreg.

Shared abstractions used by the regression and report layers.

Key components:
    protocols: Backend protocol
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: Named-array container
    compute: Timing, tolerances, QR kernels
"""

from poissonreg.core.protocols import Backend
from poissonreg.core.result import Result
from poissonreg.core.datasource import DataSource
from poissonreg.core.exceptions import (
    PoissonRegError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    ConvergenceError,
)

__all__ = [
    "Backend",
    "Result",
    "DataSource",
    "PoissonRegError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "ConvergenceError",
]
