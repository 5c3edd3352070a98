"""
Generic result container for poissonreg computations.

The Result class is the envelope a backend hands back to the solver layer.
It separates the domain payload (coefficients, deviances) from metadata
(method, rank, timings) so solution wrappers can expose both.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (iterations, tolerance)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for statistical computations.

    Attributes:
        params: Domain-specific parameters (coefficients, deviances, etc.)
        info: Structured metadata (method, iterations, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Example:
        >>> Result(
        ...     params=PoissonParams(...),
        ...     info={'method': 'irls_qr', 'iterations': 5},
        ...     timing={'total_seconds': 0.01, 'irls': 0.008},
        ...     backend_name='cpu_irls'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
