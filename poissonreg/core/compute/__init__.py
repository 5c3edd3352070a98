"""
Shared compute infrastructure for poissonreg.

Domain backends live in {domain}/backends/. This module holds the shared
numeric pieces they build on.

Submodules:
    timing: Execution timing utilities
    tolerances: Numerical tolerance tiers
    linalg: Linear algebra kernels (QR, covariance from R)
"""

from poissonreg.core.compute.timing import Timer

__all__ = [
    "Timer",
]
