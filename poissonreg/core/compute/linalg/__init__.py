"""
Linear algebra kernels for poissonreg.

CPU implementations built on NumPy/SciPy (LAPACK under the hood). Each
operation returns a structured result and raises immediately with a
clear message when the input is unusable.
"""

from poissonreg.core.compute.linalg.qr import (
    QRResult,
    qr_cpu,
    qr_solve,
    unscaled_covariance,
)

__all__ = [
    "QRResult",
    "qr_cpu",
    "qr_solve",
    "unscaled_covariance",
]
