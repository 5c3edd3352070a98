"""
Regression backends.

Available backends:
    CPUIRLSBackend: CPU reference implementation, IRLS with QR inner solve
"""

from poissonreg.regression.backends.cpu_irls import CPUIRLSBackend

__all__ = [
    "CPUIRLSBackend",
]
