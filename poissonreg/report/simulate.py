"""
Synthetic count data with known coefficients.

Used to check that the fit recovers the generating parameters before it
is pointed at real match data.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from poissonreg.core.exceptions import ValidationError
from poissonreg.regression.design import Design


def simulate_counts(
    n: int,
    beta: Sequence[float],
    *,
    seed: int | None = 0,
    x_low: float = 0.0,
    x_high: float = 20.0,
) -> Design:
    """Draw y ~ Poisson(exp(Xβ)) with X = [1, x_1, ..., x_k].

    Each covariate is uniform on [x_low, x_high). beta has one entry for
    the intercept followed by one per covariate.

    Args:
        n: Number of observations
        beta: True coefficients, intercept first
        seed: Seed for numpy.random.default_rng
        x_low, x_high: Covariate range

    Returns:
        Design with integer-valued y and the generating X
    """
    beta_arr = np.asarray(beta, dtype=np.float64)
    if beta_arr.ndim != 1 or len(beta_arr) < 1:
        raise ValidationError(f"beta: expected a non-empty 1D sequence, got {beta!r}")
    if n <= len(beta_arr):
        raise ValidationError(
            f"n: need more observations than coefficients, got n={n}, p={len(beta_arr)}"
        )
    if not x_high > x_low:
        raise ValidationError(f"x range is empty: [{x_low}, {x_high})")

    rng = np.random.default_rng(seed)
    k = len(beta_arr) - 1
    covariates = rng.uniform(x_low, x_high, size=(n, k))
    X = np.column_stack([np.ones(n), covariates])
    y = rng.poisson(np.exp(X @ beta_arr)).astype(np.float64)

    names = ['(Intercept)'] + [f'x{j}' for j in range(1, k + 1)]
    return Design.from_arrays(X, y, names=names)
