"""
Regression Design.

Design wraps a DataSource and extracts X (design matrix) and y (response).
It knows it's building a count regression; DataSource doesn't.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray

from poissonreg.core.datasource import DataSource
from poissonreg.core.exceptions import ValidationError
from poissonreg.core.validation import (
    check_array, check_finite, check_2d, check_1d,
    check_consistent_length, check_min_samples,
)

INTERCEPT_NAME = '(Intercept)'


@dataclass(frozen=True)
class Design:
    """
    Regression design matrix specification.

    Holds X, y and one name per column of X. Immutable after construction.

    Construction:
        Design.from_datasource(ds, x='shots', y='goals', intercept=True)
        Design.from_datasource(ds)                  # Uses ds['X'] and ds['y']
        Design.from_arrays(X, y)                    # Direct from arrays
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _names: tuple[str, ...]
    _source: DataSource | None = None

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str] | None = None,
        y: str | None = None,
        intercept: bool = False,
    ) -> Design:
        """
        Build Design from DataSource.

        Args:
            source: The DataSource
            x: Predictor column(s). If None and source has 'X', uses that.
               If None and y is specified, uses all columns except y.
            y: Response column. If None, uses 'y' from source.
            intercept: Prepend a column of ones named '(Intercept)'.
        """
        if y is not None:
            y_arr = source[y]
        elif 'y' in source:
            y_arr = source['y']
        else:
            raise ValidationError("Must specify y or DataSource must have 'y'")

        names: list[str] | None = None
        if x is not None:
            x_cols = [x] if isinstance(x, str) else list(x)
            X_arr = _get_columns(source, x_cols)
            names = x_cols
        elif 'X' in source:
            X_arr = source['X']
        elif y is not None:
            x_cols = sorted(k for k in source.keys() if k != y)
            if not x_cols:
                raise ValidationError("No predictor columns available")
            X_arr = _get_columns(source, x_cols)
            names = x_cols
        else:
            raise ValidationError("Must specify x or DataSource must have 'X'")

        X_arr = check_array(X_arr, 'X')
        y_arr = check_array(y_arr, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)

        if intercept:
            X_arr = np.column_stack([np.ones(X_arr.shape[0]), X_arr])
            if names is not None:
                names = [INTERCEPT_NAME] + names

        return cls._build(X_arr, y_arr, names=names, source=source)

    @classmethod
    def from_arrays(
        cls,
        X: Any,
        y: Any,
        *,
        names: Sequence[str] | None = None,
        intercept: bool = False,
    ) -> Design:
        """Build Design directly from array-likes."""
        X_arr = check_array(X, 'X')
        y_arr = check_array(y, 'y')
        if X_arr.ndim == 1:
            X_arr = X_arr.reshape(-1, 1)
        if intercept:
            X_arr = np.column_stack([np.ones(X_arr.shape[0]), X_arr])
            if names is not None:
                names = [INTERCEPT_NAME, *names]
        return cls._build(X_arr, y_arr, names=names, source=None)

    @classmethod
    def _build(
        cls,
        X: NDArray,
        y: NDArray,
        names: Sequence[str] | None,
        source: DataSource | None,
    ) -> Design:
        """Internal builder with validation."""
        if y.ndim == 2 and y.shape[1] == 1:
            y = y.ravel()

        check_2d(X, 'X')
        check_1d(y, 'y')
        check_finite(X, 'X')
        check_finite(y, 'y')
        check_consistent_length(X, y, names=('X', 'y'))

        n, p = X.shape
        if p == 0:
            raise ValidationError("X: design matrix has no columns")
        # One residual degree of freedom is the minimum for a fit
        check_min_samples(X, p + 1, 'X')

        if names is None:
            names = _default_names(X)
        elif len(names) != p:
            raise ValidationError(
                f"names: got {len(names)} names for {p} columns of X"
            )

        # Own copies, read-only: the caller's buffers never alias the fit
        X = np.array(X, dtype=np.float64, order='C', copy=True)
        y = np.array(y, dtype=np.float64, copy=True)
        X.setflags(write=False)
        y.setflags(write=False)

        return cls(
            _X=X,
            _y=y,
            _n=n, _p=p, _names=tuple(names), _source=source,
        )

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x p)."""
        return self._X

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Response vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        return self._n

    @property
    def p(self) -> int:
        return self._p

    @property
    def names(self) -> tuple[str, ...]:
        """Column names of X, in column order."""
        return self._names

    @property
    def source(self) -> DataSource | None:
        return self._source

    @property
    def has_intercept(self) -> bool:
        """True when some column of X is identically 1."""
        return bool(np.any(np.all(self._X == 1.0, axis=0)))


def _default_names(X: NDArray) -> list[str]:
    """'(Intercept)' for all-ones columns, x1..xk for the rest."""
    names = []
    k = 0
    for j in range(X.shape[1]):
        if np.all(X[:, j] == 1.0):
            names.append(INTERCEPT_NAME)
        else:
            k += 1
            names.append(f'x{k}')
    return names


def _get_columns(source: DataSource, names: list[str]) -> NDArray:
    """Stack multiple columns from DataSource into a matrix."""
    arrays = []
    for name in names:
        arr = np.asarray(source[name], dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        arrays.append(arr)
    return np.hstack(arrays)
