"""
QR decomposition and least squares kernels.

Every IRLS step solves a weighted least squares problem on the transformed
system √W·X, √W·z. Working through the QR factor of √W·X avoids forming
and inverting X'WX, and the triangular factor doubles as the source of
the unscaled covariance (X'WX)⁻¹ = R⁻¹R⁻ᵀ.

Rank detection follows the column-wise rule of LINPACK's dqrdc2: a column
is aliased when, after projecting out the columns kept before it, the
remaining norm is negligible relative to its original norm.
"""

from dataclasses import dataclass
from typing import Any, Sequence
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import solve_triangular

from poissonreg.core.exceptions import SingularMatrixError
from poissonreg.core.compute.tolerances import ALIAS_TOLERANCE


@dataclass(frozen=True)
class QRResult:
    """
    Result of a reduced QR decomposition.

    Attributes:
        Q: Orthonormal columns (n x p)
        R: Upper triangular factor (p x p)
        rank: Number of non-aliased columns
        aliased: Indices of columns that are (numerically) linear
            combinations of earlier columns
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int
    aliased: tuple[int, ...]


def qr_cpu(
    X: NDArray[np.floating[Any]],
    tol: float = ALIAS_TOLERANCE,
) -> QRResult:
    """
    Reduced QR decomposition using LAPACK (via NumPy) with rank detection.

    Args:
        X: Matrix to decompose (n x p), n >= p
        tol: Relative tolerance for declaring a column aliased

    Returns:
        QRResult with Q, R, numerical rank and aliased column indices
    """
    Q, R = np.linalg.qr(X, mode='reduced')
    p = X.shape[1]

    col_norms = np.linalg.norm(X, axis=0)
    diag_R = np.abs(np.diag(R))
    if np.all(diag_R > tol * col_norms) and np.all(col_norms > 0):
        return QRResult(Q=Q, R=R, rank=p, aliased=())

    aliased = _aliased_columns(X, col_norms, tol)
    return QRResult(Q=Q, R=R, rank=p - len(aliased), aliased=aliased)


def _aliased_columns(
    X: NDArray[np.floating[Any]],
    col_norms: NDArray[np.floating[Any]],
    tol: float,
) -> tuple[int, ...]:
    """Scan columns left to right, keeping those that add a new direction."""
    kept: list[int] = []
    aliased: list[int] = []
    for j in range(X.shape[1]):
        if col_norms[j] == 0:
            aliased.append(j)
            continue
        _, R = np.linalg.qr(X[:, kept + [j]], mode='reduced')
        if abs(R[-1, -1]) <= tol * col_norms[j]:
            aliased.append(j)
        else:
            kept.append(j)
    return tuple(aliased)


def qr_solve(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    names: Sequence[str] | None = None,
) -> tuple[NDArray[np.floating[Any]], QRResult]:
    """
    Solve least squares via QR decomposition.

    Solves min_β ||y - Xβ||² as β = R⁻¹ Q'y.

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)
        names: Column names used in the error message

    Returns:
        Tuple of coefficient vector β (p,) and the QRResult

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    p = X.shape[1]
    qr_result = qr_cpu(X)

    if qr_result.rank < p:
        labels = tuple(
            names[j] if names is not None else f"column {j}"
            for j in qr_result.aliased
        )
        raise SingularMatrixError(
            f"Weighted design matrix is rank-deficient: rank={qr_result.rank}, "
            f"expected={p}. Collinear with earlier columns: {', '.join(labels)}",
            matrix_name='X\'WX',
            rank=qr_result.rank,
            expected_rank=p,
            aliased=labels,
        )

    Qty = qr_result.Q.T @ y
    beta = solve_triangular(qr_result.R, Qty, lower=False)

    return beta, qr_result


def unscaled_covariance(R: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    """
    Compute (R'R)⁻¹ from an upper triangular factor.

    For R from the QR of √W·X this is (X'WX)⁻¹, the inverse Fisher
    information of a model with unit dispersion.
    """
    p = R.shape[0]
    R_inv = solve_triangular(R, np.eye(p), lower=False)
    return R_inv @ R_inv.T
