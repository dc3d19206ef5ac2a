"""
QR decomposition with column pivoting.

Provides the factorization and least-squares solve used by the regression
solver. Everything runs through LAPACK via SciPy; no matrix is ever
explicitly inverted and X'X is never formed.

Columns are equilibrated to unit 2-norm before factoring. Rank and
conditioning are then properties of the directions of the columns, not
of their magnitudes: rescaling a feature by 1e-9 changes the
coefficients by 1e9 and nothing else.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray
from scipy.linalg import qr, solve_triangular

from pymlr.core.compute.tolerances import rank_tolerance
from pymlr.core.exceptions import SingularMatrixError


@dataclass(frozen=True)
class QRResult:
    """
    Pivoted QR of the equilibrated matrix: (X / scale)[:, pivot] = Q R.

    Attributes:
        Q: Orthonormal columns (n x k, k = min(n, p))
        R: Upper triangular factor of the equilibrated matrix (k x p),
            |diag| non-increasing
        pivot: Column permutation (0-indexed)
        scale: 2-norm of each column of X, in original order (1.0 for an
            all-zero column)
        rank: Numerical rank determined from R diagonal
        tol: Relative tolerance used for rank determination
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    pivot: NDArray[np.intp]
    scale: NDArray[np.floating[Any]]
    rank: int
    tol: float

    @property
    def R_unscaled(self) -> NDArray[np.floating[Any]]:
        """Triangular factor of X itself: X[:, pivot] = Q R_unscaled."""
        return self.R * self.scale[self.pivot]


def qr_pivoted(
    X: NDArray[np.floating[Any]],
    tol: float | None = None,
) -> QRResult:
    """
    Economy QR decomposition with column pivoting.

    Column i of the pivoted factor counts towards the rank when
    |R_ii| > tol * |R_00|, with R taken from the equilibrated matrix.

    Args:
        X: Matrix to decompose (n x p)
        tol: Relative tolerance for rank determination. None uses
            max(n, p) * eps.

    Returns:
        QRResult with Q, R, pivot, column scales and numerical rank
    """
    if tol is None:
        tol = rank_tolerance(*X.shape)

    scale = np.linalg.norm(X, axis=0)
    scale[scale == 0] = 1.0
    Q, R, pivot = qr(X / scale, mode='economic', pivoting=True)

    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R[0] > 0:
        rank = int(np.sum(diag_R > tol * diag_R[0]))
    else:
        rank = 0

    return QRResult(Q=Q, R=R, pivot=pivot, scale=scale, rank=rank, tol=tol)


def condition_number(R: NDArray[np.floating[Any]]) -> float:
    """
    2-norm condition number of a square triangular factor.

    cond(R) equals cond(X) for X = QR, so this measures the design matrix
    itself rather than the squared conditioning of X'X.
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        return float(np.linalg.cond(R))


def qr_solve(
    X: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    *,
    tol: float | None = None,
    qr_result: QRResult | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares via pivoted QR decomposition.

    Solves: min_β ||y - Xβ||² via

        (X / s) P = QR
        R z = Q'y   (back substitution)
        β[P] = z / s[P]

    Args:
        X: Design matrix (n x p), must have n >= p
        y: Response vector (n,)
        tol: Relative tolerance for rank determination
        qr_result: Precomputed decomposition of X, if available

    Returns:
        Coefficient vector β (p,) in the original column order

    Raises:
        SingularMatrixError: If X is rank-deficient
    """
    n, p = X.shape
    if qr_result is None:
        qr_result = qr_pivoted(X, tol=tol)

    if qr_result.rank < p:
        raise SingularMatrixError(
            f"Design matrix is rank-deficient: rank={qr_result.rank}, expected={p}. "
            f"This indicates perfect multicollinearity.",
            matrix_name='X',
            rank=qr_result.rank,
            expected_rank=p
        )

    Qty = qr_result.Q.T @ y
    z = solve_triangular(qr_result.R[:p, :p], Qty[:p], lower=False)

    beta = np.empty(p, dtype=np.float64)
    beta[qr_result.pivot] = z / qr_result.scale[qr_result.pivot]
    return beta
