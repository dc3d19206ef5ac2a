"""
Least-squares solver for linear regression.

Uses QR decomposition with column pivoting via LAPACK (through SciPy).
X'X is never formed and nothing is inverted, so the conditioning of the
problem is that of X rather than its square.
"""

from typing import Any
import numpy as np

from pymlr.core.result import Result
from pymlr.core.exceptions import NumericalInstabilityError, SingularMatrixError
from pymlr.core.validation import check_positive
from pymlr.core.compute.timing import Timer
from pymlr.core.compute.tolerances import CONDITION_THRESHOLD
from pymlr.core.compute.linalg.qr import qr_pivoted, qr_solve, condition_number
from pymlr.regression.design import Design
from pymlr.regression.solution import LinearParams


class LeastSquaresSolver:
    """
    Ordinary least squares via pivoted QR.

    Stateless apart from its settings; one instance may solve any number
    of designs, from any number of threads.

    Both checks below see the design with every column scaled to unit
    norm, so a full-rank design fits whatever units its features use.

    Args:
        tol: Relative tolerance for numerical rank. Column i of the pivoted
            factor is dependent when |R_ii| <= tol * |R_00|. None uses
            max(n, p + 1) * eps.
        condition_threshold: Largest acceptable condition number of the
            equilibrated design matrix.

    Raises:
        ConfigurationError: If a setting is not a positive finite number
    """

    def __init__(
        self,
        tol: float | None = None,
        condition_threshold: float = CONDITION_THRESHOLD,
    ):
        self.tol = None if tol is None else check_positive(tol, 'tol')
        self.condition_threshold = check_positive(condition_threshold, 'condition_threshold')

    @property
    def name(self) -> str:
        return 'cpu_qr'

    def solve(self, design: Design) -> Result[LinearParams]:
        """
        Solve OLS via QR decomposition.

        Algorithm:
            1. Equilibrate columns and factor: (X / s) P = QR
            2. Rank and condition checks on R
            3. Solve: R z = Q'y, β[P] = z / s[P]
            4. Residuals, RSS and TSS

        Args:
            design: Validated regression design

        Returns:
            Result containing LinearParams

        Raises:
            SingularMatrixError: If X is rank-deficient or n < p + 1
            NumericalInstabilityError: If X is too ill-conditioned or the
                computation overflows
        """
        timer = Timer()

        X = design.X
        y = design.y
        n, k = X.shape

        if n < k:
            raise SingularMatrixError(
                f"Design matrix has {n} observations for {k} coefficients; "
                f"at least {k} observations are required.",
                matrix_name='X',
                expected_rank=k,
            )

        with timer.section('qr_decomposition'):
            qr_result = qr_pivoted(X, tol=self.tol)
        if not (np.all(np.isfinite(qr_result.scale)) and np.all(np.isfinite(qr_result.R))):
            raise NumericalInstabilityError(
                "QR decomposition overflowed: column norms or R contain non-finite values.",
                threshold=self.condition_threshold,
            )

        with timer.section('solve'):
            coefficients = qr_solve(X, y, qr_result=qr_result)

        with timer.section('condition'):
            cond = condition_number(qr_result.R[:k, :k])
        if not np.isfinite(cond) or cond > self.condition_threshold:
            raise NumericalInstabilityError(
                f"Design matrix is ill-conditioned: condition number {cond:.3e} "
                f"exceeds threshold {self.condition_threshold:.3e}.",
                condition_number=cond,
                threshold=self.condition_threshold,
            )

        with timer.section('residuals'):
            with np.errstate(over='ignore', invalid='ignore'):
                fitted_values = X @ coefficients
                residuals = y - fitted_values
                rss = float(residuals @ residuals)
                tss = float(np.sum((y - np.mean(y)) ** 2))

        if not (np.all(np.isfinite(coefficients)) and np.all(np.isfinite(fitted_values))
                and np.isfinite(rss)):
            raise NumericalInstabilityError(
                "Least-squares solution overflowed: coefficients or residuals "
                "contain non-finite values.",
                condition_number=cond,
                threshold=self.condition_threshold,
            )

        for arr in (coefficients, residuals, fitted_values):
            arr.setflags(write=False)

        df_residual = n - qr_result.rank
        params = LinearParams(
            coefficients=coefficients,
            residuals=residuals,
            fitted_values=fitted_values,
            rss=max(rss, 0.0),
            tss=tss,
            rank=qr_result.rank,
            df_residual=df_residual,
            condition_number=cond,
        )

        notes: list[str] = []
        if df_residual == 0:
            notes.append(
                f"{n} observations for {k} coefficients leave no residual "
                f"degrees of freedom; standard errors are undefined."
            )

        R = qr_result.R_unscaled[:k, :k].copy()
        R.setflags(write=False)
        info: dict[str, Any] = {
            'method': 'qr',
            'rank': qr_result.rank,
            'pivot': tuple(int(i) for i in qr_result.pivot),
            'R': R,
            'tol': qr_result.tol,
            'condition_number': cond,
        }

        return Result(
            params=params,
            info=info,
            timing=timer.elapsed(),
            backend_name=self.name,
            warnings=tuple(notes),
        )

    def __repr__(self) -> str:
        tol = 'auto' if self.tol is None else f"{self.tol:g}"
        return (
            f"LeastSquaresSolver(tol={tol}, "
            f"condition_threshold={self.condition_threshold:g})"
        )
