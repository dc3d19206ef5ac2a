"""
Regression solution types.

LinearParams is what the solver computes. LinearSolution is what a
fitted RegressionModel exposes: the same numbers plus the inference
statistics derived from them.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import NDArray
from scipy import stats
from scipy.linalg import solve_triangular

from pymlr.core.result import Result

if TYPE_CHECKING:
    from pymlr.regression.design import Design


@dataclass(frozen=True)
class LinearParams:
    """
    Solver output. coefficients[0] is the intercept, coefficients[1:]
    the per-feature slopes; arrays are read-only.
    """
    coefficients: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    rss: float
    tss: float
    rank: int
    df_residual: int
    condition_number: float


class LinearSolution:
    """
    Fitted regression with goodness-of-fit and coefficient inference.

    Args:
        result: Solver output envelope
        design: The design the solver was given
    """

    def __init__(self, result: Result[LinearParams], design: Design):
        self._result = result
        self._params = result.params
        self._design = design

    @property
    def result(self) -> Result[LinearParams]:
        """Solver envelope: factorization info, stage timings, notes."""
        return self._result

    @property
    def coefficients(self) -> NDArray[np.floating[Any]]:
        return self._params.coefficients

    @property
    def residuals(self) -> NDArray[np.floating[Any]]:
        return self._params.residuals

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]]:
        return self._params.fitted_values

    @property
    def rss(self) -> float:
        return self._params.rss

    @property
    def tss(self) -> float:
        return self._params.tss

    @property
    def rank(self) -> int:
        return self._params.rank

    @property
    def df_residual(self) -> int:
        return self._params.df_residual

    @property
    def condition_number(self) -> float:
        return self._params.condition_number

    # === Goodness of fit ===

    @property
    def r_squared(self) -> float:
        """1 - RSS/TSS. Constant labels give 1.0 on an exact fit, else 0.0."""
        rss, tss = self._params.rss, self._params.tss
        if tss == 0:
            return 1.0 if rss == 0 else 0.0
        return 1.0 - rss / tss

    @property
    def adjusted_r_squared(self) -> float:
        n, df = self._design.n, self._params.df_residual
        if df <= 0 or self._params.tss == 0:
            return self.r_squared
        return 1.0 - (1.0 - self.r_squared) * (n - 1) / df

    @property
    def residual_std_error(self) -> float:
        """sqrt(RSS / df_residual); 0.0 when nothing is left to estimate it."""
        df = self._params.df_residual
        return float(np.sqrt(self._params.rss / df)) if df > 0 else 0.0

    # === Coefficient inference ===

    @cached_property
    def standard_errors(self) -> NDArray[np.floating[Any]]:
        """
        sqrt(diag(σ² (X'X)⁻¹)), all NaN with zero residual degrees of freedom.

        With X[:, P] = QR, (X'X)⁻¹ permuted by P is R⁻¹R⁻ᵀ, whose diagonal
        is the row sums of squares of R⁻¹.
        """
        k = self._design.n_coef
        df = self._params.df_residual
        if df <= 0:
            return np.full(k, np.nan)

        R = self._result.info['R']
        pivot = np.asarray(self._result.info['pivot'])
        R_inv = solve_triangular(R, np.eye(k), lower=False)

        se = np.empty(k)
        se[pivot] = np.sqrt((self._params.rss / df) * np.einsum('ij,ij->i', R_inv, R_inv))
        se.setflags(write=False)
        return se

    @property
    def t_statistics(self) -> NDArray[np.floating[Any]]:
        with np.errstate(divide='ignore', invalid='ignore'):
            t = self.coefficients / self.standard_errors
        t[~np.isfinite(t)] = np.nan
        return t

    @property
    def p_values(self) -> NDArray[np.floating[Any]]:
        """Two-sided, Student's t with df_residual degrees of freedom."""
        t = self.t_statistics
        df = self._params.df_residual
        if df <= 0:
            return np.full_like(t, np.nan)
        return 2.0 * stats.t.sf(np.abs(t), df)

    # === Reporting ===

    def summary(self) -> str:
        """Coefficient table and fit statistics, laid out like R's summary.lm."""
        rule = "-" * 72
        lines = [
            "Linear Regression Results",
            "=" * 72,
            f"Observations: {self._design.n}",
            f"Predictors: {self._design.p}",
            f"Rank: {self.rank}",
            f"R-squared: {self.r_squared:.6f}",
            f"Adj. R-squared: {self.adjusted_r_squared:.6f}",
            f"Residual sum of squares: {self.rss:.6f}",
            f"Residual Std. Error: {self.residual_std_error:.6f} on {self.df_residual} DF",
            "",
            "Coefficients:",
            rule,
            f"{'Name':<14} {'Estimate':>14} {'Std.Error':>12} {'t value':>10} {'Pr(>|t|)':>12}",
            rule,
        ]

        rows = zip(self._design.coef_names, self.coefficients, self.standard_errors,
                   self.t_statistics, self.p_values)
        for name, coef, se, t, pv in rows:
            lines.append(
                f"{name:<14} {coef:14.6f} {_cell(se, 12, '.6f')} "
                f"{_cell(t, 10, '.3f')} {_p_cell(pv)}"
            )

        lines.append(rule)
        lines.append(f"Condition number: {self.condition_number:.3e}")
        lines.append(f"Backend: {self._result.backend_name}")
        if self._result.timing:
            lines.append(f"Time: {self._result.timing['total_seconds']:.4f}s")
        for note in self._result.warnings:
            lines.append(f"Note: {note}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LinearSolution(n={self._design.n}, p={self._design.p}, "
            f"rank={self.rank}, r_squared={self.r_squared:.4f})"
        )


def _cell(value: float, width: int, fmt: str) -> str:
    return f"{'NA':>{width}}" if np.isnan(value) else f"{value:{width}{fmt}}"


def _p_cell(pv: float) -> str:
    if np.isnan(pv):
        return f"{'NA':>12}"
    if pv < 1e-4:
        return f"{'<.0001':>12}"
    return f"{pv:12.4f}"
