"""
Multivariate linear regression model.

RegressionModel trains once, at construction, and is immutable afterwards.
A training attempt ends in one of two states:

    Fitted(solution)   weights, RSS and predictions are available
    Unfitted(reason)   the solver failed; queries return None

Structurally invalid training data never reaches the solver: it raises
ConfigurationError from the constructor. Numerical failures of the solver
are absorbed into the Unfitted state and reported once as a
RuntimeWarning, so callers can check is_fitted instead of wrapping
construction in try/except.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import InvalidInputError, NumericalError
from pymlr.regression.design import Design
from pymlr.regression.solution import LinearSolution
from pymlr.regression.solvers import LeastSquaresSolver


@dataclass(frozen=True)
class Fitted:
    """Training succeeded."""
    solution: LinearSolution


@dataclass(frozen=True)
class Unfitted:
    """Training failed; reason is the solver's exception."""
    reason: NumericalError

    @property
    def message(self) -> str:
        return f"{type(self.reason).__name__}: {self.reason}"


class RegressionModel:
    """
    Ordinary least squares regression with an intercept.

    Args:
        xt: Feature rows (n x p). A flat sequence is read as one feature.
        y: Labels, one per row of xt.
        solver: Object with solve(design) -> Result[LinearParams].
            Defaults to LeastSquaresSolver().
        feature_names: Optional names of the p features, used in summary().

    Raises:
        ConfigurationError: If xt or y is empty, non-numeric or non-finite
        DimensionError: If len(y) differs from the number of rows in xt

    Examples:
        >>> model = RegressionModel([[1.0], [2.0], [3.0], [4.0]], [2.1, 3.9, 6.1, 7.9])
        >>> model.is_fitted
        True
        >>> model.weights.round(2).tolist()   # [intercept, slope]
        [0.1, 1.96]
        >>> round(model.predict([5.0]), 2)
        9.9
    """

    def __init__(
        self,
        xt: ArrayLike,
        y: ArrayLike,
        *,
        solver: Any = None,
        feature_names: list[str] | None = None,
    ):
        design = Design.from_arrays(xt, y, feature_names=feature_names)
        # _train <- _setup <- __init__ <- caller
        self._setup(design, solver, stacklevel=4)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str] | None = None,
        y: str | None = None,
        solver: Any = None,
    ) -> RegressionModel:
        """
        Train from a DataSource.

        Column selection follows Design.from_datasource: explicit x/y
        names, or the 'X'/'y' arrays, or every column other than y.
        """
        design = Design.from_datasource(source, x=x, y=y)
        # _train <- _setup <- _from_design <- from_datasource <- caller
        return cls._from_design(design, solver, stacklevel=5)

    @classmethod
    def _from_design(cls, design: Design, solver: Any, stacklevel: int) -> RegressionModel:
        model = cls.__new__(cls)
        model._setup(design, solver, stacklevel)
        return model

    def _setup(self, design: Design, solver: Any, stacklevel: int) -> None:
        if solver is None:
            solver = LeastSquaresSolver()
        self._design = design
        self._outcome = _train(design, solver, stacklevel)

    # === State ===

    @property
    def outcome(self) -> Fitted | Unfitted:
        return self._outcome

    @property
    def is_fitted(self) -> bool:
        return isinstance(self._outcome, Fitted)

    @property
    def failure(self) -> NumericalError | None:
        """The exception that stopped training, or None if fitted."""
        if isinstance(self._outcome, Unfitted):
            return self._outcome.reason
        return None

    @property
    def solution(self) -> LinearSolution | None:
        """Full fit diagnostics, or None if unfitted."""
        if isinstance(self._outcome, Fitted):
            return self._outcome.solution
        return None

    @property
    def n_features(self) -> int:
        """Number of features a prediction input must have."""
        return self._design.p

    @property
    def n_observations(self) -> int:
        return self._design.n

    # === Queries ===

    @property
    def weights(self) -> NDArray[np.floating[Any]] | None:
        """
        Read-only coefficient array of length p + 1, or None if unfitted.

        weights[0] is the intercept, weights[1:] the per-feature slopes.
        """
        solution = self.solution
        return solution.coefficients if solution is not None else None

    @property
    def residual_sum_of_squares(self) -> float | None:
        """Sum of squared training residuals, or None if unfitted."""
        solution = self.solution
        return solution.rss if solution is not None else None

    rss = residual_sum_of_squares

    # === Prediction ===

    def predict(self, x: ArrayLike) -> float | None:
        """
        Predict the label of one feature vector.

        Args:
            x: Sequence of exactly n_features numbers

        Returns:
            weights[0] + sum(weights[i] * x[i-1]), or None if the model
            is unfitted

        Raises:
            InvalidInputError: If x is absent, non-numeric, non-finite or
                not of length n_features. Raised for unfitted models too.
        """
        x_arr = self._check_features(x, ndim=1)
        weights = self.weights
        if weights is None:
            return None
        return float(weights[0] + x_arr @ weights[1:])

    def predict_many(self, rows: ArrayLike) -> NDArray[np.floating[Any]] | None:
        """
        Predict the labels of several feature vectors at once.

        Args:
            rows: Matrix of shape (m, n_features)

        Returns:
            Array of m predictions, or None if the model is unfitted

        Raises:
            InvalidInputError: Under the same conditions as predict()
        """
        X_new = self._check_features(rows, ndim=2)
        weights = self.weights
        if weights is None:
            return None
        return weights[0] + X_new @ weights[1:]

    def _check_features(self, x: ArrayLike, ndim: int) -> NDArray[np.floating[Any]]:
        p = self._design.p
        if x is None:
            raise InvalidInputError(
                f"Input for prediction is None; expected {p} features", expected=p
            )
        try:
            arr = np.asarray(x, dtype=np.float64)
        except (ValueError, TypeError) as e:
            raise InvalidInputError(
                f"Input for prediction is not numeric: {e}", expected=p
            ) from e

        if arr.ndim != ndim:
            raise InvalidInputError(
                f"Input for prediction must be {ndim}D, got {arr.ndim}D with shape {arr.shape}",
                expected=p,
            )
        width = arr.shape[-1]
        if width != p:
            raise InvalidInputError(
                f"Size of input data for prediction {width} should be {p}",
                expected=p,
                actual=width,
            )
        if not np.all(np.isfinite(arr)):
            raise InvalidInputError(
                "Input for prediction contains non-finite values", expected=p, actual=width
            )
        return arr

    # === Reporting ===

    def summary(self) -> str:
        if isinstance(self._outcome, Unfitted):
            return (
                "Linear Regression: training failed\n"
                f"Observations: {self._design.n}\n"
                f"Predictors: {self._design.p}\n"
                f"Reason: {self._outcome.message}"
            )
        return self._outcome.solution.summary()

    def __repr__(self) -> str:
        if isinstance(self._outcome, Unfitted):
            return (
                f"RegressionModel(n={self._design.n}, p={self._design.p}, "
                f"unfitted: {type(self._outcome.reason).__name__})"
            )
        return (
            f"RegressionModel(n={self._design.n}, p={self._design.p}, "
            f"rss={self.residual_sum_of_squares:.6g})"
        )


def _train(design: Design, solver: Any, stacklevel: int) -> Fitted | Unfitted:
    """
    Run the solver once; numerical failure becomes Unfitted.

    stacklevel is the depth of the public entry point's caller as seen
    from here, so the warning names the line that built the model.
    """
    try:
        result = solver.solve(design)
    except NumericalError as e:
        outcome = Unfitted(reason=e)
        warnings.warn(
            f"Multivariate linear regression training failed on "
            f"{design.n} observations with {design.p} features. {outcome.message}",
            RuntimeWarning,
            stacklevel=stacklevel,
        )
        return outcome
    return Fitted(solution=LinearSolution(result, design))


def fit(
    xt: ArrayLike,
    y: ArrayLike,
    *,
    solver: Any = None,
    feature_names: list[str] | None = None,
) -> RegressionModel:
    """
    Train a multivariate linear regression model.

    Same as RegressionModel(xt, y, ...), including where a training
    failure warning points.

    Example:
        from pymlr import fit

        model = fit(xt, y)
        if model.is_fitted:
            print(model.summary())
    """
    design = Design.from_arrays(xt, y, feature_names=feature_names)
    # _train <- _setup <- _from_design <- fit <- caller
    return RegressionModel._from_design(design, solver, stacklevel=5)
