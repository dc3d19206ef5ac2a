"""
Regression Design.

Design takes the training features and labels, validates them and builds
the design matrix: the feature matrix with a leading column of ones for
the intercept. Column 0 of X is always the constant, so coefficient 0 is
always the intercept.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import DimensionError
from pymlr.core.validation import (
    check_array,
    check_finite,
    check_2d,
    check_1d,
    check_consistent_length,
    check_min_samples,
)


@dataclass(frozen=True)
class Design:
    """
    Regression design matrix specification.

    Immutable after construction; all arrays are read-only copies of the
    caller's data.

    Construction:
        Design.from_arrays(xt, y)                         # feature rows + labels
        Design.from_datasource(ds, y='target')            # X = all other columns
        Design.from_datasource(ds, x=['a', 'b'], y='c')   # X = specified columns
        Design.from_datasource(ds)                        # Uses ds['X'] and ds['y']
    """
    _X: NDArray[np.floating[Any]]
    _y: NDArray[np.floating[Any]]
    _n: int
    _p: int
    _feature_names: tuple[str, ...]

    @classmethod
    def from_arrays(
        cls,
        xt: ArrayLike,
        y: ArrayLike,
        *,
        feature_names: list[str] | None = None,
    ) -> Design:
        """
        Build Design from a feature matrix and a label vector.

        Args:
            xt: Feature rows (n x p). A flat sequence is one feature column.
            y: Labels (n,)
            feature_names: Optional names for the p feature columns

        Raises:
            ConfigurationError: If xt or y is empty, non-numeric or non-finite
            DimensionError: If shapes are wrong or lengths differ
        """
        X = check_array(xt, 'xt')
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        check_2d(X, 'xt')
        check_min_samples(X, 1, 'xt')

        y_arr = check_array(y, 'y')
        if y_arr.ndim == 2 and y_arr.shape[1] == 1:
            y_arr = y_arr.ravel()
        check_1d(y_arr, 'y')
        check_min_samples(y_arr, 1, 'y')

        check_consistent_length(X, y_arr, names=('xt', 'y'))
        check_finite(X, 'xt')
        check_finite(y_arr, 'y')

        n, p = X.shape
        if feature_names is None:
            names = tuple(f'x{i}' for i in range(p))
        else:
            names = tuple(str(name) for name in feature_names)
            if len(names) != p:
                raise DimensionError(
                    f"feature_names: got {len(names)} names for {p} feature columns"
                )

        design_matrix = np.column_stack([np.ones(n), X])
        design_matrix.setflags(write=False)
        y_arr.setflags(write=False)

        return cls(_X=design_matrix, _y=y_arr, _n=n, _p=p, _feature_names=names)

    @classmethod
    def from_datasource(
        cls,
        source: DataSource,
        *,
        x: str | list[str] | None = None,
        y: str | None = None,
    ) -> Design:
        """
        Build Design from DataSource.

        Args:
            source: The DataSource
            x: Predictor column(s). If None and source has 'X', uses that.
               If None and y is specified, uses all columns except y.
            y: Response column. If None, uses 'y' from source.

        Returns:
            Design ready for regression
        """
        if y is not None:
            y_arr = source[y]
        elif 'y' in source:
            y_arr = source['y']
        else:
            raise KeyError("Must specify y or DataSource must have 'y'")

        names: list[str] | None = None
        if x is not None:
            names = [x] if isinstance(x, str) else list(x)
            X_arr = _get_columns(source, names)
        elif 'X' in source:
            X_arr = source['X']
        elif y is not None:
            names = sorted(k for k in source.keys() if k != y)
            if not names:
                raise KeyError("No predictor columns available")
            X_arr = _get_columns(source, names)
        else:
            raise KeyError("Must specify x or DataSource must have 'X'")

        return cls.from_arrays(X_arr, y_arr, feature_names=names)

    # === Properties ===

    @property
    def X(self) -> NDArray[np.floating[Any]]:
        """Design matrix (n x (p+1)), column 0 is the intercept."""
        return self._X

    @property
    def features(self) -> NDArray[np.floating[Any]]:
        """Feature matrix without the intercept column (n x p)."""
        return self._X[:, 1:]

    @property
    def y(self) -> NDArray[np.floating[Any]]:
        """Label vector (n,)."""
        return self._y

    @property
    def n(self) -> int:
        """Number of observations."""
        return self._n

    @property
    def p(self) -> int:
        """Number of predictors (excluding the intercept)."""
        return self._p

    @property
    def n_coef(self) -> int:
        """Number of coefficients, intercept included."""
        return self._p + 1

    @property
    def feature_names(self) -> tuple[str, ...]:
        return self._feature_names

    @property
    def coef_names(self) -> tuple[str, ...]:
        return ('Intercept',) + self._feature_names


def _get_columns(source: DataSource, names: list[str]) -> NDArray:
    """Stack multiple columns from DataSource into a matrix."""
    arrays = []
    for name in names:
        arr = np.asarray(source[name], dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(-1, 1)
        arrays.append(arr)
    return np.hstack(arrays)
