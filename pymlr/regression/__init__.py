"""
Multivariate linear regression (ordinary least squares).

Public API:
    RegressionModel(xt, y) -> trained model (fitted or unfitted)
    fit(xt, y)             -> shorthand for RegressionModel

Training validates the inputs, builds the design matrix with an
intercept column and solves least squares by pivoted QR.

Example:
    >>> from pymlr.regression import fit
    >>> model = fit([[1.0], [2.0], [3.0], [4.0]], [2.1, 3.9, 6.1, 7.9])
    >>> model.weights.round(2).tolist()
    [0.1, 1.96]
    >>> round(model.predict([5.0]), 2)
    9.9
"""

from pymlr.regression.design import Design
from pymlr.regression.solution import LinearSolution, LinearParams
from pymlr.regression.solvers import LeastSquaresSolver
from pymlr.regression.model import RegressionModel, Fitted, Unfitted, fit

__all__ = [
    "fit",
    "RegressionModel",
    "Fitted",
    "Unfitted",
    "LeastSquaresSolver",
    "Design",
    "LinearSolution",
    "LinearParams",
]
