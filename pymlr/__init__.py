"""
PyMLR: multivariate linear regression by ordinary least squares.

Submodules:
    core: Exceptions, validation, result envelope, data sources, linear algebra
    regression: Least-squares solver and the RegressionModel
"""

__version__ = "0.1.0"

from pymlr.core import (
    DataSource,
    PyMLRError,
    ConfigurationError,
    DimensionError,
    InvalidInputError,
    NumericalError,
    SingularMatrixError,
    NumericalInstabilityError,
)
from pymlr.regression import RegressionModel, LeastSquaresSolver, fit

__all__ = [
    "__version__",
    "fit",
    "RegressionModel",
    "LeastSquaresSolver",
    "DataSource",
    "PyMLRError",
    "ConfigurationError",
    "DimensionError",
    "InvalidInputError",
    "NumericalError",
    "SingularMatrixError",
    "NumericalInstabilityError",
]
