"""
Core infrastructure for PyMLR.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    datasource: DataSource, the feature/label supplier
    compute: Timing, tolerances, linear algebra primitives
"""

from pymlr.core.result import Result
from pymlr.core.datasource import DataSource
from pymlr.core.exceptions import (
    PyMLRError,
    ConfigurationError,
    DimensionError,
    InvalidInputError,
    NumericalError,
    SingularMatrixError,
    NumericalInstabilityError,
)

__all__ = [
    "Result",
    "DataSource",
    # Exceptions
    "PyMLRError",
    "ConfigurationError",
    "DimensionError",
    "InvalidInputError",
    "NumericalError",
    "SingularMatrixError",
    "NumericalInstabilityError",
]
