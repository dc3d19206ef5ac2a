"""
Exception hierarchy for PyMLR.

All exceptions inherit from PyMLRError to allow catching any
library-specific error.

Three families, with different propagation rules:
    - ConfigurationError: structurally invalid training data or settings.
      Raised immediately, before any numerical work.
    - NumericalError: the decomposition could not produce a stable
      solution. Raised by solvers; RegressionModel absorbs it into an
      unfitted state.
    - InvalidInputError: a prediction call received a bad feature vector.
      Always raised.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyMLRError(Exception):
    """Base exception for all PyMLR errors."""
    pass


class ConfigurationError(PyMLRError):
    """
    Training data or solver settings are structurally invalid.

    Raised when user-provided inputs fail validation checks (empty
    sequences, non-numeric data, non-finite values, bad tolerances).
    """
    pass


class DimensionError(ConfigurationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class InvalidInputError(PyMLRError):
    """
    Prediction input violates the model's contract.

    Raised when predict() receives an absent, non-numeric or wrongly
    sized feature vector. This is a caller error, distinct from asking
    an unfitted model for a prediction.

    Attributes:
        expected: Expected number of features, if known
        actual: Number of features received, if known
    """

    def __init__(
        self,
        message: str,
        expected: int | None = None,
        actual: int | None = None
    ):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class NumericalError(PyMLRError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Raised when the design matrix is numerically rank-deficient, either
    because its columns are linearly dependent or because there are
    fewer observations than coefficients.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        condition_number: Estimated condition number, if available
        rank: Numerical rank, if computed
        expected_rank: Expected rank (number of coefficients)
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        condition_number: float | None = None,
        rank: int | None = None,
        expected_rank: int | None = None
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.condition_number = condition_number
        self.rank = rank
        self.expected_rank = expected_rank


class NumericalInstabilityError(NumericalError):
    """
    Solution is numerically unreliable.

    Raised when the design matrix is full rank but so ill-conditioned
    that the coefficients cannot be trusted, or when intermediate values
    overflow to Inf/NaN.

    Attributes:
        condition_number: Estimated condition number, if available
        threshold: The condition-number threshold that was exceeded
    """

    def __init__(
        self,
        message: str,
        condition_number: float | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.condition_number = condition_number
        self.threshold = threshold
