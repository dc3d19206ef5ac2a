"""
Tests for PyMLR exception hierarchy.

Validates:
    - Inheritance chain (all exceptions catchable via PyMLRError)
    - ConfigurationError, InvalidInputError and NumericalError are
      separate families
    - Diagnostic attributes and their None defaults
"""

import pytest

from pymlr.core.exceptions import (
    ConfigurationError,
    DimensionError,
    InvalidInputError,
    NumericalError,
    NumericalInstabilityError,
    PyMLRError,
    SingularMatrixError,
)


# ═══════════════════════════════════════════════════════════════════════
# Inheritance hierarchy
# ═══════════════════════════════════════════════════════════════════════


class TestInheritance:
    """Every exception is catchable via PyMLRError."""

    @pytest.mark.parametrize("exc_type", [
        ConfigurationError,
        DimensionError,
        InvalidInputError,
        NumericalError,
        SingularMatrixError,
        NumericalInstabilityError,
    ])
    def test_is_pymlr_error(self, exc_type):
        with pytest.raises(PyMLRError):
            raise exc_type("failure")

    def test_dimension_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            raise DimensionError("wrong shape")

    def test_singular_matrix_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise SingularMatrixError("singular")

    def test_instability_error_is_numerical_error(self):
        with pytest.raises(NumericalError):
            raise NumericalInstabilityError("ill-conditioned")

    def test_invalid_input_is_not_configuration_error(self):
        """Prediction misuse is not a training-data problem."""
        err = InvalidInputError("bad width")
        assert not isinstance(err, ConfigurationError)
        assert not isinstance(err, NumericalError)

    def test_configuration_error_is_not_numerical_error(self):
        assert not isinstance(ConfigurationError("empty"), NumericalError)


# ═══════════════════════════════════════════════════════════════════════
# Diagnostic attributes
# ═══════════════════════════════════════════════════════════════════════


class TestSingularMatrixError:
    """SingularMatrixError carries matrix diagnostic attributes."""

    def test_all_attributes(self):
        err = SingularMatrixError(
            "X is rank-deficient",
            matrix_name="X",
            condition_number=1e18,
            rank=2,
            expected_rank=3,
        )
        assert str(err) == "X is rank-deficient"
        assert err.matrix_name == "X"
        assert err.condition_number == 1e18
        assert err.rank == 2
        assert err.expected_rank == 3

    def test_defaults_are_none(self):
        err = SingularMatrixError("singular")
        assert err.matrix_name is None
        assert err.condition_number is None
        assert err.rank is None
        assert err.expected_rank is None


class TestNumericalInstabilityError:

    def test_all_attributes(self):
        err = NumericalInstabilityError(
            "ill-conditioned", condition_number=1e13, threshold=1e12
        )
        assert str(err) == "ill-conditioned"
        assert err.condition_number == 1e13
        assert err.threshold == 1e12

    def test_defaults_are_none(self):
        err = NumericalInstabilityError("overflow")
        assert err.condition_number is None
        assert err.threshold is None


class TestInvalidInputError:

    def test_all_attributes(self):
        err = InvalidInputError("wrong width", expected=1, actual=2)
        assert err.expected == 1
        assert err.actual == 2

    def test_catchable_with_attributes(self):
        with pytest.raises(InvalidInputError) as exc_info:
            raise InvalidInputError("wrong width", expected=3)
        assert exc_info.value.expected == 3
        assert exc_info.value.actual is None
