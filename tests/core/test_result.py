"""
Tests for the Result[P] envelope.

Validates:
    - Generic payload types
    - Frozen immutability
    - Default and supplied warnings
"""

from dataclasses import FrozenInstanceError, dataclass

import pytest

from pymlr.core.result import Result


@dataclass(frozen=True)
class FakeParams:
    """Minimal payload for testing."""
    value: float


def _make_result(**overrides):
    kwargs = dict(
        params=FakeParams(value=42.0),
        info={"method": "qr"},
        timing={"total_seconds": 0.01},
        backend_name="cpu_qr",
    )
    kwargs.update(overrides)
    return Result(**kwargs)


class TestResultConstruction:

    def test_basic_creation(self):
        result = _make_result()
        assert result.params.value == 42.0
        assert result.info["method"] == "qr"
        assert result.timing["total_seconds"] == 0.01
        assert result.backend_name == "cpu_qr"

    def test_timing_none(self):
        assert _make_result(timing=None).timing is None

    def test_default_warnings_empty(self):
        assert _make_result().warnings == ()


class TestResultImmutability:

    def test_cannot_replace_params(self):
        result = _make_result()
        with pytest.raises(FrozenInstanceError):
            result.params = FakeParams(value=0.0)

    def test_cannot_replace_backend_name(self):
        result = _make_result()
        with pytest.raises(FrozenInstanceError):
            result.backend_name = "gpu"


class TestWarnings:

    def test_supplied_warnings_kept_in_order(self):
        notes = ("no residual degrees of freedom", "second note")
        assert _make_result(warnings=notes).warnings == notes
