"""
Tests for the pivoted QR kernels.
"""

import numpy as np
import pytest

from pymlr.core.compute.linalg import condition_number, qr_pivoted, qr_solve
from pymlr.core.compute.tolerances import rank_tolerance
from pymlr.core.exceptions import SingularMatrixError


class TestQRPivoted:

    def test_reconstructs_permuted_matrix(self, rng):
        X = rng.standard_normal((20, 4)) * [1.0, 50.0, 0.02, 3.0]
        qr_result = qr_pivoted(X)
        np.testing.assert_allclose(
            qr_result.Q @ qr_result.R_unscaled, X[:, qr_result.pivot], rtol=1e-10, atol=1e-10
        )

    def test_factors_equilibrated_matrix(self, rng):
        X = rng.standard_normal((20, 3)) * [1e-6, 1.0, 1e6]
        qr_result = qr_pivoted(X)
        np.testing.assert_allclose(qr_result.scale, np.linalg.norm(X, axis=0))
        np.testing.assert_allclose(
            qr_result.Q @ qr_result.R, (X / qr_result.scale)[:, qr_result.pivot], atol=1e-12
        )

    def test_full_rank(self, rng):
        X = rng.standard_normal((20, 4))
        assert qr_pivoted(X).rank == 4

    def test_diagonal_non_increasing(self, rng):
        X = rng.standard_normal((20, 4)) * [1.0, 100.0, 0.01, 10.0]
        diag = np.abs(np.diag(qr_pivoted(X).R))
        assert np.all(diag[1:] <= diag[:-1] * (1 + 1e-12))

    @pytest.mark.parametrize("feature_scale", [1e-12, 1e-9, 1.0, 1e9])
    def test_rank_independent_of_feature_scale(self, feature_scale):
        x = np.arange(1.0, 6.0) * feature_scale
        X = np.column_stack([np.ones(5), x])
        assert qr_pivoted(X).rank == 2

    def test_rank_deficient(self, collinear_data):
        X, _ = collinear_data
        assert qr_pivoted(X, tol=1e-10).rank == 2

    def test_zero_column_is_rank_deficient(self):
        X = np.column_stack([np.ones(4), np.zeros(4)])
        qr_result = qr_pivoted(X)
        assert qr_result.rank == 1
        assert qr_result.scale[1] == 1.0

    def test_zero_matrix_has_rank_zero(self):
        assert qr_pivoted(np.zeros((5, 2))).rank == 0

    def test_default_tolerance_is_machine_precision(self, rng):
        qr_result = qr_pivoted(rng.standard_normal((7, 3)))
        assert qr_result.tol == 7 * np.finfo(np.float64).eps
        assert qr_result.tol == rank_tolerance(7, 3)

    def test_tolerance_recorded(self, rng):
        assert qr_pivoted(rng.standard_normal((5, 2)), tol=1e-9).tol == 1e-9


class TestQRSolve:

    def test_matches_lstsq(self, rng):
        X = np.column_stack([np.ones(50), rng.standard_normal((50, 3))])
        y = rng.standard_normal(50)
        beta = qr_solve(X, y)
        expected, *_ = np.linalg.lstsq(X, y, rcond=None)
        np.testing.assert_allclose(beta, expected, rtol=1e-10, atol=1e-12)

    def test_recovers_coefficients_in_original_order(self, rng):
        X = rng.standard_normal((30, 3)) * [0.01, 1.0, 100.0]
        beta_true = np.array([5.0, -1.0, 0.25])
        beta = qr_solve(X, X @ beta_true)
        np.testing.assert_allclose(beta, beta_true, rtol=1e-9)

    def test_tiny_feature_scale(self):
        x = np.arange(1.0, 6.0) * 1e-9
        X = np.column_stack([np.ones(5), x])
        beta = qr_solve(X, 1.0 + 2e9 * x)
        np.testing.assert_allclose(beta, [1.0, 2e9], rtol=1e-9)

    def test_reuses_precomputed_decomposition(self, rng):
        X = rng.standard_normal((10, 2))
        y = rng.standard_normal(10)
        qr_result = qr_pivoted(X)
        np.testing.assert_array_equal(qr_solve(X, y, qr_result=qr_result), qr_solve(X, y))

    def test_rank_deficient_raises(self, collinear_data):
        X, y = collinear_data
        with pytest.raises(SingularMatrixError, match="rank-deficient") as exc_info:
            qr_solve(X, y, tol=1e-10)
        assert exc_info.value.rank == 2
        assert exc_info.value.expected_rank == 3
        assert exc_info.value.matrix_name == 'X'


class TestConditionNumber:

    def test_identity(self):
        assert condition_number(np.eye(3)) == pytest.approx(1.0)

    def test_diagonal(self):
        assert condition_number(np.diag([10.0, 1.0, 0.1])) == pytest.approx(100.0)

    def test_singular_is_not_finite_or_huge(self):
        cond = condition_number(np.array([[1.0, 1.0], [0.0, 0.0]]))
        assert not np.isfinite(cond) or cond > 1e15
