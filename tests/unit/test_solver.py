"""
Unit tests for the ridge regression solver.
"""

import numpy as np
import pytest

from pricemodel.exceptions import SingularMatrixError, ValidationError
from pricemodel.ml.solver import fit_ridge, normal_equations, solve_linear_system


class TestSolveLinearSystem:
    """Tests for solve_linear_system function."""

    def test_matches_numpy(self):
        rng = np.random.default_rng(0)
        a = rng.normal(size=(6, 6))
        matrix = a.T @ a + np.eye(6)
        vector = rng.normal(size=6)
        np.testing.assert_allclose(
            solve_linear_system(matrix, vector), np.linalg.solve(matrix, vector), atol=1e-9
        )

    def test_needs_pivoting(self):
        # Zero in the first pivot position
        result = solve_linear_system([[0.0, 1.0], [1.0, 0.0]], [2.0, 3.0])
        np.testing.assert_allclose(result, [3.0, 2.0])

    def test_singular(self):
        with pytest.raises(SingularMatrixError) as exc_info:
            solve_linear_system([[1.0, 2.0], [2.0, 4.0]], [1.0, 2.0])
        assert exc_info.value.column == 1

    def test_not_square(self):
        with pytest.raises(ValidationError):
            solve_linear_system([[1.0, 2.0]], [1.0])


class TestNormalEquations:
    """Tests for normal_equations function."""

    def test_intercept_unpenalized(self):
        X = np.array([[1.0, 2.0], [1.0, 3.0]])
        xtx, xty = normal_equations(X, [1.0, 2.0], ridge_lambda=5.0)
        plain = X.T @ X
        assert xtx[0, 0] == plain[0, 0]
        assert xtx[1, 1] == plain[1, 1] + 5.0
        assert xtx[0, 1] == plain[0, 1]
        np.testing.assert_allclose(xty, [3.0, 8.0])


class TestFitRidge:
    """Tests for fit_ridge function."""

    def test_recovers_coefficients_without_penalty(self):
        rng = np.random.default_rng(1)
        X = np.column_stack([np.ones(40), rng.normal(size=40), rng.normal(size=40)])
        beta = np.array([12.0, 0.3, -0.7])
        coefficients = fit_ridge(X, X @ beta, ridge_lambda=0.0)
        np.testing.assert_allclose(coefficients, beta, atol=1e-6)

    def test_intercept_only_is_mean(self):
        X = np.ones((5, 1))
        y = [1.0, 2.0, 3.0, 4.0, 5.0]
        coefficients = fit_ridge(X, y, ridge_lambda=100.0)
        assert coefficients[0] == pytest.approx(3.0)

    def test_penalty_shrinks_slopes(self):
        rng = np.random.default_rng(2)
        X = np.column_stack([np.ones(30), rng.normal(size=30)])
        y = 5.0 + 2.0 * X[:, 1] + rng.normal(scale=0.1, size=30)
        loose = fit_ridge(X, y, ridge_lambda=0.0)
        tight = fit_ridge(X, y, ridge_lambda=50.0)
        assert abs(tight[1]) < abs(loose[1])

    def test_penalty_handles_collinear_columns(self):
        x = np.arange(10, dtype=float)
        X = np.column_stack([np.ones(10), x, 2 * x])
        coefficients = fit_ridge(X, 1.0 + x, ridge_lambda=1.0)
        assert np.all(np.isfinite(coefficients))

    def test_collinear_without_penalty_is_singular(self):
        x = np.arange(10, dtype=float)
        X = np.column_stack([np.ones(10), x, 2 * x])
        with pytest.raises(SingularMatrixError):
            fit_ridge(X, 1.0 + x, ridge_lambda=0.0)

    def test_negative_lambda(self):
        with pytest.raises(ValidationError):
            fit_ridge(np.ones((3, 1)), [1.0, 2.0, 3.0], ridge_lambda=-1.0)

    def test_shape_mismatch(self):
        with pytest.raises(ValidationError):
            fit_ridge(np.ones((3, 1)), [1.0, 2.0], ridge_lambda=1.0)
