"""
Ridge Regression Solver

Solves the regularized normal equations (XᵀX + λD)β = Xᵀy, where D is the
identity with the intercept entry zeroed so the intercept is never shrunk.
The system is solved by Gaussian elimination with partial pivoting.
"""

from typing import Sequence

import numpy as np

from pricemodel.core.constants import PIVOT_TOLERANCE
from pricemodel.exceptions import SingularMatrixError, ValidationError
from pricemodel.logging_config import get_logger

logger = get_logger(__name__)


def solve_linear_system(matrix, vector, tolerance: float = PIVOT_TOLERANCE) -> np.ndarray:
    """Solve ``matrix @ x = vector`` for a square system.

    At each column the row with the largest absolute entry is swapped into
    the pivot position before eliminating below it; back substitution then
    recovers x.

    Args:
        matrix: n x n coefficient matrix.
        vector: Right-hand side of length n.
        tolerance: Smallest acceptable pivot magnitude.

    Returns:
        Solution vector of length n.

    Raises:
        SingularMatrixError: If a pivot is smaller than ``tolerance``.
    """
    a = np.array(matrix, dtype=float)
    b = np.array(vector, dtype=float)
    n = a.shape[0]
    if a.shape != (n, n) or b.shape != (n,):
        raise ValidationError(f"Expected an n x n system, got {a.shape} and {b.shape}")

    augmented = np.hstack([a, b.reshape(-1, 1)])

    for i in range(n):
        max_row = i + int(np.argmax(np.abs(augmented[i:, i])))
        if max_row != i:
            augmented[[i, max_row]] = augmented[[max_row, i]]

        pivot = augmented[i, i]
        if abs(pivot) < tolerance:
            raise SingularMatrixError(
                "Singular matrix while solving regression.", column=i, pivot=float(pivot)
            )

        factors = augmented[i + 1:, i] / pivot
        augmented[i + 1:, i:] -= np.outer(factors, augmented[i, i:])

    result = np.zeros(n)
    for i in range(n - 1, -1, -1):
        remainder = augmented[i, n] - augmented[i, i + 1:n] @ result[i + 1:]
        result[i] = remainder / augmented[i, i]

    return result


def normal_equations(X, y, ridge_lambda: float):
    """XᵀX + λD and Xᵀy, with D leaving the intercept (column 0) unpenalized."""
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    xtx = X.T @ X
    xty = X.T @ y

    penalty = np.full(X.shape[1], float(ridge_lambda))
    if penalty.size:
        penalty[0] = 0.0
    xtx = xtx + np.diag(penalty)
    return xtx, xty


def fit_ridge(X, y: Sequence[float], ridge_lambda: float = 1.0) -> np.ndarray:
    """Fit ridge regression coefficients.

    Args:
        X: Design matrix (rows = observations, column 0 = intercept).
        y: Targets.
        ridge_lambda: Penalty strength, >= 0.

    Returns:
        Coefficients in feature order.

    Raises:
        ValidationError: On a negative lambda or mismatched shapes.
        SingularMatrixError: If the system cannot be solved.
    """
    if ridge_lambda < 0:
        raise ValidationError(
            f"Ridge lambda must be non-negative, got {ridge_lambda}",
            field="ridge_lambda",
            value=ridge_lambda,
        )
    X = np.atleast_2d(np.asarray(X, dtype=float))
    y = np.asarray(y, dtype=float)
    if X.shape[0] != y.shape[0]:
        raise ValidationError(f"X has {X.shape[0]} rows but y has {y.shape[0]} values")

    xtx, xty = normal_equations(X, y, ridge_lambda)
    coefficients = solve_linear_system(xtx, xty)
    logger.debug("Fitted %d coefficients on %d rows (lambda=%s)", len(coefficients), len(y), ridge_lambda)
    return coefficients
