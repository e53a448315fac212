"""Ordinary least squares via the normal equations.

The estimator solves ``(X'X) beta = X'y`` many times on small, sometimes
rank-deficient design matrices (error-lag columns are all zero until the
first residuals exist). A normal matrix is treated as singular when LAPACK
rejects it or reports it as ill-conditioned (``LinAlgWarning``), or when its
condition number exceeds ``max_condition``. In that case a
ridge penalty is added to every diagonal entry except the intercept's and the
solve is retried exactly once.

The penalty is relative: ``ridge * trace(X'X) / k``, so it scales with the
data instead of depending on its units.

References:
    - Golub & Van Loan (2013): Matrix Computations, 4th ed., ch. 5.3
    - Hoerl & Kennard (1970): "Ridge regression: biased estimation for
      nonorthogonal problems"
"""

from __future__ import annotations

import warnings
from typing import Callable

import numpy as np
import scipy.linalg

from ..diagnostics import is_debug_enabled, is_symmetric
from ..errors import SingularMatrixError
from ..logging import get_logger

logger = get_logger(__name__)

DEFAULT_RIDGE = 1e-8
DEFAULT_MAX_CONDITION = 1.0 / np.finfo(float).eps

# Cofactor expansion is O(k!); beyond this size use the LU path.
_MAX_COFACTOR_SIZE = 8


def ridge_penalize(gram: np.ndarray, ridge: float = DEFAULT_RIDGE) -> np.ndarray:
    """Return a copy of ``gram`` with a ridge penalty on the non-intercept diagonal.

    Args:
        gram: Square normal matrix ``X'X``, shape (k, k). Row/column 0 is the
            intercept and is left untouched.
        ridge: Penalty relative to the mean diagonal entry.

    Returns:
        Penalized copy of ``gram``.
    """
    gram = np.array(gram, dtype=float)
    k = gram.shape[0]
    if k <= 1:
        return gram

    scale = float(np.trace(gram)) / k
    if not np.isfinite(scale) or scale <= 0.0:
        scale = 1.0

    idx = np.arange(1, k)
    gram[idx, idx] += ridge * scale
    return gram


def _is_singular(gram: np.ndarray, max_condition: float) -> bool:
    if not np.all(np.isfinite(gram)):
        return True
    if gram.shape[0] == 0:
        return False
    cond = np.linalg.cond(gram)
    return not np.isfinite(cond) or cond > max_condition


def _attempt(op: Callable[[np.ndarray], np.ndarray], gram: np.ndarray) -> np.ndarray:
    """Run ``op`` with scipy's ill-conditioning warning raised as an error."""
    with warnings.catch_warnings():
        warnings.simplefilter("error", scipy.linalg.LinAlgWarning)
        return op(gram)


def _guarded(
    gram: np.ndarray,
    op: Callable[[np.ndarray], np.ndarray],
    ridge: float,
    max_condition: float,
) -> np.ndarray:
    """Run ``op`` on ``gram``, retrying once on a ridge-penalized copy."""
    if is_debug_enabled() and not is_symmetric(gram):
        raise ValueError("Normal matrix is not symmetric")

    if not _is_singular(gram, max_condition):
        try:
            return _attempt(op, gram)
        except (np.linalg.LinAlgError, scipy.linalg.LinAlgWarning):
            pass

    logger.debug(
        "Normal matrix of size %d is singular, retrying with ridge=%g",
        gram.shape[0],
        ridge,
    )
    penalized = ridge_penalize(gram, ridge)
    if _is_singular(penalized, max_condition):
        raise SingularMatrixError(
            f"Normal matrix of size {gram.shape[0]} is singular even after "
            f"adding a ridge penalty of {ridge:g}"
        )
    try:
        return _attempt(op, penalized)
    except (np.linalg.LinAlgError, scipy.linalg.LinAlgWarning) as exc:
        raise SingularMatrixError(
            f"Normal matrix of size {gram.shape[0]} could not be inverted "
            f"after adding a ridge penalty of {ridge:g}: {exc}"
        ) from exc


def cofactor_determinant(mat: np.ndarray) -> float:
    """Determinant by Laplace (cofactor) expansion along the first row.

    Only sensible for small matrices; used to cross-check the LU path.

    Args:
        mat: Square matrix, shape (k, k) with k <= 8.

    Returns:
        The determinant. The determinant of a 0x0 matrix is 1.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        raise ValueError(f"mat must be square, got shape {mat.shape}")
    k = mat.shape[0]
    if k > _MAX_COFACTOR_SIZE:
        raise ValueError(
            f"Cofactor expansion is limited to {_MAX_COFACTOR_SIZE}x"
            f"{_MAX_COFACTOR_SIZE} matrices, got {k}x{k}"
        )
    if k == 0:
        return 1.0
    if k == 1:
        return float(mat[0, 0])
    if k == 2:
        return float(mat[0, 0] * mat[1, 1] - mat[0, 1] * mat[1, 0])

    det = 0.0
    for j in range(k):
        if mat[0, j] == 0.0:
            continue
        minor = np.delete(mat[1:], j, axis=1)
        det += (-1) ** j * mat[0, j] * cofactor_determinant(minor)
    return det


def cofactor_inverse(mat: np.ndarray) -> np.ndarray:
    """Inverse via the adjugate: ``adj(A) / det(A)``.

    Args:
        mat: Square matrix, shape (k, k) with k <= 8.

    Returns:
        The inverse matrix.

    Raises:
        numpy.linalg.LinAlgError: If the determinant is zero.
    """
    mat = np.asarray(mat, dtype=float)
    det = cofactor_determinant(mat)
    if det == 0.0 or not np.isfinite(det):
        raise np.linalg.LinAlgError("Singular matrix")

    k = mat.shape[0]
    adjugate = np.zeros((k, k))
    for i in range(k):
        for j in range(k):
            minor = np.delete(np.delete(mat, i, axis=0), j, axis=1)
            # Transposed placement turns the cofactor matrix into the adjugate.
            adjugate[j, i] = (-1) ** (i + j) * cofactor_determinant(minor)
    return adjugate / det


def invert(
    gram: np.ndarray,
    ridge: float = DEFAULT_RIDGE,
    max_condition: float = DEFAULT_MAX_CONDITION,
    method: str = "lu",
) -> np.ndarray:
    """Invert a normal matrix, retrying once with a ridge penalty if singular.

    Args:
        gram: Square normal matrix ``X'X``, shape (k, k).
        ridge: Relative ridge penalty for the retry.
        max_condition: Condition number above which the matrix is treated
            as singular.
        method: "lu" (LAPACK via scipy, default) or "cofactor" (adjugate
            expansion, small matrices only).

    Returns:
        The inverse, shape (k, k).

    Raises:
        ValueError: If ``gram`` is not square or ``method`` is unknown.
        SingularMatrixError: If the matrix is singular even after the retry.
    """
    gram = np.asarray(gram, dtype=float)
    if gram.ndim != 2 or gram.shape[0] != gram.shape[1]:
        raise ValueError(f"gram must be square, got shape {gram.shape}")

    if method == "lu":
        op = scipy.linalg.inv
    elif method == "cofactor":
        op = cofactor_inverse
    else:
        raise ValueError(f"method must be 'lu' or 'cofactor', got {method}")

    return _guarded(gram, op, ridge, max_condition)


def solve_gram(
    gram: np.ndarray,
    moment: np.ndarray,
    ridge: float = DEFAULT_RIDGE,
    max_condition: float = DEFAULT_MAX_CONDITION,
) -> np.ndarray:
    """Solve ``gram @ beta = moment`` for precomputed ``X'X`` and ``X'y``.

    Args:
        gram: Normal matrix ``X'X``, shape (k, k).
        moment: Cross-moment ``X'y``, shape (k,).
        ridge: Relative ridge penalty for the retry.
        max_condition: Condition number above which the matrix is treated
            as singular.

    Returns:
        Coefficient vector, shape (k,).
    """
    gram = np.asarray(gram, dtype=float)
    moment = np.asarray(moment, dtype=float)
    if gram.shape[0] == 0:
        return np.zeros(0)

    return _guarded(
        gram,
        lambda g: scipy.linalg.solve(g, moment, check_finite=False),
        ridge,
        max_condition,
    )


def solve_normal_equations(
    X: np.ndarray,
    y: np.ndarray,
    ridge: float = DEFAULT_RIDGE,
    max_condition: float = DEFAULT_MAX_CONDITION,
) -> np.ndarray:
    """Least-squares coefficients ``(X'X)^-1 X'y``.

    Args:
        X: Design matrix, shape (n, k). Column 0 is the intercept.
        y: Target vector, shape (n,).
        ridge: Relative ridge penalty used if ``X'X`` is singular.
        max_condition: Condition number above which ``X'X`` is treated as
            singular.

    Returns:
        Coefficient vector, shape (k,).

    Raises:
        ValueError: If the shapes do not line up.
        SingularMatrixError: If ``X'X`` is singular even after the retry.

    Example:
        >>> X = np.column_stack([np.ones(4), np.arange(4.0)])
        >>> solve_normal_equations(X, 1.0 + 2.0 * np.arange(4.0))
        array([1., 2.])
    """
    X = np.asarray(X, dtype=float)
    y = np.asarray(y, dtype=float)
    if X.ndim != 2:
        raise ValueError(f"X must be 2D array, got shape {X.shape}")
    if y.ndim != 1 or len(y) != X.shape[0]:
        raise ValueError(
            f"y must be 1D with {X.shape[0]} entries, got shape {y.shape}"
        )

    return solve_gram(X.T @ X, X.T @ y, ridge=ridge, max_condition=max_condition)
