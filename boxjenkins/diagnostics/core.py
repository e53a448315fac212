"""Core invariant checks for arrays flowing through the engine."""

from __future__ import annotations

import numpy as np


def is_finite(values: np.ndarray) -> bool:
    """
    Check whether every entry of an array is finite.

    Parameters
    ----------
    values:
        Array of any shape. Empty arrays count as finite.

    Returns
    -------
    bool
        True if no entry is NaN or infinite.
    """
    return bool(np.all(np.isfinite(np.asarray(values, dtype=float))))


def assert_finite(values: np.ndarray, name: str = "array") -> None:
    """
    Assert that an array contains only finite values.

    Parameters
    ----------
    values:
        Array of any shape.
    name:
        Name used in the error message.

    Raises
    ------
    ValueError
        If any entry is NaN or infinite.
    """
    values = np.asarray(values, dtype=float)
    if not is_finite(values):
        n_bad = int(np.size(values) - np.count_nonzero(np.isfinite(values)))
        raise ValueError(f"{name} contains {n_bad} non-finite value(s).")


def is_symmetric(mat: np.ndarray, atol: float = 1e-8) -> bool:
    """
    Check whether a square matrix is symmetric.

    Parameters
    ----------
    mat:
        Real matrix with shape (n, n).
    atol:
        Absolute tolerance, scaled by the largest entry of ``mat``.

    Returns
    -------
    bool
        True if ``mat`` equals its transpose within the tolerance.
    """
    mat = np.asarray(mat, dtype=float)
    if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
        return False
    if mat.size == 0:
        return True

    scale = max(float(np.max(np.abs(mat))), 1.0)
    return bool(np.max(np.abs(mat - mat.T)) <= atol * scale)


def assert_design_shape(design: np.ndarray, n_rows: int, n_columns: int) -> None:
    """
    Assert that a design matrix has the expected number of rows and columns.

    Parameters
    ----------
    design:
        Design matrix with shape (rows, columns).
    n_rows:
        Expected row count.
    n_columns:
        Expected column count, ``1 + q + Q + p + P + n_exog``.

    Raises
    ------
    ValueError
        If the shape differs.
    """
    design = np.asarray(design)
    if design.shape != (n_rows, n_columns):
        raise ValueError(
            f"Design matrix has shape {design.shape}, "
            f"expected ({n_rows}, {n_columns})."
        )
