"""Gaussian elimination with partial pivoting.

The solver works on a private copy of the augmented matrix ``[A | b]`` and
reports a singular system as ``None`` instead of raising, so callers can
branch on "no numeric solution" explicitly.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike

logger = logging.getLogger(__name__)

SINGULAR_TOLERANCE = 1e-10


def _augment(a: ArrayLike, b: ArrayLike) -> np.ndarray:
    """Build a fresh float copy of the augmented matrix ``[a | b]``."""
    matrix = np.array(a, dtype=float, copy=True)
    rhs = np.array(b, dtype=float, copy=True).reshape(-1)
    n = rhs.shape[0]
    if matrix.size == 0 and n == 0:
        return np.zeros((0, 1), dtype=float)
    if matrix.ndim != 2 or matrix.shape != (n, n):
        raise ValueError(
            f"Linear system requires an n x n matrix and a length-n vector, "
            f"got {matrix.shape} and ({n},)"
        )
    return np.column_stack([matrix, rhs])


def solve_linear_system(
    a: ArrayLike,
    b: ArrayLike,
    *,
    tolerance: float = SINGULAR_TOLERANCE,
) -> np.ndarray | None:
    """Solve ``a @ x = b`` by Gaussian elimination with partial pivoting.

    Args:
        a: Square coefficient matrix (n x n). Never modified.
        b: Right-hand side of length n. Never modified.
        tolerance: Pivot magnitude below which the system is singular.

    Returns:
        Solution vector of length n, or ``None`` when a pivot falls below
        ``tolerance``.

    Raises:
        ValueError: If the shapes of ``a`` and ``b`` do not match.
    """
    aug = _augment(a, b)
    n = aug.shape[0]

    for k in range(n):
        # First row holding the largest magnitude in column k.
        pivot_row = k + int(np.argmax(np.abs(aug[k:, k])))
        if pivot_row != k:
            aug[[k, pivot_row]] = aug[[pivot_row, k]]

        pivot = aug[k, k]
        if abs(pivot) < tolerance:
            logger.debug(f"Singular system: pivot {pivot:.3e} at column {k}")
            return None

        if k + 1 < n:
            factors = aug[k + 1 :, k] / pivot
            aug[k + 1 :, k:] -= np.outer(factors, aug[k, k:])

    x = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        resolved = float(aug[i, i + 1 : n] @ x[i + 1 :]) if i + 1 < n else 0.0
        x[i] = (aug[i, n] - resolved) / aug[i, i]

    return x
