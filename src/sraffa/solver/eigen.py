"""Dominant eigenvalue estimation by power iteration.

For a non-negative irreducible matrix the iteration converges to the
Perron-Frobenius root. The input is not checked for either property; for
other matrices the routine returns whatever the iteration settles on.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_NORM_FLOOR = 1e-12


class PowerIterationResult(BaseModel):
    """Outcome of one power-iteration run.

    Attributes:
        eigenvalue: Rayleigh quotient of the final unit vector
        eigenvector: Final unit-norm iterate
        iterations: Number of matrix-vector products performed
        converged: True when the early-exit test fired, or when the
            matrix annihilated the iterate
    """

    eigenvalue: float
    eigenvector: np.ndarray
    iterations: int
    converged: bool

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)


def _rayleigh(a: np.ndarray, v: np.ndarray) -> float:
    # v is unit-norm, so the denominator is 1.
    return float(v @ (a @ v))


def power_iteration(
    a: ArrayLike,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    norm_floor: float = DEFAULT_NORM_FLOOR,
    convergence_tolerance: float | None = None,
) -> PowerIterationResult:
    """Run power iteration on a square matrix.

    Starts from the uniform unit vector ``1/sqrt(n)``. Each step forms
    ``w = A v`` and normalises it. If ``|w|`` drops below ``norm_floor`` the
    matrix annihilates the iterate and the eigenvalue is reported as 0.

    Args:
        a: Square matrix (n x n). Never modified.
        max_iterations: Iteration ceiling.
        norm_floor: Norm below which the iterate is considered annihilated.
        convergence_tolerance: When set, stop as soon as two successive
            Rayleigh estimates differ by less than this value. ``None`` runs
            the full ``max_iterations`` budget.

    Returns:
        PowerIterationResult with the eigenvalue estimate and final iterate.
    """
    matrix = np.array(a, dtype=float, copy=True)
    if matrix.size == 0:
        return PowerIterationResult(
            eigenvalue=0.0,
            eigenvector=np.zeros(0, dtype=float),
            iterations=0,
            converged=True,
        )
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Power iteration requires a square matrix, got {matrix.shape}")

    n = matrix.shape[0]
    v = np.full(n, 1.0 / np.sqrt(n), dtype=float)
    previous: float | None = None

    for step in range(1, max_iterations + 1):
        w = matrix @ v
        norm = float(np.sqrt(w @ w))
        if norm < norm_floor:
            logger.debug(f"Power iteration annihilated at step {step} (norm={norm:.3e})")
            return PowerIterationResult(
                eigenvalue=0.0, eigenvector=v, iterations=step, converged=True
            )
        v = w / norm

        if convergence_tolerance is not None:
            estimate = _rayleigh(matrix, v)
            if previous is not None and abs(estimate - previous) < convergence_tolerance:
                return PowerIterationResult(
                    eigenvalue=estimate, eigenvector=v, iterations=step, converged=True
                )
            previous = estimate

    return PowerIterationResult(
        eigenvalue=_rayleigh(matrix, v),
        eigenvector=v,
        iterations=max_iterations,
        converged=False,
    )


def dominant_eigenvalue(
    a: ArrayLike,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    norm_floor: float = DEFAULT_NORM_FLOOR,
    convergence_tolerance: float | None = None,
) -> float:
    """Estimate the dominant (Perron-Frobenius) eigenvalue of ``a``.

    Returns 0 for an empty matrix and for matrices that annihilate the
    iterate (e.g. the zero matrix).
    """
    return power_iteration(
        a,
        max_iterations=max_iterations,
        norm_floor=norm_floor,
        convergence_tolerance=convergence_tolerance,
    ).eigenvalue
