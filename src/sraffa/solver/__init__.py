"""Dense linear-algebra kernels used by the price model."""

from sraffa.solver.eigen import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_NORM_FLOOR,
    PowerIterationResult,
    dominant_eigenvalue,
    power_iteration,
)
from sraffa.solver.linear import SINGULAR_TOLERANCE, solve_linear_system

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_NORM_FLOOR",
    "SINGULAR_TOLERANCE",
    "PowerIterationResult",
    "dominant_eigenvalue",
    "power_iteration",
    "solve_linear_system",
]
