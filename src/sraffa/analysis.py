"""Structural properties of an input-output system.

Commodity ``i`` is *basic* when it enters, directly or indirectly, into the
production of every commodity. A system whose commodities are all basic is
irreducible: its input graph is strongly connected, which is the condition
under which the Perron-Frobenius root, and hence the maximum rate of
profit, is well defined.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from sraffa.model import build_coefficient_matrix
from sraffa.solver.eigen import dominant_eigenvalue


def input_graph(input_matrix: ArrayLike) -> np.ndarray:
    """Adjacency matrix with an edge ``i -> j`` when industry ``j`` uses ``i``."""
    matrix = np.asarray(input_matrix, dtype=float)
    return matrix != 0


def reachability(input_matrix: ArrayLike) -> np.ndarray:
    """Reflexive-transitive closure of the input graph.

    ``reach[i, j]`` is True when commodity ``i`` enters, directly or
    through a chain of other industries, into the production of ``j``.
    """
    reach = input_graph(input_matrix).copy()
    if reach.ndim != 2 or reach.size == 0:
        return np.zeros((0, 0), dtype=bool)
    np.fill_diagonal(reach, True)
    # Warshall
    for k in range(reach.shape[0]):
        reach |= np.logical_and.outer(reach[:, k], reach[k, :])
    return reach


def classify_commodities(input_matrix: ArrayLike) -> list[bool]:
    """Basic (True) / non-basic (False) flag for every commodity."""
    reach = reachability(input_matrix)
    if reach.size == 0:
        return []
    return [bool(row.all()) for row in reach]


def basic_commodities(input_matrix: ArrayLike) -> list[int]:
    """Indices of the basic commodities."""
    return [i for i, basic in enumerate(classify_commodities(input_matrix)) if basic]


def is_irreducible(input_matrix: ArrayLike) -> bool:
    """True when every commodity is basic."""
    return all(classify_commodities(input_matrix))


def surplus_vector(input_matrix: ArrayLike, total_outputs: ArrayLike) -> np.ndarray:
    """Physical surplus ``X - M 1`` of each commodity."""
    matrix = np.asarray(input_matrix, dtype=float)
    outputs = np.asarray(total_outputs, dtype=float).reshape(-1)
    if outputs.size == 0:
        return np.zeros(0, dtype=float)
    return outputs - matrix.sum(axis=1)


def is_productive(
    input_matrix: ArrayLike,
    total_outputs: ArrayLike,
    *,
    max_iterations: int = 1000,
) -> bool:
    """True when the dominant eigenvalue of the coefficient matrix is below 1."""
    a = build_coefficient_matrix(input_matrix, total_outputs)
    return dominant_eigenvalue(a, max_iterations=max_iterations) < 1.0
