"""
Core matrix and vector types for the Gröbner basis engine.

All integer data (constraint matrices, right-hand sides, bounds, binomials,
monomials) is carried as numpy arrays with dtype=np.int64. Cost matrices may
be real valued and are carried as dtype=float.

IntVector: shape (n,), dtype int64
IntMatrix: shape (m, n), dtype int64
CostMatrix: shape (k, n), dtype float
"""

from typing import TypeAlias

import numpy as np


IntVector: TypeAlias = np.ndarray   # shape: (n,), dtype: int64
IntMatrix: TypeAlias = np.ndarray   # shape: (m, n), dtype: int64
CostMatrix: TypeAlias = np.ndarray  # shape: (k, n), dtype: float

# Upper bound used for variables without an explicit bound (slacks)
UNBOUNDED = np.iinfo(np.int64).max

EPSILON = 0.0001


def is_zero_vector(v: IntVector) -> bool:
    return not np.any(v)


def positive_part(v: IntVector) -> IntVector:
    """Exponent vector of the leading term: max(v, 0) coordinate-wise."""
    return np.maximum(v, 0)


def negative_part(v: IntVector) -> IntVector:
    """Exponent vector of the trailing term: max(-v, 0) coordinate-wise."""
    return np.maximum(-v, 0)


def print_matrix(matrix: np.ndarray) -> None:
    """
    Print a small integer matrix for debugging, one row per line.

    Example:
        >>> print_matrix(np.array([[1, 0], [0, 1]]))
        1 0
        0 1
    """
    assert matrix.ndim == 2, f"Matrix must be 2D, got {matrix.ndim}D"

    for row in matrix:
        print(' '.join(str(int(val)) for val in row))
