"""
Truncation filters for candidate binomials.

A binomial x^{v+} - x^{v-} only matters to a truncated Gröbner basis of the
program {A z = b, 0 <= z <= u} if both of its monomials may appear in a
feasible solution. Each Truncator decides this with a different amount of
work:

  - "simple":    degree bounds  A_r v+ <= b_r, A_r v- <= b_r on the rows r
                 of A without negative entries, |v_i| <= u_i
  - "lp":        LP relaxation of both fibers is non-empty
  - "ip":        both fibers contain an integer point
  - "none":      keep every binomial (full Gröbner basis)
  - "heuristic": "simple" when all data is non-negative, otherwise "lp"

A row without negative entries bounds every monomial of a feasible point,
so the "simple" test never rejects a binomial the models would keep. On
non-negative data every row qualifies and the test is close to exact.
"""

from typing import Callable, Dict, List

import numpy as np

from ipgbs.core.matrix_types import IntMatrix, IntVector, UNBOUNDED, negative_part, positive_part
from ipgbs.solver.lp_solver import is_fiber_feasible


TRUNCATION_TYPES: List[str] = ["simple", "lp", "ip", "none", "heuristic"]


def simple_truncation(v: IntVector, A: IntMatrix, b: IntVector, u: IntVector) -> bool:
    """
    True iff v passes the degree bounds of Thomas and Weismantel.

    Degree bounds are only taken on rows of A without negative entries.

    Example:
        >>> A = np.array([[2, 3]]); b = np.array([4]); u = np.array([1, 1])
        >>> simple_truncation(np.array([1, -1]), A, b, u)
        True
        >>> simple_truncation(np.array([2, -1]), A, b, u)
        False
    """
    rows = np.all(A >= 0, axis=1)
    head = A[rows] @ positive_part(v)
    tail = A[rows] @ negative_part(v)
    if np.any(head > b[rows]) or np.any(tail > b[rows]):
        return False
    bounded = u != UNBOUNDED
    return bool(np.all(np.abs(v[bounded]) <= u[bounded]))


def lp_truncation(v: IntVector, A: IntMatrix, b: IntVector, u: IntVector) -> bool:
    return _model_truncation(v, A, b, u, integer=False)


def ip_truncation(v: IntVector, A: IntMatrix, b: IntVector, u: IntVector) -> bool:
    return _model_truncation(v, A, b, u, integer=True)


def no_truncation(v: IntVector, A: IntMatrix, b: IntVector, u: IntVector) -> bool:
    return True


def _model_truncation(v, A, b, u, integer: bool) -> bool:
    if not simple_truncation(v, A, b, u):
        # Degree bounds on non-negative rows are necessary for both models
        return False
    return (is_fiber_feasible(A, b, u, positive_part(v), integer=integer)
            and is_fiber_feasible(A, b, u, negative_part(v), integer=integer))


_STRATEGIES: Dict[str, Callable[..., bool]] = {
    "simple": simple_truncation,
    "lp": lp_truncation,
    "ip": ip_truncation,
    "none": no_truncation,
}


class Truncator:
    """
    Feasibility filter bound to the data of one normalized program.

    Args:
        A, b, u: Normalized program data
        truncation_type: One of TRUNCATION_TYPES

    Raises:
        ValueError: If truncation_type is unknown
    """

    def __init__(self, A: IntMatrix, b: IntVector, u: IntVector, truncation_type: str = "heuristic"):
        if truncation_type not in TRUNCATION_TYPES:
            raise ValueError(
                f"Unknown truncation type: {truncation_type}. Expected one of {TRUNCATION_TYPES}"
            )
        self.A = A
        self.b = b
        self.u = u
        if truncation_type == "heuristic":
            truncation_type = "simple" if is_nonnegative_data(A, b) else "lp"
        self.truncation_type = truncation_type
        self._check = _STRATEGIES[truncation_type]

    def __call__(self, v: IntVector) -> bool:
        return self._check(v, self.A, self.b, self.u)


def is_nonnegative_data(A: IntMatrix, b: IntVector) -> bool:
    return bool(np.all(A >= 0) and np.all(b >= 0))
