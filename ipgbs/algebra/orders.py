"""
Monomial orders defined by a cost matrix.

A monomial x^a is compared to x^b by the rows of the cost matrix in turn:
the first row r with r·a != r·b decides. Complete ties are broken by the
rows of -I, so that x^a > x^b iff the first non-zero entry of a - b is
negative. This makes the comparison total on distinct monomials.

For the order to be a term order (1 is the smallest monomial), the first
row must be strictly positive. When it is not, a multiple of a strictly
positive vector d of the row span of the constraint matrix is added to it.
Since d·v = 0 for every lattice vector v (A v = 0), comparisons of lattice
vectors are unchanged.
"""

from typing import Optional

import numpy as np

from ipgbs.core.matrix_types import EPSILON, CostMatrix, IntMatrix, IntVector
from ipgbs.solver.lp_solver import positive_row_span


class MonomialOrder:
    """
    Cost-matrix monomial order with -I tiebreaking.

    Args:
        cost: Cost matrix, shape (k, n); row 0 is the main (minimized) objective
        A: Constraint matrix whose row span is used to positivize row 0.
           If None, row 0 is used as given.

    Example:
        >>> order = MonomialOrder(np.array([[1.0, 2.0]]))
        >>> order.cmp(np.array([0, 1]))
        1
        >>> order.orientate(np.array([1, -1]))
        array([-1,  1])
    """

    def __init__(self, cost: CostMatrix, A: Optional[IntMatrix] = None):
        cost = np.array(cost, dtype=float)
        if cost.ndim == 1:
            cost = cost.reshape(1, -1)
        if A is not None and np.any(cost[0] <= 0):
            d = positive_row_span(A)
            lam = 1.0 + np.max(-cost[0] / d)
            cost[0] = cost[0] + lam * d
        self.cost_matrix = cost

    @property
    def num_variables(self) -> int:
        return self.cost_matrix.shape[1]

    def order_cost(self, v: IntVector) -> float:
        """Weight of v by the first row of the cost matrix."""
        return float(self.cost_matrix[0] @ v)

    def cmp(self, v: IntVector) -> int:
        """
        Sign of the difference vector v = a - b under the order.

        Returns:
            1 if x^a > x^b, -1 if x^a < x^b, 0 iff v is zero
        """
        for row in self.cost_matrix:
            s = float(row @ v)
            if s > EPSILON:
                return 1
            if s < -EPSILON:
                return -1
        nonzero = np.flatnonzero(v)
        if nonzero.size == 0:
            return 0
        return 1 if v[nonzero[0]] < 0 else -1

    def cmp_monomials(self, a: IntVector, b: IntVector) -> int:
        return self.cmp(np.asarray(a, dtype=np.int64) - np.asarray(b, dtype=np.int64))

    def lt_monomials(self, a: IntVector, b: IntVector) -> bool:
        return self.cmp_monomials(a, b) < 0

    def is_inverted(self, v: IntVector) -> bool:
        """True iff the trailing term of v is larger than its leading term."""
        return self.cmp(v) < 0

    def orientate(self, v: IntVector) -> IntVector:
        """Return v or -v, whichever has its positive part as leading term."""
        if self.is_inverted(v):
            return -v
        return v
