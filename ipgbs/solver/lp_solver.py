"""
LP/ILP solver wrappers used by the Gröbner basis engine.

This module provides two kinds of pulp models:
  - Feasibility models for the fibers of a binomial:
        {z : A z = b - A v, 0 <= z <= u - v}
    with z integer (IP truncation) or real (LP truncation)
  - A positive row span vector d = A^T y > 0, used to turn a cost
    matrix into a term order on monomials

Uses standard pulp library with the CBC solver (no custom solver implementation).
"""

from typing import Optional

import numpy as np
import pulp

from ipgbs.core.matrix_types import IntMatrix, IntVector, UNBOUNDED


class SolverStatusError(Exception):
    """Raised when a model ends in a status that proves neither feasibility nor infeasibility."""
    pass


# Statuses with a definite answer to "is there a feasible point?"
_FEASIBLE_STATUSES = ("Optimal", "Unbounded")
_INFEASIBLE_STATUSES = ("Infeasible", "Undefined")


def is_fiber_feasible(
    A: IntMatrix,
    b: IntVector,
    u: IntVector,
    v: IntVector,
    integer: bool = False
) -> bool:
    """
    Decide whether the fiber of the monomial v is non-empty.

    Builds and solves
        A z = b - A v
        0 <= z <= u - v
    where coordinates with u_i == UNBOUNDED have no upper bound.

    Args:
        A: Equality constraint matrix, shape (m, n)
        b: Right-hand side, shape (m,)
        u: Upper bounds, shape (n,)
        v: Non-negative exponent vector (head or tail of a binomial)
        integer: If True, z is integral (IP); otherwise LP relaxation

    Returns:
        True iff the model has a feasible point

    Raises:
        SolverStatusError: If CBC returns "Not Solved"

    Example:
        >>> A = np.array([[1, 1]]); b = np.array([1]); u = np.array([1, 1])
        >>> is_fiber_feasible(A, b, u, np.array([1, 0]))
        True
        >>> is_fiber_feasible(A, b, u, np.array([1, 1]))
        False
    """
    m, n = A.shape
    rhs = b - A @ v

    prob = pulp.LpProblem("fiber_feasibility", pulp.LpMinimize)
    cat = pulp.LpInteger if integer else pulp.LpContinuous
    z = []
    for i in range(n):
        upper: Optional[int] = None
        if u[i] != UNBOUNDED:
            upper = int(u[i] - v[i])
            if upper < 0:
                return False
        z.append(pulp.LpVariable(f"z_{i}", lowBound=0, upBound=upper, cat=cat))

    # Zero objective: feasibility only
    prob += pulp.lpSum([]), "zero_objective"

    for r in range(m):
        terms = [(z[i], int(A[r, i])) for i in range(n) if A[r, i] != 0]
        if not terms:
            if rhs[r] != 0:
                return False
            continue
        prob += pulp.LpAffineExpression(terms) == int(rhs[r]), f"row_{r}"

    return _solve_for_feasibility(prob)


def positive_row_span(A: IntMatrix) -> np.ndarray:
    """
    Compute a strictly positive vector d = A^T y in the row span of A.

    The column sums A^T 1 are tried first. If some column sum is not
    positive, an LP finds y with A^T y >= 1.

    Args:
        A: Integer matrix, shape (m, n)

    Returns:
        d: float array of shape (n,), all entries > 0

    Raises:
        SolverStatusError: If no positive row span vector exists
    """
    column_sums = A.sum(axis=0).astype(float)
    if np.all(column_sums > 0):
        return column_sums

    m, n = A.shape
    prob = pulp.LpProblem("positive_row_span", pulp.LpMinimize)
    y = [pulp.LpVariable(f"y_{r}") for r in range(m)]
    # Zero objective: any feasible y will do
    prob += pulp.lpSum([]), "zero_objective"
    for i in range(n):
        prob += pulp.lpSum(int(A[r, i]) * y[r] for r in range(m) if A[r, i] != 0) >= 1, f"col_{i}"

    status = prob.solve(pulp.PULP_CBC_CMD(msg=False))
    if pulp.LpStatus[status] != "Optimal":
        raise SolverStatusError(
            f"Solver status: {pulp.LpStatus[status]}. "
            f"No strictly positive vector in the row span of A."
        )

    y_val = np.array([pulp.value(var) or 0.0 for var in y], dtype=float)
    return A.T.astype(float) @ y_val


def _solve_for_feasibility(prob: pulp.LpProblem) -> bool:
    status = prob.solve(pulp.PULP_CBC_CMD(msg=False))
    name = pulp.LpStatus[status]
    if name in _FEASIBLE_STATUSES:
        return True
    if name in _INFEASIBLE_STATUSES:
        return False
    raise SolverStatusError(f"Solver status: {name}. Feasibility could not be decided.")
