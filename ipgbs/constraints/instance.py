"""
Integer program instances and their normalization.

An IPInstance holds the data of

    max  C x
    s.t. A x <= b
         0 <= x <= u,  x integer

with integer A, b and non-negative integer bounds u. This is the form used by
Thomas and Weismantel (1997) for truncated Gröbner bases: adding slack
variables s (one per row of A) and t (one per variable) gives the equality
system

    [A  I  0] [x]   [b]
    [I  0  I] [s] = [u]
              [t]

whose lattice has the basis (e_i, -A_i, -e_i), i = 0..n-1. The objective
is inverted so that the normalized problem is a minimization.

Coordinates of the normalized problem are laid out as:
  [x_0 .. x_{n-1} | s_0 .. s_{m-1} | t_0 .. t_{n-1}]
"""

import numbers
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ipgbs.core.matrix_types import CostMatrix, IntMatrix, IntVector, UNBOUNDED


_INT64_MIN = int(np.iinfo(np.int64).min)
_INT64_MAX = int(np.iinfo(np.int64).max)
# Largest magnitude below which every integer is exactly representable as a float
_FLOAT_EXACT_LIMIT = 2 ** 53


class InputValidationError(ValueError):
    """Raised when the data of an integer program is malformed or inconsistent."""
    pass


@dataclass
class IPInstance:
    """
    Validated integer program data in inequality form.

    Attributes:
        A: Constraint matrix, shape (m, n), non-negative integers
        b: Right-hand side, shape (m,), non-negative integers
        C: Objective matrix, shape (k, n), maximized lexicographically row by row
        u: Upper bounds, shape (n,), non-negative integers

    Raises:
        InputValidationError: On construction, if any dimension, type or sign
            check fails

    Example:
        >>> ip = IPInstance(A=[[2, 3]], b=[4], C=[[1, 1]], u=[1, 1])
        >>> ip.m, ip.n
        (1, 2)
    """
    A: IntMatrix
    b: IntVector
    C: CostMatrix
    u: IntVector

    def __post_init__(self):
        self.A = _integer_array(self.A, "A", ndim=2)
        m, n = self.A.shape
        if n == 0:
            raise InputValidationError("A must have at least one column")

        self.b = _integer_array(self.b, "b", ndim=1)
        if self.b.shape != (m,):
            raise InputValidationError(
                f"b has length {self.b.shape[0]}, expected {m} (rows of A)"
            )

        self.C = _cost_matrix(self.C, n)

        self.u = _integer_array(self.u, "u", ndim=1)
        if self.u.shape != (n,):
            raise InputValidationError(
                f"u has length {self.u.shape[0]}, expected {n} (columns of A)"
            )

        if np.any(self.u < 0):
            raise InputValidationError(
                f"u must be non-negative, found entries {self.u[self.u < 0].tolist()}"
            )

    @property
    def m(self) -> int:
        return self.A.shape[0]

    @property
    def n(self) -> int:
        return self.A.shape[1]

    def normalize(self) -> "NormalizedIP":
        """
        Transform the instance to equality form with slack variables.

        Returns:
            NormalizedIP with matrix [A I 0; I 0 I], right-hand side [b; u],
            minimization costs [-C 0 0] and bounds [u; inf; inf].
        """
        m, n = self.A.shape
        k = self.C.shape[0]

        top = np.hstack([self.A, np.eye(m, dtype=np.int64), np.zeros((m, n), dtype=np.int64)])
        bottom = np.hstack([np.eye(n, dtype=np.int64), np.zeros((n, m), dtype=np.int64),
                            np.eye(n, dtype=np.int64)])
        A_eq = np.vstack([top, bottom])
        b_eq = np.concatenate([self.b, self.u])
        cost = np.hstack([-self.C, np.zeros((k, n + m), dtype=float)])
        u_eq = np.concatenate([self.u, np.full(n + m, UNBOUNDED, dtype=np.int64)])

        return NormalizedIP(A=A_eq, b=b_eq, cost=cost, u=u_eq, n_original=n, m_original=m)

    def is_feasible_solution(self, x: Sequence[int]) -> bool:
        x_arr = np.asarray(x, dtype=np.int64)
        if x_arr.shape != (self.n,):
            return False
        return bool(np.all(x_arr >= 0) and np.all(x_arr <= self.u)
                    and np.all(self.A @ x_arr <= self.b))

    def objective_value(self, x: Sequence[int]) -> float:
        """Value of the first objective row at x."""
        return float(self.C[0] @ np.asarray(x, dtype=np.int64))


@dataclass
class NormalizedIP:
    """
    Equality-form integer program produced by IPInstance.normalize().

    Attributes:
        A: Matrix [A I 0; I 0 I], shape (m + n, 2n + m)
        b: Right-hand side [b; u], shape (m + n,)
        cost: Minimization cost matrix [-C 0 0], shape (k, 2n + m)
        u: Bounds [u; UNBOUNDED ...], shape (2n + m,)
        n_original: Number of variables of the original problem
        m_original: Number of constraints of the original problem
    """
    A: IntMatrix
    b: IntVector
    cost: CostMatrix
    u: IntVector
    n_original: int
    m_original: int

    @property
    def num_variables(self) -> int:
        return self.A.shape[1]

    @property
    def bounded_end(self) -> int:
        """Index one past the last variable with an explicit upper bound."""
        return self.n_original

    def lift(self, x: Sequence[int]) -> IntVector:
        """
        Lift a solution x of the original problem to (x, b - Ax, u - x).
        """
        n, m = self.n_original, self.m_original
        x_arr = np.asarray(x, dtype=np.int64)
        A = self.A[:m, :n]
        slack = self.b[:m] - A @ x_arr
        upper = self.b[m:] - x_arr
        return np.concatenate([x_arr, slack, upper])

    def project(self, z: IntVector) -> IntVector:
        """Inverse of lift: keep the original variables only."""
        return np.asarray(z[:self.n_original], dtype=np.int64)


def implied_upper_bounds(A, b) -> IntVector:
    """
    Compute upper bounds u_i = min_r floor(b_r / A_ri) over the rows r of A
    with A_ri > 0 and no negative entry.

    Rows with a negative entry do not bound any single variable.

    Raises:
        InputValidationError: If some variable is bounded by no such row,
            or if a bounding row forces it below zero
    """
    A_arr = _integer_array(A, "A", ndim=2)
    b_arr = _integer_array(b, "b", ndim=1)
    if b_arr.shape != (A_arr.shape[0],):
        raise InputValidationError(
            f"b has length {b_arr.shape[0]}, expected {A_arr.shape[0]} (rows of A)"
        )

    nonnegative_rows = np.all(A_arr >= 0, axis=1)
    bounds = []
    for i in range(A_arr.shape[1]):
        rows = np.nonzero((A_arr[:, i] > 0) & nonnegative_rows)[0]
        if rows.size == 0:
            raise InputValidationError(
                f"Variable {i} is unbounded: no non-negative row of A has a positive "
                f"coefficient in column {i}"
            )
        bound = int(min(b_arr[r] // A_arr[r, i] for r in rows))
        if bound < 0:
            raise InputValidationError(
                f"Variable {i} has implied upper bound {bound}: the program is infeasible"
            )
        bounds.append(bound)
    return np.array(bounds, dtype=np.int64)


def _integer_array(values, name: str, ndim: int) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except OverflowError as e:
        raise InputValidationError(f"{name} has entries outside the 64-bit integer range") from e
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"{name} must contain only numbers: {e}") from e

    if arr.dtype.kind == "O":
        arr = _exact_integers(arr, name)
    elif arr.dtype.kind not in "biuf":
        raise InputValidationError(f"{name} must contain only numbers, got dtype {arr.dtype}")

    if ndim == 2 and arr.ndim == 2 and arr.shape[0] == 0:
        arr = arr.reshape(0, arr.shape[1])
    if arr.ndim != ndim:
        raise InputValidationError(f"{name} must be {ndim}-dimensional, got ndim={arr.ndim}")

    if arr.dtype.kind == "f":
        if not np.all(np.isfinite(arr)):
            raise InputValidationError(f"{name} must have finite entries")
        if not np.all(np.equal(np.mod(arr, 1), 0)):
            raise InputValidationError(f"{name} must have integer entries")
        if np.any(np.abs(arr) > _FLOAT_EXACT_LIMIT):
            raise InputValidationError(
                f"{name} has float entries above 2**53, pass them as integers"
            )
    elif arr.dtype.kind == "u" and arr.size and arr.max() > _INT64_MAX:
        raise InputValidationError(f"{name} has entries outside the 64-bit integer range")
    return arr.astype(np.int64)


def _exact_integers(arr: np.ndarray, name: str) -> np.ndarray:
    """Convert an object array of Python integers to int64 without rounding."""
    flat = arr.ravel()
    if not all(isinstance(x, numbers.Integral) for x in flat):
        raise InputValidationError(f"{name} must contain only integers")
    if any(not (_INT64_MIN <= int(x) <= _INT64_MAX) for x in flat):
        raise InputValidationError(f"{name} has entries outside the 64-bit integer range")
    return np.array([int(x) for x in flat], dtype=np.int64).reshape(arr.shape)


def _cost_matrix(values, n: int) -> CostMatrix:
    try:
        C = np.asarray(values, dtype=float)
    except (TypeError, ValueError) as e:
        raise InputValidationError(f"C must contain only numbers: {e}") from e

    if C.ndim == 1:
        C = C.reshape(1, -1)
    if C.ndim != 2 or C.shape[0] == 0:
        raise InputValidationError(f"C must be a non-empty vector or matrix, got shape {C.shape}")
    if C.shape[1] != n:
        raise InputValidationError(
            f"C has {C.shape[1]} columns, expected {n} (columns of A)"
        )
    if not np.all(np.isfinite(C)):
        raise InputValidationError("C must have finite entries")
    return C
