"""
Binomials of lattice ideals, stored as integer vectors.

A vector v in the lattice ker(A) represents the binomial x^{v+} - x^{v-}.
Once oriented by a monomial order, x^{v+} is the leading term (head) and
x^{v-} the trailing term (tail).

Reduction of g by h (when x^{h+} divides x^{g+}) replaces g by g - f·h for
the largest factor f such that f·h+ <= g+, and re-orients the result.
"""

from typing import List

import numpy as np

from ipgbs.algebra.orders import MonomialOrder
from ipgbs.constraints.instance import NormalizedIP
from ipgbs.core.matrix_types import IntMatrix, IntVector, is_zero_vector, negative_part, positive_part


class Binomial:
    """
    An oriented (or not yet oriented) binomial x^{v+} - x^{v-}.

    Attributes:
        data: The exponent difference vector v, dtype int64
    """

    has_signature = False

    def __init__(self, data):
        self.data = np.asarray(data, dtype=np.int64)

    def __len__(self) -> int:
        return self.data.shape[0]

    def __getitem__(self, i):
        return self.data[i]

    def __repr__(self) -> str:
        return f"Binomial({self.data.tolist()})"

    def leading_term(self) -> IntVector:
        return positive_part(self.data)

    def trailing_term(self) -> IntVector:
        return negative_part(self.data)

    def positive_support(self) -> np.ndarray:
        return np.flatnonzero(self.data > 0)

    def negative_support(self) -> np.ndarray:
        return np.flatnonzero(self.data < 0)

    def is_zero(self) -> bool:
        return is_zero_vector(self.data)

    def degrees(self, A: IntMatrix):
        """Return (A·head, A·tail)."""
        return A @ self.leading_term(), A @ self.trailing_term()

    def orientate(self, order: MonomialOrder) -> "Binomial":
        """Orient in place so that the leading term is the larger one."""
        self.data = order.orientate(self.data)
        return self

    def copy(self) -> "Binomial":
        return Binomial(self.data.copy())

    def fullform(self) -> List[int]:
        return [int(x) for x in self.data]


def reduction_factor(v: IntVector, h: IntVector) -> int:
    """
    Largest f such that f·h+ <= v coordinate-wise, for a non-negative v.

    Assumes h+ divides v, so the result is at least 1.

    Example:
        >>> reduction_factor(np.array([4, 3, 0]), np.array([2, 1, -5]))
        2
    """
    support = np.flatnonzero(h > 0)
    if support.size == 0:
        return 1
    return int(np.min(v[support] // h[support]))


def divides(a: IntVector, b: IntVector) -> bool:
    """True iff x^a divides x^b, i.e. a <= b coordinate-wise."""
    return bool(np.all(a <= b))


def disjoint_supports(a: IntVector, b: IntVector) -> bool:
    """True iff the non-negative vectors a and b have no common positive entry."""
    return not np.any((a > 0) & (b > 0))


def lattice_generator(i: int, nip: NormalizedIP) -> IntVector:
    """
    The i-th lattice generator (e_i, -A_i, -e_i) of the normalized program.
    """
    n, m = nip.n_original, nip.m_original
    v = np.zeros(nip.num_variables, dtype=np.int64)
    v[i] = 1
    v[n:n + m] = -nip.A[:m, i]
    v[n + m + i] = -1
    return v


def sbinomial(g: Binomial, h: Binomial, order: MonomialOrder) -> Binomial:
    """
    S-binomial of g and h: g - h, oriented.

    The leading terms cancel down to their lcm, so the result starts from
    lcm(x^{g+}, x^{h+}).
    """
    return Binomial(order.orientate(g.data - h.data))


def reduce_by(v: IntVector, h: IntVector, order: MonomialOrder, negative: bool = False) -> IntVector:
    """
    Reduce v by h as many times as h+ divides the chosen term of v.

    Args:
        v: Vector to reduce
        h: Reducer, oriented
        negative: If True, reduce the trailing term v- (v + f·h), otherwise
                  the leading term v+ (v - f·h, then re-oriented)
    """
    if negative:
        f = reduction_factor(negative_part(v), h)
        return v + f * h
    f = reduction_factor(positive_part(v), h)
    return order.orientate(v - f * h)
