"""
Module signatures for signature-based Gröbner basis algorithms.

A signature t·e_i stands for the module element whose image in the
polynomial ring is t·g_i, where g_i is the i-th generator. Every element
produced by the algorithm carries the signature of the module element it
came from, and S-pairs are processed by increasing signature.

Three module monomial orders are supported:
  - pot   (position over term): index first, then the monomial order
  - top   (term over position): monomial order first, then index
  - ltpot (Schreyer order): compare t·lt(g_i) first, ties by pot
"""

from enum import Enum
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ipgbs.algebra.binomials import Binomial
from ipgbs.algebra.orders import MonomialOrder
from ipgbs.core.matrix_types import IntVector, positive_part


class ModuleMonomialOrder(Enum):
    POT = "pot"
    TOP = "top"
    LTPOT = "ltpot"

    @classmethod
    def from_name(cls, name) -> "ModuleMonomialOrder":
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ValueError(
                f"Unknown module order: {name}. Expected one of {[o.value for o in cls]}"
            ) from None


class Signature:
    """
    The module monomial monomial·e_index.

    Example:
        >>> s = Signature(1, np.array([0, 2]))
        >>> s.multiply(np.array([1, 0]))
        Signature(1, [1, 2])
        >>> s.divides(Signature(1, np.array([1, 3])))
        True
    """

    __slots__ = ("index", "monomial")

    def __init__(self, index: int, monomial):
        self.index = int(index)
        self.monomial = np.asarray(monomial, dtype=np.int64)

    def multiply(self, t: IntVector) -> "Signature":
        return Signature(self.index, self.monomial + t)

    def divides(self, other: "Signature") -> bool:
        return self.index == other.index and bool(np.all(self.monomial <= other.monomial))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.index == other.index and np.array_equal(self.monomial, other.monomial)

    def __hash__(self) -> int:
        return hash((self.index, tuple(self.monomial.tolist())))

    def __repr__(self) -> str:
        return f"Signature({self.index}, {self.monomial.tolist()})"


class SigBinomial(Binomial):
    """A binomial together with its signature."""

    has_signature = True

    def __init__(self, data, signature: Signature):
        super().__init__(data)
        self.signature = signature

    def copy(self) -> "SigBinomial":
        return SigBinomial(self.data.copy(), self.signature)

    def __repr__(self) -> str:
        return f"SigBinomial({self.data.tolist()}, {self.signature})"


def _pot_lt(s1: Signature, s2: Signature, monomial_order: MonomialOrder) -> bool:
    if s1.index != s2.index:
        return s1.index < s2.index
    return monomial_order.cmp_monomials(s1.monomial, s2.monomial) < 0


def _top_lt(s1: Signature, s2: Signature, monomial_order: MonomialOrder) -> bool:
    c = monomial_order.cmp_monomials(s1.monomial, s2.monomial)
    if c != 0:
        return c < 0
    return s1.index < s2.index


def image_leading_term(s: Signature, generators: Sequence[Binomial]) -> IntVector:
    """Leading term of the image t·g_i of the signature t·e_i."""
    return s.monomial + positive_part(generators[s.index].data)


def _ltpot_lt(
    s1: Signature,
    s2: Signature,
    monomial_order: MonomialOrder,
    generators: Sequence[Binomial]
) -> bool:
    c = monomial_order.cmp_monomials(
        image_leading_term(s1, generators), image_leading_term(s2, generators)
    )
    if c != 0:
        return c < 0
    return _pot_lt(s1, s2, monomial_order)


def signature_lt(
    s1: Signature,
    s2: Signature,
    monomial_order: MonomialOrder,
    generators: Sequence[Binomial],
    module_order: ModuleMonomialOrder
) -> bool:
    """
    True iff s1 < s2 in the given module monomial order.

    Args:
        s1, s2: Signatures to compare
        monomial_order: Order on the monomials of the polynomial ring
        generators: Live basis; only read for the ltpot order
        module_order: One of ModuleMonomialOrder

    Returns:
        bool; for fixed arguments this is a strict total order on signatures
    """
    if module_order == ModuleMonomialOrder.POT:
        return _pot_lt(s1, s2, monomial_order)
    if module_order == ModuleMonomialOrder.LTPOT:
        return _ltpot_lt(s1, s2, monomial_order, generators)
    return _top_lt(s1, s2, monomial_order)


class ModuleMonomialOrdering:
    """
    Comparison context for signatures.

    generators is a reference to the live basis list, so signatures of new
    elements can be compared as soon as they are appended.
    """

    def __init__(
        self,
        monomial_order: MonomialOrder,
        generators: List[Binomial],
        module_order: ModuleMonomialOrder = ModuleMonomialOrder.LTPOT
    ):
        self.monomial_order = monomial_order
        self.generators = generators
        self.module_order = ModuleMonomialOrder.from_name(module_order)

    def lt(self, s1: Signature, s2: Signature) -> bool:
        return signature_lt(s1, s2, self.monomial_order, self.generators, self.module_order)

    def max(self, s1: Signature, s2: Signature) -> Signature:
        return s2 if self.lt(s1, s2) else s1


def spair_coefs(g: Binomial, h: Binomial) -> Tuple[IntVector, IntVector]:
    """
    Monomials (a, b) with a·lt(g) = b·lt(h) = lcm(lt(g), lt(h)).
    """
    g_lt = positive_part(g.data)
    h_lt = positive_part(h.data)
    lcm = np.maximum(g_lt, h_lt)
    return lcm - g_lt, lcm - h_lt


def regular_spair(
    i: int,
    j: int,
    generators: Sequence[SigBinomial],
    ordering: ModuleMonomialOrdering
) -> Optional[Signature]:
    """
    Signature of the S-pair of generators i and j, or None if it is singular.

    The S-pair a·g_i - b·g_j has signature max(a·sig(g_i), b·sig(g_j)). When
    both are equal the pair is singular and can be discarded.
    """
    a, b = spair_coefs(generators[i], generators[j])
    i_sig = generators[i].signature.multiply(a)
    j_sig = generators[j].signature.multiply(b)
    if i_sig == j_sig:
        return None
    return ordering.max(i_sig, j_sig)
