"""
BinomialSet: the live basis of a Gröbner basis computation.

Elements are kept in insertion order (positions are what critical pairs
refer to) and indexed by leading term in a SupportTree for reducer search.
Elements must only be mutated through BinomialSet methods, since the tree
stores a copy of each leading term.
"""

from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from ipgbs.algebra.binomials import Binomial, disjoint_supports, reduce_by, sbinomial
from ipgbs.algebra.orders import MonomialOrder
from ipgbs.algebra.support_tree import SupportTree
from ipgbs.core.matrix_types import IntVector, negative_part, positive_part


class BinomialSet:
    """
    Ordered set of oriented binomials with a leading-term index.

    Args:
        order: Monomial order the elements are oriented by
        elements: Initial elements, added in order
    """

    def __init__(self, order: MonomialOrder, elements: Optional[List[Binomial]] = None):
        self.order = order
        self.elements: List[Binomial] = []
        self.tree = SupportTree()
        for g in elements or []:
            self.add(g)

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, i: int) -> Binomial:
        return self.elements[i]

    def __iter__(self) -> Iterator[Binomial]:
        return iter(self.elements)

    def add(self, g: Binomial) -> None:
        self.elements.append(g)
        self.tree.insert(g, g.leading_term())

    def delete(self, i: int) -> Binomial:
        g = self.elements.pop(i)
        self.tree.remove(g, g.leading_term())
        return g

    def find_reducer(
        self,
        v: IntVector,
        skip: Optional[Binomial] = None,
        negative: bool = False
    ) -> Optional[Binomial]:
        """
        Find an element whose leading term divides the leading (or trailing) term of v.

        With negative=True, reducers whose trailing term shares a variable with
        the leading term of v are passed over, so that reducing the tail never
        changes the head.
        """
        if not negative:
            return self.tree.find_divisor(positive_part(v), skip=skip)
        head = positive_part(v)
        for h in self.tree.divisors(negative_part(v), skip=skip):
            if disjoint_supports(h.trailing_term(), head):
                return h
        return None

    def sbinomial(self, i: int, j: int) -> Binomial:
        return sbinomial(self.elements[i], self.elements[j], self.order)

    def reduce(self, g: Binomial, skip: Optional[Binomial] = None) -> bool:
        """
        Reduce g in place by the elements of this set, leading term first.

        Returns:
            True iff g reduced to zero
        """
        v = g.data
        while True:
            h = self.find_reducer(v, skip=skip)
            if h is None:
                break
            v = reduce_by(v, h.data, self.order)
            if not np.any(v):
                g.data = v
                return True
        while True:
            h = self.find_reducer(v, skip=skip, negative=True)
            if h is None:
                break
            v = reduce_by(v, h.data, self.order, negative=True)
        g.data = v
        return False

    def is_support_reducible(self, i: int, j: int, bounded_end: int) -> bool:
        """
        True if the pair (i, j) can be discarded by support criteria.

        Criterion 1 (GCD): the leading terms have disjoint supports.
        Criterion 2 (Malkin): the trailing terms share a bounded variable
        among the first bounded_end coordinates.
        """
        g, h = self.elements[i].data, self.elements[j].data
        if not np.any((g > 0) & (h > 0)):
            return True
        return bool(np.any((g[:bounded_end] < 0) & (h[:bounded_end] < 0)))

    def minimal_basis(self) -> None:
        """
        Remove every element whose leading term is a multiple of another's.

        Elements are visited from last to first, so of two elements with
        the same leading term the earlier one is kept. Idempotent.
        """
        for i in range(len(self.elements) - 1, -1, -1):
            g = self.elements[i]
            if self.tree.find_divisor(g.leading_term(), skip=g) is not None:
                self.delete(i)

    def reduced_basis(self) -> None:
        """
        Minimalize, then reduce the trailing term of every element.

        Signature elements are only minimalized.
        """
        self.minimal_basis()
        for g in self.elements:
            if g.has_signature:
                return
            v = g.data
            while True:
                h = self.find_reducer(v, skip=g, negative=True)
                if h is None:
                    break
                v = reduce_by(v, h.data, self.order, negative=True)
            g.data = v

    def auto_reduce_once(self, index: int) -> Tuple[int, int]:
        """
        Interreduce the set: remove elements that reduce to zero by the others.

        Elements whose reduction keeps the same leading term are replaced by
        their reduced form; others are left as they are.

        Args:
            index: A position in the set (the pair queue cursor)

        Returns:
            (removed, removed_at_or_before_index)
        """
        removed = 0
        removed_at_or_before = 0
        i = len(self.elements) - 1
        while i >= 0:
            g = self.elements[i]
            reduced = g.copy()
            if self.reduce(reduced, skip=g):
                self.delete(i)
                removed += 1
                if i <= index:
                    removed_at_or_before += 1
            elif np.array_equal(reduced.leading_term(), g.leading_term()):
                g.data = reduced.data
            i -= 1
        return removed, removed_at_or_before

    def fourti2_form(self) -> List[List[int]]:
        return [g.fullform() for g in self.elements]

    def is_groebner_basis(self) -> bool:
        """
        Check Buchberger's criterion: every S-binomial reduces to zero.

        Quadratic in the size of the set. Meant for tests and debugging.
        """
        return self.is_truncated_groebner_basis(lambda v: True)

    def is_truncated_groebner_basis(self, is_feasible: Callable[[IntVector], bool]) -> bool:
        """
        Check that every S-binomial either reduces to zero or has a
        reduced form rejected by is_feasible.
        """
        for i in range(len(self.elements)):
            for j in range(i):
                s = self.sbinomial(i, j)
                if not self.reduce(s) and is_feasible(s.data):
                    return False
        return True
