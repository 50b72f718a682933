"""
Signature-based algorithm for truncated Gröbner bases of lattice ideals.

Every basis element carries a signature; S-pairs are processed by increasing
signature (SignaturePairQueue) and reduced by regular top s-reductions only,
so the signature of an element never changes while it is reduced.

Pairs are eliminated:
  - when created: GCD criterion, singular S-pairs, signature criterion
    (the signature is divisible by a known syzygy signature) and Koszul
    criterion (the signature is that of a Koszul syzygy g_i g_j - g_j g_i)
  - when dequeued: duplicate of the previous signature, signature
    criterion, Koszul criterion

Reductions that reach zero add their signature to the set of known syzygy
signatures.
"""

from typing import Dict, List, Optional

import numpy as np

from ipgbs.algebra.binomial_set import BinomialSet
from ipgbs.algebra.binomials import disjoint_supports
from ipgbs.algebra.markov import initial_generators
from ipgbs.algebra.signatures import (
    ModuleMonomialOrder,
    ModuleMonomialOrdering,
    SigBinomial,
    Signature,
    regular_spair,
)
from ipgbs.algebra.support_tree import SupportTree
from ipgbs.algorithms.base import GBAlgorithm
from ipgbs.algorithms.config import GBConfig
from ipgbs.algorithms.critical_pairs import SignaturePair
from ipgbs.algorithms.pair_queue import SignatureHeap, SignaturePairQueue
from ipgbs.constraints.instance import IPInstance
from ipgbs.core.matrix_types import negative_part, positive_part


class SignatureAlgorithm(GBAlgorithm):
    """
    Signature-based variant.

    Args:
        module_order: "pot", "top" or "ltpot" (Schreyer order, default)
        truncation_type: See GBAlgorithm
        config: Run configuration. auto_reduce_freq is not used by this variant.

    Raises:
        ValueError: If module_order or truncation_type is unknown
    """

    def __init__(
        self,
        module_order="ltpot",
        truncation_type: str = "heuristic",
        config: Optional[GBConfig] = None
    ):
        super().__init__(truncation_type=truncation_type, config=config)
        self.module_order = ModuleMonomialOrder.from_name(module_order)
        self.basis: Optional[BinomialSet] = None
        self.ordering: Optional[ModuleMonomialOrdering] = None
        self.queue: Optional[SignaturePairQueue] = None
        self.koszul: Optional[SignatureHeap] = None
        self.syzygies: Dict[int, SupportTree] = {}
        self.previous_signature: Optional[Signature] = None
        # Signatures of dequeued pairs, in order
        self.processed_signatures: List[Signature] = []

    def initialize(self, instance: IPInstance) -> None:
        self.setup(instance)
        self.basis = BinomialSet(self.order)
        self.ordering = ModuleMonomialOrdering(self.order, self.basis.elements, self.module_order)
        self.queue = SignaturePairQueue(self.ordering)
        self.koszul = SignatureHeap(self.ordering)
        self.syzygies = {}
        self.previous_signature = None
        self.processed_signatures = []

        zero = np.zeros(self.normalized.num_variables, dtype=np.int64)
        generators = initial_generators(self.normalized, self.order, self.truncator)
        for k, g in enumerate(generators):
            self.update(SigBinomial(g.data, Signature(k, zero)))

    def current_basis(self) -> BinomialSet:
        return self.basis

    def next_pair(self) -> Optional[SignaturePair]:
        return self.queue.next_pair()

    def update(self, element: SigBinomial, pair: Optional[SignaturePair] = None) -> None:
        n = len(self.basis)
        self.basis.add(element)
        new_lead = element.leading_term()

        for i in range(n):
            g = self.basis[i]
            koszul_sig = self._koszul_signature(g, element)
            if koszul_sig is not None:
                self.koszul.push(koszul_sig)

        batch = []
        for i in range(n):
            g = self.basis[i]
            if disjoint_supports(g.leading_term(), new_lead):
                self.increment("gcd_criterion")
                continue
            signature = regular_spair(n, i, self.basis.elements, self.ordering)
            if signature is None:
                self.increment("singular_pairs")
                continue
            if self._is_syzygy_multiple(signature):
                self.increment("signature_criterion")
                continue
            if self.koszul.has(signature):
                self.increment("koszul_criterion")
                continue
            batch.append(SignaturePair(n, i, signature))
        self.queue.push_batch(batch)

    def late_pair_elimination(self, pair: SignaturePair) -> bool:
        signature = pair.signature
        self.processed_signatures.append(signature)
        previous = self.previous_signature
        self.previous_signature = signature
        if previous is not None and previous == signature:
            self.increment("duplicate_signature")
            return True
        if self._is_syzygy_multiple(signature):
            self.increment("signature_criterion")
            return True
        if self.koszul.contains(signature):
            self.increment("koszul_criterion")
            return True
        return False

    def build_sbinomial(self, pair: SignaturePair) -> SigBinomial:
        g = self.basis[pair.first]
        h = self.basis[pair.second]
        return SigBinomial(self.order.orientate(g.data - h.data), pair.signature)

    def reduce_element(self, g: SigBinomial) -> bool:
        """
        Regular top s-reduction of g.

        A reducer h with t·lt(h) = lt(g) is used when t·sig(h) < sig(g).
        g is discarded (reported as a zero reduction) when it reduces to
        zero, when it is singular top s-reducible (t·sig(h) == sig(g) for
        some divisor), or when a reducer's trailing term shares a variable
        with that of g. Only the first case leaves g.data at zero.
        """
        v = g.data
        while True:
            head = positive_part(v)
            reducer = None
            for h in self.basis.tree.divisors(head):
                t = head - h.leading_term()
                reducer_signature = h.signature.multiply(t)
                if reducer_signature == g.signature:
                    self.increment("singular_reductions")
                    g.data = v
                    return True
                if self.ordering.lt(reducer_signature, g.signature):
                    reducer = h
                    break
            if reducer is None:
                g.data = v
                return False
            if not disjoint_supports(reducer.trailing_term(), negative_part(v)):
                self.increment("trailing_gcd_reductions")
                g.data = v
                return True
            v = self.order.orientate(v - reducer.data)
            if not np.any(v):
                g.data = v
                return True

    def process_zero_reduction(self, element: SigBinomial, pair: Optional[SignaturePair] = None) -> None:
        """
        Record the signature of element as a syzygy signature.

        Discarded elements that did not reach zero say nothing about the
        module, so their signatures are not recorded.
        """
        if not element.is_zero():
            return
        signature = element.signature
        tree = self.syzygies.setdefault(signature.index, SupportTree())
        tree.insert(signature, signature.monomial)

    def _is_syzygy_multiple(self, signature: Signature) -> bool:
        tree = self.syzygies.get(signature.index)
        return tree is not None and tree.find_divisor(signature.monomial) is not None

    def _koszul_signature(self, g: SigBinomial, h: SigBinomial) -> Optional[Signature]:
        """Signature max(lt(h)·sig(g), lt(g)·sig(h)) of the Koszul syzygy of g and h."""
        s1 = g.signature.multiply(h.leading_term())
        s2 = h.signature.multiply(g.leading_term())
        if s1 == s2:
            return None
        return self.ordering.max(s1, s2)
