"""
Buchberger's algorithm for truncated Gröbner bases of lattice ideals.

Pairs are processed in FIFO order, batch by batch. A pair is discarded
before building its S-binomial if

  - the leading terms have disjoint supports (Buchberger's GCD criterion), or
  - the trailing terms share a bounded original variable (Malkin's
    Criterion 2).

Every auto_reduce_freq accepted elements, the basis is interreduced at the
next batch boundary and the pair cursor is shifted to match.
"""

from typing import Optional

from ipgbs.algebra.binomial_set import BinomialSet
from ipgbs.algebra.binomials import Binomial
from ipgbs.algebra.markov import initial_generators
from ipgbs.algorithms.base import GBAlgorithm
from ipgbs.algorithms.config import GBConfig
from ipgbs.algorithms.critical_pairs import BasicPair
from ipgbs.algorithms.pair_queue import FIFOPairQueue
from ipgbs.constraints.instance import IPInstance


class BuchbergerAlgorithm(GBAlgorithm):
    """
    Plain (signature-free) variant.

    Example:
        >>> algorithm = BuchbergerAlgorithm(truncation_type="simple")
        >>> run(algorithm, [[1, 1]], [1], [[1, 2]], [1, 1])
        [[-1, 0, 1, 1, 0], [0, -1, 1, 0, 1], [1, -1, 0, -1, 1]]
    """

    def __init__(self, truncation_type: str = "heuristic", config: Optional[GBConfig] = None):
        super().__init__(truncation_type=truncation_type, config=config)
        self.basis: Optional[BinomialSet] = None
        self.queue: Optional[FIFOPairQueue] = None
        self._updates = 0
        self._auto_reduce_pending = False

    def initialize(self, instance: IPInstance) -> None:
        self.setup(instance)
        self.basis = BinomialSet(self.order)
        self.queue = FIFOPairQueue(self.basis)
        self._updates = 0
        self._auto_reduce_pending = False
        for g in initial_generators(self.normalized, self.order, self.truncator):
            self.update(g)

    def current_basis(self) -> BinomialSet:
        return self.basis

    def next_pair(self) -> Optional[BasicPair]:
        if self._auto_reduce_pending and self.queue.at_batch_boundary():
            self._auto_reduce()
        return self.queue.next_pair()

    def late_pair_elimination(self, pair: BasicPair) -> bool:
        if self.basis.is_support_reducible(pair.first, pair.second, self.normalized.bounded_end):
            self.increment("support_criteria")
            return True
        return False

    def update(self, element: Binomial, pair: Optional[BasicPair] = None) -> None:
        element.orientate(self.order)
        self.basis.add(element)
        self._updates += 1
        freq = self.config.auto_reduce_freq
        if freq > 0 and self._updates % freq == 0:
            self._auto_reduce_pending = True

    def _auto_reduce(self) -> None:
        removed, removed_at_or_before = self.basis.auto_reduce_once(self.queue.i)
        self.queue.shift(removed_at_or_before)
        self._auto_reduce_pending = False
        self.increment("auto_reductions")
        self.increment("removed_by_auto_reduction", removed)
        if self.config.debug:
            print(f"[auto-reduce] removed {removed} elements, basis size {len(self.basis)}")
