"""
Pair queues owned by the algorithm variants.

FIFOPairQueue generates Buchberger pairs lazily, batch by batch: once the
basis has k elements, batch i is (i, 0), (i, 1), ..., (i, i-1). New basis
elements extend the queue by their own batch without storing any pairs.

SignaturePairQueue is a priority queue of SignaturePairs by increasing
signature. Pairs with equal signatures come out in insertion order.
"""

import heapq
import itertools
from typing import Dict, Iterable, List, Optional

from ipgbs.algebra.signatures import ModuleMonomialOrdering, Signature
from ipgbs.algorithms.critical_pairs import BasicPair, SignaturePair


class FIFOPairQueue:
    """
    Lazy queue of all pairs (i, j), j < i, of a growing sequence.

    Args:
        basis: Any sized sequence; only its length is read
    """

    def __init__(self, basis):
        self.basis = basis
        self.i = 0
        self.j = -1

    def next_pair(self) -> Optional[BasicPair]:
        while True:
            if self.j + 1 < self.i:
                self.j += 1
                return BasicPair(self.i, self.j)
            if self.i + 1 >= len(self.basis):
                return None
            self.i += 1
            self.j = -1

    def at_batch_boundary(self) -> bool:
        """True iff every pair of the current batch has been returned."""
        return self.j == self.i - 1

    def shift(self, removed_at_or_before: int) -> None:
        """
        Account for basis elements deleted at positions <= self.i.

        The current batch is closed, so the next pair starts the batch of the
        element now following position self.i.
        """
        self.i -= removed_at_or_before
        self.j = self.i - 1


class _HeapEntry:
    __slots__ = ("signature", "seq", "item", "ordering")

    def __init__(self, signature: Signature, seq: int, item, ordering: ModuleMonomialOrdering):
        self.signature = signature
        self.seq = seq
        self.item = item
        self.ordering = ordering

    def __lt__(self, other: "_HeapEntry") -> bool:
        if self.ordering.lt(self.signature, other.signature):
            return True
        if self.ordering.lt(other.signature, self.signature):
            return False
        return self.seq < other.seq


class SignaturePairQueue:
    """
    Priority queue of SignaturePairs by increasing signature.
    """

    def __init__(self, ordering: ModuleMonomialOrdering):
        self.ordering = ordering
        self._heap: List[_HeapEntry] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, pair: SignaturePair) -> None:
        entry = _HeapEntry(pair.signature, next(self._counter), pair, self.ordering)
        heapq.heappush(self._heap, entry)

    def push_batch(self, pairs: Iterable[SignaturePair]) -> None:
        for pair in pairs:
            self.push(pair)

    def next_pair(self) -> Optional[SignaturePair]:
        if not self._heap:
            return None
        return heapq.heappop(self._heap).item


class SignatureHeap:
    """
    Min-heap of signatures, queried in increasing signature order.

    contains() pops every signature smaller than the query, so queries must
    come in non-decreasing order to find all matches. A missed match only
    means a pair is not eliminated. has() is a constant-time membership test
    on the pending signatures.
    """

    def __init__(self, ordering: ModuleMonomialOrdering):
        self.ordering = ordering
        self._heap: List[_HeapEntry] = []
        self._counter = itertools.count()
        # Pending signature -> number of copies in the heap
        self._pending: Dict[Signature, int] = {}

    def __len__(self) -> int:
        return len(self._heap)

    def push(self, signature: Signature) -> None:
        heapq.heappush(
            self._heap, _HeapEntry(signature, next(self._counter), signature, self.ordering)
        )
        self._pending[signature] = self._pending.get(signature, 0) + 1

    def contains(self, signature: Signature) -> bool:
        while self._heap and self.ordering.lt(self._heap[0].signature, signature):
            self._discard(heapq.heappop(self._heap).signature)
        return bool(self._heap) and self._heap[0].signature == signature

    def has(self, signature: Signature) -> bool:
        """Membership test that leaves the heap untouched."""
        return signature in self._pending

    def _discard(self, signature: Signature) -> None:
        count = self._pending[signature] - 1
        if count:
            self._pending[signature] = count
        else:
            del self._pending[signature]
