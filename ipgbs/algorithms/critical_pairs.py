"""
Critical pairs: candidate reductions between two basis elements.

A pair refers to basis elements by their positions in the basis at the time
the pair was created. first != second for every pair.

Variants:
  - BasicPair(i, j):               plain Buchberger pair
  - SignaturePair(i, j, signature): pair with the signature of its S-pair
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ipgbs.algebra.signatures import Signature


class CriticalPair(ABC):
    """Interface of every critical pair variant."""

    @property
    @abstractmethod
    def first(self) -> int:
        ...

    @property
    @abstractmethod
    def second(self) -> int:
        ...


def _check_positions(i: int, j: int) -> None:
    if i == j:
        raise ValueError(f"A critical pair needs two distinct basis elements, got ({i}, {j})")
    if i < 0 or j < 0:
        raise ValueError(f"Basis positions must be non-negative, got ({i}, {j})")


@dataclass(frozen=True)
class BasicPair(CriticalPair):
    i: int
    j: int

    def __post_init__(self):
        _check_positions(self.i, self.j)

    @property
    def first(self) -> int:
        return self.i

    @property
    def second(self) -> int:
        return self.j


@dataclass(frozen=True, eq=False)
class SignaturePair(CriticalPair):
    i: int
    j: int
    signature: Signature

    def __post_init__(self):
        _check_positions(self.i, self.j)

    @property
    def first(self) -> int:
        return self.i

    @property
    def second(self) -> int:
        return self.j


def first(pair: CriticalPair) -> int:
    return pair.first


def second(pair: CriticalPair) -> int:
    return pair.second
