"""
GBAlgorithm: the interface every Gröbner basis variant implements.

The generic main loop (ipgbs.algorithms.driver.run) only talks to a variant
through this interface. A variant must implement initialize, next_pair,
current_basis and update; instantiating a subclass that misses one of them
raises TypeError.

Shared helpers (sbinomial, is_feasible, reduce) keep the run statistics
and delegate the algebra to the variant's basis and truncator.
"""

from abc import ABC, abstractmethod
from typing import Optional

from ipgbs.algebra.binomial_set import BinomialSet
from ipgbs.algebra.binomials import Binomial
from ipgbs.algebra.orders import MonomialOrder
from ipgbs.algorithms.config import GBConfig
from ipgbs.algorithms.critical_pairs import CriticalPair
from ipgbs.constraints.instance import IPInstance, NormalizedIP
from ipgbs.constraints.truncation import TRUNCATION_TYPES, Truncator
from ipgbs.diagnostics.stats import GBStats


class GBAlgorithm(ABC):
    """
    Base class of Gröbner basis algorithm variants.

    Args:
        truncation_type: Feasibility filter for S-binomials, one of
            "simple", "lp", "ip", "none", "heuristic"
        config: Run configuration (defaults to GBConfig())

    Raises:
        ValueError: If truncation_type is unknown
    """

    def __init__(self, truncation_type: str = "heuristic", config: Optional[GBConfig] = None):
        if truncation_type not in TRUNCATION_TYPES:
            raise ValueError(
                f"Unknown truncation type: {truncation_type}. Expected one of {TRUNCATION_TYPES}"
            )
        self.truncation_type = truncation_type
        self.config = config if config is not None else GBConfig()
        self.stats = GBStats()
        self.instance: Optional[IPInstance] = None
        self.normalized: Optional[NormalizedIP] = None
        self.order: Optional[MonomialOrder] = None
        self.truncator: Optional[Truncator] = None

    def setup(self, instance: IPInstance) -> None:
        """Normalize instance and build the monomial order and truncator."""
        self.instance = instance
        self.normalized = instance.normalize()
        self.order = MonomialOrder(self.normalized.cost, self.normalized.A)
        self.truncator = Truncator(
            self.normalized.A, self.normalized.b, self.normalized.u, self.truncation_type
        )

    # ------------------------------------------------------------------
    # Variant interface
    # ------------------------------------------------------------------

    @abstractmethod
    def initialize(self, instance: IPInstance) -> None:
        """Set up the basis and pair state for instance."""

    @abstractmethod
    def next_pair(self) -> Optional[CriticalPair]:
        """Next pair to process, or None when the computation is done."""

    @abstractmethod
    def current_basis(self) -> BinomialSet:
        ...

    @abstractmethod
    def update(self, element: Binomial, pair: Optional[CriticalPair] = None) -> None:
        """Add element to the basis and register its new pairs."""

    def late_pair_elimination(self, pair: CriticalPair) -> bool:
        return False

    def process_zero_reduction(self, element: Binomial, pair: Optional[CriticalPair] = None) -> None:
        pass

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def increment(self, name: str, amount: int = 1) -> None:
        self.stats.increment(name, amount)

    def sbinomial(self, pair: CriticalPair) -> Binomial:
        self.increment("built_pairs")
        return self.build_sbinomial(pair)

    def build_sbinomial(self, pair: CriticalPair) -> Binomial:
        return self.current_basis().sbinomial(pair.first, pair.second)

    def is_feasible(self, binomial: Binomial) -> bool:
        if self.truncator(binomial.data):
            return True
        self.increment("eliminated_by_truncation")
        return False

    def reduce(self, binomial: Binomial) -> bool:
        """
        Reduce binomial in place by the current basis.

        Returns:
            True iff binomial reduced to zero
        """
        self.increment("reduced_pairs")
        reduced_to_zero = self.reduce_element(binomial)
        if reduced_to_zero:
            self.increment("zero_reductions")
        return reduced_to_zero

    def reduce_element(self, binomial: Binomial) -> bool:
        return self.current_basis().reduce(binomial)
