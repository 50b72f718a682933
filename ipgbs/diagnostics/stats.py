"""
Run statistics for Gröbner basis computations.

GBStats counts what happened to every critical pair in a run of the main
loop. Each dequeued pair ends in exactly one of:

  eliminated_pairs         discarded by a variant's late elimination
  eliminated_by_truncation S-binomial rejected by the feasibility filter
  zero_reductions          S-binomial reduced to zero
  accepted                 S-binomial added to the basis

so that built_pairs == eliminated_by_truncation + reduced_pairs and
reduced_pairs == zero_reductions + accepted.
"""

from dataclasses import asdict, dataclass, field
from typing import Dict


@dataclass
class GBStats:
    """
    Counters of a single Gröbner basis run.

    Attributes:
        dequeued_pairs: Pairs returned by next_pair()
        eliminated_pairs: Pairs discarded by late elimination
        built_pairs: S-binomials built
        eliminated_by_truncation: S-binomials rejected as infeasible
        reduced_pairs: S-binomials reduced
        zero_reductions: S-binomials that reduced to zero
        accepted: S-binomials added to the basis
        auto_reductions: Interreduction passes of the basis
        removed_by_auto_reduction: Elements removed by interreduction
        extra: Variant-specific counters (e.g. "gcd_criterion", "koszul_criterion")
    """
    dequeued_pairs: int = 0
    eliminated_pairs: int = 0
    built_pairs: int = 0
    eliminated_by_truncation: int = 0
    reduced_pairs: int = 0
    zero_reductions: int = 0
    accepted: int = 0
    auto_reductions: int = 0
    removed_by_auto_reduction: int = 0
    extra: Dict[str, int] = field(default_factory=dict)

    def increment(self, name: str, amount: int = 1) -> None:
        """
        Add amount to the counter called name.

        Unknown names are kept in self.extra.
        """
        if name != "extra" and hasattr(self, name):
            setattr(self, name, getattr(self, name) + amount)
        else:
            self.extra[name] = self.extra.get(name, 0) + amount

    def as_dict(self) -> Dict[str, int]:
        d = asdict(self)
        extra = d.pop("extra")
        d.update(extra)
        return d

    def summary(self) -> str:
        lines = ["=" * 70, "Gröbner basis run statistics", "=" * 70]
        for name, value in self.as_dict().items():
            lines.append(f"  {name:<28} {value}")
        return "\n".join(lines)
