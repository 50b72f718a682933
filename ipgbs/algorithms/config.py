"""
Run configuration for Gröbner basis algorithms.

A GBConfig is an immutable value handed to each algorithm at construction,
so independent runs in the same process never share mutable settings.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class GBConfig:
    """
    Tunables of a single run.

    Attributes:
        auto_reduce_freq: Interreduce the basis after every N accepted
            updates (plain Buchberger variant only); 0 disables it
        debug: Print a trace of every main loop step; never changes results

    Example:
        >>> GBConfig()
        GBConfig(auto_reduce_freq=5, debug=False)
    """
    auto_reduce_freq: int = 5
    debug: bool = False

    def __post_init__(self):
        if isinstance(self.auto_reduce_freq, bool) or not isinstance(self.auto_reduce_freq, int):
            raise ValueError(
                f"auto_reduce_freq must be an integer, got {self.auto_reduce_freq!r}"
            )
        if self.auto_reduce_freq < 0:
            raise ValueError(
                f"auto_reduce_freq must be non-negative, got {self.auto_reduce_freq}"
            )
        if not isinstance(self.debug, bool):
            raise ValueError(f"debug must be a bool, got {self.debug!r}")


def initialize_parameters(auto_reduce_freq: int = 5, debug: bool = False) -> GBConfig:
    """
    Build the configuration for a run.

    Args:
        auto_reduce_freq: Non-negative interreduction frequency (0 = off)
        debug: Enable step tracing

    Returns:
        GBConfig to pass to an algorithm constructor

    Raises:
        ValueError: If a value is out of range or of the wrong type
    """
    return GBConfig(auto_reduce_freq=auto_reduce_freq, debug=debug)
