"""
Top-level Gröbner basis computation.

groebner_basis() picks the algorithm variant from its arguments, fills in
implied upper bounds when none are given, and runs the generic main loop.
"""

from typing import List, Optional

from ipgbs.algorithms.base import GBAlgorithm
from ipgbs.algorithms.buchberger import BuchbergerAlgorithm
from ipgbs.algorithms.config import GBConfig
from ipgbs.algorithms.driver import run
from ipgbs.algorithms.signature import SignatureAlgorithm
from ipgbs.constraints.instance import implied_upper_bounds


def make_algorithm(
    use_signatures: bool = False,
    module_order: str = "ltpot",
    truncation_type: str = "heuristic",
    config: Optional[GBConfig] = None
) -> GBAlgorithm:
    """
    Build the algorithm variant for a run.

    Raises:
        ValueError: On an unknown module_order or truncation_type
    """
    if use_signatures:
        return SignatureAlgorithm(
            module_order=module_order, truncation_type=truncation_type, config=config
        )
    return BuchbergerAlgorithm(truncation_type=truncation_type, config=config)


def groebner_basis(
    A,
    b,
    C,
    u=None,
    use_signatures: bool = False,
    module_order: str = "ltpot",
    truncation_type: str = "heuristic",
    config: Optional[GBConfig] = None,
    quiet: bool = True
) -> List[List[int]]:
    """
    Compute a truncated Gröbner basis of max{Cx : Ax <= b, 0 <= x <= u}.

    Args:
        A, b, C: Program data (see ipgbs.constraints.instance.IPInstance)
        u: Upper bounds; when None, u_i = min_r floor(b_r / A_ri)
        use_signatures: Use the signature-based variant instead of Buchberger
        module_order: Module order of the signature variant
        truncation_type: "simple", "lp", "ip", "none" or "heuristic"
        config: Run configuration
        quiet: If False, print run statistics

    Returns:
        Basis as sorted integer lists over (x, slacks, bound slacks)

    Raises:
        InputValidationError: On malformed data, or if u is None and some
            variable is not bounded by A x <= b
        ValueError: On unknown option values

    Example:
        >>> groebner_basis([[1, 1]], [1], [1, 2], [1, 1])
        [[-1, 0, 1, 1, 0], [0, -1, 1, 0, 1], [1, -1, 0, -1, 1]]
    """
    if u is None:
        u = implied_upper_bounds(A, b)
    algorithm = make_algorithm(
        use_signatures=use_signatures,
        module_order=module_order,
        truncation_type=truncation_type,
        config=config,
    )
    return run(algorithm, A, b, C, u, quiet=quiet)
