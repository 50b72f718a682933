"""
The generic Gröbner basis main loop.

run() drives any GBAlgorithm variant through the same sequence for every
critical pair:

    next_pair -> late_pair_elimination -> sbinomial -> is_feasible
              -> reduce -> update | process_zero_reduction

until the variant has no pairs left, then minimalizes the basis and returns
it in 4ti2 form. Elimination, infeasibility and zero reduction are ordinary
outcomes: they are counted in algorithm.stats, never raised.
"""

from typing import List

from ipgbs.algorithms.base import GBAlgorithm
from ipgbs.constraints.instance import IPInstance


def run(algorithm: GBAlgorithm, A, b, C, u, quiet: bool = True) -> List[List[int]]:
    """
    Compute a truncated Gröbner basis of max{Cx : Ax <= b, 0 <= x <= u}.

    Args:
        algorithm: Variant instance (BuchbergerAlgorithm, SignatureAlgorithm, ...)
        A: Constraint matrix (m x n), non-negative integers
        b: Right-hand side (m), non-negative integers
        C: Objective (n or k x n)
        u: Upper bounds (n), non-negative integers
        quiet: If False, print the run statistics at the end

    Returns:
        Basis elements as integer lists over the normalized variables
        (x, slacks of Ax <= b, slacks of x <= u), sorted lexicographically

    Raises:
        InputValidationError: If A, b, C, u are malformed, before any
            algorithmic work is done
    """
    instance = IPInstance(A=A, b=b, C=C, u=u)
    algorithm.initialize(instance)
    debug = algorithm.config.debug
    stats = algorithm.stats

    while True:
        pair = algorithm.next_pair()
        if pair is None:
            break
        stats.increment("dequeued_pairs")
        if debug:
            print(f"[pair] ({pair.first}, {pair.second})")

        if algorithm.late_pair_elimination(pair):
            stats.increment("eliminated_pairs")
            if debug:
                print("  eliminated")
            continue

        binomial = algorithm.sbinomial(pair)
        if debug:
            print(f"  S-binomial {binomial.fullform()}")
        if not algorithm.is_feasible(binomial):
            if debug:
                print("  truncated")
            continue

        reduced_to_zero = algorithm.reduce(binomial)
        if not reduced_to_zero:
            algorithm.update(binomial, pair)
            stats.increment("accepted")
            if debug:
                print(f"  added {binomial.fullform()}")
        else:
            algorithm.process_zero_reduction(binomial, pair)
            if debug:
                print("  reduced to zero")

    basis = algorithm.current_basis()
    basis.reduced_basis()
    output = sorted(basis.fourti2_form())

    if not quiet:
        print(algorithm.stats.summary())
        print(f"Basis size: {len(output)}")
    return output
