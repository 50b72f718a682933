"""
Optimization of feasible solutions with a test set.

A truncated Gröbner basis G of the program is a test set: starting from any
feasible solution, repeatedly replacing z by z - h for an h in G with
h+ <= z strictly improves the objective, and when no such h exists the
solution is optimal.
"""

from typing import Sequence

import numpy as np

from ipgbs.algebra.binomials import reduction_factor
from ipgbs.algebra.support_tree import SupportTree
from ipgbs.constraints.instance import IPInstance
from ipgbs.core.matrix_types import IntVector, positive_part


def optimize_with(solution: Sequence[int], instance: IPInstance, test_set) -> IntVector:
    """
    Improve a feasible solution with a test set until it is optimal.

    Args:
        solution: Feasible x of the original program (length n)
        instance: The program
        test_set: Basis vectors over the normalized variables, as returned
            by groebner_basis / run

    Returns:
        Improved solution x (length n)

    Raises:
        ValueError: If solution is not feasible for instance

    Example:
        >>> ip = IPInstance(A=[[1, 1]], b=[1], C=[[1, 2]], u=[1, 1])
        >>> gb = groebner_basis(ip.A, ip.b, ip.C, ip.u)
        >>> optimize_with([0, 0], ip, gb)
        array([0, 1])
    """
    if not instance.is_feasible_solution(solution):
        raise ValueError(f"Solution {list(solution)} is not feasible for the instance")

    normalized = instance.normalize()
    z = normalized.lift(solution)

    tree = SupportTree()
    for v in test_set:
        h = np.asarray(v, dtype=np.int64)
        tree.insert(h, positive_part(h))

    while True:
        h = tree.find_divisor(z)
        if h is None:
            break
        z = z - reduction_factor(z, h) * h

    return normalized.project(z)
