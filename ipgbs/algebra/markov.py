"""
Markov bases of normalized programs: generating sets of the lattice ideal.

Lattice generator i of the normalized program is the vector (e_i, -A_i, -e_i),
that is the binomial

    x_i · s^{A_i-}  -  s^{A_i+} · t_i

where A_i+ and A_i- are the positive and negative parts of column i of A.
When A is non-negative this is x_i - s^{A_i} t_i, and these binomials
already generate the lattice ideal. Otherwise the ideal they generate has to
be saturated by the slacks s_j of the rows of A with a negative entry: after
inverting those slacks every x_i can be eliminated, so the saturation is
prime and equals the lattice ideal.

Saturation by one variable follows Hosten and Sturmfels: complete the
generators to a Gröbner basis under a graded reverse lexicographic order in
which that variable is the smallest one, then divide every element by its
largest power of the variable. Binomials are stored as exponent differences,
so the division is already done.

Example:
    >>> nip = IPInstance(A=[[1, -1]], b=[0], C=[[1, 1]], u=[1, 1]).normalize()
    >>> saturation_variables(nip)
    [2]
"""

from typing import Callable, List, Optional

import numpy as np

from ipgbs.algebra.binomial_set import BinomialSet
from ipgbs.algebra.binomials import Binomial, lattice_generator
from ipgbs.algebra.orders import MonomialOrder
from ipgbs.algorithms.pair_queue import FIFOPairQueue
from ipgbs.constraints.instance import NormalizedIP
from ipgbs.constraints.truncation import Truncator
from ipgbs.core.matrix_types import IntVector
from ipgbs.solver.lp_solver import positive_row_span


def saturation_variables(nip: NormalizedIP) -> List[int]:
    """Coordinates of the slacks s_j of the rows of A with a negative entry."""
    m = nip.m_original
    rows = np.flatnonzero(np.any(nip.A[:m] < 0, axis=1))
    return [nip.n_original + int(j) for j in rows]


def saturation_order(grading: np.ndarray, k: int) -> MonomialOrder:
    """
    Graded reverse lexicographic order with variable k as the smallest variable.

    Args:
        grading: Strictly positive weight vector; every lattice vector has
            weight zero
        k: Variable to saturate by
    """
    n = grading.shape[0]
    identity = np.eye(n)
    rows = [np.asarray(grading, dtype=float), -identity[k]]
    rows.extend(-identity[j] for j in range(n - 1, -1, -1) if j != k)
    return MonomialOrder(np.vstack(rows))


def complete(generators: List[IntVector], order: MonomialOrder) -> List[IntVector]:
    """
    Buchberger completion of generators under order, without truncation.

    Returns:
        The minimal Gröbner basis of the ideal the generators span, as
        oriented vectors
    """
    basis = BinomialSet(order)
    for v in generators:
        basis.add(Binomial(order.orientate(np.asarray(v, dtype=np.int64))))

    queue = FIFOPairQueue(basis)
    while True:
        pair = queue.next_pair()
        if pair is None:
            break
        # bounded_end=0: only the GCD criterion applies to a full basis
        if basis.is_support_reducible(pair.first, pair.second, 0):
            continue
        s = basis.sbinomial(pair.first, pair.second)
        if not basis.reduce(s):
            basis.add(s.orientate(order))

    basis.minimal_basis()
    return [g.data for g in basis]


def markov_basis(nip: NormalizedIP) -> List[IntVector]:
    """
    A generating set of the lattice ideal of nip, as unoriented vectors.

    The lattice generators are returned as they are when no row of A has a
    negative entry. Otherwise they are saturated by one slack at a time.
    """
    generators = [lattice_generator(i, nip) for i in range(nip.n_original)]
    variables = saturation_variables(nip)
    if not variables:
        return generators

    grading = positive_row_span(nip.A)
    for k in variables:
        generators = complete(generators, saturation_order(grading, k))
    return generators


def initial_generators(
    nip: NormalizedIP,
    order: MonomialOrder,
    is_feasible: Optional[Callable[[IntVector], bool]] = None
) -> List[Binomial]:
    """
    Oriented Markov basis of the normalized program.

    Generators rejected by is_feasible (whose monomials can never both
    appear in a feasible solution) are left out.

    Args:
        nip: Normalized program
        order: Order the generators are oriented by
        is_feasible: Truncation filter; defaults to the heuristic Truncator

    Returns:
        List of Binomial; lattice generators come in variable order
    """
    if is_feasible is None:
        is_feasible = Truncator(nip.A, nip.b, nip.u, "heuristic")
    return [
        Binomial(order.orientate(v))
        for v in markov_basis(nip)
        if is_feasible(v)
    ]
