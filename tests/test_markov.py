"""
Unit tests for Markov bases of normalized programs.
"""

import itertools

import numpy as np

from ipgbs.algebra.binomial_set import BinomialSet
from ipgbs.algebra.binomials import Binomial, lattice_generator
from ipgbs.algebra.markov import (
    complete,
    initial_generators,
    markov_basis,
    saturation_order,
    saturation_variables,
)
from ipgbs.algebra.orders import MonomialOrder
from ipgbs.constraints.instance import IPInstance

# |x0 - x1| <= 1: both columns mix signs, so the lattice generators
# x0 s1 - s0 t0 and x1 s0 - s1 t1 miss x0 x1 - t0 t1
MIXED = IPInstance(A=[[1, -1], [-1, 1]], b=[1, 1], C=[[1, 2]], u=[2, 2])


def test_saturation_variables():
    nip = IPInstance(A=[[2, 3], [1, 1]], b=[4, 2], C=[[1, 1]], u=[1, 1]).normalize()
    assert saturation_variables(nip) == []

    nip = IPInstance(A=[[2, 3], [1, -1]], b=[4, 0], C=[[1, 1]], u=[1, 1]).normalize()
    # Slack of row 1 sits after the two original variables
    assert saturation_variables(nip) == [3]


def test_saturation_order_puts_variable_last():
    order = saturation_order(np.array([1.0, 1.0, 1.0]), 0)
    # Same degree: the monomial with more x0 is smaller
    assert order.cmp_monomials(np.array([1, 0, 0]), np.array([0, 1, 0])) == -1
    assert order.cmp_monomials(np.array([0, 0, 1]), np.array([0, 1, 0])) == -1
    # Degree decides first
    assert order.cmp_monomials(np.array([2, 0, 0]), np.array([0, 1, 0])) == 1


def test_non_negative_data_keeps_lattice_generators():
    nip = IPInstance(A=[[2, 3, 4]], b=[5], C=[[3, 4, 5]], u=[1, 1, 1]).normalize()
    basis = markov_basis(nip)
    assert [v.tolist() for v in basis] == [lattice_generator(i, nip).tolist() for i in range(3)]


def test_complete_gives_groebner_basis():
    order = MonomialOrder(np.array([[2.0, 2.0, 1.0, 1.0]]))
    basis = complete([np.array([1, 0, -1, 0]), np.array([1, 1, 0, -1])], order)
    assert BinomialSet(order, [Binomial(v) for v in basis]).is_groebner_basis()


def test_markov_basis_generates_lattice_ideal():
    print("\n" + "=" * 70)
    print("TEST: Markov basis of a mixed-sign program")
    print("=" * 70)

    nip = MIXED.normalize()
    markov = markov_basis(nip)
    assert len(markov) >= 2
    for v in markov:
        assert not np.any(nip.A @ v), f"{v.tolist()} is not in the lattice"

    # Any Gröbner basis of the lattice ideal reduces every lattice vector to zero
    order = saturation_order(np.ones(nip.num_variables), 0)
    gb = BinomialSet(order, [Binomial(v) for v in complete(markov, order)])
    for x in itertools.product(range(-2, 3), repeat=2):
        if not any(x):
            continue
        x = np.array(x, dtype=np.int64)
        lattice_vector = np.concatenate([x, -(MIXED.A @ x), -x])
        g = Binomial(order.orientate(lattice_vector))
        assert gb.reduce(g), f"{lattice_vector.tolist()} does not reduce to zero"

    print(f"✓ {len(markov)} generators, every small lattice vector reduces to zero")


def test_initial_generators_use_given_filter():
    nip = MIXED.normalize()
    order = MonomialOrder(nip.cost, nip.A)
    everything = initial_generators(nip, order, lambda v: True)
    assert len(everything) == len(markov_basis(nip))
    for g in everything:
        assert order.cmp(g.data) == 1, "Generators must be oriented"
    assert initial_generators(nip, order, lambda v: False) == []
