"""
Unit tests for truncation filters and the pulp feasibility models.
"""

import numpy as np

from ipgbs.algebra.binomials import lattice_generator
from ipgbs.constraints.instance import IPInstance
from ipgbs.constraints.truncation import Truncator, simple_truncation
from ipgbs.core.matrix_types import UNBOUNDED
from ipgbs.solver.lp_solver import is_fiber_feasible, positive_row_span


def test_simple_truncation_degree_bounds():
    A = np.array([[2, 3]])
    b = np.array([4])
    u = np.array([1, 1])
    assert simple_truncation(np.array([1, -1]), A, b, u)
    assert not simple_truncation(np.array([2, -1]), A, b, u), "x0 exceeds its bound"
    assert not simple_truncation(np.array([0, 2]), np.array([[2, 3]]), b, np.array([2, 2])), \
        "A·head exceeds b"


def test_fiber_feasibility_lp_vs_ip():
    print("\n" + "=" * 70)
    print("TEST: Fiber feasibility (LP vs IP)")
    print("=" * 70)

    A = np.array([[1, 1]])
    b = np.array([1])
    u = np.array([1, 1])
    assert is_fiber_feasible(A, b, u, np.array([1, 0]))
    assert not is_fiber_feasible(A, b, u, np.array([1, 1]))

    # 2z = 1 has a fractional solution only
    A = np.array([[2]])
    b = np.array([1])
    u = np.array([UNBOUNDED])
    v = np.array([0])
    assert is_fiber_feasible(A, b, u, v, integer=False)
    assert not is_fiber_feasible(A, b, u, v, integer=True)

    print("✓ LP relaxation feasible, IP infeasible")


def test_model_truncation_agrees_with_simple_on_knapsack():
    ip = IPInstance(A=[[2, 3, 4]], b=[5], C=[[3, 4, 5]], u=[1, 1, 1])
    nip = ip.normalize()
    simple = Truncator(nip.A, nip.b, nip.u, "simple")
    lp = Truncator(nip.A, nip.b, nip.u, "lp")
    ipt = Truncator(nip.A, nip.b, nip.u, "ip")

    g0 = lattice_generator(0, nip)
    g1 = lattice_generator(1, nip)
    candidates = [g0, g1, g0 - g1, g1 - lattice_generator(2, nip), 2 * g0]
    for v in candidates:
        expected = simple(v)
        assert lp(v) == expected, f"LP truncation disagrees on {v.tolist()}"
        assert ipt(v) == expected, f"IP truncation disagrees on {v.tolist()}"
    assert not simple(2 * g0)


def test_truncator_options():
    A = np.array([[1, 1]])
    b = np.array([1])
    u = np.array([1, 1])
    assert Truncator(A, b, u, "heuristic").truncation_type == "simple"
    assert Truncator(A, b, u, "none")(np.array([5, -5]))
    try:
        Truncator(A, b, u, "exact")
        raise AssertionError("Expected ValueError for unknown truncation type")
    except ValueError as e:
        assert "exact" in str(e)


def test_positive_row_span():
    A = np.array([[1, 1, 1, 0], [1, 0, 0, 1]])
    d = positive_row_span(A)
    assert np.all(d > 0)

    # Column 1 sums to zero: needs the LP
    A = np.array([[1, 1], [0, -1], [1, 0]])
    d = positive_row_span(A)
    assert np.all(d > 0)


def test_simple_truncation_skips_rows_with_negative_entries():
    A = np.array([[1, -1], [2, 1]])
    b = np.array([0, 5])
    u = np.array([3, 3])
    # Row 0 would reject the head x0^2, but x0 - x1 <= 0 bounds nothing
    assert simple_truncation(np.array([2, -1]), A, b, u)
    assert not simple_truncation(np.array([3, -1]), A, b, u), "Row 1 bounds the head by 5"
