"""
Integration tests: truncated Gröbner bases of small binary knapsacks.

A truncated Gröbner basis is a test set: reducing any feasible solution by
it must reach an optimal solution. Optimality is checked against brute force
enumeration of all 0/1 points.
"""

import itertools

import numpy as np

from ipgbs import IPInstance, groebner_basis, initialize_parameters, optimize_with, run
from ipgbs.algorithms.buchberger import BuchbergerAlgorithm


def brute_force_optimum(ip: IPInstance) -> float:
    best = None
    for x in itertools.product(*[range(int(ui) + 1) for ui in ip.u]):
        if ip.is_feasible_solution(x):
            value = ip.objective_value(x)
            if best is None or value > best:
                best = value
    return best


def feasible_points(ip: IPInstance):
    return [
        list(x) for x in itertools.product(*[range(int(ui) + 1) for ui in ip.u])
        if ip.is_feasible_solution(x)
    ]


def check_test_set(ip: IPInstance, basis):
    optimum = brute_force_optimum(ip)
    for x in feasible_points(ip):
        improved = optimize_with(x, ip, basis)
        assert ip.is_feasible_solution(improved), f"Lost feasibility from {x}"
        assert abs(ip.objective_value(improved) - optimum) < 1e-9, \
            f"From {x}: reached {improved.tolist()} with value " \
            f"{ip.objective_value(improved)}, optimum is {optimum}"


def test_tiny_instance_basis():
    basis = groebner_basis([[1, 1]], [1], [[1, 2]], [1, 1])
    assert basis == [[-1, 0, 1, 1, 0], [0, -1, 1, 0, 1], [1, -1, 0, -1, 1]]


def test_knapsack_optimality():
    print("\n" + "=" * 70)
    print("TEST: Knapsack test set optimality")
    print("=" * 70)

    ip = IPInstance(A=[[2, 3, 4]], b=[5], C=[[3, 4, 5]], u=[1, 1, 1])
    assert brute_force_optimum(ip) == 7.0

    basis = groebner_basis(ip.A, ip.b, ip.C, ip.u, quiet=False)
    nip = ip.normalize()
    for v in basis:
        assert not np.any(nip.A @ np.array(v)), f"{v} is not in the lattice"

    check_test_set(ip, basis)
    assert optimize_with([0, 0, 0], ip, basis).tolist() == [1, 1, 0]

    print(f"✓ {len(basis)} basis elements, optimum 7 reached from every feasible point")


def test_truncation_types_agree_on_optimum():
    ip = IPInstance(A=[[2, 3, 4]], b=[5], C=[[3, 4, 5]], u=[1, 1, 1])
    for truncation_type in ("simple", "lp", "ip", "heuristic"):
        basis = groebner_basis(ip.A, ip.b, ip.C, ip.u, truncation_type=truncation_type)
        check_test_set(ip, basis)


def test_auto_reduction_keeps_test_set_property():
    ip = IPInstance(A=[[3, 5, 2, 4], [1, 2, 3, 1]], b=[9, 5], C=[[4, 7, 3, 5]], u=[1, 1, 1, 1])
    for freq in (0, 1, 3):
        config = initialize_parameters(auto_reduce_freq=freq)
        algorithm = BuchbergerAlgorithm(truncation_type="simple", config=config)
        basis = run(algorithm, ip.A, ip.b, ip.C, ip.u)
        check_test_set(ip, basis)
        if freq > 0:
            assert algorithm.stats.auto_reductions >= 1 or algorithm.stats.accepted < freq


def test_random_knapsacks():
    rng = np.random.default_rng(11)
    for _ in range(3):
        n = 4
        A = rng.integers(1, 6, size=(1, n))
        b = [int(A.sum() // 2)]
        C = rng.integers(1, 8, size=(1, n))
        ip = IPInstance(A=A, b=b, C=C, u=[1] * n)
        basis = groebner_basis(ip.A, ip.b, ip.C, ip.u)
        check_test_set(ip, basis)


def test_implied_bounds():
    # u defaults to floor(b / a_i) = [2, 1]
    basis = groebner_basis([[2, 3]], [5], [[1, 1]])
    ip = IPInstance(A=[[2, 3]], b=[5], C=[[1, 1]], u=[2, 1])
    check_test_set(ip, basis)


def test_tiny_basis_is_groebner_basis():
    algorithm = BuchbergerAlgorithm()
    run(algorithm, [[1, 1]], [1], [[1, 2]], [1, 1])
    basis = algorithm.current_basis()
    assert basis.is_groebner_basis()
    assert basis.is_truncated_groebner_basis(algorithm.truncator)
