"""
Unit tests for IPInstance validation and normalization.
"""

import numpy as np

from ipgbs.constraints.instance import InputValidationError, IPInstance, implied_upper_bounds
from ipgbs.core.matrix_types import UNBOUNDED


def _expect_invalid(**kwargs):
    data = {"A": [[2, 3]], "b": [4], "C": [[1, 1]], "u": [1, 1]}
    data.update(kwargs)
    try:
        IPInstance(**data)
    except InputValidationError as e:
        assert isinstance(e, ValueError)
        return str(e)
    raise AssertionError(f"Expected InputValidationError for {kwargs}")


def test_valid_instance():
    ip = IPInstance(A=[[2, 3]], b=[4], C=[1, 1], u=[1, 1])
    assert (ip.m, ip.n) == (1, 2)
    assert ip.C.shape == (1, 2), "Objective vector should be promoted to a 1 x n matrix"
    assert ip.A.dtype == np.int64


def test_invalid_instances():
    print("\n" + "=" * 70)
    print("TEST: IPInstance validation")
    print("=" * 70)

    assert "dimensional" in _expect_invalid(A=[2, 3])
    assert "b has length" in _expect_invalid(b=[4, 1])
    assert "u has length" in _expect_invalid(u=[1])
    assert "C has 3 columns" in _expect_invalid(C=[[1, 1, 1]])
    assert "non-negative" in _expect_invalid(u=[1, -1])
    assert "integer" in _expect_invalid(u=[0.5, 1])
    assert "finite" in _expect_invalid(C=[[1, float("nan")]])
    assert "numbers" in _expect_invalid(A=[["a", "b"]])

    print("✓ All invalid inputs rejected")


def test_normalize_layout():
    ip = IPInstance(A=[[2, 3]], b=[4], C=[[1, 2]], u=[1, 1])
    nip = ip.normalize()

    expected_A = np.array([
        [2, 3, 1, 0, 0],
        [1, 0, 0, 1, 0],
        [0, 1, 0, 0, 1],
    ])
    assert np.array_equal(nip.A, expected_A)
    assert nip.b.tolist() == [4, 1, 1]
    assert nip.cost.tolist() == [[-1.0, -2.0, 0.0, 0.0, 0.0]]
    assert nip.u[:2].tolist() == [1, 1]
    assert all(x == UNBOUNDED for x in nip.u[2:])
    assert nip.bounded_end == 2
    assert nip.num_variables == 5


def test_lift_and_project():
    ip = IPInstance(A=[[2, 3]], b=[4], C=[[1, 2]], u=[1, 1])
    nip = ip.normalize()
    z = nip.lift([1, 0])
    assert z.tolist() == [1, 0, 2, 0, 1]
    assert np.array_equal(nip.A @ z, nip.b)
    assert nip.project(z).tolist() == [1, 0]


def test_feasible_solution_and_objective():
    ip = IPInstance(A=[[2, 3]], b=[4], C=[[1, 2]], u=[1, 1])
    assert ip.is_feasible_solution([1, 0])
    assert not ip.is_feasible_solution([1, 1])
    assert not ip.is_feasible_solution([2, 0])
    assert ip.objective_value([0, 1]) == 2.0


def test_implied_upper_bounds():
    u = implied_upper_bounds([[2, 3, 0], [1, 0, 4]], [5, 9])
    assert u.tolist() == [2, 1, 2]

    try:
        implied_upper_bounds([[1, 0]], [3])
        raise AssertionError("Expected InputValidationError for an unbounded variable")
    except InputValidationError as e:
        assert "unbounded" in str(e)


def test_mixed_sign_data_is_accepted():
    ip = IPInstance(A=[[2, -3]], b=[-1], C=[[1, 1]], u=[2, 2])
    assert ip.is_feasible_solution([1, 1])
    assert not ip.is_feasible_solution([1, 0])
    nip = ip.normalize()
    assert nip.A[0].tolist() == [2, -3, 1, 0, 0]
    assert nip.lift([1, 1]).tolist() == [1, 1, 0, 1, 1]


def test_large_integers_are_exact_or_rejected():
    big = 2 ** 60 + 1
    ip = IPInstance(A=[[1, 1]], b=[big], C=[[1, 1]], u=[1, 1])
    assert int(ip.b[0]) == big, "Integers must not go through floats"

    assert "64-bit" in _expect_invalid(b=[2 ** 70])
    assert "2**53" in _expect_invalid(b=[float(2 ** 60)])
    assert "integers" in _expect_invalid(b=[None])


def test_implied_bounds_ignore_rows_with_negative_entries():
    # Row 0 has a negative entry and bounds nothing on its own
    u = implied_upper_bounds([[1, -1], [2, 1]], [0, 5])
    assert u.tolist() == [2, 5]

    try:
        implied_upper_bounds([[1, -1]], [3])
        raise AssertionError("Expected InputValidationError for an unbounded variable")
    except InputValidationError as e:
        assert "unbounded" in str(e)
