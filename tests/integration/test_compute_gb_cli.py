"""
Integration test for the 4ti2 project runner and file IO.
"""

import numpy as np

from ipgbs.core.fourti2_io import read_matrix, read_vector, read_vectors, write_matrix, write_vectors
from ipgbs.runners.compute_gb import main


def test_fourti2_matrix_files(tmp_path):
    path = tmp_path / "m.mat"
    write_matrix(path, np.array([[1, 0, -1], [0, 2, 3]]))
    assert path.read_text() == "2 3\n1 0 -1\n0 2 3\n"
    assert read_matrix(path).tolist() == [[1, 0, -1], [0, 2, 3]]

    vec = tmp_path / "v.rhs"
    write_matrix(vec, np.array([4, 5]))
    assert vec.read_text() == "1 2\n4 5\n"
    assert read_vector(vec).tolist() == [4, 5]

    empty = tmp_path / "e.gro"
    write_vectors(empty, [], width=5)
    assert read_vectors(empty) == []

    bad = tmp_path / "bad.mat"
    bad.write_text("2 2\n1 2 3\n")
    try:
        read_matrix(bad)
        raise AssertionError("Expected ValueError for a short matrix file")
    except ValueError as e:
        assert "header" in str(e)


def test_compute_gb_writes_gro(tmp_path):
    print("\n" + "=" * 70)
    print("TEST: compute_gb runner")
    print("=" * 70)

    project = tmp_path / "tiny"
    write_matrix(tmp_path / "tiny.mat", np.array([[1, 1]]))
    write_matrix(tmp_path / "tiny.rhs", np.array([1]))
    write_matrix(tmp_path / "tiny.cost", np.array([[1, 2]]))
    write_matrix(tmp_path / "tiny.ub", np.array([1, 1]))

    assert main([str(project), "--quiet"]) == 0
    gro = read_vectors(tmp_path / "tiny.gro")
    assert gro == [[-1, 0, 1, 1, 0], [0, -1, 1, 0, 1], [1, -1, 0, -1, 1]]

    assert main([str(project), "--quiet", "--signatures", "--module-order", "pot"]) == 0
    assert read_vectors(tmp_path / "tiny.gro") == gro

    print("✓ PROJECT.gro written")


def test_compute_gb_reports_missing_files(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "Missing project file" in capsys.readouterr().out


def test_compute_gb_without_bounds_file(tmp_path):
    write_matrix(tmp_path / "k.mat", np.array([[2, 3]]))
    write_matrix(tmp_path / "k.rhs", np.array([5]))
    write_matrix(tmp_path / "k.cost", np.array([[1, 1]]))
    assert main([str(tmp_path / "k"), "--quiet"]) == 0
    assert (tmp_path / "k.gro").exists()
