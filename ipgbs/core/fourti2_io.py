"""
4ti2 matrix file IO utilities.

4ti2 stores every matrix (and every vector, as a 1 x n matrix) in a plain
text file with a header line followed by one line per row:

    2 3
    1 0 -1
    0 1 1

Project files used by the runners:
  - PROJECT.mat:  constraint matrix A (m x n)
  - PROJECT.rhs:  right-hand side b (1 x m)
  - PROJECT.cost: cost matrix C (k x n), maximized
  - PROJECT.ub:   upper bounds u (1 x n)
  - PROJECT.gro:  computed Gröbner basis (one binomial per row)
"""

from pathlib import Path
from typing import List, Sequence

import numpy as np

from ipgbs.core.matrix_types import IntMatrix, IntVector


def write_matrix(path: Path, matrix: np.ndarray) -> None:
    """
    Write a 1D or 2D array to a 4ti2 matrix file.

    1D arrays are written as a single row (1 x n), as 4ti2 expects for
    right-hand sides, costs and bounds.

    Args:
        path: Destination file
        matrix: Array to write (entries are written as integers when integral)
    """
    arr = np.asarray(matrix)
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2:
        raise ValueError(f"Can only write 1D or 2D arrays, got ndim={arr.ndim}")

    rows, cols = arr.shape
    with open(path, 'w') as f:
        f.write(f"{rows} {cols}\n")
        for row in arr:
            f.write(' '.join(_format_entry(val) for val in row) + "\n")


def write_vectors(path: Path, vectors: Sequence[Sequence[int]], width: int = 0) -> None:
    """
    Write a list of integer vectors as the rows of a 4ti2 matrix file.

    An empty list is written as a 0 x width matrix.
    """
    if len(vectors) == 0:
        with open(path, 'w') as f:
            f.write(f"0 {width}\n")
        return
    write_matrix(path, np.array(vectors, dtype=np.int64))


def read_matrix(path: Path, dtype=np.int64) -> np.ndarray:
    """
    Read a 4ti2 matrix file into a 2D numpy array.

    Raises:
        ValueError: If the header does not match the data that follows
    """
    with open(path, 'r') as f:
        tokens = f.read().split()

    if len(tokens) < 2:
        raise ValueError(f"{path}: missing 4ti2 header line")

    rows, cols = int(tokens[0]), int(tokens[1])
    values = tokens[2:]
    if len(values) != rows * cols:
        raise ValueError(
            f"{path}: header declares {rows}x{cols} entries, found {len(values)}"
        )

    return np.array([float(v) for v in values], dtype=float).reshape(rows, cols).astype(dtype)


def read_vector(path: Path, dtype=np.int64) -> IntVector:
    """
    Read a 4ti2 vector file (a 1 x n or n x 1 matrix) into a 1D array.
    """
    matrix = read_matrix(path, dtype=dtype)
    if 1 not in matrix.shape:
        raise ValueError(f"{path}: expected a vector, got shape {matrix.shape}")
    return matrix.reshape(-1)


def read_vectors(path: Path) -> List[List[int]]:
    """Read the rows of a 4ti2 matrix file as a list of integer lists."""
    matrix: IntMatrix = read_matrix(path)
    return [row.tolist() for row in matrix]


def _format_entry(val) -> str:
    if float(val).is_integer():
        return str(int(val))
    return repr(float(val))
