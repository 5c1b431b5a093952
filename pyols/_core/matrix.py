"""
Dense matrix primitives for the normal equation.

Plain Python lists of floats, row-major. Sized for design matrices with a
few thousand rows and dozens of columns; nothing here is vectorized.
"""

from typing import List, Sequence

from ..exceptions import DimensionMismatch, NotSquare, SingularMatrix

Matrix = List[List[float]]
Vector = List[float]

# Absolute pivot threshold below which a matrix is treated as singular
PIVOT_TOL = 1e-10


def _shape(M: Sequence[Sequence[float]]):
    return (len(M), len(M[0]) if len(M) else 0)


def identity(n: int) -> Matrix:
    """n x n identity matrix."""
    return [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]


def transpose(M: Sequence[Sequence[float]]) -> Matrix:
    """Return a new matrix with rows and columns swapped."""
    if len(M) == 0:
        return []
    rows, cols = _shape(M)
    return [[M[i][j] for i in range(rows)] for j in range(cols)]


def multiply(A: Sequence[Sequence[float]], B: Sequence[Sequence[float]]) -> Matrix:
    """
    Dense matrix product A @ B.

    Returns an empty matrix when either operand is empty.

    Raises
    ------
    DimensionMismatch
        If A's column count differs from B's row count.
    """
    if len(A) == 0 or len(B) == 0:
        return []

    r1, c1 = _shape(A)
    r2, c2 = _shape(B)
    if c1 != r2:
        raise DimensionMismatch((r1, c1), (r2, c2))

    result = [[0.0] * c2 for _ in range(r1)]
    for i in range(r1):
        row_a = A[i]
        out = result[i]
        for j in range(c2):
            total = 0.0
            for k in range(c1):
                total += row_a[k] * B[k][j]
            out[j] = total
    return result


def inverse(M: Sequence[Sequence[float]], tol: float = PIVOT_TOL) -> Matrix:
    """
    Invert a square matrix by Gauss-Jordan elimination.

    Works on the augmented matrix [M | I] with partial pivoting: for each
    pivot column the remaining row with the largest absolute entry in that
    column is swapped into place before normalizing.

    Parameters
    ----------
    M : n x n matrix
        Matrix to invert (not modified)
    tol : float
        Absolute pivot threshold

    Returns
    -------
    n x n matrix

    Raises
    ------
    NotSquare
        If M is not n x n.
    SingularMatrix
        If a pivot's absolute value is below ``tol`` after the swap, or M
        is empty.
    """
    n = len(M)
    if n == 0:
        raise SingularMatrix(message="Matrix is singular: cannot invert an empty matrix")
    for row in M:
        if len(row) != n:
            raise NotSquare((n, len(row)))

    aug = [
        [float(x) for x in M[i]] + [1.0 if i == j else 0.0 for j in range(n)]
        for i in range(n)
    ]
    width = 2 * n

    for i in range(n):
        max_row = i
        for k in range(i + 1, n):
            if abs(aug[k][i]) > abs(aug[max_row][i]):
                max_row = k
        aug[i], aug[max_row] = aug[max_row], aug[i]

        pivot = aug[i][i]
        if abs(pivot) < tol:
            raise SingularMatrix(column=i, pivot=pivot)

        pivot_row = aug[i]
        for j in range(i, width):
            pivot_row[j] /= pivot

        for k in range(n):
            if k == i:
                continue
            factor = aug[k][i]
            if factor == 0.0:
                continue
            row = aug[k]
            for j in range(i, width):
                row[j] -= factor * pivot_row[j]

    return [row[n:] for row in aug]


def multiply_vector(A: Sequence[Sequence[float]], v: Sequence[float]) -> Vector:
    """Matrix times column vector, returned flat."""
    column = [[x] for x in v]
    return [row[0] for row in multiply(A, column)]


def dot(u: Sequence[float], v: Sequence[float]) -> float:
    """Dot product of two equal-length vectors."""
    if len(u) != len(v):
        raise DimensionMismatch((1, len(u)), (len(v), 1))
    total = 0.0
    for a, b in zip(u, v):
        total += a * b
    return total
