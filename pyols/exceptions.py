"""
Exception hierarchy.

Matrix failures are raised by the matrix library and wrapped exactly once
by the trainer. Configuration errors are raised by the session object before
any data is touched.
"""

from typing import Optional, Tuple


class PyOLSError(Exception):
    """Base class for all pyols errors."""


class MatrixError(PyOLSError, ArithmeticError):
    """Base class for failures inside the matrix library."""


class DimensionMismatch(MatrixError, ValueError):
    """Incompatible shapes in a matrix product."""

    def __init__(self, left_shape: Tuple[int, int], right_shape: Tuple[int, int]):
        self.left_shape = left_shape
        self.right_shape = right_shape
        super().__init__(
            f"Matrix multiplication dimension mismatch: "
            f"{left_shape[0]}x{left_shape[1]} times {right_shape[0]}x{right_shape[1]} "
            f"({left_shape[1]} columns vs {right_shape[0]} rows)"
        )


class NotSquare(MatrixError, ValueError):
    """Inverse requested for a non-square matrix."""

    def __init__(self, shape: Tuple[int, int]):
        self.shape = shape
        super().__init__(f"Matrix must be square, got {shape[0]}x{shape[1]}")


class SingularMatrix(MatrixError):
    """Pivot fell below tolerance during Gauss-Jordan elimination."""

    def __init__(
        self,
        column: Optional[int] = None,
        pivot: Optional[float] = None,
        message: Optional[str] = None,
    ):
        self.column = column
        self.pivot = pivot
        if message is None:
            message = f"Matrix is singular: pivot {pivot!r} in column {column}"
        super().__init__(message)


class TrainingFailed(PyOLSError, RuntimeError):
    """
    Model fitting failed.

    Carries the matrix error that caused it so callers can tell a singular
    design apart from a shape bug.
    """

    def __init__(self, message: str, cause: Optional[MatrixError] = None):
        self.cause = cause
        self.kind = type(cause).__name__ if cause is not None else None
        super().__init__(message)


class ConfigurationError(PyOLSError, ValueError):
    """Invalid target/feature selection."""
