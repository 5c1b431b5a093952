"""
Linear model solver.

Closed-form OLS through the normal equation, theta = (X'X)^-1 X'y, followed
by in-sample fit statistics.
"""

import math
import warnings
from dataclasses import dataclass
from typing import Tuple

from ..exceptions import MatrixError, TrainingFailed
from .matrix import PIVOT_TOL, dot, inverse, multiply, multiply_vector, transpose
from .preprocess import ProcessedData

TRAINING_FAILED_MESSAGE = (
    "Could not train model. The dataset might be singular "
    "(perfect multicollinearity) or too small."
)


@dataclass(frozen=True)
class ModelMetrics:
    """Fitted parameters and in-sample error metrics."""
    intercept: float
    coefficients: Tuple[float, ...]
    mse: float
    rmse: float
    r2: float


def solve_normal_equation(X_bias, y, tol: float = PIVOT_TOL):
    """Return theta = (X'X)^-1 X'y. Matrix errors propagate."""
    X_T = transpose(X_bias)
    XtX_inv = inverse(multiply(X_T, X_bias), tol=tol)
    return multiply_vector(XtX_inv, multiply_vector(X_T, y))


def train(processed: ProcessedData, tol: float = PIVOT_TOL) -> ModelMetrics:
    """
    Fit OLS coefficients and compute fit statistics.

    Parameters
    ----------
    processed : ProcessedData
        Output of ``preprocess``
    tol : float
        Pivot threshold passed to the matrix inverse

    Returns
    -------
    ModelMetrics

    Raises
    ------
    TrainingFailed
        If X'X cannot be inverted. Fewer rows than encoded features, an
        empty training set, and collinear columns all end up here through
        a singular pivot. The original matrix error is kept on ``cause``.
    """
    X_bias = [[1.0] + list(row) for row in processed.data]
    y = list(processed.labels)

    try:
        theta = solve_normal_equation(X_bias, y, tol=tol)
    except MatrixError as e:
        raise TrainingFailed(f"{TRAINING_FAILED_MESSAGE} ({e})", cause=e) from e

    intercept = theta[0]
    coefficients = tuple(theta[1:])

    y_pred = [dot(row, theta) for row in X_bias]

    n = len(y)
    y_mean = sum(y) / n
    ss_tot = sum((yi - y_mean) ** 2 for yi in y)
    ss_res = sum((yi - yp) ** 2 for yi, yp in zip(y, y_pred))

    if ss_tot > 0:
        r2 = 1.0 - ss_res / ss_tot
    else:
        warnings.warn(
            f"All '{processed.target}' values are identical; R-squared is undefined",
            UserWarning,
            stacklevel=2,
        )
        r2 = math.nan

    mse = ss_res / n
    return ModelMetrics(
        intercept=intercept,
        coefficients=coefficients,
        mse=mse,
        rmse=math.sqrt(mse),
        r2=r2,
    )
