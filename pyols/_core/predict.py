"""
Single-record prediction and coefficient ranking.
"""

from dataclasses import dataclass
from typing import Any, List, Mapping

from .lm_solver import ModelMetrics
from .matrix import dot
from .preprocess import ProcessedData


@dataclass(frozen=True)
class FeatureImportance:
    """Encoded feature name paired with its coefficient."""
    name: str
    importance: float


def predict(
    inputs: Mapping[str, Any],
    processed: ProcessedData,
    model: ModelMetrics,
) -> float:
    """
    Predict the target for one raw record.

    Inputs are not validated: absent or non-numeric numeric inputs count as
    0, unseen or absent categories contribute nothing.
    """
    row = processed.encode_row(inputs)
    return dot(row, model.coefficients) + model.intercept


def feature_importance(processed: ProcessedData, model: ModelMetrics) -> List[FeatureImportance]:
    """Coefficients by descending absolute value."""
    pairs = [
        FeatureImportance(name, coef)
        for name, coef in zip(processed.feature_names_after_encoding, model.coefficients)
    ]
    return sorted(pairs, key=lambda f: abs(f.importance), reverse=True)
