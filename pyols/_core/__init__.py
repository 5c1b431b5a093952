"""
Core algorithms (pure Python, no numerical dependencies).
"""

from .matrix import identity, transpose, multiply, inverse, multiply_vector, dot
from .preprocess import ColumnRole, CategoryEncoder, ProcessedData, preprocess
from .lm_solver import ModelMetrics, train
from .predict import FeatureImportance, predict, feature_importance

__all__ = [
    "identity",
    "transpose",
    "multiply",
    "inverse",
    "multiply_vector",
    "dot",
    "ColumnRole",
    "CategoryEncoder",
    "ProcessedData",
    "preprocess",
    "ModelMetrics",
    "train",
    "FeatureImportance",
    "predict",
    "feature_importance",
]
