"""
pyols: closed-form OLS regression on small tabular datasets.

Preprocessing (type inference, one-hot encoding), the normal equation on a
from-scratch dense matrix library, fit metrics and single-row prediction.
"""

__version__ = "1.0.0"

# Import main user-facing API
from .lm import lm, LinearModel
from .datasets import SAMPLE_DATASET, load_sample, read_csv, to_records
from .exceptions import (
    PyOLSError,
    MatrixError,
    DimensionMismatch,
    NotSquare,
    SingularMatrix,
    TrainingFailed,
    ConfigurationError,
)

# Core pipeline (for callers managing their own state)
from ._core import (
    ColumnRole,
    CategoryEncoder,
    ProcessedData,
    ModelMetrics,
    FeatureImportance,
    preprocess,
    train,
    predict,
    feature_importance,
)

__all__ = [
    'lm',
    'LinearModel',
    'SAMPLE_DATASET',
    'load_sample',
    'read_csv',
    'to_records',
    'PyOLSError',
    'MatrixError',
    'DimensionMismatch',
    'NotSquare',
    'SingularMatrix',
    'TrainingFailed',
    'ConfigurationError',
    'ColumnRole',
    'CategoryEncoder',
    'ProcessedData',
    'ModelMetrics',
    'FeatureImportance',
    'preprocess',
    'train',
    'predict',
    'feature_importance',
]
