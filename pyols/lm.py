"""
Linear regression with R-style interface and output.

Wraps preprocess -> train -> predict into one object per training run.
"""

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ._core.lm_solver import ModelMetrics, train
from ._core.matrix import PIVOT_TOL, dot
from ._core.predict import FeatureImportance, feature_importance, predict
from ._core.preprocess import ColumnRole, ProcessedData, preprocess
from .datasets import to_records
from .exceptions import ConfigurationError


def _check_config(records, y, X) -> List[str]:
    """Reject unusable target/feature selections before any fitting."""
    if len(records) == 0:
        raise ConfigurationError("Dataset is empty")
    columns = list(records[0].keys())

    if not isinstance(y, str) or not y:
        raise ConfigurationError("A target column must be selected")
    if y not in columns:
        raise ConfigurationError(f"Target column '{y}' not in dataset columns {columns}")

    if isinstance(X, str):
        raise ConfigurationError("X must be a list of column names, not a single string")
    X = list(X) if X is not None else []
    if not X:
        raise ConfigurationError("At least one feature column must be selected")
    missing = [c for c in X if c not in columns]
    if missing:
        raise ConfigurationError(f"Feature columns not in dataset: {missing}")
    if y in X:
        raise ConfigurationError(f"Target column '{y}' cannot also be a feature")
    if len(set(X)) != len(X):
        raise ConfigurationError("Feature columns must be unique")
    return X


class LinearModel:
    """
    Fit an OLS regression model (like R's lm()).

    Examples
    --------
    >>> from pyols import lm, load_sample
    >>>
    >>> data = load_sample()
    >>> model = lm(y='price',
    ...            X=['area_sqft', 'bedrooms', 'bathrooms', 'location_score', 'age_years'],
    ...            data=data)
    >>>
    >>> model.summary()            # Prints a table like R
    >>> model.coef                 # Named coefficients
    >>> model.feature_importance() # Coefficients by magnitude
    >>> model.predict({'area_sqft': 1600, 'bedrooms': 3, 'bathrooms': 2,
    ...                'location_score': 8, 'age_years': 10})
    """

    def __init__(
        self,
        y: str,
        X: Sequence[str],
        data: Union[pd.DataFrame, Sequence[Mapping[str, Any]]],
        infer: str = "first",
        tol: float = PIVOT_TOL,
    ):
        """
        Fit linear regression model.

        Parameters
        ----------
        y : str
            Target column name
        X : list of str
            Feature column names, in coefficient order
        data : DataFrame or sequence of dict
            Dataset; the first record's keys define the columns
        infer : {'first', 'scan'}
            Numeric/categorical typing policy, see ``preprocess``
        tol : float
            Pivot threshold for the matrix inverse

        Raises
        ------
        ConfigurationError
            Empty dataset, missing or empty target/feature selection.
        TrainingFailed
            Singular design (collinear features or too few rows).
        """
        if isinstance(data, pd.DataFrame):
            records = to_records(data)
        else:
            records = list(data)

        self.X_names = _check_config(records, y, X)
        self.y_name = y

        self.processed: ProcessedData = preprocess(records, y, self.X_names, infer=infer)
        self.metrics: ModelMetrics = train(self.processed, tol=tol)

        self.n_obs = self.processed.n_obs
        self.var_names = ['Intercept'] + self.processed.feature_names_after_encoding

    @property
    def intercept(self) -> float:
        return self.metrics.intercept

    @property
    def coefficients(self) -> np.ndarray:
        """Intercept followed by the feature coefficients."""
        return np.array([self.metrics.intercept] + list(self.metrics.coefficients))

    @property
    def coef(self) -> pd.Series:
        """Named coefficients (pandas Series)."""
        return pd.Series(self.coefficients, index=self.var_names)

    @property
    def r_squared(self) -> float:
        return self.metrics.r2

    @property
    def mse(self) -> float:
        return self.metrics.mse

    @property
    def rmse(self) -> float:
        return self.metrics.rmse

    @property
    def fitted_values(self) -> np.ndarray:
        """In-sample predictions."""
        coefs = self.metrics.coefficients
        return np.array([dot(row, coefs) + self.metrics.intercept for row in self.processed.data])

    @property
    def residuals(self) -> np.ndarray:
        return np.asarray(self.processed.labels) - self.fitted_values

    def feature_importance(self) -> List[FeatureImportance]:
        """Encoded features sorted by absolute coefficient."""
        return feature_importance(self.processed, self.metrics)

    def importance_frame(self) -> pd.DataFrame:
        """Feature importance as a DataFrame with 'name' and 'importance'."""
        return pd.DataFrame(
            [(f.name, f.importance) for f in self.feature_importance()],
            columns=['name', 'importance'],
        )

    def actual_vs_predicted(self, limit: Optional[int] = 100) -> pd.DataFrame:
        """
        Observed labels next to in-sample predictions.

        Parameters
        ----------
        limit : int or None
            Keep only the first ``limit`` rows (None for all)
        """
        frame = pd.DataFrame({
            'actual': np.asarray(self.processed.labels, dtype=float),
            'predicted': self.fitted_values,
        })
        if limit is not None:
            frame = frame.head(limit)
        return frame

    def category_options(self) -> Dict[str, List[str]]:
        """
        Observed categories of every categorical feature, sorted.

        'Unknown' is listed only if it appeared as a literal value, not when
        it stands in for missing cells.
        """
        return {
            col: enc.options for col, enc in self.processed.encoders.items()
        }

    def predict(self, newdata: Union[Mapping[str, Any], pd.DataFrame]):
        """
        Predict the target for new data.

        Parameters
        ----------
        newdata : dict or DataFrame
            - dict: one raw record, returns a float
            - DataFrame: one prediction per row, returns an array

        Notes
        -----
        Missing numeric inputs count as 0 and unseen categories contribute
        nothing; no error is raised for either.
        """
        if isinstance(newdata, pd.DataFrame):
            return np.array([
                predict(record, self.processed, self.metrics)
                for record in to_records(newdata)
            ])
        return predict(newdata, self.processed, self.metrics)

    def summary(self):
        """Print summary of regression results (like R's summary.lm)."""
        print()
        print("="*72)
        print("LINEAR REGRESSION RESULTS (OLS, normal equation)")
        print("="*72)
        print()

        print(f"Dependent variable: {self.y_name}")
        print(f"Number of observations: {self.n_obs}")
        if self.processed.n_dropped:
            print(f"Rows dropped (missing or non-numeric target): {self.processed.n_dropped}")
        print()

        print("Features:")
        for col in self.X_names:
            role = self.processed.roles[col]
            if role is ColumnRole.CATEGORICAL:
                enc = self.processed.encoders[col]
                ref = enc.dropped if enc.dropped is not None else "none"
                print(f"  {col:<24} categorical ({len(enc.categories)} levels, reference: {ref})")
            else:
                print(f"  {col:<24} numeric")
        print()

        print("Coefficients:")
        print("-"*72)
        print(f"{'Variable':<40} {'Estimate':>14}")
        print("-"*72)
        for name, value in zip(self.var_names, self.coefficients):
            print(f"{name:<40} {value:>14.4f}")
        print("-"*72)
        print()

        r2 = "NA" if math.isnan(self.metrics.r2) else f"{self.metrics.r2:.4f}"
        print(f"R-squared:                 {r2}")
        print(f"Mean squared error:        {self.metrics.mse:.4f}")
        print(f"Root mean squared error:   {self.metrics.rmse:.4f}")
        print("="*72)
        print()

    def __repr__(self):
        return (
            f"LinearModel(n={self.n_obs}, p={len(self.var_names) - 1}, "
            f"R²={self.metrics.r2:.3f})"
        )


def lm(y, X, data, **kwargs):
    """
    Fit linear regression model (convenience function).

    Parameters
    ----------
    y : str
        Target column
    X : list of str
        Feature columns
    data : DataFrame or sequence of dict
        Dataset
    **kwargs
        Additional arguments passed to LinearModel

    Returns
    -------
    LinearModel
        Fitted model object

    Examples
    --------
    >>> model = lm(y='price', X=['area_sqft', 'location_score'], data=load_sample())
    >>> model.r_squared
    >>> model.predict({'area_sqft': 1500, 'location_score': 8})
    """
    return LinearModel(y=y, X=X, data=data, **kwargs)
