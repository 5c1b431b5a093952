"""
Turn raw records into a numeric design matrix and label vector.

Each feature column is classified once per run as numeric or categorical.
Categorical columns are one-hot encoded with the lexicographically first
category dropped as the reference level.
"""

import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .._utils import UNKNOWN_CATEGORY, category_label, is_missing, parse_number


class ColumnRole(Enum):
    """How a feature column enters the design matrix."""
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


@dataclass(frozen=True)
class CategoryEncoder:
    """
    One-hot encoder for a single categorical column.

    ``categories`` holds the kept categories in sorted order; ``dropped`` is
    the reference category (None when the column had a single value, which
    is then kept). ``imputed`` is set when the 'Unknown' category exists only
    because of missing cells.
    """
    column: str
    categories: Tuple[str, ...]
    dropped: Optional[str] = None
    imputed: bool = False

    @classmethod
    def fit(cls, column: str, values) -> "CategoryEncoder":
        """Build an encoder from the observed cells of a column."""
        values = list(values)
        unique = sorted({category_label(v) for v in values})
        imputed = UNKNOWN_CATEGORY in unique and not any(
            not is_missing(v) and category_label(v) == UNKNOWN_CATEGORY for v in values
        )
        if len(unique) > 1:
            return cls(column=column, categories=tuple(unique[1:]), dropped=unique[0], imputed=imputed)
        return cls(column=column, categories=tuple(unique), imputed=imputed)

    def encode(self, value) -> List[float]:
        """Indicator vector; all zeros for the reference or an unseen value."""
        label = category_label(value)
        return [1.0 if cat == label else 0.0 for cat in self.categories]

    def feature_names(self) -> List[str]:
        return [f"{self.column}_{cat}" for cat in self.categories]

    @property
    def observed(self) -> List[str]:
        """Every category seen during fitting, reference included."""
        if self.dropped is None:
            return list(self.categories)
        return [self.dropped] + list(self.categories)

    @property
    def options(self) -> List[str]:
        """Observed categories a user can pick, without the missing-value bucket."""
        if self.imputed:
            return [c for c in self.observed if c != UNKNOWN_CATEGORY]
        return self.observed

    def to_dict(self) -> Dict[str, Any]:
        return {
            "column": self.column,
            "categories": list(self.categories),
            "dropped": self.dropped,
            "imputed": self.imputed,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CategoryEncoder":
        return cls(
            column=payload["column"],
            categories=tuple(payload["categories"]),
            dropped=payload.get("dropped"),
            imputed=payload.get("imputed", False),
        )


@dataclass(frozen=True)
class ProcessedData:
    """Design matrix, labels and the encoding needed to rebuild a row."""
    features: List[str]
    target: str
    data: List[List[float]]
    labels: List[float]
    encoders: Dict[str, CategoryEncoder]
    feature_names_after_encoding: List[str]
    roles: Dict[str, ColumnRole] = field(default_factory=dict)
    n_dropped: int = 0

    @property
    def n_obs(self) -> int:
        return len(self.labels)

    def encode_row(self, record: Mapping[str, Any]) -> List[float]:
        """Encode one record with this run's encoders."""
        return encode_row(record, self.features, self.encoders)


def encode_row(
    record: Mapping[str, Any],
    features: Sequence[str],
    encoders: Mapping[str, CategoryEncoder],
) -> List[float]:
    """
    Encode one record into a design-matrix row.

    Missing or unparseable numeric cells become 0.0; unseen categories
    become all-zero indicators.
    """
    row: List[float] = []
    for col in features:
        value = record.get(col)
        encoder = encoders.get(col)
        if encoder is not None:
            row.extend(encoder.encode(value))
        else:
            number = parse_number(value)
            row.append(number if number is not None else 0.0)
    return row


def _classify(rows, col: str, infer: str) -> ColumnRole:
    if infer == "first":
        for row in rows:
            value = row.get(col)
            if not is_missing(value):
                if parse_number(value) is not None:
                    return ColumnRole.NUMERIC
                return ColumnRole.CATEGORICAL
    else:
        present = [row.get(col) for row in rows if not is_missing(row.get(col))]
        if present:
            if all(parse_number(v) is not None for v in present):
                return ColumnRole.NUMERIC
            return ColumnRole.CATEGORICAL

    warnings.warn(
        f"Feature column '{col}' has no values; treating it as an all-zero numeric column",
        UserWarning,
        stacklevel=3,
    )
    return ColumnRole.NUMERIC


def preprocess(
    dataset: Sequence[Mapping[str, Any]],
    target_column: str,
    feature_columns: Sequence[str],
    infer: str = "first",
) -> ProcessedData:
    """
    Build the numeric training set.

    Parameters
    ----------
    dataset : sequence of mappings
        Raw records, column name -> number or string
    target_column : str
        Column to predict
    feature_columns : sequence of str
        Predictor columns, in design-matrix order
    infer : {'first', 'scan'}
        Column typing policy. 'first' looks only at the first non-empty
        value of each column; 'scan' requires every non-empty value to be
        numeric for the column to be numeric.

    Returns
    -------
    ProcessedData

    Notes
    -----
    Rows with a missing target are dropped. Rows whose target is present
    but not a finite number are dropped too, with a warning. Data problems
    in feature columns never raise: numeric cells that fail to parse are
    imputed as 0 and missing categorical cells fall into 'Unknown'.
    """
    if infer not in ("first", "scan"):
        raise ValueError(f"Unknown inference policy: '{infer}'\nValid options: 'first', 'scan'")

    features = list(feature_columns)

    present = [row for row in dataset if not is_missing(row.get(target_column))]
    rows = []
    labels: List[float] = []
    for row in present:
        label = parse_number(row.get(target_column))
        if label is not None:
            rows.append(row)
            labels.append(label)

    unparseable = len(present) - len(rows)
    if unparseable:
        warnings.warn(
            f"Dropped {unparseable} row(s) with a non-numeric '{target_column}' value",
            UserWarning,
            stacklevel=2,
        )

    roles: Dict[str, ColumnRole] = {}
    encoders: Dict[str, CategoryEncoder] = {}
    names: List[str] = []
    for col in features:
        role = _classify(rows, col, infer)
        roles[col] = role
        if role is ColumnRole.CATEGORICAL:
            encoder = CategoryEncoder.fit(col, (row.get(col) for row in rows))
            encoders[col] = encoder
            names.extend(encoder.feature_names())
        else:
            names.append(col)

    return ProcessedData(
        features=features,
        target=target_column,
        data=[encode_row(row, features, encoders) for row in rows],
        labels=labels,
        encoders=encoders,
        feature_names_after_encoding=names,
        roles=roles,
        n_dropped=len(dataset) - len(rows),
    )
