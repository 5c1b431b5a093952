"""
Utility functions.

Cell-level helpers shared by the preprocessor, the predictor and the
dataset loaders. A cell is a number, a string, or missing.
"""

import math
import numbers

import numpy as np

UNKNOWN_CATEGORY = "Unknown"


def as_scalar(value):
    """Unwrap numpy scalars into the equivalent Python object."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def is_missing(value) -> bool:
    """True for None, the empty string, and NaN."""
    value = as_scalar(value)
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def parse_number(value):
    """
    Parse a cell as a finite number.

    Returns the value as a float, or None if it is missing, boolean,
    non-numeric text, or not finite.
    """
    value = as_scalar(value)
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        try:
            result = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            result = float(text)
        except ValueError:
            return None
    else:
        return None
    return result if math.isfinite(result) else None


def category_label(value) -> str:
    """String label of a categorical cell; missing cells map to 'Unknown'."""
    value = as_scalar(value)
    if is_missing(value):
        return UNKNOWN_CATEGORY
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
