"""
Dataset loading.

CSV files are read with pandas and handed to the core as plain records,
one dict per row keyed by the header.
"""

import io
from typing import Any, Dict, List

import pandas as pd

from ._utils import as_scalar

SAMPLE_DATASET = """price,area_sqft,bedrooms,bathrooms,location_score,age_years
450000,1500,3,2,8,10
380000,1200,2,1,7,15
520000,1800,4,2,9,5
290000,900,1,1,6,30
650000,2200,4,3,9,2
410000,1400,3,2,7,12
720000,2500,5,3,10,1
330000,1000,2,1,6,20
490000,1650,3,2,8,8
580000,2000,4,2.5,9,4
350000,1100,2,1.5,5,25
900000,3000,5,4,10,0
250000,800,1,1,4,40
475000,1550,3,2,8,7
610000,2100,4,3,9,3"""


def to_records(frame: pd.DataFrame) -> List[Dict[str, Any]]:
    """
    Convert a DataFrame to a list of records.

    NaN cells become None and numpy scalars become Python scalars, so the
    records carry nothing but numbers, strings and None.
    """
    columns = [str(c) for c in frame.columns]
    records = []
    for values in frame.itertuples(index=False, name=None):
        records.append({
            col: (None if pd.isna(v) else as_scalar(v))
            for col, v in zip(columns, values)
        })
    return records


def read_csv(path_or_buffer, **kwargs) -> List[Dict[str, Any]]:
    """
    Read a CSV file with a header row into records.

    Column types are inferred by pandas; extra keyword arguments go to
    ``pandas.read_csv``.
    """
    kwargs.setdefault("skip_blank_lines", True)
    return to_records(pd.read_csv(path_or_buffer, **kwargs))


def load_sample(as_frame: bool = False):
    """
    The bundled house-price sample (15 rows).

    Parameters
    ----------
    as_frame : bool
        Return a DataFrame instead of records.
    """
    frame = pd.read_csv(io.StringIO(SAMPLE_DATASET))
    if as_frame:
        return frame
    return to_records(frame)
