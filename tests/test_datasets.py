"""
Test CSV loading and DataFrame -> record conversion.
"""

import io

import numpy as np
import pandas as pd

from pyols.datasets import SAMPLE_DATASET, load_sample, read_csv, to_records


class TestSample:
    """Test the bundled sample."""

    def test_records(self):
        records = load_sample()
        assert len(records) == 15
        assert list(records[0].keys()) == [
            'price', 'area_sqft', 'bedrooms', 'bathrooms', 'location_score', 'age_years'
        ]
        assert records[0]['price'] == 450000
        assert records[9]['bathrooms'] == 2.5

    def test_plain_python_scalars(self):
        for value in load_sample()[0].values():
            assert not isinstance(value, np.generic)

    def test_frame(self):
        frame = load_sample(as_frame=True)
        assert isinstance(frame, pd.DataFrame)
        assert frame.shape == (15, 6)

    def test_constant_is_csv(self):
        assert SAMPLE_DATASET.splitlines()[0].startswith('price,')


class TestReadCsv:
    """Test read_csv()."""

    def test_missing_cells_become_none(self):
        text = "y,x,city\n1,2,Oslo\n,3,Bergen\n4,,\n"
        records = read_csv(io.StringIO(text))

        assert len(records) == 3
        assert records[1]['y'] is None
        assert records[2]['x'] is None
        assert records[2]['city'] is None
        assert records[0]['city'] == 'Oslo'

    def test_blank_lines_skipped(self):
        text = "y,x\n1,2\n\n3,4\n"
        assert len(read_csv(io.StringIO(text))) == 2

    def test_kwargs_forwarded(self):
        text = "y;x\n1;2\n"
        assert read_csv(io.StringIO(text), sep=';') == [{'y': 1, 'x': 2}]


class TestToRecords:
    """Test to_records()."""

    def test_nan_and_types(self):
        frame = pd.DataFrame({'a': [1.5, np.nan], 'b': ['u', None], 'c': [1, 2]})
        records = to_records(frame)
        assert records == [
            {'a': 1.5, 'b': 'u', 'c': 1},
            {'a': None, 'b': None, 'c': 2},
        ]
        assert type(records[0]['c']) is int
