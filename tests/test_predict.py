"""
Test single-record prediction and coefficient ranking.
"""

import math

import pytest

from pyols import load_sample
from pyols._core.lm_solver import train
from pyols._core.predict import FeatureImportance, feature_importance, predict
from pyols._core.preprocess import preprocess


SAMPLE_FEATURES = ['area_sqft', 'bedrooms', 'bathrooms', 'location_score', 'age_years']


@pytest.fixture
def sample_model():
    processed = preprocess(load_sample(), 'price', SAMPLE_FEATURES)
    return processed, train(processed)


@pytest.fixture
def city_model():
    rows = [
        {'rent': 1000, 'city': 'Lyon', 'rooms': 2},
        {'rent': 1500, 'city': 'Paris', 'rooms': 2},
        {'rent': 1300, 'city': 'Lyon', 'rooms': 4},
        {'rent': 1850, 'city': 'Paris', 'rooms': 3},
        {'rent': 900, 'city': 'Nice', 'rooms': 1},
        {'rent': 1250, 'city': 'Nice', 'rooms': 3},
    ]
    processed = preprocess(rows, 'rent', ['city', 'rooms'])
    return processed, train(processed)


class TestPredict:
    """Test predict()."""

    def test_training_row_matches_fit(self, sample_model):
        processed, model = sample_model
        record = load_sample()[0]
        expected = sum(
            c * x for c, x in zip(model.coefficients, processed.data[0])
        ) + model.intercept
        assert predict(record, processed, model) == pytest.approx(expected)

    def test_string_inputs(self, sample_model):
        processed, model = sample_model
        record = {k: str(v) for k, v in load_sample()[3].items()}
        assert predict(record, processed, model) == pytest.approx(
            predict(load_sample()[3], processed, model)
        )

    def test_missing_numeric_input_is_zero(self, sample_model):
        processed, model = sample_model
        record = dict(load_sample()[0])
        del record['age_years']
        zeroed = dict(load_sample()[0], age_years=0)
        assert predict(record, processed, model) == pytest.approx(predict(zeroed, processed, model))

    def test_overflowing_integer_input_is_zero(self, sample_model):
        processed, model = sample_model
        huge = dict(load_sample()[0], area_sqft=10**400)
        zeroed = dict(load_sample()[0], area_sqft=0)
        value = predict(huge, processed, model)
        assert math.isfinite(value)
        assert value == pytest.approx(predict(zeroed, processed, model))

    def test_empty_input_is_intercept(self, sample_model):
        processed, model = sample_model
        assert predict({}, processed, model) == pytest.approx(model.intercept)

    def test_unseen_category(self, city_model):
        """An unseen city predicts like the all-zero indicator (reference level)."""
        processed, model = city_model
        value = predict({'city': 'Marseille', 'rooms': 3}, processed, model)

        names = processed.feature_names_after_encoding
        rooms_coef = model.coefficients[names.index('rooms')]
        assert math.isfinite(value)
        assert value == pytest.approx(model.intercept + 3 * rooms_coef)
        assert value == pytest.approx(predict({'city': 'Lyon', 'rooms': 3}, processed, model))

    def test_missing_category(self, city_model):
        processed, model = city_model
        assert predict({'rooms': 2}, processed, model) == pytest.approx(
            predict({'city': 'Lyon', 'rooms': 2}, processed, model)
        )

    def test_known_category_shifts_prediction(self, city_model):
        processed, model = city_model
        names = processed.feature_names_after_encoding
        paris_coef = model.coefficients[names.index('city_Paris')]

        lyon = predict({'city': 'Lyon', 'rooms': 2}, processed, model)
        paris = predict({'city': 'Paris', 'rooms': 2}, processed, model)
        assert paris - lyon == pytest.approx(paris_coef)


class TestFeatureImportance:
    """Test feature_importance()."""

    def test_sorted_by_magnitude(self, city_model):
        processed, model = city_model
        ranked = feature_importance(processed, model)

        assert all(isinstance(f, FeatureImportance) for f in ranked)
        magnitudes = [abs(f.importance) for f in ranked]
        assert magnitudes == sorted(magnitudes, reverse=True)

    def test_covers_every_encoded_feature(self, sample_model):
        processed, model = sample_model
        ranked = feature_importance(processed, model)

        assert sorted(f.name for f in ranked) == sorted(processed.feature_names_after_encoding)
        lookup = dict(zip(processed.feature_names_after_encoding, model.coefficients))
        for f in ranked:
            assert f.importance == lookup[f.name]
