"""
Unit tests for gas_forecast/models/baseline.py

Tests the naive constant forecast.
"""
import numpy as np
import pandas as pd
import pytest

from gas_forecast.exceptions import InsufficientDataError, InvalidHorizonError, NotFittedError
from gas_forecast.models.baseline import NaiveModel


class TestNaiveMean:
    """Tests for method='mean'."""

    def test_constant_series_forecast_exact(self, constant_series):
        """Constant input should reproduce the constant exactly."""
        model = NaiveModel().fit(constant_series)
        result = model.forecast(12)

        assert (result.mean == 42.0).all()

    def test_forecast_is_training_mean(self):
        index = pd.date_range('2020-01-01', periods=4, freq='MS')
        train = pd.Series([1.0, 2.0, 3.0, 6.0], index=index)

        result = NaiveModel().fit(train).forecast(3)

        np.testing.assert_allclose(result.mean.to_numpy(), [3.0, 3.0, 3.0])

    def test_forecast_index_follows_train(self, seasonal_series):
        """Forecast months should start right after the last training month."""
        model = NaiveModel().fit(seasonal_series)
        result = model.forecast(6)

        assert result.horizon == 6
        assert result.mean.index[0] == seasonal_series.index[-1] + pd.offsets.MonthBegin(1)
        assert result.mean.index.freqstr == 'MS'

    def test_interval_brackets_mean(self, seasonal_series):
        result = NaiveModel().fit(seasonal_series).forecast(12)

        assert result.has_interval
        assert (result.lower < result.mean).all()
        assert (result.upper > result.mean).all()

    def test_constant_series_interval_collapses(self, constant_series):
        result = NaiveModel().fit(constant_series).forecast(3)

        assert (result.interval_width() == 0).all()

    def test_fitted_values_expanding_mean(self):
        """Fitted value at t should be the mean of observations before t."""
        index = pd.date_range('2020-01-01', periods=3, freq='MS')
        train = pd.Series([2.0, 4.0, 9.0], index=index)

        fitted = NaiveModel().fit(train).fitted_values()

        assert np.isnan(fitted.iloc[0])
        assert fitted.iloc[1] == 2.0
        assert fitted.iloc[2] == 3.0

    def test_parameters(self, constant_series):
        params = NaiveModel().fit(constant_series).parameters()

        assert params['value'] == 42.0
        assert params['n_samples'] == 36
        assert params.model_name == 'naive'


class TestNaiveLast:
    """Tests for method='last'."""

    def test_repeats_last_value(self, seasonal_series):
        result = NaiveModel(method='last').fit(seasonal_series).forecast(4)

        assert (result.mean == seasonal_series.iloc[-1]).all()

    def test_interval_widens(self, seasonal_series):
        result = NaiveModel(method='last').fit(seasonal_series).forecast(6)
        width = result.interval_width().to_numpy()

        assert np.all(np.diff(width) > 0)


class TestNaiveErrors:
    """Tests for error handling."""

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            NaiveModel(method='median')

    def test_empty_train(self):
        empty = pd.Series([], index=pd.DatetimeIndex([]), dtype=float)

        with pytest.raises(InsufficientDataError):
            NaiveModel().fit(empty)

    def test_forecast_before_fit(self):
        with pytest.raises(NotFittedError, match="not fitted"):
            NaiveModel().forecast(3)

    def test_zero_horizon(self, constant_series):
        model = NaiveModel().fit(constant_series)

        with pytest.raises(InvalidHorizonError):
            model.forecast(0)
