"""
Unit tests for gas_forecast/models/arima.py

Tests the SARIMA strategy end to end on synthetic monthly data.
"""
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from gas_forecast.exceptions import (
    FitDivergenceError,
    InsufficientDataError,
    InvalidHorizonError,
    NotFittedError,
    OrderSearchExhaustedError,
)
from gas_forecast.models.arima import SeasonalArimaModel
from gas_forecast.models.order_search import SarimaOrder


@pytest.fixture
def searched_model(long_seasonal_series):
    """SARIMA with a small grid fitted on ten years of data."""
    model = SeasonalArimaModel(max_p=1, max_q=1, max_P=0, max_Q=1)
    return model.fit(long_seasonal_series)


@pytest.fixture
def fixed_model(long_seasonal_series):
    order = SarimaOrder(p=1, d=0, q=0, P=0, D=1, Q=0, s=12)
    return SeasonalArimaModel(order=order).fit(long_seasonal_series)


class TestSarimaSearch:
    """Tests for the automatic order selection path."""

    def test_order_within_bounds(self, searched_model):
        order = searched_model.order

        assert order.p <= 1 and order.q <= 1
        assert order.P == 0 and order.Q <= 1
        assert order.d + order.D <= 2
        assert order.s == 12

    def test_parameters(self, searched_model):
        params = searched_model.parameters()

        assert params['label'] == str(searched_model.order)
        assert params['criterion'] == 'aicc'
        assert np.isfinite(params['aicc'])
        assert params['n_candidates'] == 8
        assert params['stationarity_pvalues']

    def test_forecast_interval_widens(self, searched_model):
        result = searched_model.forecast(12)
        width = result.interval_width().to_numpy()

        assert result.horizon == 12
        assert (width > 0).all()
        assert np.all(np.diff(width) >= -1e-8)

    def test_forecast_close_to_truth(self, searched_model):
        """Forecast should stay within the range of the generating process."""
        mean = searched_model.forecast(12).mean

        assert mean.between(120.0, 190.0).all()

    def test_fitted_values_burn_in(self, searched_model):
        fitted = searched_model.fitted_values()
        burn_in = searched_model.plan.burn_in

        assert fitted.iloc[:burn_in].isna().all()
        assert fitted.iloc[burn_in:].notna().all()
        assert len(searched_model.residuals()) == len(fitted) - burn_in


class TestSarimaFixedOrder:
    """Tests for a fixed order."""

    def test_uses_given_order(self, fixed_model):
        assert fixed_model.order == SarimaOrder(p=1, d=0, q=0, P=0, D=1, Q=0, s=12)
        assert fixed_model.search is None
        assert fixed_model.parameters()['n_candidates'] == 1

    def test_burn_in_is_one_season(self, fixed_model):
        assert fixed_model.fitted_values().iloc[:12].isna().all()

    def test_forecast_index(self, fixed_model):
        result = fixed_model.forecast(3)

        assert list(result.mean.index) == list(
            pd.date_range('2025-01-01', periods=3, freq='MS')
        )


class TestSarimaErrors:
    """Tests for error handling."""

    def test_insufficient_data(self, seasonal_series):
        with pytest.raises(InsufficientDataError):
            SeasonalArimaModel().fit(seasonal_series.iloc[:20])

    def test_forecast_before_fit(self):
        with pytest.raises(NotFittedError):
            SeasonalArimaModel().forecast(3)

    def test_invalid_horizon(self, fixed_model):
        with pytest.raises(InvalidHorizonError):
            fixed_model.forecast(-1)


def _fixed_fit_returning(results, converged):
    return lambda train, order, max_iterations: (results, converged)


class TestSarimaFixedOrderChecks:
    """A fixed order must pass the same checks as searched candidates."""

    @pytest.fixture
    def order(self):
        return SarimaOrder(p=0, d=0, q=1, P=0, D=1, Q=0, s=12)

    def test_non_invertible_fixed_order_rejected(
        self, long_seasonal_series, order, monkeypatch
    ):
        results = SimpleNamespace(
            arparams=np.array([]),
            maparams=np.array([-1.0]),
            seasonalarparams=np.array([]),
            seasonalmaparams=np.array([]),
        )
        monkeypatch.setattr(
            'gas_forecast.models.arima.fit_sarimax', _fixed_fit_returning(results, True)
        )

        model = SeasonalArimaModel(order=order)
        with pytest.raises(OrderSearchExhaustedError, match='invertible=False'):
            model.fit(long_seasonal_series)
        assert model.order is None

    def test_non_stationary_fixed_order_rejected(
        self, long_seasonal_series, order, monkeypatch
    ):
        results = SimpleNamespace(
            arparams=np.array([1.0]),
            maparams=np.array([]),
            seasonalarparams=np.array([]),
            seasonalmaparams=np.array([]),
        )
        monkeypatch.setattr(
            'gas_forecast.models.arima.fit_sarimax', _fixed_fit_returning(results, True)
        )

        with pytest.raises(OrderSearchExhaustedError, match='stationary=False'):
            SeasonalArimaModel(order=order).fit(long_seasonal_series)

    def test_unconverged_fixed_order(self, long_seasonal_series, order, monkeypatch):
        monkeypatch.setattr(
            'gas_forecast.models.arima.fit_sarimax',
            _fixed_fit_returning(SimpleNamespace(), False),
        )

        with pytest.raises(FitDivergenceError):
            SeasonalArimaModel(order=order).fit(long_seasonal_series)

    def test_admissible_fixed_order_accepted(self, fixed_model):
        assert fixed_model.order == SarimaOrder(p=1, d=0, q=0, P=0, D=1, Q=0, s=12)
        assert fixed_model.search is None
