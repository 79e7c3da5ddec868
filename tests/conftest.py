"""
Pytest configuration and shared fixtures.
"""
import numpy as np
import pandas as pd
import pytest

from gas_forecast.config import PipelineConfig
from gas_forecast.forecast.result import ModelParameters


def make_seasonal_series(
    n_months: int = 60,
    noise_sd: float = 2.0,
    seed: int = 42,
    start: str = '2015-01-01'
) -> pd.Series:
    """y[t] = 100 + 10*sin(2*pi*t/12) + 0.5*t + noise."""
    t = np.arange(n_months)
    rng = np.random.default_rng(seed)
    values = 100 + 10 * np.sin(2 * np.pi * t / 12) + 0.5 * t
    values = values + rng.normal(0.0, noise_sd, size=n_months)
    index = pd.date_range(start, periods=n_months, freq='MS')
    return pd.Series(values, index=index, name='synthetic')


@pytest.fixture
def seasonal_series():
    """Five years of trend + annual seasonality + noise."""
    return make_seasonal_series()


@pytest.fixture
def long_seasonal_series():
    """Ten years of the same process, for models needing more history."""
    return make_seasonal_series(n_months=120, seed=7)


@pytest.fixture
def constant_series():
    """Constant monthly series of value 42.0."""
    index = pd.date_range('2018-01-01', periods=36, freq='MS')
    return pd.Series(42.0, index=index, name='constant')


@pytest.fixture
def fast_config():
    """Default pipeline settings with a reduced SARIMA grid."""
    return PipelineConfig(max_p=1, max_q=1, max_P=1, max_Q=1, n_simulations=200)


class BrokenForecastModel:
    """Strategy that fits but raises when asked to forecast."""

    name = 'broken'

    def fit(self, train):
        self._train = train
        return self

    def parameters(self):
        return ModelParameters(self.name, {})

    def forecast(self, h):
        raise RuntimeError("forecast exploded")

    def fitted_values(self):
        return self._train

    def residuals(self):
        return self._train * 0


@pytest.fixture
def broken_model():
    return BrokenForecastModel()
