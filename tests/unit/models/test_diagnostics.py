"""
Unit tests for gas_forecast/models/diagnostics.py

Tests the Ljung-Box lag rule and residual diagnostics outcomes.
"""
import numpy as np
import pandas as pd
import pytest

from gas_forecast.models.diagnostics import ljung_box_lag, residual_diagnostics


def _monthly(values):
    index = pd.date_range('2010-01-01', periods=len(values), freq='MS')
    return pd.Series(values, index=index, name='resid')


@pytest.fixture
def white_noise():
    rng = np.random.default_rng(0)
    return _monthly(rng.normal(0.0, 1.0, 120))


@pytest.fixture
def autocorrelated():
    """AR(1) residuals with phi 0.9."""
    rng = np.random.default_rng(1)
    shocks = rng.normal(0.0, 1.0, 120)
    values = np.zeros(120)
    for t in range(1, 120):
        values[t] = 0.9 * values[t - 1] + shocks[t]
    return _monthly(values)


class TestLjungBoxLag:
    """Tests for ljung_box_lag()."""

    def test_two_seasons_cap(self):
        assert ljung_box_lag(120, 12) == 24

    def test_short_sample_cap(self):
        assert ljung_box_lag(50, 12) == 10

    def test_tiny_sample_gives_zero(self):
        assert ljung_box_lag(4, 12) == 0


class TestResidualDiagnostics:
    """Tests for residual_diagnostics()."""

    def test_white_noise_passes(self, white_noise):
        diagnostics = residual_diagnostics(white_noise, significance_level=0.01)

        assert diagnostics is not None
        assert diagnostics.lags == 24
        assert diagnostics.passed
        assert diagnostics.ljung_box_pvalue > 0.01

    def test_autocorrelated_fails(self, autocorrelated):
        diagnostics = residual_diagnostics(autocorrelated)

        assert diagnostics is not None
        assert not diagnostics.passed
        assert diagnostics.ljung_box_pvalue < 0.05
        assert diagnostics.residual_acf[1] > 0.5

    def test_short_residuals_return_none(self):
        assert residual_diagnostics(_monthly([0.1, -0.2, 0.3, 0.0])) is None

    def test_constant_residuals_return_none(self):
        assert residual_diagnostics(_monthly(np.full(60, 1.5))) is None

    def test_missing_values_dropped(self, white_noise):
        with_gap = white_noise.copy()
        with_gap.iloc[:10] = np.nan

        diagnostics = residual_diagnostics(with_gap)

        assert diagnostics.lags == ljung_box_lag(110, 12)

    def test_acf_length(self, white_noise):
        diagnostics = residual_diagnostics(white_noise)

        assert len(diagnostics.residual_acf) == diagnostics.lags + 1
        assert diagnostics.residual_acf[0] == pytest.approx(1.0)

    def test_to_dict(self, white_noise):
        summary = residual_diagnostics(white_noise).to_dict()

        assert set(summary) == {'lags', 'ljung_box_stat', 'ljung_box_pvalue', 'passed'}
        assert isinstance(summary['passed'], bool)
