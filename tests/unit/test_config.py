"""
Unit tests for gas_forecast/config.py
"""
import pytest

from gas_forecast.config import PipelineConfig


class TestPipelineConfig:
    """Tests for PipelineConfig validation."""

    def test_defaults(self):
        config = PipelineConfig()

        assert config.horizon == 12
        assert config.seasonal_period == 12
        assert config.max_differencing_order == 2
        assert config.accuracy_metrics == ('MSE', 'MAE', 'RMSE', 'MAPE')
        assert config.alpha == pytest.approx(0.05)

    def test_normalizes_names(self):
        config = PipelineConfig(accuracy_metrics=['rmse', 'mase'], information_criterion='BIC')

        assert config.accuracy_metrics == ('RMSE', 'MASE')
        assert config.information_criterion == 'bic'

    @pytest.mark.parametrize('kwargs', [
        {'horizon': 0},
        {'seasonal_period': 1},
        {'max_differencing_order': -1},
        {'accuracy_metrics': ('R2',)},
        {'mape_zero_policy': 'ignore'},
        {'significance_level': 1.5},
        {'interval_level': 0.0},
        {'information_criterion': 'hqic'},
        {'max_q': -1},
        {'hw_trend': 'exp'},
        {'naive_method': 'drift'},
        {'max_workers': 0},
    ])
    def test_rejects_invalid(self, kwargs):
        with pytest.raises(ValueError):
            PipelineConfig(**kwargs)
