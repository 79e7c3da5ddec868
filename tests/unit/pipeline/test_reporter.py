"""
Unit tests for gas_forecast/pipeline/reporter.py

Tests console output and CSV export.
"""
import pandas as pd
import pytest

from gas_forecast.config import PipelineConfig
from gas_forecast.models.baseline import NaiveModel
from gas_forecast.pipeline.engine import ComparisonEngine
from gas_forecast.pipeline.reporter import ComparisonReporter


@pytest.fixture
def reporter(seasonal_series, broken_model):
    """Reporter over one successful and one failing strategy."""
    engine = ComparisonEngine(
        PipelineConfig(),
        strategies={'naive': NaiveModel(), 'broken': broken_model},
    )
    return ComparisonReporter(engine.run(seasonal_series))


class TestComparisonReporter:
    """Tests for ComparisonReporter."""

    def test_summary_table(self, reporter):
        table = reporter.summary_table()

        assert table.loc['naive', 'status'] == 'ok'
        assert table.loc['broken', 'status'] == 'failed (forecast)'
        assert 'RuntimeError' in table.loc['broken', 'detail']
        assert list(table.columns) == ['status', 'MSE', 'MAE', 'RMSE', 'MAPE', 'detail']

    def test_print_summary(self, reporter, capsys):
        reporter.print_summary()
        out = capsys.readouterr().out

        assert 'FORECAST COMPARISON: synthetic' in out
        assert 'MAPE (%)' in out
        assert 'broken: FAILED during forecast' in out
        assert 'Lowest holdout RMSE: naive' in out

    def test_print_parameters(self, reporter, capsys):
        reporter.print_parameters()
        out = capsys.readouterr().out

        assert 'NAIVE PARAMETERS' in out
        assert 'BROKEN' not in out

    def test_forecast_table(self, reporter):
        table = reporter.forecast_table()

        assert list(table.columns) == ['actual', 'naive']
        assert len(table) == 12

    def test_to_csv(self, reporter, tmp_path):
        path = tmp_path / 'out' / 'accuracy.csv'
        reporter.to_csv(path)

        df = pd.read_csv(path)

        assert list(df.columns) == ['strategy', 'sample', 'metric', 'value']
        assert set(df['strategy']) == {'naive'}
        assert set(df['sample']) == {'train', 'test'}
