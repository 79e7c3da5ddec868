"""Monthly gas consumption forecasting: naive vs Holt-Winters vs SARIMA."""
from .config import PipelineConfig
from .data import DataLoader
from .models import NaiveModel, HoltWintersModel, SeasonalArimaModel, evaluate
from .pipeline import ComparisonEngine, ComparisonReporter, split

__version__ = '1.0.0'

__all__ = [
    'PipelineConfig',
    'DataLoader',
    'NaiveModel',
    'HoltWintersModel',
    'SeasonalArimaModel',
    'evaluate',
    'ComparisonEngine',
    'ComparisonReporter',
    'split',
]
