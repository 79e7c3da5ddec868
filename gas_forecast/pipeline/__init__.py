"""Split, compare and report."""
from .splits import TrainTestSplit, split
from .engine import (
    ComparisonEngine,
    ComparisonResult,
    StrategyOutcome,
    StrategyFailure,
    build_strategies,
)
from .reporter import ComparisonReporter

__all__ = [
    'TrainTestSplit',
    'split',
    'ComparisonEngine',
    'ComparisonResult',
    'StrategyOutcome',
    'StrategyFailure',
    'build_strategies',
    'ComparisonReporter',
]
