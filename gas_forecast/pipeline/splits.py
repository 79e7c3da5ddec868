"""Train/test partition with a fixed-size holdout suffix."""
from dataclasses import dataclass

import pandas as pd

from ..exceptions import InvalidHorizonError


@dataclass(frozen=True)
class TrainTestSplit:
    """Training prefix and holdout suffix of one series."""
    train: pd.Series
    test: pd.Series
    horizon: int

    @property
    def train_end(self) -> pd.Timestamp:
        return self.train.index[-1]

    @property
    def test_start(self) -> pd.Timestamp:
        return self.test.index[0]


def split(series: pd.Series, horizon: int) -> TrainTestSplit:
    """
    Hold out the last `horizon` observations.

    Args:
        series: Validated monthly series
        horizon: Number of observations in the test suffix

    Returns:
        TrainTestSplit where train + test reproduces the series exactly

    Raises:
        InvalidHorizonError: If horizon is not in [1, len(series))
    """
    if horizon < 1 or horizon >= len(series):
        raise InvalidHorizonError(
            f"horizon must be in [1, {len(series)}), got {horizon}"
        )

    cut = len(series) - horizon
    return TrainTestSplit(
        train=series.iloc[:cut].copy(),
        test=series.iloc[cut:].copy(),
        horizon=horizon,
    )
