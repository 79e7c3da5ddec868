"""
Forecast accuracy metrics.

Provides standardized metrics for comparing forecasting strategies.

MAPE is a fraction (0.05 = 5%). Actual values of exactly zero cannot be
scaled: with zero_policy='exclude' those terms are dropped and counted,
with zero_policy='raise' any zero actual raises DivisionByZeroError. If
every actual is zero there is nothing to average and both policies raise.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence, Union

import numpy as np
import pandas as pd

from ..exceptions import DivisionByZeroError
from ..forecast.result import ForecastResult

DEFAULT_METRICS = ('MSE', 'MAE', 'RMSE', 'MAPE')

ArrayLike = Union[ForecastResult, pd.Series, Sequence[float], np.ndarray]


@dataclass
class AccuracyReport:
    """Metric name -> value for one (forecast, actual) pair."""
    metrics: Dict[str, float] = field(default_factory=dict)
    n_points: int = 0
    excluded_zero_actuals: int = 0

    def __getitem__(self, metric: str) -> float:
        return self.metrics[metric.upper()]

    def __contains__(self, metric: str) -> bool:
        return metric.upper() in self.metrics

    def keys(self):
        return self.metrics.keys()

    def to_dict(self) -> Dict[str, float]:
        return dict(self.metrics)

    def to_series(self) -> pd.Series:
        return pd.Series(self.metrics, dtype=float)


def _as_series(values: ArrayLike) -> pd.Series:
    if isinstance(values, ForecastResult):
        return values.mean
    if isinstance(values, pd.Series):
        return values
    return pd.Series(np.asarray(values, dtype=float))


def _align(forecast: ArrayLike, actual: ArrayLike):
    """Return aligned float arrays; indexed Series must share their index."""
    f = _as_series(forecast)
    a = _as_series(actual)
    if len(f) != len(a):
        raise ValueError(
            f"forecast and actual differ in length: {len(f)} vs {len(a)}"
        )
    indexed = (
        isinstance(f.index, pd.DatetimeIndex)
        and isinstance(a.index, pd.DatetimeIndex)
    )
    if indexed and not f.index.equals(a.index):
        raise ValueError("forecast and actual are not aligned on the same timestamps")

    f_values = f.to_numpy(dtype=float)
    a_values = a.to_numpy(dtype=float)
    if not (np.isfinite(f_values).all() and np.isfinite(a_values).all()):
        raise ValueError("forecast and actual must be finite")
    return f_values, a_values


def mean_squared_error(actual: np.ndarray, forecast: np.ndarray) -> float:
    return float(np.mean((actual - forecast) ** 2))


def mean_absolute_error(actual: np.ndarray, forecast: np.ndarray) -> float:
    return float(np.mean(np.abs(actual - forecast)))


def mean_error(actual: np.ndarray, forecast: np.ndarray) -> float:
    return float(np.mean(actual - forecast))


def mean_absolute_percentage_error(
    actual: np.ndarray,
    forecast: np.ndarray,
    zero_policy: str = 'exclude'
):
    """
    Mean of |actual - forecast| / |actual|.

    Returns:
        (MAPE as a fraction, number of excluded zero actuals)
    """
    zero = actual == 0
    n_zero = int(zero.sum())
    if n_zero and zero_policy == 'raise':
        raise DivisionByZeroError(
            f"MAPE undefined: {n_zero} actual value(s) are exactly zero"
        )
    if n_zero == len(actual):
        raise DivisionByZeroError("MAPE undefined: every actual value is zero")

    keep = ~zero
    ratios = np.abs(actual[keep] - forecast[keep]) / np.abs(actual[keep])
    return float(np.mean(ratios)), n_zero


def seasonal_naive_scale(train: ArrayLike, seasonal_period: int) -> float:
    """In-sample MAE of the seasonal naive forecast, the MASE denominator."""
    values = _as_series(train).to_numpy(dtype=float)
    lag = seasonal_period if len(values) > seasonal_period else 1
    if len(values) <= lag:
        raise ValueError("MASE needs more training observations than its lag")
    scale = float(np.mean(np.abs(values[lag:] - values[:-lag])))
    if scale == 0:
        raise DivisionByZeroError("MASE undefined: seasonal naive errors are all zero")
    return scale


def evaluate(
    forecast: ArrayLike,
    actual: ArrayLike,
    metrics: Iterable[str] = DEFAULT_METRICS,
    zero_policy: str = 'exclude',
    train: Optional[ArrayLike] = None,
    seasonal_period: int = 12
) -> AccuracyReport:
    """
    Compare equal-length forecast and actual sequences.

    Args:
        forecast: ForecastResult, Series or array of predictions
        actual: Observed values aligned one-to-one with forecast
        metrics: Names among MSE, MAE, RMSE, MAPE, ME, MASE
        zero_policy: 'exclude' or 'raise' for zero actuals in MAPE
        train: Training series, required for MASE
        seasonal_period: Lag of the MASE seasonal naive scale

    Returns:
        AccuracyReport with the requested metrics
    """
    if zero_policy not in ('exclude', 'raise'):
        raise ValueError(f"Unknown zero_policy: {zero_policy}")

    f, a = _align(forecast, actual)
    if len(a) == 0:
        raise ValueError("Cannot evaluate an empty forecast")

    requested = [m.upper() for m in metrics]
    values: Dict[str, float] = {}
    excluded = 0

    mse = mean_squared_error(a, f)
    for metric in requested:
        if metric == 'MSE':
            values['MSE'] = mse
        elif metric == 'RMSE':
            values['RMSE'] = math.sqrt(mse)
        elif metric == 'MAE':
            values['MAE'] = mean_absolute_error(a, f)
        elif metric == 'ME':
            values['ME'] = mean_error(a, f)
        elif metric == 'MAPE':
            values['MAPE'], excluded = mean_absolute_percentage_error(
                a, f, zero_policy
            )
        elif metric == 'MASE':
            if train is None:
                raise ValueError("MASE requires the training series")
            scale = seasonal_naive_scale(train, seasonal_period)
            values['MASE'] = mean_absolute_error(a, f) / scale
        else:
            raise ValueError(f"Unknown metric: {metric}")

    return AccuracyReport(
        metrics=values, n_points=len(a), excluded_zero_actuals=excluded
    )


def evaluate_in_sample(
    fitted: pd.Series,
    train: pd.Series,
    metrics: Iterable[str] = DEFAULT_METRICS,
    zero_policy: str = 'exclude',
    seasonal_period: int = 12
) -> AccuracyReport:
    """
    Score fitted values against the training data.

    Positions where the fitted value is undefined (start-up of the
    recursion or differencing burn-in) are skipped.
    """
    mask = fitted.notna()
    return evaluate(
        fitted[mask],
        train[mask],
        metrics=metrics,
        zero_policy=zero_policy,
        train=train,
        seasonal_period=seasonal_period,
    )
