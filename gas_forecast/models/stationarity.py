"""
Stationarity testing and differencing policy.

Policy: run an Augmented Dickey-Fuller test (constant, AIC lag selection)
on the raw series, then after one seasonal difference, then after each
additional first difference. Stop at the first stage whose ADF p-value is
below the significance level. The total differencing order d + D never
exceeds max_order.
"""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

import numpy as np
import pandas as pd
from statsmodels.tsa.stattools import acf, adfuller

from ..exceptions import InsufficientDataError, NonStationaryError

logger = logging.getLogger(__name__)

MIN_ADF_OBSERVATIONS = 10

# Newer statsmodels returns a result object unless asked for the plain tuple
_ADF_TUPLE_KWARGS = (
    {'result_object': False}
    if 'result_object' in inspect.signature(adfuller).parameters else {}
)


@dataclass
class StationarityTest:
    """ADF outcome for one differencing stage."""
    d: int
    D: int
    statistic: float
    pvalue: float
    n_obs: int
    is_stationary: bool


@dataclass
class DifferencingPlan:
    """Differencing orders selected for a series."""
    d: int
    D: int
    seasonal_period: int
    tests: List[StationarityTest] = field(default_factory=list)

    @property
    def total_order(self) -> int:
        return self.d + self.D

    @property
    def burn_in(self) -> int:
        """Observations consumed by differencing."""
        return self.d + self.D * self.seasonal_period


def difference(
    series: pd.Series,
    d: int = 0,
    D: int = 0,
    seasonal_period: int = 12
) -> pd.Series:
    """
    Apply D seasonal differences at lag seasonal_period, then d first differences.

    Returns:
        Differenced series with the leading undefined values dropped
    """
    result = series
    for _ in range(D):
        result = result.diff(seasonal_period)
    for _ in range(d):
        result = result.diff()
    return result.dropna()


def adf_test(series: pd.Series) -> Tuple[float, float]:
    """
    Augmented Dickey-Fuller unit-root test.

    Returns:
        (test statistic, p-value); a small p-value rejects the unit root
    """
    values = series.dropna()
    if len(values) < MIN_ADF_OBSERVATIONS:
        raise InsufficientDataError(
            f"ADF test needs at least {MIN_ADF_OBSERVATIONS} observations, "
            f"got {len(values)}"
        )
    if np.ptp(values.to_numpy()) == 0:
        # A constant series has no unit root
        return -np.inf, 0.0

    statistic, pvalue = adfuller(
        values, regression='c', autolag='AIC', **_ADF_TUPLE_KWARGS
    )[:2]
    return float(statistic), float(pvalue)


def autocorrelation_at_lag(series: pd.Series, lag: int) -> float:
    """Sample autocorrelation of the series at one lag."""
    values = series.dropna()
    return float(acf(values, nlags=lag, fft=False)[lag])


def _stages(max_order: int) -> Iterator[Tuple[int, int]]:
    """(d, D) stages in test order, bounded by max_order."""
    yield 0, 0
    if max_order >= 1:
        yield 0, 1
    for d in range(1, max_order):
        yield d, 1


def select_differencing(
    series: pd.Series,
    seasonal_period: int = 12,
    max_order: int = 2,
    significance_level: float = 0.05
) -> DifferencingPlan:
    """
    Choose seasonal and non-seasonal differencing orders.

    Args:
        series: Training series
        seasonal_period: Lag of the seasonal difference
        max_order: Maximum total differencing order d + D
        significance_level: ADF rejection threshold

    Returns:
        DifferencingPlan for the first stationary stage

    Raises:
        NonStationaryError: If every allowed stage still has a unit root
    """
    tests: List[StationarityTest] = []

    for d, D in _stages(max_order):
        diffed = difference(series, d=d, D=D, seasonal_period=seasonal_period)
        statistic, pvalue = adf_test(diffed)
        stationary = pvalue < significance_level
        tests.append(StationarityTest(
            d=d, D=D, statistic=statistic, pvalue=pvalue,
            n_obs=len(diffed), is_stationary=stationary,
        ))
        logger.debug(
            "ADF d=%d D=%d: stat=%.3f p=%.4f", d, D, statistic, pvalue
        )

        if stationary:
            if len(diffed) > seasonal_period and np.ptp(diffed.to_numpy()) > 0:
                logger.debug(
                    "Lag-%d autocorrelation after differencing: %.3f",
                    seasonal_period, autocorrelation_at_lag(diffed, seasonal_period)
                )
            logger.info("Differencing selected: d=%d D=%d", d, D)
            return DifferencingPlan(
                d=d, D=D, seasonal_period=seasonal_period, tests=tests
            )

    raise NonStationaryError(
        f"Series still non-stationary after differencing up to order {max_order} "
        f"(last ADF p-value {tests[-1].pvalue:.4f})"
    )
