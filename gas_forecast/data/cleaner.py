"""
Series cleaning and validation utilities.

Handles missing values, validates the monthly calendar, and detects gaps.
"""
import logging
from typing import Dict, Tuple

import numpy as np
import pandas as pd

from ..exceptions import InvalidSeriesError
from ..utils.dates import MONTHLY_FREQ, expected_month_index

logger = logging.getLogger(__name__)


def handle_missing_values(
    series: pd.Series,
    method: str = 'interpolate',
    max_gap: int = 2
) -> Tuple[pd.Series, Dict]:
    """
    Handle missing values with explicit tracking.

    Args:
        series: Series to clean
        method: 'interpolate', 'drop', or 'ffill'
        max_gap: Maximum consecutive NaNs to fill (for interpolate/ffill)

    Returns:
        Tuple of (cleaned Series, report dict)
    """
    report = {
        'original_nulls': int(series.isna().sum()),
        'filled': 0,
        'method': method
    }

    if method == 'interpolate':
        result = series.interpolate(method='linear', limit=max_gap,
                                    limit_area='inside')
    elif method == 'ffill':
        result = series.ffill(limit=max_gap)
    elif method == 'drop':
        result = series.dropna()
    else:
        raise ValueError(f"Unknown method: {method}")

    if method != 'drop':
        report['filled'] = report['original_nulls'] - int(result.isna().sum())

    report['remaining_nulls'] = int(result.isna().sum())
    logger.debug(
        "Missing values: %d original, %d filled (%s)",
        report['original_nulls'], report['filled'], method
    )
    return result, report


def detect_data_gaps(series: pd.Series) -> pd.DatetimeIndex:
    """
    Return the months missing between the first and last timestamp.

    Args:
        series: Series with DatetimeIndex

    Returns:
        DatetimeIndex of missing month starts (empty when complete)
    """
    if series.empty:
        return pd.DatetimeIndex([], freq=MONTHLY_FREQ)
    expected = expected_month_index(series.index)
    return expected.difference(series.index)


def validate_monthly_series(series: pd.Series) -> pd.Series:
    """
    Ensure the series is a gap-free, evenly spaced monthly series.

    Args:
        series: Candidate series

    Returns:
        Float copy of the series with monthly-start frequency set

    Raises:
        InvalidSeriesError: On any violation of the monthly calendar
    """
    if not isinstance(series, pd.Series):
        raise InvalidSeriesError(f"Expected pandas Series, got {type(series).__name__}")
    if not isinstance(series.index, pd.DatetimeIndex):
        raise InvalidSeriesError("Series must have a DatetimeIndex")
    if series.empty:
        raise InvalidSeriesError("Series is empty")
    if series.index.has_duplicates:
        raise InvalidSeriesError("Series has duplicated timestamps")
    if not series.index.is_monotonic_increasing:
        raise InvalidSeriesError("Timestamps must be strictly increasing")

    month_starts = series.index.to_period('M').to_timestamp()
    if not (month_starts == series.index).all():
        raise InvalidSeriesError("Timestamps must fall on the first day of a month")

    gaps = detect_data_gaps(series)
    if len(gaps) > 0:
        raise InvalidSeriesError(
            f"Series has {len(gaps)} missing months, first at {gaps[0].date()}"
        )

    values = pd.to_numeric(series, errors='coerce').astype(float)
    n_missing = int(values.isna().sum())
    if n_missing:
        raise InvalidSeriesError(f"Series has {n_missing} missing values")
    if not np.isfinite(values.to_numpy()).all():
        raise InvalidSeriesError("Series has non-finite values")

    return values.asfreq(MONTHLY_FREQ)
