"""
Monthly calendar helpers.

All series in the pipeline are indexed by month-start timestamps.
"""
import pandas as pd

MONTHLY_FREQ = 'MS'


def get_month_start(date: pd.Timestamp) -> pd.Timestamp:
    """Convert any date to the first day of its month."""
    return date.to_period('M').to_timestamp()


def get_next_month(date: pd.Timestamp) -> pd.Timestamp:
    """Get the first day of the next month."""
    return (date + pd.DateOffset(months=1)).to_period('M').to_timestamp()


def future_month_index(last_date: pd.Timestamp, periods: int) -> pd.DatetimeIndex:
    """
    Build the index of the `periods` months following `last_date`.

    Args:
        last_date: Last observed timestamp
        periods: Number of future months

    Returns:
        DatetimeIndex with monthly-start frequency
    """
    return pd.date_range(
        start=get_next_month(last_date), periods=periods, freq=MONTHLY_FREQ
    )


def expected_month_index(index: pd.DatetimeIndex) -> pd.DatetimeIndex:
    """Return the complete monthly calendar spanning `index`."""
    return pd.date_range(
        start=get_month_start(index.min()),
        end=get_month_start(index.max()),
        freq=MONTHLY_FREQ,
    )
