"""Utility modules."""
from .dates import (
    MONTHLY_FREQ,
    get_month_start,
    get_next_month,
    future_month_index,
    expected_month_index,
)

__all__ = [
    'MONTHLY_FREQ',
    'get_month_start',
    'get_next_month',
    'future_month_index',
    'expected_month_index',
]
