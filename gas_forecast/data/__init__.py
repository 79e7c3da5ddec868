"""Data loading and validation modules."""
from .loader import DataLoader
from .cleaner import handle_missing_values, detect_data_gaps, validate_monthly_series
from .datasets import BUILTIN_DATASETS, list_builtin_datasets

__all__ = [
    'DataLoader',
    'handle_missing_values',
    'detect_data_gaps',
    'validate_monthly_series',
    'BUILTIN_DATASETS',
    'list_builtin_datasets',
]
