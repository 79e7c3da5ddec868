"""
Data loader for named monthly datasets.

Resolves bundled datasets first, then CSV files in an optional data directory.
"""
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from ..exceptions import DataNotFoundError, InvalidSeriesError
from .cleaner import handle_missing_values, validate_monthly_series
from .datasets import BUILTIN_DATASETS, list_builtin_datasets

logger = logging.getLogger(__name__)


class DataLoader:
    """
    Loads a monthly univariate TimeSeries by name.

    Key features:
    - Bundled datasets need no files on disk
    - `<data_dir>/<name>.csv` with a `Date` column and one value column
    - Every returned series is validated as gap-free monthly data
    """

    DATE_COLUMN = 'Date'

    def __init__(self, data_dir: Optional[Path] = None):
        """
        Initialize the data loader.

        Args:
            data_dir: Optional directory holding additional `<name>.csv` files
        """
        self.data_dir = Path(data_dir) if data_dir is not None else None
        self._cache: Dict[str, pd.Series] = {}

    def list_datasets(self) -> List[str]:
        """Return all dataset identifiers this loader can resolve."""
        names = set(list_builtin_datasets())
        if self.data_dir is not None and self.data_dir.is_dir():
            names.update(p.stem for p in self.data_dir.glob('*.csv'))
        return sorted(names)

    def load(self, name: str) -> pd.Series:
        """
        Load a dataset by identifier.

        Args:
            name: Bundled dataset name or CSV stem in data_dir

        Returns:
            Copy of the validated monthly series

        Raises:
            DataNotFoundError: If the identifier cannot be resolved
        """
        if name not in self._cache:
            raw = self._resolve(name)
            series = validate_monthly_series(raw).rename(name)
            logger.info(
                "Loaded dataset '%s': %d months (%s to %s)",
                name, len(series),
                series.index.min().date(), series.index.max().date()
            )
            self._cache[name] = series

        return self._cache[name].copy()

    def _resolve(self, name: str) -> pd.Series:
        if name in BUILTIN_DATASETS:
            return BUILTIN_DATASETS[name]()

        csv_path = self._csv_path(name)
        if csv_path is not None:
            return self._read_csv(csv_path)

        raise DataNotFoundError(
            f"Unknown dataset '{name}'. Available: {self.list_datasets()}"
        )

    def _csv_path(self, name: str) -> Optional[Path]:
        if self.data_dir is None:
            return None
        csv_path = self.data_dir / f'{name}.csv'
        return csv_path if csv_path.exists() else None

    def _read_csv(self, csv_path: Path) -> pd.Series:
        df = pd.read_csv(csv_path)
        if self.DATE_COLUMN not in df.columns:
            raise InvalidSeriesError(f"{csv_path} has no '{self.DATE_COLUMN}' column")

        value_cols = [c for c in df.columns if c != self.DATE_COLUMN]
        if len(value_cols) != 1:
            raise InvalidSeriesError(
                f"{csv_path} must have exactly one value column, found {value_cols}"
            )

        dates = pd.to_datetime(df[self.DATE_COLUMN])
        index = pd.DatetimeIndex(dates).to_period('M').to_timestamp()
        series = pd.Series(
            pd.to_numeric(df[value_cols[0]], errors='coerce').to_numpy(),
            index=index,
            name=value_cols[0],
        ).sort_index()

        series, report = handle_missing_values(series, method='interpolate')
        if report['filled']:
            logger.info("Interpolated %d missing values in %s",
                        report['filled'], csv_path.name)
        return series
