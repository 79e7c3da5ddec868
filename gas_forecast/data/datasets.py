"""
Bundled monthly datasets.

Every builder returns a raw monthly Series; the loader validates it.
"""
from typing import Callable, Dict, List

import numpy as np
import pandas as pd
from statsmodels.datasets import co2, elnino

from ..utils.dates import MONTHLY_FREQ
from .cleaner import handle_missing_values


def build_gas_series() -> pd.Series:
    """
    Monthly natural gas consumption, 1991-2005 (synthetic, fixed seed).

    Winter peak each January, steady growth in base load, and
    multiplicative noise so the seasonal swing widens with the level.
    """
    index = pd.date_range('1991-01-01', '2005-12-01', freq=MONTHLY_FREQ)
    t = np.arange(len(index))
    rng = np.random.default_rng(1991)

    base = 2000.0 + 9.0 * t
    seasonal = 650.0 * np.cos(2 * np.pi * (index.month.to_numpy() - 1) / 12)
    noise = rng.normal(0.0, 0.035, size=len(index))
    values = (base + seasonal) * (1.0 + noise)

    return pd.Series(np.round(values, 1), index=index, name='gas')


def build_co2_series() -> pd.Series:
    """Mauna Loa CO2 (ppm), weekly readings averaged to monthly means."""
    weekly = co2.load_pandas().data['co2']
    monthly = weekly.resample(MONTHLY_FREQ).mean()
    monthly, _ = handle_missing_values(monthly, method='interpolate', max_gap=6)
    return monthly.dropna().rename('co2')


def build_elnino_series() -> pd.Series:
    """El Nino sea surface temperatures (deg C), 1950-2010."""
    table = elnino.load_pandas().data.set_index('YEAR')
    values = table.to_numpy(dtype=float).ravel()
    start = pd.Timestamp(year=int(table.index[0]), month=1, day=1)
    index = pd.date_range(start, periods=len(values), freq=MONTHLY_FREQ)
    return pd.Series(values, index=index, name='elnino')


BUILTIN_DATASETS: Dict[str, Callable[[], pd.Series]] = {
    'gas': build_gas_series,
    'co2': build_co2_series,
    'elnino': build_elnino_series,
}


def list_builtin_datasets() -> List[str]:
    return sorted(BUILTIN_DATASETS.keys())
