"""Containers produced by forecasting strategies."""
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class ModelParameters:
    """Fitted coefficients of one strategy. Read-only after fit."""
    model_name: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'values', MappingProxyType(dict(self.values)))

    def __getitem__(self, key: str) -> Any:
        return self.values[key]

    def __contains__(self, key: str) -> bool:
        return key in self.values

    def to_dict(self) -> Dict[str, Any]:
        return {'model_name': self.model_name, **self.values}


@dataclass
class ForecastResult:
    """Point forecasts for H future months with an optional interval."""
    model_name: str
    mean: pd.Series
    lower: Optional[pd.Series] = None
    upper: Optional[pd.Series] = None
    interval_level: Optional[float] = None

    @property
    def horizon(self) -> int:
        return len(self.mean)

    @property
    def has_interval(self) -> bool:
        return self.lower is not None and self.upper is not None

    def interval_width(self) -> Optional[pd.Series]:
        """Upper minus lower bound per step, or None without an interval."""
        if not self.has_interval:
            return None
        return self.upper - self.lower

    def to_dataframe(self) -> pd.DataFrame:
        """Forecast table indexed by target month."""
        df = pd.DataFrame({'forecast': self.mean})
        if self.has_interval:
            df['lower'] = self.lower
            df['upper'] = self.upper
        return df


@dataclass
class ResidualDiagnostics:
    """Portmanteau test on in-sample residuals."""
    lags: int
    ljung_box_stat: float
    ljung_box_pvalue: float
    significance_level: float
    residual_acf: np.ndarray

    @property
    def passed(self) -> bool:
        """True when residuals are indistinguishable from white noise."""
        return bool(self.ljung_box_pvalue > self.significance_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lags': self.lags,
            'ljung_box_stat': self.ljung_box_stat,
            'ljung_box_pvalue': self.ljung_box_pvalue,
            'passed': self.passed,
        }
